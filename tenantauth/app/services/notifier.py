"""
Notifier

Outbound notifications, one method per template kind. Every method is
fire-and-forget: it returns False instead of raising when delivery fails.
"""

from abc import ABC, abstractmethod
from datetime import datetime
from enum import Enum


class TemplateKind(str, Enum):
    verification = "verification"
    welcome = "welcome"
    password_reset = "password_reset"
    project_invitation = "project_invitation"


class Notifier(ABC):
    @abstractmethod
    async def send_verification_email(self, recipient: str, token: str) -> bool:
        pass

    @abstractmethod
    async def send_welcome_email(self, recipient: str, first_name: str) -> bool:
        pass

    @abstractmethod
    async def send_password_reset_email(self, recipient: str, token: str) -> bool:
        pass

    @abstractmethod
    async def send_project_invitation_email(
        self, recipient: str, key: str, expires_at: datetime
    ) -> bool:
        pass
