"""Email notifier. Logs instead of sending when SMTP is not configured."""

import asyncio
import logging
import smtplib
from datetime import datetime
from email.mime.text import MIMEText
from typing import Optional

from tenantauth.app.services.notifier import Notifier, TemplateKind

logger = logging.getLogger(__name__)


class SmtpNotifier(Notifier):
    def __init__(
        self,
        host: Optional[str],
        port: int,
        sender: str,
        user: Optional[str] = None,
        password: Optional[str] = None,
        use_tls: bool = True,
        app_name: str = "Auth Service",
        app_base_url: str = "http://localhost:8000",
        frontend_url: str = "http://localhost:3001",
    ):
        self.host = host
        self.port = port
        self.sender = sender
        self.user = user
        self.password = password
        self.use_tls = use_tls
        self.app_name = app_name
        self.app_base_url = app_base_url.rstrip("/")
        self.frontend_url = frontend_url.rstrip("/")

    async def send_verification_email(self, recipient: str, token: str) -> bool:
        link = f"{self.app_base_url}/auth/verify-email?token={token}"
        body = (
            f"Welcome to {self.app_name}!\n\n"
            f"Confirm your email address by opening the link below:\n{link}\n\n"
            "The link expires in 24 hours."
        )
        return await self.send(
            TemplateKind.verification, recipient, f"{self.app_name} - Verify your email", body
        )

    async def send_welcome_email(self, recipient: str, first_name: str) -> bool:
        body = (
            f"Hi {first_name},\n\n"
            f"Your email is verified and your {self.app_name} account is ready."
        )
        return await self.send(
            TemplateKind.welcome, recipient, f"{self.app_name} - Welcome!", body
        )

    async def send_password_reset_email(self, recipient: str, token: str) -> bool:
        link = f"{self.frontend_url}/reset-password?token={token}"
        body = (
            "A password reset was requested for your account.\n\n"
            f"Choose a new password here:\n{link}\n\n"
            "The link expires in 1 hour. If you did not ask for this, ignore this email."
        )
        return await self.send(
            TemplateKind.password_reset, recipient, f"{self.app_name} - Password reset", body
        )

    async def send_project_invitation_email(
        self, recipient: str, key: str, expires_at: datetime
    ) -> bool:
        link = f"{self.frontend_url}/projects/new?key={key}"
        body = (
            f"You have been invited to create a project on {self.app_name}.\n\n"
            f"Start here:\n{link}\n\n"
            f"The invitation can be used once and expires on {expires_at:%Y-%m-%d %H:%M} UTC."
        )
        return await self.send(
            TemplateKind.project_invitation,
            recipient,
            f"{self.app_name} - Project invitation",
            body,
        )

    async def send(self, kind: TemplateKind, recipient: str, subject: str, body: str) -> bool:
        if not self.host:
            logger.info(
                "Email (SMTP not configured): kind=%s To=%s Subject=%s", kind.value, recipient, subject
            )
            logger.debug("Email body: %s", body)
            return True

        # Callers have already committed; a failed email must not fail them
        try:
            message = MIMEText(body, "plain")
            message["Subject"] = subject
            message["From"] = self.sender
            message["To"] = recipient
            await asyncio.to_thread(self._deliver, recipient, message)
        except Exception:
            logger.exception("Failed to send %s email to %s", kind.value, recipient)
            return False

        logger.info("Sent %s email to %s", kind.value, recipient)
        return True

    def _deliver(self, recipient: str, message: MIMEText) -> None:
        with smtplib.SMTP(self.host, self.port, timeout=10) as server:
            if self.use_tls:
                server.starttls()
            if self.user:
                server.login(self.user, self.password or "")
            server.sendmail(self.sender, [recipient], message.as_string())
