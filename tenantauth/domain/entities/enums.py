"""
Domain Enums

Enumeration types used across domain entities.
"""

from enum import Enum


class MembershipRole(str, Enum):
    """User role within a project"""

    admin = "admin"
    user = "user"


class LoginMethod(str, Enum):
    """How a login attempt authenticated"""

    password = "password"
