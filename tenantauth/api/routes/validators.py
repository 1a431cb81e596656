"""Request field rules shared by the auth and project routes."""

import re
from typing import Annotated

from pydantic import AfterValidator, EmailStr

SPECIAL_CHARACTERS = re.compile(r"[^A-Za-z0-9]")
SLUG_PATTERN = r"^[a-z0-9-]+$"


def check_password_policy(password: str) -> str:
    """At least 8 characters with a lower, upper, digit and special character."""
    if len(password) < 8:
        raise ValueError("Password must be at least 8 characters long")
    if not re.search(r"[a-z]", password):
        raise ValueError("Password must contain a lowercase letter")
    if not re.search(r"[A-Z]", password):
        raise ValueError("Password must contain an uppercase letter")
    if not re.search(r"[0-9]", password):
        raise ValueError("Password must contain a digit")
    if not SPECIAL_CHARACTERS.search(password):
        raise ValueError("Password must contain a special character")
    return password


def normalize_email(email: str) -> str:
    """Addresses are stored and matched lower-cased."""
    return email.lower()


Password = Annotated[str, AfterValidator(check_password_policy)]
Email = Annotated[EmailStr, AfterValidator(normalize_email)]
