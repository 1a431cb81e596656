"""
Account Lifecycle Use Cases

Registration, email verification and password management.
"""

from .register_use_case import RegisterUseCase
from .verify_email_use_case import VerifyEmailUseCase
from .resend_verification_use_case import ResendVerificationUseCase
from .forgot_password_use_case import ForgotPasswordUseCase
from .reset_password_use_case import ResetPasswordUseCase
from .change_password_use_case import ChangePasswordUseCase
from .dtos import RegisterCommand, RegisterResponse, StatusResponse

__all__ = [
    # Use Cases
    "RegisterUseCase",
    "VerifyEmailUseCase",
    "ResendVerificationUseCase",
    "ForgotPasswordUseCase",
    "ResetPasswordUseCase",
    "ChangePasswordUseCase",
    # DTOs
    "RegisterCommand",
    "RegisterResponse",
    "StatusResponse",
]
