"""
Account Use Cases

The account lifecycle: registration, verification, authentication and
password reset.
"""

from .register_use_case import RegisterUseCase
from .verify_account_use_case import VerifyAccountUseCase
from .authenticate_use_case import AuthenticateUseCase
from .get_profile_use_case import GetProfileUseCase
from .request_password_reset_use_case import RequestPasswordResetUseCase
from .validate_reset_token_use_case import ValidateResetTokenUseCase
from .complete_password_reset_use_case import CompletePasswordResetUseCase
from .dtos import (
    RegisterCommand,
    AccountInfo,
    RegisterResponse,
    VerifyAccountResponse,
    AuthenticateResponse,
    ProfileResponse,
    RequestPasswordResetResponse,
    CompletePasswordResetResponse,
)

__all__ = [
    # Use Cases
    "RegisterUseCase",
    "VerifyAccountUseCase",
    "AuthenticateUseCase",
    "GetProfileUseCase",
    "RequestPasswordResetUseCase",
    "ValidateResetTokenUseCase",
    "CompletePasswordResetUseCase",
    # DTOs - Commands
    "RegisterCommand",
    # DTOs - Responses
    "RegisterResponse",
    "VerifyAccountResponse",
    "AuthenticateResponse",
    "ProfileResponse",
    "RequestPasswordResetResponse",
    "CompletePasswordResetResponse",
    # DTOs - Nested Models
    "AccountInfo",
]
