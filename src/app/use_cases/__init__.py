"""
Use Cases

Organized by domain folder:
- accounts/: Registration, verification, authentication and password reset
"""

from .accounts import (
    RegisterUseCase,
    RegisterCommand,
    VerifyAccountUseCase,
    AuthenticateUseCase,
    GetProfileUseCase,
    RequestPasswordResetUseCase,
    ValidateResetTokenUseCase,
    CompletePasswordResetUseCase,
)

__all__ = [
    "RegisterUseCase",
    "RegisterCommand",
    "VerifyAccountUseCase",
    "AuthenticateUseCase",
    "GetProfileUseCase",
    "RequestPasswordResetUseCase",
    "ValidateResetTokenUseCase",
    "CompletePasswordResetUseCase",
]
