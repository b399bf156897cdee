"""
Account Use Case DTOs (Data Transfer Objects)

Command and Response classes for the account lifecycle.
"""

from pydantic import BaseModel


# ============================================================================
# Command DTOs
# ============================================================================


class RegisterCommand(BaseModel):
    """Validated registration intent"""

    username: str
    email: str
    password: str


# ============================================================================
# Response DTOs
# ============================================================================


class AccountInfo(BaseModel):
    """Public account fields, never includes hashes or tokens"""

    id: str
    username: str
    email: str
    verified: bool

    @classmethod
    def from_account(cls, account) -> "AccountInfo":
        return cls(
            id=str(account.id),
            username=account.username,
            email=account.email,
            verified=account.verified,
        )


class RegisterResponse(BaseModel):
    """Response for register use case"""

    status: str
    message: str
    notification_sent: bool


class VerifyAccountResponse(BaseModel):
    """Response for verify account use case"""

    status: str
    message: str
    username: str


class AuthenticateResponse(BaseModel):
    """Response for authenticate use case"""

    user: AccountInfo
    token: str
    message: str


class ProfileResponse(BaseModel):
    """Response for get profile use case"""

    user: AccountInfo


class RequestPasswordResetResponse(BaseModel):
    """Response for request password reset use case"""

    status: str
    message: str
    notification_sent: bool


class CompletePasswordResetResponse(BaseModel):
    """Response for complete password reset use case"""

    status: str
    message: str
    notification_sent: bool
