"""
Account Entity

The single record whose verification and reset sub-states are driven by the
account use cases.
"""

from datetime import datetime
from typing import Optional
from uuid import UUID, uuid4

from sqlmodel import Column, DateTime, Field, Index, SQLModel

from src.domain.base import utc_now


class Account(SQLModel, table=True):
    """
    Account entity - identity, credential and token-gated sub-states.

    Business Rules:
    - username and email are each unique across all accounts (DB constraints)
    - Password stored as bcrypt hash (cost factor 12), never plaintext
    - verification_token is present iff the account is unverified
    - reset_token_hash is present iff a reset is pending, and then
      reset_token_expires_at is present too
    - Only the SHA-256 digest of a reset token is stored
    """

    __tablename__ = "accounts"

    id: UUID = Field(default_factory=uuid4, primary_key=True)
    username: str = Field(unique=True, index=True, max_length=50)
    email: str = Field(unique=True, index=True, max_length=255)
    password_hash: str = Field(max_length=60)  # Bcrypt output is 60 chars

    # Verification axis: Unverified -> Verified, one-shot
    verified: bool = Field(default=False)
    verification_token: Optional[str] = Field(
        default=None, unique=True, index=True, max_length=64
    )

    # Reset axis: NoPendingReset <-> ResetPending
    reset_token_hash: Optional[str] = Field(
        default=None, unique=True, index=True, max_length=64
    )  # SHA-256 output
    reset_token_expires_at: Optional[datetime] = Field(
        default=None, sa_column=Column(DateTime, nullable=True)
    )

    # Timestamps
    created_at: datetime = Field(default_factory=utc_now, sa_column=Column(DateTime))
    updated_at: datetime = Field(default_factory=utc_now, sa_column=Column(DateTime))

    __table_args__ = (Index("idx_account_verified", "verified"),)
