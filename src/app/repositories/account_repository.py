from abc import ABC, abstractmethod
from datetime import datetime
from typing import Optional
from uuid import UUID

from src.domain.entities import Account


class DuplicateAccountError(Exception):
    """Raised when the store's uniqueness constraint rejects an account"""

    def __init__(self, field: str):
        self.field = field
        super().__init__(f"Account with this {field} already exists")


class IAccountRepository(ABC):
    """Account repository interface - application layer"""

    @abstractmethod
    async def get_by_id(self, account_id: UUID) -> Optional[Account]:
        """Get account by ID"""
        pass

    @abstractmethod
    async def get_by_username(self, username: str) -> Optional[Account]:
        """Get account by username"""
        pass

    @abstractmethod
    async def get_by_email(self, email: str) -> Optional[Account]:
        """Get account by email address"""
        pass

    @abstractmethod
    async def get_by_verification_token(self, token: str) -> Optional[Account]:
        """Get account by verification token"""
        pass

    @abstractmethod
    async def get_by_reset_token_hash(self, token_hash: str) -> Optional[Account]:
        """Get account by reset token digest, regardless of expiry"""
        pass

    @abstractmethod
    async def create(self, account: Account) -> Account:
        """
        Create a new account.

        Raises DuplicateAccountError("username" | "email") when the store's
        unique constraint rejects the insert.
        """
        pass

    @abstractmethod
    async def update(self, account: Account) -> Account:
        """Update existing account"""
        pass

    @abstractmethod
    async def consume_verification_token(self, token: str) -> Optional[Account]:
        """
        Mark the account holding this verification token as verified and clear
        the token in one conditional update. Returns None if no row matched.
        """
        pass

    @abstractmethod
    async def consume_reset_token(
        self,
        account_id: UUID,
        token_hash: str,
        new_password_hash: str,
        now: datetime,
    ) -> bool:
        """
        Set the new password hash and clear the reset token and its expiry in
        one conditional update, only while the token still matches and is
        unexpired. Returns False if no row matched.
        """
        pass
