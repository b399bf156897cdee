from datetime import datetime
from typing import Optional
from uuid import UUID

from sqlalchemy.exc import IntegrityError
from sqlmodel import select, update
from sqlmodel.ext.asyncio.session import AsyncSession

from src.app.repositories.account_repository import DuplicateAccountError, IAccountRepository
from src.domain.base import utc_now
from src.domain.entities import Account


class AccountRepository(IAccountRepository):
    """Account repository implementation using SQLModel"""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def get_by_id(self, account_id: UUID) -> Optional[Account]:
        """Get account by ID"""
        stmt = select(Account).where(Account.id == account_id)
        result = await self.session.exec(stmt)
        return result.one_or_none()

    async def get_by_username(self, username: str) -> Optional[Account]:
        """Get account by username"""
        stmt = select(Account).where(Account.username == username)
        result = await self.session.exec(stmt)
        return result.one_or_none()

    async def get_by_email(self, email: str) -> Optional[Account]:
        """Get account by email address"""
        stmt = select(Account).where(Account.email == email)
        result = await self.session.exec(stmt)
        return result.one_or_none()

    async def get_by_verification_token(self, token: str) -> Optional[Account]:
        """Get account by verification token"""
        stmt = select(Account).where(Account.verification_token == token)
        result = await self.session.exec(stmt)
        return result.one_or_none()

    async def get_by_reset_token_hash(self, token_hash: str) -> Optional[Account]:
        """Get account by reset token digest, regardless of expiry"""
        stmt = select(Account).where(Account.reset_token_hash == token_hash)
        result = await self.session.exec(stmt)
        return result.one_or_none()

    async def create(self, account: Account) -> Account:
        """Create a new account"""
        username, email = account.username, account.email
        self.session.add(account)
        try:
            await self.session.flush()
        except IntegrityError:
            await self.session.rollback()
            # The constraint error does not say which column clashed
            if await self.get_by_username(username) is not None:
                raise DuplicateAccountError("username")
            raise DuplicateAccountError("email")
        await self.session.refresh(account)
        return account

    async def update(self, account: Account) -> Account:
        """Update existing account"""
        account.updated_at = utc_now()
        self.session.add(account)
        await self.session.flush()
        await self.session.refresh(account)
        return account

    async def consume_verification_token(self, token: str) -> Optional[Account]:
        """Verify the account holding this token and clear the token"""
        account = await self.get_by_verification_token(token)
        if account is None:
            return None

        stmt = (
            update(Account)
            .where(Account.id == account.id, Account.verification_token == token)
            .values(verified=True, verification_token=None, updated_at=utc_now())
        )
        result = await self.session.execute(stmt)
        await self.session.flush()
        if result.rowcount != 1:
            return None

        await self.session.refresh(account)
        return account

    async def consume_reset_token(
        self,
        account_id: UUID,
        token_hash: str,
        new_password_hash: str,
        now: datetime,
    ) -> bool:
        """Swap in the new password hash and clear the reset token atomically"""
        stmt = (
            update(Account)
            .where(
                Account.id == account_id,
                Account.reset_token_hash == token_hash,
                Account.reset_token_expires_at > now,
            )
            .values(
                password_hash=new_password_hash,
                reset_token_hash=None,
                reset_token_expires_at=None,
                updated_at=now,
            )
        )
        result = await self.session.execute(stmt)
        await self.session.flush()
        return result.rowcount == 1
