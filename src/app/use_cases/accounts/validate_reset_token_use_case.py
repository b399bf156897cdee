"""
Validate Reset Token Use Case

Checks that a reset token is pending and unexpired, e.g. before rendering
the reset form.
"""

import logging
from datetime import datetime

from libs.result import Error, Result, Return
from src.app.services.tokens import hash_token
from src.app.services.unit_of_work import UnitOfWork
from src.domain.base import utc_now
from src.domain.entities import Account
from .dtos import AccountInfo

logger = logging.getLogger(__name__)

INVALID_OR_EXPIRED_TOKEN = Error(
    "INVALID_OR_EXPIRED_TOKEN", "Password reset token is invalid or has expired."
)


async def find_pending_reset(uow: UnitOfWork, token: str, now: datetime) -> Result[Account]:
    """
    Look up the account whose pending reset token matches and has not expired.

    Unknown and expired tokens are told apart in the log only; callers get the
    same INVALID_OR_EXPIRED_TOKEN for both. Must be called inside `async with uow`.
    """
    account = await uow.accounts.get_by_reset_token_hash(hash_token(token))

    if account is None:
        logger.info("Reset token rejected: no match")
        return Return.err(INVALID_OR_EXPIRED_TOKEN)

    if account.reset_token_expires_at is None or account.reset_token_expires_at <= now:
        logger.info("Reset token rejected: expired")
        return Return.err(INVALID_OR_EXPIRED_TOKEN)

    return Return.ok(account)


class ValidateResetTokenUseCase:
    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def execute(self, token: str) -> Result[AccountInfo]:
        async with self.uow:
            found = await find_pending_reset(self.uow, token, utc_now())
            if found.is_err():
                return Return.err(found.error)

            return Return.ok(AccountInfo.from_account(found.value))
