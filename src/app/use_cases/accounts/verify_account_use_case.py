"""
Verify Account Use Case

Moves an account from Unverified to Verified via its emailed token.
"""

import logging

from libs.result import Error, Result, Return
from src.app.services.unit_of_work import UnitOfWork
from .dtos import VerifyAccountResponse

logger = logging.getLogger(__name__)


class VerifyAccountUseCase:
    """
    Use case for account verification.

    Business Rules:
    - Token must exactly match an account's verification_token
    - Sets verified = True and clears the token in one conditional update
    - One-shot: a consumed token no longer matches anything
    - Unknown and already-consumed tokens are both INVALID_TOKEN, so the
      response does not reveal whether an account exists
    """

    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def execute(self, token: str) -> Result[VerifyAccountResponse]:
        async with self.uow:
            account = await self.uow.accounts.consume_verification_token(token)

            if account is None:
                logger.info("Verification attempted with unknown token")
                return Return.err(
                    Error(
                        "INVALID_TOKEN",
                        "Unauthorized access. Invalid verification code",
                    )
                )

            await self.uow.commit()
            logger.info("Account verified: %s", account.username)

            return Return.ok(
                VerifyAccountResponse(
                    status="verified",
                    message="Your account is successfully verified",
                    username=account.username,
                )
            )
