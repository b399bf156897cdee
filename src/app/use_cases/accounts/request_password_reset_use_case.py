"""
Request Password Reset Use Case

Issues a reset token for an account and emails the reset link.
"""

import html
import logging
from datetime import timedelta

from libs.result import Error, Result, Return
from src.app.services.notifications import INotificationDispatcher
from src.app.services.tokens import hash_token, issue_token
from src.app.services.unit_of_work import UnitOfWork
from src.domain.base import utc_now
from . import emails
from .dtos import RequestPasswordResetResponse

logger = logging.getLogger(__name__)

DEFAULT_RESET_TOKEN_TTL = timedelta(hours=1)


class RequestPasswordResetUseCase:
    """
    Use case for requesting a password reset.

    Business Rules:
    - Unknown email -> USER_NOT_FOUND (visible to the caller)
    - Token is 32 random bytes; only its SHA-256 digest is stored
    - Token expires after a fixed window (1 hour by default)
    - A new request overwrites any pending token and expiry, so only the
      latest token is ever valid
    - The reset email is sent after commit; failure does not undo the reset
    """

    def __init__(
        self,
        uow: UnitOfWork,
        notifier: INotificationDispatcher,
        base_url: str,
        token_ttl: timedelta = DEFAULT_RESET_TOKEN_TTL,
    ):
        if token_ttl <= timedelta(0):
            raise ValueError("Reset token lifetime must be positive")
        self.uow = uow
        self.notifier = notifier
        self.base_url = base_url.rstrip("/")
        self.token_ttl = token_ttl

    async def execute(self, email: str) -> Result[RequestPasswordResetResponse]:
        async with self.uow:
            account = await self.uow.accounts.get_by_email(email)

            if account is None:
                return Return.err(
                    Error("USER_NOT_FOUND", "User with this email is not found.")
                )

            reset_token = issue_token()
            account.reset_token_hash = hash_token(reset_token)
            account.reset_token_expires_at = utc_now() + self.token_ttl
            account = await self.uow.accounts.update(account)

            await self.uow.commit()
            logger.info("Password reset requested for %s", account.username)

            link = f"{self.base_url}/reset-password-now/{reset_token}"
            ttl_minutes = int(self.token_ttl.total_seconds() // 60)
            sent = await self.notifier.send(
                account.email,
                emails.RESET_PASSWORD_SUBJECT,
                emails.RESET_PASSWORD_TEXT.format(
                    username=account.username, link=link, ttl_minutes=ttl_minutes
                ),
                emails.RESET_PASSWORD_HTML.format(
                    username=html.escape(account.username), link=link
                ),
            )

        if sent.is_err():
            logger.error("Password reset email not delivered")
            return Return.ok(
                RequestPasswordResetResponse(
                    status="pending",
                    message="Password reset was started but the email could not be sent.",
                    notification_sent=False,
                )
            )

        return Return.ok(
            RequestPasswordResetResponse(
                status="sent",
                message="Password reset link is sent to your email.",
                notification_sent=True,
            )
        )
