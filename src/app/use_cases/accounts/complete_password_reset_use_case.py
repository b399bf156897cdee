"""
Complete Password Reset Use Case

Consumes a reset token and sets the new password.
"""

import html
import logging

from libs.result import Result, Return
from src.app.services.notifications import INotificationDispatcher
from src.app.services.passwords import hash_password, password_fits
from src.app.services.tokens import hash_token
from src.app.services.unit_of_work import UnitOfWork
from src.domain.base import utc_now
from . import emails
from .dtos import CompletePasswordResetResponse
from .register_use_case import PASSWORD_TOO_LONG
from .validate_reset_token_use_case import INVALID_OR_EXPIRED_TOKEN, find_pending_reset

logger = logging.getLogger(__name__)


class CompletePasswordResetUseCase:
    """
    Use case for completing a password reset.

    Business Rules:
    - Token is re-validated now, not trusted from an earlier form render
    - New password is hashed with bcrypt; over 72 bytes is PASSWORD_TOO_LONG
    - Password write and token/expiry clearing are one conditional update
      that only matches while the token is still pending and unexpired;
      a concurrent completion or a newer reset request makes it miss
    - Invalid, expired and already-used tokens are all INVALID_OR_EXPIRED_TOKEN
    - "Password changed" email is sent after commit; failure does not undo it
    """

    def __init__(
        self, uow: UnitOfWork, notifier: INotificationDispatcher, support_email: str
    ):
        self.uow = uow
        self.notifier = notifier
        self.support_email = support_email

    async def execute(
        self, token: str, new_password: str
    ) -> Result[CompletePasswordResetResponse]:
        if not password_fits(new_password):
            return Return.err(PASSWORD_TOO_LONG)

        async with self.uow:
            now = utc_now()
            found = await find_pending_reset(self.uow, token, now)
            if found.is_err():
                return Return.err(found.error)

            account = found.value
            account_id, username, email = account.id, account.username, account.email

            consumed = await self.uow.accounts.consume_reset_token(
                account_id,
                hash_token(token),
                hash_password(new_password),
                now,
            )
            if not consumed:
                logger.info("Reset token consumed concurrently for %s", username)
                return Return.err(INVALID_OR_EXPIRED_TOKEN)

            await self.uow.commit()
            logger.info("Password reset completed for %s", username)

            sent = await self.notifier.send(
                email,
                emails.PASSWORD_CHANGED_SUBJECT,
                emails.PASSWORD_CHANGED_TEXT.format(
                    username=username, support_email=self.support_email
                ),
                emails.PASSWORD_CHANGED_HTML.format(
                    username=html.escape(username),
                    support_email=html.escape(self.support_email),
                ),
            )

        if sent.is_err():
            logger.error("Password changed email not delivered")

        return Return.ok(
            CompletePasswordResetResponse(
                status="success",
                message="Your password is reset successfully.",
                notification_sent=sent.is_ok(),
            )
        )
