import html
import logging

from libs.result import Error, Result, Return
from src.app.repositories.account_repository import DuplicateAccountError
from src.app.services.notifications import INotificationDispatcher
from src.app.services.passwords import MAX_PASSWORD_BYTES, hash_password, password_fits
from src.app.services.tokens import issue_token
from src.app.services.unit_of_work import UnitOfWork
from src.domain.entities import Account
from . import emails
from .dtos import RegisterCommand, RegisterResponse

logger = logging.getLogger(__name__)

USERNAME_TAKEN = Error("USERNAME_TAKEN", "Username is already taken.")
EMAIL_TAKEN = Error("EMAIL_TAKEN", "Email is already registered.")
PASSWORD_TOO_LONG = Error(
    "PASSWORD_TOO_LONG", f"Password must be at most {MAX_PASSWORD_BYTES} bytes."
)


class RegisterUseCase:
    """
    Register Use Case

    Business Logic:
    1. Check username, then email, for an existing account (fast path only,
       the store's unique constraints are authoritative)
    2. Hash password with bcrypt
    3. Create Account unverified, with a fresh verification token
    4. Commit - the account exists from here on
    5. Send verification email; a failed send does not undo registration
    """

    def __init__(self, uow: UnitOfWork, notifier: INotificationDispatcher, base_url: str):
        self.uow = uow
        self.notifier = notifier
        self.base_url = base_url.rstrip("/")

    async def execute(self, command: RegisterCommand) -> Result[RegisterResponse]:
        """
        Execute register use case

        Returns:
            Result[RegisterResponse], or
            Error(PASSWORD_TOO_LONG | USERNAME_TAKEN | EMAIL_TAKEN)
        """
        if not password_fits(command.password):
            return Return.err(PASSWORD_TOO_LONG)

        async with self.uow:
            if await self.uow.accounts.get_by_username(command.username):
                return Return.err(USERNAME_TAKEN)

            if await self.uow.accounts.get_by_email(command.email):
                return Return.err(EMAIL_TAKEN)

            account = Account(
                username=command.username,
                email=command.email,
                password_hash=hash_password(command.password),
                verified=False,
                verification_token=issue_token(),
            )
            try:
                account = await self.uow.accounts.create(account)
            except DuplicateAccountError as e:
                # Lost a race with a concurrent registration
                logger.info("Registration rejected by unique constraint on %s", e.field)
                return Return.err(USERNAME_TAKEN if e.field == "username" else EMAIL_TAKEN)

            await self.uow.commit()
            logger.info("Account registered: %s", account.username)

            link = f"{self.base_url}/verify-now/{account.verification_token}"
            sent = await self.notifier.send(
                account.email,
                emails.VERIFY_ACCOUNT_SUBJECT,
                emails.VERIFY_ACCOUNT_TEXT.format(username=account.username, link=link),
                emails.VERIFY_ACCOUNT_HTML.format(
                    username=html.escape(account.username), link=link
                ),
            )

        if sent.is_err():
            logger.error("Verification email for new account not delivered")
            return Return.ok(
                RegisterResponse(
                    status="created",
                    message="Your account is created but the verification email could not be sent.",
                    notification_sent=False,
                )
            )

        return Return.ok(
            RegisterResponse(
                status="created",
                message="Hurray! your account is created please verify your email address.",
                notification_sent=True,
            )
        )
