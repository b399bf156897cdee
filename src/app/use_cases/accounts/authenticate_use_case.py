"""
Authenticate Use Case

Checks a username/password pair and issues a signed bearer credential.
"""

from typing import Callable

from libs.result import Error, Result, Return
from src.app.services.passwords import verify_password
from src.app.services.unit_of_work import UnitOfWork
from src.domain.entities import Account
from .dtos import AccountInfo, AuthenticateResponse


class AuthenticateUseCase:
    """
    Use case for credential authentication.

    Business Rules:
    - Unknown username -> USER_NOT_FOUND
    - Password mismatch -> WRONG_PASSWORD
    - Verification does not gate login unless require_verified is set,
      in which case unverified accounts get ACCOUNT_NOT_VERIFIED
    - The bearer token is produced by the injected signer
    """

    def __init__(
        self,
        uow: UnitOfWork,
        signer: Callable[[Account], str],
        require_verified: bool = False,
    ):
        self.uow = uow
        self.signer = signer
        self.require_verified = require_verified

    async def execute(self, username: str, password: str) -> Result[AuthenticateResponse]:
        async with self.uow:
            account = await self.uow.accounts.get_by_username(username)

            if account is None:
                return Return.err(Error("USER_NOT_FOUND", "Username not found."))

            if not verify_password(password, account.password_hash):
                return Return.err(Error("WRONG_PASSWORD", "Incorrect password."))

            if self.require_verified and not account.verified:
                return Return.err(
                    Error("ACCOUNT_NOT_VERIFIED", "Please verify your email address first.")
                )

            return Return.ok(
                AuthenticateResponse(
                    user=AccountInfo.from_account(account),
                    token=f"Bearer {self.signer(account)}",
                    message="Hurray! You are now logged in.",
                )
            )
