from uuid import UUID

from libs.result import Error, Result, Return
from src.app.services.unit_of_work import UnitOfWork
from .dtos import AccountInfo, ProfileResponse


class GetProfileUseCase:
    """Loads the account behind an already verified bearer credential"""

    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def execute(self, account_id: UUID) -> Result[ProfileResponse]:
        async with self.uow:
            account = await self.uow.accounts.get_by_id(account_id)

            if account is None:
                return Return.err(Error("INVALID_CREDENTIALS", "Invalid or expired token"))

            return Return.ok(ProfileResponse(user=AccountInfo.from_account(account)))
