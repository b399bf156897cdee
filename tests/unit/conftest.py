import pytest
from unittest.mock import AsyncMock, MagicMock

from libs.result import Return


@pytest.fixture
def mock_uow():
    uow = MagicMock()
    uow.__aenter__ = AsyncMock(return_value=uow)
    uow.__aexit__ = AsyncMock(return_value=False)  # Must return False to not suppress exceptions
    uow.commit = AsyncMock()
    uow.rollback = AsyncMock()

    uow.accounts = MagicMock()
    uow.accounts.get_by_id = AsyncMock()
    uow.accounts.get_by_username = AsyncMock()
    uow.accounts.get_by_email = AsyncMock()
    uow.accounts.get_by_verification_token = AsyncMock()
    uow.accounts.get_by_reset_token_hash = AsyncMock()
    uow.accounts.create = AsyncMock()
    uow.accounts.update = AsyncMock()
    uow.accounts.consume_verification_token = AsyncMock()
    uow.accounts.consume_reset_token = AsyncMock()
    return uow


@pytest.fixture
def mock_notifier():
    notifier = MagicMock()
    notifier.send = AsyncMock(return_value=Return.ok(None))
    return notifier
