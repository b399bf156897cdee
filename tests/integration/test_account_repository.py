"""
Integration tests for AccountRepository against SQLite

Covers the store-level guarantees the use cases rely on: unique constraints
and the conditional updates that make tokens single-use.
"""
import hashlib
from datetime import timedelta

import pytest

from src.adapter.repositories.account_repository import AccountRepository
from src.app.repositories.account_repository import DuplicateAccountError
from src.domain.base import utc_now
from src.domain.entities import Account


def sha256(token: str) -> str:
    return hashlib.sha256(token.encode()).hexdigest()


async def create_alice(db_session, **fields) -> Account:
    repo = AccountRepository(db_session)
    account = await repo.create(
        Account(username="alice", email="a@x.com", password_hash="old_hash", **fields)
    )
    await db_session.commit()
    return account


@pytest.mark.asyncio
async def test_unique_username_constraint(db_session):
    await create_alice(db_session)
    repo = AccountRepository(db_session)

    with pytest.raises(DuplicateAccountError) as exc_info:
        await repo.create(Account(username="alice", email="b@x.com", password_hash="h"))

    assert exc_info.value.field == "username"


@pytest.mark.asyncio
async def test_unique_email_constraint(db_session):
    await create_alice(db_session)
    repo = AccountRepository(db_session)

    with pytest.raises(DuplicateAccountError) as exc_info:
        await repo.create(Account(username="bob", email="a@x.com", password_hash="h"))

    assert exc_info.value.field == "email"


@pytest.mark.asyncio
async def test_verification_token_consumed_once(db_session):
    await create_alice(db_session, verification_token="verify_me")
    repo = AccountRepository(db_session)

    first = await repo.consume_verification_token("verify_me")
    second = await repo.consume_verification_token("verify_me")

    assert first is not None
    assert first.verified is True
    assert first.verification_token is None
    assert second is None


@pytest.mark.asyncio
async def test_reset_token_consumed_once(db_session):
    account = await create_alice(
        db_session,
        reset_token_hash=sha256("reset_me"),
        reset_token_expires_at=utc_now() + timedelta(hours=1),
    )
    repo = AccountRepository(db_session)
    now = utc_now()

    first = await repo.consume_reset_token(account.id, sha256("reset_me"), "new_hash", now)
    second = await repo.consume_reset_token(account.id, sha256("reset_me"), "newer_hash", now)
    await db_session.commit()

    assert first is True
    assert second is False

    stored = await repo.get_by_id(account.id)
    await db_session.refresh(stored)
    assert stored.password_hash == "new_hash"
    assert stored.reset_token_hash is None
    assert stored.reset_token_expires_at is None


@pytest.mark.asyncio
async def test_expired_reset_token_not_consumed(db_session):
    account = await create_alice(
        db_session,
        reset_token_hash=sha256("reset_me"),
        reset_token_expires_at=utc_now() - timedelta(seconds=1),
    )
    repo = AccountRepository(db_session)

    consumed = await repo.consume_reset_token(
        account.id, sha256("reset_me"), "new_hash", utc_now()
    )

    assert consumed is False
    stored = await repo.get_by_id(account.id)
    await db_session.refresh(stored)
    assert stored.password_hash == "old_hash"


@pytest.mark.asyncio
async def test_replaced_reset_token_not_consumed(db_session):
    account = await create_alice(
        db_session,
        reset_token_hash=sha256("newer_token"),
        reset_token_expires_at=utc_now() + timedelta(hours=1),
    )
    repo = AccountRepository(db_session)

    consumed = await repo.consume_reset_token(
        account.id, sha256("older_token"), "new_hash", utc_now()
    )

    assert consumed is False
