"""
Tests for PublisherRepository.

Registration must be a single conflict-tolerant upsert - never a
SELECT followed by an INSERT.
"""

import uuid

import asyncpg
import pytest

from models.domain.publisher import Publisher
from repositories.publisher_repository import PublisherRepository
from utils.errors import ConflictError, NotFoundError, ValidationError

from .factories import make_account, publisher_row


@pytest.fixture
def repo(store):
    return PublisherRepository(store)


# =============================================================================
# get_or_create
# =============================================================================

@pytest.mark.asyncio
async def test_get_or_create_is_single_upsert(repo, fake_conn):
    address = make_account(7)
    fake_conn.fetchrow.return_value = publisher_row(address)

    publisher = await repo.get_or_create(address)

    assert publisher.stellar_address == address
    assert fake_conn.fetchrow.await_count == 1
    sql, bound = fake_conn.fetchrow.await_args.args
    assert "ON CONFLICT (stellar_address)" in sql
    assert "DO UPDATE SET stellar_address = EXCLUDED.stellar_address" in sql
    assert "RETURNING" in sql
    assert bound == address
    fake_conn.fetch.assert_not_awaited()


@pytest.mark.asyncio
async def test_get_or_create_twice_returns_same_id(repo, fake_conn):
    address = make_account(7)
    row = publisher_row(address)
    fake_conn.fetchrow.return_value = row

    first = await repo.get_or_create(address)
    second = await repo.get_or_create(address)

    assert first.id == second.id == row['id']


@pytest.mark.asyncio
async def test_get_or_create_does_not_touch_profile_fields(repo, fake_conn):
    fake_conn.fetchrow.return_value = publisher_row(make_account(7))

    await repo.get_or_create(make_account(7))

    sql = fake_conn.fetchrow.await_args.args[0]
    update_clause = sql.split("DO UPDATE SET", 1)[1].split("RETURNING", 1)[0]
    for column in ("username", "email", "github_url", "website"):
        assert column not in update_clause


@pytest.mark.asyncio
async def test_get_or_create_rejects_malformed_address(repo, fake_conn):
    with pytest.raises(ValidationError):
        await repo.get_or_create("PUB1")

    fake_conn.fetchrow.assert_not_awaited()


# =============================================================================
# create
# =============================================================================

@pytest.mark.asyncio
async def test_create_with_profile(repo, fake_conn):
    address = make_account(3)
    fake_conn.fetchrow.return_value = publisher_row(address, username="alice", email="a@example.com")

    created = await repo.create(Publisher(
        id=None,
        stellar_address=address,
        username="alice",
        email="a@example.com",
    ))

    assert created.username == "alice"
    sql = fake_conn.fetchrow.await_args.args[0]
    assert "ON CONFLICT" not in sql


@pytest.mark.asyncio
async def test_create_existing_address_is_conflict(repo, fake_conn):
    fake_conn.fetchrow.side_effect = asyncpg.UniqueViolationError("publishers_stellar_address_key")

    with pytest.raises(ConflictError):
        await repo.create(Publisher(id=None, stellar_address=make_account(3)))


# =============================================================================
# lookups
# =============================================================================

@pytest.mark.asyncio
async def test_get_by_id_not_found(repo, fake_conn):
    fake_conn.fetchrow.return_value = None

    with pytest.raises(NotFoundError):
        await repo.get_by_id(uuid.uuid4())


@pytest.mark.asyncio
async def test_get_by_id_malformed(repo, fake_conn):
    with pytest.raises(ValidationError):
        await repo.get_by_id("not-a-uuid")

    fake_conn.fetchrow.assert_not_awaited()


@pytest.mark.asyncio
async def test_get_by_id_binds_uuid(repo, fake_conn):
    pid = uuid.uuid4()
    fake_conn.fetchrow.return_value = publisher_row(id=pid)

    publisher = await repo.get_by_id(str(pid))

    assert publisher.id == pid
    assert fake_conn.fetchrow.await_args.args[1] == pid


@pytest.mark.asyncio
async def test_backfill_only_fills_nulls(repo, fake_conn):
    pid = uuid.uuid4()
    fake_conn.fetchrow.return_value = publisher_row(id=pid, website="https://example.com")

    publisher = await repo.backfill_profile(pid, website="https://example.com")

    assert publisher.website == "https://example.com"
    sql = fake_conn.fetchrow.await_args.args[0]
    assert "COALESCE(website, $5)" in sql


@pytest.mark.asyncio
async def test_backfill_unknown_publisher(repo, fake_conn):
    fake_conn.fetchrow.return_value = None

    with pytest.raises(NotFoundError):
        await repo.backfill_profile(uuid.uuid4(), username="bob")
