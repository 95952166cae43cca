"""
Tests for the store gateway: connection lifecycle and error translation.
"""

import asyncio

import asyncpg
import pytest

from utils.errors import ConflictError, InternalError, NotFoundError, ValidationError


@pytest.mark.asyncio
async def test_acquire_releases_connection(store, fake_pool):
    async with store.acquire() as conn:
        await conn.fetchval("SELECT 1")

    assert fake_pool.acquired == 1
    assert fake_pool.released == 1


@pytest.mark.asyncio
async def test_unique_violation_becomes_conflict(store, fake_conn):
    fake_conn.fetchrow.side_effect = asyncpg.UniqueViolationError("duplicate key")

    with pytest.raises(ConflictError) as exc_info:
        async with store.acquire() as conn:
            await conn.fetchrow("INSERT ...")

    assert isinstance(exc_info.value.__cause__, asyncpg.UniqueViolationError)


@pytest.mark.asyncio
async def test_foreign_key_violation_becomes_not_found(store, fake_conn):
    fake_conn.execute.side_effect = asyncpg.ForeignKeyViolationError("fk")

    with pytest.raises(NotFoundError):
        async with store.acquire() as conn:
            await conn.execute("INSERT ...")


@pytest.mark.asyncio
@pytest.mark.parametrize("error", [
    asyncpg.PostgresError("boom"),
    asyncpg.InterfaceError("pool is closed"),
    ConnectionRefusedError("refused"),
    asyncio.TimeoutError(),
    asyncpg.exceptions.ProtocolError("unexpected message"),
    asyncpg.exceptions.OutdatedSchemaCacheError("cached statement is stale"),
])
async def test_store_failures_become_internal_error(store, fake_conn, error):
    fake_conn.fetch.side_effect = error

    with pytest.raises(InternalError) as exc_info:
        async with store.acquire() as conn:
            await conn.fetch("SELECT ...")

    # Diagnostic detail never reaches the public payload
    assert exc_info.value.to_dict() == {"error": "internal_error", "message": "Internal error"}


@pytest.mark.asyncio
async def test_acquire_failure_becomes_internal_error(store, fake_pool):
    fake_pool.acquire_error = OSError("connection refused")

    with pytest.raises(InternalError):
        async with store.acquire():
            pass


@pytest.mark.asyncio
async def test_registry_errors_pass_through_untouched(store):
    with pytest.raises(ValidationError):
        async with store.acquire():
            raise ValidationError("bad input")


@pytest.mark.asyncio
async def test_snapshot_is_read_only_repeatable_read(store, fake_conn):
    async with store.snapshot():
        pass

    assert fake_conn.transactions == [{'isolation': 'repeatable_read', 'readonly': True}]
    assert fake_conn.committed == 1


@pytest.mark.asyncio
async def test_transaction_rolls_back_on_error(store, fake_conn):
    fake_conn.execute.side_effect = asyncpg.UniqueViolationError("dup")

    with pytest.raises(ConflictError):
        async with store.transaction() as conn:
            await conn.execute("INSERT ...")

    assert fake_conn.rolled_back == 1
    assert fake_conn.committed == 0


@pytest.mark.asyncio
async def test_ping_runs_select_one(store, fake_conn):
    await store.ping(timeout=1.0)
    fake_conn.fetchval.assert_awaited_once_with("SELECT 1", timeout=1.0)


@pytest.mark.asyncio
async def test_ping_failure_is_internal_error(store, fake_pool):
    fake_pool.acquire_error = ConnectionRefusedError()

    with pytest.raises(InternalError):
        await store.ping()


@pytest.mark.asyncio
async def test_ping_client_protocol_error_is_internal_error(store, fake_pool):
    fake_pool.acquire_error = asyncpg.exceptions.ProtocolError("unexpected message")

    with pytest.raises(InternalError):
        await store.ping()
