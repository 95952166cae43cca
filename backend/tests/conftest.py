"""
Pytest configuration and shared fixtures for registry tests.

Unit tests never touch PostgreSQL: FakePool hands out a FakeConnection
whose fetch/fetchrow/fetchval/execute are AsyncMocks, and records
acquire/release and transaction options.
"""

from unittest.mock import AsyncMock

import pytest


def pytest_configure(config):
    """Register custom markers."""
    config.addinivalue_line(
        "markers", "integration: mark test as integration test requiring PostgreSQL"
    )


# =============================================================================
# Fake asyncpg pool
# =============================================================================

class _AsyncContext:
    """Async context manager that runs callbacks on enter/exit"""

    def __init__(self, value=None, on_enter=None, on_exit=None):
        self.value = value
        self.on_enter = on_enter
        self.on_exit = on_exit

    async def __aenter__(self):
        if self.on_enter:
            self.on_enter()
        return self.value

    async def __aexit__(self, exc_type, exc, tb):
        if self.on_exit:
            self.on_exit(exc_type)
        return False


class FakeConnection:
    def __init__(self):
        self.fetch = AsyncMock(return_value=[])
        self.fetchrow = AsyncMock(return_value=None)
        self.fetchval = AsyncMock(return_value=0)
        self.execute = AsyncMock(return_value="INSERT 0 1")
        self.transactions = []
        self.rolled_back = 0
        self.committed = 0

    def transaction(self, **options):
        self.transactions.append(options)

        def finish(exc_type):
            if exc_type is None:
                self.committed += 1
            else:
                self.rolled_back += 1

        return _AsyncContext(on_exit=finish)


class FakePool:
    def __init__(self, conn=None):
        self.conn = conn or FakeConnection()
        self.acquired = 0
        self.released = 0
        self.acquire_error = None

    def acquire(self, timeout=None):
        if self.acquire_error is not None:
            raise self.acquire_error

        def enter():
            self.acquired += 1

        def leave(exc_type):
            self.released += 1

        return _AsyncContext(self.conn, on_enter=enter, on_exit=leave)


@pytest.fixture
def fake_pool():
    return FakePool()


@pytest.fixture
def fake_conn(fake_pool):
    return fake_pool.conn


@pytest.fixture
def store(fake_pool):
    from repositories.store import StoreGateway
    return StoreGateway(fake_pool)
