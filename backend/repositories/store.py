"""
Store Gateway - the only path from registry code to PostgreSQL

Wraps the shared asyncpg pool:
- one connection per unit of work, released on exit
- statements are always parameterized ($1, $2, ...) by callers
- driver failures are translated into the registry error taxonomy

Callers never see asyncpg exceptions.
"""
import asyncio
import logging
from contextlib import asynccontextmanager
from typing import AsyncIterator, Optional

import asyncpg

from utils.errors import RegistryError, ConflictError, NotFoundError, InternalError

logger = logging.getLogger(__name__)

# Everything the driver or socket layer can raise short of a constraint violation
STORE_FAILURES = (
    asyncpg.PostgresError,
    asyncpg.InterfaceError,
    asyncpg.exceptions.InternalClientError,
    OSError,
    asyncio.TimeoutError,
)


class StoreGateway:
    """
    Thin abstraction over the relational store.

    Usage:
        async with store.acquire() as conn:
            row = await conn.fetchrow("SELECT ... WHERE id = $1", some_id)
    """

    def __init__(self, db_pool: asyncpg.Pool):
        self.db_pool = db_pool

    @asynccontextmanager
    async def acquire(self) -> AsyncIterator[asyncpg.Connection]:
        """Acquire a pooled connection; translate store failures on the way out."""
        try:
            async with self.db_pool.acquire() as conn:
                yield conn
        except RegistryError:
            raise
        except asyncpg.UniqueViolationError as e:
            logger.info(f"Unique violation on {getattr(e, 'constraint_name', None)}")
            raise ConflictError("Already exists") from e
        except asyncpg.ForeignKeyViolationError as e:
            logger.info(f"Foreign key violation on {getattr(e, 'constraint_name', None)}")
            raise NotFoundError("Referenced entity not found") from e
        except STORE_FAILURES as e:
            logger.error(f"Store failure: {type(e).__name__}: {e}")
            raise InternalError() from e

    @asynccontextmanager
    async def transaction(self) -> AsyncIterator[asyncpg.Connection]:
        """Read-write transaction; rolled back if the block raises."""
        async with self.acquire() as conn:
            async with conn.transaction():
                yield conn

    @asynccontextmanager
    async def snapshot(self) -> AsyncIterator[asyncpg.Connection]:
        """
        Read-only REPEATABLE READ transaction.

        Every statement inside sees the same snapshot, so several
        counts read here are mutually consistent.
        """
        async with self.acquire() as conn:
            async with conn.transaction(isolation='repeatable_read', readonly=True):
                yield conn

    async def ping(self, timeout: Optional[float] = None) -> None:
        """
        Cheapest possible round-trip.

        Raises:
            InternalError: store unreachable or too slow
        """
        try:
            async with self.db_pool.acquire(timeout=timeout) as conn:
                await conn.fetchval("SELECT 1", timeout=timeout)
        except STORE_FAILURES as e:
            raise InternalError() from e
