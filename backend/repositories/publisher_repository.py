"""
Publisher Repository - PostgreSQL storage for publishers

Storage: PostgreSQL (publishers table, UNIQUE stellar_address)

Registration is idempotent by construction: get_or_create() is a single
INSERT ... ON CONFLICT statement, so concurrent registrations of one
address (from any number of API processes) converge on one row.
"""
import logging
from typing import Optional

from models.domain.publisher import Publisher
from utils import strkey
from utils.ids import parse_uuid
from utils.errors import NotFoundError, ValidationError
from .store import StoreGateway

logger = logging.getLogger(__name__)

PUBLISHER_COLUMNS = """
    id, stellar_address, username, email, github_url, website, created_at
"""


def validate_address(address: str) -> str:
    """
    Check a publisher address is a Stellar account strkey (G...).

    Raises:
        ValidationError: If the address is malformed
    """
    if not address:
        raise ValidationError("Publisher address is required")
    strkey.decode('account', address)
    return address


class PublisherRepository:
    """
    Repository for Publisher domain model

    Handles registration (idempotent and strict) and lookups.
    """

    def __init__(self, store: StoreGateway):
        self.store = store

    # =========================================================================
    # READ OPERATIONS
    # =========================================================================

    async def get_by_id(self, publisher_id) -> Publisher:
        """
        Retrieve publisher by ID.

        Raises:
            ValidationError: malformed id
            NotFoundError: no such publisher
        """
        pid = parse_uuid(publisher_id, "publisher id")
        async with self.store.acquire() as conn:
            row = await conn.fetchrow(f"""
                SELECT {PUBLISHER_COLUMNS} FROM publishers WHERE id = $1
            """, pid)

        if not row:
            raise NotFoundError(f"Publisher {pid} not found")
        return self._row_to_publisher(row)

    # =========================================================================
    # CREATE OPERATIONS
    # =========================================================================

    async def get_or_create(self, stellar_address: str) -> Publisher:
        """
        Return the publisher for an address, creating it if absent.

        Atomic upsert: on conflict the existing row's address is
        reaffirmed and returned; no other column is touched. No retry
        here - retry policy belongs to the caller.
        """
        validate_address(stellar_address)

        async with self.store.acquire() as conn:
            row = await conn.fetchrow(f"""
                INSERT INTO publishers (stellar_address)
                VALUES ($1)
                ON CONFLICT (stellar_address)
                DO UPDATE SET stellar_address = EXCLUDED.stellar_address
                RETURNING {PUBLISHER_COLUMNS}
            """, stellar_address)

        publisher = self._row_to_publisher(row)
        logger.debug(f"Resolved publisher {publisher.id} for {stellar_address}")
        return publisher

    async def create(self, publisher: Publisher) -> Publisher:
        """
        Create a publisher with full profile details.

        Not idempotent: an existing address is a conflict.

        Raises:
            ConflictError: address already registered
        """
        validate_address(publisher.stellar_address)

        async with self.store.acquire() as conn:
            row = await conn.fetchrow(f"""
                INSERT INTO publishers (
                    stellar_address, username, email, github_url, website
                )
                VALUES ($1, $2, $3, $4, $5)
                RETURNING {PUBLISHER_COLUMNS}
            """,
                publisher.stellar_address,
                publisher.username,
                publisher.email,
                publisher.github_url,
                publisher.website
            )

        created = self._row_to_publisher(row)
        logger.info(f"Created publisher {created.id} ({created.stellar_address})")
        return created

    # =========================================================================
    # UPDATE OPERATIONS
    # =========================================================================

    async def backfill_profile(
        self,
        publisher_id,
        username: Optional[str] = None,
        email: Optional[str] = None,
        github_url: Optional[str] = None,
        website: Optional[str] = None
    ) -> Publisher:
        """
        Fill profile fields that are still NULL. Existing values win.

        Raises:
            NotFoundError: no such publisher
        """
        pid = parse_uuid(publisher_id, "publisher id")
        async with self.store.acquire() as conn:
            row = await conn.fetchrow(f"""
                UPDATE publishers
                SET username = COALESCE(username, $2),
                    email = COALESCE(email, $3),
                    github_url = COALESCE(github_url, $4),
                    website = COALESCE(website, $5)
                WHERE id = $1
                RETURNING {PUBLISHER_COLUMNS}
            """, pid, username, email, github_url, website)

        if not row:
            raise NotFoundError(f"Publisher {pid} not found")
        return self._row_to_publisher(row)

    @staticmethod
    def _row_to_publisher(row) -> Publisher:
        return Publisher(
            id=parse_uuid(row['id']),
            stellar_address=row['stellar_address'],
            username=row['username'],
            email=row['email'],
            github_url=row['github_url'],
            website=row['website'],
            created_at=row['created_at'],
        )
