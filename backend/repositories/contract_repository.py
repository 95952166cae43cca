"""
Contract Repository - PostgreSQL storage for contracts and their versions

Storage: PostgreSQL (contracts, contract_versions tables)

A contract owns its versions exclusively; versions are append-only.
"""
import logging
from typing import List, Optional

from models.domain.contract import Contract, ContractVersion, Network
from models.domain.search import SearchFilter, PaginatedResult
from utils.ids import parse_uuid
from utils.errors import NotFoundError, ValidationError
from .search_query import CONTRACT_COLUMNS, ORDER_BY, build_search_query
from .store import StoreGateway

logger = logging.getLogger(__name__)

VERSION_COLUMNS = """
    id, contract_id, version, wasm_hash, source_url, commit_hash,
    release_notes, created_at
"""


class ContractRepository:
    """Repository for Contract and ContractVersion domain models."""

    def __init__(self, store: StoreGateway):
        self.store = store

    # =========================================================================
    # SEARCH
    # =========================================================================

    async def search(self, search: SearchFilter) -> PaginatedResult[Contract]:
        """
        Filtered, ordered, bounded page of contracts plus total match count.

        Count and page come from the same snapshot and the same WHERE
        clause, so total always agrees with the page.
        """
        plan = build_search_query(search)

        async with self.store.snapshot() as conn:
            total = await conn.fetchval(plan.count_sql, *plan.filter_args)
            rows = await conn.fetch(plan.page_sql, *plan.page_args)

        return PaginatedResult(
            items=[self._row_to_contract(row) for row in rows],
            total=int(total or 0),
            page=search.effective_page,
            page_size=search.effective_page_size,
        )

    # =========================================================================
    # READ OPERATIONS
    # =========================================================================

    async def get_by_id(self, contract_id) -> Contract:
        """
        Retrieve contract by registry UUID.

        Raises:
            ValidationError: malformed id
            NotFoundError: no such contract
        """
        cid = parse_uuid(contract_id, "contract id")
        async with self.store.acquire() as conn:
            row = await conn.fetchrow(f"""
                SELECT {CONTRACT_COLUMNS} FROM contracts WHERE id = $1
            """, cid)

        if not row:
            raise NotFoundError(f"Contract {cid} not found")
        return self._row_to_contract(row)

    async def find_by_address(self, address: str, network: Optional[str] = None) -> Optional[Contract]:
        """
        Retrieve contract by on-ledger address (C...).

        The same address may be registered on several networks; without
        a network the lookup must be unambiguous.

        Raises:
            ValidationError: address registered on more than one network
        """
        async with self.store.acquire() as conn:
            if network:
                rows = await conn.fetch(f"""
                    SELECT {CONTRACT_COLUMNS} FROM contracts
                    WHERE contract_id = $1 AND network = $2
                """, address, network)
            else:
                rows = await conn.fetch(f"""
                    SELECT {CONTRACT_COLUMNS} FROM contracts
                    WHERE contract_id = $1
                """, address)

        if not rows:
            return None
        if len(rows) > 1:
            raise ValidationError(f"Contract {address} exists on several networks; specify one")
        return self._row_to_contract(rows[0])

    async def list_by_publisher(self, publisher_id) -> List[Contract]:
        """All contracts owned by a publisher, newest first."""
        pid = parse_uuid(publisher_id, "publisher id")
        async with self.store.acquire() as conn:
            rows = await conn.fetch(f"""
                SELECT {CONTRACT_COLUMNS} FROM contracts
                WHERE publisher_id = $1
                {ORDER_BY}
            """, pid)

        return [self._row_to_contract(row) for row in rows]

    async def list_versions(self, contract_id) -> List[ContractVersion]:
        """Version history for a contract, newest first."""
        cid = parse_uuid(contract_id, "contract id")
        async with self.store.acquire() as conn:
            rows = await conn.fetch(f"""
                SELECT {VERSION_COLUMNS} FROM contract_versions
                WHERE contract_id = $1
                ORDER BY created_at DESC, id DESC
            """, cid)

        return [self._row_to_version(row) for row in rows]

    # =========================================================================
    # CREATE OPERATIONS
    # =========================================================================

    async def create(self, contract: Contract, initial_version: str) -> Contract:
        """
        Insert a contract and its first version in one transaction.

        Either both rows exist afterwards or neither does.

        Raises:
            ConflictError: (contract_id, network) already registered
            NotFoundError: publisher_id does not resolve
        """
        async with self.store.transaction() as conn:
            row = await conn.fetchrow(f"""
                INSERT INTO contracts (
                    contract_id, wasm_hash, name, description, publisher_id,
                    network, category, tags
                )
                VALUES ($1, $2, $3, $4, $5, $6, $7, $8)
                RETURNING {CONTRACT_COLUMNS}
            """,
                contract.contract_id,
                contract.wasm_hash,
                contract.name,
                contract.description,
                contract.publisher_id,
                contract.network.value,
                contract.category,
                list(contract.tags)
            )

            await conn.execute("""
                INSERT INTO contract_versions (contract_id, version, wasm_hash)
                VALUES ($1, $2, $3)
            """, row['id'], initial_version, contract.wasm_hash)

        created = self._row_to_contract(row)
        logger.info(f"Created contract {created.id} ({created.contract_id} on {created.network.value})")
        return created

    async def add_version(self, version: ContractVersion) -> ContractVersion:
        """
        Append a version entry.

        Raises:
            ConflictError: version already recorded for this contract
            NotFoundError: contract does not exist
        """
        async with self.store.acquire() as conn:
            row = await conn.fetchrow(f"""
                INSERT INTO contract_versions (
                    contract_id, version, wasm_hash, source_url,
                    commit_hash, release_notes
                )
                VALUES ($1, $2, $3, $4, $5, $6)
                RETURNING {VERSION_COLUMNS}
            """,
                version.contract_id,
                version.version,
                version.wasm_hash,
                version.source_url,
                version.commit_hash,
                version.release_notes
            )

        created = self._row_to_version(row)
        logger.info(f"Added version {created.version} to contract {created.contract_id}")
        return created

    # =========================================================================
    # ROW MAPPING
    # =========================================================================

    @staticmethod
    def _row_to_contract(row) -> Contract:
        return Contract(
            id=parse_uuid(row['id']),
            contract_id=row['contract_id'],
            wasm_hash=row['wasm_hash'],
            name=row['name'],
            description=row['description'],
            publisher_id=parse_uuid(row['publisher_id']),
            network=Network(row['network']),
            category=row['category'],
            tags=list(row['tags'] or []),
            is_verified=bool(row['is_verified']),
            created_at=row['created_at'],
            updated_at=row['updated_at'],
        )

    @staticmethod
    def _row_to_version(row) -> ContractVersion:
        return ContractVersion(
            id=parse_uuid(row['id']),
            contract_id=parse_uuid(row['contract_id']),
            version=row['version'],
            wasm_hash=row['wasm_hash'],
            source_url=row['source_url'],
            commit_hash=row['commit_hash'],
            release_notes=row['release_notes'],
            created_at=row['created_at'],
        )
