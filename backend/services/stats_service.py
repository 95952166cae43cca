"""
Stats Aggregator - read-only registry counters

All counts are read inside one REPEATABLE READ snapshot, so
verified_contracts <= total_contracts holds even under concurrent
publication.
"""
import logging
from dataclasses import dataclass, field, asdict
from typing import Dict

from repositories.store import StoreGateway

logger = logging.getLogger(__name__)


@dataclass
class RegistryStats:
    total_contracts: int = 0
    verified_contracts: int = 0
    total_publishers: int = 0
    contracts_by_network: Dict[str, int] = field(default_factory=dict)

    def to_dict(self) -> dict:
        return asdict(self)


class StatsAggregator:

    def __init__(self, store: StoreGateway):
        self.store = store

    async def get_stats(self) -> RegistryStats:
        """
        Raises:
            InternalError: store failure (never a zero fallback)
        """
        async with self.store.snapshot() as conn:
            row = await conn.fetchrow("""
                SELECT
                    COUNT(*) AS total_contracts,
                    COUNT(*) FILTER (WHERE is_verified) AS verified_contracts
                FROM contracts
            """)
            total_publishers = await conn.fetchval("SELECT COUNT(*) FROM publishers")
            network_rows = await conn.fetch("""
                SELECT network, COUNT(*) AS n FROM contracts GROUP BY network
            """)

        return RegistryStats(
            total_contracts=int(row['total_contracts']),
            verified_contracts=int(row['verified_contracts']),
            total_publishers=int(total_publishers),
            contracts_by_network={r['network']: int(r['n']) for r in network_rows},
        )
