"""
Registry wiring - one object holding every repository and service.

Built once per process from the shared pool and collaborators, then
attached to the FastAPI app. Holds no per-request state.
"""
from dataclasses import dataclass
from typing import Optional

import asyncpg

from repositories.store import StoreGateway
from repositories.publisher_repository import PublisherRepository
from repositories.contract_repository import ContractRepository
from repositories.verification_repository import VerificationRepository
from services.health_service import LivenessProber, ProcessClock
from services.job_queue import JobQueue
from services.ledger_client import HashResolver
from services.publication_service import ContractPublicationService
from services.stats_service import StatsAggregator
from services.verification_service import VerificationService


@dataclass
class RegistryServices:
    store: StoreGateway
    publishers: PublisherRepository
    contracts: ContractRepository
    publication: ContractPublicationService
    verification: VerificationService
    stats: StatsAggregator
    health: LivenessProber

    @classmethod
    def build(
        cls,
        db_pool: asyncpg.Pool,
        resolver: HashResolver,
        clock: ProcessClock,
        job_queue: Optional[JobQueue] = None,
        version: str = "0.1.0",
        probe_timeout: Optional[float] = 2.0
    ) -> 'RegistryServices':
        store = StoreGateway(db_pool)
        publishers = PublisherRepository(store)
        contracts = ContractRepository(store)
        verifications = VerificationRepository(store)

        return cls(
            store=store,
            publishers=publishers,
            contracts=contracts,
            publication=ContractPublicationService(publishers, contracts, resolver),
            verification=VerificationService(contracts, verifications, job_queue),
            stats=StatsAggregator(store),
            health=LivenessProber(store, clock, version=version, probe_timeout=probe_timeout),
        )
