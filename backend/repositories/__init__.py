"""
Repository Pattern - Storage abstraction layer

Repositories hide storage details (PostgreSQL) from business logic.
Consumers work with domain models, not asyncpg records.

All repositories share one StoreGateway wrapping the process-wide
asyncpg pool; each method acquires a connection for exactly one unit
of work and releases it before returning.

- PublisherRepository: publishers (unique stellar_address)
- ContractRepository: contracts + contract_versions
- VerificationRepository: verifications (pending requests)
"""
from .store import StoreGateway
from .schema import SCHEMA_SQL, ensure_schema
from .publisher_repository import PublisherRepository
from .contract_repository import ContractRepository
from .verification_repository import VerificationRepository

__all__ = [
    'StoreGateway',
    'SCHEMA_SQL',
    'ensure_schema',
    'PublisherRepository',
    'ContractRepository',
    'VerificationRepository',
]
