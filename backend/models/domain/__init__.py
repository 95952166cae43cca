"""
Domain Models - Storage-agnostic data structures

These models represent the core registry entities independent of storage layer.
Services operate on these models, not raw database rows.

Architecture:
- Domain models are pure Python objects (dataclasses)
- Storage details (PostgreSQL) are abstracted via repositories
- Business logic operates on these models, not database rows
"""

from .publisher import Publisher
from .contract import Contract, ContractVersion, Network
from .verification import Verification, VerificationStatus
from .search import (
    SearchFilter,
    PaginatedResult,
    DEFAULT_PAGE_SIZE,
    MAX_PAGE_SIZE,
)

__all__ = [
    # Core entities
    'Publisher',
    'Contract',
    'ContractVersion',
    'Network',

    # Verification lifecycle
    'Verification',
    'VerificationStatus',

    # Search
    'SearchFilter',
    'PaginatedResult',
    'DEFAULT_PAGE_SIZE',
    'MAX_PAGE_SIZE',
]
