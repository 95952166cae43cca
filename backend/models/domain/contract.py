"""
Contract domain models
"""
from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Optional, List
import uuid

# Column widths in the contracts / contract_versions tables
NAME_MAX_LENGTH = 255
CATEGORY_MAX_LENGTH = 64
VERSION_MAX_LENGTH = 64
URL_MAX_LENGTH = 512
COMMIT_HASH_MAX_LENGTH = 64


class Network(str, Enum):
    """Stellar networks a contract can be deployed on"""
    MAINNET = "mainnet"
    TESTNET = "testnet"
    FUTURENET = "futurenet"


@dataclass
class Contract:
    """
    Contract domain model - storage-agnostic representation

    Storage: PostgreSQL (contracts table)

    contract_id is the on-ledger Soroban address (C...); id is the
    registry's own UUID. (contract_id, network) is unique.
    Core fields are immutable once published, except is_verified.
    """
    id: Optional[uuid.UUID]
    contract_id: str
    wasm_hash: str
    name: str
    publisher_id: uuid.UUID
    network: Network

    description: Optional[str] = None
    category: Optional[str] = None
    tags: List[str] = field(default_factory=list)

    is_verified: bool = False

    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


@dataclass
class ContractVersion:
    """
    Append-only history entry for a Contract.

    Storage: PostgreSQL (contract_versions table)
    """
    id: Optional[uuid.UUID]
    contract_id: uuid.UUID  # registry UUID of the owning contract
    version: str
    wasm_hash: str

    source_url: Optional[str] = None
    commit_hash: Optional[str] = None
    release_notes: Optional[str] = None

    created_at: Optional[datetime] = None
