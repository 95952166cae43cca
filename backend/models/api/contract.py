"""
Pydantic models for Contract endpoints
"""

from pydantic import BaseModel, Field, field_serializer
from datetime import datetime
from typing import List, Optional
from uuid import UUID

from models.domain.contract import (
    Contract,
    ContractVersion,
    CATEGORY_MAX_LENGTH,
    COMMIT_HASH_MAX_LENGTH,
    NAME_MAX_LENGTH,
    URL_MAX_LENGTH,
    VERSION_MAX_LENGTH,
)
from models.domain.search import PaginatedResult
from models.domain.verification import Verification


class PublishRequest(BaseModel):
    """Model for publishing a contract"""
    contract_id: str = Field(..., description="Contract address (C...)")
    publisher_address: str = Field(..., description="Publisher Stellar address (G...)")
    name: str = Field(..., max_length=NAME_MAX_LENGTH)
    description: Optional[str] = None
    network: str = Field(..., description="mainnet, testnet or futurenet")
    category: Optional[str] = Field(None, max_length=CATEGORY_MAX_LENGTH)
    tags: List[str] = []
    version: Optional[str] = Field(None, max_length=VERSION_MAX_LENGTH)


class PublishVersionRequest(BaseModel):
    """Model for appending a contract version"""
    version: str = Field(..., max_length=VERSION_MAX_LENGTH)
    wasm_hash: Optional[str] = Field(None, description="Resolved from the ledger when omitted")
    source_url: Optional[str] = Field(None, max_length=URL_MAX_LENGTH)
    commit_hash: Optional[str] = Field(None, max_length=COMMIT_HASH_MAX_LENGTH)
    release_notes: Optional[str] = None


class VerifyRequest(BaseModel):
    """Model for requesting verification"""
    contract_id: str = Field(..., description="Registry UUID or contract address (C...)")
    network: Optional[str] = None
    source_code: Optional[str] = None
    build_params: dict = {}
    compiler_version: Optional[str] = None


class VerifyAcknowledgement(BaseModel):
    verification_id: str
    contract_id: str
    status: str
    message: str


class ContractResponse(BaseModel):
    """Public contract model"""
    id: UUID
    contract_id: str
    wasm_hash: str
    name: str
    description: Optional[str] = None
    publisher_id: UUID
    network: str
    category: Optional[str] = None
    tags: List[str] = []
    is_verified: bool
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    @field_serializer('id', 'publisher_id')
    def serialize_uuid(self, value: UUID) -> str:
        return str(value)

    @classmethod
    def from_domain(cls, contract: Contract) -> 'ContractResponse':
        return cls(
            id=contract.id,
            contract_id=contract.contract_id,
            wasm_hash=contract.wasm_hash,
            name=contract.name,
            description=contract.description,
            publisher_id=contract.publisher_id,
            network=contract.network.value,
            category=contract.category,
            tags=contract.tags,
            is_verified=contract.is_verified,
            created_at=contract.created_at,
            updated_at=contract.updated_at,
        )


class ContractVersionResponse(BaseModel):
    id: UUID
    contract_id: UUID
    version: str
    wasm_hash: str
    source_url: Optional[str] = None
    commit_hash: Optional[str] = None
    release_notes: Optional[str] = None
    created_at: Optional[datetime] = None

    @field_serializer('id', 'contract_id')
    def serialize_uuid(self, value: UUID) -> str:
        return str(value)

    @classmethod
    def from_domain(cls, version: ContractVersion) -> 'ContractVersionResponse':
        return cls(
            id=version.id,
            contract_id=version.contract_id,
            version=version.version,
            wasm_hash=version.wasm_hash,
            source_url=version.source_url,
            commit_hash=version.commit_hash,
            release_notes=version.release_notes,
            created_at=version.created_at,
        )


class PaginatedContractsResponse(BaseModel):
    items: List[ContractResponse]
    total: int
    page: int
    page_size: int
    total_pages: int

    @classmethod
    def from_domain(cls, result: PaginatedResult) -> 'PaginatedContractsResponse':
        return cls(
            items=[ContractResponse.from_domain(c) for c in result.items],
            total=result.total,
            page=result.page,
            page_size=result.page_size,
            total_pages=result.total_pages,
        )


class VerificationResponse(BaseModel):
    id: UUID
    contract_id: UUID
    status: str
    compiler_version: Optional[str] = None
    error_message: Optional[str] = None
    created_at: Optional[datetime] = None
    verified_at: Optional[datetime] = None

    @field_serializer('id', 'contract_id')
    def serialize_uuid(self, value: UUID) -> str:
        return str(value)

    @classmethod
    def from_domain(cls, verification: Verification) -> 'VerificationResponse':
        return cls(
            id=verification.id,
            contract_id=verification.contract_id,
            status=verification.status.value,
            compiler_version=verification.compiler_version,
            error_message=verification.error_message,
            created_at=verification.created_at,
            verified_at=verification.verified_at,
        )
