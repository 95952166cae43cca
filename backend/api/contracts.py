"""
Contracts API
=============

Endpoints:
- GET  /api/contracts                    - List/search (paginated, filterable)
- POST /api/contracts                    - Publish a deployed contract
- POST /api/contracts/verify             - Request verification (returns pending)
- GET  /api/contracts/{id}               - Get single contract
- GET  /api/contracts/{id}/versions      - Version history, newest first
- POST /api/contracts/{id}/versions      - Append a version
- GET  /api/verifications/{id}           - Verification status

Errors raised by services are RegistryError subclasses; the app-level
handler turns them into status codes.
"""

from fastapi import APIRouter, Depends, Query
from typing import List, Optional

from models.api.contract import (
    ContractResponse,
    ContractVersionResponse,
    PaginatedContractsResponse,
    PublishRequest,
    PublishVersionRequest,
    VerificationResponse,
    VerifyAcknowledgement,
    VerifyRequest,
)
from models.domain.search import SearchFilter
from services.publication_service import DEFAULT_INITIAL_VERSION
from services.registry import RegistryServices
from .dependencies import get_services

router = APIRouter(prefix="/api", tags=["Contracts"])


@router.get("/contracts", response_model=PaginatedContractsResponse)
async def list_contracts(
    query: Optional[str] = Query(None, description="Case-insensitive match on name or description"),
    verified_only: Optional[bool] = Query(None),
    category: Optional[str] = Query(None),
    network: Optional[str] = Query(None),
    page: Optional[int] = Query(None, description="1-based; values < 1 mean 1"),
    page_size: Optional[int] = Query(None, description="Default 20, clamped to [1, 100]"),
    services: RegistryServices = Depends(get_services)
):
    """List and search contracts, newest first."""
    result = await services.contracts.search(SearchFilter(
        query=query,
        verified_only=verified_only,
        category=category,
        network=network,
        page=page,
        page_size=page_size,
    ))
    return PaginatedContractsResponse.from_domain(result)


@router.post("/contracts", response_model=ContractResponse)
async def publish_contract(
    request: PublishRequest,
    services: RegistryServices = Depends(get_services)
):
    """
    Publish a contract.

    Registers the publisher on first sight, resolves the WASM hash
    from the ledger, and stores the contract with its first version.
    """
    contract = await services.publication.publish(
        contract_id=request.contract_id,
        publisher_address=request.publisher_address,
        name=request.name,
        network=request.network,
        description=request.description,
        category=request.category,
        tags=request.tags,
        version=request.version or DEFAULT_INITIAL_VERSION,
    )
    return ContractResponse.from_domain(contract)


@router.post("/contracts/verify", response_model=VerifyAcknowledgement)
async def verify_contract(
    request: VerifyRequest,
    services: RegistryServices = Depends(get_services)
):
    """Accept a verification request. Does not wait for the result."""
    return await services.verification.request_verification(
        contract_ref=request.contract_id,
        network=request.network,
        source_code=request.source_code,
        build_params=request.build_params,
        compiler_version=request.compiler_version,
    )


@router.get("/contracts/{contract_id}", response_model=ContractResponse)
async def get_contract(contract_id: str, services: RegistryServices = Depends(get_services)):
    contract = await services.contracts.get_by_id(contract_id)
    return ContractResponse.from_domain(contract)


@router.get("/contracts/{contract_id}/versions", response_model=List[ContractVersionResponse])
async def get_contract_versions(contract_id: str, services: RegistryServices = Depends(get_services)):
    versions = await services.contracts.list_versions(contract_id)
    return [ContractVersionResponse.from_domain(v) for v in versions]


@router.post("/contracts/{contract_id}/versions", response_model=ContractVersionResponse)
async def publish_contract_version(
    contract_id: str,
    request: PublishVersionRequest,
    services: RegistryServices = Depends(get_services)
):
    version = await services.publication.publish_version(
        contract_id,
        version=request.version,
        wasm_hash=request.wasm_hash,
        source_url=request.source_url,
        commit_hash=request.commit_hash,
        release_notes=request.release_notes,
    )
    return ContractVersionResponse.from_domain(version)


@router.get("/verifications/{verification_id}", response_model=VerificationResponse)
async def get_verification(verification_id: str, services: RegistryServices = Depends(get_services)):
    verification = await services.verification.get_verification(verification_id)
    return VerificationResponse.from_domain(verification)
