"""
Publishers API
==============

Endpoints:
- POST /api/publishers                  - Create publisher with profile (409 if address exists)
- GET  /api/publishers/{id}             - Get publisher
- GET  /api/publishers/{id}/contracts   - Publisher's contracts, newest first
"""

from fastapi import APIRouter, Depends
from typing import List

from models.api.contract import ContractResponse
from models.api.publisher import PublisherCreate, PublisherResponse
from services.registry import RegistryServices
from .dependencies import get_services

router = APIRouter(prefix="/api/publishers", tags=["Publishers"])


@router.post("", response_model=PublisherResponse)
async def create_publisher(
    publisher: PublisherCreate,
    services: RegistryServices = Depends(get_services)
):
    created = await services.publishers.create(publisher.to_domain())
    return PublisherResponse.model_validate(created)


@router.get("/{publisher_id}", response_model=PublisherResponse)
async def get_publisher(publisher_id: str, services: RegistryServices = Depends(get_services)):
    publisher = await services.publishers.get_by_id(publisher_id)
    return PublisherResponse.model_validate(publisher)


@router.get("/{publisher_id}/contracts", response_model=List[ContractResponse])
async def get_publisher_contracts(publisher_id: str, services: RegistryServices = Depends(get_services)):
    contracts = await services.contracts.list_by_publisher(publisher_id)
    return [ContractResponse.from_domain(c) for c in contracts]
