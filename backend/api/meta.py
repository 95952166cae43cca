"""
Health and stats endpoints
"""

from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse

from models.api.meta import StatsResponse
from services.registry import RegistryServices
from .dependencies import get_services

router = APIRouter(tags=["Meta"])


@router.get("/health")
async def health_check(services: RegistryServices = Depends(get_services)):
    """
    Probe DB connectivity and report uptime.

    200 when the store answers, 503 (status=degraded) when it does not.
    """
    report = await services.health.check()
    return JSONResponse(
        status_code=200 if report.is_ok else 503,
        content=report.to_dict()
    )


@router.get("/api/stats", response_model=StatsResponse)
async def get_stats(services: RegistryServices = Depends(get_services)):
    stats = await services.stats.get_stats()
    return StatsResponse(**stats.to_dict())
