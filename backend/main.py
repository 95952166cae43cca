"""
Soroban Contract Registry - FastAPI Backend
"""
import logging
import sys
from contextlib import asynccontextmanager
from pathlib import Path
from typing import Optional

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

# Add backend to path for package imports
sys.path.insert(0, str(Path(__file__).parent))

from api import contracts, meta, publishers
from config import Settings, get_settings, create_postgres_pool, create_job_queue
from repositories.schema import ensure_schema
from services.health_service import ProcessClock
from services.ledger_client import SorobanRpcClient
from services.registry import RegistryServices
from utils.errors import RegistryError

logger = logging.getLogger(__name__)

ERROR_STATUS = {
    "not_found": 404,
    "conflict": 409,
    "validation_error": 422,
    "network_error": 502,
    "internal_error": 500,
}


def configure_logging(level: str = "INFO"):
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
    )


async def registry_error_handler(request: Request, exc: RegistryError):
    """Map the error taxonomy onto HTTP statuses"""
    status_code = ERROR_STATUS.get(exc.kind, 500)
    if status_code >= 500:
        logger.error(f"{request.method} {request.url.path} failed: {exc.kind}")
    return JSONResponse(status_code=status_code, content=exc.to_dict())


def create_app(
    settings: Optional[Settings] = None,
    services: Optional[RegistryServices] = None
) -> FastAPI:
    """
    Build the FastAPI app.

    When `services` is supplied (tests) no pool, queue or RPC client is
    created; otherwise they are opened on startup and closed on shutdown.
    """
    settings = settings or get_settings()
    clock = ProcessClock()

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        if services is not None:
            app.state.services = services
            yield
            return

        pool = await create_postgres_pool(settings)
        job_queue = await create_job_queue(settings)
        resolver = SorobanRpcClient(settings.rpc_urls, timeout=settings.ledger_timeout)

        app.state.services = RegistryServices.build(
            pool,
            resolver,
            clock,
            job_queue=job_queue,
            version=settings.service_version,
            probe_timeout=settings.health_probe_timeout,
        )
        if settings.environment == "development":
            await ensure_schema(app.state.services.store)

        logger.info(f"Registry API started (version {settings.service_version})")
        try:
            yield
        finally:
            await resolver.close()
            if job_queue:
                await job_queue.close()
            await pool.close()
            logger.info("Registry API stopped")

    app = FastAPI(
        title="Soroban Contract Registry",
        description="Publish, search and verify Soroban smart contracts",
        version=settings.service_version,
        lifespan=lifespan,
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.add_exception_handler(RegistryError, registry_error_handler)

    app.include_router(meta.router)
    app.include_router(contracts.router)
    app.include_router(publishers.router)

    return app


configure_logging(get_settings().log_level)
app = create_app()


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(app, host="0.0.0.0", port=8000)
