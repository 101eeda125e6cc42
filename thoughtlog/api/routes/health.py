"""
Health Check Routes - System health and monitoring endpoints.
"""
from datetime import datetime

from fastapi import APIRouter

from thoughtlog import __version__
from thoughtlog.core.config import get_settings
from thoughtlog.core.logging_config import get_logger
from thoughtlog.database.connection import get_database
from thoughtlog.llm.selector import ProviderCredentials
from thoughtlog.models.common import HealthResponse

logger = get_logger(__name__)

router = APIRouter(
    prefix="/health",
    tags=["Health"],
)


@router.get(
    "",
    response_model=HealthResponse,
    summary="Health check endpoint",
    description="Returns 200 OK while the API process is responsive."
)
def health_check() -> HealthResponse:
    """Liveness only; dependencies are checked by /health/ready."""
    logger.debug("Health check requested")

    return HealthResponse(
        status="healthy",
        version=__version__,
        timestamp=datetime.utcnow()
    )


@router.get(
    "/ready",
    response_model=HealthResponse,
    summary="Readiness check endpoint",
    description="""
    Reports whether the service can do useful work:
    - which provider credential slots are configured
    - whether the database answers a trivial query

    Status is "ready" only when both hold.
    """
)
def readiness_check() -> HealthResponse:
    logger.debug("Readiness check requested")

    providers = ProviderCredentials.from_settings(get_settings()).configured_slots()
    database_ok = get_database().check_connection()

    return HealthResponse(
        status="ready" if providers and database_ok else "degraded",
        version=__version__,
        timestamp=datetime.utcnow(),
        providers=providers,
        database=database_ok,
    )
