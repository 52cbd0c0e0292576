"""Health probes. Served outside /api, so no bearer token is needed."""

from fastapi import APIRouter, Response, status
from pydantic import BaseModel

from chronosync.core import check_db_connection, settings

router = APIRouter(prefix="/health", tags=["health"])


class HealthResponse(BaseModel):
    status: str
    version: str
    database: str


class LivenessResponse(BaseModel):
    status: str = "alive"


@router.get(
    "",
    response_model=HealthResponse,
    responses={status.HTTP_503_SERVICE_UNAVAILABLE: {"description": "Database unreachable"}},
)
async def health_check(response: Response) -> HealthResponse:
    """Readiness: 503 while the credential store cannot be queried."""
    db_ok = await check_db_connection()
    if not db_ok:
        response.status_code = status.HTTP_503_SERVICE_UNAVAILABLE

    return HealthResponse(
        status="healthy" if db_ok else "unhealthy",
        version=settings.app_version,
        database="connected" if db_ok else "disconnected",
    )


@router.get("/live", response_model=LivenessResponse)
async def liveness() -> LivenessResponse:
    """Process is up; does not touch the database."""
    return LivenessResponse()
