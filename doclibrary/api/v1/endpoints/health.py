"""Health check endpoint. No dependencies; used for liveness and readiness probes."""

from fastapi import APIRouter
from fastapi.responses import JSONResponse

from doclibrary.infrastructure.supabase import get_supabase_client
from doclibrary.schemas.health import (
    HealthResponse,
    ReadinessErrorResponse,
    ReadinessResponse,
)

router = APIRouter()


@router.get("", response_model=HealthResponse)
def health_check() -> HealthResponse:
    """Return simple ok status for liveness."""
    return HealthResponse()


@router.get(
    "/ready",
    response_model=ReadinessResponse,
    responses={503: {"description": "Supabase not configured", "model": ReadinessErrorResponse}},
)
def readiness_check() -> ReadinessResponse | JSONResponse:
    """Return 200 once the Supabase client is initialized; 503 otherwise."""
    if get_supabase_client() is not None:
        return ReadinessResponse()
    return JSONResponse(
        status_code=503,
        content=ReadinessErrorResponse(
            message="Supabase not configured",
        ).model_dump(),
    )
