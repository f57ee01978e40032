"""Handler for the Oh Dear application health check."""

from typing import Annotated

from fastapi import APIRouter, Depends
from safir.models import ErrorModel

from ..dependencies.auth import verify_secret
from ..dependencies.context import RequestContext
from ..models.health import HealthReport

router = APIRouter()

__all__ = ["router"]


@router.get(
    "/health",
    description=(
        "Sample disk, memory, and CPU usage of the host and classify each"
        " against the configured thresholds. The response takes at least"
        " the configured CPU sampling window."
    ),
    response_model=HealthReport,
    responses={401: {"description": "Unauthenticated", "model": ErrorModel}},
    summary="Host health check",
    tags=["health"],
)
async def get_health(
    context: Annotated[RequestContext, Depends(verify_secret)],
) -> HealthReport:
    health_check_service = context.factory.create_health_check_service()
    return await health_check_service.check()
