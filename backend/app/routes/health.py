"""
ButtonUp Backend — Health Check Route
=======================================

What:  Health check endpoint for monitoring and load balancer probes.
Why:   Load balancers route away from instances that cannot serve traffic.
How:   Reports which integrations have credentials. No outbound calls are
       made: the hosted services are probed by real traffic, not by a check
       that runs every few seconds and spends API quota.

Status levels:
    - healthy:   Storage, content, and IndexNow are all configured
    - degraded:  At least one integration is missing credentials; the process
                 is up (HTTP 200) but the matching endpoints will answer 500
"""

import logging
import time

from fastapi import APIRouter

from app import __version__
from app.config import settings
from app.schemas.common import HealthResponse

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Health"])

_start_time = time.time()


def _state(configured: bool) -> str:
    return "configured" if configured else "not_configured"


@router.get(
    "/health",
    response_model=HealthResponse,
    summary="Service health check",
)
async def health_check() -> HealthResponse:
    storage = _state(settings.storage_configured)
    content = _state(settings.content_configured)
    indexnow = _state(bool(settings.indexnow_api_key))

    overall = "healthy"
    if "not_configured" in (storage, content, indexnow):
        overall = "degraded"

    return HealthResponse(
        status=overall,
        version=__version__,
        storage=storage,
        content=content,
        indexnow=indexnow,
        uptime_seconds=round(time.time() - _start_time, 2),
    )
