"""
ButtonUp Backend — IndexNow Route Handlers
============================================

What:  IndexNow key verification, submission, and status endpoints.

Route Inventory:
    - GET  /api/indexnow/{key}   Serve the verification key file (search engines)
    - GET  /api/indexnow          ?action=status | ?action=key | usage info
    - POST /api/indexnow          Submit URLs (explicit list or a preset group)

Key verification contract:
    INDEXNOW_API_KEY unset           → 500 {"error": "IndexNow API key not configured"}
    key != configured key            → 404 {"error": "Invalid key"}
    key == configured key            → 200 text/plain, body is the key
"""

import logging
import secrets
from typing import List, Optional

from fastapi import APIRouter, Depends, Header, Query
from fastapi.responses import PlainTextResponse

from app.config import settings
from app.dependencies import get_indexnow_service
from app.exceptions import (
    ClientInputError,
    ConfigurationError,
    NotFoundError,
    UnauthorizedError,
)
from app.schemas.common import ErrorResponse
from app.schemas.indexnow import (
    IndexNowStatusResponse,
    IndexNowSubmitRequest,
    IndexNowSubmitResponse,
    SubmissionStats,
    SubmissionType,
)
from app.services.indexnow_service import ENDPOINTS, IndexNowService

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/indexnow", tags=["SEO"])

# 24h: the key only changes when it is rotated by hand
KEY_CACHE_CONTROL = "public, max-age=86400"

# What: Pages resubmitted for each preset submission type
PRESET_PATHS = {
    SubmissionType.CONTENT: ["/", "/archive"],
    SubmissionType.NEWS: ["/news", "/"],
    SubmissionType.ALL: ["/", "/news", "/archive", "/playground"],
}


def require_configured_key() -> str:
    key = settings.indexnow_api_key
    if not key:
        raise ConfigurationError(message="IndexNow API key not configured")
    return key


def keys_match(candidate: str, key: str) -> bool:
    return secrets.compare_digest(candidate.encode("utf-8"), key.encode("utf-8"))


@router.get(
    "/{key}",
    response_class=PlainTextResponse,
    responses={
        200: {"description": "Verification key", "content": {"text/plain": {}}},
        404: {"description": "Invalid key", "model": ErrorResponse},
        500: {"description": "Key not configured", "model": ErrorResponse},
    },
    summary="Serve the IndexNow verification key",
)
async def verify_key(key: str) -> PlainTextResponse:
    configured = require_configured_key()
    if not keys_match(key, configured):
        raise NotFoundError(message="Invalid key")

    return PlainTextResponse(configured, headers={"Cache-Control": KEY_CACHE_CONTROL})


@router.get(
    "",
    summary="IndexNow status, key, or usage information",
    responses={500: {"description": "Key not configured", "model": ErrorResponse}},
)
async def indexnow_info(
    action: Optional[str] = Query(default=None),
    service: IndexNowService = Depends(get_indexnow_service),
):
    if action == "status":
        return IndexNowStatusResponse(
            configured=service.is_configured(),
            key_file_url=service.key_file_url,
            endpoints=ENDPOINTS,
        ).model_dump(by_alias=True)

    if action == "key":
        return PlainTextResponse(require_configured_key())

    return {
        "message": "IndexNow API endpoint",
        "usage": {
            "POST": "Submit URLs for indexing",
            "GET?action=status": "Check configuration status",
            "GET?action=key": "Get verification key",
        },
    }


def resolve_urls(body: IndexNowSubmitRequest, site_url: str) -> List[str]:
    """
    Pick the URLs to submit from the request body.

    Raises:
        ClientInputError: unknown `type`, or no usable field at all.
    """
    if body.urls is not None:
        return body.urls
    if body.url:
        return [body.url]
    if body.type:
        try:
            preset = SubmissionType(body.type)
        except ValueError:
            raise ClientInputError(
                message="Invalid type. Must be: content, news, or all",
                field="type",
            )
        return [f"{site_url}{path}" for path in PRESET_PATHS[preset]]
    raise ClientInputError(message="Missing required parameters. Provide urls, url, or type.")


@router.post(
    "",
    response_model=IndexNowSubmitResponse,
    responses={
        400: {"description": "Nothing to submit", "model": ErrorResponse},
        401: {"description": "Bad bearer token", "model": ErrorResponse},
        500: {"description": "IndexNow not configured", "model": ErrorResponse},
    },
    summary="Submit URLs to IndexNow search engines",
)
async def submit(
    body: IndexNowSubmitRequest,
    authorization: Optional[str] = Header(default=None),
    service: IndexNowService = Depends(get_indexnow_service),
) -> IndexNowSubmitResponse:
    """
    Notify search engines about changed URLs.

    When INDEXNOW_API_SECRET is set, callers must send
    `Authorization: Bearer <secret>`; otherwise the endpoint is open.
    """
    secret = settings.indexnow_api_secret
    if secret and not keys_match(authorization or "", f"Bearer {secret}"):
        raise UnauthorizedError()

    if not service.is_configured():
        raise ConfigurationError(
            message="IndexNow not configured",
            details="INDEXNOW_API_KEY environment variable is required",
        )

    urls = resolve_urls(body, service.site_url)
    if not urls:
        raise ClientInputError(message="No URLs to submit", field="urls")

    results = await service.submit_urls(urls)
    successful = sum(1 for r in results if r.success)
    return IndexNowSubmitResponse(
        stats=SubmissionStats(
            submitted=len(urls),
            engines=len(results),
            successful=successful,
            failed=len(results) - successful,
        ),
        urls=urls,
        results=results,
    )
