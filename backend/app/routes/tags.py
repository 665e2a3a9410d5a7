"""
ButtonUp Backend — Tags Route Handler
=======================================

What:  GET /api/tags: every tag used by published posts.
Who:   Called by the frontend TagFilter component.

Caching Strategy:
    Tags change only when a post is published or retagged. The response
    carries `s-maxage` + `stale-while-revalidate` so the CDN serves a cached
    copy and refreshes it in the background at most every
    TAGS_REVALIDATE_SECONDS (10 minutes). Nothing is cached in-process.
"""

import logging
from datetime import datetime, timezone

from fastapi import APIRouter, Depends, Response

from app.config import settings
from app.dependencies import get_content_gateway
from app.schemas.common import ErrorResponse
from app.schemas.content import TagsResponse
from app.services.content_base import ContentGateway

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api", tags=["Content"])


@router.get(
    "/tags",
    response_model=TagsResponse,
    responses={500: {"description": "Notion error", "model": ErrorResponse}},
    summary="List all tags of published content",
)
async def get_tags(
    response: Response,
    gateway: ContentGateway = Depends(get_content_gateway),
) -> TagsResponse:
    tags = sorted(set(await gateway.get_all_tags()))
    logger.info("Tags API returning %d tags", len(tags))

    revalidate = settings.tags_revalidate_seconds
    response.headers["Cache-Control"] = (
        f"public, s-maxage={revalidate}, stale-while-revalidate={revalidate}"
    )
    return TagsResponse(data=tags, timestamp=datetime.now(timezone.utc))
