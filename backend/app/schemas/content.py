"""
ButtonUp Backend — Content Schemas
====================================

What:  Models for data sourced from the Notion content database.

ContentItem is the record shape the frontend renders for posts. No endpoint
in this service returns it; it documents the properties the tags aggregation
reads from (Tags is one of them).
"""

from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel, Field


class ContentItem(BaseModel):
    id: str
    title: str
    content: str = ""
    cover: Optional[str] = None
    date: str = ""
    excerpt: str = ""
    slug: str
    tags: Optional[List[str]] = None


class TagsResponse(BaseModel):
    """
    What:  Returned by GET /api/tags.

    `data` holds each tag once, sorted. `timestamp` is when this response was
    generated, so clients can tell how stale a cached copy is.
    """
    success: bool = Field(default=True)
    data: List[str]
    timestamp: datetime
