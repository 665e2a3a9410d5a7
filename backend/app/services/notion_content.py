"""
ButtonUp Backend — Notion Content Gateway
===========================================

What:  ContentGateway implementation backed by a Notion database.
Why:   Posts are authored in Notion; their `Tags` multi-select is the source of
       the site's tag cloud.
How:   One `databases.query` call through notion_client.AsyncClient, filtered to
       published records, then tags are collected from each page's properties.

Database schema this gateway reads:
    Status: select         ; only "published" pages are considered
    Tags:   multi_select   ; each option's `name` is one tag
"""

import logging
from typing import Any, Dict, Iterable, List, Optional

from notion_client import AsyncClient

from app.config import settings
from app.exceptions import ContentError, describe_error
from app.services.content_base import ContentGateway

logger = logging.getLogger(__name__)

PUBLISHED_FILTER = {"property": "Status", "select": {"equals": "published"}}

# What: Records fetched per query; 100 is the Notion API maximum
# Why no cursor loop: one outbound call per request. A database with more than
# 100 published posts will contribute tags from the most recent 100 only.
PAGE_SIZE = 100

TAGS_PROPERTY = "Tags"


def extract_tags(pages: Iterable[Dict[str, Any]]) -> List[str]:
    """
    Collect unique tag names from Notion page objects.

    Pages whose Tags property is missing or not a multi_select are skipped
    rather than failing the whole aggregation.
    """
    tags = set()
    for page in pages:
        prop = page.get("properties", {}).get(TAGS_PROPERTY)
        if not prop or prop.get("type") != "multi_select":
            continue
        for option in prop.get("multi_select") or []:
            name = option.get("name")
            if name:
                tags.add(name)
    return sorted(tags)


class NotionContentGateway(ContentGateway):
    """
    Notion adapter.

    Args:
        api_key:      Integration token (defaults to settings.notion_api_key)
        database_id:  Content database ID (defaults to settings.notion_database_id)
        client:       Pre-built AsyncClient, used by tests to inject a mock
    """

    def __init__(
        self,
        api_key: Optional[str] = None,
        database_id: Optional[str] = None,
        client: Optional[AsyncClient] = None,
    ):
        self.api_key = api_key if api_key is not None else settings.notion_api_key
        self.database_id = database_id if database_id is not None else settings.notion_database_id
        self._client = client

    @property
    def configured(self) -> bool:
        return bool(self.database_id and (self._client is not None or self.api_key))

    def _get_client(self) -> AsyncClient:
        if not self.configured:
            raise ContentError(
                message="Failed to fetch tags",
                details="Notion is not configured",
            )
        if self._client is None:
            self._client = AsyncClient(auth=self.api_key)
        return self._client

    async def get_all_tags(self) -> List[str]:
        client = self._get_client()
        try:
            response = await client.databases.query(
                database_id=self.database_id,
                filter=PUBLISHED_FILTER,
                page_size=PAGE_SIZE,
            )
        except Exception as e:
            logger.error("Notion query for tags failed: %s", str(e))
            raise ContentError(
                message="Failed to fetch tags",
                details=describe_error(e, "Unknown error"),
                context={"database_id": self.database_id},
            )

        pages = response.get("results", [])
        tags = extract_tags(pages)
        logger.info("Aggregated %d tags from %d published pages", len(tags), len(pages))
        return tags


# ── Singleton Instance ────────────────────────────────────────────────────
content_gateway = NotionContentGateway()
