"""
ButtonUp Backend — IndexNow Service
=====================================

What:  Implements the IndexNow protocol: notifies search engines that URLs changed.
Why:   New posts get crawled within minutes instead of waiting for the next
       sitemap crawl.
How:   Builds one submission {host, key, keyLocation, urlList} and POSTs it to
       every supported endpoint concurrently with httpx.
Who:   Called by POST /api/indexnow.

Verification:
    Engines fetch `keyLocation` and compare it with `key` before accepting a
    submission. GET /api/indexnow/{key} (routes/indexnow.py) serves that file.

Failure model:
    Submission is best-effort per engine. A timeout or non-2xx answer from one
    engine is recorded as a failed IndexNowResult; it never aborts the others
    and never raises to the caller.
"""

import asyncio
import logging
from typing import List, Optional
from urllib.parse import urlparse

import httpx

from app.config import settings
from app.schemas.indexnow import IndexNowResult, IndexNowSubmission

logger = logging.getLogger(__name__)

ENDPOINTS = [
    "https://api.indexnow.org/indexnow",
    "https://www.bing.com/indexnow",
    "https://yandex.com/indexnow",
    "https://search.seznam.cz/indexnow",
    "https://searchadvisor.naver.com/indexnow",
]

ENGINE_NAMES = {
    "bing.com": "Bing",
    "yandex.com": "Yandex",
    "seznam.cz": "Seznam",
    "naver.com": "Naver",
    "indexnow.org": "IndexNow",
}

USER_AGENT = "ButtonUp-IndexNow/1.0"
REQUEST_TIMEOUT = 10.0


def engine_name(endpoint: str) -> str:
    host = urlparse(endpoint).hostname or ""
    for domain, name in ENGINE_NAMES.items():
        if host == domain or host.endswith("." + domain):
            return name
    return "Unknown"


class IndexNowService:
    """
    Args:
        api_key:    IndexNow key (defaults to settings.indexnow_api_key)
        site_url:   Site origin the key belongs to (defaults to settings.site_url)
        transport:  Optional httpx transport; tests pass httpx.MockTransport
    """

    def __init__(
        self,
        api_key: Optional[str] = None,
        site_url: Optional[str] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self._api_key = api_key
        self._site_url = site_url
        self._transport = transport

    # Read through to settings at call time so a key rotated via env reload
    # (or patched in tests) is picked up without rebuilding the service.
    @property
    def api_key(self) -> str:
        return self._api_key if self._api_key is not None else settings.indexnow_api_key

    @property
    def site_url(self) -> str:
        return (self._site_url if self._site_url is not None else settings.site_url).rstrip("/")

    @property
    def key_file_url(self) -> str:
        return f"{self.site_url}/{self.api_key}.txt"

    def is_configured(self) -> bool:
        return bool(self.api_key and self.site_url)

    def absolute_url(self, url: str) -> str:
        if url.startswith("http"):
            return url
        return f"{self.site_url}{'' if url.startswith('/') else '/'}{url}"

    def build_submission(self, urls: List[str]) -> IndexNowSubmission:
        return IndexNowSubmission(
            host=urlparse(self.site_url).hostname or "",
            key=self.api_key,
            key_location=self.key_file_url,
            url_list=[self.absolute_url(u) for u in urls],
        )

    async def submit_urls(self, urls: List[str]) -> List[IndexNowResult]:
        """
        Submit URLs to every IndexNow endpoint.

        Returns:
            One IndexNowResult per endpoint, or an empty list when the service
            is not configured or there is nothing to submit.
        """
        if not self.is_configured():
            logger.error("IndexNow submission skipped: API key not configured")
            return []
        if not urls:
            logger.warning("IndexNow submission skipped: no URLs provided")
            return []

        submission = self.build_submission(urls)
        payload = submission.model_dump(by_alias=True)
        logger.info("Submitting %d URLs to IndexNow: %s", len(submission.url_list), submission.url_list)

        async with httpx.AsyncClient(
            transport=self._transport,
            timeout=REQUEST_TIMEOUT,
            headers={"User-Agent": USER_AGENT},
        ) as client:
            results = await asyncio.gather(
                *(self._submit_to(client, endpoint, payload) for endpoint in ENDPOINTS)
            )

        successful = sum(1 for r in results if r.success)
        logger.info("IndexNow submission complete: %d/%d engines successful", successful, len(results))
        return list(results)

    async def _submit_to(
        self, client: httpx.AsyncClient, endpoint: str, payload: dict
    ) -> IndexNowResult:
        engine = engine_name(endpoint)
        try:
            response = await client.post(endpoint, json=payload)
        except httpx.HTTPError as e:
            logger.warning("Error submitting to %s: %s", engine, str(e))
            return IndexNowResult(success=False, engine=engine, error=str(e) or type(e).__name__)

        if response.is_success:
            logger.info("Submitted to %s (%d)", engine, response.status_code)
            return IndexNowResult(success=True, engine=engine, status_code=response.status_code)

        logger.warning("%s returned status %d", engine, response.status_code)
        return IndexNowResult(
            success=False,
            engine=engine,
            status_code=response.status_code,
            error=f"HTTP {response.status_code}",
        )


# ── Singleton Instance ────────────────────────────────────────────────────
indexnow_service = IndexNowService()
