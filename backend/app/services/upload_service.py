"""
ButtonUp Backend — Upload Service
===================================

What:  Batch uploads into the storage bucket, from multipart files or remote URLs.
Why:   The admin file manager drops several files at once, or pastes links to
       files hosted elsewhere. Each item succeeds or fails on its own.
How:   Names each object `<epoch-ms>-<original name>` so uploads never collide
       with earlier ones (the gateway uploads with upsert disabled), enforces the
       size cap, and delegates storage to the injected StorageGateway.
Who:   Called by POST /api/files/upload and POST /api/files/upload-url.

Per-item error handling:
    Expected failures (bad URL, remote 404, too large, storage rejection) become
    an UploadResult with `error` set. Anything else propagates and the whole
    request fails with 500.
"""

import logging
import time
from dataclasses import dataclass
from typing import Any, List, Optional, Sequence
from urllib.parse import urlparse

import httpx

from app.config import settings
from app.exceptions import ButtonUpError, ClientInputError
from app.schemas.files import UploadResult
from app.services.storage_base import StorageGateway

logger = logging.getLogger(__name__)

# What: Extension appended to URL-imported files whose name has none
MIME_EXTENSIONS = {
    "image/jpeg": ".jpg",
    "image/jpg": ".jpg",
    "image/png": ".png",
    "image/gif": ".gif",
    "image/webp": ".webp",
    "image/svg+xml": ".svg",
    "application/pdf": ".pdf",
    "text/plain": ".txt",
    "text/html": ".html",
    "application/json": ".json",
    "application/xml": ".xml",
    "video/mp4": ".mp4",
    "video/mpeg": ".mpeg",
    "video/quicktime": ".mov",
    "audio/mpeg": ".mp3",
    "audio/wav": ".wav",
    "application/zip": ".zip",
    "application/x-rar-compressed": ".rar",
    "application/msword": ".doc",
    "application/vnd.openxmlformats-officedocument.wordprocessingml.document": ".docx",
    "application/vnd.ms-excel": ".xls",
    "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet": ".xlsx",
}

DEFAULT_CONTENT_TYPE = "application/octet-stream"

# Some hosts refuse requests without a browser-like agent
FETCH_USER_AGENT = (
    "Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36 "
    "(KHTML, like Gecko) Chrome/91.0.4472.124 Safari/537.36"
)
FETCH_TIMEOUT = 30.0


@dataclass
class IncomingFile:
    """One multipart part, already read into memory."""
    filename: str
    content: bytes
    content_type: Optional[str] = None


def extension_for(content_type: Optional[str]) -> Optional[str]:
    if not content_type:
        return None
    mime = content_type.split(";")[0].strip().lower()
    return MIME_EXTENSIONS.get(mime)


def unique_name(filename: str, now_ms: Optional[int] = None) -> str:
    """Prefix with the current epoch milliseconds, e.g. 1717171717171-report.pdf."""
    stamp = now_ms if now_ms is not None else int(time.time() * 1000)
    return f"{stamp}-{filename}"


def filename_from_url(url: str, content_type: Optional[str]) -> str:
    """
    Last path segment of the URL, or "download" when the path is empty.
    Adds an extension derived from the content type if the name has none.
    """
    name = urlparse(url).path.split("/")[-1] or "download"
    if "." not in name:
        ext = extension_for(content_type)
        if ext:
            name += ext
    return name


class UploadService:
    """
    Args:
        max_size:   Per-item byte limit (defaults to settings.max_upload_size)
        transport:  Optional httpx transport for URL fetches (tests use MockTransport)
    """

    def __init__(
        self,
        max_size: Optional[int] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self._max_size = max_size
        self._transport = transport

    @property
    def max_size(self) -> int:
        return self._max_size if self._max_size is not None else settings.max_upload_size

    def validate_size(self, size: Optional[int]) -> None:
        """
        Raises:
            ClientInputError when `size` exceeds the configured limit.
        """
        if size is not None and size > self.max_size:
            max_mb = self.max_size / (1024 * 1024)
            raise ClientInputError(
                message=f"File too large (max {max_mb:.0f}MB)",
                field="file",
                context={"size": size, "max_size": self.max_size},
            )

    async def upload_files(
        self, gateway: StorageGateway, files: Sequence[IncomingFile]
    ) -> List[UploadResult]:
        results: List[UploadResult] = []
        for incoming in files:
            if not incoming.filename:
                continue

            stored_name = unique_name(incoming.filename)
            content_type = incoming.content_type or DEFAULT_CONTENT_TYPE
            try:
                self.validate_size(len(incoming.content))
                stored = await gateway.upload_file(stored_name, incoming.content, content_type)
            except ButtonUpError as e:
                logger.warning("Upload failed for %s: %s", incoming.filename, e.message)
                results.append(UploadResult(original_name=incoming.filename, error=e.message))
                continue

            results.append(
                UploadResult(
                    original_name=incoming.filename,
                    file_name=stored_name,
                    size=len(incoming.content),
                    type=content_type,
                    path=stored["path"],
                    full_path=stored["fullPath"],
                    public_url=stored["publicUrl"],
                )
            )
        return results

    async def upload_from_urls(
        self, gateway: StorageGateway, urls: Sequence[Any]
    ) -> List[UploadResult]:
        """
        Import each URL in order. Items that are not strings, or not absolute
        http(s) URLs, are reported as "Invalid URL" without a request.
        """
        results: List[UploadResult] = []
        async with httpx.AsyncClient(
            transport=self._transport,
            timeout=FETCH_TIMEOUT,
            follow_redirects=True,
            headers={"User-Agent": FETCH_USER_AGENT},
        ) as client:
            for url in urls:
                results.append(await self._upload_one_url(client, gateway, url))
        return results

    async def _read_capped(self, response: httpx.Response) -> bytes:
        """Read a streamed body, stopping as soon as it passes max_size."""
        chunks: List[bytes] = []
        total = 0
        async for chunk in response.aiter_bytes():
            total += len(chunk)
            self.validate_size(total)
            chunks.append(chunk)
        return b"".join(chunks)

    async def _upload_one_url(
        self,
        client: httpx.AsyncClient,
        gateway: StorageGateway,
        url: Any,
    ) -> UploadResult:
        if not isinstance(url, str):
            return UploadResult(url=url, error="Invalid URL")
        try:
            parsed = urlparse(url)
        except ValueError:
            # e.g. an unterminated IPv6 host: "http://[oops/a.png"
            return UploadResult(url=url, error="Invalid URL")
        if parsed.scheme not in ("http", "https") or not parsed.netloc:
            return UploadResult(url=url, error="Invalid URL")

        try:
            async with client.stream("GET", url) as response:
                if not response.is_success:
                    return UploadResult(
                        url=url,
                        error=f"HTTP {response.status_code}: {response.reason_phrase}",
                    )

                declared = response.headers.get("content-length")
                if declared and declared.isdigit():
                    self.validate_size(int(declared))
                content = await self._read_capped(response)
                content_type = response.headers.get("content-type") or DEFAULT_CONTENT_TYPE

            original_name = filename_from_url(url, content_type)
            stored_name = unique_name(original_name)
            stored = await gateway.upload_file(stored_name, content, content_type)

        except httpx.InvalidURL as e:
            logger.warning("Rejected URL %s: %s", url, str(e))
            return UploadResult(url=url, error="Invalid URL")
        except httpx.HTTPError as e:
            logger.warning("Fetching %s failed: %s", url, str(e))
            return UploadResult(url=url, error=str(e) or "Upload failed")
        except ButtonUpError as e:
            logger.warning("URL upload failed for %s: %s", url, e.message)
            return UploadResult(url=url, error=e.message)

        return UploadResult(
            url=url,
            original_name=original_name,
            file_name=stored_name,
            size=len(content),
            type=content_type,
            path=stored["path"],
            full_path=stored["fullPath"],
            public_url=stored["publicUrl"],
        )


# ── Singleton Instance ────────────────────────────────────────────────────
upload_service = UploadService()
