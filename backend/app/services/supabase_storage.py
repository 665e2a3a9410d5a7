"""
ButtonUp Backend — Supabase Storage Gateway
=============================================

What:  StorageGateway implementation backed by a Supabase Storage bucket.
Why:   Supabase hosts the site's downloadable files; this is the only module
       that knows its SDK.
How:   Uses the supabase-py client with the service-role key. The SDK is
       synchronous, so each call runs in Starlette's threadpool to keep the
       event loop free.
Who:   Injected into the /api/files routes via app.dependencies.

Lazy client:
    create_client() rejects an empty URL or key, so the client is built on
    first use. The app starts without Supabase credentials and only the file
    endpoints answer 500 until they are configured.
"""

import logging
from typing import Any, Dict, List, Optional
from urllib.parse import quote

from starlette.concurrency import run_in_threadpool
from supabase import Client, ClientOptions, create_client

from app.config import settings
from app.exceptions import StorageError, StorageObjectNotFoundError
from app.services.storage_base import StorageGateway

logger = logging.getLogger(__name__)

# What: Listing options sent with every list call
# Why 100: one page covers the admin file manager; listings are not paginated
LIST_OPTIONS = {
    "limit": 100,
    "offset": 0,
    "sortBy": {"column": "created_at", "order": "desc"},
}

# What: Cache header stored with uploaded objects (seconds)
UPLOAD_CACHE_CONTROL = "3600"


class SupabaseStorageGateway(StorageGateway):
    """
    Supabase Storage adapter.

    Args:
        url:     Supabase project URL (defaults to settings.supabase_url)
        key:     Service-role key (defaults to settings.supabase_service_role_key)
        bucket:  Bucket name (defaults to settings.supabase_bucket)
        client:  Pre-built client, used by tests to inject a mock
    """

    def __init__(
        self,
        url: Optional[str] = None,
        key: Optional[str] = None,
        bucket: Optional[str] = None,
        client: Optional[Client] = None,
    ):
        self.url = (url if url is not None else settings.supabase_url).rstrip("/")
        self.key = key if key is not None else settings.supabase_service_role_key
        self.bucket = bucket or settings.supabase_bucket
        self._client = client

    @property
    def configured(self) -> bool:
        return self._client is not None or bool(self.url and self.key)

    def _get_client(self) -> Client:
        if self._client is None:
            if not self.configured:
                raise StorageError(message="Supabase is not configured")
            # Server-side client: no session to persist or refresh
            self._client = create_client(
                self.url,
                self.key,
                options=ClientOptions(auto_refresh_token=False, persist_session=False),
            )
            logger.info("Supabase client created for bucket '%s'", self.bucket)
        return self._client

    def _bucket(self):
        return self._get_client().storage.from_(self.bucket)

    async def list_files(self) -> List[Dict[str, Any]]:
        bucket = self._bucket()
        try:
            entries = await run_in_threadpool(bucket.list, "", LIST_OPTIONS)
        except Exception as e:
            logger.error("Failed to list files in bucket '%s': %s", self.bucket, str(e))
            raise StorageError.from_exception(
                e, "Failed to list files", context={"bucket": self.bucket}
            )

        # Entries without a name cannot be addressed or deleted; drop them
        files = [entry for entry in entries or [] if entry.get("name")]
        logger.debug("Listed %d files in bucket '%s'", len(files), self.bucket)
        return files

    def get_file_url(self, name: str) -> str:
        if not self.url:
            return ""
        return f"{self.url}/storage/v1/object/public/{self.bucket}/{quote(name, safe='/')}"

    async def delete_file(self, name: str) -> None:
        bucket = self._bucket()
        try:
            removed = await run_in_threadpool(bucket.remove, [name])
        except Exception as e:
            logger.error("Failed to delete '%s' from bucket '%s': %s", name, self.bucket, str(e))
            raise StorageError.from_exception(
                e, "Failed to delete file", context={"bucket": self.bucket, "file_name": name}
            )

        if not removed:
            raise StorageObjectNotFoundError(name)
        logger.info("Deleted '%s' from bucket '%s'", name, self.bucket)

    async def upload_file(
        self, name: str, content: bytes, content_type: str
    ) -> Dict[str, str]:
        bucket = self._bucket()
        file_options = {
            "cache-control": UPLOAD_CACHE_CONTROL,
            "upsert": "false",
            "content-type": content_type,
        }
        try:
            response = await run_in_threadpool(bucket.upload, name, content, file_options)
        except Exception as e:
            logger.error("Failed to upload '%s' to bucket '%s': %s", name, self.bucket, str(e))
            raise StorageError.from_exception(
                e, "Upload failed", context={"bucket": self.bucket, "file_name": name}
            )

        logger.info("Uploaded '%s' (%d bytes) to bucket '%s'", name, len(content), self.bucket)
        return {
            "path": response.path,
            "fullPath": response.full_path,
            "publicUrl": self.get_file_url(response.path),
        }


# ── Singleton Instance ────────────────────────────────────────────────────
# Holds only configuration and the lazily-created client
storage_gateway = SupabaseStorageGateway()
