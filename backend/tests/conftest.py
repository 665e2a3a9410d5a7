"""
ButtonUp Backend — Test Configuration (conftest.py)
=====================================================

What:  Shared pytest fixtures for the entire test suite.
Why:   Tests never touch Supabase, Notion, or search engines. Gateways are
       replaced with in-memory fakes via FastAPI dependency overrides.

Fixture Hierarchy:
    ├── storage_gateway:  FakeStorageGateway (dict-backed bucket)
    ├── content_gateway:  FakeContentGateway (fixed tag list)
    └── test_client:      HTTPX AsyncClient wired to the app with both fakes
"""

import os

# Override settings for testing BEFORE any app imports
os.environ["SUPABASE_URL"] = ""
os.environ["SUPABASE_SERVICE_ROLE_KEY"] = ""
os.environ["NOTION_API_KEY"] = ""
os.environ["NOTION_DATABASE_ID"] = ""
os.environ["INDEXNOW_API_KEY"] = ""
os.environ["INDEXNOW_API_SECRET"] = ""
os.environ["LOG_LEVEL"] = "WARNING"

from typing import Any, Dict, List, Optional

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient

from app.dependencies import get_content_gateway, get_storage_gateway
from app.exceptions import ContentError, StorageError, StorageObjectNotFoundError
from app.services.content_base import ContentGateway
from app.services.storage_base import StorageGateway


class FakeStorageGateway(StorageGateway):
    """
    In-memory bucket.

    Set `error` to make every remote operation raise StorageError with that message.
    """

    BASE_URL = "https://cdn.test/files"

    def __init__(self, files: Optional[List[Dict[str, Any]]] = None):
        self.files: Dict[str, Dict[str, Any]] = {f["name"]: f for f in files or []}
        self.error: Optional[str] = None
        self.deleted: List[str] = []

    def _maybe_fail(self) -> None:
        if self.error:
            raise StorageError(message=self.error)

    async def list_files(self) -> List[Dict[str, Any]]:
        self._maybe_fail()
        return list(self.files.values())

    def get_file_url(self, name: str) -> str:
        return f"{self.BASE_URL}/{name}"

    async def delete_file(self, name: str) -> None:
        self._maybe_fail()
        if name not in self.files:
            raise StorageObjectNotFoundError(name)
        del self.files[name]
        self.deleted.append(name)

    async def upload_file(self, name: str, content: bytes, content_type: str) -> Dict[str, str]:
        self._maybe_fail()
        if name in self.files:
            raise StorageError(message="The resource already exists")
        self.files[name] = {"name": name, "size": len(content), "content_type": content_type}
        return {
            "path": name,
            "fullPath": f"files/{name}",
            "publicUrl": self.get_file_url(name),
        }


class FakeContentGateway(ContentGateway):

    def __init__(self, tags: Optional[List[str]] = None):
        self.tags = tags or []
        self.error: Optional[str] = None

    async def get_all_tags(self) -> List[str]:
        if self.error:
            raise ContentError(message="Failed to fetch tags", details=self.error)
        return list(self.tags)


@pytest.fixture
def storage_gateway():
    return FakeStorageGateway(
        files=[
            {"name": "1717000000000-cover.png", "id": "a1", "created_at": "2024-05-29T10:00:00Z"},
            {"name": "1716000000000-notes.pdf", "id": "b2", "created_at": "2024-05-18T08:00:00Z"},
        ]
    )


@pytest.fixture
def content_gateway():
    return FakeContentGateway(tags=["python", "fastapi", "notion"])


@pytest_asyncio.fixture
async def test_client(storage_gateway, content_gateway):
    """
    Async HTTP client talking to the app through ASGITransport.

    Usage:
        async def test_health(test_client):
            response = await test_client.get("/health")
            assert response.status_code == 200
    """
    from app.main import app

    app.dependency_overrides[get_storage_gateway] = lambda: storage_gateway
    app.dependency_overrides[get_content_gateway] = lambda: content_gateway
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client
    app.dependency_overrides.clear()
