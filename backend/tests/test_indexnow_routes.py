"""
ButtonUp Backend — IndexNow Route Tests
=========================================

What:  Key verification, status, and submission endpoints.
How:   Settings are patched per test with monkeypatch; submissions go through
       an IndexNowService whose httpx transport is mocked.
"""

import httpx
import pytest

from app.config import settings
from app.dependencies import get_indexnow_service
from app.services.indexnow_service import ENDPOINTS, IndexNowService

KEY = "f3a9c2d8e1b74b5a9d6c0e2f4a8b1c7d"


@pytest.fixture
def configured_key(monkeypatch):
    monkeypatch.setattr(settings, "indexnow_api_key", KEY)
    return KEY


class TestKeyVerification:

    @pytest.mark.asyncio
    async def test_matching_key_returns_key_as_text(self, test_client, configured_key):
        response = await test_client.get(f"/api/indexnow/{configured_key}")
        assert response.status_code == 200
        assert response.text == configured_key
        assert response.headers["content-type"].startswith("text/plain")
        assert response.headers["Cache-Control"] == "public, max-age=86400"

    @pytest.mark.asyncio
    async def test_wrong_key_is_404(self, test_client, configured_key):
        response = await test_client.get("/api/indexnow/not-the-key")
        assert response.status_code == 404
        assert response.json()["error"] == "Invalid key"

    @pytest.mark.asyncio
    async def test_key_comparison_is_case_sensitive(self, test_client, configured_key):
        response = await test_client.get(f"/api/indexnow/{configured_key.upper()}")
        assert response.status_code == 404

    @pytest.mark.asyncio
    async def test_unconfigured_key_is_500_for_any_key(self, test_client):
        for key in ("anything", KEY):
            response = await test_client.get(f"/api/indexnow/{key}")
            assert response.status_code == 500
            assert response.json()["error"] == "IndexNow API key not configured"


class TestIndexNowInfo:

    @pytest.mark.asyncio
    async def test_status(self, test_client, configured_key):
        body = (await test_client.get("/api/indexnow", params={"action": "status"})).json()
        assert body["configured"] is True
        assert body["keyFileUrl"] == f"https://buttonup.cloud/{KEY}.txt"
        assert body["endpoints"] == ENDPOINTS

    @pytest.mark.asyncio
    async def test_key_action(self, test_client, configured_key):
        response = await test_client.get("/api/indexnow", params={"action": "key"})
        assert response.status_code == 200
        assert response.text == KEY

    @pytest.mark.asyncio
    async def test_key_action_unconfigured(self, test_client):
        response = await test_client.get("/api/indexnow", params={"action": "key"})
        assert response.status_code == 500

    @pytest.mark.asyncio
    async def test_usage(self, test_client):
        body = (await test_client.get("/api/indexnow")).json()
        assert body["message"] == "IndexNow API endpoint"
        assert "POST" in body["usage"]


class TestSubmit:

    @pytest.fixture
    def submitted(self, test_client, configured_key):
        """Captures every payload posted to the (mocked) search engines."""
        payloads = []

        def handler(request: httpx.Request) -> httpx.Response:
            payloads.append(request)
            if "yandex" in request.url.host:
                return httpx.Response(422)
            return httpx.Response(200)

        from app.main import app
        service = IndexNowService(transport=httpx.MockTransport(handler))
        app.dependency_overrides[get_indexnow_service] = lambda: service
        return payloads

    @pytest.mark.asyncio
    async def test_submit_urls(self, test_client, submitted):
        response = await test_client.post(
            "/api/indexnow", json={"urls": ["/content/hello-world", "https://buttonup.cloud/news"]}
        )
        assert response.status_code == 200

        body = response.json()
        assert body["success"] is True
        assert body["stats"] == {"submitted": 2, "engines": 5, "successful": 4, "failed": 1}
        failed = [r for r in body["results"] if not r["success"]]
        assert failed == [{"success": False, "engine": "Yandex", "statusCode": 422, "error": "HTTP 422"}]
        assert len(submitted) == 5

    @pytest.mark.asyncio
    async def test_submit_preset_type(self, test_client, submitted):
        response = await test_client.post("/api/indexnow", json={"type": "content"})
        assert response.json()["urls"] == ["https://buttonup.cloud/", "https://buttonup.cloud/archive"]

    @pytest.mark.asyncio
    async def test_submit_invalid_type(self, test_client, submitted):
        response = await test_client.post("/api/indexnow", json={"type": "everything"})
        assert response.status_code == 400
        assert "Invalid type" in response.json()["error"]
        assert submitted == []

    @pytest.mark.asyncio
    async def test_submit_without_parameters(self, test_client, submitted):
        response = await test_client.post("/api/indexnow", json={})
        assert response.status_code == 400

    @pytest.mark.asyncio
    async def test_submit_empty_url_list(self, test_client, submitted):
        response = await test_client.post("/api/indexnow", json={"urls": []})
        assert response.status_code == 400
        assert response.json()["error"] == "No URLs to submit"

    @pytest.mark.asyncio
    async def test_submit_requires_bearer_when_secret_set(self, test_client, submitted, monkeypatch):
        monkeypatch.setattr(settings, "indexnow_api_secret", "s3cret")

        response = await test_client.post("/api/indexnow", json={"url": "/"})
        assert response.status_code == 401

        response = await test_client.post(
            "/api/indexnow", json={"url": "/"}, headers={"Authorization": "Bearer s3cret"}
        )
        assert response.status_code == 200

    @pytest.mark.asyncio
    async def test_submit_unconfigured(self, test_client):
        response = await test_client.post("/api/indexnow", json={"url": "/"})
        assert response.status_code == 500
        body = response.json()
        assert body["error"] == "IndexNow not configured"
        assert "INDEXNOW_API_KEY" in body["details"]
