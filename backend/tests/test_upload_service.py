"""
ButtonUp Backend — Upload Service Unit Tests
==============================================

What:  Naming helpers, size validation and per-item batch results.
How:   Storage is the FakeStorageGateway from conftest; remote fetches go
       through httpx.MockTransport.
"""

import httpx
import pytest

from app.exceptions import ClientInputError
from app.services.upload_service import (
    IncomingFile,
    UploadService,
    extension_for,
    filename_from_url,
    unique_name,
)


class TestNaming:

    def test_unique_name_prefixes_epoch_ms(self):
        assert unique_name("report.pdf", now_ms=1717171717171) == "1717171717171-report.pdf"

    def test_unique_name_uses_clock(self):
        stamp, rest = unique_name("a.txt").split("-", 1)
        assert rest == "a.txt"
        assert stamp.isdigit() and len(stamp) >= 13

    def test_extension_ignores_parameters(self):
        assert extension_for("text/plain; charset=utf-8") == ".txt"
        assert extension_for("IMAGE/PNG") == ".png"
        assert extension_for("application/x-unknown") is None
        assert extension_for(None) is None

    def test_filename_from_url(self):
        assert filename_from_url("https://cdn.example.com/img/photo.jpg", "image/jpeg") == "photo.jpg"
        assert filename_from_url("https://cdn.example.com/img/photo", "image/png") == "photo.png"
        assert filename_from_url("https://cdn.example.com/", "application/pdf") == "download.pdf"
        assert filename_from_url("https://cdn.example.com/blob", "application/x-unknown") == "blob"


class TestValidateSize:

    def test_within_limit(self):
        UploadService(max_size=10).validate_size(10)

    def test_over_limit(self):
        with pytest.raises(ClientInputError) as exc_info:
            UploadService(max_size=52_428_800).validate_size(52_428_801)
        assert exc_info.value.message == "File too large (max 50MB)"


class TestUploadFiles:

    @pytest.mark.asyncio
    async def test_each_file_gets_its_own_result(self, storage_gateway):
        service = UploadService(max_size=5)
        files = [
            IncomingFile(filename="ok.txt", content=b"hi", content_type="text/plain"),
            IncomingFile(filename="big.bin", content=b"123456"),
            IncomingFile(filename="", content=b"skipped"),
        ]

        results = await service.upload_files(storage_gateway, files)

        assert len(results) == 2
        ok, big = results
        assert ok.error is None
        assert ok.file_name.endswith("-ok.txt")
        assert ok.public_url == f"{storage_gateway.BASE_URL}/{ok.file_name}"
        assert big.original_name == "big.bin"
        assert big.error.startswith("File too large")

    @pytest.mark.asyncio
    async def test_missing_content_type_defaults_to_octet_stream(self, storage_gateway):
        results = await UploadService().upload_files(
            storage_gateway, [IncomingFile(filename="raw", content=b"x")]
        )
        assert results[0].type == "application/octet-stream"


class TestUploadFromUrls:

    @pytest.mark.asyncio
    async def test_mixed_batch(self, storage_gateway):
        def handler(request):
            if request.url.path == "/missing.png":
                return httpx.Response(404)
            if request.url.host == "down.example.com":
                raise httpx.ConnectError("connection refused", request=request)
            return httpx.Response(200, content=b"PNGDATA", headers={"content-type": "image/png"})

        service = UploadService(transport=httpx.MockTransport(handler))
        results = await service.upload_from_urls(
            storage_gateway,
            [
                "https://cdn.example.com/pic",
                "https://cdn.example.com/missing.png",
                "ftp://cdn.example.com/a.png",
                "https://down.example.com/a.png",
                None,
            ],
        )

        pic, missing, ftp, down, empty = results
        assert pic.error is None
        assert pic.original_name == "pic.png"
        assert pic.size == 7
        assert pic.type == "image/png"
        assert missing.error == "HTTP 404: Not Found"
        assert ftp.error == "Invalid URL"
        assert "connection refused" in down.error
        assert empty.error == "Invalid URL"

    @pytest.mark.asyncio
    async def test_declared_length_over_limit_is_rejected(self, storage_gateway):
        def handler(request):
            return httpx.Response(200, content=b"0123456789")

        service = UploadService(max_size=4, transport=httpx.MockTransport(handler))
        [result] = await service.upload_from_urls(storage_gateway, ["https://cdn.example.com/a.bin"])

        assert result.error.startswith("File too large")
        assert storage_gateway.files.keys() == {"1717000000000-cover.png", "1716000000000-notes.pdf"}

    @pytest.mark.asyncio
    async def test_streamed_body_stops_at_limit(self, storage_gateway):
        yielded = []

        async def chunks():
            for i in range(1000):
                yielded.append(i)
                yield b"x" * 1024

        def handler(request):
            # No content-length: the body is sent chunked
            return httpx.Response(200, content=chunks())

        service = UploadService(max_size=4096, transport=httpx.MockTransport(handler))
        [result] = await service.upload_from_urls(storage_gateway, ["https://cdn.example.com/big.bin"])

        assert result.error.startswith("File too large")
        assert len(yielded) < 10
        assert len(storage_gateway.files) == 2

    @pytest.mark.asyncio
    async def test_streamed_body_within_limit_is_stored(self, storage_gateway):
        async def chunks():
            for _ in range(3):
                yield b"abcd"

        def handler(request):
            return httpx.Response(200, content=chunks(), headers={"content-type": "text/plain"})

        service = UploadService(max_size=4096, transport=httpx.MockTransport(handler))
        [result] = await service.upload_from_urls(storage_gateway, ["https://cdn.example.com/notes"])

        assert result.error is None
        assert result.size == 12
        assert result.original_name == "notes.txt"

    @pytest.mark.asyncio
    async def test_malformed_url_never_reaches_transport(self, storage_gateway):
        def handler(request):
            raise AssertionError("no request expected")

        service = UploadService(transport=httpx.MockTransport(handler))
        results = await service.upload_from_urls(
            storage_gateway, ["http://[oops/a.png", 42, "mailto:someone@example.com"]
        )
        assert [(r.url, r.error) for r in results] == [
            ("http://[oops/a.png", "Invalid URL"),
            (42, "Invalid URL"),
            ("mailto:someone@example.com", "Invalid URL"),
        ]
