"""Tests for mcupload.core.client."""

from __future__ import annotations

import httpx
import pytest

from mcupload.core.client import ResumableUploadClient
from mcupload.core.config import UploaderOptions
from mcupload.core.exceptions import (
    ChunkUploadError,
    ConfigurationError,
    FinalizeError,
    InvalidURLError,
    ProtocolError,
    StatusCheckError,
    TransportError,
)


def _client(handler, **kwargs) -> ResumableUploadClient:
    kwargs.setdefault("api_key", "secret")
    return ResumableUploadClient(
        base_url="http://mc.test",
        transport=httpx.MockTransport(handler),
        **kwargs,
    )


class TestClientSetup:
    def test_normalizes_base_url(self):
        client = ResumableUploadClient(base_url="http://mc.test/api/", api_key="k")
        assert client.base_url == "http://mc.test/api"

    def test_rejects_bad_url(self):
        with pytest.raises(InvalidURLError):
            ResumableUploadClient(base_url="mc.test", api_key="k")

    def test_from_options(self):
        options = UploaderOptions(api_key="k", server_url="https://mc.example.org", timeout=5)
        client = ResumableUploadClient.from_options(options)

        assert client.base_url == "https://mc.example.org"
        assert client.api_key == "k"
        assert client.timeout == 5

    @pytest.mark.asyncio
    async def test_requires_api_key(self, server, make_request):
        client = _client(server.handle, api_key=None)

        with pytest.raises(ConfigurationError):
            await client.upload_chunk(make_request(10), b"x", 0, 1)
        assert server.request_count == 0


class TestUploadChunk:
    @pytest.mark.asyncio
    async def test_sends_params_header_and_body(self, server, make_request):
        request = make_request(10)
        async with _client(server.handle) as client:
            result = await client.upload_chunk(request, b"hello", 2, 5)

        [sent] = server.uploads
        assert sent["project_id"] == "42"
        assert sent["destination_path"] == "/raw/data.bin"
        assert sent["chunk_index"] == 2
        assert sent["total_chunks"] == 5
        assert sent["body"] == b"hello"
        assert sent["apikey"] == "secret"
        assert result.file_id == "100"
        assert result.file_uuid == "uuid-100"
        assert result.bytes_written == 5

    @pytest.mark.asyncio
    async def test_non_success_status_raises_chunk_error(self, make_request):
        def handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(500, json={"error": "disk full"})

        async with _client(handler) as client:
            with pytest.raises(ChunkUploadError) as excinfo:
                await client.upload_chunk(make_request(10), b"x", 3, 4)

        assert excinfo.value.status_code == 500
        assert excinfo.value.chunk_index == 3
        assert "500" in str(excinfo.value)

    @pytest.mark.asyncio
    async def test_connection_failure_raises_transport_error(self, make_request):
        def handler(request: httpx.Request) -> httpx.Response:
            raise httpx.ConnectError("refused", request=request)

        async with _client(handler) as client:
            with pytest.raises(TransportError):
                await client.upload_chunk(make_request(10), b"x", 0, 1)

    @pytest.mark.asyncio
    async def test_timeout_raises_transport_error(self, make_request):
        def handler(request: httpx.Request) -> httpx.Response:
            raise httpx.ReadTimeout("slow", request=request)

        async with _client(handler) as client:
            with pytest.raises(TransportError, match="Timeout"):
                await client.upload_chunk(make_request(10), b"x", 0, 1)

    @pytest.mark.asyncio
    async def test_non_json_body_raises_protocol_error(self, make_request):
        def handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(200, text="<html>ok</html>")

        async with _client(handler) as client:
            with pytest.raises(ProtocolError):
                await client.upload_chunk(make_request(10), b"x", 0, 1)

    @pytest.mark.asyncio
    async def test_does_not_retry(self, make_request):
        calls = []

        def handler(request: httpx.Request) -> httpx.Response:
            calls.append(request)
            return httpx.Response(503)

        async with _client(handler) as client:
            with pytest.raises(ChunkUploadError):
                await client.upload_chunk(make_request(10), b"x", 0, 1)

        assert len(calls) == 1


class TestFinalizeAndStatus:
    @pytest.mark.asyncio
    async def test_finalize_returns_server_metadata(self, server):
        async with _client(server.handle) as client:
            result = await client.finalize("100", 10)

        assert server.finalizes == [{"file_id": "100", "total_chunks": 10, "apikey": "secret"}]
        assert result["finalized"] is True
        assert result["chunks"] == 10

    @pytest.mark.asyncio
    async def test_finalize_failure(self, make_server):
        server = make_server(finalize_status=400)

        async with _client(server.handle) as client:
            with pytest.raises(FinalizeError) as excinfo:
                await client.finalize("100", 10)

        assert excinfo.value.status_code == 400
        assert excinfo.value.file_id == "100"

    @pytest.mark.asyncio
    async def test_get_status(self, server):
        async with _client(server.handle) as client:
            status = await client.get_status("100")

        assert server.status_checks == ["100"]
        assert status.file_id == "100"
        assert status.exists is True
        assert status.file_size == 2048

    @pytest.mark.asyncio
    async def test_get_status_failure(self):
        def handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(404, json={"error": "File not found"})

        async with _client(handler) as client:
            with pytest.raises(StatusCheckError) as excinfo:
                await client.get_status("9")

        assert excinfo.value.status_code == 404
