"""Pytest configuration and fixtures for mcupload tests."""

from __future__ import annotations

import asyncio
import tempfile
from collections.abc import Generator
from pathlib import Path
from typing import Any

import httpx
import pytest

from mcupload.core.client import ResumableUploadClient
from mcupload.core.config import UploaderOptions
from mcupload.models.upload import FileUploadRequest

MIB = 1024 * 1024
SERVER_URL = "http://mc.test"
API_KEY = "test-key"


class FakeServer:
    """In-memory stand-in for the resumable upload endpoints.

    Used as an ``httpx.MockTransport`` handler. Each destination path gets its
    own server file ID.
    """

    def __init__(
        self,
        *,
        fail_chunks: dict[tuple[str, int], int] | None = None,
        finalize_status: int = 200,
        delays: dict[int, float] | None = None,
        ids_only_on_first_chunk: bool = False,
    ) -> None:
        self.fail_chunks = fail_chunks or {}
        self.finalize_status = finalize_status
        self.delays = delays or {}
        self.ids_only_on_first_chunk = ids_only_on_first_chunk
        self.uploads: list[dict[str, Any]] = []
        self.finalizes: list[dict[str, Any]] = []
        self.status_checks: list[str] = []
        self.log: list[tuple[str, Any]] = []
        self._ids: dict[str, int] = {}

    @property
    def request_count(self) -> int:
        return len(self.uploads) + len(self.finalizes) + len(self.status_checks)

    def file_id_for(self, destination: str) -> int:
        return self._ids.setdefault(destination, 100 + len(self._ids))

    def transport(self) -> httpx.MockTransport:
        return httpx.MockTransport(self.handle)

    def chunk_bodies(self, destination: str) -> list[bytes]:
        uploads = [u for u in self.uploads if u["destination_path"] == destination]
        return [u["body"] for u in sorted(uploads, key=lambda u: u["chunk_index"])]

    async def handle(self, request: httpx.Request) -> httpx.Response:
        params = request.url.params
        path = request.url.path

        if path == "/resumable-upload/upload":
            index = int(params["chunk_index"])
            destination = params["destination_path"]
            body = request.content
            self.uploads.append(
                {
                    "project_id": params["project_id"],
                    "destination_path": destination,
                    "chunk_index": index,
                    "total_chunks": int(params["total_chunks"]),
                    "body": body,
                    "apikey": request.headers.get("apikey"),
                }
            )
            self.log.append(("upload", index))
            if index in self.delays:
                await asyncio.sleep(self.delays[index])
            if (destination, index) in self.fail_chunks:
                return httpx.Response(
                    self.fail_chunks[(destination, index)], json={"error": "boom"}
                )
            file_id = self.file_id_for(destination)
            hide_ids = self.ids_only_on_first_chunk and index != 0
            return httpx.Response(
                200,
                json={
                    "file_id": None if hide_ids else file_id,
                    "file_uuid": None if hide_ids else f"uuid-{file_id}",
                    "chunk_index": index,
                    "total_chunks": int(params["total_chunks"]),
                    "bytes_written": len(body),
                },
            )

        if path == "/resumable-upload/finalize":
            self.finalizes.append(
                {
                    "file_id": params["file_id"],
                    "total_chunks": int(params["total_chunks"]),
                    "apikey": request.headers.get("apikey"),
                }
            )
            self.log.append(("finalize", params["file_id"]))
            if self.finalize_status >= 400:
                return httpx.Response(self.finalize_status, json={"error": "finalize failed"})
            return httpx.Response(
                200,
                json={
                    "file_id": int(params["file_id"]),
                    "file_uuid": f"uuid-{params['file_id']}",
                    "chunks": int(params["total_chunks"]),
                    "finalized": True,
                },
            )

        if path == "/resumable-upload/status":
            self.status_checks.append(params["file_id"])
            return httpx.Response(
                200,
                json={
                    "file_id": int(params["file_id"]),
                    "file_uuid": f"uuid-{params['file_id']}",
                    "file_size": 2048,
                    "exists": True,
                    "has_chunks": False,
                    "chunk_count": 0,
                },
            )

        return httpx.Response(404, json={"error": "not found"})


@pytest.fixture
def temp_dir() -> Generator[Path, None, None]:
    """Create a temporary directory for tests."""
    with tempfile.TemporaryDirectory() as tmpdir:
        yield Path(tmpdir)


@pytest.fixture
def server() -> FakeServer:
    return FakeServer()


@pytest.fixture
def make_server():
    return FakeServer


@pytest.fixture
def options() -> UploaderOptions:
    return UploaderOptions(api_key=API_KEY, server_url=SERVER_URL, chunk_size=MIB)


@pytest.fixture
def make_client():
    """Build a client that talks to a FakeServer."""

    def _make(fake: FakeServer, **kwargs: Any) -> ResumableUploadClient:
        kwargs.setdefault("api_key", API_KEY)
        return ResumableUploadClient(base_url=SERVER_URL, transport=fake.transport(), **kwargs)

    return _make


def make_request(
    size: int,
    *,
    file_id: str = "f1",
    project_id: str | None = "42",
    destination_path: str | None = "/raw/data.bin",
) -> FileUploadRequest:
    """Build an in-memory request whose bytes encode their own position."""
    data = (bytes(range(251)) * (size // 251 + 1))[:size]
    return FileUploadRequest.from_bytes(
        file_id,
        data,
        name=destination_path.rsplit("/", 1)[-1] if destination_path else file_id,
        project_id=project_id,
        destination_path=destination_path,
    )


@pytest.fixture(name="make_request")
def make_request_fixture():
    return make_request
