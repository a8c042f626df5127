"""Async HTTP client for the resumable upload REST API.

Wraps the three endpoints used by the uploader: chunk upload, finalize and
status. Requests are never retried here; callers decide what a failure means.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any

import httpx

from mcupload.core.config import DEFAULT_TIMEOUT, UploaderOptions
from mcupload.core.exceptions import (
    ChunkUploadError,
    ConfigurationError,
    FinalizeError,
    ProtocolError,
    StatusCheckError,
    TransportError,
)
from mcupload.core.validation import validate_server_url
from mcupload.models.upload import ChunkUploadResult, FileUploadRequest, UploadStatus

logger = logging.getLogger(__name__)

# =============================================================================
# Constants
# =============================================================================

UPLOAD_PATH = "/resumable-upload/upload"
FINALIZE_PATH = "/resumable-upload/finalize"
STATUS_PATH = "/resumable-upload/status"
API_KEY_HEADER = "apikey"


# =============================================================================
# ResumableUploadClient
# =============================================================================


@dataclass
class ResumableUploadClient:
    """HTTP client for the resumable upload endpoints."""

    base_url: str
    api_key: str | None = None
    timeout: int = DEFAULT_TIMEOUT
    verify_ssl: bool = True
    transport: httpx.AsyncBaseTransport | None = field(default=None, repr=False)
    _client: httpx.AsyncClient | None = field(init=False, default=None, repr=False)

    def __post_init__(self) -> None:
        """Validate and normalize URL."""
        self.base_url = validate_server_url(self.base_url)

    @classmethod
    def from_options(
        cls,
        options: UploaderOptions,
        *,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> ResumableUploadClient:
        """Create a client from uploader options."""
        return cls(
            base_url=options.server_url,
            api_key=options.api_key,
            timeout=options.timeout,
            verify_ssl=options.verify_ssl,
            transport=transport,
        )

    # =========================================================================
    # Client Management
    # =========================================================================

    def _get_client(self) -> httpx.AsyncClient:
        """Get or create HTTP client."""
        if not self.api_key:
            raise ConfigurationError("API key is required", field="api_key")
        if self._client is None:
            # The client keeps a cookie jar, so session cookies set by the
            # server are sent back on later requests.
            self._client = httpx.AsyncClient(
                base_url=self.base_url,
                timeout=self.timeout,
                verify=self.verify_ssl,
                follow_redirects=True,
                headers={API_KEY_HEADER: self.api_key},
                transport=self.transport,
            )
        return self._client

    async def close(self) -> None:
        """Close the HTTP client."""
        if self._client is not None:
            await self._client.aclose()
            self._client = None

    async def __aenter__(self) -> ResumableUploadClient:
        return self

    async def __aexit__(self, *args: Any) -> None:
        await self.close()

    # =========================================================================
    # HTTP
    # =========================================================================

    async def _request(
        self,
        method: str,
        path: str,
        *,
        params: dict[str, Any] | None = None,
        content: bytes | None = None,
    ) -> httpx.Response:
        """Execute a single HTTP request.

        Raises:
            TransportError: If no response was received.
        """
        client = self._get_client()
        try:
            return await client.request(method, path, params=params, content=content)
        except httpx.TimeoutException as e:
            raise TransportError(self.base_url, f"Timeout after {self.timeout}s") from e
        except httpx.TransportError as e:
            raise TransportError(self.base_url, f"{type(e).__name__}: {e}") from e

    @staticmethod
    def _json(resp: httpx.Response, endpoint: str) -> dict[str, Any]:
        try:
            data = resp.json()
        except ValueError as e:
            raise ProtocolError(endpoint, "body is not JSON") from e
        if not isinstance(data, dict):
            raise ProtocolError(endpoint, f"expected an object, got {type(data).__name__}")
        return data

    # =========================================================================
    # Endpoints
    # =========================================================================

    async def upload_chunk(
        self,
        request: FileUploadRequest,
        chunk: bytes,
        chunk_index: int,
        total_chunks: int,
    ) -> ChunkUploadResult:
        """Upload one chunk of a file.

        Args:
            request: File the chunk belongs to.
            chunk: Raw chunk bytes, sent as the request body.
            chunk_index: 0-based position of the chunk.
            total_chunks: Number of chunks in the file.

        Returns:
            Identifiers assigned by the server.

        Raises:
            ChunkUploadError: If the server answers with a non-2xx status.
            TransportError: If no response was received.
        """
        params = {
            "project_id": request.project_id,
            "destination_path": request.destination_path,
            "chunk_index": chunk_index,
            "total_chunks": total_chunks,
        }
        logger.debug(
            "Uploading chunk %d/%d of %s (%d bytes)",
            chunk_index + 1,
            total_chunks,
            request.name or request.file_id,
            len(chunk),
        )
        resp = await self._request("POST", UPLOAD_PATH, params=params, content=chunk)
        if not resp.is_success:
            raise ChunkUploadError(resp.status_code, chunk_index)
        return ChunkUploadResult.model_validate(self._json(resp, UPLOAD_PATH))

    async def finalize(self, file_id: str | None, total_chunks: int) -> dict[str, Any]:
        """Ask the server to assemble all uploaded chunks.

        Returns:
            Metadata of the assembled file.

        Raises:
            FinalizeError: If the server answers with a non-2xx status.
            TransportError: If no response was received.
        """
        params = {"file_id": file_id, "total_chunks": total_chunks}
        resp = await self._request("POST", FINALIZE_PATH, params=params)
        if not resp.is_success:
            raise FinalizeError(resp.status_code, file_id)
        return self._json(resp, FINALIZE_PATH)

    async def get_status(self, file_id: str) -> UploadStatus:
        """Get the server-side status of an upload.

        Raises:
            StatusCheckError: If the server answers with a non-2xx status.
            TransportError: If no response was received.
        """
        resp = await self._request("GET", STATUS_PATH, params={"file_id": file_id})
        if not resp.is_success:
            raise StatusCheckError(resp.status_code, file_id)
        return UploadStatus.model_validate(self._json(resp, STATUS_PATH))
