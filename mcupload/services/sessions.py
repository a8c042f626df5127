"""Upload sessions: many files uploaded concurrently, each in isolation."""

from __future__ import annotations

import asyncio
import logging
import time
from collections.abc import AsyncIterator, Callable, Sequence
from contextlib import asynccontextmanager
from typing import Any, Optional, Protocol

import httpx

from mcupload.core.client import ResumableUploadClient
from mcupload.core.config import UploaderOptions
from mcupload.core.logging import get_audit_logger
from mcupload.models.progress import FileOutcome, SessionSummary, UploadProgress
from mcupload.models.upload import FileUploadRequest, UploadStatus
from mcupload.uploaders.coordinator import UploadCoordinator

logger = logging.getLogger(__name__)

# =============================================================================
# Host Interface
# =============================================================================

UPLOAD_STARTED = "upload-started"
UPLOAD_SUCCESS = "upload-success"
UPLOAD_ERROR = "upload-error"

UploaderFn = Callable[[Sequence[str]], Any]


class UploadHost(Protocol):
    """What the uploader needs from the application that owns the files."""

    def get_file(self, file_id: str) -> FileUploadRequest: ...

    def emit(self, event: str, file: FileUploadRequest, *args: Any) -> None: ...

    def set_progress(self, file_id: str, progress: UploadProgress) -> None: ...

    def register_uploader(self, fn: UploaderFn) -> None: ...

    def unregister_uploader(self, fn: UploaderFn) -> None: ...


# =============================================================================
# UploadSessionManager
# =============================================================================


class UploadSessionManager:
    """Runs one coordinator per file and reports each outcome to the host."""

    def __init__(
        self,
        host: UploadHost,
        options: UploaderOptions,
        *,
        client: Optional[ResumableUploadClient] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ) -> None:
        """Initialize the manager.

        Args:
            host: Source of files and sink for notifications.
            options: Uploader options.
            client: Shared client owned by the caller. When omitted, each
                session opens and closes its own client.
            transport: Optional httpx transport for self-managed clients.
        """
        self.host = host
        self.options = options
        self._client = client
        self._transport = transport
        self.audit = get_audit_logger()

    @asynccontextmanager
    async def _session_client(self) -> AsyncIterator[ResumableUploadClient]:
        if self._client is not None:
            yield self._client
            return
        async with ResumableUploadClient.from_options(
            self.options, transport=self._transport
        ) as client:
            yield client

    def _on_progress(self, request: FileUploadRequest, progress: UploadProgress) -> None:
        self.host.set_progress(request.file_id, progress)

    async def upload(self, file_ids: Sequence[str]) -> SessionSummary:
        """Upload every file concurrently.

        A failing file does not cancel the others; the call returns once every
        file has settled.

        Args:
            file_ids: Host file IDs to upload.

        Returns:
            SessionSummary with one outcome per file, in input order.

        Raises:
            ConfigurationError: If no API key is configured.
        """
        if not file_ids:
            return SessionSummary()

        self.options.require_api_key()
        start = time.time()

        async with self._session_client() as client:
            coordinator = UploadCoordinator(
                client,
                chunk_size=self.options.chunk_size,
                max_concurrent_chunks=self.options.max_concurrent_chunks,
                progress_callback=self._on_progress,
            )
            outcomes = await asyncio.gather(
                *(self._upload_one(coordinator, file_id) for file_id in file_ids)
            )

        summary = SessionSummary(outcomes=list(outcomes), duration=time.time() - start)
        if not summary.success:
            logger.warning("Upload session completed with %d failures", summary.failed)
        return summary

    async def _upload_one(self, coordinator: UploadCoordinator, file_id: str) -> FileOutcome:
        start = time.time()
        try:
            request = self.host.get_file(file_id)
        except Exception as e:
            logger.error("Could not resolve file %s: %s", file_id, e)
            return FileOutcome(file_id=file_id, success=False, error=e)

        self.host.emit(UPLOAD_STARTED, request)
        try:
            result = await coordinator.upload_file(request)
        except Exception as e:
            self.host.emit(UPLOAD_ERROR, request, e)
            self.audit.log_upload(
                request.name or file_id,
                project_id=request.project_id,
                destination_path=request.destination_path,
                success=False,
                details={"error": str(e)},
            )
            return FileOutcome(
                file_id=file_id,
                success=False,
                duration=time.time() - start,
                error=e,
            )

        self.host.emit(UPLOAD_SUCCESS, request, result)
        self.audit.log_upload(
            request.name or file_id,
            project_id=request.project_id,
            destination_path=request.destination_path,
            server_file_id=result.get("fileId"),
        )
        return FileOutcome(
            file_id=file_id,
            success=True,
            duration=time.time() - start,
            result=result,
        )

    def upload_sync(self, file_ids: Sequence[str]) -> SessionSummary:
        """Run `upload` to completion from synchronous code."""
        return asyncio.run(self.upload(file_ids))

    async def check_status(self, server_file_id: str) -> UploadStatus:
        """Get the server-side status of an upload."""
        self.options.require_api_key()
        async with self._session_client() as client:
            return await client.get_status(server_file_id)
