"""Chunked upload of a single file.

The coordinator splits a file, uploads every chunk concurrently, tracks
progress as chunk responses arrive and finalizes the upload once all chunks
have been accepted.

This is an internal implementation detail. Use `UploadSessionManager` from
`mcupload.services.sessions` as the public API.
"""

from __future__ import annotations

import asyncio
import logging
import threading
from collections.abc import Callable
from contextlib import AsyncExitStack
from typing import Any, Optional

from mcupload.core.client import UPLOAD_PATH, ResumableUploadClient
from mcupload.core.config import DEFAULT_CHUNK_SIZE
from mcupload.core.exceptions import ProtocolError
from mcupload.core.logging import LogContext
from mcupload.core.validation import (
    validate_chunk_size,
    validate_destination_path,
    validate_max_concurrent_chunks,
    validate_project_id,
)
from mcupload.models.progress import ProgressTracker, UploadProgress
from mcupload.models.upload import ChunkUploadResult, FileUploadRequest
from mcupload.uploaders.chunking import ChunkDescriptor, split_chunks

logger = logging.getLogger(__name__)

ProgressCallback = Callable[[FileUploadRequest, UploadProgress], None]


# =============================================================================
# Identifier Capture
# =============================================================================


class IdentifierCell:
    """First-writer-wins holder for the server's file identifiers.

    Only the response to chunk 0 is allowed to set the identifiers; once set
    they are never replaced, and missing values never clear them.
    """

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._set = False
        self.file_id: Optional[str] = None
        self.file_uuid: Optional[str] = None

    @property
    def is_set(self) -> bool:
        return self._set

    def offer(self, result: ChunkUploadResult) -> bool:
        """Store identifiers from a chunk response if none are stored yet.

        Returns:
            True if this call stored the identifiers.
        """
        with self._lock:
            if self._set or result.file_id is None:
                return False
            self.file_id = result.file_id
            self.file_uuid = result.file_uuid
            self._set = True
            return True


# =============================================================================
# UploadCoordinator
# =============================================================================


class UploadCoordinator:
    """Drives the chunk uploads and finalize call for one file."""

    def __init__(
        self,
        client: ResumableUploadClient,
        *,
        chunk_size: int = DEFAULT_CHUNK_SIZE,
        max_concurrent_chunks: Optional[int] = None,
        progress_callback: Optional[ProgressCallback] = None,
    ) -> None:
        """Initialize the coordinator.

        Args:
            client: Client used for every request.
            chunk_size: Bytes per chunk.
            max_concurrent_chunks: Upper bound on in-flight chunk requests;
                None uploads every chunk at once.
            progress_callback: Called with a snapshot after every change.
        """
        self.client = client
        self.chunk_size = validate_chunk_size(chunk_size)
        self.max_concurrent_chunks = validate_max_concurrent_chunks(max_concurrent_chunks)
        self.progress_callback = progress_callback

    def _report(self, request: FileUploadRequest, progress: UploadProgress) -> None:
        if self.progress_callback:
            self.progress_callback(request, progress)

    async def upload_file(self, request: FileUploadRequest) -> dict[str, Any]:
        """Upload a file chunk by chunk and finalize it.

        Args:
            request: File to upload.

        Returns:
            Dict with ``fileId`` and ``fileUuid`` merged with the finalize
            response.

        Raises:
            ValidationError: If project ID or destination path is missing.
            ChunkUploadError: If any chunk is rejected.
            FinalizeError: If finalize is rejected.
            TransportError: If a request gets no response.
            ProtocolError: If chunk 0 is acknowledged without a file ID.
        """
        with LogContext(
            "upload",
            logger,
            file=request.name or request.file_id,
            project_id=request.project_id,
            destination=request.destination_path,
        ) as ctx:
            validate_project_id(request.project_id)
            validate_destination_path(request.destination_path)

            chunks = list(split_chunks(request.size, self.chunk_size))
            total_chunks = len(chunks)
            tracker = ProgressTracker(total_chunks, self.chunk_size, request.size)
            identifiers = IdentifierCell()
            semaphore = (
                asyncio.Semaphore(self.max_concurrent_chunks)
                if self.max_concurrent_chunks
                else None
            )
            ctx.debug("Split %d bytes into %d chunks", request.size, total_chunks)

            failed = asyncio.Event()
            self._report(request, tracker.start())

            async def upload_one(chunk: ChunkDescriptor) -> ChunkUploadResult:
                async with AsyncExitStack() as stack:
                    if semaphore is not None:
                        await stack.enter_async_context(semaphore)
                    data = request.read_chunk(chunk.start, chunk.end)
                    result = await self.client.upload_chunk(
                        request, data, chunk.index, total_chunks
                    )
                if chunk.index == 0:
                    identifiers.offer(result)
                if not failed.is_set():
                    self._report(request, tracker.record_chunk(chunk.index))
                return result

            tasks = [asyncio.create_task(upload_one(chunk)) for chunk in chunks]
            try:
                await asyncio.gather(*tasks)
            except BaseException:
                # The first failure fails the file; sibling chunks are stopped
                # and awaited so none outlives the coordinator.
                failed.set()
                for task in tasks:
                    task.cancel()
                await asyncio.gather(*tasks, return_exceptions=True)
                raise

            # The identifiers come from chunk 0, which may finish last; they
            # are only read after every chunk has settled.
            if identifiers.file_id is None:
                raise ProtocolError(UPLOAD_PATH, "chunk 0 response has no file_id")

            finalize_result = await self.client.finalize(identifiers.file_id, total_chunks)
            self._report(request, tracker.complete())

        return {
            "fileId": identifiers.file_id,
            "fileUuid": identifiers.file_uuid,
            **finalize_result,
        }
