"""In-process upload host.

Keeps the files queued for upload, the registered uploaders, the latest
progress of every file and the event listeners.
"""

from __future__ import annotations

import inspect
import logging
import uuid
from collections import defaultdict
from collections.abc import Callable, Sequence
from pathlib import Path
from typing import Any, Optional

from mcupload.core.exceptions import ValidationError
from mcupload.models.progress import UploadProgress
from mcupload.models.upload import FileUploadRequest
from mcupload.services.sessions import UploaderFn

logger = logging.getLogger(__name__)

EventHandler = Callable[..., None]
ProgressHandler = Callable[[str, UploadProgress], None]


class FileRegistry:
    """Host that owns files and dispatches upload notifications."""

    def __init__(self) -> None:
        self.files: dict[str, FileUploadRequest] = {}
        self.progress: dict[str, UploadProgress] = {}
        self.uploaders: list[UploaderFn] = []
        self._listeners: dict[str, list[EventHandler]] = defaultdict(list)
        self._progress_listeners: list[ProgressHandler] = []

    # =========================================================================
    # Files
    # =========================================================================

    def add_file(self, request: FileUploadRequest) -> str:
        """Queue a prepared request and return its file ID."""
        self.files[request.file_id] = request
        return request.file_id

    def add_path(
        self,
        path: Path,
        *,
        project_id: Optional[str] = None,
        destination_path: Optional[str] = None,
        meta: Optional[dict[str, Any]] = None,
    ) -> str:
        """Queue a file from disk.

        ``project_id`` and ``destination_path`` fall back to the ``projectId``
        and ``destinationPath`` keys of ``meta``.
        """
        meta = dict(meta or {})
        request = FileUploadRequest.from_path(
            uuid.uuid4().hex,
            path,
            project_id=project_id if project_id is not None else meta.get("projectId"),
            destination_path=(
                destination_path if destination_path is not None else meta.get("destinationPath")
            ),
            meta=meta,
        )
        return self.add_file(request)

    def get_file(self, file_id: str) -> FileUploadRequest:
        """Resolve a file ID.

        Raises:
            ValidationError: If the ID is unknown.
        """
        try:
            return self.files[file_id]
        except KeyError:
            raise ValidationError(f"Unknown file: {file_id}", field="file_id", value=file_id)

    def remove_file(self, file_id: str) -> None:
        self.files.pop(file_id, None)
        self.progress.pop(file_id, None)

    # =========================================================================
    # Notifications
    # =========================================================================

    def on(self, event: str, handler: EventHandler) -> None:
        """Subscribe to an event."""
        self._listeners[event].append(handler)

    def on_progress(self, handler: ProgressHandler) -> None:
        """Subscribe to progress updates."""
        self._progress_listeners.append(handler)

    def emit(self, event: str, file: FileUploadRequest, *args: Any) -> None:
        logger.debug("Event %s for %s", event, file.name or file.file_id)
        for handler in list(self._listeners.get(event, [])):
            handler(file, *args)

    def set_progress(self, file_id: str, progress: UploadProgress) -> None:
        self.progress[file_id] = progress
        for handler in list(self._progress_listeners):
            handler(file_id, progress)

    # =========================================================================
    # Uploaders
    # =========================================================================

    def register_uploader(self, fn: UploaderFn) -> None:
        self.uploaders.append(fn)

    def unregister_uploader(self, fn: UploaderFn) -> None:
        if fn in self.uploaders:
            self.uploaders.remove(fn)

    async def upload(self, file_ids: Optional[Sequence[str]] = None) -> list[Any]:
        """Hand files to every registered uploader, in registration order.

        Args:
            file_ids: Files to upload; defaults to every queued file.

        Returns:
            Each uploader's return value.
        """
        ids = list(self.files) if file_ids is None else list(file_ids)
        results = []
        for fn in list(self.uploaders):
            result = fn(ids)
            if inspect.isawaitable(result):
                result = await result
            results.append(result)
        return results
