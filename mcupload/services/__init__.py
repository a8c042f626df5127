"""Service layer for mcupload.

Provides the upload session manager, the plugin that registers it with a
host, and an in-process host implementation.
"""

from __future__ import annotations

from .plugin import ResumableUploadPlugin
from .registry import FileRegistry
from .sessions import (
    UPLOAD_ERROR,
    UPLOAD_STARTED,
    UPLOAD_SUCCESS,
    UploadHost,
    UploadSessionManager,
)

__all__ = [
    "UploadHost",
    "UploadSessionManager",
    "ResumableUploadPlugin",
    "FileRegistry",
    "UPLOAD_STARTED",
    "UPLOAD_SUCCESS",
    "UPLOAD_ERROR",
]
