"""Data models for mcupload.

Provides Pydantic models for upload requests and server records, and
dataclasses for progress tracking.
"""

from __future__ import annotations

from .base import BaseModel
from .progress import FileOutcome, ProgressTracker, SessionSummary, UploadProgress
from .upload import ChunkUploadResult, FileUploadRequest, UploadStatus

__all__ = [
    # Base
    "BaseModel",
    # Upload records
    "FileUploadRequest",
    "ChunkUploadResult",
    "UploadStatus",
    # Progress
    "UploadProgress",
    "ProgressTracker",
    "FileOutcome",
    "SessionSummary",
]
