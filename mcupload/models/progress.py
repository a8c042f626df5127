"""Progress models for tracking upload status.

Provides dataclasses for per-file chunk progress and session summaries.
"""

from __future__ import annotations

import threading
from dataclasses import dataclass, field, replace
from typing import Any, FrozenSet, List, Optional

from mcupload.core.exceptions import BatchUploadError


@dataclass(frozen=True)
class UploadProgress:
    """Point-in-time progress of one file upload."""

    upload_started: bool = False
    upload_complete: bool = False
    chunks_completed: FrozenSet[int] = frozenset()
    percentage: int = 0
    bytes_uploaded: int = 0
    bytes_total: int = 0

    @property
    def chunk_count(self) -> int:
        """Number of chunks acknowledged by the server."""
        return len(self.chunks_completed)

    def to_dict(self) -> dict[str, Any]:
        """Convert to the record shape handed to progress sinks."""
        return {
            "upload_started": self.upload_started,
            "upload_complete": self.upload_complete,
            "chunks_completed": sorted(self.chunks_completed),
            "percentage": self.percentage,
            "bytes_uploaded": self.bytes_uploaded,
            "bytes_total": self.bytes_total,
        }


class ProgressTracker:
    """Owns the UploadProgress of one file.

    Chunk completions may arrive from concurrently finishing requests; each
    one is applied as a single locked read-modify-write and produces a new
    immutable snapshot.
    """

    def __init__(self, total_chunks: int, chunk_size: int, bytes_total: int) -> None:
        self.total_chunks = total_chunks
        self.chunk_size = chunk_size
        self._lock = threading.Lock()
        self._progress = UploadProgress(bytes_total=bytes_total)

    @property
    def progress(self) -> UploadProgress:
        with self._lock:
            return self._progress

    def start(self) -> UploadProgress:
        with self._lock:
            self._progress = replace(self._progress, upload_started=True)
            return self._progress

    def record_chunk(self, index: int) -> UploadProgress:
        """Mark a chunk as uploaded and recompute derived fields.

        Recording the same index twice leaves the progress unchanged.
        """
        with self._lock:
            completed = self._progress.chunks_completed | {index}
            count = len(completed)
            self._progress = replace(
                self._progress,
                upload_started=True,
                chunks_completed=frozenset(completed),
                percentage=round(count / self.total_chunks * 100),
                bytes_uploaded=count * self.chunk_size,
            )
            return self._progress

    def complete(self) -> UploadProgress:
        """Force the terminal state after a successful finalize."""
        with self._lock:
            self._progress = replace(
                self._progress,
                upload_started=True,
                upload_complete=True,
                percentage=100,
                bytes_uploaded=self._progress.bytes_total,
            )
            return self._progress


# =============================================================================
# Session Results
# =============================================================================


@dataclass
class FileOutcome:
    """Settled result of one file in a session."""

    file_id: str
    success: bool
    duration: float = 0.0
    result: Optional[dict[str, Any]] = None
    error: Optional[BaseException] = None

    @property
    def status_code(self) -> Optional[int]:
        """HTTP status of the failure, if it was an HTTP error."""
        return getattr(self.error, "status_code", None)


@dataclass
class SessionSummary:
    """Summary of one upload session."""

    outcomes: List[FileOutcome] = field(default_factory=list)
    duration: float = 0.0

    @property
    def total(self) -> int:
        return len(self.outcomes)

    @property
    def succeeded(self) -> int:
        return sum(1 for o in self.outcomes if o.success)

    @property
    def failed(self) -> int:
        return self.total - self.succeeded

    @property
    def success(self) -> bool:
        return self.failed == 0

    @property
    def errors(self) -> List[str]:
        return [f"{o.file_id}: {o.error}" for o in self.outcomes if not o.success]

    @property
    def results(self) -> List[dict[str, Any]]:
        return [o.result for o in self.outcomes if o.success and o.result is not None]

    def get(self, file_id: str) -> Optional[FileOutcome]:
        """Return the outcome for a file ID, if present."""
        for outcome in self.outcomes:
            if outcome.file_id == file_id:
                return outcome
        return None

    def raise_for_errors(self) -> None:
        """Raise BatchUploadError if any file failed."""
        if not self.success:
            raise BatchUploadError(self.succeeded, self.failed, self.errors)
