"""Models for files queued for upload and records returned by the server."""

from __future__ import annotations

from pathlib import Path
from typing import Any, Optional, Union

from pydantic import ConfigDict, Field, field_validator

from mcupload.models.base import BaseModel


def _id_to_str(value: Any) -> Any:
    # The server emits integer IDs; the client treats them as opaque strings.
    if value is None or isinstance(value, str):
        return value
    return str(value)


class FileUploadRequest(BaseModel):
    """A single file handed to the uploader by the host."""

    model_config = ConfigDict(frozen=True, extra="forbid", str_strip_whitespace=False)

    file_id: str = Field(..., description="Host-assigned opaque file ID")
    name: str = Field("", description="Local display name")
    payload: Union[bytes, Path] = Field(..., description="File bytes or path to read from")
    size: int = Field(..., ge=0, description="Total size in bytes")
    project_id: Optional[str] = Field(None, description="Target project")
    destination_path: Optional[str] = Field(None, description="Target path inside the project")
    meta: dict[str, Any] = Field(default_factory=dict, description="Arbitrary host metadata")

    @field_validator("file_id", "project_id", mode="before")
    @classmethod
    def _coerce_opaque_ids(cls, value: Any) -> Any:
        return _id_to_str(value)

    @classmethod
    def from_bytes(
        cls,
        file_id: str,
        data: bytes,
        *,
        name: str = "",
        project_id: Optional[str] = None,
        destination_path: Optional[str] = None,
        meta: Optional[dict[str, Any]] = None,
    ) -> "FileUploadRequest":
        """Build a request for an in-memory payload."""
        return cls(
            file_id=file_id,
            name=name,
            payload=data,
            size=len(data),
            project_id=project_id,
            destination_path=destination_path,
            meta=meta or {},
        )

    @classmethod
    def from_path(
        cls,
        file_id: str,
        path: Path,
        *,
        project_id: Optional[str] = None,
        destination_path: Optional[str] = None,
        meta: Optional[dict[str, Any]] = None,
    ) -> "FileUploadRequest":
        """Build a request for a file on disk; bytes are read per chunk."""
        path = Path(path)
        return cls(
            file_id=file_id,
            name=path.name,
            payload=path,
            size=path.stat().st_size,
            project_id=project_id,
            destination_path=destination_path,
            meta=meta or {},
        )

    def read_chunk(self, start: int, end: int) -> bytes:
        """Return the bytes in [start, end) of the payload."""
        if isinstance(self.payload, Path):
            with self.payload.open("rb") as f:
                f.seek(start)
                return f.read(end - start)
        return self.payload[start:end]


class ChunkUploadResult(BaseModel):
    """Server response to one chunk upload."""

    file_id: Optional[str] = None
    file_uuid: Optional[str] = None
    chunk_index: Optional[int] = None
    total_chunks: Optional[int] = None
    bytes_written: Optional[int] = None

    @field_validator("file_id", "file_uuid", mode="before")
    @classmethod
    def _coerce_ids(cls, value: Any) -> Any:
        return _id_to_str(value)


class UploadStatus(BaseModel):
    """Server-side state of a resumable upload."""

    file_id: Optional[str] = None
    file_uuid: Optional[str] = None
    file_size: int = 0
    exists: bool = False
    has_chunks: bool = False
    chunk_count: int = 0

    @field_validator("file_id", "file_uuid", mode="before")
    @classmethod
    def _coerce_ids(cls, value: Any) -> Any:
        return _id_to_str(value)
