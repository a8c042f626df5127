"""mcupload - chunked resumable uploads to Materials Commons.

Large files are split into fixed-size chunks that are uploaded
concurrently and then assembled server-side:
- Split files into chunks and upload them in parallel
- Track per-file progress as chunks are acknowledged
- Finalize uploads and check their server-side status
"""

__version__ = "0.1.0"

from mcupload.core.client import ResumableUploadClient
from mcupload.core.config import Config, Profile, UploaderOptions
from mcupload.core.exceptions import (
    BatchUploadError,
    ChunkUploadError,
    ConfigurationError,
    FinalizeError,
    MCUploadError,
    TransportError,
    ValidationError,
)
from mcupload.models.upload import FileUploadRequest
from mcupload.services.plugin import ResumableUploadPlugin
from mcupload.services.registry import FileRegistry
from mcupload.services.sessions import UploadSessionManager

__all__ = [
    "__version__",
    "ResumableUploadClient",
    "Config",
    "Profile",
    "UploaderOptions",
    "FileUploadRequest",
    "UploadSessionManager",
    "ResumableUploadPlugin",
    "FileRegistry",
    "MCUploadError",
    "ConfigurationError",
    "ValidationError",
    "TransportError",
    "ChunkUploadError",
    "FinalizeError",
    "BatchUploadError",
]
