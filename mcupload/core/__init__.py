"""Core modules for mcupload."""

from mcupload.core.client import ResumableUploadClient
from mcupload.core.config import (
    CONFIG_DIR,
    CONFIG_FILE,
    DEFAULT_CHUNK_SIZE,
    DEFAULT_SERVER_URL,
    Config,
    Profile,
    UploaderOptions,
)
from mcupload.core.exceptions import (
    BatchUploadError,
    ChunkUploadError,
    ConfigurationError,
    FinalizeError,
    HTTPStatusError,
    MCUploadError,
    ProtocolError,
    StatusCheckError,
    TransportError,
    ValidationError,
)
from mcupload.core.logging import LogContext, get_audit_logger, setup_logging
from mcupload.core.validation import (
    validate_chunk_size,
    validate_destination_path,
    validate_project_id,
    validate_server_url,
    validate_timeout,
)

__all__ = [
    # Exceptions
    "MCUploadError",
    "ConfigurationError",
    "ValidationError",
    "TransportError",
    "ProtocolError",
    "HTTPStatusError",
    "ChunkUploadError",
    "FinalizeError",
    "StatusCheckError",
    "BatchUploadError",
    # Validation
    "validate_server_url",
    "validate_chunk_size",
    "validate_timeout",
    "validate_project_id",
    "validate_destination_path",
    # Config
    "Config",
    "Profile",
    "UploaderOptions",
    "CONFIG_DIR",
    "CONFIG_FILE",
    "DEFAULT_CHUNK_SIZE",
    "DEFAULT_SERVER_URL",
    # Client
    "ResumableUploadClient",
    # Logging
    "get_audit_logger",
    "setup_logging",
    "LogContext",
]
