"""Exception hierarchy for mcupload.

Provides typed exceptions for different failure modes with clear error messages.
"""

from __future__ import annotations

from typing import Any


class MCUploadError(Exception):
    """Base exception for all mcupload errors."""

    def __init__(self, message: str, details: dict[str, Any] | None = None):
        super().__init__(message)
        self.message = message
        self.details = details or {}

    def __str__(self) -> str:
        if self.details:
            detail_str = ", ".join(f"{k}={v}" for k, v in self.details.items())
            return f"{self.message} ({detail_str})"
        return self.message


# =============================================================================
# Configuration Errors
# =============================================================================


class ConfigurationError(MCUploadError):
    """Error in configuration (missing, invalid, or malformed)."""

    def __init__(
        self,
        message: str,
        field: str | None = None,
        value: Any = None,
    ):
        details = {}
        if field:
            details["field"] = field
        if value is not None:
            details["value"] = repr(value)
        super().__init__(message, details)
        self.field = field
        self.value = value


class ProfileNotFoundError(ConfigurationError):
    """Requested profile does not exist."""

    def __init__(self, profile: str):
        super().__init__(f"Profile not found: {profile}", field="profile", value=profile)
        self.profile = profile


# =============================================================================
# Validation Errors
# =============================================================================


class ValidationError(MCUploadError):
    """Input validation failed."""

    def __init__(
        self,
        message: str,
        field: str | None = None,
        value: Any = None,
    ):
        details = {}
        if field:
            details["field"] = field
        if value is not None:
            details["value"] = repr(value)
        super().__init__(message, details)
        self.field = field
        self.value = value


class InvalidURLError(ValidationError):
    """Invalid URL format."""

    def __init__(self, url: str, reason: str = ""):
        msg = f"Invalid URL: {url}"
        if reason:
            msg = f"{msg} - {reason}"
        super().__init__(msg, field="url", value=url)
        self.url = url
        self.reason = reason


# =============================================================================
# Transport Errors
# =============================================================================


class TransportError(MCUploadError):
    """No response was received (DNS, TCP, TLS, timeout)."""

    def __init__(self, url: str, cause: str | None = None):
        msg = f"Network error talking to {url}"
        if cause:
            msg = f"{msg}: {cause}"
        super().__init__(msg, {"url": url})
        self.url = url
        self.cause = cause


class ProtocolError(MCUploadError):
    """Server answered with a body that could not be understood."""

    def __init__(self, endpoint: str, reason: str):
        super().__init__(f"Unexpected response from {endpoint}: {reason}", {"endpoint": endpoint})
        self.endpoint = endpoint
        self.reason = reason


# =============================================================================
# HTTP Status Errors
# =============================================================================


class HTTPStatusError(MCUploadError):
    """Server answered with a non-success status."""

    def __init__(
        self,
        message: str,
        status_code: int,
        details: dict[str, Any] | None = None,
    ):
        full_details: dict[str, Any] = {"status_code": status_code}
        if details:
            full_details.update(details)
        super().__init__(message, full_details)
        self.status_code = status_code


class ChunkUploadError(HTTPStatusError):
    """A chunk upload request was rejected."""

    def __init__(self, status_code: int, chunk_index: int):
        super().__init__(
            f"Upload failed with status {status_code}",
            status_code,
            {"chunk_index": chunk_index},
        )
        self.chunk_index = chunk_index


class FinalizeError(HTTPStatusError):
    """The finalize request was rejected."""

    def __init__(self, status_code: int, file_id: str | None = None):
        super().__init__(
            f"Finalize failed with status {status_code}",
            status_code,
            {"file_id": file_id} if file_id else None,
        )
        self.file_id = file_id


class StatusCheckError(HTTPStatusError):
    """The upload status request was rejected."""

    def __init__(self, status_code: int, file_id: str | None = None):
        super().__init__(
            f"Status check failed with status {status_code}",
            status_code,
            {"file_id": file_id} if file_id else None,
        )
        self.file_id = file_id


# =============================================================================
# Batch Errors
# =============================================================================


class BatchUploadError(MCUploadError):
    """One or more files in an upload session failed."""

    def __init__(self, succeeded: int, failed: int, errors: list[str]):
        super().__init__(
            f"Upload partially failed: {succeeded} succeeded, {failed} failed",
            {"succeeded": succeeded, "failed": failed},
        )
        self.succeeded = succeeded
        self.failed = failed
        self.errors = errors
