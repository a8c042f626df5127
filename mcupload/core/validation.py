"""Input validation helpers for mcupload."""

from __future__ import annotations

from typing import Any
from urllib.parse import urlparse

from mcupload.core.exceptions import ConfigurationError, InvalidURLError, ValidationError


def validate_server_url(url: str) -> str:
    """Validate and normalize a server base URL.

    Args:
        url: URL to validate.

    Returns:
        URL without trailing slash.

    Raises:
        InvalidURLError: If the URL is empty, has no scheme or no host.
    """
    if not url or not url.strip():
        raise InvalidURLError(url or "", "URL is empty")

    url = url.strip()
    parsed = urlparse(url)
    if parsed.scheme not in ("http", "https"):
        raise InvalidURLError(url, "scheme must be http or https")
    if not parsed.netloc:
        raise InvalidURLError(url, "missing host")

    return url.rstrip("/")


def validate_chunk_size(chunk_size: Any) -> int:
    """Validate a chunk size in bytes.

    Raises:
        ConfigurationError: If chunk size is not a positive integer.
    """
    if isinstance(chunk_size, bool) or not isinstance(chunk_size, int) or chunk_size <= 0:
        raise ConfigurationError(
            "Chunk size must be a positive number of bytes",
            field="chunk_size",
            value=chunk_size,
        )
    return chunk_size


def validate_timeout(timeout: Any) -> int:
    """Validate a request timeout in seconds."""
    if isinstance(timeout, bool) or not isinstance(timeout, int) or timeout <= 0:
        raise ConfigurationError(
            "Timeout must be a positive number of seconds",
            field="timeout",
            value=timeout,
        )
    return timeout


def validate_project_id(project_id: Any) -> str:
    """Validate that a project ID is present.

    Raises:
        ValidationError: If the project ID is missing or blank.
    """
    if project_id is None or not str(project_id).strip():
        raise ValidationError("Project ID is required", field="project_id")
    return str(project_id).strip()


def validate_destination_path(destination_path: Any) -> str:
    """Validate that a destination path is present.

    Raises:
        ValidationError: If the destination path is missing or blank.
    """
    if destination_path is None or not str(destination_path).strip():
        raise ValidationError("Destination path is required", field="destination_path")
    return str(destination_path).strip()


def validate_max_concurrent_chunks(limit: Any) -> Any:
    """Validate an optional bound on in-flight chunk requests.

    Raises:
        ConfigurationError: If the bound is set and not a positive integer.
    """
    if limit is None:
        return None
    if isinstance(limit, bool) or not isinstance(limit, int) or limit <= 0:
        raise ConfigurationError(
            "max_concurrent_chunks must be positive",
            field="max_concurrent_chunks",
            value=limit,
        )
    return limit
