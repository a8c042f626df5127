"""Smoke tests for the public package surface."""

from __future__ import annotations

import mcupload
from mcupload.core.exceptions import (
    BatchUploadError,
    ChunkUploadError,
    ConfigurationError,
    FinalizeError,
    HTTPStatusError,
    InvalidURLError,
    MCUploadError,
    ProfileNotFoundError,
    ProtocolError,
    StatusCheckError,
    TransportError,
    ValidationError,
)


def test_version():
    assert mcupload.__version__ == "0.1.0"


def test_public_names_are_exported():
    for name in mcupload.__all__:
        assert hasattr(mcupload, name)


def test_exception_hierarchy():
    assert issubclass(ProfileNotFoundError, ConfigurationError)
    assert issubclass(InvalidURLError, ValidationError)
    for cls in (ChunkUploadError, FinalizeError, StatusCheckError):
        assert issubclass(cls, HTTPStatusError)
    for cls in (ConfigurationError, ValidationError, TransportError, ProtocolError,
                HTTPStatusError, BatchUploadError):
        assert issubclass(cls, MCUploadError)


def test_error_string_includes_details():
    error = ChunkUploadError(503, 4)
    assert str(error) == "Upload failed with status 503 (status_code=503, chunk_index=4)"
    assert error.details == {"status_code": 503, "chunk_index": 4}
