"""Chunked upload internals for mcupload.

These are internal implementation details. Use `UploadSessionManager` from
`mcupload.services.sessions` as the public API.
"""

from mcupload.uploaders.chunking import ChunkDescriptor, count_chunks, split_chunks
from mcupload.uploaders.coordinator import IdentifierCell, UploadCoordinator

__all__ = [
    "ChunkDescriptor",
    "count_chunks",
    "split_chunks",
    "IdentifierCell",
    "UploadCoordinator",
]
