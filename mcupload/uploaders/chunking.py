"""Splitting a file into fixed-size chunk ranges."""

from __future__ import annotations

from collections.abc import Iterator
from dataclasses import dataclass

from mcupload.core.exceptions import ValidationError
from mcupload.core.validation import validate_chunk_size


@dataclass(frozen=True)
class ChunkDescriptor:
    """Byte range [start, end) of one chunk."""

    index: int
    total_chunks: int
    start: int
    end: int

    @property
    def size(self) -> int:
        return self.end - self.start


def count_chunks(total_size: int, chunk_size: int) -> int:
    """Return the number of chunks needed for total_size bytes.

    An empty file still counts as one chunk.

    Raises:
        ConfigurationError: If chunk_size is not positive.
        ValidationError: If total_size is negative.
    """
    validate_chunk_size(chunk_size)
    if total_size < 0:
        raise ValidationError("File size cannot be negative", field="size", value=total_size)
    if total_size == 0:
        return 1
    return -(-total_size // chunk_size)


def split_chunks(total_size: int, chunk_size: int) -> Iterator[ChunkDescriptor]:
    """Lazily yield contiguous chunk ranges covering [0, total_size).

    Args:
        total_size: File size in bytes.
        chunk_size: Maximum bytes per chunk.

    Yields:
        ChunkDescriptor for each chunk, in index order.
    """
    # Arguments are checked here, before iteration starts.
    total_chunks = count_chunks(total_size, chunk_size)
    return _iter_chunks(total_size, chunk_size, total_chunks)


def _iter_chunks(total_size: int, chunk_size: int, total_chunks: int) -> Iterator[ChunkDescriptor]:
    for index in range(total_chunks):
        start = index * chunk_size
        end = min(total_size, start + chunk_size)
        yield ChunkDescriptor(index=index, total_chunks=total_chunks, start=start, end=end)
