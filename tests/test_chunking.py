"""Tests for mcupload.uploaders.chunking."""

from __future__ import annotations

import math

import pytest

from mcupload.core.exceptions import ConfigurationError, ValidationError
from mcupload.uploaders.chunking import ChunkDescriptor, count_chunks, split_chunks

MIB = 1024 * 1024


class TestSplitChunks:
    """Tests for split_chunks function."""

    @pytest.mark.parametrize(
        ("total_size", "chunk_size"),
        [(1, 1), (10, 3), (10 * MIB, MIB), (10 * MIB + 1, MIB), (MIB - 1, MIB), (7, 100)],
    )
    def test_chunks_cover_file_exactly(self, total_size: int, chunk_size: int):
        chunks = list(split_chunks(total_size, chunk_size))

        assert len(chunks) == math.ceil(total_size / chunk_size)
        assert sum(c.size for c in chunks) == total_size
        assert chunks[0].start == 0
        assert chunks[-1].end == total_size
        for prev, nxt in zip(chunks, chunks[1:]):
            assert prev.end == nxt.start
        assert [c.index for c in chunks] == list(range(len(chunks)))
        assert all(c.total_chunks == len(chunks) for c in chunks)

    def test_last_chunk_is_short(self):
        chunks = list(split_chunks(10, 4))

        assert [(c.start, c.end) for c in chunks] == [(0, 4), (4, 8), (8, 10)]

    def test_empty_file_yields_single_empty_chunk(self):
        chunks = list(split_chunks(0, MIB))

        assert chunks == [ChunkDescriptor(index=0, total_chunks=1, start=0, end=0)]

    def test_split_is_repeatable(self):
        assert list(split_chunks(5 * MIB + 17, MIB)) == list(split_chunks(5 * MIB + 17, MIB))

    def test_split_is_lazy(self):
        chunks = split_chunks(10**15, 1)

        assert next(chunks).index == 0
        assert next(chunks).start == 1

    @pytest.mark.parametrize("chunk_size", [0, -1])
    def test_rejects_non_positive_chunk_size(self, chunk_size: int):
        with pytest.raises(ConfigurationError):
            split_chunks(10, chunk_size)

    def test_rejects_negative_size(self):
        with pytest.raises(ValidationError):
            split_chunks(-1, MIB)


class TestCountChunks:
    """Tests for count_chunks function."""

    def test_exact_multiple(self):
        assert count_chunks(10 * MIB, MIB) == 10

    def test_remainder_adds_chunk(self):
        assert count_chunks(10 * MIB + 1, MIB) == 11

    def test_empty_file(self):
        assert count_chunks(0, MIB) == 1
