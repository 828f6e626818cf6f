"""
Boundary-aware text chunker.

Splits extracted document text into overlapping chunks for independent
embedding. Cuts prefer sentence endings, then word boundaries, and fall back
to a hard cut when neither lies close enough to the chunk limit.

Dependencies: re (stdlib), rag_starter.core.exceptions
System role: Chunking stage of the document ingestion pipeline
"""

import re
from collections.abc import Iterator

from rag_starter.core.exceptions import ChunkingError

DEFAULT_CHUNK_SIZE = 1000
DEFAULT_OVERLAP = 200

SENTENCE_TERMINATORS = (".", "!", "?")
SENTENCE_LOOKBACK = 400
WORD_LOOKBACK = 200

_WHITESPACE_RUN = re.compile(r"\s+")
_NEWLINE_RUN = re.compile(r"\n+")


def normalize_text(text: str) -> str:
    """Collapse whitespace and newline runs and strip the result."""
    cleaned = _WHITESPACE_RUN.sub(" ", text)
    cleaned = _NEWLINE_RUN.sub("\n", cleaned)
    return cleaned.strip()


def _validate_parameters(chunk_size: int, overlap: int) -> None:
    if chunk_size <= 0:
        raise ChunkingError(
            "chunk_size must be positive",
            details={"chunk_size": chunk_size},
        )
    if overlap < 0 or overlap >= chunk_size:
        raise ChunkingError(
            "overlap must satisfy 0 <= overlap < chunk_size",
            details={"chunk_size": chunk_size, "overlap": overlap},
        )


def _find_cut(text: str, start: int, chunk_size: int) -> int:
    """
    Pick the end offset for the chunk starting at ``start``.

    Only called when ``start + chunk_size`` lies inside the text.
    The returned offset is always greater than ``start``.
    """
    end = start + chunk_size

    sentence_end = max(text.rfind(mark, start, end) for mark in SENTENCE_TERMINATORS)
    if sentence_end != -1 and sentence_end > end - SENTENCE_LOOKBACK:
        return sentence_end + 1

    # A space exactly at ``end`` is still a valid cut
    last_space = text.rfind(" ", start, end + 1)
    if last_space > start and last_space > end - WORD_LOOKBACK:
        return last_space

    return end


def iter_chunk_spans(
    text: str,
    chunk_size: int = DEFAULT_CHUNK_SIZE,
    overlap: int = DEFAULT_OVERLAP,
) -> Iterator[tuple[int, int]]:
    """
    Yield ``(start, end)`` offsets of each chunk of already-normalized text.

    Consecutive spans overlap by ``overlap`` characters unless the previous cut
    landed within ``overlap`` characters of its own start, in which case the
    next span starts at that cut.

    Args:
        text: Normalized text (see normalize_text)
        chunk_size: Target maximum characters per chunk
        overlap: Characters repeated from the end of one chunk into the next

    Yields:
        tuple[int, int]: Half-open offsets into ``text``

    Raises:
        ChunkingError: When parameters are invalid
    """
    _validate_parameters(chunk_size, overlap)

    length = len(text)
    if length <= chunk_size:
        yield 0, length
        return

    start = 0
    while start < length:
        if start + chunk_size >= length:
            yield start, length
            return

        end = _find_cut(text, start, chunk_size)
        yield start, end

        next_start = end - overlap
        start = next_start if next_start > start else end


def split_text_into_chunks(
    text: str,
    chunk_size: int = DEFAULT_CHUNK_SIZE,
    overlap: int = DEFAULT_OVERLAP,
) -> list[str]:
    """
    Split text into overlapping, boundary-aware chunks.

    Args:
        text: Raw extracted document text
        chunk_size: Target maximum characters per chunk
        overlap: Characters of trailing context repeated into the next chunk

    Returns:
        list[str]: Non-empty, stripped chunks in document order

    Raises:
        ChunkingError: When text is empty after normalization or parameters are invalid
    """
    if not isinstance(text, str):
        raise ChunkingError("Text to chunk must be a string", details={"type": type(text).__name__})

    cleaned = normalize_text(text)
    if not cleaned:
        raise ChunkingError("Cannot chunk empty text")

    chunks = []
    for start, end in iter_chunk_spans(cleaned, chunk_size, overlap):
        chunk = cleaned[start:end].strip()
        if chunk:
            chunks.append(chunk)
    return chunks


class TextChunker:
    """Chunker bound to a fixed chunk size and overlap."""

    def __init__(
        self,
        chunk_size: int = DEFAULT_CHUNK_SIZE,
        overlap: int = DEFAULT_OVERLAP,
    ) -> None:
        """
        Initialize chunker with splitter configuration.

        Args:
            chunk_size: Maximum chunk size in characters
            overlap: Overlap between consecutive chunks

        Raises:
            ChunkingError: When overlap is not smaller than chunk_size
        """
        _validate_parameters(chunk_size, overlap)
        self.chunk_size = chunk_size
        self.overlap = overlap

    def chunk(self, text: str) -> list[str]:
        """Split text using this chunker's configuration."""
        return split_text_into_chunks(text, self.chunk_size, self.overlap)
