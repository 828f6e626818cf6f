"""
Test suite for the boundary-aware text chunker.

Covers normalization, sentence and word boundary cuts, overlap coverage,
hard cuts on pathological text, and parameter validation.

System role: Verification of document chunking
"""

import pytest

from rag_starter.core.chunker import (
    TextChunker,
    iter_chunk_spans,
    normalize_text,
    split_text_into_chunks,
)
from rag_starter.core.exceptions import ChunkingError


WORDS_TEXT = " ".join(f"word{i}" for i in range(400))


class TestNormalizeText:
    """Test whitespace normalization."""

    def test_normalize_should_collapse_whitespace_runs(self) -> None:
        assert normalize_text("  hello \n\n\t world  ") == "hello world"

    def test_normalize_should_return_empty_for_blank_input(self) -> None:
        assert normalize_text(" \n\t ") == ""


class TestShortText:
    """Test inputs that fit in a single chunk."""

    def test_chunk_should_return_single_normalized_element(self) -> None:
        """Text no longer than chunk_size yields exactly one chunk."""
        # Arrange
        text = "  First line.\n\nSecond   line.  "

        # Act
        chunks = split_text_into_chunks(text, chunk_size=1000, overlap=200)

        # Assert
        assert chunks == ["First line. Second line."]

    def test_chunk_should_accept_text_exactly_chunk_size(self) -> None:
        text = "a" * 50

        assert split_text_into_chunks(text, chunk_size=50, overlap=10) == [text]


class TestSentenceBoundaries:
    """Test sentence-ending cuts."""

    def test_chunk_should_break_only_at_sentence_ends(self) -> None:
        """Small chunk size breaks after periods, never inside a word."""
        # Arrange
        text = "Sentence one. Sentence two. Sentence three."

        # Act
        chunks = split_text_into_chunks(text, chunk_size=20, overlap=5)

        # Assert
        assert chunks == [
            "Sentence one.",
            "one. Sentence two.",
            "two.",
            "Sentence three.",
        ]
        assert all(chunk.endswith(".") for chunk in chunks)
        assert all(len(chunk) <= 20 for chunk in chunks)

    def test_chunk_should_treat_question_and_exclamation_marks_as_sentence_ends(self) -> None:
        text = "Is this working? Yes it is! " + "filler " * 10

        spans = list(iter_chunk_spans(normalize_text(text), chunk_size=30, overlap=5))

        assert spans[0] == (0, len("Is this working? Yes it is!"))


class TestWordBoundaries:
    """Test word-boundary cuts when no sentence end is close enough."""

    def test_chunk_should_cut_at_spaces_without_terminators(self) -> None:
        """Every non-final span ends on a space."""
        # Arrange
        cleaned = normalize_text(WORDS_TEXT)

        # Act
        spans = list(iter_chunk_spans(cleaned, chunk_size=100, overlap=20))

        # Assert
        assert len(spans) > 1
        for _, end in spans[:-1]:
            assert cleaned[end] == " "

    def test_chunks_should_not_exceed_chunk_size(self) -> None:
        chunks = split_text_into_chunks(WORDS_TEXT, chunk_size=100, overlap=20)

        assert all(len(chunk) <= 100 for chunk in chunks)


class TestCoverage:
    """Test that chunks reconstruct the normalized text."""

    @pytest.mark.parametrize(
        "text, chunk_size, overlap",
        [
            (WORDS_TEXT, 100, 20),
            ("Short sentence. " * 200, 120, 30),
            ("x" * 5000, 1000, 200),
            ("Mixed text! With words and a question? " * 80, 250, 50),
        ],
    )
    def test_spans_should_reconstruct_normalized_text(
        self,
        text: str,
        chunk_size: int,
        overlap: int,
    ) -> None:
        """Dropping each span's overlap with its predecessor rebuilds the text."""
        # Arrange
        cleaned = normalize_text(text)

        # Act
        spans = list(iter_chunk_spans(cleaned, chunk_size, overlap))

        # Assert
        assert spans[0][0] == 0
        assert spans[-1][1] == len(cleaned)

        rebuilt = cleaned[spans[0][0] : spans[0][1]]
        for (_, prev_end), (start, end) in zip(spans, spans[1:]):
            assert start <= prev_end
            assert start > 0
            rebuilt += cleaned[prev_end:end]
        assert rebuilt == cleaned

    def test_spans_should_always_advance(self) -> None:
        cleaned = normalize_text("Short sentence. " * 200)

        spans = list(iter_chunk_spans(cleaned, chunk_size=120, overlap=30))

        starts = [start for start, _ in spans]
        assert starts == sorted(set(starts))


class TestPathologicalText:
    """Test hard cuts when there are no boundaries at all."""

    def test_chunk_should_hard_cut_single_run_without_looping(self) -> None:
        """5000 characters with no spaces or terminators terminate in 6 chunks."""
        # Arrange
        text = "x" * 5000

        # Act
        chunks = split_text_into_chunks(text, chunk_size=1000, overlap=200)

        # Assert
        assert len(chunks) == 6
        assert all(len(chunk) == 1000 for chunk in chunks)


class TestDeterminism:
    """Test repeatability."""

    def test_chunk_should_be_deterministic(self) -> None:
        text = "Alpha beta gamma. Delta epsilon! " * 100

        first = split_text_into_chunks(text, chunk_size=150, overlap=40)
        second = split_text_into_chunks(text, chunk_size=150, overlap=40)

        assert first == second


class TestValidation:
    """Test invalid inputs and parameters."""

    @pytest.mark.parametrize("text", ["", "   ", "\n\n\t"])
    def test_chunk_should_reject_empty_text(self, text: str) -> None:
        with pytest.raises(ChunkingError):
            split_text_into_chunks(text)

    def test_chunk_should_reject_non_string(self) -> None:
        with pytest.raises(ChunkingError):
            split_text_into_chunks(None)  # type: ignore[arg-type]

    @pytest.mark.parametrize(
        "chunk_size, overlap",
        [(0, 0), (-10, 0), (100, 100), (100, 150), (100, -1)],
    )
    def test_chunker_should_reject_invalid_parameters(self, chunk_size: int, overlap: int) -> None:
        with pytest.raises(ChunkingError):
            TextChunker(chunk_size=chunk_size, overlap=overlap)

    def test_text_chunker_should_use_configured_sizes(self) -> None:
        chunker = TextChunker(chunk_size=20, overlap=5)

        chunks = chunker.chunk("Sentence one. Sentence two. Sentence three.")

        assert chunks[0] == "Sentence one."
