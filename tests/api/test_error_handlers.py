"""
Test suite for exception-to-status mapping.

System role: Verification of API error translation
"""

import pytest

from rag_starter.api.error_handlers import resolve_error
from rag_starter.core.exceptions import (
    ChunkingError,
    CompletionError,
    ConversationNotFoundError,
    DocumentNotFoundError,
    EmbeddingError,
    ParsingError,
    RetrievalError,
    ValidationError,
    VectorStoreError,
)


class TestResolveError:
    """Test status codes for each domain exception."""

    @pytest.mark.parametrize(
        "exc, expected_status",
        [
            (ValidationError("bad"), 400),
            (ConversationNotFoundError("conv_x"), 404),
            (DocumentNotFoundError("doc_x"), 404),
            (ParsingError("corrupt"), 500),
            (EmbeddingError("quota"), 500),
            (RetrievalError("down"), 500),
            (VectorStoreError("down"), 500),
            (CompletionError("timeout"), 500),
            (ChunkingError("empty"), 500),
        ],
    )
    def test_resolve_error_should_map_status(self, exc, expected_status: int) -> None:
        status_code, title = resolve_error(exc)

        assert status_code == expected_status
        assert title

    def test_embedding_error_should_use_specific_title(self) -> None:
        assert resolve_error(EmbeddingError("quota"))[1] == "Failed to generate embeddings"
