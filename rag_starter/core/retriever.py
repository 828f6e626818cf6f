"""
Retrieval orchestration.

Embeds a query, runs the similarity search, and assembles the context
string plus citation sources in the store's rank order.

Dependencies: fastapi.concurrency, rag_starter.boundary, rag_starter.core.exceptions
System role: RAG retrieval business logic
"""

import logging

from fastapi.concurrency import run_in_threadpool
from pydantic import BaseModel, Field

from rag_starter.boundary.vdb.vector_schemas import VectorMatch
from rag_starter.core.exceptions import EmbeddingError, RetrievalError, ValidationError
from rag_starter.models.chat import Source

logger = logging.getLogger(__name__)

CONTEXT_SEPARATOR = "\n\n"


class RetrievalResult(BaseModel):
    """Context and citations for one query."""

    context: str = Field(description="Chunk texts joined by blank lines")
    sources: list[Source] = Field(description="Citations in rank order")
    matches: list[VectorMatch] = Field(description="Raw normalized matches")


def build_context(matches: list[VectorMatch]) -> str:
    """Join non-empty match texts in the given order."""
    return CONTEXT_SEPARATOR.join(match.text for match in matches if match.text)


def build_sources(matches: list[VectorMatch]) -> list[Source]:
    """Map matches to citation sources, preserving order."""
    return [
        Source(
            document_name=match.metadata.document_name,
            chunk_index=match.metadata.chunk_index,
            score=match.score,
        )
        for match in matches
    ]


class Retriever:
    """Retrieval business logic."""

    def __init__(self, embedding_client, vector_store, top_k: int = 5) -> None:
        """
        Initialize retriever with its collaborators.

        Args:
            embedding_client: Object exposing async embed(text) -> list[float]
            vector_store: Object exposing query(vector, top_k) -> list[VectorMatch]
            top_k: Default number of chunks to retrieve
        """
        self._embedding_client = embedding_client
        self._vector_store = vector_store
        self._top_k = top_k

    async def retrieve(self, query: str, top_k: int | None = None) -> RetrievalResult:
        """
        Retrieve the chunks most similar to a query.

        Args:
            query: Natural-language question
            top_k: Override for the default number of chunks

        Returns:
            RetrievalResult: Context string, sources, and matches

        Raises:
            ValidationError: When the query is empty
            EmbeddingError: When the query cannot be embedded
            RetrievalError: When the similarity search fails
        """
        if not query or not query.strip():
            raise ValidationError("Query is required", field="query")

        k = top_k or self._top_k

        try:
            vector = await self._embedding_client.embed(query)
        except EmbeddingError:
            raise
        except Exception as e:
            raise EmbeddingError(f"Failed to embed query: {e}") from e

        try:
            matches = await run_in_threadpool(self._vector_store.query, vector, k)
        except Exception as e:
            raise RetrievalError(
                f"Vector search failed: {e}",
                details={"top_k": k},
            ) from e

        context = build_context(matches)
        logger.info(
            f"{__name__}:retrieve - Found {len(matches)} matches, context_len={len(context)}",
            extra={"top_k": k},
        )
        return RetrievalResult(
            context=context,
            sources=build_sources(matches),
            matches=matches,
        )
