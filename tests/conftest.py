"""
Shared test fixtures and configuration for entire test suite.

Provides: mock embedding/chat clients, in-memory vector store double, sample matches
Dependencies: pytest, unittest.mock
System role: Test infrastructure and fixture management
"""

from unittest.mock import AsyncMock, MagicMock

import pytest

from rag_starter.boundary.conversations import ConversationStore
from rag_starter.boundary.vdb.vector_schemas import ChunkMetadata, IndexStats, VectorMatch

TEST_DIMENSION = 8


def make_match(
    match_id: str,
    score: float,
    text: str,
    document_id: str = "doc-1",
    document_name: str = "guide.pdf",
    chunk_index: int = 0,
    total_chunks: int = 1,
) -> VectorMatch:
    """Build a normalized match for tests."""
    return VectorMatch(
        id=match_id,
        score=score,
        metadata=ChunkMetadata(
            document_id=document_id,
            document_name=document_name,
            file_type="pdf",
            chunk_index=chunk_index,
            total_chunks=total_chunks,
            timestamp="2024-01-01T00:00:00+00:00",
            text=text,
        ),
    )


@pytest.fixture
def sample_matches() -> list[VectorMatch]:
    """Two matches in descending score order."""
    return [
        make_match("doc-1_chunk_0", 0.9, "A", chunk_index=0, total_chunks=2),
        make_match("doc-1_chunk_1", 0.8, "B", chunk_index=1, total_chunks=2),
    ]


@pytest.fixture
def mock_embedding_client() -> AsyncMock:
    """Embedding client returning fixed-size vectors."""
    client = AsyncMock()
    client.embed.return_value = [0.1] * TEST_DIMENSION
    client.embed_batch.side_effect = lambda texts: [[0.1] * TEST_DIMENSION for _ in texts]
    return client


@pytest.fixture
def mock_vector_store(sample_matches: list[VectorMatch]) -> MagicMock:
    """Synchronous vector store double mirroring PineconeVectorStore."""
    store = MagicMock()
    store.query.return_value = sample_matches
    store.list_records.return_value = sample_matches
    store.find_ids.return_value = [match.id for match in sample_matches]
    store.delete_by_ids.side_effect = lambda ids: len(ids)
    store.upsert.side_effect = lambda records: len(records)
    store.stats.return_value = IndexStats(
        total_vectors=2,
        dimension=TEST_DIMENSION,
        index_fullness=0.0,
        namespaces=[""],
    )
    return store


@pytest.fixture
def conversation_store() -> ConversationStore:
    """Fresh conversation store."""
    return ConversationStore(capacity=10)


@pytest.fixture
def match_factory():
    """Factory for normalized matches."""
    return make_match
