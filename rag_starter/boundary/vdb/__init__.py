"""
Vector database boundary layer.

Provides the Pinecone vector store adapter and its record schemas.

Dependencies: pinecone
System role: Vector store adapter for RAG retrieval
"""

from rag_starter.boundary.vdb.vector_schemas import (
    ChunkMetadata,
    IndexStats,
    VectorMatch,
    VectorRecord,
)


def get_pinecone_store():
    """Lazy import for PineconeVectorStore to avoid loading the SDK at import time."""
    from rag_starter.boundary.vdb.pinecone_store import PineconeVectorStore
    return PineconeVectorStore


__all__ = [
    "ChunkMetadata",
    "IndexStats",
    "VectorMatch",
    "VectorRecord",
    "get_pinecone_store",
]
