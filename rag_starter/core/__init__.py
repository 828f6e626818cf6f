"""
Core business logic module.

Contains the text chunker, retrieval and answer orchestration, document
processing, and the exception hierarchy.
"""

from rag_starter.core.exceptions import (
    ChunkingError,
    CompletionError,
    ConversationNotFoundError,
    DocumentNotFoundError,
    DocumentProcessingError,
    EmbeddingError,
    ParsingError,
    RagStarterException,
    RetrievalError,
    ValidationError,
    VectorStoreError,
)

__all__ = [
    "RagStarterException",
    "ValidationError",
    "ChunkingError",
    "ConversationNotFoundError",
    "DocumentNotFoundError",
    "DocumentProcessingError",
    "ParsingError",
    "EmbeddingError",
    "VectorStoreError",
    "RetrievalError",
    "CompletionError",
]
