"""
Vector database schemas.

Pydantic models for vector operations (records, matches, index stats).
Every raw Pinecone match is normalized into VectorMatch at the adapter
boundary, so downstream code sees exactly one record shape.

Dependencies: pydantic
System role: Type definitions for vector operations
"""

from typing import Any

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class ChunkMetadata(BaseModel):
    """
    Metadata attached to each vector.

    Stored in Pinecone with camelCase keys (documentId, chunkIndex, ...),
    which is also the filter vocabulary for metadata queries.
    """

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    document_id: str = Field(default="", description="Owning document ID")
    document_name: str = Field(default="Unknown", description="Uploaded filename")
    file_type: str = Field(default="unknown", description="pdf, docx or txt")
    chunk_index: int = Field(default=0, description="0-based chunk position")
    total_chunks: int = Field(default=0, description="Chunks in the document")
    timestamp: str = Field(default="", description="ISO chunk creation time")
    text: str = Field(default="", description="Raw chunk text")

    def to_pinecone(self) -> dict[str, Any]:
        """Serialize to the camelCase metadata dict stored in Pinecone."""
        return self.model_dump(by_alias=True)

    @classmethod
    def from_pinecone(
        cls,
        raw: dict[str, Any] | None,
        match_text: str = "",
    ) -> "ChunkMetadata":
        """
        Normalize raw Pinecone metadata.

        Args:
            raw: Metadata dict as returned by the index (may be None)
            match_text: Match-level text, tried after metadata "text" and before "chunk_text"

        Returns:
            ChunkMetadata: Canonical metadata with text resolved
        """
        raw = dict(raw or {})
        raw["text"] = raw.get("text") or match_text or raw.pop("chunk_text", None) or ""
        raw.pop("chunk_text", None)
        # Unknown keys are ignored by the model
        return cls.model_validate(raw)


class VectorRecord(BaseModel):
    """Vector to upsert: one per chunk."""

    id: str = Field(description="Chunk ID")
    values: list[float] = Field(description="Embedding vector")
    metadata: ChunkMetadata

    def to_pinecone(self) -> dict[str, Any]:
        """Serialize to the upsert payload shape."""
        return {"id": self.id, "values": self.values, "metadata": self.metadata.to_pinecone()}


class VectorMatch(BaseModel):
    """Single result from vector search."""

    id: str = Field(description="Chunk ID")
    score: float = Field(description="Similarity score")
    metadata: ChunkMetadata = Field(description="Canonical chunk metadata")

    @property
    def text(self) -> str:
        """Chunk text resolved at normalization time."""
        return self.metadata.text


class IndexStats(BaseModel):
    """Index statistics."""

    total_vectors: int = 0
    dimension: int = 0
    index_fullness: float = 0.0
    namespaces: list[str] = Field(default_factory=list)
