"""
Chunk domain model.

Represents one ordered segment of a document prepared for embedding.

Dependencies: pydantic
System role: Document chunk data structure
"""

from datetime import datetime

from pydantic import BaseModel, Field


class Chunk(BaseModel):
    """Document chunk model."""

    id: str = Field(description="Chunk identifier: {document_id}_chunk_{index}")
    text: str = Field(min_length=1, description="Chunk text content")
    document_id: str = Field(description="Owning document ID")
    chunk_index: int = Field(ge=0, description="0-based position in the document")
    total_chunks: int = Field(ge=1, description="Number of chunks in the document")
    timestamp: datetime = Field(description="Chunk creation time")

    @staticmethod
    def make_id(document_id: str, chunk_index: int) -> str:
        """Build the deterministic chunk ID for a document position."""
        return f"{document_id}_chunk_{chunk_index}"
