"""
Document domain models and schemas.

Domain model for ingested documents plus request/response schemas
for document operations.

Dependencies: pydantic
System role: Document API contracts
"""

from datetime import datetime
from enum import Enum
from pathlib import PurePath

from pydantic import BaseModel, Field

from rag_starter.models.chunk import Chunk
from rag_starter.models.common import CamelModel


class FileType(str, Enum):
    """Supported upload formats."""

    PDF = "pdf"
    DOCX = "docx"
    TXT = "txt"

    @classmethod
    def from_filename(cls, filename: str) -> "FileType | None":
        """Map a filename extension to a FileType, or None when unsupported."""
        suffix = PurePath(filename).suffix.lower().lstrip(".")
        try:
            return cls(suffix)
        except ValueError:
            return None


class Document(BaseModel):
    """Ingested document. Immutable once chunked."""

    id: str = Field(description="Generated document ID (uuid4)")
    original_name: str = Field(description="Uploaded filename")
    file_type: FileType
    total_chunks: int = Field(ge=1)
    upload_timestamp: datetime
    size_mb: float = Field(default=0.0, description="Upload size in MB (2 decimals)")


class ProcessedDocument(BaseModel):
    """Document with its ordered chunks, before embedding."""

    document: Document
    chunks: list[Chunk]


class DocumentInfo(CamelModel):
    """Uploaded document summary returned to the client."""

    id: str
    name: str
    type: FileType
    chunks: int
    size: float = Field(description="File size in MB")


class DocumentUploadResponse(CamelModel):
    """Response schema for document upload."""

    success: bool = True
    message: str = "Document uploaded and processed successfully"
    document: DocumentInfo


class DocumentSummary(CamelModel):
    """Document listing entry grouped from vector metadata."""

    id: str
    name: str = "Unknown"
    type: str = "unknown"
    total_chunks: int = 0
    uploaded_at: str = ""


class DocumentListStats(CamelModel):
    """Aggregate figures shown alongside the document list."""

    total_vectors: int
    total_documents: int
    dimension: int


class DocumentListResponse(CamelModel):
    """Response schema for document listing."""

    success: bool = True
    documents: list[DocumentSummary]
    stats: DocumentListStats


class IndexStatsPayload(CamelModel):
    """Vector index statistics."""

    total_vectors: int
    namespaces: list[str]
    dimension: int
    index_fullness: float


class IndexStatsResponse(CamelModel):
    """Response schema for index statistics."""

    success: bool = True
    stats: IndexStatsPayload


class DocumentDeleteResponse(CamelModel):
    """Response schema for document deletion."""

    success: bool = True
    message: str = "Document deleted successfully"
    document_id: str
    deleted_chunks: int
