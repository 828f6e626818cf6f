"""
Document API endpoints.

Routes: POST /documents/upload, GET /documents/list, GET /documents/stats,
DELETE /documents/{document_id}

Dependencies: rag_starter.application.services.document_service, rag_starter.models
System role: Document HTTP API
"""

import logging

from fastapi import APIRouter, Depends, File, UploadFile

from rag_starter.api.deps import get_document_service
from rag_starter.application.services.document_service import DocumentService
from rag_starter.core.exceptions import ValidationError
from rag_starter.models.document import (
    DocumentDeleteResponse,
    DocumentInfo,
    DocumentListResponse,
    DocumentUploadResponse,
    IndexStatsPayload,
    IndexStatsResponse,
)

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/documents", tags=["documents"])


@router.post("/upload", response_model=DocumentUploadResponse)
async def upload_document(
    document: UploadFile | None = File(default=None),
    document_service: DocumentService = Depends(get_document_service),
) -> DocumentUploadResponse:
    """
    Upload a PDF, DOCX or TXT file and index its chunks.

    Processing is synchronous: the response is sent once the document is
    fully embedded and stored.

    Args:
        document: Multipart file field named "document"
        document_service: Injected DocumentService

    Returns:
        DocumentUploadResponse: Indexed document summary

    Raises:
        ValidationError: Missing file, unsupported type, or oversize file
    """
    if document is None:
        raise ValidationError("No file uploaded", field="document")

    content = await document.read()
    indexed = await document_service.upload_document(document.filename, content)

    return DocumentUploadResponse(
        document=DocumentInfo(
            id=indexed.id,
            name=indexed.original_name,
            type=indexed.file_type,
            chunks=indexed.total_chunks,
            size=indexed.size_mb,
        ),
    )


@router.get("/list", response_model=DocumentListResponse)
async def list_documents(
    document_service: DocumentService = Depends(get_document_service),
) -> DocumentListResponse:
    """List indexed documents with aggregate index figures."""
    documents, stats = await document_service.list_documents()
    return DocumentListResponse(documents=documents, stats=stats)


@router.get("/stats", response_model=IndexStatsResponse)
async def get_stats(
    document_service: DocumentService = Depends(get_document_service),
) -> IndexStatsResponse:
    """Vector index statistics."""
    stats = await document_service.get_stats()
    return IndexStatsResponse(
        stats=IndexStatsPayload(
            total_vectors=stats.total_vectors,
            namespaces=stats.namespaces,
            dimension=stats.dimension,
            index_fullness=stats.index_fullness,
        ),
    )


@router.delete("/{document_id}", response_model=DocumentDeleteResponse)
async def delete_document(
    document_id: str,
    document_service: DocumentService = Depends(get_document_service),
) -> DocumentDeleteResponse:
    """
    Delete all chunks of a document.

    Raises:
        DocumentNotFoundError: No chunks carry this document ID (404)
    """
    deleted = await document_service.delete_document(document_id)
    return DocumentDeleteResponse(document_id=document_id, deleted_chunks=deleted)
