"""
Test suite for document API endpoints.

Tests /api/documents/* routes with FastAPI TestClient and an overridden
DocumentService.

System role: Verification of document HTTP API endpoints
"""

from datetime import datetime, timezone
from unittest.mock import AsyncMock, MagicMock

import pytest
from fastapi.testclient import TestClient

from rag_starter.api.deps import get_document_service
from rag_starter.boundary.vdb.vector_schemas import IndexStats
from rag_starter.core.exceptions import (
    DocumentNotFoundError,
    ParsingError,
    ValidationError,
    VectorStoreError,
)
from rag_starter.models.document import Document, DocumentListStats, DocumentSummary, FileType


@pytest.fixture
def mock_document_service(app) -> MagicMock:
    """DocumentService double installed as a dependency override."""
    service = MagicMock()
    service.upload_document = AsyncMock()
    service.list_documents = AsyncMock()
    service.get_stats = AsyncMock()
    service.delete_document = AsyncMock()
    app.dependency_overrides[get_document_service] = lambda: service
    return service


@pytest.fixture
def sample_document() -> Document:
    return Document(
        id="doc-123",
        original_name="notes.pdf",
        file_type=FileType.PDF,
        total_chunks=7,
        upload_timestamp=datetime(2024, 1, 1, tzinfo=timezone.utc),
        size_mb=1.25,
    )


class TestUploadEndpoint:
    """Test POST /api/documents/upload."""

    def test_upload_should_return_document_summary(
        self,
        client: TestClient,
        mock_document_service: MagicMock,
        sample_document: Document,
    ) -> None:
        # Arrange
        mock_document_service.upload_document.return_value = sample_document

        # Act
        response = client.post(
            "/api/documents/upload",
            files={"document": ("notes.pdf", b"%PDF-1.4 content", "application/pdf")},
        )

        # Assert
        assert response.status_code == 200
        data = response.json()
        assert data["success"] is True
        assert data["document"] == {
            "id": "doc-123",
            "name": "notes.pdf",
            "type": "pdf",
            "chunks": 7,
            "size": 1.25,
        }
        mock_document_service.upload_document.assert_awaited_once_with("notes.pdf", b"%PDF-1.4 content")

    def test_upload_without_file_should_return_400(
        self,
        client: TestClient,
        mock_document_service: MagicMock,
    ) -> None:
        response = client.post("/api/documents/upload")

        assert response.status_code == 400
        assert response.json()["message"] == "No file uploaded"
        mock_document_service.upload_document.assert_not_awaited()

    def test_upload_invalid_type_should_return_400(
        self,
        client: TestClient,
        mock_document_service: MagicMock,
    ) -> None:
        message = "Invalid file type. Only PDF, DOCX, and TXT files are allowed."
        mock_document_service.upload_document.side_effect = ValidationError(message, field="document")

        response = client.post(
            "/api/documents/upload",
            files={"document": ("image.png", b"\x89PNG", "image/png")},
        )

        assert response.status_code == 400
        assert response.json() == {"error": "Validation Error", "message": message}

    def test_upload_parse_failure_should_return_500(
        self,
        client: TestClient,
        mock_document_service: MagicMock,
    ) -> None:
        mock_document_service.upload_document.side_effect = ParsingError("No text content found in document")

        response = client.post(
            "/api/documents/upload",
            files={"document": ("scan.pdf", b"%PDF", "application/pdf")},
        )

        assert response.status_code == 500
        assert response.json() == {
            "error": "Failed to process document",
            "message": "No text content found in document",
        }


class TestListAndStatsEndpoints:
    """Test GET /api/documents/list and /api/documents/stats."""

    def test_list_should_return_documents_and_stats(
        self,
        client: TestClient,
        mock_document_service: MagicMock,
    ) -> None:
        # Arrange
        mock_document_service.list_documents.return_value = (
            [
                DocumentSummary(
                    id="doc-123",
                    name="notes.pdf",
                    type="pdf",
                    total_chunks=7,
                    uploaded_at="2024-01-01T00:00:00+00:00",
                ),
            ],
            DocumentListStats(total_vectors=7, total_documents=1, dimension=1536),
        )

        # Act
        response = client.get("/api/documents/list")

        # Assert
        assert response.status_code == 200
        data = response.json()
        assert data["documents"][0]["totalChunks"] == 7
        assert data["documents"][0]["uploadedAt"] == "2024-01-01T00:00:00+00:00"
        assert data["stats"] == {"totalVectors": 7, "totalDocuments": 1, "dimension": 1536}

    def test_stats_should_return_index_stats(
        self,
        client: TestClient,
        mock_document_service: MagicMock,
    ) -> None:
        mock_document_service.get_stats.return_value = IndexStats(
            total_vectors=42,
            dimension=1536,
            index_fullness=0.0,
            namespaces=[""],
        )

        response = client.get("/api/documents/stats")

        assert response.status_code == 200
        assert response.json()["stats"] == {
            "totalVectors": 42,
            "namespaces": [""],
            "dimension": 1536,
            "indexFullness": 0.0,
        }

    def test_stats_should_map_vector_store_error_to_500(
        self,
        client: TestClient,
        mock_document_service: MagicMock,
    ) -> None:
        mock_document_service.get_stats.side_effect = VectorStoreError("unreachable", operation="stats")

        response = client.get("/api/documents/stats")

        assert response.status_code == 500
        assert response.json()["error"] == "Vector store operation failed"


class TestDeleteEndpoint:
    """Test DELETE /api/documents/{document_id}."""

    def test_delete_should_report_deleted_chunks(
        self,
        client: TestClient,
        mock_document_service: MagicMock,
    ) -> None:
        mock_document_service.delete_document.return_value = 7

        response = client.delete("/api/documents/doc-123")

        assert response.status_code == 200
        assert response.json() == {
            "success": True,
            "message": "Document deleted successfully",
            "documentId": "doc-123",
            "deletedChunks": 7,
        }

    def test_delete_unknown_document_should_return_404(
        self,
        client: TestClient,
        mock_document_service: MagicMock,
    ) -> None:
        mock_document_service.delete_document.side_effect = DocumentNotFoundError("missing")

        response = client.delete("/api/documents/missing")

        assert response.status_code == 404
        assert response.json()["error"] == "Document not found"
