"""
Test suite for DocumentService.

Uses the real DocumentProcessor with TXT uploads and mocked embedding
client and vector store.

System role: Verification of document management orchestration
"""

from pathlib import Path
from unittest.mock import patch

import pytest

from rag_starter.application.services.document_service import (
    INVALID_FILE_TYPE_MESSAGE,
    DocumentService,
    cleanup_temp_file,
    group_documents,
)
from rag_starter.core.chunker import TextChunker
from rag_starter.core.document_processing import DocumentProcessor
from rag_starter.core.exceptions import (
    DocumentNotFoundError,
    EmbeddingError,
    ParsingError,
    ValidationError,
    VectorStoreError,
)
from rag_starter.models.document import FileType

SAMPLE_TEXT = b"Sentence one. Sentence two. Sentence three."


@pytest.fixture
def document_service(mock_embedding_client, mock_vector_store) -> DocumentService:
    processor = DocumentProcessor(chunker=TextChunker(chunk_size=20, overlap=5))
    return DocumentService(
        processor=processor,
        embedding_client=mock_embedding_client,
        vector_store=mock_vector_store,
        max_upload_size_mb=1,
    )


class TestUploadValidation:
    """Test upload validation before processing."""

    @pytest.mark.asyncio
    @pytest.mark.parametrize("filename", ["image.png", "script.exe", "noext", None])
    async def test_upload_should_reject_unsupported_types(
        self,
        filename,
        document_service,
        mock_embedding_client,
    ) -> None:
        with pytest.raises(ValidationError) as exc_info:
            await document_service.upload_document(filename, SAMPLE_TEXT)

        assert exc_info.value.message == INVALID_FILE_TYPE_MESSAGE
        mock_embedding_client.embed_batch.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_upload_should_reject_oversize_files(self, document_service) -> None:
        content = b"a" * (1024 * 1024 + 1)

        with pytest.raises(ValidationError):
            await document_service.upload_document("big.txt", content)

    @pytest.mark.asyncio
    async def test_upload_should_reject_empty_files(self, document_service) -> None:
        with pytest.raises(ValidationError):
            await document_service.upload_document("empty.txt", b"")


class TestUploadDocument:
    """Test the full upload pipeline."""

    @pytest.mark.asyncio
    async def test_upload_should_index_every_chunk(
        self,
        document_service,
        mock_embedding_client,
        mock_vector_store,
    ) -> None:
        """Chunks are embedded in one batch and upserted with metadata."""
        # Act
        document = await document_service.upload_document("notes.txt", SAMPLE_TEXT)

        # Assert
        assert document.original_name == "notes.txt"
        assert document.file_type == FileType.TXT
        assert document.total_chunks == 4

        mock_embedding_client.embed_batch.assert_awaited_once()
        texts = mock_embedding_client.embed_batch.await_args.args[0]
        assert texts[0] == "Sentence one."

        records = mock_vector_store.upsert.call_args.args[0]
        assert [record.id for record in records] == [f"{document.id}_chunk_{i}" for i in range(4)]
        metadata = records[0].metadata
        assert metadata.document_id == document.id
        assert metadata.document_name == "notes.txt"
        assert metadata.file_type == "txt"
        assert metadata.total_chunks == 4
        assert metadata.text == "Sentence one."

    @pytest.mark.asyncio
    async def test_upload_should_remove_temp_file_on_parse_failure(
        self,
        document_service,
        mock_vector_store,
    ) -> None:
        """Whitespace-only text fails parsing and leaves no temp file behind."""
        # Arrange
        with patch(
            "rag_starter.application.services.document_service.cleanup_temp_file",
            wraps=cleanup_temp_file,
        ) as cleanup:
            # Act / Assert
            with pytest.raises(ParsingError):
                await document_service.upload_document("blank.txt", b"   \n\n   ")

        temp_path = cleanup.call_args.args[0]
        assert not Path(temp_path).exists()
        mock_vector_store.upsert.assert_not_called()

    @pytest.mark.asyncio
    async def test_upload_should_abort_when_embedding_fails(
        self,
        document_service,
        mock_embedding_client,
        mock_vector_store,
    ) -> None:
        mock_embedding_client.embed_batch.side_effect = EmbeddingError("quota exceeded")

        with pytest.raises(EmbeddingError):
            await document_service.upload_document("notes.txt", SAMPLE_TEXT)

        mock_vector_store.upsert.assert_not_called()

    @pytest.mark.asyncio
    async def test_upload_should_reject_mismatched_vector_count(
        self,
        document_service,
        mock_embedding_client,
    ) -> None:
        mock_embedding_client.embed_batch.side_effect = lambda texts: [[0.1] * 8]

        with pytest.raises(EmbeddingError):
            await document_service.upload_document("notes.txt", SAMPLE_TEXT)

    @pytest.mark.asyncio
    async def test_upload_should_propagate_upsert_failure(
        self,
        document_service,
        mock_vector_store,
    ) -> None:
        mock_vector_store.upsert.side_effect = VectorStoreError("down", operation="upsert")

        with pytest.raises(VectorStoreError):
            await document_service.upload_document("notes.txt", SAMPLE_TEXT)


class TestListAndStats:
    """Test listing and statistics."""

    @pytest.mark.asyncio
    async def test_list_documents_should_group_by_document_id(
        self,
        document_service,
        mock_vector_store,
        match_factory,
    ) -> None:
        # Arrange
        mock_vector_store.list_records.return_value = [
            match_factory("a_chunk_0", 0.1, "x", document_id="a", document_name="a.pdf", total_chunks=2),
            match_factory("b_chunk_0", 0.1, "y", document_id="b", document_name="b.txt", total_chunks=1),
            match_factory("a_chunk_1", 0.1, "z", document_id="a", document_name="a.pdf", total_chunks=2),
        ]

        # Act
        documents, stats = await document_service.list_documents()

        # Assert
        assert [doc.id for doc in documents] == ["a", "b"]
        assert documents[0].name == "a.pdf"
        assert documents[0].total_chunks == 2
        assert stats.total_documents == 2
        assert stats.total_vectors == 2
        mock_vector_store.list_records.assert_called_once_with(1000)

    def test_group_documents_should_skip_matches_without_document_id(self, match_factory) -> None:
        matches = [match_factory("orphan", 0.1, "x", document_id="")]

        assert group_documents(matches) == []

    @pytest.mark.asyncio
    async def test_get_stats_should_return_index_stats(self, document_service) -> None:
        stats = await document_service.get_stats()

        assert stats.total_vectors == 2
        assert stats.namespaces == [""]


class TestDeleteDocument:
    """Test deletion by document ID."""

    @pytest.mark.asyncio
    async def test_delete_should_remove_exactly_matching_ids(
        self,
        document_service,
        mock_vector_store,
    ) -> None:
        """Only IDs returned by the documentId filter are deleted."""
        # Arrange
        mock_vector_store.find_ids.return_value = ["doc-1_chunk_0", "doc-1_chunk_1"]

        # Act
        deleted = await document_service.delete_document("doc-1")

        # Assert
        assert deleted == 2
        mock_vector_store.find_ids.assert_called_once_with({"documentId": {"$eq": "doc-1"}})
        mock_vector_store.delete_by_ids.assert_called_once_with(["doc-1_chunk_0", "doc-1_chunk_1"])

    @pytest.mark.asyncio
    async def test_delete_should_raise_when_document_unknown(
        self,
        document_service,
        mock_vector_store,
    ) -> None:
        mock_vector_store.find_ids.return_value = []

        with pytest.raises(DocumentNotFoundError):
            await document_service.delete_document("missing")

        mock_vector_store.delete_by_ids.assert_not_called()


class TestCleanupTempFile:
    """Test temp file cleanup helper."""

    def test_cleanup_should_remove_file_and_temp_dir(self, tmp_path: Path) -> None:
        temp_dir = tmp_path / "ragstarter_abc"
        temp_dir.mkdir()
        file_path = temp_dir / "upload.txt"
        file_path.write_text("data")

        cleanup_temp_file(str(file_path))

        assert not file_path.exists()
        assert not temp_dir.exists()

    def test_cleanup_should_ignore_missing_file(self, tmp_path: Path) -> None:
        cleanup_temp_file(str(tmp_path / "gone.txt"))

        assert tmp_path.exists()
