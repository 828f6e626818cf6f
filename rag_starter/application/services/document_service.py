"""
Document service orchestrator.

Coordinates document upload, indexing, listing, statistics and deletion.
Uploaded bytes go through a temp file, the DocumentProcessor, batch
embedding and a Pinecone upsert.

Dependencies: rag_starter.core.document_processing, rag_starter.boundary.llm, rag_starter.boundary.vdb
System role: Document management orchestration
"""

import logging
import shutil
import tempfile
from pathlib import Path

from fastapi.concurrency import run_in_threadpool

from rag_starter.boundary.vdb.vector_schemas import ChunkMetadata, IndexStats, VectorRecord
from rag_starter.core.document_processing import DocumentProcessor
from rag_starter.core.exceptions import (
    DocumentNotFoundError,
    EmbeddingError,
    ValidationError,
)
from rag_starter.models.document import (
    Document,
    DocumentListStats,
    DocumentSummary,
    FileType,
    ProcessedDocument,
)

logger = logging.getLogger(__name__)

INVALID_FILE_TYPE_MESSAGE = "Invalid file type. Only PDF, DOCX, and TXT files are allowed."
TEMP_DIR_PREFIX = "ragstarter_"
LIST_PROBE_LIMIT = 1000
BYTES_PER_MB = 1024 * 1024


def cleanup_temp_file(file_path: str) -> None:
    """
    Remove a temporary upload file and its parent temp directory.

    Args:
        file_path: Path to file to remove
    """
    try:
        path = Path(file_path)
        parent_dir = path.parent

        if path.exists():
            path.unlink()
            logger.debug("Cleaned up temp file", extra={"file_path": file_path})

        if parent_dir.exists() and parent_dir.name.startswith(TEMP_DIR_PREFIX):
            shutil.rmtree(parent_dir, ignore_errors=True)

    except OSError as e:
        logger.warning(
            "Failed to cleanup temp file",
            extra={"file_path": file_path, "error": str(e)},
        )


def _write_temp_file(filename: str, content: bytes) -> str:
    temp_dir = tempfile.mkdtemp(prefix=TEMP_DIR_PREFIX)
    temp_path = Path(temp_dir) / Path(filename).name
    temp_path.write_bytes(content)
    return str(temp_path)


def group_documents(matches) -> list[DocumentSummary]:
    """
    Group vector matches into one summary per document ID.

    The first match seen for a document supplies its name, type, chunk count
    and timestamp. Matches without a document ID are skipped.
    """
    documents: dict[str, DocumentSummary] = {}
    for match in matches:
        meta = match.metadata
        if not meta.document_id or meta.document_id in documents:
            continue
        documents[meta.document_id] = DocumentSummary(
            id=meta.document_id,
            name=meta.document_name,
            type=meta.file_type,
            total_chunks=meta.total_chunks,
            uploaded_at=meta.timestamp,
        )
    return list(documents.values())


class DocumentService:
    """
    Document service orchestrator.

    Handles document lifecycle: upload, indexing, listing, deletion.
    Nothing is reported as indexed unless every step succeeds.
    """

    def __init__(
        self,
        processor: DocumentProcessor,
        embedding_client,
        vector_store,
        max_upload_size_mb: int = 10,
    ) -> None:
        """
        Initialize document service.

        Args:
            processor: Parses and chunks uploaded files
            embedding_client: Object exposing async embed_batch()
            vector_store: PineconeVectorStore (or compatible)
            max_upload_size_mb: Upload size limit
        """
        self._processor = processor
        self._embedding_client = embedding_client
        self._vector_store = vector_store
        self._max_upload_size_mb = max_upload_size_mb

    def validate_upload(self, filename: str | None, content: bytes) -> FileType:
        """
        Check file type and size before any processing.

        Raises:
            ValidationError: Unsupported extension, empty or oversize file
        """
        file_type = FileType.from_filename(filename or "")
        if file_type is None:
            raise ValidationError(INVALID_FILE_TYPE_MESSAGE, field="document")

        if not content:
            raise ValidationError("No file uploaded", field="document")

        if len(content) > self._max_upload_size_mb * BYTES_PER_MB:
            raise ValidationError(
                f"File too large. Maximum size is {self._max_upload_size_mb}MB.",
                field="document",
                details={"size_bytes": len(content)},
            )
        return file_type

    async def upload_document(self, filename: str | None, content: bytes) -> Document:
        """
        Upload and index a document.

        Steps:
        1. Validate extension and size
        2. Write to a temp file and parse + chunk it
        3. Embed all chunks in one batch call
        4. Upsert vectors with chunk metadata

        Args:
            filename: Original filename
            content: Raw file bytes

        Returns:
            Document: Indexed document with chunk count

        Raises:
            ValidationError: Invalid type or size
            ParsingError: Extraction failed or no text found
            EmbeddingError: Embedding generation failed
            VectorStoreError: Upsert failed
        """
        file_type = self.validate_upload(filename, content)
        size_mb = round(len(content) / BYTES_PER_MB, 2)

        logger.info(
            f"{__name__}:upload_document - Processing upload",
            extra={"file_name": filename, "file_type": file_type.value, "size_mb": size_mb},
        )

        temp_path = await run_in_threadpool(_write_temp_file, filename, content)
        try:
            processed: ProcessedDocument = await run_in_threadpool(
                self._processor.process,
                temp_path,
                filename,
                file_type,
                size_mb,
            )
        finally:
            cleanup_temp_file(temp_path)

        records = await self._embed_chunks(processed)
        await run_in_threadpool(self._vector_store.upsert, records)

        logger.info(
            f"{__name__}:upload_document - Document indexed",
            extra={"document_id": processed.document.id, "chunk_count": len(records)},
        )
        return processed.document

    async def _embed_chunks(self, processed: ProcessedDocument) -> list[VectorRecord]:
        document = processed.document
        texts = [chunk.text for chunk in processed.chunks]
        vectors = await self._embedding_client.embed_batch(texts)
        if len(vectors) != len(processed.chunks):
            raise EmbeddingError(
                "Embedding count does not match chunk count",
                document_id=document.id,
                details={"chunks": len(processed.chunks), "vectors": len(vectors)},
            )

        return [
            VectorRecord(
                id=chunk.id,
                values=vector,
                metadata=ChunkMetadata(
                    document_id=document.id,
                    document_name=document.original_name,
                    file_type=document.file_type.value,
                    chunk_index=chunk.chunk_index,
                    total_chunks=chunk.total_chunks,
                    timestamp=chunk.timestamp.isoformat(),
                    text=chunk.text,
                ),
            )
            for chunk, vector in zip(processed.chunks, vectors)
        ]

    async def get_stats(self) -> IndexStats:
        """
        Get vector index statistics.

        Raises:
            VectorStoreError: Stats call failed
        """
        return await run_in_threadpool(self._vector_store.stats)

    async def list_documents(self) -> tuple[list[DocumentSummary], DocumentListStats]:
        """
        List indexed documents.

        Enumerates up to 1000 records with a probe query and groups them by
        document ID, so very large indexes may list only a subset.

        Returns:
            tuple: Document summaries and aggregate stats

        Raises:
            VectorStoreError: Index query or stats call failed
        """
        stats = await self.get_stats()
        matches = await run_in_threadpool(self._vector_store.list_records, LIST_PROBE_LIMIT)
        documents = group_documents(matches)

        logger.info(
            f"{__name__}:list_documents - Listed documents",
            extra={"document_count": len(documents), "total_vectors": stats.total_vectors},
        )
        return documents, DocumentListStats(
            total_vectors=stats.total_vectors,
            total_documents=len(documents),
            dimension=stats.dimension,
        )

    async def delete_document(self, document_id: str) -> int:
        """
        Delete every chunk of a document from the index.

        Args:
            document_id: Document ID

        Returns:
            int: Number of chunks deleted

        Raises:
            ValidationError: Empty document ID
            DocumentNotFoundError: No chunks carry this document ID
            VectorStoreError: Lookup or delete failed
        """
        if not document_id:
            raise ValidationError("Document ID is required", field="documentId")

        ids = await run_in_threadpool(
            self._vector_store.find_ids,
            {"documentId": {"$eq": document_id}},
        )
        if not ids:
            raise DocumentNotFoundError(document_id)

        deleted = await run_in_threadpool(self._vector_store.delete_by_ids, ids)
        logger.info(
            f"{__name__}:delete_document - Document deleted",
            extra={"document_id": document_id, "deleted_chunks": deleted},
        )
        return deleted
