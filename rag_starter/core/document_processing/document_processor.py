"""
Document processing logic.

Turns an uploaded file on disk into a Document with its ordered chunks.

Dependencies: rag_starter.core.chunker, rag_starter.core.document_processing.parsing_task
System role: Document processing business logic
"""

import logging
import uuid
from datetime import datetime, timezone

from rag_starter.core.chunker import TextChunker
from rag_starter.core.document_processing.parsing_task import ParsingTask
from rag_starter.core.exceptions import ChunkingError, ParsingError
from rag_starter.models.chunk import Chunk
from rag_starter.models.document import Document, FileType, ProcessedDocument

logger = logging.getLogger(__name__)


class DocumentProcessor:
    """Parse and chunk documents."""

    def __init__(
        self,
        chunker: TextChunker | None = None,
        parsing_task: ParsingTask | None = None,
    ) -> None:
        """
        Initialize document processor.

        Args:
            chunker: Text chunker (defaults to 1000/200)
            parsing_task: Text extractor
        """
        self._chunker = chunker or TextChunker()
        self._parsing_task = parsing_task or ParsingTask()

    def process(
        self,
        file_path: str,
        original_name: str,
        file_type: FileType,
        size_mb: float = 0.0,
        document_id: str | None = None,
    ) -> ProcessedDocument:
        """
        Parse a file and split its text into chunks.

        Args:
            file_path: Path to the file on disk
            original_name: Filename as uploaded
            file_type: File type derived from the extension
            size_mb: Upload size in MB
            document_id: Optional document ID (generated if None)

        Returns:
            ProcessedDocument: Document plus chunks in order

        Raises:
            ParsingError: When extraction fails or yields no text
        """
        doc_id = document_id or str(uuid.uuid4())
        text = self._parsing_task.parse(file_path, file_type)

        if not text.strip():
            raise ParsingError("No text content found in document", document_id=doc_id, file_type=file_type.value)

        try:
            pieces = self._chunker.chunk(text)
        except ChunkingError as e:
            raise ParsingError(
                "No text content found in document",
                document_id=doc_id,
                file_type=file_type.value,
            ) from e

        now = datetime.now(timezone.utc)
        chunks = [
            Chunk(
                id=Chunk.make_id(doc_id, index),
                text=piece,
                document_id=doc_id,
                chunk_index=index,
                total_chunks=len(pieces),
                timestamp=now,
            )
            for index, piece in enumerate(pieces)
        ]

        document = Document(
            id=doc_id,
            original_name=original_name,
            file_type=file_type,
            total_chunks=len(chunks),
            upload_timestamp=now,
            size_mb=size_mb,
        )

        logger.info(
            f"{__name__}:process - Document chunked",
            extra={"document_id": doc_id, "file_name": original_name, "chunk_count": len(chunks)},
        )
        return ProcessedDocument(document=document, chunks=chunks)
