"""
Document parsing task using LangChain document loaders.

Extracts plain text from PDF, DOCX and TXT files. TXT files that are not
UTF-8 fall back to a detected encoding.

Dependencies: langchain_community.document_loaders
System role: First stage of document ingestion pipeline
"""

import logging
from pathlib import Path

from langchain_community.document_loaders import Docx2txtLoader, PyPDFLoader, TextLoader
from langchain_core.documents import Document

from rag_starter.core.exceptions import ParsingError
from rag_starter.models.document import FileType

logger = logging.getLogger(__name__)


class ParsingTask:
    """Parse uploaded files into plain text."""

    def load(self, file_path: str, file_type: FileType) -> list[Document]:
        """
        Load a file into LangChain Documents.

        Args:
            file_path: Path to the file on disk
            file_type: Declared file type

        Returns:
            list[Document]: One document per page (PDF) or per file

        Raises:
            ParsingError: When the file is missing or cannot be read
        """
        path = Path(file_path)
        if not path.exists():
            raise ParsingError(f"File not found: {file_path}", file_type=file_type.value)

        if file_type == FileType.PDF:
            loader = PyPDFLoader(file_path)
        elif file_type == FileType.DOCX:
            loader = Docx2txtLoader(file_path)
        else:
            loader = TextLoader(file_path, encoding="utf-8", autodetect_encoding=True)

        try:
            return loader.load()
        except Exception as e:
            raise ParsingError(
                f"Failed to parse {file_type.value.upper()}: {e}",
                file_type=file_type.value,
            ) from e

    def parse(self, file_path: str, file_type: FileType) -> str:
        """
        Extract the full text of a file.

        PDF pages are joined with newlines.

        Args:
            file_path: Path to the file on disk
            file_type: Declared file type

        Returns:
            str: Extracted text (may be empty for image-only files)

        Raises:
            ParsingError: When the file cannot be read
        """
        documents = self.load(file_path, file_type)
        text = "\n".join(doc.page_content for doc in documents if doc.page_content)
        logger.info(
            f"{__name__}:parse - Extracted text",
            extra={"file_type": file_type.value, "pages": len(documents), "text_length": len(text)},
        )
        return text
