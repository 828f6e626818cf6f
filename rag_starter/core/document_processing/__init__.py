"""
Document processing package.

Extracts text from uploaded files and turns it into ordered chunks.
"""

from rag_starter.core.document_processing.document_processor import DocumentProcessor
from rag_starter.core.document_processing.parsing_task import ParsingTask

__all__ = ["DocumentProcessor", "ParsingTask"]
