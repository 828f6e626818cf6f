"""
Exception hierarchy for the RAG Starter Kit.

Provides layered exception structure for domain-specific errors.
All exceptions include context for observability and debugging.

Dependencies: None (pure domain layer)
System role: Centralized exception handling across the application
"""

from typing import Any


class RagStarterException(Exception):
    """Base exception for all RAG Starter Kit errors."""

    def __init__(self, message: str, details: dict[str, Any] | None = None) -> None:
        """
        Initialize base exception with message and optional context.

        Args:
            message: Human-readable error message
            details: Optional dictionary of additional context for debugging
        """
        self.message = message
        self.details = details or {}
        super().__init__(message)

    def __str__(self) -> str:
        """Return string representation including details."""
        if self.details:
            return f"{self.message} | Details: {self.details}"
        return self.message


class ValidationError(RagStarterException):
    """Raised when input validation fails."""

    def __init__(
        self,
        message: str,
        field: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        """
        Initialize validation error.

        Args:
            message: Error message
            field: Field name that failed validation
            details: Additional context
        """
        details = details or {}
        if field:
            details["field"] = field
        super().__init__(message, details)


class ChunkingError(RagStarterException):
    """Raised when text cannot be chunked (empty input or bad parameters)."""

    pass


class ConversationNotFoundError(RagStarterException):
    """Raised when a conversation cannot be found."""

    def __init__(self, conversation_id: str, details: dict[str, Any] | None = None) -> None:
        details = details or {}
        details["conversation_id"] = conversation_id
        super().__init__(f"Conversation not found: {conversation_id}", details)


class DocumentNotFoundError(RagStarterException):
    """Raised when no indexed chunks exist for a document."""

    def __init__(self, document_id: str, details: dict[str, Any] | None = None) -> None:
        details = details or {}
        details["document_id"] = document_id
        super().__init__(f"Document not found: {document_id}", details)


class DocumentProcessingError(RagStarterException):
    """Base exception for document processing errors."""

    def __init__(
        self,
        message: str,
        document_id: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        """
        Initialize document processing error.

        Args:
            message: Error message
            document_id: ID of the document that failed
            details: Additional context
        """
        details = details or {}
        if document_id:
            details["document_id"] = document_id
        super().__init__(message, details)


class ParsingError(DocumentProcessingError):
    """Raised when text extraction from an uploaded file fails."""

    def __init__(
        self,
        message: str,
        document_id: str | None = None,
        file_type: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        """
        Initialize parsing error.

        Args:
            message: Error message
            document_id: ID of the document
            file_type: Type of file that failed parsing
            details: Additional context
        """
        details = details or {}
        if file_type:
            details["file_type"] = file_type
        super().__init__(message, document_id, details)


class EmbeddingError(DocumentProcessingError):
    """Raised when embedding generation fails."""

    pass


class VectorStoreError(RagStarterException):
    """Raised when vector store operations fail."""

    def __init__(
        self,
        message: str,
        operation: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        """
        Initialize vector store error.

        Args:
            message: Error message
            operation: Operation that failed (upsert, query, delete, stats)
            details: Additional context
        """
        details = details or {}
        if operation:
            details["operation"] = operation
        super().__init__(message, details)


class RetrievalError(RagStarterException):
    """Raised when the similarity search step of retrieval fails."""

    pass


class CompletionError(RagStarterException):
    """Raised when the chat-completion call fails or its stream aborts."""

    def __init__(
        self,
        message: str,
        streaming: bool = False,
        details: dict[str, Any] | None = None,
    ) -> None:
        details = details or {}
        details["streaming"] = streaming
        super().__init__(message, details)
