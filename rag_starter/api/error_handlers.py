"""
API exception handlers.

Maps the RagStarterException hierarchy to HTTP status codes and the
{error, message} response body.

Dependencies: fastapi, rag_starter.core.exceptions
System role: Error-to-HTTP translation
"""

import logging

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from rag_starter.core.exceptions import (
    CompletionError,
    ConversationNotFoundError,
    DocumentNotFoundError,
    DocumentProcessingError,
    EmbeddingError,
    RagStarterException,
    RetrievalError,
    ValidationError,
    VectorStoreError,
)
from rag_starter.models.common import ErrorResponse

logger = logging.getLogger(__name__)

# Most specific classes first
_ERROR_MAP: list[tuple[type[RagStarterException], int, str]] = [
    (ValidationError, status.HTTP_400_BAD_REQUEST, "Validation Error"),
    (ConversationNotFoundError, status.HTTP_404_NOT_FOUND, "Conversation not found"),
    (DocumentNotFoundError, status.HTTP_404_NOT_FOUND, "Document not found"),
    (EmbeddingError, status.HTTP_500_INTERNAL_SERVER_ERROR, "Failed to generate embeddings"),
    (DocumentProcessingError, status.HTTP_500_INTERNAL_SERVER_ERROR, "Failed to process document"),
    (RetrievalError, status.HTTP_500_INTERNAL_SERVER_ERROR, "Failed to retrieve context"),
    (VectorStoreError, status.HTTP_500_INTERNAL_SERVER_ERROR, "Vector store operation failed"),
    (CompletionError, status.HTTP_500_INTERNAL_SERVER_ERROR, "Failed to generate response"),
]


def resolve_error(exc: RagStarterException) -> tuple[int, str]:
    """Status code and error title for a domain exception."""
    for exc_type, status_code, title in _ERROR_MAP:
        if isinstance(exc, exc_type):
            return status_code, title
    return status.HTTP_500_INTERNAL_SERVER_ERROR, "Something went wrong!"


def _error_response(status_code: int, error: str, message: str) -> JSONResponse:
    return JSONResponse(
        status_code=status_code,
        content=ErrorResponse(error=error, message=message).model_dump(),
    )


def register_exception_handlers(app: FastAPI, debug: bool = False) -> None:
    """
    Attach exception handlers to the app.

    Args:
        app: FastAPI application
        debug: Expose unexpected error messages in 500 responses
    """

    @app.exception_handler(RagStarterException)
    async def handle_domain_error(request: Request, exc: RagStarterException) -> JSONResponse:
        status_code, title = resolve_error(exc)
        log = logger.warning if status_code < 500 else logger.error
        log(
            f"{__name__}:handle_domain_error - {type(exc).__name__}: {exc.message}",
            extra={"path": request.url.path, "details": exc.details},
        )
        return _error_response(status_code, title, exc.message)

    @app.exception_handler(RequestValidationError)
    async def handle_request_validation(request: Request, exc: RequestValidationError) -> JSONResponse:
        errors = exc.errors()
        message = "; ".join(
            f"{'.'.join(str(part) for part in err.get('loc', ()))}: {err.get('msg', '')}"
            for err in errors
        )
        logger.warning(
            f"{__name__}:handle_request_validation - Invalid request",
            extra={"path": request.url.path, "errors": len(errors)},
        )
        return _error_response(status.HTTP_400_BAD_REQUEST, "Validation Error", message or "Invalid request")

    @app.exception_handler(Exception)
    async def handle_unexpected(request: Request, exc: Exception) -> JSONResponse:
        logger.exception(
            f"{__name__}:handle_unexpected - {type(exc).__name__}: {exc}",
            extra={"path": request.url.path},
        )
        message = str(exc) if debug else "Internal server error"
        return _error_response(status.HTTP_500_INTERNAL_SERVER_ERROR, "Something went wrong!", message)
