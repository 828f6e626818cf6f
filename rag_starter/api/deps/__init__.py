"""API-specific dependencies."""

from .dependencies import (
    get_chat_service,
    get_document_service,
    get_service_cache,
    get_settings_dependency,
)

__all__ = [
    "get_chat_service",
    "get_document_service",
    "get_service_cache",
    "get_settings_dependency",
]
