"""
Application services.

Orchestrate core logic and boundary adapters for the API layer.
"""

from rag_starter.application.services.chat_service import ChatService
from rag_starter.application.services.document_service import DocumentService

__all__ = ["ChatService", "DocumentService"]
