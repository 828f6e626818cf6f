"""
Chat domain models and schemas.

Request/response schemas for chat, history, and search operations.

Dependencies: pydantic
System role: Chat API contracts
"""

from typing import Any

from pydantic import Field

from rag_starter.models.common import CamelModel
from rag_starter.models.conversation import ConversationSummary, ConversationTurn


class Source(CamelModel):
    """Retrieved chunk reference shown as a citation."""

    document_name: str = Field(description="Source document name")
    chunk_index: int = Field(description="Chunk position within the document")
    score: float = Field(description="Similarity score reported by the vector store")


class ChatRequest(CamelModel):
    """Request schema for chat messages."""

    message: str = Field(description="User question or message")
    conversation_id: str | None = Field(default=None, description="Existing conversation ID")
    use_streaming: bool = Field(default=False, description="Stream the answer as plain text")


class ChatContext(CamelModel):
    """Retrieval details attached to an answer."""

    chunks_found: int
    sources: list[Source]


class ChatResult(CamelModel):
    """Outcome of a chat turn."""

    response: str
    conversation_id: str
    context: ChatContext


class ChatResponse(ChatResult):
    """Response schema for chat messages."""

    success: bool = True


class ConversationHistoryResponse(CamelModel):
    """Response schema for conversation history."""

    success: bool = True
    conversation: list[ConversationTurn]
    conversation_id: str


class ConversationCreatedResponse(CamelModel):
    """Response schema for conversation creation."""

    success: bool = True
    conversation_id: str
    message: str = "New conversation created"


class ConversationDeletedResponse(CamelModel):
    """Response schema for conversation deletion."""

    success: bool = True
    message: str = "Conversation deleted successfully"


class ConversationListResponse(CamelModel):
    """Response schema for conversation listing."""

    success: bool = True
    conversations: list[ConversationSummary]
    total: int


class SearchRequest(CamelModel):
    """Request schema for raw similarity search."""

    query: str
    top_k: int = Field(default=5, ge=1, le=100)


class SearchResult(CamelModel):
    """Single raw search hit."""

    id: str
    text: str
    score: float
    metadata: dict[str, Any]


class SearchResponse(CamelModel):
    """Response schema for raw similarity search."""

    success: bool = True
    query: str
    results: list[SearchResult]
