"""
Conversation domain models.

Dependencies: pydantic
System role: Conversation history data structures
"""

from datetime import datetime, timezone
from enum import Enum

from pydantic import Field

from rag_starter.models.common import CamelModel


class Role(str, Enum):
    """Conversation turn author."""

    USER = "user"
    ASSISTANT = "assistant"


class ConversationTurn(CamelModel):
    """Single message in a conversation."""

    role: Role
    content: str
    timestamp: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))


class ConversationSummary(CamelModel):
    """Conversation listing entry."""

    id: str
    message_count: int
    last_message: datetime | None = None
