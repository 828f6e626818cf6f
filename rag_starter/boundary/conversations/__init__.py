"""Conversation storage boundary."""

from rag_starter.boundary.conversations.conversation_store import (
    ConversationStore,
    new_conversation_id,
)

__all__ = ["ConversationStore", "new_conversation_id"]
