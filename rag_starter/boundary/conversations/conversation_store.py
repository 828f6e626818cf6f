"""
Bounded in-memory conversation store.

Keeps conversations in least-recently-used order and evicts the oldest
once capacity is reached. Writers for the same conversation are not
serialized: the last save wins.

Dependencies: collections (stdlib), rag_starter.models.conversation
System role: Conversation history storage for the chat service
"""

import logging
import secrets
import time
from collections import OrderedDict

from rag_starter.models.conversation import ConversationSummary, ConversationTurn

logger = logging.getLogger(__name__)


def new_conversation_id() -> str:
    """Generate an ID shaped like conv_<epoch ms>_<9 random chars>."""
    return f"conv_{int(time.time() * 1000)}_{secrets.token_hex(5)[:9]}"


class ConversationStore:
    """LRU-bounded map of conversation ID to ordered turns."""

    def __init__(self, capacity: int = 1000) -> None:
        """
        Initialize store.

        Args:
            capacity: Maximum conversations kept before eviction

        Raises:
            ValueError: When capacity is not positive
        """
        if capacity <= 0:
            raise ValueError("capacity must be positive")
        self._capacity = capacity
        self._conversations: OrderedDict[str, list[ConversationTurn]] = OrderedDict()

    def create(self) -> str:
        """Create an empty conversation and return its ID."""
        conversation_id = new_conversation_id()
        self.save(conversation_id, [])
        return conversation_id

    def get(self, conversation_id: str) -> list[ConversationTurn] | None:
        """
        Get a copy of a conversation's turns.

        Args:
            conversation_id: Conversation ID

        Returns:
            list[ConversationTurn] | None: Turns in order, or None when unknown
        """
        turns = self._conversations.get(conversation_id)
        if turns is None:
            return None
        self._conversations.move_to_end(conversation_id)
        return list(turns)

    def save(self, conversation_id: str, turns: list[ConversationTurn]) -> None:
        """Replace a conversation's turns, creating it when needed."""
        self._conversations[conversation_id] = list(turns)
        self._conversations.move_to_end(conversation_id)
        self._evict()

    def append(self, conversation_id: str, turn: ConversationTurn) -> None:
        """Append one turn, creating the conversation when needed."""
        turns = self._conversations.get(conversation_id, [])
        turns.append(turn)
        self.save(conversation_id, turns)

    def delete(self, conversation_id: str) -> bool:
        """
        Delete a conversation.

        Returns:
            bool: True when it existed
        """
        return self._conversations.pop(conversation_id, None) is not None

    def list_summaries(self) -> list[ConversationSummary]:
        """Summarize every stored conversation, least recently used first."""
        return [
            ConversationSummary(
                id=conversation_id,
                message_count=len(turns),
                last_message=turns[-1].timestamp if turns else None,
            )
            for conversation_id, turns in self._conversations.items()
        ]

    def _evict(self) -> None:
        while len(self._conversations) > self._capacity:
            evicted_id, _ = self._conversations.popitem(last=False)
            logger.info(f"{__name__}:_evict - Evicted conversation {evicted_id}")
