"""
Chat service for conversational Q&A with RAG.

Orchestrates the chat flow: conversation lookup, retrieval, answer
generation and turn persistence. Supports streaming via stream_message()
for chunked plain-text HTTP responses.

Dependencies: rag_starter.core.retriever, rag_starter.core.answer_generator, rag_starter.boundary.conversations
System role: Chat service orchestration layer
"""

import asyncio
import logging
from collections.abc import AsyncGenerator

from rag_starter.boundary.conversations import ConversationStore, new_conversation_id
from rag_starter.core.answer_generator import AnswerGenerator
from rag_starter.core.exceptions import ConversationNotFoundError, ValidationError
from rag_starter.core.retriever import Retriever
from rag_starter.models.chat import ChatContext, ChatResult, SearchResult
from rag_starter.models.conversation import ConversationSummary, ConversationTurn, Role

logger = logging.getLogger(__name__)

_STREAM_DONE = object()


def _require_text(value: str | None, field: str, message: str) -> str:
    if not value or not value.strip():
        raise ValidationError(message, field=field)
    return value


class ChatService:
    """
    Chat service for conversational Q&A.

    Coordinates retrieval, answer generation and conversation storage for
    multi-turn conversations.
    """

    def __init__(
        self,
        retriever: Retriever,
        answer_generator: AnswerGenerator,
        conversation_store: ConversationStore,
    ) -> None:
        """
        Initialize chat service.

        Args:
            retriever: Retrieval orchestrator
            answer_generator: Completion orchestrator
            conversation_store: Shared conversation store
        """
        self._retriever = retriever
        self._answer_generator = answer_generator
        self._conversations = conversation_store

    def resolve_conversation_id(self, conversation_id: str | None = None) -> str:
        """
        Return the given conversation ID, or a fresh one when absent.

        Nothing is stored here; the conversation exists once its first turn is saved.
        """
        return conversation_id or new_conversation_id()

    async def send_message(
        self,
        message: str,
        conversation_id: str | None = None,
    ) -> ChatResult:
        """
        Answer a message and record both turns.

        Flow:
        1. Validate message
        2. Retrieve context for the message
        3. Generate an answer from the context (no prior turns)
        4. Store user and assistant turns

        Args:
            message: User's message
            conversation_id: Conversation ID (generated when absent)

        Returns:
            ChatResult: Answer, conversation ID, and retrieval context

        Raises:
            ValidationError: Empty message
            EmbeddingError, RetrievalError, CompletionError: Pipeline failures
        """
        _require_text(message, "message", "Message is required")
        conversation_id = self.resolve_conversation_id(conversation_id)

        retrieval = await self._retriever.retrieve(message)
        answer = await self._answer_generator.answer(message, retrieval.context)

        turns = self._conversations.get(conversation_id) or []
        turns.append(ConversationTurn(role=Role.USER, content=message))
        turns.append(ConversationTurn(role=Role.ASSISTANT, content=answer))
        self._conversations.save(conversation_id, turns)

        logger.info(
            f"{__name__}:send_message - Answered message",
            extra={"conversation_id": conversation_id, "chunks_found": len(retrieval.matches)},
        )
        return ChatResult(
            response=answer,
            conversation_id=conversation_id,
            context=ChatContext(
                chunks_found=len(retrieval.matches),
                sources=retrieval.sources,
            ),
        )

    async def stream_message(
        self,
        message: str,
        conversation_id: str | None = None,
    ) -> AsyncGenerator[str, None]:
        """
        Stream answer fragments for a message.

        Flow:
        1. Validate message and retrieve context
        2. Record the user turn
        3. Stream fragments through AnswerGenerator.answer_streaming
        4. Record the accumulated assistant turn once the stream completes

        Args:
            message: User's message
            conversation_id: Conversation ID (generated when absent)

        Yields:
            str: Answer fragments in arrival order

        Raises:
            ValidationError: Empty message
            EmbeddingError, RetrievalError, CompletionError: Pipeline failures
        """
        _require_text(message, "message", "Message is required")
        conversation_id = self.resolve_conversation_id(conversation_id)
        logger.info(f"{__name__}:stream_message - START conversation_id={conversation_id}")

        retrieval = await self._retriever.retrieve(message)

        prior_turns = self._conversations.get(conversation_id) or []
        self._conversations.append(conversation_id, ConversationTurn(role=Role.USER, content=message))

        fragments: asyncio.Queue = asyncio.Queue()
        task = asyncio.create_task(
            self._answer_generator.answer_streaming(
                prior_turns,
                retrieval.context,
                fragments.put,
                question=message,
            )
        )
        task.add_done_callback(lambda _: fragments.put_nowait(_STREAM_DONE))

        try:
            while (fragment := await fragments.get()) is not _STREAM_DONE:
                yield fragment
            answer = await task
        finally:
            if not task.done():
                task.cancel()

        self._conversations.append(
            conversation_id,
            ConversationTurn(role=Role.ASSISTANT, content=answer),
        )
        logger.info(
            f"{__name__}:stream_message - COMPLETE conversation_id={conversation_id}, answer_len={len(answer)}"
        )

    async def search(self, query: str, top_k: int = 5) -> list[SearchResult]:
        """
        Run a raw similarity search.

        Args:
            query: Search text
            top_k: Number of matches

        Returns:
            list[SearchResult]: Matches with text, score and metadata

        Raises:
            ValidationError: Empty query
            EmbeddingError, RetrievalError: Pipeline failures
        """
        _require_text(query, "query", "Query is required")
        retrieval = await self._retriever.retrieve(query, top_k=top_k)
        return [
            SearchResult(
                id=match.id,
                text=match.text,
                score=match.score,
                metadata=match.metadata.to_pinecone(),
            )
            for match in retrieval.matches
        ]

    def create_conversation(self) -> str:
        """Create an empty conversation and return its ID."""
        conversation_id = self._conversations.create()
        logger.info(f"{__name__}:create_conversation - Created {conversation_id}")
        return conversation_id

    def get_history(self, conversation_id: str) -> list[ConversationTurn]:
        """
        Get a conversation's turns.

        Unknown IDs yield an empty history.
        """
        return self._conversations.get(conversation_id) or []

    def delete_conversation(self, conversation_id: str) -> None:
        """
        Delete a conversation.

        Raises:
            ConversationNotFoundError: Unknown conversation ID
        """
        if not self._conversations.delete(conversation_id):
            raise ConversationNotFoundError(conversation_id)
        logger.info(f"{__name__}:delete_conversation - Deleted {conversation_id}")

    def list_conversations(self) -> list[ConversationSummary]:
        """Summarize every stored conversation."""
        return self._conversations.list_summaries()
