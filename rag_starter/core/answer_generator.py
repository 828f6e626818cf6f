"""
Answer generation from retrieved context.

Builds context-constrained prompts and calls the chat-completion client,
either for one full answer or as a stream of fragments.

Dependencies: langchain_core, rag_starter.core.prompts, rag_starter.core.exceptions
System role: Completion orchestration for RAG answers
"""

import inspect
import logging
from collections.abc import AsyncIterator, Awaitable, Callable

from langchain_core.messages import AIMessage, BaseMessage, HumanMessage

from rag_starter.core.exceptions import CompletionError
from rag_starter.core.prompts import ANSWER_PROMPT, STREAMING_PROMPT
from rag_starter.models.conversation import ConversationTurn, Role

logger = logging.getLogger(__name__)

TokenSink = Callable[[str], Awaitable[None] | None]


def to_langchain_messages(turns: list[ConversationTurn]) -> list[BaseMessage]:
    """Convert stored conversation turns to LangChain messages."""
    return [
        HumanMessage(content=turn.content) if turn.role == Role.USER else AIMessage(content=turn.content)
        for turn in turns
    ]


def build_answer_messages(question: str, context: str) -> list[BaseMessage]:
    """System instruction plus the question; no prior turns."""
    return ANSWER_PROMPT.invoke({"context": context, "question": question}).to_messages()


def build_streaming_messages(
    prior_turns: list[ConversationTurn],
    context: str,
    question: str | None = None,
) -> list[BaseMessage]:
    """System instruction, prior turns, then the current question when given."""
    messages = STREAMING_PROMPT.invoke({
        "context": context,
        "history": to_langchain_messages(prior_turns),
    }).to_messages()
    if question:
        messages.append(HumanMessage(content=question))
    return messages


class AnswerGenerator:
    """
    Completion orchestrator.

    Sampling parameters are fixed per mode and come from configuration.
    """

    def __init__(
        self,
        chat_client,
        answer_temperature: float = 0.2,
        stream_temperature: float = 0.7,
        max_tokens: int = 1000,
    ) -> None:
        """
        Initialize answer generator.

        Args:
            chat_client: Object exposing async complete() and stream_complete()
            answer_temperature: Temperature for single-shot answers
            stream_temperature: Temperature for streamed answers
            max_tokens: Completion token limit for both modes
        """
        self._chat_client = chat_client
        self._answer_temperature = answer_temperature
        self._stream_temperature = stream_temperature
        self._max_tokens = max_tokens

    async def answer(self, question: str, context: str) -> str:
        """
        Produce a full answer grounded in the context.

        Prior conversation turns are deliberately left out.

        Args:
            question: Current user question
            context: Retrieved context (may be empty)

        Returns:
            str: Answer text

        Raises:
            CompletionError: When the completion call fails
        """
        messages = build_answer_messages(question, context)
        logger.info(
            f"{__name__}:answer - Requesting completion, context_len={len(context)}",
        )
        try:
            return await self._chat_client.complete(
                messages,
                temperature=self._answer_temperature,
                max_tokens=self._max_tokens,
            )
        except CompletionError:
            raise
        except Exception as e:
            raise CompletionError(f"Failed to generate answer: {e}") from e

    async def stream_answer(
        self,
        prior_turns: list[ConversationTurn],
        context: str,
        question: str | None = None,
    ) -> AsyncIterator[str]:
        """
        Stream answer fragments in arrival order.

        Args:
            prior_turns: Conversation turns before the current question
            context: Retrieved context (may be empty)
            question: Current user question, sent as the final user message

        Yields:
            str: Text fragments

        Raises:
            CompletionError: When the stream fails to start or aborts
        """
        messages = build_streaming_messages(prior_turns, context, question)
        logger.info(
            f"{__name__}:stream_answer - Starting stream, messages={len(messages)}, "
            f"context_len={len(context)}"
        )
        try:
            async for fragment in self._chat_client.stream_complete(
                messages,
                temperature=self._stream_temperature,
                max_tokens=self._max_tokens,
            ):
                yield fragment
        except CompletionError:
            raise
        except Exception as e:
            raise CompletionError(f"Streaming answer failed: {e}", streaming=True) from e

    async def answer_streaming(
        self,
        prior_turns: list[ConversationTurn],
        context: str,
        on_token: TokenSink,
        question: str | None = None,
    ) -> str:
        """
        Stream an answer into a sink and return the accumulated text.

        Fragments already delivered are not retracted when the stream fails.

        Args:
            prior_turns: Conversation turns before the current question
            context: Retrieved context (may be empty)
            on_token: Called with each fragment; may be sync or async
            question: Current user question, sent as the final user message

        Returns:
            str: Full answer text

        Raises:
            CompletionError: When the stream fails to start or aborts
        """
        parts: list[str] = []
        async for fragment in self.stream_answer(prior_turns, context, question):
            parts.append(fragment)
            result = on_token(fragment)
            if inspect.isawaitable(result):
                await result

        full_answer = "".join(parts)
        logger.info(f"{__name__}:answer_streaming - Streamed {len(parts)} fragments, answer_len={len(full_answer)}")
        return full_answer
