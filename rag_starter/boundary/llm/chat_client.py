"""
OpenAI chat-completion client.

Single-shot and streamed completions over LangChain messages.

Dependencies: langchain_openai, langchain_core, rag_starter.core.exceptions
System role: Chat-completion adapter
"""

import logging
from collections.abc import AsyncIterator

from langchain_core.messages import BaseMessage
from langchain_openai import ChatOpenAI

from rag_starter.core.exceptions import CompletionError

logger = logging.getLogger(__name__)


def _content_text(content) -> str:
    """Flatten message content that may arrive as a list of parts."""
    if isinstance(content, list):
        return "".join(
            item if isinstance(item, str) else (item.get("text", "") if isinstance(item, dict) else str(item))
            for item in content
        )
    return str(content)


class OpenAIChatClient:
    """Chat-completion client backed by ChatOpenAI."""

    def __init__(self, api_key: str, model: str = "gpt-3.5-turbo") -> None:
        """
        Initialize chat model.

        Args:
            api_key: OpenAI API key
            model: Chat-completion model ID

        Raises:
            ValueError: When api_key is empty
        """
        if not api_key:
            raise ValueError("OpenAI api_key cannot be empty")

        self._model_id = model
        self._model = ChatOpenAI(model=model, api_key=api_key)

    async def complete(
        self,
        messages: list[BaseMessage],
        temperature: float,
        max_tokens: int,
    ) -> str:
        """
        Request a full completion.

        Args:
            messages: Prompt messages
            temperature: Sampling temperature
            max_tokens: Completion token limit

        Returns:
            str: Completion text

        Raises:
            CompletionError: When the API call fails
        """
        try:
            result = await self._model.bind(
                temperature=temperature,
                max_tokens=max_tokens,
            ).ainvoke(messages)
        except Exception as e:
            raise CompletionError(
                f"Failed to generate chat completion: {e}",
                details={"model": self._model_id},
            ) from e

        return _content_text(result.content)

    async def stream_complete(
        self,
        messages: list[BaseMessage],
        temperature: float,
        max_tokens: int,
    ) -> AsyncIterator[str]:
        """
        Stream completion fragments as they arrive.

        Args:
            messages: Prompt messages
            temperature: Sampling temperature
            max_tokens: Completion token limit

        Yields:
            str: Non-empty text fragments in arrival order

        Raises:
            CompletionError: When the stream cannot start or aborts midway
        """
        model = self._model.bind(temperature=temperature, max_tokens=max_tokens)
        try:
            async for chunk in model.astream(messages):
                token = _content_text(chunk.content) if chunk.content else ""
                if token:
                    yield token
        except Exception as e:
            raise CompletionError(
                f"Streaming chat completion failed: {e}",
                streaming=True,
                details={"model": self._model_id},
            ) from e
