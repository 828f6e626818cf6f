"""
LLM boundary layer.

OpenAI embedding and chat-completion clients.
"""

from rag_starter.boundary.llm.chat_client import OpenAIChatClient
from rag_starter.boundary.llm.embedding_client import OpenAIEmbeddingClient

__all__ = ["OpenAIChatClient", "OpenAIEmbeddingClient"]
