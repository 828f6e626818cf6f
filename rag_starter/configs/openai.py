"""
OpenAI configuration settings.

Embedding and chat-completion models plus the fixed sampling parameters
used by the synchronous and streaming answer modes.

Dependencies: pydantic, pydantic_settings
System role: LLM provider configuration
"""

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class OpenAISettings(BaseSettings):
    """OpenAI embeddings and chat-completion configuration."""

    model_config = SettingsConfigDict(
        env_prefix="OPENAI_",
        env_file=".env",
        case_sensitive=False,
        extra="ignore",
    )

    api_key: str = Field(default="", description="OpenAI API key")
    model: str = Field(default="gpt-3.5-turbo", description="Chat-completion model")
    embedding_model: str = Field(
        default="text-embedding-3-small",
        description="Embedding model ID",
    )
    embedding_dimension: int = Field(
        default=1536,
        description="Embedding vector dimension (must match the Pinecone index)",
    )

    answer_temperature: float = Field(
        default=0.2,
        description="Temperature for single-shot answers (low for factual output)",
    )
    stream_temperature: float = Field(
        default=0.7,
        description="Temperature for streamed answers",
    )
    max_tokens: int = Field(default=1000, description="Max completion tokens per answer")
