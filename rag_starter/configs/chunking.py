"""
Chunking configuration settings.

Dependencies: pydantic, pydantic_settings
System role: Text chunker defaults for document ingestion
"""

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class ChunkingSettings(BaseSettings):
    """Settings for splitting extracted document text."""

    model_config = SettingsConfigDict(
        env_prefix="CHUNKING_",
        env_file=".env",
        case_sensitive=False,
        extra="ignore",
    )

    chunk_size: int = Field(
        default=1000,
        description="Maximum chunk size in characters",
    )
    chunk_overlap: int = Field(
        default=200,
        description="Overlap between consecutive chunks",
    )
