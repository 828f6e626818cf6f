"""
Vector store configuration settings.

Manages Pinecone connection and serverless index settings.

Dependencies: pydantic, pydantic_settings
System role: Vector database configuration for RAG retrieval
"""

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class VectorStoreSettings(BaseSettings):
    """Pinecone vector store configuration."""

    model_config = SettingsConfigDict(
        env_prefix="PINECONE_",
        env_file=".env",
        case_sensitive=False,
        extra="ignore",
    )

    api_key: str = Field(default="", description="Pinecone API key")
    index_name: str = Field(default="rag-starter-kit", description="Pinecone index name")
    cloud: str = Field(default="aws", description="Serverless cloud provider")
    region: str = Field(default="us-east-1", description="Serverless region")
    metric: str = Field(default="cosine", description="Similarity metric for new indexes")
    namespace: str = Field(default="", description="Namespace for all records")

    top_k: int = Field(default=5, description="Number of chunks retrieved per question")
    upsert_batch_size: int = Field(
        default=100,
        description="Records per upsert request",
    )
