"""
HTTP API configuration settings.

CORS origins, upload limits, conversation store capacity, and server binding.

Dependencies: pydantic, pydantic_settings
System role: Web layer configuration
"""

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class APISettings(BaseSettings):
    """FastAPI server configuration."""

    model_config = SettingsConfigDict(
        env_prefix="API_",
        env_file=".env",
        case_sensitive=False,
        extra="ignore",
    )

    allowed_origins: list[str] = Field(
        default=["http://localhost:3000"],
        description="CORS allowed origins (JSON list in the environment)",
    )
    max_upload_size_mb: int = Field(default=10, description="Upload size limit in MB")
    conversation_capacity: int = Field(
        default=1000,
        description="Conversations kept in memory before LRU eviction",
    )
    host: str = Field(default="0.0.0.0", description="Bind host")
    port: int = Field(default=5001, description="Bind port")
