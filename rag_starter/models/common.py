"""
Common response models and utilities.

Camel-case base model and error schema shared by all API contracts.

Dependencies: pydantic
System role: Common API response structures
"""

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    """Base model serialized with camelCase keys, accepting either case on input."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class ErrorResponse(BaseModel):
    """Error response schema."""

    error: str = Field(description="Short error title")
    message: str = Field(description="Human-readable error message")
