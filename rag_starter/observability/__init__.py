"""
Observability module.

Provides logging configuration, correlation ID tracking, and request middleware.
"""

from rag_starter.observability.correlation import get_correlation_id, set_correlation_id
from rag_starter.observability.logger import configure_logging

__all__ = ["configure_logging", "get_correlation_id", "set_correlation_id"]
