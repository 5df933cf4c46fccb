"""Logging configuration and structured logging helpers."""

from curriculum_rag.observability.log_utils import (
    log_exception_with_context,
    log_with_context,
)
from curriculum_rag.observability.logger import configure_logging

__all__ = ["configure_logging", "log_exception_with_context", "log_with_context"]
