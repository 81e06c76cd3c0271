"""Shared library utilities."""

from src.core.ignore_files import should_ignore_file
from src.core.llm import build_chat_completion, is_rate_limit_error
from src.core.logging import get_logger

__all__ = [
    "build_chat_completion",
    "is_rate_limit_error",
    "get_logger",
    "should_ignore_file",
]
