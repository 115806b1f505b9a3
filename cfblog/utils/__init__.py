"""Utility modules for cfblog.

This package contains helpers shared by the command modules: client
construction from the CLI context and user-facing error formatting.
"""

from .exceptions import format_error_for_user
from .client_factory import get_client_and_formatter

__all__ = [
    "format_error_for_user",
    "get_client_and_formatter",
]
