"""Exception classes for the cfblog content gateway.

This module defines custom exception classes used throughout the application
for proper error handling and user feedback.
"""

from typing import Optional, Dict, Any


class CFBlogError(Exception):
    """Base exception class for all cfblog errors."""

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None) -> None:
        """Initialize the exception.

        Args:
            message: Human-readable error message
            details: Optional additional error details
        """
        super().__init__(message)
        self.message = message
        self.details = details or {}


class ConfigError(CFBlogError):
    """Exception raised for configuration-related errors."""
    pass


class APIError(CFBlogError):
    """Base exception for upstream API errors."""

    def __init__(
        self,
        message: str,
        status_code: Optional[int] = None,
        response_data: Optional[Any] = None
    ) -> None:
        """Initialize the exception.

        Args:
            message: Human-readable error message
            status_code: HTTP status code
            response_data: Raw response data from the API
        """
        super().__init__(message)
        self.status_code = status_code
        self.response_data = response_data


class UpstreamRequestError(APIError):
    """Exception raised when the WordPress API answers with a non-2xx status."""

    def __init__(self, status_code: int, status_text: str = "", body: str = "") -> None:
        """Initialize the exception.

        Args:
            status_code: HTTP status code
            status_text: HTTP reason phrase
            body: Response body, empty when it could not be read
        """
        super().__init__(
            f"WordPress API request failed: {status_code} {status_text} - {body}",
            status_code=status_code,
            response_data=body,
        )
        self.status_text = status_text
        self.body = body


class DecodeError(APIError):
    """Exception raised when a response body is not valid JSON."""
    pass


class FeedError(CFBlogError):
    """Exception raised when the RSS feed cannot be assembled."""
    pass


class OutputFormatError(CFBlogError):
    """Exception raised when data cannot be rendered in the requested format."""
    pass
