"""User-facing error formatting for the cfblog CLI."""

import requests

from ..exceptions import APIError, ConfigError, DecodeError, FeedError, UpstreamRequestError


def format_error_for_user(error: Exception, debug: bool = False) -> str:
    """Format an error message for user display.

    Args:
        error: The exception to format
        debug: Whether to include debug information

    Returns:
        Formatted error message
    """
    if isinstance(error, ConfigError):
        return f"Configuration error: {error.message}"

    if isinstance(error, UpstreamRequestError):
        message = f"WordPress API error: {error.status_code} {error.status_text}".rstrip()
        if error.body and debug:
            message += f"\nResponse: {error.body[:500]}"
        return message

    if isinstance(error, DecodeError):
        message = "WordPress API returned invalid JSON"
        if debug:
            message += f"\n{error.message}"
        return message

    if isinstance(error, APIError):
        message = f"API error: {error.message}"
        if error.status_code:
            message += f"\nStatus code: {error.status_code}"
        return message

    if isinstance(error, FeedError):
        message = "RSS feed generation failed"
        if debug and error.__cause__ is not None:
            message += f"\nCause: {error.__cause__}"
        return message

    if isinstance(error, requests.exceptions.ConnectionError):
        return f"Could not connect to WordPress: {error}"

    if isinstance(error, requests.exceptions.Timeout):
        return f"WordPress did not answer in time: {error}"

    if debug:
        return f"Error: {error}\nType: {type(error).__name__}"
    return f"Error: {error}"
