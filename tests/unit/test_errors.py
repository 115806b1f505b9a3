"""Unit tests for exception classes and user-facing error messages."""

import requests

from cfblog.exceptions import (
    APIError,
    CFBlogError,
    ConfigError,
    DecodeError,
    FeedError,
    UpstreamRequestError,
)
from cfblog.utils.exceptions import format_error_for_user


class TestExceptions:
    """Test cases for the exception hierarchy."""

    def test_hierarchy(self):
        assert issubclass(UpstreamRequestError, APIError)
        assert issubclass(DecodeError, APIError)
        assert issubclass(APIError, CFBlogError)
        assert issubclass(FeedError, CFBlogError)

    def test_upstream_message(self):
        error = UpstreamRequestError(404, "Not Found", '{"code":"rest_no_route"}')

        assert error.message == 'WordPress API request failed: 404 Not Found - {"code":"rest_no_route"}'
        assert error.response_data == '{"code":"rest_no_route"}'

    def test_details_default(self):
        assert CFBlogError("x").details == {}


class TestFormatErrorForUser:
    """Test cases for format_error_for_user."""

    def test_config_error(self):
        assert format_error_for_user(ConfigError("missing")) == "Configuration error: missing"

    def test_upstream_error(self):
        """Test the response body is only shown in debug mode."""
        error = UpstreamRequestError(500, "Internal Server Error", "trace")

        assert format_error_for_user(error) == "WordPress API error: 500 Internal Server Error"
        assert "Response: trace" in format_error_for_user(error, debug=True)

    def test_decode_error(self):
        assert format_error_for_user(DecodeError("bad")) == "WordPress API returned invalid JSON"

    def test_feed_error_cause(self):
        """Test the underlying cause is shown in debug mode."""
        try:
            try:
                raise ValueError("no posts")
            except ValueError as e:
                raise FeedError("feed failed") from e
        except FeedError as feed_error:
            error = feed_error

        assert format_error_for_user(error) == "RSS feed generation failed"
        assert "Cause: no posts" in format_error_for_user(error, debug=True)

    def test_transport_errors(self):
        assert format_error_for_user(requests.exceptions.ConnectionError("refused")).startswith("Could not connect")
        assert format_error_for_user(requests.exceptions.Timeout("slow")).startswith("WordPress did not answer")

    def test_generic_error(self):
        assert format_error_for_user(RuntimeError("boom")) == "Error: boom"
        assert "Type: RuntimeError" in format_error_for_user(RuntimeError("boom"), debug=True)
