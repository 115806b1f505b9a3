"""Client factory for the CLI.

Builds a WordPressClient from the profile stored in the Typer context.
"""

from typing import Optional, Tuple

import typer

from ..client import WordPressClient
from ..config import Profile
from ..exceptions import ConfigError
from ..render import OutputFormatter


def create_client(profile: Optional[Profile]) -> WordPressClient:
    """Create a client for a profile.

    Raises:
        ConfigError: If no profile is available
    """
    if profile is None:
        raise ConfigError("No profile configured. Run 'cfblog config init' or set CFBLOG_API.")
    return WordPressClient(profile=profile)


def get_client_from_context(ctx: typer.Context) -> WordPressClient:
    """Convenience function to get client from context."""
    return create_client(ctx.obj.get("profile"))


def get_client_and_formatter(ctx: typer.Context) -> Tuple[WordPressClient, OutputFormatter]:
    """Get both client and formatter from context.

    Args:
        ctx: Typer context

    Returns:
        Tuple of (WordPressClient, OutputFormatter)
    """
    client = get_client_from_context(ctx)
    formatter = ctx.obj["output_formatter"]
    return client, formatter
