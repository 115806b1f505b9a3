"""Main Typer application for the cfblog CLI.

This module contains the main Typer app instance and registers all command
groups. It handles global options like profile, debug mode and output
format, and sets up logging through Rich.
"""

import logging
import os
import sys
from functools import wraps
from pathlib import Path
from typing import Optional

import click
import typer
from rich.console import Console
from rich.logging import RichHandler

from . import __version__
from .config import ConfigManager, apply_environment
from .render import OutputFormatter, FORMATS
from .exceptions import CFBlogError, ConfigError
from .utils.exceptions import format_error_for_user

app = typer.Typer(
    name="cfblog",
    help="Browse a WordPress-backed blog and build its RSS feed",
    context_settings={"help_option_names": ["-h", "--help"]},
    no_args_is_help=True,
    rich_markup_mode="rich",
)

console = Console()
error_console = Console(stderr=True)
output_formatter = OutputFormatter(console)


def get_config_manager() -> ConfigManager:
    """Config manager rooted at CFBLOG_CONFIG_DIR or ~/.cfblog."""
    config_dir = os.getenv("CFBLOG_CONFIG_DIR")
    return ConfigManager(Path(config_dir) if config_dir else None)


def configure_logging(debug: bool) -> None:
    """Route library logging through Rich on stderr."""
    root = logging.getLogger("cfblog")
    root.handlers.clear()
    handler = RichHandler(console=error_console, show_path=debug, rich_tracebacks=debug)
    root.addHandler(handler)
    root.setLevel(logging.DEBUG if debug else logging.WARNING)
    root.propagate = False


def version_callback(value: bool) -> None:
    """Show version and exit."""
    if value:
        typer.echo(f"cfblog {__version__}")
        raise typer.Exit()


@app.callback()
def main(
    ctx: typer.Context,
    profile: Optional[str] = typer.Option(
        None,
        "--profile",
        "-p",
        help="Configuration profile to use",
    ),
    debug: bool = typer.Option(
        False,
        "--debug",
        help="Enable debug output",
    ),
    output_format: Optional[str] = typer.Option(
        None,
        "--output",
        "-o",
        help="Output format (table, json, yaml)",
    ),
    version: Optional[bool] = typer.Option(
        None,
        "--version",
        callback=version_callback,
        is_eager=True,
        help="Show version and exit",
    ),
) -> None:
    """cfblog - content gateway for a WordPress-backed blog.

    Examples:
        # List the first page of posts
        cfblog posts list

        # Show a post by slug
        cfblog posts get hello-world

        # Write the RSS feed to a file
        cfblog feed rss --out rss.xml
    """
    configure_logging(debug)

    if output_format and output_format.lower() not in FORMATS:
        error_console.print(f"[red]Unknown output format: {output_format}[/red]")
        raise typer.Exit(2)

    ctx.ensure_object(dict)
    ctx.obj["debug"] = debug
    ctx.obj["output_format"] = output_format
    ctx.obj["console"] = console
    ctx.obj["output_formatter"] = output_formatter

    try:
        config_manager = get_config_manager()
        if profile:
            profile_obj = apply_environment(config_manager.get_profile(profile))
        else:
            profile_obj = config_manager.get_default_profile()
    except ConfigError as e:
        error_console.print(f"[red]{format_error_for_user(e, debug)}[/red]")
        raise typer.Exit(1)

    ctx.obj["config_manager"] = config_manager
    ctx.obj["profile"] = profile_obj

    if debug:
        error_console.print(f"[dim]Using profile: {profile_obj.name} ({profile_obj.api_url})[/dim]")


def handle_exceptions(func):
    """Decorator to handle common exceptions in commands."""
    @wraps(func)
    def wrapper(*args, **kwargs):
        try:
            return func(*args, **kwargs)
        except typer.Exit:
            raise
        except KeyboardInterrupt:
            error_console.print("\n[yellow]Operation cancelled by user[/yellow]")
            raise typer.Exit(130)
        except Exception as e:
            ctx = click.get_current_context(silent=True)
            debug = ctx.obj.get("debug", False) if ctx and ctx.obj else False
            if debug and not isinstance(e, CFBlogError):
                error_console.print_exception(show_locals=False)
            error_console.print(f"[red]{format_error_for_user(e, debug)}[/red]")
            if not debug:
                error_console.print("[dim]Use --debug for more details[/dim]")
            raise typer.Exit(1)
    return wrapper


_registered = False


def register_commands() -> None:
    """Register all command groups with the main app."""
    global _registered
    if _registered:
        return
    _registered = True

    from .cmds import (
        posts_app,
        pages_app,
        terms_app,
        comments_app,
        site_app,
        feed_app,
        config_app,
    )

    app.add_typer(posts_app, name="posts", help="Browse posts")
    app.add_typer(pages_app, name="pages", help="Browse pages")
    app.add_typer(terms_app, name="terms", help="List categories and tags")
    app.add_typer(comments_app, name="comments", help="Read comments")
    app.add_typer(site_app, name="site", help="Site information, settings and links")
    app.add_typer(feed_app, name="feed", help="Build the RSS feed")
    app.add_typer(config_app, name="config", help="Manage configuration")


def cli():
    """Entry point for the CLI."""
    register_commands()

    try:
        app()
    except KeyboardInterrupt:
        error_console.print("\n[yellow]Operation cancelled by user[/yellow]")
        sys.exit(130)


if __name__ == "__main__":
    cli()
