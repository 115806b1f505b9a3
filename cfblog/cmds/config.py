"""Configuration management commands for the cfblog CLI.

This module provides commands for creating, listing, switching and
removing configuration profiles.
"""

from typing import Optional

import typer
from rich.console import Console

from ..client import WordPressClient
from ..config import DEFAULT_API_URL, DEFAULT_SITE_URL, PAGE_SIZE, Profile
from ..app import handle_exceptions

app = typer.Typer()
console = Console()


@app.command()
@handle_exceptions
def init(
    ctx: typer.Context,
    profile_name: str = typer.Option("default", "--name", help="Profile name"),
    api_url: str = typer.Option(DEFAULT_API_URL, "--api-url", help="WordPress site root"),
    site_url: str = typer.Option(DEFAULT_SITE_URL, "--site-url", help="Public blog URL"),
    page_size: int = typer.Option(PAGE_SIZE, "--page-size", help="Posts per listing page"),
    timeout: Optional[float] = typer.Option(None, "--timeout", help="Request timeout in seconds"),
    fetch_concurrency: int = typer.Option(1, "--fetch-concurrency", help="Parallel page fetches for bulk operations"),
    check: bool = typer.Option(False, "--check", help="Test the connection before saving"),
) -> None:
    """Create a configuration profile.

    Examples:
        # Profile for the default site
        cfblog config init

        # Named profile for another WordPress site
        cfblog config init --name staging --api-url https://wp.example.com --check
    """
    config_manager = ctx.obj["config_manager"]

    if check:
        candidate = Profile(name=profile_name, api_url=api_url, timeout=timeout or 10)
        if not WordPressClient(candidate).test_connection():
            console.print(f"[red]Could not reach {candidate.api_root}[/red]")
            raise typer.Exit(1)
        console.print("[green]✓[/green] Connection successful")

    profile = config_manager.create_profile(
        profile_name,
        api_url=api_url,
        site_url=site_url,
        page_size=page_size,
        timeout=timeout,
        fetch_concurrency=fetch_concurrency,
    )
    console.print(f"[green]✓[/green] Created profile '{profile.name}'")


@app.command("list")
@handle_exceptions
def list_profiles(ctx: typer.Context) -> None:
    """List configuration profiles."""
    config_manager = ctx.obj["config_manager"]
    formatter = ctx.obj["output_formatter"]
    formatter.render(
        config_manager.list_profiles(),
        format=ctx.obj["output_format"],
        columns=["name", "api_url", "site_url", "page_size", "active"],
        title="Profiles",
    )


@app.command()
@handle_exceptions
def use(
    ctx: typer.Context,
    name: str = typer.Argument(..., help="Profile to activate"),
) -> None:
    """Set the active profile."""
    ctx.obj["config_manager"].set_active_profile(name)
    console.print(f"[green]✓[/green] Active profile is now '{name}'")


@app.command()
@handle_exceptions
def show(ctx: typer.Context) -> None:
    """Show the profile in effect, including environment overrides."""
    formatter = ctx.obj["output_formatter"]
    profile = ctx.obj["profile"]
    data = profile.model_dump()
    data["api_root"] = profile.api_root
    formatter.render(data, format=ctx.obj["output_format"], title="Profile")


@app.command()
@handle_exceptions
def delete(
    ctx: typer.Context,
    name: str = typer.Argument(..., help="Profile to delete"),
) -> None:
    """Delete a profile."""
    ctx.obj["config_manager"].delete_profile(name)
    console.print(f"[green]✓[/green] Deleted profile '{name}'")
