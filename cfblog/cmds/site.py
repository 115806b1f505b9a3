"""Site information commands for the cfblog CLI.

This module provides commands for viewing the site metadata, settings,
links and authors, plus a helper that prints the pagination window a
listing page would show.
"""

import typer
from rich.console import Console

from ..pagination import calc_pagination
from ..utils.client_factory import get_client_and_formatter
from ..app import handle_exceptions

app = typer.Typer()
console = Console()


@app.command()
@handle_exceptions
def info(ctx: typer.Context) -> None:
    """Show the site name and description."""
    client, formatter = get_client_and_formatter(ctx)
    formatter.render(client.get_site_info(), format=ctx.obj["output_format"], title="Site")


@app.command()
@handle_exceptions
def settings(ctx: typer.Context) -> None:
    """Show site settings; falls back to empty settings when unavailable."""
    client, formatter = get_client_and_formatter(ctx)
    result = client.fetch_settings()
    if result.status == "failed":
        console.print(f"[yellow]Settings unavailable, showing defaults: {result.error}[/yellow]")

    output_format = ctx.obj["output_format"]
    data = result.value.model_dump(exclude_none=output_format not in ("json", "yaml"))
    if output_format in ("json", "yaml"):
        formatter.render(data, format=output_format)
        return
    rows = [{"setting": key, "value": value} for key, value in data.items()]
    formatter.render(rows, format="table", title="Site Settings")


@app.command()
@handle_exceptions
def links(
    ctx: typer.Context,
    per_page: int = typer.Option(200, "--per-page", min=1, help="Maximum number of links"),
) -> None:
    """List visible links."""
    client, formatter = get_client_and_formatter(ctx)
    result = client.fetch_links(per_page)
    if result.status == "failed":
        console.print(f"[yellow]Links unavailable: {result.error}[/yellow]")
    formatter.render(
        result.value,
        format=ctx.obj["output_format"],
        columns=["id", "name", "url", "description"],
        title="Links",
    )


@app.command()
@handle_exceptions
def user(
    ctx: typer.Context,
    user_id: int = typer.Argument(..., help="User id"),
) -> None:
    """Show an author."""
    client, formatter = get_client_and_formatter(ctx)
    found = client.get_user_by_id(user_id)
    if found is None:
        console.print(f"[yellow]No user with id {user_id}[/yellow]")
        raise typer.Exit(1)
    formatter.render(found, format=ctx.obj["output_format"])


@app.command()
def pagination(
    ctx: typer.Context,
    current: int = typer.Argument(..., min=1, help="Current page"),
    total: int = typer.Argument(..., min=1, help="Total number of pages"),
    window: int = typer.Option(5, "--window", min=1, help="Number of page links"),
) -> None:
    """Print the page links shown around CURRENT."""
    result = calc_pagination(current, total, window)
    formatter = ctx.obj["output_formatter"]
    formatter.render(result, format=ctx.obj["output_format"], title="Pagination")
