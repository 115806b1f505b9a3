"""Page commands for the cfblog CLI."""

from typing import Optional

import typer
from rich.console import Console

from ..utils.client_factory import get_client_and_formatter
from ..app import handle_exceptions

app = typer.Typer()
console = Console()


@app.command()
@handle_exceptions
def get(
    ctx: typer.Context,
    slug: str = typer.Argument(..., help="Page slug"),
) -> None:
    """Show a page by slug."""
    client, formatter = get_client_and_formatter(ctx)

    page = client.get_page_by_slug(slug)
    if page is None:
        console.print(f"[yellow]No page with slug '{slug}'[/yellow]")
        raise typer.Exit(1)

    formatter.render(page, format=ctx.obj["output_format"])


@app.command()
@handle_exceptions
def slugs(
    ctx: typer.Context,
    limit: int = typer.Option(1000, "--limit", min=1, help="Stop after this many slugs"),
    per_page: int = typer.Option(50, "--per-page", min=1, max=100, help="Slugs per request"),
    concurrency: Optional[int] = typer.Option(None, "--concurrency", min=1, max=16, help="Pages fetched in parallel"),
) -> None:
    """Print every page slug, one per line."""
    client, _ = get_client_and_formatter(ctx)
    for slug in client.get_all_page_slugs(limit=limit, per_page=per_page, concurrency=concurrency):
        console.print(slug, markup=False, highlight=False)
