"""RSS feed commands for the cfblog CLI."""

from pathlib import Path
from typing import Optional

import typer
from rich.console import Console

from ..feed import assemble_feed
from ..utils.client_factory import get_client_and_formatter
from ..app import handle_exceptions

app = typer.Typer()
console = Console()


@app.command()
@handle_exceptions
def rss(
    ctx: typer.Context,
    out: Optional[Path] = typer.Option(None, "--out", help="Write the feed to this file"),
    limit: int = typer.Option(100, "--limit", min=1, help="Number of posts in the feed"),
    site_url: Optional[str] = typer.Option(None, "--site-url", help="Public blog URL used for item links"),
) -> None:
    """Build the RSS feed.

    Examples:
        # Print the feed
        cfblog feed rss

        # Write the latest 20 posts to a file
        cfblog feed rss --limit 20 --out public/rss.xml
    """
    client, _ = get_client_and_formatter(ctx)
    document = assemble_feed(client, site_url=site_url, limit=limit)

    if out is None:
        console.print(document, markup=False, highlight=False, soft_wrap=True)
        return

    out.write_text(document, encoding="utf-8")
    console.print(f"[green]✓[/green] Wrote feed to {out}")
