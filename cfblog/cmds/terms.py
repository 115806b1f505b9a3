"""Category and tag commands for the cfblog CLI."""

import typer

from ..utils.client_factory import get_client_and_formatter
from ..app import handle_exceptions

app = typer.Typer()

TERM_COLUMNS = ["id", "name", "slug", "count"]


@app.command()
@handle_exceptions
def categories(
    ctx: typer.Context,
    per_page: int = typer.Option(100, "--per-page", min=1, max=100, help="Number of categories"),
) -> None:
    """List categories."""
    client, formatter = get_client_and_formatter(ctx)
    terms = client.get_categories(per_page)
    formatter.render(terms, format=ctx.obj["output_format"], columns=TERM_COLUMNS, title="Categories")


@app.command()
@handle_exceptions
def tags(
    ctx: typer.Context,
    per_page: int = typer.Option(100, "--per-page", min=1, max=100, help="Number of tags"),
) -> None:
    """List tags."""
    client, formatter = get_client_and_formatter(ctx)
    terms = client.get_tags(per_page)
    formatter.render(terms, format=ctx.obj["output_format"], columns=TERM_COLUMNS, title="Tags")
