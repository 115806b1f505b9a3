"""Post commands for the cfblog CLI.

This module provides commands for listing posts page by page, showing a
single post, and collecting every slug or post for static builds and
archives.
"""

from pathlib import Path
from typing import Optional

import typer
from rich.console import Console

from ..markup import md_to_html
from ..pagination import calc_pagination
from ..utils.client_factory import get_client_and_formatter
from ..app import handle_exceptions

app = typer.Typer()
console = Console()

POST_COLUMNS = ["id", "slug", "title", "date", "categories", "tags"]


@app.command("list")
@handle_exceptions
def list_posts(
    ctx: typer.Context,
    page: int = typer.Option(1, "--page", min=1, help="Page number"),
    per_page: Optional[int] = typer.Option(None, "--per-page", min=1, max=100, help="Posts per page"),
    category: Optional[int] = typer.Option(None, "--category", help="Only posts in this category id"),
    tag: Optional[int] = typer.Option(None, "--tag", help="Only posts with this tag id"),
) -> None:
    """List one page of posts.

    Examples:
        # First page
        cfblog posts list

        # Third page of a category
        cfblog posts list --category 4 --page 3
    """
    client, formatter = get_client_and_formatter(ctx)

    if category is not None:
        result = client.get_posts_by_category(category, page, per_page)
    elif tag is not None:
        result = client.get_posts_by_tag(tag, page, per_page)
    else:
        result = client.get_posts(page, per_page)

    output_format = ctx.obj["output_format"]
    if output_format in ("json", "yaml"):
        formatter.render(result, format=output_format)
        return

    formatter.render(result.posts, format="table", columns=POST_COLUMNS, title=f"Posts (page {page})")
    window = calc_pagination(page, result.total_pages or 1)
    console.print(
        f"[dim]Page {page} of {result.total_pages or 1} ({result.total} posts); "
        f"pages {window.pages[0]}-{window.pages[-1]}"
        f"{', prev' if window.has_prev else ''}{', next' if window.has_next else ''}[/dim]"
    )


@app.command()
@handle_exceptions
def get(
    ctx: typer.Context,
    slug: str = typer.Argument(..., help="Post slug"),
    html: bool = typer.Option(False, "--html", help="Print the rendered content only"),
) -> None:
    """Show a post by slug."""
    client, formatter = get_client_and_formatter(ctx)

    post = client.get_post_by_slug(slug)
    if post is None:
        console.print(f"[yellow]No post with slug '{slug}'[/yellow]")
        raise typer.Exit(1)

    if html:
        console.print(md_to_html(post.content or ""), markup=False, highlight=False, soft_wrap=True)
        return

    formatter.render(post, format=ctx.obj["output_format"])


@app.command()
@handle_exceptions
def slugs(
    ctx: typer.Context,
    limit: int = typer.Option(1000, "--limit", min=1, help="Stop after this many slugs"),
    concurrency: Optional[int] = typer.Option(None, "--concurrency", min=1, max=16, help="Pages fetched in parallel"),
) -> None:
    """Print every post slug, one per line."""
    client, _ = get_client_and_formatter(ctx)
    for slug in client.get_all_post_slugs(limit=limit, concurrency=concurrency):
        console.print(slug, markup=False, highlight=False)


@app.command()
@handle_exceptions
def archive(
    ctx: typer.Context,
    limit: int = typer.Option(2000, "--limit", min=1, help="Stop after this many posts"),
    concurrency: Optional[int] = typer.Option(None, "--concurrency", min=1, max=16, help="Pages fetched in parallel"),
    out: Optional[Path] = typer.Option(None, "--out", help="Write the archive to a JSON or YAML file"),
) -> None:
    """List all posts for the archive.

    Examples:
        # Save the archive for a static build
        cfblog posts archive --out archive.json
    """
    client, formatter = get_client_and_formatter(ctx)
    posts = client.get_all_posts(limit=limit, concurrency=concurrency)

    if out is not None:
        formatter.render_to_file(posts, out)
        console.print(f"[green]✓[/green] Wrote {len(posts)} posts to {out}")
        return

    formatter.render(
        posts,
        format=ctx.obj["output_format"],
        columns=["id", "slug", "title", "date"],
        title=f"Archive ({len(posts)} posts)",
    )
