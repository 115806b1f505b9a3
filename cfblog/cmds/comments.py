"""Comment commands for the cfblog CLI."""

import typer
from rich.console import Console
from rich.markup import escape
from rich.tree import Tree

from ..models import CommentTree
from ..normalize import html_to_text
from ..utils.client_factory import get_client_and_formatter
from ..app import handle_exceptions

app = typer.Typer()
console = Console()


@app.command("list")
@handle_exceptions
def list_comments(
    ctx: typer.Context,
    post_id: int = typer.Argument(..., help="Post id"),
    per_page: int = typer.Option(100, "--per-page", min=1, max=100, help="Maximum number of comments"),
) -> None:
    """Show the comment threads of a post."""
    client, formatter = get_client_and_formatter(ctx)
    comments = client.get_comments_by_post_id(post_id, per_page)

    output_format = ctx.obj["output_format"]
    if output_format in ("json", "yaml"):
        formatter.render(comments, format=output_format)
        return

    if not comments:
        console.print("[dim]No comments[/dim]")
        return

    tree = CommentTree(comments)
    root = Tree(f"[bold]Comments on post {post_id}[/bold] ({len(tree)})")
    nodes = {}
    for level, comment in tree.walk():
        text = html_to_text(comment.content_html, 80) or ""
        label = (
            f"[cyan]{escape(comment.author_name)}[/cyan] "
            f"[dim]{comment.date:%Y-%m-%d %H:%M}[/dim]: {escape(text)}"
        )
        parent = nodes.get(comment.parent, root) if level else root
        nodes[comment.id] = parent.add(label)
    console.print(root)
