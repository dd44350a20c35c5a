# ABOUTME: The `readdit voices` command: Reddit threads that mention a book title.
# ABOUTME: Shows up to five engaged posts across the configured subreddits.

import asyncio

import click
from rich.console import Console
from rich.markup import escape
from rich.style import Style
from rich.table import Table
from rich.text import Text

from readdit.catalog.types import CommunityPost
from readdit.cli.session import engine_session
from readdit.text.generator import format_relative_time


async def _voices(title: str) -> list[CommunityPost]:
    async with engine_session() as engine:
        return await engine.load_voices(title)


@click.command("voices")
@click.argument("title")
def voices(title: str) -> None:
    """Show Reddit threads that mention TITLE."""
    console = Console()
    posts = asyncio.run(_voices(title))

    if not posts:
        console.print("[yellow]No Reddit voices found.[/yellow]")
        return

    table = Table()
    table.add_column("Thread", style="bold")
    table.add_column("Subreddit")
    table.add_column("Upvotes", justify="right")
    table.add_column("Comments", justify="right")
    table.add_column("When", style="dim")

    for post in posts:
        table.add_row(
            Text(post.title, style=Style(link=post.permalink)),
            f"r/{escape(post.community)}",
            f"{post.ups:,}",
            f"{post.num_comments:,}",
            format_relative_time(post.created_utc),
        )

    console.print(table)
