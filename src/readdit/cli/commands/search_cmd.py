# ABOUTME: The `readdit search` command for title search against Open Library.
# ABOUTME: Prints a table of hits with a short generated snippet per work.

import asyncio

import click
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from readdit.catalog.types import Candidate, WorkMeta
from readdit.cli.session import engine_session
from readdit.result import Result
from readdit.text.generator import format_year, generate_search_snippet, safe_author_name


async def _search(query: str, limit: int) -> Result[list[Candidate]]:
    async with engine_session() as engine:
        return await engine.search(query, limit=limit)


@click.command("search")
@click.argument("query")
@click.option(
    "-n",
    "--limit",
    type=click.IntRange(1, 100),
    default=10,
    help="Maximum number of results (default 10).",
)
def search(query: str, limit: int) -> None:
    """Search Open Library by title."""
    console = Console()
    result = asyncio.run(_search(query, limit))

    if result.is_empty:
        console.print("[red]Oops, something went wrong with the search.[/red]")
        raise SystemExit(1)

    hits = result.value
    if not hits:
        console.print("[yellow]No results found.[/yellow]")
        return

    table = Table()
    table.add_column("Title", style="bold")
    table.add_column("Author")
    table.add_column("Year", width=5)
    table.add_column("About")
    table.add_column("Key", style="dim")

    for hit in hits:
        table.add_row(
            escape(hit.title),
            escape(safe_author_name(hit.author_name)) or "[dim]unknown[/dim]",
            format_year(hit.first_publish_year) or "?",
            escape(generate_search_snippet(WorkMeta.from_candidate(hit))),
            hit.key,
        )

    console.print(table)
    console.print(f"\n[dim]{len(hits)} result(s)[/dim]")
