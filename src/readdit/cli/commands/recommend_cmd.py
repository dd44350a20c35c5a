# ABOUTME: The `readdit recommend` command: related works for a book, each with a reason.
# ABOUTME: Resolves the title via catalog search, optionally preloads Reddit voices first.

import asyncio
import logging
from pathlib import Path

import click
from rich.console import Console
from rich.markup import escape

from readdit.cli.options import prefs_option
from readdit.cli.session import engine_session, resolve_work
from readdit.prefs import load_preferences
from readdit.recommend.types import BaseWork, Recommendation
from readdit.result import Empty, Ok, Result
from readdit.text.generator import format_year

logger = logging.getLogger(__name__)


async def _recommend(
    title: str, with_voices: bool, prefs_path: Path | None
) -> tuple[BaseWork | None, Result[list[Recommendation]]]:
    prefs = load_preferences(prefs_path)
    async with engine_session() as engine:
        work = await resolve_work(engine, title)
        if work is None:
            return None, Empty(f"No book found for “{title}”.")

        base = BaseWork.from_candidate(work)
        if with_voices:
            posts = await engine.load_voices(base.title)
            logger.debug("Loaded %d Reddit voices for %r", len(posts), base.title)
        return base, await engine.recommend(base, prefs)


@click.command("recommend")
@click.argument("title")
@click.option(
    "--voices/--no-voices",
    "with_voices",
    default=True,
    help="Search Reddit first so mentions count toward the ranking (default: --voices).",
)
@prefs_option
def recommend(title: str, with_voices: bool, prefs_path: Path | None) -> None:
    """Recommend related books for TITLE."""
    console = Console()
    base, result = asyncio.run(_recommend(title, with_voices, prefs_path))

    if base is None:
        console.print(f"[yellow]{escape(result.reason)}[/yellow]")
        raise SystemExit(1)

    console.print(f"[bold]Because you looked at[/bold] {escape(base.title)}")

    if not isinstance(result, Ok):
        console.print(f"[yellow]{escape(result.reason)}[/yellow]")
        return

    for index, rec in enumerate(result.value, start=1):
        year = format_year(rec.first_publish_year)
        year_part = f" [dim]({year})[/dim]" if year else ""
        console.print(
            f"\n[bold]{index}. {escape(rec.title)}[/bold]{year_part}\n"
            f"   [italic]{escape(rec.author_name)}[/italic]\n"
            f"   {escape(rec.reason_text)}\n"
            f"   [dim]{escape(rec.key)}[/dim]"
        )
