# ABOUTME: The `readdit info` command: overview text and fun facts for a book.
# ABOUTME: Uses the work's catalog description and cover when Open Library has them.

import asyncio

import click
from rich.console import Console
from rich.markup import escape

from readdit.catalog.types import WorkMeta
from readdit.cli.session import engine_session, resolve_work
from readdit.text.facts import FunFact


async def _info(
    title: str, with_voices: bool
) -> tuple[WorkMeta, str, str | None, list[FunFact]] | None:
    async with engine_session() as engine:
        work = await resolve_work(engine, title)
        if work is None:
            return None
        meta = WorkMeta.from_candidate(work)
        if with_voices:
            await engine.load_voices(meta.title)
        overview = await engine.overview(meta)
        cover = await engine.cover_url(meta)
        facts = await engine.fun_facts(meta)
        return meta, overview, cover, facts


@click.command("info")
@click.argument("title")
@click.option(
    "--voices/--no-voices",
    "with_voices",
    default=True,
    help="Search Reddit so the fun facts include the Reddit radar (default: --voices).",
)
def info(title: str, with_voices: bool) -> None:
    """Show an overview and fun facts for TITLE."""
    console = Console()
    loaded = asyncio.run(_info(title, with_voices))

    if loaded is None:
        console.print(f"[yellow]No book found for “{escape(title)}”.[/yellow]")
        raise SystemExit(1)

    meta, overview, cover, facts = loaded
    console.print(f"[bold]{escape(meta.title)}[/bold]")
    if meta.author_name:
        console.print(f"[italic]{escape(meta.author_name)}[/italic]")
    if cover:
        console.print(f"Cover: {escape(cover)}")
    console.print(f"\n{escape(overview)}\n")

    console.print("[bold]Fun facts[/bold]")
    for fact in facts:
        console.print(f"  {fact.icon} {escape(fact.text)}")
