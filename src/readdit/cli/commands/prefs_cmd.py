# ABOUTME: The `readdit prefs` command group for viewing and editing reading preferences.
# ABOUTME: Sliders (style, pace, complexity) and genre picks feed the recommendation ranking.

from pathlib import Path

import click
from rich.console import Console
from rich.table import Table

from readdit.cli.options import prefs_option
from readdit.prefs import SLIDERS, Preferences, load_preferences, save_preferences
from readdit.text.labels import KNOWN_GENRES


def _print_prefs(console: Console, prefs: Preferences) -> None:
    table = Table(show_header=False, box=None, pad_edge=False)
    table.add_column("Field", style="bold", width=12)
    table.add_column("Value")
    for name in SLIDERS:
        table.add_row(name.capitalize(), str(getattr(prefs, name)))
    table.add_row("Genres", ", ".join(prefs.genres) or "[dim]none[/dim]")
    console.print(table)


@click.group("prefs")
def prefs() -> None:
    """View or edit reading preferences."""


@prefs.command("show")
@prefs_option
def show(prefs_path: Path | None) -> None:
    """Show the stored preferences."""
    _print_prefs(Console(), load_preferences(prefs_path))


@prefs.command("set")
@click.option("--style", type=click.IntRange(0, 100), default=None, help="Style slider (0-100).")
@click.option("--pace", type=click.IntRange(0, 100), default=None, help="Pace slider (0-100).")
@click.option(
    "--complexity", type=click.IntRange(0, 100), default=None, help="Complexity slider (0-100)."
)
@prefs_option
def set_sliders(
    style: int | None, pace: int | None, complexity: int | None, prefs_path: Path | None
) -> None:
    """Change one or more sliders."""
    console = Console()
    current = load_preferences(prefs_path)
    updates = {"style": style, "pace": pace, "complexity": complexity}
    for name, value in updates.items():
        if value is not None:
            current = current.with_slider(name, value)

    save_preferences(current, prefs_path)
    _print_prefs(console, current)


@prefs.command("genre")
@click.argument("genre", type=click.Choice(KNOWN_GENRES))
@prefs_option
def toggle_genre(genre: str, prefs_path: Path | None) -> None:
    """Select GENRE, or deselect it if it is already selected."""
    console = Console()
    current = load_preferences(prefs_path).toggle_genre(genre)
    save_preferences(current, prefs_path)
    state = "selected" if genre in current.genres else "deselected"
    console.print(f"[green]{genre} {state}.[/green]")
    _print_prefs(console, current)
