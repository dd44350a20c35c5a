# ABOUTME: CLI package for Readdit, built on Click.
# ABOUTME: Defines the root command group, logging setup, and registers subcommands.

import logging

import click
from rich.logging import RichHandler

from readdit.cli.commands import info_cmd, prefs_cmd, recommend_cmd, search_cmd, voices_cmd


@click.group()
@click.version_option(package_name="readdit")
@click.option("-v", "--verbose", is_flag=True, default=False, help="Show debug logging.")
def cli(verbose: bool) -> None:
    """Readdit - discover books, read Reddit voices, and get recommendations."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(message)s",
        handlers=[RichHandler(show_path=False)],
        force=True,
    )


cli.add_command(search_cmd.search)
cli.add_command(recommend_cmd.recommend)
cli.add_command(voices_cmd.voices)
cli.add_command(info_cmd.info)
cli.add_command(prefs_cmd.prefs)
