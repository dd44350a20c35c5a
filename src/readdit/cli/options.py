# ABOUTME: Shared Click options for Readdit CLI commands.
# ABOUTME: Provides reusable decorators for common flags like --prefs.

from pathlib import Path

import click

from readdit.prefs import DEFAULT_PREFS_PATH

prefs_option = click.option(
    "--prefs",
    "prefs_path",
    type=click.Path(dir_okay=False, path_type=Path),
    default=None,
    help=f"Path to the preferences file (default: {DEFAULT_PREFS_PATH})",
)
