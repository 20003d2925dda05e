"""skillmirror CLI -- keep agent skills synced across AI coding tools.

Entry point for the ``skillmirror`` command-line tool. Registers all
subcommands under a single Click group.

Commands:
    tools        -- List known tools and whether they are installed.
    onboard      -- Find existing skills and report same-name conflicts.
    fingerprint  -- Print the content fingerprint of a directory.
    import       -- Copy a skill directory into the canonical repository.
    sync         -- Materialize a canonical skill in a tool's directory.
    unsync       -- Remove a synced target (links are never followed).

Usage::

    skillmirror tools
    skillmirror onboard --format json
    skillmirror import ~/.claude/skills/pdf-tools
    skillmirror sync pdf-tools --tool cursor
    skillmirror unsync ~/.cursor/skills/pdf-tools
"""

from __future__ import annotations

import logging
import os
from pathlib import Path

import click
from rich.console import Console
from rich.logging import RichHandler

from skillmirror import __version__
from skillmirror.cli.import_cmd import fingerprint_command, import_command
from skillmirror.cli.onboard_cmd import onboard_command
from skillmirror.cli.sync_cmd import sync_command, unsync_command
from skillmirror.cli.tools_cmd import tools_command

LOG_LEVEL_ENV_VAR = "SKILLMIRROR_LOG_LEVEL"


def configure_logging(verbose: bool) -> None:
    """Send library logs to stderr through Rich.

    ``--verbose`` selects DEBUG; otherwise WARNING. ``SKILLMIRROR_LOG_LEVEL``
    overrides both.
    """
    level_name = os.environ.get(LOG_LEVEL_ENV_VAR, "DEBUG" if verbose else "WARNING")
    level = logging.getLevelName(level_name.upper())
    if not isinstance(level, int):
        level = logging.WARNING

    root = logging.getLogger("skillmirror")
    root.setLevel(level)
    if not any(isinstance(h, RichHandler) for h in root.handlers):
        handler = RichHandler(
            console=Console(stderr=True), show_path=False, show_time=False,
        )
        root.addHandler(handler)


@click.group()
@click.version_option(version=__version__)
@click.option("--verbose", "-v", is_flag=True, default=False, help="Enable debug logging.")
@click.option(
    "--config", "config_path",
    type=click.Path(dir_okay=False, path_type=Path),
    default=None,
    help="Config file (default: $SKILLMIRROR_CONFIG or the app data dir).",
)
@click.pass_context
def cli(ctx: click.Context, verbose: bool, config_path: Path | None) -> None:
    """skillmirror: one canonical skill repository, synced into every AI tool.

    Discover skills already scattered across Claude Code, Codex, Cursor and
    other tools, spot same-name conflicts, and keep each tool's copy linked
    (or copied) from a single source of truth.
    """
    configure_logging(verbose)
    ctx.ensure_object(dict)
    ctx.obj["config_path"] = config_path


# Register all subcommands
cli.add_command(tools_command)
cli.add_command(onboard_command)
cli.add_command(fingerprint_command)
cli.add_command(import_command)
cli.add_command(sync_command)
cli.add_command(unsync_command)

