"""Helpers shared by CLI commands: settings, store and resolver setup."""

from __future__ import annotations

import sys
from pathlib import Path
from typing import NoReturn

import click

from skillmirror.config import Settings, load_settings
from skillmirror.discovery.paths import PathResolver
from skillmirror.exceptions import SkillMirrorError
from skillmirror.store.json_store import JsonSkillStore

# Exit codes
EXIT_OK = 0
EXIT_FAILED = 1
EXIT_USAGE = 2


def fail(message: str, code: int = EXIT_FAILED) -> NoReturn:
    """Print an error to stderr and exit."""
    click.echo(f"Error: {message}", err=True)
    sys.exit(code)


def make_resolver(home: Path | None) -> PathResolver:
    return PathResolver(home=home) if home is not None else PathResolver()


def settings_from_context(ctx: click.Context, resolver: PathResolver) -> Settings:
    """Load settings for the ``--config`` given to the group."""
    obj = ctx.find_root().obj or {}
    try:
        return load_settings(obj.get("config_path"), resolver=resolver)
    except SkillMirrorError as exc:
        fail(str(exc), EXIT_USAGE)


def open_store(settings: Settings) -> JsonSkillStore:
    """Open the managed-state store named by the settings."""
    try:
        return JsonSkillStore.open(settings.state_path)
    except SkillMirrorError as exc:
        fail(str(exc), EXIT_USAGE)


home_option = click.option(
    "--home",
    type=click.Path(exists=True, file_okay=False, path_type=Path),
    default=None,
    help="Treat this directory as the home directory (default: real home).",
)
