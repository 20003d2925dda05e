"""``skillmirror import`` and ``skillmirror fingerprint``.

``import`` copies an existing skill directory (typically one reported by
``onboard``) into the canonical repository and records it as managed.
``fingerprint`` prints the content hash used to compare skill copies.

Exit Codes:
    0 -- Success.
    1 -- The skill already exists or the copy failed.
    2 -- The configuration or state file is invalid.
"""

from __future__ import annotations

from pathlib import Path

import click

from skillmirror.cli.common import fail, make_resolver, open_store, settings_from_context
from skillmirror.cli.output import console
from skillmirror.core.fingerprint import fingerprint_dir
from skillmirror.exceptions import SkillMirrorError, TargetExistsError
from skillmirror.store.central import import_into_central


@click.command("fingerprint")
@click.argument(
    "path",
    type=click.Path(exists=True, file_okay=False, path_type=Path),
)
def fingerprint_command(path: Path) -> None:
    """Print the content fingerprint of a skill directory."""
    try:
        click.echo(fingerprint_dir(path))
    except SkillMirrorError as exc:
        fail(str(exc))


@click.command("import")
@click.argument(
    "path",
    type=click.Path(exists=True, file_okay=False, path_type=Path),
)
@click.option("--name", default=None, help="Skill name (default: the directory name).")
@click.pass_context
def import_command(ctx: click.Context, path: Path, name: str | None) -> None:
    """Copy a skill directory into the canonical repository."""
    settings = settings_from_context(ctx, make_resolver(None))
    store = open_store(settings)
    skill_name = name or path.name

    try:
        skill = import_into_central(
            path.absolute(), skill_name, settings.central_repo_path, store,
        )
        store.save()
    except TargetExistsError as exc:
        fail(f"{exc}; skill {skill_name!r} is already managed")
    except SkillMirrorError as exc:
        fail(str(exc))

    console.print(f"Imported [bold]{skill.name}[/bold] into {skill.central_path}")
