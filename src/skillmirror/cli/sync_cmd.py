"""``skillmirror sync`` and ``skillmirror unsync``.

``sync`` materializes a canonical skill in one tool's skills directory,
preferring a symlink (or junction on Windows) and falling back to a
copy. Tools that cannot follow links always get a copy.

``unsync`` removes a target. Links are removed without touching what
they point to.

Exit Codes:
    0 -- Success.
    1 -- The target exists (without --overwrite), the tool is unknown,
         or the filesystem operation failed.
    2 -- The configuration or state file is invalid.
"""

from __future__ import annotations

from pathlib import Path

import click

from skillmirror.cli.common import (
    fail,
    home_option,
    make_resolver,
    open_store,
    settings_from_context,
)
from skillmirror.cli.output import console, print_sync_outcome
from skillmirror.discovery.tool_registry import all_adapters, find_adapter
from skillmirror.exceptions import SkillMirrorError, SyncError, TargetExistsError
from skillmirror.sync.engine import remove_path, sync_dir_for_tool_with_overwrite
from skillmirror.sync.fsops import path_exists


@click.command("sync")
@click.argument("name")
@click.option("--tool", "tool_key", required=True, help="Tool key (see `skillmirror tools`).")
@click.option(
    "--target",
    type=click.Path(path_type=Path),
    default=None,
    help="Target directory (default: <tool skills dir>/<NAME>).",
)
@click.option("--overwrite", is_flag=True, default=False, help="Replace an existing target.")
@home_option
@click.pass_context
def sync_command(
    ctx: click.Context,
    name: str,
    tool_key: str,
    target: Path | None,
    overwrite: bool,
    home: Path | None,
) -> None:
    """Sync canonical skill NAME into a tool's skills directory."""
    resolver = make_resolver(home)
    settings = settings_from_context(ctx, resolver)
    store = open_store(settings)

    adapter = find_adapter(tool_key, all_adapters(settings.custom_tools))
    if adapter is None:
        fail(f"unknown tool {tool_key!r}")

    skill = store.get_skill_by_name(name)
    if skill is not None:
        source = Path(skill.central_path)
    else:
        source = settings.central_repo_path / name

    if target is None:
        skills_dir = resolver.resolve(adapter.relative_skills_dir)
        if skills_dir is None:
            fail(f"cannot resolve the skills directory of {adapter.display_name}")
        target = skills_dir / name
    # Recorded targets are absolute so they match onboarding keys.
    target = target.absolute()

    try:
        outcome = sync_dir_for_tool_with_overwrite(
            adapter.key, source, target, overwrite, force_copy=adapter.force_copy,
        )
    except TargetExistsError as exc:
        if skill is not None:
            store.upsert_target(
                skill.id, adapter.key, str(target), "copy" if adapter.force_copy else "symlink",
                status="error", error_message=str(exc),
            )
            store.save()
        fail(f"{exc} (use --overwrite to replace it)")
    except SyncError as exc:
        fail(str(exc))

    if skill is not None:
        store.upsert_target(skill.id, adapter.key, str(target), outcome.mode_used.value)
        try:
            store.save()
        except SkillMirrorError as exc:
            fail(str(exc))

    print_sync_outcome(adapter.key, outcome)


@click.command("unsync")
@click.argument("path", type=click.Path(path_type=Path))
@home_option
@click.pass_context
def unsync_command(ctx: click.Context, path: Path, home: Path | None) -> None:
    """Remove a synced target at PATH and forget it.

    A link is removed without touching its source directory.
    """
    settings = settings_from_context(ctx, make_resolver(home))
    store = open_store(settings)

    path = path.absolute()
    existed = path_exists(path)
    try:
        remove_path(path)
    except SyncError as exc:
        fail(str(exc))

    forgotten = store.remove_target(str(path))
    if forgotten:
        try:
            store.save()
        except SkillMirrorError as exc:
            fail(str(exc))

    if not existed and not forgotten:
        console.print(f"[dim]Nothing to remove at {path}[/dim]")
    else:
        console.print(f"Removed [bold]{path}[/bold]")
