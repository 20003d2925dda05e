"""Rich output formatting helpers for the skillmirror CLI.

Provides consistent terminal output for tool listings, onboarding plans
and sync outcomes.

Color Mapping:
    conflict = bold red, clean = green, link = cyan, missing data = dim
"""

from __future__ import annotations

import json
from typing import Any

import click
from rich.console import Console
from rich.table import Table
from rich.text import Text

from skillmirror.discovery.models import OnboardingGroup, OnboardingPlan
from skillmirror.sync.models import SyncMode, SyncOutcome

_MODE_STYLES: dict[SyncMode, str] = {
    SyncMode.SYMLINK: "cyan",
    SyncMode.JUNCTION: "cyan",
    SyncMode.COPY: "yellow",
}

console = Console()


def short_fingerprint(fingerprint: str | None) -> str:
    """First 12 hex digits of a fingerprint, or '-' when unknown."""
    if not fingerprint:
        return "-"
    return fingerprint.split(":", 1)[-1][:12]


def print_tools_table(rows: list[dict[str, Any]]) -> None:
    """Print the known tools with their skills directories.

    Args:
        rows: Dicts with ``key``, ``display_name``, ``skills_dir``,
            ``installed``, ``force_copy`` and ``is_custom``.
    """
    table = Table(title="Known Tools", show_header=True, header_style="bold")
    table.add_column("Key", style="bold", no_wrap=True)
    table.add_column("Tool")
    table.add_column("Installed", justify="center")
    table.add_column("Sync", justify="center")
    table.add_column("Skills Dir", style="dim")

    for row in rows:
        installed = Text("yes", style="green") if row["installed"] else Text("no", style="dim")
        sync = "copy" if row["force_copy"] else "link"
        name = row["display_name"] + (" (custom)" if row["is_custom"] else "")
        table.add_row(row["key"], name, installed, sync, row["skills_dir"] or "-")

    console.print(table)


def _group_table(group: OnboardingGroup) -> Table:
    title_style = "bold red" if group.has_conflict else "bold green"
    status = "CONFLICT" if group.has_conflict else "OK"
    table = Table(
        title=Text.assemble((group.name, "bold"), "  ", (status, title_style)),
        show_header=True,
        header_style="bold",
    )
    table.add_column("Tool", no_wrap=True)
    table.add_column("Fingerprint", style="dim", no_wrap=True)
    table.add_column("Link", justify="center")
    table.add_column("Conflicts With")
    table.add_column("Path", style="dim")

    for v in group.variants:
        link = Text("link", style="cyan") if v.skill.is_link else Text("-", style="dim")
        conflicts = ", ".join(v.conflicting_tools) or "-"
        table.add_row(
            v.tool, short_fingerprint(v.fingerprint), link,
            Text(conflicts, style="red" if v.conflicting_tools else "dim"),
            str(v.path),
        )
    return table


def print_onboarding_plan(plan: OnboardingPlan) -> None:
    """Print one table per skill group followed by a summary line."""
    if not plan.groups:
        console.print("[dim]No unmanaged skills found.[/dim]")
    for group in plan.groups:
        console.print(_group_table(group))

    parts = [
        f"[bold]{plan.total_tools_scanned}[/bold] sources scanned",
        f"{plan.total_skills_found} skills found",
        f"{len(plan.groups)} unique names",
    ]
    if plan.conflict_count:
        parts.append(f"[red]{plan.conflict_count} conflicting[/red]")
    console.print(" | ".join(parts))


def print_sync_outcome(tool: str, outcome: SyncOutcome) -> None:
    """Print a one-line confirmation of a sync."""
    style = _MODE_STYLES.get(outcome.mode_used, "white")
    verb = "Replaced" if outcome.replaced else "Synced"
    console.print(
        f"{verb} [bold]{outcome.target_path}[/bold] for {tool} "
        f"via [{style}]{outcome.mode_used.value}[/{style}]"
    )


def echo_json(data: Any) -> None:
    """Print data as indented JSON to stdout.

    Args:
        data: Any JSON-serializable data structure.
    """
    click.echo(json.dumps(data, indent=2, default=str))
