"""``skillmirror tools`` -- List known tools and their skill directories.

Shows every built-in and custom tool, whether its detection directory
exists, where its skills live, and whether targets are linked or copied.

Exit Codes:
    0 -- Always (informational command).
    2 -- The configuration file is invalid.
"""

from __future__ import annotations

from pathlib import Path
from typing import Any

import click

from skillmirror.cli.common import home_option, make_resolver, settings_from_context
from skillmirror.cli.output import echo_json, print_tools_table
from skillmirror.discovery.paths import PathResolver
from skillmirror.discovery.tool_registry import ToolAdapter, all_adapters, is_copy_only


def tool_rows(adapters: list[ToolAdapter], resolver: PathResolver) -> list[dict[str, Any]]:
    """Describe each adapter as resolved on this machine."""
    rows: list[dict[str, Any]] = []
    for adapter in adapters:
        detect = resolver.resolve(adapter.relative_detect_dir)
        skills = resolver.resolve(adapter.relative_skills_dir)
        rows.append({
            "key": adapter.key,
            "display_name": adapter.display_name,
            "skills_dir": str(skills) if skills else None,
            "installed": bool(detect and detect.exists()),
            "force_copy": adapter.force_copy or is_copy_only(adapter.key),
            "is_custom": adapter.is_custom,
        })
    return rows


@click.command("tools")
@click.option(
    "--format", "output_format",
    type=click.Choice(["text", "json"]),
    default="text",
    help="Output format: text (default) or json.",
)
@home_option
@click.pass_context
def tools_command(ctx: click.Context, output_format: str, home: Path | None) -> None:
    """List known AI tools and where they keep skills."""
    resolver = make_resolver(home)
    settings = settings_from_context(ctx, resolver)
    rows = tool_rows(all_adapters(settings.custom_tools), resolver)

    if output_format == "json":
        echo_json(rows)
    else:
        print_tools_table(rows)
