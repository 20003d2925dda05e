"""``skillmirror onboard`` -- Find unmanaged skills and report conflicts.

Scans every installed tool, third-party skill store and Claude Code
plugin, skips skills already managed in the canonical repository, and
groups the rest by name. A group conflicts when its copies differ in
content.

Exit Codes:
    0 -- Scan completed (conflicts are reported, not failures).
    2 -- The configuration or state file is invalid.
"""

from __future__ import annotations

from pathlib import Path

import click

from skillmirror.cli.common import (
    home_option,
    make_resolver,
    open_store,
    settings_from_context,
)
from skillmirror.cli.output import echo_json, print_onboarding_plan
from skillmirror.discovery.onboarding import OnboardingPlanner
from skillmirror.store.accessors import build_filter_context


@click.command("onboard")
@click.option(
    "--format", "output_format",
    type=click.Choice(["text", "json"]),
    default="text",
    help="Output format: text (default) or json.",
)
@home_option
@click.pass_context
def onboard_command(ctx: click.Context, output_format: str, home: Path | None) -> None:
    """Discover existing skills across all AI tools.

    Skills living in the canonical repository, already synced targets,
    and skills whose name is already managed are left out.
    """
    resolver = make_resolver(home)
    settings = settings_from_context(ctx, resolver)
    store = open_store(settings)

    filter_ctx = build_filter_context(store, settings.central_repo_path)
    planner = OnboardingPlanner(resolver=resolver)
    plan = planner.build_plan(filter_ctx, settings.custom_tools)

    if output_format == "json":
        echo_json(plan.to_dict())
    else:
        print_onboarding_plan(plan)
