"""Tests for ``skillmirror tools`` and ``skillmirror onboard``."""

from __future__ import annotations

import json

from click.testing import CliRunner

from skillmirror.cli.main import cli

from tests.cli.helpers import CliEnv
from tests.discovery.helpers import create_claude_home, create_cursor_home


class TestToolsCommand:
    """Listing known tools."""

    def test_json_lists_builtins(self, runner: CliRunner, cli_env: CliEnv) -> None:
        create_claude_home(cli_env.home)
        result = runner.invoke(
            cli, cli_env.args("tools", "--format", "json", "--home", str(cli_env.home)),
        )
        assert result.exit_code == 0, result.output
        rows = {row["key"]: row for row in json.loads(result.output)}
        assert rows["claude_code"]["installed"] is True
        assert rows["codex"]["installed"] is False
        assert rows["cursor"]["force_copy"] is True
        assert rows["claude_code"]["skills_dir"] == str(cli_env.home / ".claude" / "skills")

    def test_custom_tool_listed(self, runner: CliRunner, cli_env: CliEnv) -> None:
        cli_env.config.write_text(
            cli_env.config.read_text()
            + "custom_tools:\n  - key: my_agent\n    skills_dir: ~/.my-agent/skills\n"
        )
        result = runner.invoke(
            cli, cli_env.args("tools", "--format", "json", "--home", str(cli_env.home)),
        )
        assert result.exit_code == 0, result.output
        rows = {row["key"]: row for row in json.loads(result.output)}
        assert rows["my_agent"]["is_custom"] is True

    def test_text_output(self, runner: CliRunner, cli_env: CliEnv) -> None:
        result = runner.invoke(cli, cli_env.args("tools", "--home", str(cli_env.home)))
        assert result.exit_code == 0, result.output
        assert "Known Tools" in result.output

    def test_invalid_config_exit_2(self, runner: CliRunner, cli_env: CliEnv) -> None:
        cli_env.config.write_text("custom_tools: nope\n")
        result = runner.invoke(cli, cli_env.args("tools", "--home", str(cli_env.home)))
        assert result.exit_code == 2
        assert "custom_tools" in result.output


class TestOnboardCommand:
    """Onboarding from the command line."""

    def test_empty_home(self, runner: CliRunner, cli_env: CliEnv) -> None:
        result = runner.invoke(cli, cli_env.args("onboard", "--home", str(cli_env.home)))
        assert result.exit_code == 0, result.output
        assert "No unmanaged skills found" in result.output

    def test_json_reports_conflict(self, runner: CliRunner, cli_env: CliEnv) -> None:
        create_claude_home(cli_env.home, {"pdf-tools": "Version A.\n", "review": "r\n"})
        create_cursor_home(cli_env.home, {"pdf-tools": "Version B.\n"})

        result = runner.invoke(
            cli, cli_env.args("onboard", "--format", "json", "--home", str(cli_env.home)),
        )
        assert result.exit_code == 0, result.output
        data = json.loads(result.output)
        assert data["total_tools_scanned"] == 2
        assert data["total_skills_found"] == 3
        groups = {g["name"]: g for g in data["groups"]}
        assert groups["pdf-tools"]["has_conflict"] is True
        assert groups["review"]["has_conflict"] is False

    def test_text_marks_conflict(self, runner: CliRunner, cli_env: CliEnv) -> None:
        create_claude_home(cli_env.home, {"pdf-tools": "Version A.\n"})
        create_cursor_home(cli_env.home, {"pdf-tools": "Version B.\n"})
        result = runner.invoke(cli, cli_env.args("onboard", "--home", str(cli_env.home)))
        assert result.exit_code == 0, result.output
        assert "CONFLICT" in result.output

    def test_managed_names_hidden(self, runner: CliRunner, cli_env: CliEnv) -> None:
        claude_dir = create_claude_home(cli_env.home, {"pdf-tools": "x\n", "review": "y\n"})
        imported = runner.invoke(cli, cli_env.args("import", str(claude_dir / "pdf-tools")))
        assert imported.exit_code == 0, imported.output

        result = runner.invoke(
            cli, cli_env.args("onboard", "--format", "json", "--home", str(cli_env.home)),
        )
        assert result.exit_code == 0, result.output
        names = [g["name"] for g in json.loads(result.output)["groups"]]
        assert names == ["review"]

    def test_corrupt_state_exit_2(self, runner: CliRunner, cli_env: CliEnv) -> None:
        cli_env.state.write_text("{broken")
        result = runner.invoke(cli, cli_env.args("onboard", "--home", str(cli_env.home)))
        assert result.exit_code == 2
