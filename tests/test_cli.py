"""Tests for the CLI interface."""

import logging
from unittest.mock import patch

import pytest
from click.testing import CliRunner

from confswap.cli import cli
from confswap.errors import RollbackFailedError


@pytest.fixture
def runner():
    return CliRunner()


class TestVersion:
    def test_version_flag(self, runner):
        result = runner.invoke(cli, ["--version"])
        assert result.exit_code == 0
        assert "confswap" in result.output

    def test_verbose_flag_sets_debug_logging(self, runner):
        result = runner.invoke(cli, ["--verbose", "tools"])
        assert result.exit_code == 0
        assert logging.getLogger("confswap").level == logging.DEBUG


class TestTools:
    def test_lists_builtin_tools(self, runner):
        result = runner.invoke(cli, ["tools"])
        assert result.exit_code == 0
        assert "claude" in result.output
        assert "~/.codex/auth.json" in result.output

    def test_each_tool_has_a_group(self, runner):
        result = runner.invoke(cli, ["codex", "--help"])
        assert result.exit_code == 0
        for command in ["save", "switch", "current", "list", "delete"]:
            assert command in result.output


class TestLifecycle:
    def test_claude_lifecycle(self, runner, claude_settings):
        result = runner.invoke(cli, ["claude", "current"])
        assert result.exit_code == 0
        assert result.output.strip() == "<custom>"

        result = runner.invoke(cli, ["claude", "save", "work"])
        assert result.exit_code == 0
        assert "Saved" in result.output

        result = runner.invoke(cli, ["claude", "switch", "work"])
        assert result.exit_code == 0

        result = runner.invoke(cli, ["claude", "current"])
        assert result.output.strip() == "work"

        claude_settings.write_text('{"x":2}')
        result = runner.invoke(cli, ["claude", "current"])
        assert result.output.strip() == "work (modified)"

        result = runner.invoke(cli, ["claude", "delete", "work"])
        assert result.exit_code == 0
        assert "current profile is now <custom>" in result.output

    def test_list_prints_one_name_per_line(self, runner, codex_files):
        for name in ["work", "personal", "alpha"]:
            assert runner.invoke(cli, ["codex", "save", name]).exit_code == 0
        result = runner.invoke(cli, ["codex", "list"])
        assert result.output.splitlines() == ["alpha", "personal", "work"]

    def test_list_empty_hint(self, runner, home):
        result = runner.invoke(cli, ["codex", "list"])
        assert result.exit_code == 0
        assert "No Codex profiles saved" in result.output

    def test_save_force(self, runner, codex_files):
        runner.invoke(cli, ["codex", "save", "work"])
        result = runner.invoke(cli, ["codex", "save", "-f", "work"])
        assert result.exit_code == 0


class TestErrors:
    def test_conflict_reported_once(self, runner, claude_settings):
        runner.invoke(cli, ["claude", "save", "work"])
        result = runner.invoke(cli, ["claude", "save", "work"])
        assert result.exit_code == 1
        assert result.output.count("already exists") == 1

    def test_invalid_name(self, runner, home):
        result = runner.invoke(cli, ["claude", "save", ".hidden"])
        assert result.exit_code == 1
        assert "cannot start with '.'" in result.output

    def test_switch_not_found(self, runner, home):
        result = runner.invoke(cli, ["codex", "switch", "ghost"])
        assert result.exit_code == 1
        assert "not found" in result.output

    def test_missing_config_file(self, runner, home):
        result = runner.invoke(cli, ["claude", "save", "work"])
        assert result.exit_code == 1
        assert "config file not found" in result.output

    def test_symlink_reported(self, runner, claude_settings, tmp_path):
        runner.invoke(cli, ["claude", "save", "work"])
        runner.invoke(cli, ["claude", "switch", "work"])
        target = tmp_path / "other.json"
        target.write_text('{"x":1}')
        claude_settings.unlink()
        claude_settings.symlink_to(target)

        result = runner.invoke(cli, ["claude", "current"])
        assert result.exit_code == 1
        assert "symlink not allowed" in result.output

    @patch("confswap.cli.switch_profile")
    def test_rollback_failure_shows_both_errors(self, mock_switch, runner, home):
        mock_switch.side_effect = RollbackFailedError(
            OSError("disk full"), [OSError("restore failed")]
        )
        result = runner.invoke(cli, ["codex", "switch", "work"])
        assert result.exit_code == 1
        assert "disk full" in result.output
        assert "restore failed" in result.output
        assert "inspect it manually" in result.output
