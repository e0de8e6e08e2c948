"""Tests for the top-level mcassets CLI (version, help)."""

from click.testing import CliRunner

from mcassets.cli import cli


class TestCliVersionFlag:
    """--version prints just the version number."""

    def test_prints_version_number(self):
        runner = CliRunner()
        result = runner.invoke(cli, ["--version"])
        assert result.exit_code == 0
        assert "mcassets" not in result.output.lower()
        assert result.output.strip() != ""


class TestCliVersionSubcommand:
    """mcassets version prints just the version number."""

    def test_same_as_flag(self):
        runner = CliRunner()
        flag_result = runner.invoke(cli, ["--version"])
        cmd_result = runner.invoke(cli, ["version"])
        assert cmd_result.exit_code == 0
        assert flag_result.output.strip() == cmd_result.output.strip()


class TestCliHelp:
    """mcassets --help lists the cache lifecycle commands."""

    def test_lists_commands(self):
        runner = CliRunner()
        result = runner.invoke(cli, ["--help"])
        assert result.exit_code == 0
        for command in ("sync", "restore", "key", "version"):
            assert command in result.output

    def test_short_flag(self):
        runner = CliRunner()
        assert runner.invoke(cli, ["-h"]).output == runner.invoke(cli, ["--help"]).output
