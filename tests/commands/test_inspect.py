"""Tests for the inspect CLI command."""

from __future__ import annotations

import json
from pathlib import Path

import pytest
from click.testing import CliRunner

from datastruct.cli import cli


@pytest.mark.usefixtures("_isolated_cwd")
class TestInspectCommand:
    def test_human_output(self, cli_runner: CliRunner) -> None:
        result = cli_runner.invoke(cli, ["inspect", "l:n:1:t:true::"])
        assert result.exit_code == 0
        assert "OK" in result.output
        assert "List" in result.output
        assert "Boolean true" in result.output

    def test_json_output(self, cli_runner: CliRunner) -> None:
        result = cli_runner.invoke(cli, ["--json", "inspect", "b:SGVsbG8gV29ybGQ=:"])
        assert result.exit_code == 0
        data = json.loads(result.output)
        assert data["ok"] is True
        assert data["op"] == "inspect"
        assert data["data"]["datatype"] == "Binary"
        assert data["data"]["size"] == 11

    def test_quiet_prints_canonical_text(self, cli_runner: CliRunner) -> None:
        result = cli_runner.invoke(cli, ["-q", "inspect", "n:1.0:"])
        assert result.exit_code == 0
        assert result.output.strip() == "n:1:"

    def test_reads_stdin(self, cli_runner: CliRunner) -> None:
        result = cli_runner.invoke(cli, ["-q", "inspect", "-"], input="s:from stdin:\n")
        assert result.exit_code == 0
        assert result.output.strip() == "s:from stdin:"

    def test_reads_file(self, cli_runner: CliRunner, tmp_path: Path) -> None:
        path = tmp_path / "value.txt"
        path.write_text("d:s:a:n:1::\n", encoding="utf-8")
        result = cli_runner.invoke(cli, ["-q", "inspect", "--file", str(path)])
        assert result.exit_code == 0
        assert result.output.strip() == "d:s:a:n:1::"

    def test_malformed_input_exits_nonzero(self, cli_runner: CliRunner) -> None:
        result = cli_runner.invoke(cli, ["--json", "inspect", "z:foo:"])
        assert result.exit_code == 1
        assert "MALFORMED_TAG" in result.output

    def test_missing_input_is_usage_error(self, cli_runner: CliRunner) -> None:
        result = cli_runner.invoke(cli, ["inspect"])
        assert result.exit_code == 2
        assert "Missing input" in result.output

    def test_text_and_file_conflict(self, cli_runner: CliRunner, tmp_path: Path) -> None:
        path = tmp_path / "v.txt"
        path.write_text("s:a:")
        result = cli_runner.invoke(cli, ["inspect", "s:a:", "--file", str(path)])
        assert result.exit_code == 2

    def test_unreadable_file(self, cli_runner: CliRunner, tmp_path: Path) -> None:
        result = cli_runner.invoke(cli, ["inspect", "--file", str(tmp_path / "missing.txt")])
        assert result.exit_code == 1
        assert "Cannot read" in result.output

    def test_examples(self, cli_runner: CliRunner) -> None:
        result = cli_runner.invoke(cli, ["inspect", "--examples"])
        assert result.exit_code == 0
        assert "datastruct inspect" in result.output

    def test_deep_nesting_fails_cleanly(self, cli_runner: CliRunner) -> None:
        text = "l:" * 5000 + ":" * 5000
        result = cli_runner.invoke(cli, ["--json", "inspect", text])
        assert result.exit_code == 1
        assert "NESTING_TOO_DEEP" in result.output
