"""Tests for the keys and converters commands."""

from __future__ import annotations

import json
from pathlib import Path

import pytest
from click.testing import CliRunner

from propbind.cli import cli


@pytest.mark.usefixtures("project_root")
class TestKeysCommand:
    def test_keys_json(self, cli_runner: CliRunner) -> None:
        result = cli_runner.invoke(cli, ["--json", "keys"])
        assert result.exit_code == 0
        data = json.loads(result.stdout)
        assert data["op"] == "keys"
        keys = [item["key"] for item in data["data"]["items"]]
        assert "my-service.person.last-name" in keys
        assert data["data"]["count"] == len(keys)

    def test_keys_human(self, cli_runner: CliRunner) -> None:
        result = cli_runner.invoke(cli, ["keys"])
        assert result.exit_code == 0
        assert "my-service.common-attributes.currency" in result.stdout

    def test_keys_explicit_toml(self, cli_runner: CliRunner, project_root: Path) -> None:
        path = project_root / "extra.toml"
        path.write_text('[server]\nport = 8080\n', encoding="utf-8")
        result = cli_runner.invoke(cli, ["-q", "keys", "extra.toml"])
        assert result.exit_code == 0
        assert result.stdout.strip() == "server.port=8080"

    def test_unsupported_file(self, cli_runner: CliRunner, project_root: Path) -> None:
        (project_root / "settings.ini").write_text("a=1", encoding="utf-8")
        result = cli_runner.invoke(cli, ["keys", "settings.ini"])
        assert result.exit_code == 1
        assert "unsupported" in result.stderr

    def test_undecodable_file(self, cli_runner: CliRunner, project_root: Path) -> None:
        (project_root / "bad.properties").write_bytes(b"a.b=\xff\xfe\n")
        result = cli_runner.invoke(cli, ["--json", "keys", "bad.properties"])
        assert result.exit_code == 1
        error = json.loads(result.stderr)["error"]
        assert error["code"] == "SOURCE_ERROR"
        assert "UTF-8" in error["message"]

    def test_brackets_shown_verbatim(self, cli_runner: CliRunner, project_root: Path) -> None:
        (project_root / "a.properties").write_text(
            "app.pattern=[/x] and [bold]loud\n", encoding="utf-8"
        )
        result = cli_runner.invoke(cli, ["keys", "a.properties"])
        assert result.exit_code == 0, result.output
        assert "[/x] and [bold]loud" in result.stdout


class TestConvertersCommand:
    def test_lists_full_name(self, cli_runner: CliRunner) -> None:
        result = cli_runner.invoke(cli, ["--json", "converters"])
        assert result.exit_code == 0
        items = json.loads(result.stdout)["data"]["items"]
        assert {"type": "FullName", "source": "custom", "invertible": True} in items

    def test_human(self, cli_runner: CliRunner) -> None:
        result = cli_runner.invoke(cli, ["converters"])
        assert result.exit_code == 0
        assert "ZoneInfo" in result.stdout
