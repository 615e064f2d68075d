"""Tests for the procgraph command line interface."""

import json
from pathlib import Path

from typer.testing import CliRunner

from procgraph._cli.main import app

runner = CliRunner()


class TestCatalogCommand:
    def test_lists_modules(self) -> None:
        result = runner.invoke(app, ["catalog"])

        assert result.exit_code == 0
        assert "NoiseModule" in result.stdout
        assert "EqualityModule" in result.stdout

    def test_filter_by_category(self) -> None:
        result = runner.invoke(app, ["catalog", "--category", "patterns"])

        assert result.exit_code == 0
        assert "TurbulenceModule" in result.stdout
        assert "ChangeOfBasisModule" not in result.stdout

    def test_unknown_category(self) -> None:
        result = runner.invoke(app, ["catalog", "--category", "nonsense"])
        assert result.exit_code != 0

    def test_verbose(self) -> None:
        result = runner.invoke(app, ["--verbose", "catalog"])
        assert result.exit_code == 0


class TestDescribeCommand:
    def test_shows_ports_and_parameters(self) -> None:
        result = runner.invoke(app, ["describe", "NoiseModule"])

        assert result.exit_code == 0
        assert "octaves" in result.stdout
        assert "persistence" in result.stdout

    def test_json_output(self) -> None:
        result = runner.invoke(app, ["describe", "EqualityModule", "--json"])

        assert result.exit_code == 0
        info = json.loads(result.stdout)
        assert info["type_name"] == "EqualityModule"
        assert len(info["inputs"]) == 12
        assert info["inputs"][2]["name"] == "Color 1"
        assert info["outputs"][0]["kind"] == "boolean"

    def test_unknown_module(self) -> None:
        result = runner.invoke(app, ["describe", "NoSuchModule"])
        assert result.exit_code == 1


class TestConfigCommand:
    def test_reads_given_file(self, tmp_path: Path) -> None:
        pyproject = tmp_path / "pyproject.toml"
        pyproject.write_text("[tool.procgraph]\nmax_depth = 7\n")

        result = runner.invoke(app, ["config", "--path", str(pyproject)])

        assert result.exit_code == 0
        assert "max_depth" in result.stdout
        assert "7" in result.stdout

    def test_invalid_config(self, tmp_path: Path) -> None:
        pyproject = tmp_path / "pyproject.toml"
        pyproject.write_text("[tool.procgraph]\ntiles = 0\n")

        result = runner.invoke(app, ["config", "--path", str(pyproject)])

        assert result.exit_code == 1

    def test_missing_file(self, tmp_path: Path) -> None:
        result = runner.invoke(app, ["config", "--path", str(tmp_path / "missing.toml")])
        assert result.exit_code == 1
