"""Tests for the mathconv command-line interface."""

from __future__ import annotations

import json
from pathlib import Path

import polars as pl
from click.testing import CliRunner

from mathconv import __version__
from mathconv.cli import main


def _run(*args: str):
    return CliRunner().invoke(main, list(args))


class TestEvalCommand:
    def test_value_substitution(self) -> None:
        result = _run("eval", "@VALUE+1", "--value", "5")
        assert result.exit_code == 0, result.output
        assert result.output.strip() == "6.0"

    def test_negative_value(self) -> None:
        result = _run("eval", "@VALUE * 2", "--value", "-3.5")
        assert result.exit_code == 0, result.output
        assert result.output.strip() == "-7.0"

    def test_left_to_right(self) -> None:
        result = _run("eval", "2+3*4")
        assert result.output.strip() == "20.0"

    def test_malformed_formula(self) -> None:
        result = _run("eval", "2+x")
        assert result.exit_code == 1
        assert "Malformed number" in result.output

    def test_json_output(self) -> None:
        result = _run("eval", "(@VALUE+1)*2", "--value", "2", "--json")
        assert result.exit_code == 0, result.output
        payload = json.loads(result.output)
        assert payload["result"] == 6.0
        assert payload["error"] is None

    def test_json_error(self) -> None:
        result = _run("eval", "2+(3", "--json")
        assert result.exit_code == 1
        payload = json.loads(result.output)
        assert payload["result"] is None
        assert payload["error"]["code"] == "unbalanced_grouping"

    def test_project_config_and_events(self, tmp_path: Path) -> None:
        (tmp_path / "mathconv.yaml").write_text("max_nesting_depth: 1\n")
        result = _run("eval", "((1))", "--project", str(tmp_path))
        assert result.exit_code == 1
        assert "nested deeper" in result.output

        events = _run("events", str(tmp_path), "--json")
        rows = json.loads(events.output)
        assert rows[0]["error_code"] == "nesting_depth_exceeded"

    def test_version(self) -> None:
        result = _run("--version")
        assert __version__ in result.output


class TestTokensCommand:
    def test_lists_tokens(self) -> None:
        result = _run("tokens", "@VALUE*(2+1)", "--value", "4")
        assert result.exit_code == 0, result.output
        lines = [line.split() for line in result.output.strip().splitlines()]
        assert lines == [
            ["number", "4"],
            ["operator", "*"],
            ["lparen", "("],
            ["number", "2"],
            ["operator", "+"],
            ["number", "1"],
            ["rparen", ")"],
        ]

    def test_bad_fragment(self) -> None:
        result = _run("tokens", "1+abc")
        assert result.exit_code == 1
        assert "abc" in result.output


class TestApplyCommand:
    def test_apply_to_csv(self, tmp_path: Path) -> None:
        src = tmp_path / "in.csv"
        src.write_text("x\n1\n2\n")
        out = tmp_path / "out.csv"
        result = _run(
            "apply", str(src), "--column", "x", "--formula", "@VALUE*10",
            "--output-column", "y", "--out", str(out),
        )
        assert result.exit_code == 0, result.output
        assert "Wrote 2 row(s)" in result.output
        assert pl.read_csv(out)["y"].to_list() == [10.0, 20.0]

    def test_apply_to_stdout(self, tmp_path: Path) -> None:
        src = tmp_path / "in.csv"
        src.write_text("x\n3\n")
        result = _run("apply", str(src), "--column", "x", "--formula", "@VALUE%2")
        assert result.exit_code == 0, result.output
        assert result.output.splitlines()[0] == "x,x_result"

    def test_unknown_column(self, tmp_path: Path) -> None:
        src = tmp_path / "in.csv"
        src.write_text("x\n3\n")
        result = _run("apply", str(src), "--column", "z", "--formula", "@VALUE")
        assert result.exit_code == 1
        assert "not found" in result.output


class TestEventsCommand:
    def test_no_events(self, tmp_path: Path) -> None:
        result = _run("events", str(tmp_path))
        assert result.exit_code == 0
        assert "No events." in result.output

    def test_text_listing(self, tmp_path: Path) -> None:
        _run("eval", "1+", "--project", str(tmp_path))
        result = _run("events", str(tmp_path), "--level", "warning")
        assert "conversion_failed [malformed_expression]" in result.output
