"""Tests for the CLI entry point."""

from __future__ import annotations

from typing import TYPE_CHECKING
from unittest.mock import patch

from typer.testing import CliRunner

from logflow.cli import app

if TYPE_CHECKING:
    from pathlib import Path

runner = CliRunner()


class TestCli:
    def test_missing_file(self, tmp_path: Path) -> None:
        result = runner.invoke(app, [str(tmp_path / "missing.log")])
        assert result.exit_code == 1
        assert "is not a file" in result.output

    def test_no_input(self) -> None:
        with patch("logflow.cli.is_pipe", return_value=False):
            result = runner.invoke(app, [])
        assert result.exit_code == 1
        assert "provide a file or pipe input" in result.output

    def test_runs_app_with_file_lines(self, sample_log_file: Path, tmp_path: Path) -> None:
        with (
            patch.dict("os.environ", {"LOGFLOW_CONFIG_DIR": str(tmp_path / "cfg")}),
            patch("logflow.app.LogFlowApp.run") as mock_run,
            patch("logflow.app.LogFlowApp.__init__", return_value=None) as mock_init,
        ):
            result = runner.invoke(app, [str(sample_log_file), "--max-lines", "3"])
        assert result.exit_code == 0, result.output
        mock_run.assert_called_once()
        kwargs = mock_init.call_args.kwargs
        assert len(kwargs["lines"]) == 7
        assert kwargs["source"] == str(sample_log_file)
        assert kwargs["tail"] is False
        assert kwargs["config"].max_scrollback == 3

    def test_tail_defers_reading(self, sample_log_file: Path, tmp_path: Path) -> None:
        with (
            patch.dict("os.environ", {"LOGFLOW_CONFIG_DIR": str(tmp_path / "cfg")}),
            patch("logflow.app.LogFlowApp.run"),
            patch("logflow.app.LogFlowApp.__init__", return_value=None) as mock_init,
        ):
            result = runner.invoke(app, [str(sample_log_file), "--tail"])
        assert result.exit_code == 0, result.output
        kwargs = mock_init.call_args.kwargs
        assert kwargs["lines"] == []
        assert kwargs["tail"] is True
        assert kwargs["file_path"] == sample_log_file

    def test_max_lines_must_be_positive(self, sample_log_file: Path) -> None:
        result = runner.invoke(app, [str(sample_log_file), "--max-lines", "0"])
        assert result.exit_code != 0
