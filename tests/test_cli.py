"""End-to-end tests for the TreePaste CLI.

This module tests the CLI interface using Typer's CliRunner.
"""

import sys
from pathlib import Path
from typing import Dict
from unittest.mock import patch

import pytest
from typer.testing import CliRunner

from treepaste import __version__
from treepaste.cli import app
from treepaste.exceptions import ClipboardUnavailableError
from treepaste.models import ConflictChoice, ConflictDecision

sys.path.insert(0, str(Path(__file__).parent))
from conftest import dir_item, file_item


@pytest.fixture
def cli_runner() -> CliRunner:
    """Return a CliRunner instance for testing."""
    return CliRunner()


def finance_copy(tree: Dict[str, Path]) -> Path:
    return tree["dest"] / "src" / "Company" / "Finance"


class TestVersionAndHelp:
    """Tests for --version and --help."""

    def test_version_flag(self, cli_runner: CliRunner) -> None:
        result = cli_runner.invoke(app, ["--version"])
        assert result.exit_code == 0
        assert __version__ in result.output

    def test_app_help_lists_commands(self, cli_runner: CliRunner) -> None:
        result = cli_runner.invoke(app, ["--help"])
        assert result.exit_code == 0
        assert "paste" in result.output
        assert "plan" in result.output


class TestPlanCommand:
    """Tests for the read-only plan command."""

    def test_plan_copies_nothing(self, cli_runner: CliRunner, source_tree: Dict[str, Path]) -> None:
        result = cli_runner.invoke(
            app, ["plan", str(source_tree["dest"]), str(source_tree["projects"])]
        )

        assert result.exit_code == 0
        assert "Paste Plan" in result.output
        assert list(source_tree["dest"].iterdir()) == []

    def test_plan_reports_subtree_conflict(
        self, cli_runner: CliRunner, source_tree: Dict[str, Path]
    ) -> None:
        projects = source_tree["projects"]
        result = cli_runner.invoke(app, ["plan", str(projects), str(projects)])

        assert result.exit_code == 1
        assert "Cannot paste into own folder" in result.output


class TestPasteCommand:
    """Tests for the paste command."""

    def test_paste_sources(self, cli_runner: CliRunner, source_tree: Dict[str, Path]) -> None:
        result = cli_runner.invoke(
            app,
            [
                "paste",
                str(source_tree["dest"]),
                str(source_tree["report"]),
                str(source_tree["projects"]),
                "--no-log",
            ],
        )

        assert result.exit_code == 0, result.output
        assert (finance_copy(source_tree) / "report.txt").read_text() == "quarterly report"
        assert (finance_copy(source_tree) / "Projects" / "Archive" / "old.txt").exists()
        assert "Paste Summary" in result.output

    def test_paste_into_own_folder_exits_1(
        self, cli_runner: CliRunner, source_tree: Dict[str, Path]
    ) -> None:
        projects = source_tree["projects"]
        result = cli_runner.invoke(app, ["paste", str(projects), str(projects), "--no-log"])

        assert result.exit_code == 1
        assert "Cannot paste into own folder" in result.output
        assert not (projects / "Projects").exists()

    def test_on_conflict_rename(self, cli_runner: CliRunner, source_tree: Dict[str, Path]) -> None:
        args = ["paste", str(source_tree["dest"]), str(source_tree["report"]), "--no-log"]
        cli_runner.invoke(app, args)

        result = cli_runner.invoke(app, args + ["--on-conflict", "rename"])

        assert result.exit_code == 0, result.output
        assert (finance_copy(source_tree) / "report (1).txt").exists()

    def test_cancel_exits_130(self, cli_runner: CliRunner, source_tree: Dict[str, Path]) -> None:
        args = ["paste", str(source_tree["dest"]), str(source_tree["report"]), "--no-log"]
        cli_runner.invoke(app, args)

        with patch(
            "treepaste.cli.RichConflictPrompt.ask",
            return_value=ConflictDecision(ConflictChoice.CANCEL),
        ):
            result = cli_runner.invoke(app, args)

        assert result.exit_code == 130
        assert "CANCELLED" in result.output

    def test_copy_errors_exit_1(self, cli_runner: CliRunner, source_tree: Dict[str, Path]) -> None:
        with patch(
            "treepaste.operations.copy_engine.shutil.copy2",
            side_effect=PermissionError("denied"),
        ):
            result = cli_runner.invoke(
                app, ["paste", str(source_tree["dest"]), str(source_tree["report"]), "--no-log"]
            )

        assert result.exit_code == 1
        assert "Errors (1)" in result.output

    def test_missing_destination(self, cli_runner: CliRunner, temp_dir: Path) -> None:
        result = cli_runner.invoke(app, ["paste", str(temp_dir / "missing"), str(temp_dir)])

        assert result.exit_code == 1
        assert "does not exist" in result.output

    def test_only_missing_sources(self, cli_runner: CliRunner, source_tree: Dict[str, Path]) -> None:
        result = cli_runner.invoke(
            app,
            ["paste", str(source_tree["dest"]), str(source_tree["root"] / "gone.txt"), "--no-log"],
        )

        assert result.exit_code == 1
        assert "Nothing to paste" in result.output

    def test_reads_clipboard_without_sources(
        self, cli_runner: CliRunner, source_tree: Dict[str, Path]
    ) -> None:
        items = [file_item(source_tree["report"])]

        with patch("treepaste.cli.read_clipboard_items", return_value=(items, [])):
            result = cli_runner.invoke(app, ["paste", str(source_tree["dest"]), "--no-log"])

        assert result.exit_code == 0, result.output
        assert (finance_copy(source_tree) / "report.txt").exists()

    def test_clipboard_unavailable(self, cli_runner: CliRunner, source_tree: Dict[str, Path]) -> None:
        with patch(
            "treepaste.cli.read_clipboard_items",
            side_effect=ClipboardUnavailableError("Cannot read the clipboard"),
        ):
            result = cli_runner.invoke(app, ["paste", str(source_tree["dest"]), "--no-log"])

        assert result.exit_code == 1
        assert "Cannot read the clipboard" in result.output

    def test_log_file_written(self, cli_runner: CliRunner, source_tree: Dict[str, Path]) -> None:
        log_path = source_tree["root"] / "paste.log"
        items = [dir_item(source_tree["projects"])]

        with patch("treepaste.cli.read_clipboard_items", return_value=(items, [])):
            result = cli_runner.invoke(
                app, ["paste", str(source_tree["dest"]), "--log-file", str(log_path)]
            )

        assert result.exit_code == 0, result.output
        content = log_path.read_text(encoding="utf-8")
        assert "Target:" in content
        assert "SUMMARY (DONE)" in content

    def test_unopenable_log_file_is_not_fatal(
        self, cli_runner: CliRunner, source_tree: Dict[str, Path]
    ) -> None:
        log_path = source_tree["root"] / "paste.log"

        with patch(
            "treepaste.cli.PasteLogger.open",
            side_effect=OSError("Cannot open log file for writing: denied"),
        ):
            result = cli_runner.invoke(
                app,
                [
                    "paste",
                    str(source_tree["dest"]),
                    str(source_tree["report"]),
                    "--log-file",
                    str(log_path),
                ],
            )

        assert result.exit_code == 0, result.output
        assert "Cannot write log file" in result.output
        assert (finance_copy(source_tree) / "report.txt").exists()
        assert not log_path.exists()
