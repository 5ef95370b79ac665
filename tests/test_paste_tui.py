"""Tests for PasteTUI and RichConflictPrompt."""

import io
import sys
from pathlib import Path, PurePath
from typing import Tuple
from unittest.mock import patch

import pytest
from rich.console import Console

from treepaste.models import (
    ConflictChoice,
    PasteSummary,
    SessionStatus,
    SubtreeConflict,
)
from treepaste.ui import PasteTUI, RichConflictPrompt
from treepaste.ui.paste_tui import format_size

sys.path.insert(0, str(Path(__file__).parent))
from conftest import dir_item, file_item


class TestPasteTUIDisplay:
    """Tests for display methods with captured console output."""

    def test_display_plan_lists_targets(self, captured_console: Tuple[Console, io.StringIO]):
        console, output = captured_console
        item = file_item(Path("/data/a.txt"))

        PasteTUI(console).display_plan(Path("/out"), [(item, PurePath("/out/data/a.txt"))], [])

        result = output.getvalue()
        assert "Paste Plan" in result
        assert "/out/data/a.txt" in result
        assert "No item would be pasted into itself" in result

    def test_display_plan_with_conflicts(self, captured_console: Tuple[Console, io.StringIO]):
        console, output = captured_console
        item = dir_item(Path("/data/folder"))
        target = PurePath("/data/folder/folder")
        conflict = SubtreeConflict(item, target, "target is inside the source folder")

        PasteTUI(console).display_plan(Path("/data/folder"), [(item, target)], [conflict])

        result = output.getvalue()
        assert "Cannot paste into own folder (1)" in result
        assert "Nothing was copied" in result

    def test_display_summary_done(self, captured_console: Tuple[Console, io.StringIO]):
        console, output = captured_console
        summary = PasteSummary(
            total_items=2,
            items_processed=2,
            files_copied=1234,
            files_renamed=1,
            warnings=["File path too long (300 > 259 characters), skipped: /x"],
        )

        PasteTUI(console).display_summary(summary)

        result = output.getvalue()
        assert "Paste Summary" in result
        assert "1,234" in result
        assert "2/2" in result
        assert "Warnings (1)" in result
        assert "CANCELLED" not in result

    def test_display_summary_cancelled(self, captured_console: Tuple[Console, io.StringIO]):
        console, output = captured_console
        summary = PasteSummary(status=SessionStatus.CANCELLED, total_items=3, items_processed=1)

        PasteTUI(console).display_summary(summary)

        result = output.getvalue()
        assert "CANCELLED" in result
        assert "were kept" in result

    def test_display_summary_aborted_shows_report(
        self, captured_console: Tuple[Console, io.StringIO]
    ):
        console, output = captured_console
        conflict = SubtreeConflict(
            dir_item(Path("/a/b")), PurePath("/a/b/b"), "target is inside the source folder"
        )
        summary = PasteSummary(status=SessionStatus.ABORTED, subtree_conflicts=[conflict])

        PasteTUI(console).display_summary(summary)

        result = output.getvalue()
        assert "Cannot paste into own folder (1)" in result
        assert "Paste Summary" not in result

    def test_errors_truncated_after_ten(self, captured_console: Tuple[Console, io.StringIO]):
        console, output = captured_console
        summary = PasteSummary(errors=[f"error {i}" for i in range(15)])

        PasteTUI(console).display_summary(summary)

        result = output.getvalue()
        assert "Errors (15)" in result
        assert "and 5 more" in result

    @pytest.mark.parametrize(
        "size, expected",
        [(512, "512 B"), (2048, "2.0 KB"), (5 * 1024 * 1024, "5.0 MB"), (3 * 1024 ** 3, "3.0 GB")],
    )
    def test_format_size(self, size: int, expected: str):
        assert format_size(size) == expected


class TestRichConflictPrompt:
    """Tests for the interactive conflict dialog."""

    def test_choice_with_apply_to_all(
        self, temp_dir: Path, captured_console: Tuple[Console, io.StringIO]
    ):
        console, output = captured_console
        source = temp_dir / "a.txt"
        source.write_text("new")
        target = temp_dir / "b.txt"
        target.write_text("old")

        with patch("treepaste.ui.paste_tui.Prompt.ask", return_value="r"), patch(
            "treepaste.ui.paste_tui.Confirm.ask", return_value=True
        ):
            decision = RichConflictPrompt(console).ask(source, target)

        assert decision.choice is ConflictChoice.RENAME
        assert decision.apply_to_all
        assert "File already exists" in output.getvalue()

    def test_cancel_skips_apply_to_all_question(
        self, temp_dir: Path, captured_console: Tuple[Console, io.StringIO]
    ):
        console, _ = captured_console

        with patch("treepaste.ui.paste_tui.Prompt.ask", return_value="c"), patch(
            "treepaste.ui.paste_tui.Confirm.ask"
        ) as confirm:
            decision = RichConflictPrompt(console).ask(temp_dir / "a", temp_dir / "b")

        assert decision.choice is ConflictChoice.CANCEL
        assert not decision.apply_to_all
        confirm.assert_not_called()

    def test_ctrl_c_counts_as_cancel(
        self, temp_dir: Path, captured_console: Tuple[Console, io.StringIO]
    ):
        console, _ = captured_console

        with patch("treepaste.ui.paste_tui.Prompt.ask", side_effect=KeyboardInterrupt):
            decision = RichConflictPrompt(console).ask(temp_dir / "a", temp_dir / "b")

        assert decision.choice is ConflictChoice.CANCEL

    def test_missing_files_still_displayed(
        self, temp_dir: Path, captured_console: Tuple[Console, io.StringIO]
    ):
        console, output = captured_console

        with patch("treepaste.ui.paste_tui.Prompt.ask", return_value="s"), patch(
            "treepaste.ui.paste_tui.Confirm.ask", return_value=False
        ):
            decision = RichConflictPrompt(console).ask(temp_dir / "gone", temp_dir / "b")

        assert decision.choice is ConflictChoice.SKIP
        assert not decision.apply_to_all
        assert "?" in output.getvalue()
