"""PasteLogger for tracing paste sessions to a log file.

This module provides the PasteLogger class that appends a human-readable
trace of every paste session: the inputs, the computed prefixes, relative
paths and targets, each conflict decision, warnings, errors and a summary.
The file is append-only so several sessions accumulate in one log.
"""

import sys
from datetime import datetime
from pathlib import Path, PurePath
from typing import List, Optional, Sequence, TextIO

from treepaste.models import (
    ClipboardItem,
    ConflictDecision,
    PasteSummary,
    SubtreeConflict,
)


class PasteLogger:
    """Append-only trace log for paste sessions.

    Usage:
        with PasteLogger(log_path) as trace:
            trace.log_header(destination, items)
            trace.log_item(item, prefix, relative, target)
            trace.log_conflict(source, target, decision, remembered=False)
            trace.log_summary(summary)

    Attributes:
        SEPARATOR: The 65-character separator line used between sections.
    """

    SEPARATOR = "=" * 65

    def __init__(self, log_file_path: Optional[Path] = None) -> None:
        """Initialize the PasteLogger.

        Args:
            log_file_path: Optional path for the log file. If not provided,
                ``treepaste.log`` in the current directory is used.

        Raises:
            OSError: If the log file's folder is missing or not writable.
        """
        self._start_timestamp = datetime.now()
        self._file_handle: Optional[TextIO] = None

        if log_file_path is None:
            self._log_file_path = Path.cwd() / "treepaste.log"
        else:
            self._log_file_path = Path(log_file_path)

        self._validate_path()

    def _validate_path(self) -> None:
        """Validate that the log file path is writable.

        Raises:
            OSError: If the parent directory doesn't exist or is not writable.
        """
        parent = self._log_file_path.parent
        if not parent.exists():
            raise OSError(f"Parent directory does not exist: {parent}")
        if not parent.is_dir():
            raise OSError(f"Parent path is not a directory: {parent}")
        try:
            test_file = parent / f".treepaste_test_{id(self)}"
            test_file.touch()
            test_file.unlink()
        except PermissionError:
            raise OSError(f"Permission denied: cannot write to {parent}")

    def open(self) -> "PasteLogger":
        """Open the log file for appending.

        Raises:
            OSError: If the file cannot be opened.
        """
        try:
            self._file_handle = open(self._log_file_path, "a", encoding="utf-8")
        except OSError as e:
            raise OSError(f"Cannot open log file for writing: {e}")
        return self

    def close(self) -> None:
        """Close the log file; a close failure is only reported."""
        if self._file_handle is not None:
            try:
                self._file_handle.close()
            except OSError as e:
                print(f"Warning: Error closing log file: {e}", file=sys.stderr)
            finally:
                self._file_handle = None

    def __enter__(self) -> "PasteLogger":
        return self.open()

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        self.close()

    def get_log_path(self) -> Path:
        """Get the path to the log file."""
        return self._log_file_path

    def log_header(self, destination: Path, items: Sequence[ClipboardItem]) -> None:
        """Write the session header with the destination and every input item."""
        self._write_separator()
        self._write_line("TreePaste - Paste Log")
        self._write_separator()
        self._write_line(f"Timestamp: {self._format_timestamp(self._start_timestamp)}")
        self._write_line(f"Destination: {destination}")
        self._write_line(f"Items: {len(items)}")
        for item in items:
            self._write_line(f"- [{item.kind.value}] {item.path}", indent=2)
        self._write_line("")

    def log_subtree_conflicts(self, conflicts: List[SubtreeConflict]) -> None:
        """Write the aggregated pre-flight failure."""
        self._write_line(f"ABORTED: {len(conflicts)} item(s) would be pasted into themselves")
        for conflict in conflicts:
            self._write_line(
                f"- {conflict.item.path} -> {conflict.target_path} ({conflict.reason})",
                indent=2,
            )
        self._write_line("")

    def log_item(
        self,
        item: ClipboardItem,
        prefix: Optional[PurePath],
        relative: PurePath,
        target: PurePath,
    ) -> None:
        """Write the computed placement of one clipboard item."""
        now = self._format_timestamp(datetime.now())
        self._write_line(f"[{now}] Item: {item.path}")
        self._write_line(f"Common prefix: {prefix if prefix is not None else '(none)'}", indent=2)
        self._write_line(f"Relative path: {relative}", indent=2)
        self._write_line(f"Target: {target}", indent=2)

    def log_file_action(self, source: Path, target: Path, action: str) -> None:
        """Write what happened to one file."""
        self._write_line(f"{action}: {source} -> {target}", indent=4)

    def log_folder(self, source: Path, target: Path) -> None:
        self._write_line(f"folder: {source} -> {target}", indent=4)

    def log_conflict(
        self,
        source: Path,
        target: Path,
        decision: ConflictDecision,
        remembered: bool,
    ) -> None:
        """Write a conflict decision, noting whether it came from apply-to-all."""
        if remembered:
            origin = "remembered"
        elif decision.apply_to_all:
            origin = "user, apply to all"
        else:
            origin = "user"
        self._write_line(
            f"! Conflict: {target} (from {source}) - {decision.choice.value} [{origin}]",
            indent=4,
        )

    def log_warning(self, message: str) -> None:
        self._write_line(f"WARNING: {message}", indent=4)

    def log_error(self, message: str) -> None:
        self._write_line(f"ERROR: {message}", indent=4)

    def log_summary(self, summary: PasteSummary) -> None:
        """Write the summary section to the log file."""
        self._write_separator()
        self._write_line(f"SUMMARY ({summary.status.value.upper()})")
        self._write_separator()
        self._write_line(f"Items processed: {summary.items_processed}/{summary.total_items}")
        self._write_line(f"Files copied: {summary.files_copied:,}")
        self._write_line(f"Files overwritten: {summary.files_overwritten:,}")
        self._write_line(f"Files renamed: {summary.files_renamed:,}")
        self._write_line(f"Files skipped: {summary.files_skipped:,}")
        self._write_line(f"Folders created: {summary.dirs_created:,}")
        self._write_line(f"Paths too long: {summary.paths_too_long}")

        if summary.errors:
            self._write_line(f"Total errors: {len(summary.errors)}")

        self._write_line(f"Duration: {self._format_duration(summary.duration_seconds)}")
        self._write_line("")

    def _format_duration(self, seconds: float) -> str:
        """Format duration as "45s", "5m 23s" or "1h 5m 30s"."""
        total_seconds = int(seconds)

        if total_seconds < 60:
            return f"{total_seconds}s"

        hours = total_seconds // 3600
        minutes = (total_seconds % 3600) // 60
        secs = total_seconds % 60

        if hours > 0:
            return f"{hours}h {minutes}m {secs}s"
        else:
            return f"{minutes}m {secs}s"

    def _format_timestamp(self, dt: datetime) -> str:
        return dt.strftime("%Y-%m-%d %H:%M:%S")

    def _write_separator(self) -> None:
        self._write_line(self.SEPARATOR)

    def _write_line(self, text: str, indent: int = 0) -> None:
        """Write a line to the log file with optional indentation.

        Args:
            text: The text to write.
            indent: Number of spaces to indent the line.
        """
        if self._file_handle is None:
            print(
                f"Warning: Attempted to write to closed log file: {text}",
                file=sys.stderr,
            )
            return

        try:
            self._file_handle.write(" " * indent + text + "\n")
        except OSError as e:
            print(f"Warning: Error writing to log file: {e}", file=sys.stderr)
