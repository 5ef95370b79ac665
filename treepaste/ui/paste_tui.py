"""Terminal User Interface for TreePaste.

This module provides the PasteTUI class for reports and summaries and the
RichConflictPrompt class, the interactive conflict dialog.

Example:
    from treepaste.ui import PasteTUI, RichConflictPrompt

    tui = PasteTUI()
    prompt = RichConflictPrompt(tui.console)
    summary = PasteSession(destination, items, prompt).run()
    tui.display_summary(summary)
"""

from datetime import datetime
from pathlib import Path, PurePath
from typing import List, Optional, Sequence, Tuple

from rich.console import Console
from rich.markup import escape
from rich.panel import Panel
from rich.prompt import Confirm, Prompt
from rich.table import Table

from treepaste.models import (
    ClipboardItem,
    ConflictChoice,
    ConflictDecision,
    PasteSummary,
    SessionStatus,
    SubtreeConflict,
)

_CHOICE_KEYS = {
    "o": ConflictChoice.OVERWRITE,
    "r": ConflictChoice.RENAME,
    "s": ConflictChoice.SKIP,
    "c": ConflictChoice.CANCEL,
}


class RichConflictPrompt:
    """Interactive conflict dialog backed by Rich prompts.

    Args:
        console: Optional Rich Console. Pass a Console writing to a StringIO
            for testing.
    """

    def __init__(self, console: Optional[Console] = None) -> None:
        self.console = console or Console()

    def ask(self, source_path: Path, target_path: Path) -> ConflictDecision:
        """Show both files and ask what to do with the existing one.

        Ctrl+C while the prompt is open counts as Cancel.
        """
        table = Table(show_header=True, header_style="bold")
        table.add_column("", style="cyan")
        table.add_column("Path", style="white")
        table.add_column("Size", justify="right")
        table.add_column("Modified", style="dim")
        table.add_row("Source", escape(str(source_path)), *self._describe(source_path))
        table.add_row("Existing", escape(str(target_path)), *self._describe(target_path))

        self.console.print(
            Panel(table, title="File already exists", border_style="yellow")
        )

        try:
            key = Prompt.ask(
                "(o)verwrite, (r)ename, (s)kip, (c)ancel",
                choices=list(_CHOICE_KEYS),
                default="s",
                console=self.console,
            )
            choice = _CHOICE_KEYS[key]
            if choice is ConflictChoice.CANCEL:
                return ConflictDecision(choice)

            apply_to_all = Confirm.ask(
                "Apply to all remaining conflicts?",
                default=False,
                console=self.console,
            )
        except KeyboardInterrupt:
            self.console.print("\n[yellow]Paste cancelled by user.[/yellow]")
            return ConflictDecision(ConflictChoice.CANCEL)

        return ConflictDecision(choice, apply_to_all=apply_to_all)

    def _describe(self, path: Path) -> Tuple[str, str]:
        try:
            stat = path.stat()
        except OSError:
            return "?", "?"
        modified = datetime.fromtimestamp(stat.st_mtime).strftime("%Y-%m-%d %H:%M")
        return format_size(stat.st_size), modified


class PasteTUI:
    """Rich-based output for paste plans, pre-flight failures and summaries.

    Args:
        console: Optional Rich Console instance for output.

    Attributes:
        console: The Rich Console instance used for all output.
    """

    def __init__(self, console: Optional[Console] = None) -> None:
        self.console = console or Console()

    def display_plan(
        self,
        destination: Path,
        placements: Sequence[Tuple[ClipboardItem, PurePath]],
        conflicts: List[SubtreeConflict],
    ) -> None:
        """Display where each item would land, without copying anything.

        Args:
            destination: Destination folder.
            placements: (item, target path) pairs in clipboard order.
            conflicts: Subtree conflicts found by the guard.
        """
        header_panel = Panel(
            f"Destination: {escape(str(destination))}\nItems: {len(placements)}",
            title="Paste Plan",
            border_style="blue",
        )
        self.console.print(header_panel)

        flagged = {id(c.item) for c in conflicts}

        table = Table(title="Targets")
        table.add_column("#", justify="right", style="cyan", no_wrap=True)
        table.add_column("Kind", style="magenta")
        table.add_column("Source", style="white")
        table.add_column("Target", style="white")

        for idx, (item, target) in enumerate(placements, start=1):
            target_str = escape(str(target))
            if id(item) in flagged:
                target_str = f"[red]{target_str}[/red]"
            table.add_row(str(idx), item.kind.value, escape(str(item.path)), target_str)

        self.console.print(table)

        if conflicts:
            self.display_subtree_conflicts(conflicts)
        else:
            self.console.print("[green]No item would be pasted into itself.[/green]")

    def display_subtree_conflicts(self, conflicts: List[SubtreeConflict]) -> None:
        """Display the aggregated pre-flight failure as one report."""
        table = Table(show_header=True, header_style="bold")
        table.add_column("Source", style="white")
        table.add_column("Target", style="red")
        table.add_column("Reason", style="dim")
        for conflict in conflicts:
            table.add_row(
                escape(str(conflict.item.path)),
                escape(str(conflict.target_path)),
                conflict.reason,
            )

        self.console.print(
            Panel(
                table,
                title=f"Cannot paste into own folder ({len(conflicts)})",
                border_style="red",
            )
        )
        self.console.print("[red]Nothing was copied.[/red]")

    def display_summary(self, summary: PasteSummary) -> None:
        """Display final statistics, warnings and errors."""
        if summary.status is SessionStatus.ABORTED:
            self.display_subtree_conflicts(summary.subtree_conflicts)
            return

        if summary.status is SessionStatus.CANCELLED:
            title = "Paste Summary [yellow][CANCELLED][/yellow]"
            border = "yellow"
        else:
            title = "Paste Summary"
            border = "green"
        self.console.print(Panel(title, border_style=border))

        table = Table(show_header=True, header_style="bold")
        table.add_column("Metric", style="cyan")
        table.add_column("Value", justify="right")

        table.add_row("Items processed", f"{summary.items_processed}/{summary.total_items}")
        table.add_row("Files copied", f"{summary.files_copied:,}")
        table.add_row("Files overwritten", f"{summary.files_overwritten:,}")
        table.add_row("Files renamed", f"{summary.files_renamed:,}")
        table.add_row("Files skipped", f"{summary.files_skipped:,}")
        table.add_row("Folders created", f"{summary.dirs_created:,}")
        table.add_row("Paths too long", f"{summary.paths_too_long:,}")
        table.add_row("Duration", self._format_duration(summary.duration_seconds))

        self.console.print(table)

        if summary.status is SessionStatus.CANCELLED:
            self.console.print(
                "[dim]Files copied before the cancel were kept.[/dim]"
            )

        if summary.warnings:
            self._display_messages(summary.warnings, "Warnings", "yellow")
        if summary.errors:
            self._display_messages(summary.errors, "Errors", "red")

    def _display_messages(self, messages: List[str], title: str, border_style: str) -> None:
        max_display = 10
        displayed = messages[:max_display]
        remaining = len(messages) - max_display

        text = "\n".join(f"- {escape(m)}" for m in displayed)
        if remaining > 0:
            text += f"\n\n... and {remaining} more"

        self.console.print(
            Panel(text, title=f"{title} ({len(messages)})", border_style=border_style)
        )

    def _format_duration(self, seconds: float) -> str:
        if seconds < 0:
            seconds = 0
        minutes = int(seconds // 60)
        secs = int(seconds % 60)
        return f"{minutes}m {secs}s"


def format_size(bytes_size: int) -> str:
    """Convert bytes to human-readable format (e.g. "10.5 MB")."""
    if bytes_size < 1024:
        return f"{bytes_size} B"
    elif bytes_size < 1024 * 1024:
        return f"{bytes_size / 1024:.1f} KB"
    elif bytes_size < 1024 * 1024 * 1024:
        return f"{bytes_size / (1024 * 1024):.1f} MB"
    else:
        return f"{bytes_size / (1024 * 1024 * 1024):.1f} GB"
