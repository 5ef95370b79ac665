"""
TreePaste - CLI Interface.

Pastes files and folders into a destination folder while recreating the
part of their source folder tree that differs from the destination.

Usage Examples:
    # Paste whatever file list is on the clipboard
    treepaste paste /path/to/destination

    # Paste explicit sources
    treepaste paste /path/to/destination /data/a.txt /data/project

    # Show where everything would land without copying
    treepaste plan /path/to/destination /data/project

    # Rename every conflicting file without asking
    treepaste paste /path/to/destination --on-conflict rename

    # Trace to a specific log file with debug output
    treepaste paste /path/to/destination --log-file paste.log --verbose
"""

import logging
import os
from enum import Enum
from pathlib import Path
from typing import List, Optional, Tuple

import typer
from rich.console import Console

from treepaste.clipboard import items_from_paths, read_clipboard_items
from treepaste.exceptions import ClipboardUnavailableError, TreePasteError
from treepaste.models import ClipboardItem, ConflictChoice, SessionStatus
from treepaste.orchestration import PasteLogger, PasteSession
from treepaste.paths import PathResolver, SubtreeGuard
from treepaste.ui import PasteTUI, RichConflictPrompt

__version__ = "1.0.0"

DEFAULT_LOG_FILE = Path.home() / "treepaste.log"

# Initialize Typer app
app = typer.Typer(
    name="treepaste",
    help="TreePaste - Paste files and folders while recreating their folder tree.",
    add_completion=False,
    no_args_is_help=True,
)

# Rich console for consistent output formatting
console = Console()


class OnConflict(str, Enum):
    """Conflict policy selectable on the command line."""
    ask = "ask"
    overwrite = "overwrite"
    rename = "rename"
    skip = "skip"


_PRESETS = {
    OnConflict.ask: None,
    OnConflict.overwrite: ConflictChoice.OVERWRITE,
    OnConflict.rename: ConflictChoice.RENAME,
    OnConflict.skip: ConflictChoice.SKIP,
}


def version_callback(value: bool) -> None:
    """Display version information and exit."""
    if value:
        console.print(f"TreePaste v{__version__}")
        raise typer.Exit()


def configure_logging(verbose: bool) -> None:
    """Route module loggers to stderr; DEBUG when verbose."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(levelname)s: %(message)s",
    )


def validate_destination(destination: Path, need_write: bool) -> None:
    """
    Validate that the destination exists and is a usable directory.

    Raises:
        typer.Exit: If validation fails with descriptive error message.
    """
    if not destination.exists():
        console.print(f"[red]Error:[/red] Destination does not exist: {destination}")
        raise typer.Exit(1)

    if not destination.is_dir():
        console.print(f"[red]Error:[/red] Destination is not a directory: {destination}")
        raise typer.Exit(1)

    if need_write and not os.access(destination, os.W_OK):
        console.print(
            f"[red]Error:[/red] Permission denied - cannot write to: {destination}"
        )
        raise typer.Exit(1)


def collect_items(sources: Optional[List[Path]]) -> List[ClipboardItem]:
    """
    Build the item list from the arguments, or from the clipboard if none.

    Raises:
        typer.Exit: If the clipboard cannot be read or nothing is left to paste.
    """
    try:
        if sources:
            items, skipped = items_from_paths(str(s) for s in sources)
        else:
            items, skipped = read_clipboard_items()
    except ClipboardUnavailableError as e:
        console.print(f"[red]Error:[/red] {e}")
        raise typer.Exit(1)

    for message in skipped:
        console.print(f"[yellow]Warning:[/yellow] {message}")

    if not items:
        console.print("[red]Error:[/red] Nothing to paste - no existing files or folders given.")
        raise typer.Exit(1)

    return items


@app.callback()
def main(
    version: Optional[bool] = typer.Option(
        None,
        "--version",
        "-v",
        callback=version_callback,
        is_eager=True,
        help="Show version and exit.",
    ),
) -> None:
    """TreePaste - Paste files and folders while recreating their folder tree."""
    pass


@app.command()
def plan(
    destination: Path = typer.Argument(
        ...,
        help="Folder to paste into.",
        exists=False,  # We do our own validation
    ),
    sources: Optional[List[Path]] = typer.Argument(
        None,
        help="Files and folders to paste. Defaults to the clipboard.",
    ),
    case_sensitive: bool = typer.Option(
        False,
        "--case-sensitive",
        help="Compare path components case-sensitively.",
    ),
    verbose: bool = typer.Option(
        False,
        "--verbose",
        "-V",
        help="Enable verbose output.",
    ),
) -> None:
    """
    Show where each item would land, without copying.

    Also runs the check that no folder is pasted into itself.
    """
    configure_logging(verbose)
    validate_destination(destination, need_write=False)
    destination = destination.absolute()
    items = collect_items(sources)

    resolver = PathResolver(case_sensitive=case_sensitive)
    placements: List[Tuple[ClipboardItem, Path]] = [
        (item, Path(resolver.target_path_for(item, destination))) for item in items
    ]
    conflicts = SubtreeGuard(resolver).check(items, destination)

    PasteTUI(console).display_plan(destination, placements, conflicts)

    if conflicts:
        raise typer.Exit(1)


@app.command()
def paste(
    destination: Path = typer.Argument(
        ...,
        help="Folder to paste into.",
        exists=False,  # We do our own validation
    ),
    sources: Optional[List[Path]] = typer.Argument(
        None,
        help="Files and folders to paste. Defaults to the clipboard.",
    ),
    on_conflict: OnConflict = typer.Option(
        OnConflict.ask,
        "--on-conflict",
        "-c",
        help="What to do with existing files: ask, overwrite, rename or skip.",
        case_sensitive=False,
    ),
    case_sensitive: bool = typer.Option(
        False,
        "--case-sensitive",
        help="Compare path components case-sensitively.",
    ),
    log_file: Path = typer.Option(
        DEFAULT_LOG_FILE,
        "--log-file",
        "-l",
        help="Trace log to append to.",
    ),
    no_log: bool = typer.Option(
        False,
        "--no-log",
        help="Do not write a trace log.",
    ),
    verbose: bool = typer.Option(
        False,
        "--verbose",
        "-V",
        help="Enable verbose output.",
    ),
) -> None:
    """
    Paste files and folders into DESTINATION.

    1. Check: refuse the whole paste if any folder would land inside itself
    2. Copy: recreate the differing part of each source tree and copy files,
       asking about existing files unless --on-conflict says otherwise
    3. Summary: display results and statistics
    """
    configure_logging(verbose)
    validate_destination(destination, need_write=True)
    items = collect_items(sources)

    # Open trace logger; paste continues without it on failure
    trace: Optional[PasteLogger] = None
    if not no_log:
        try:
            trace = PasteLogger(log_file).open()
        except OSError as e:
            console.print(
                f"[yellow]Warning:[/yellow] Cannot write log file: {e}. "
                "Continuing without logging."
            )
            trace = None

    tui = PasteTUI(console)

    try:
        session = PasteSession(
            destination=destination,
            items=items,
            prompt=RichConflictPrompt(console),
            trace=trace,
            preset=_PRESETS[on_conflict],
            case_sensitive=case_sensitive,
        )

        summary = session.run()

        tui.display_summary(summary)

        if trace is not None and verbose:
            console.print(f"[dim]Log written to: {trace.get_log_path()}[/dim]")

    except KeyboardInterrupt:
        console.print("\n[yellow]Paste interrupted by user.[/yellow]")
        raise typer.Exit(130)

    except TreePasteError as e:
        console.print(f"[red]Error:[/red] {e}")
        raise typer.Exit(1)

    except OSError as e:
        console.print(f"[red]Error:[/red] {e}")
        raise typer.Exit(1)

    finally:
        if trace is not None:
            trace.close()

    # Return appropriate exit code
    if summary.status is SessionStatus.CANCELLED:
        raise typer.Exit(130)
    if summary.status is SessionStatus.ABORTED or summary.errors:
        raise typer.Exit(1)


if __name__ == "__main__":
    app()
