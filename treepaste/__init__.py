"""TreePaste - paste files and folders with their folder tree.

Copies clipboard-selected files and folders into a destination folder,
recreating the portion of the source folder tree that diverges from the
destination and resolving name conflicts with an "apply to all" policy.
"""

__version__ = "1.0.0"

from .models import (
    ClipboardItem,
    ConflictChoice,
    ConflictDecision,
    ItemKind,
    PasteSummary,
    SessionState,
    SessionStatus,
)

__all__ = [
    "__version__",
    "ClipboardItem",
    "ConflictChoice",
    "ConflictDecision",
    "ItemKind",
    "PasteSummary",
    "SessionState",
    "SessionStatus",
]


def main() -> None:
    """Entry point for the TreePaste CLI application.

    Imports and runs the Typer app from the treepaste.cli module.
    """
    from treepaste.cli import app
    app()
