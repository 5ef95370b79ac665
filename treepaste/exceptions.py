"""Exceptions for TreePaste."""

from typing import List, TYPE_CHECKING

if TYPE_CHECKING:
    from treepaste.models import SubtreeConflict


class TreePasteError(Exception):
    """Base class for errors that end a paste session before any copy."""


class InvalidDestinationError(TreePasteError, ValueError):
    """Raised when the destination is missing or is not a directory."""


class EmptyInputSetError(TreePasteError, ValueError):
    """Raised when there is nothing on the clipboard to paste."""


class SubtreeConflictError(TreePasteError):
    """Raised when one or more items would be pasted into themselves.

    The ``conflicts`` attribute lists every offending item so the whole set
    can be reported at once.
    """

    def __init__(self, conflicts: "List[SubtreeConflict]") -> None:
        self.conflicts = list(conflicts)
        names = ", ".join(str(c.item.path) for c in self.conflicts)
        super().__init__(
            f"{len(self.conflicts)} item(s) cannot be pasted into their own "
            f"folder tree: {names}"
        )


class ClipboardUnavailableError(TreePasteError):
    """Raised when the system clipboard cannot be read."""
