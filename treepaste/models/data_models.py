"""
Core data models for the TreePaste tool.

This module contains the following dataclasses:
- ClipboardItem: A file or folder path read from the clipboard
- ConflictDecision: An answer to a file conflict, optionally applied to all
- SessionState: Mutable state shared by one paste run
- SubtreeConflict: An item that would be pasted into itself
- PasteOperation: Tracks the results of copying one clipboard item
- PasteSummary: Summary of the whole paste session
"""

from dataclasses import dataclass, field
from enum import Enum
from pathlib import PurePath
from typing import List, Optional

from .conflict_choice import ConflictChoice
from .item_kind import ItemKind


class CopyOutcome(Enum):
    """Result of every CopyEngine frame; CANCELLED unwinds the walk."""
    COMPLETED = "completed"
    CANCELLED = "cancelled"


class SessionStatus(Enum):
    """Terminal states of a paste session."""
    DONE = "done"                      # Every item processed
    ABORTED = "aborted"                # Subtree conflicts found, nothing copied
    CANCELLED = "cancelled"            # User chose Cancel in a conflict prompt


@dataclass(frozen=True)
class ClipboardItem:
    """A clipboard entry; immutable once read."""
    path: PurePath                    # Absolute source path
    kind: ItemKind                    # File or directory

    @property
    def is_directory(self) -> bool:
        return self.kind is ItemKind.DIRECTORY

    @property
    def parent(self) -> PurePath:
        """Containing directory used for the common prefix computation."""
        return self.path.parent

    @property
    def leaf(self) -> str:
        """Final path component, recreated under the destination."""
        return self.path.name


@dataclass(frozen=True)
class ConflictDecision:
    """A user's (or the sticky) answer to a file conflict."""
    choice: ConflictChoice
    apply_to_all: bool = False


@dataclass
class SessionState:
    """Mutable state for a single paste run.

    The sticky decision is set at most once and never cleared mid-run.
    Cancel is never stored; it sets the abort flag instead.
    """
    sticky_decision: Optional[ConflictDecision] = None
    aborted: bool = False

    def remember(self, decision: ConflictDecision) -> bool:
        """Store ``decision`` as the sticky decision if allowed.

        Returns:
            True if the decision was stored.
        """
        if decision.choice is ConflictChoice.CANCEL:
            return False
        if self.sticky_decision is not None:
            return False
        self.sticky_decision = ConflictDecision(decision.choice, apply_to_all=True)
        return True

    def abort(self) -> None:
        self.aborted = True


@dataclass
class SubtreeConflict:
    """An item whose computed target lies inside its own source path."""
    item: ClipboardItem
    target_path: PurePath
    reason: str


@dataclass
class PasteOperation:
    """Tracks the results of copying a single clipboard item."""
    item: ClipboardItem               # Item being copied
    target_path: PurePath             # Where the item lands
    files_copied: int = 0             # New files copied
    files_overwritten: int = 0        # Existing targets replaced
    files_renamed: int = 0            # Copied under a unique sibling name
    files_skipped: int = 0            # Conflicts answered with Skip
    dirs_created: int = 0             # Folders created in the destination
    paths_too_long: int = 0           # Files or folders skipped for length
    cancelled: bool = False           # Cancel chosen while copying this item
    warnings: List[str] = field(default_factory=list)
    errors: List[str] = field(default_factory=list)


@dataclass
class PasteSummary:
    """Summary of a paste session returned by PasteSession."""
    status: SessionStatus = SessionStatus.DONE
    total_items: int = 0              # Items on the clipboard
    items_processed: int = 0          # Items the engine started on
    files_copied: int = 0
    files_overwritten: int = 0
    files_renamed: int = 0
    files_skipped: int = 0
    dirs_created: int = 0
    paths_too_long: int = 0
    subtree_conflicts: List[SubtreeConflict] = field(default_factory=list)
    warnings: List[str] = field(default_factory=list)
    errors: List[str] = field(default_factory=list)
    duration_seconds: float = 0.0
