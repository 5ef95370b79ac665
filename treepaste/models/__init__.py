"""
Models package for the TreePaste tool.

This package provides convenient imports for all data models:
- ItemKind: Enum for file vs. directory clipboard entries
- ConflictChoice: Enum for conflict answers
- ClipboardItem: Source path plus kind
- ConflictDecision: Conflict answer with apply-to-all flag
- SessionState: Sticky decision and abort flag for one run
- SubtreeConflict: Item that would be pasted into itself
- PasteOperation: Per-item copy results
- PasteSummary: Session-wide results
"""

from .item_kind import ItemKind
from .conflict_choice import ConflictChoice
from .data_models import (
    ClipboardItem,
    ConflictDecision,
    CopyOutcome,
    PasteOperation,
    PasteSummary,
    SessionState,
    SessionStatus,
    SubtreeConflict,
)

__all__ = [
    "ItemKind",
    "ConflictChoice",
    "ClipboardItem",
    "ConflictDecision",
    "CopyOutcome",
    "PasteOperation",
    "PasteSummary",
    "SessionState",
    "SessionStatus",
    "SubtreeConflict",
]
