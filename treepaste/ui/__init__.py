"""Terminal UI package for TreePaste."""

from .paste_tui import PasteTUI, RichConflictPrompt

__all__ = ["PasteTUI", "RichConflictPrompt"]
