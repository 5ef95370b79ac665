"""
ConflictChoice enum for resolving an existing target file.

Choices, in the order the prompt offers them:
1. OVERWRITE - Replace the existing target in place
2. RENAME - Copy next to the target as "<base> (<n>)<ext>"
3. SKIP - Leave source and target untouched
4. CANCEL - Stop the whole paste session
"""

from enum import Enum


class ConflictChoice(Enum):
    """Possible answers to a file conflict."""
    OVERWRITE = "overwrite"
    RENAME = "rename"
    SKIP = "skip"
    CANCEL = "cancel"                  # Never remembered as a sticky decision
