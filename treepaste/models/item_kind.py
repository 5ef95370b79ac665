"""
ItemKind and ConflictChoice enums for clipboard items and conflict decisions.

ItemKind discriminates the two kinds of clipboard entries:
1. FILE - A single file, copied with its containing folders recreated
2. DIRECTORY - A folder, copied recursively into the recreated tree
"""

from enum import Enum


class ItemKind(Enum):
    """Discriminates clipboard entries that are files from those that are folders."""
    FILE = "file"                      # Copied via CopyEngine.copy_file
    DIRECTORY = "directory"            # Copied via CopyEngine.copy_tree
