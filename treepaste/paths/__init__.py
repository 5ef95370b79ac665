"""Path reconciliation package for TreePaste.

This package computes where clipboard items land in the destination tree
and rejects pastes of a folder into itself.

Example:
    >>> from pathlib import PureWindowsPath
    >>> from treepaste.paths import PathResolver
    >>> resolver = PathResolver(PureWindowsPath)
    >>> resolver.common_prefix(r"C:\\A\\B", r"C:\\A\\X")
    PureWindowsPath('C:/A')
"""

from .path_resolver import PathResolver
from .subtree_guard import SubtreeGuard

__all__ = ["PathResolver", "SubtreeGuard"]
