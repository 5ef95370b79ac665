"""Copy operations package for TreePaste.

This package provides the CopyEngine class, which recreates the source
folder tree under the destination and copies files into it, resolving
name conflicts along the way.

Example:
    >>> from treepaste.operations import CopyEngine
    >>> engine = CopyEngine(path_resolver, conflict_resolver, state)
    >>> operation = engine.copy_item(item, destination)
    >>> print(f"Copied: {operation.files_copied}, Skipped: {operation.files_skipped}")
"""

from .copy_engine import CopyEngine

__all__ = ["CopyEngine"]
