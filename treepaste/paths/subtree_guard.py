"""
Pre-flight check that no clipboard item is pasted into itself.

SubtreeGuard runs over every item before anything is written. A single
offending item blocks the whole paste so the user never ends up with a
partial copy.
"""

import logging
import os
from typing import Iterable, List, Union

from treepaste.exceptions import SubtreeConflictError
from treepaste.models import ClipboardItem, SubtreeConflict
from treepaste.paths.path_resolver import PathResolver

logger = logging.getLogger("treepaste.paths")


class SubtreeGuard:
    """Flags items whose computed target lies inside their own source path."""

    def __init__(self, resolver: PathResolver) -> None:
        self.resolver = resolver

    def check(
        self,
        items: Iterable[ClipboardItem],
        destination: Union[str, os.PathLike],
    ) -> List[SubtreeConflict]:
        """
        Evaluate all items against ``destination`` without touching the disk.

        Parameters:
            items (Iterable[ClipboardItem]): Items in clipboard order.
            destination (PathLike): Destination folder of the paste.

        Returns:
            List[SubtreeConflict]: One entry per offending item, in input order.
                Empty when the paste is safe.
        """
        conflicts: List[SubtreeConflict] = []

        for item in items:
            target = self.resolver.target_path_for(item, destination)

            if self.resolver.is_same_path(target, item.path):
                reason = "target is the source itself"
            elif item.is_directory and self.resolver.is_strict_descendant(
                target, item.path
            ):
                reason = "target is inside the source folder"
            else:
                continue

            logger.debug(f"Subtree conflict: {item.path} -> {target} ({reason})")
            conflicts.append(SubtreeConflict(item=item, target_path=target, reason=reason))

        return conflicts

    def ensure_safe(
        self,
        items: Iterable[ClipboardItem],
        destination: Union[str, os.PathLike],
    ) -> None:
        """
        Raise if any item would be pasted into itself.

        Raises:
            SubtreeConflictError: Carrying every offending item.
        """
        conflicts = self.check(items, destination)
        if conflicts:
            raise SubtreeConflictError(conflicts)
