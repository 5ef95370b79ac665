"""
Path reconciliation for TreePaste.

This module contains the PathResolver class, which works out where a
clipboard item lands under the destination folder. The portion of the
source tree that diverges from the destination is recreated:

    source parent  C:\\A\\B          destination  C:\\A\\X
    common prefix  C:\\A             relative     B
    item C:\\A\\B\\C  ->  C:\\A\\X\\B\\C

When the two paths sit on different volumes, or share nothing but the
volume root, there is no common prefix and the full source parent, minus
its volume root, is recreated.
"""

import logging
import os
from pathlib import PurePath
from typing import Optional, Tuple, Type, Union

from treepaste.models import ClipboardItem

logger = logging.getLogger("treepaste.paths")

PathLike = Union[str, os.PathLike]


class PathResolver:
    """
    Computes common prefixes, relative paths and target paths.

    All work is done on pure paths, so nothing here touches the filesystem.
    The volume identifier of a path is its anchor (drive plus root). Paths
    on different volumes have no common prefix, and neither do paths on the
    same volume that share no folder below the anchor.

    Args:
        flavour: PurePath subclass selecting the path syntax. Defaults to
            the host's flavour; pass PureWindowsPath to evaluate Windows
            paths on any platform.
        case_sensitive: Compare components exactly instead of casefolded.
    """

    def __init__(
        self,
        flavour: Type[PurePath] = PurePath,
        case_sensitive: bool = False,
    ) -> None:
        self.flavour = flavour
        self.case_sensitive = case_sensitive

    def common_prefix(self, a: PathLike, b: PathLike) -> Optional[PurePath]:
        """
        Return the longest run of leading components shared by ``a`` and ``b``.

        Parameters:
            a (PathLike): First absolute path; the prefix keeps its casing.
            b (PathLike): Second absolute path.

        Returns:
            PurePath: The shared prefix, or None when the volumes differ or
                no component matches.
        """
        path_a = self.flavour(a)
        path_b = self.flavour(b)

        if self._key(path_a.anchor) != self._key(path_b.anchor):
            logger.debug(f"Different volumes: {path_a} | {path_b}")
            return None

        parts_a = path_a.parts
        parts_b = path_b.parts
        matched = 0
        for part_a, part_b in zip(parts_a, parts_b):
            if self._key(part_a) != self._key(part_b):
                break
            matched += 1

        # A shared anchor alone is no common folder
        if matched <= (1 if path_a.anchor else 0):
            logger.debug(f"No shared folder: {path_a} | {path_b}")
            return None

        prefix = self.flavour(*parts_a[:matched])
        logger.debug(f"Common prefix of {path_a} and {path_b}: {prefix}")
        return prefix

    def relative_path(
        self, source_dir: PathLike, prefix: Optional[PathLike]
    ) -> PurePath:
        """
        Return the part of ``source_dir`` below ``prefix``.

        With no prefix, ``source_dir`` is returned relative to its volume
        root. The result is always relative; an empty result is ``.``.

        Raises:
            ValueError: If ``prefix`` is not a leading run of ``source_dir``.
        """
        source = self.flavour(source_dir)

        if prefix is None:
            strip = 1 if source.anchor else 0
        else:
            prefix_parts = self.flavour(prefix).parts
            if not self._starts_with(source.parts, prefix_parts):
                raise ValueError(f"{prefix} is not a prefix of {source}")
            strip = len(prefix_parts)

        relative = self.flavour(*source.parts[strip:])
        logger.debug(f"Relative path of {source} below {prefix}: {relative}")
        return relative

    def placement_for(
        self, item: ClipboardItem, destination: PathLike
    ) -> Tuple[Optional[PurePath], PurePath, PurePath]:
        """
        Compute where ``item`` lands under ``destination``.

        The item's containing folder is reconciled against the destination
        and the item's own name is appended. Directories are handled the
        same way as files: their parent drives the prefix computation.

        Returns:
            Tuple of (common_prefix, relative_path, target_path).
        """
        prefix = self.common_prefix(item.parent, destination)
        relative = self.relative_path(item.parent, prefix)
        target = self.flavour(destination) / relative / item.leaf
        logger.debug(
            f"Target for {item.path}: prefix={prefix} relative={relative} -> {target}"
        )
        return prefix, relative, target

    def target_path_for(self, item: ClipboardItem, destination: PathLike) -> PurePath:
        """Return only the target path of :meth:`placement_for`."""
        return self.placement_for(item, destination)[2]

    def is_same_path(self, a: PathLike, b: PathLike) -> bool:
        """True if ``a`` and ``b`` name the same path under this comparison."""
        return self._keys(self.flavour(a).parts) == self._keys(self.flavour(b).parts)

    def is_strict_descendant(self, child: PathLike, ancestor: PathLike) -> bool:
        """
        True if ``child`` lies strictly below ``ancestor``.

        Matching is done on whole components, so ``C:\\Foo2`` is not a
        descendant of ``C:\\Foo``.
        """
        child_parts = self.flavour(child).parts
        ancestor_parts = self.flavour(ancestor).parts
        return (
            len(child_parts) > len(ancestor_parts)
            and self._starts_with(child_parts, ancestor_parts)
        )

    def _starts_with(self, parts: Tuple[str, ...], prefix: Tuple[str, ...]) -> bool:
        if len(prefix) > len(parts):
            return False
        return self._keys(parts[: len(prefix)]) == self._keys(prefix)

    def _keys(self, parts: Tuple[str, ...]) -> Tuple[str, ...]:
        return tuple(self._key(part) for part in parts)

    def _key(self, part: str) -> str:
        return part if self.case_sensitive else part.casefold()
