"""
Copy engine for the TreePaste tool.

This module contains the CopyEngine class, which walks clipboard items into
the destination tree, creating folders, copying files and consulting the
ConflictResolver whenever a target file already exists.
"""

import errno
import logging
import os
import shutil
from pathlib import Path
from typing import TYPE_CHECKING, Optional, Union

from treepaste.conflicts import ConflictResolver, unique_name
from treepaste.models import (
    ClipboardItem,
    ConflictChoice,
    CopyOutcome,
    PasteOperation,
    SessionState,
)
from treepaste.paths import PathResolver

if TYPE_CHECKING:
    from treepaste.orchestration.paste_logger import PasteLogger

# Configure module logger
logger = logging.getLogger("treepaste.copy")


class CopyEngine:
    """
    Copies clipboard items into the destination tree.

    Every walk frame returns a CopyOutcome. A CANCELLED outcome unwinds the
    recursion immediately; files already copied stay on disk. Paths over
    the legacy length ceiling and per-file I/O failures are recorded on the
    PasteOperation and skipped, never fatal to the session.
    """

    # Legacy path length ceilings; folders keep headroom for child names
    MAX_FILE_PATH_LENGTH = 259
    MAX_FOLDER_PATH_LENGTH = 247

    def __init__(
        self,
        path_resolver: PathResolver,
        conflict_resolver: ConflictResolver,
        state: SessionState,
        trace: "Optional[PasteLogger]" = None,
        max_file_path_length: Optional[int] = None,
        max_folder_path_length: Optional[int] = None,
    ) -> None:
        """
        Create a CopyEngine for one paste session.

        Parameters:
            path_resolver (PathResolver): Computes each item's target path.
            conflict_resolver (ConflictResolver): Decides what to do with existing files.
            state (SessionState): Shared session state; its abort flag is polled.
            trace (PasteLogger, optional): Trace log for targets and actions.
            max_file_path_length (int, optional): Override for MAX_FILE_PATH_LENGTH.
            max_folder_path_length (int, optional): Override for MAX_FOLDER_PATH_LENGTH.
        """
        self.path_resolver = path_resolver
        self.conflict_resolver = conflict_resolver
        self.state = state
        self.trace = trace
        self.max_file_path_length = (
            max_file_path_length if max_file_path_length is not None
            else self.MAX_FILE_PATH_LENGTH
        )
        self.max_folder_path_length = (
            max_folder_path_length if max_folder_path_length is not None
            else self.MAX_FOLDER_PATH_LENGTH
        )

    def copy_item(
        self, item: ClipboardItem, destination: Union[str, os.PathLike]
    ) -> PasteOperation:
        """
        Copy one clipboard item under ``destination``.

        Parameters:
            item (ClipboardItem): File or folder to paste.
            destination (PathLike): Destination folder of the paste.

        Returns:
            PasteOperation: Counters, warnings and errors for this item;
                ``cancelled`` is set if the user chose Cancel.
        """
        prefix, relative, target = self.path_resolver.placement_for(item, destination)
        target_path = Path(target)
        operation = PasteOperation(item=item, target_path=target_path)

        if self.trace is not None:
            self.trace.log_item(item, prefix, relative, target_path)

        source = Path(item.path)
        if item.is_directory:
            outcome = self.copy_tree(source, target_path, operation)
        else:
            outcome = self.copy_file(source, target_path, operation)

        operation.cancelled = outcome is CopyOutcome.CANCELLED
        return operation

    def copy_file(self, source: Path, target: Path, operation: PasteOperation) -> CopyOutcome:
        """
        Copy a top-level file item to ``target``, creating its folders.

        Returns:
            CopyOutcome: CANCELLED if the user cancelled at a conflict.
        """
        if self._exceeds_limit(target, self.max_file_path_length, "File", operation):
            return CopyOutcome.COMPLETED

        if not self._ensure_dir(target.parent, operation):
            return CopyOutcome.COMPLETED

        return self._place_file(source, target, operation)

    def copy_tree(self, source_dir: Path, target_dir: Path, operation: PasteOperation) -> CopyOutcome:
        """
        Recursively copy ``source_dir`` into ``target_dir``.

        Existing folders are merged silently; only files can conflict.
        Children are processed in the order the filesystem lists them.

        Returns:
            CopyOutcome: CANCELLED as soon as any descendant is cancelled.
        """
        if self.state.aborted:
            return CopyOutcome.CANCELLED

        if self.trace is not None:
            self.trace.log_folder(source_dir, target_dir)

        if self._exceeds_limit(target_dir, self.max_folder_path_length, "Folder", operation):
            return CopyOutcome.COMPLETED

        if not self._ensure_dir(target_dir, operation):
            return CopyOutcome.COMPLETED

        try:
            with os.scandir(source_dir) as it:
                entries = list(it)
        except OSError as e:
            self._record_error(operation, f"Cannot read folder {source_dir}: {e}")
            return CopyOutcome.COMPLETED

        for entry in entries:
            child_source = Path(entry.path)
            child_target = target_dir / entry.name

            try:
                is_dir = entry.is_dir()
            except OSError as e:
                self._record_error(operation, f"Cannot inspect {child_source}: {e}")
                continue

            if is_dir:
                outcome = self.copy_tree(child_source, child_target, operation)
            elif self._exceeds_limit(child_target, self.max_file_path_length, "File", operation):
                continue
            else:
                outcome = self._place_file(child_source, child_target, operation)

            if outcome is CopyOutcome.CANCELLED:
                return outcome

        return CopyOutcome.COMPLETED

    def _place_file(self, source: Path, target: Path, operation: PasteOperation) -> CopyOutcome:
        """
        Copy ``source`` to ``target`` whose folder already exists.

        An existing target file goes through the ConflictResolver. An
        existing folder of the same name is reported and skipped.
        """
        if self.state.aborted:
            return CopyOutcome.CANCELLED

        try:
            if target.is_dir():
                self._record_error(
                    operation, f"Cannot replace folder with file: {source} -> {target}"
                )
                return CopyOutcome.COMPLETED

            if not target.exists():
                self._copy(source, target)
                operation.files_copied += 1
                self._trace_action(source, target, "copied")
                return CopyOutcome.COMPLETED

            decision = self.conflict_resolver.resolve(source, target)

            if decision.choice is ConflictChoice.CANCEL:
                self._trace_action(source, target, "cancelled")
                return CopyOutcome.CANCELLED

            if decision.choice is ConflictChoice.SKIP:
                operation.files_skipped += 1
                logger.debug(f"Skipped existing file: {target}")
                self._trace_action(source, target, "skipped")
                return CopyOutcome.COMPLETED

            if decision.choice is ConflictChoice.RENAME:
                renamed = unique_name(target)
                if self._exceeds_limit(renamed, self.max_file_path_length, "File", operation):
                    return CopyOutcome.COMPLETED
                self._copy(source, renamed)
                operation.files_renamed += 1
                self._trace_action(source, renamed, "renamed")
                return CopyOutcome.COMPLETED

            self._copy(source, target)
            operation.files_overwritten += 1
            self._trace_action(source, target, "overwritten")
            return CopyOutcome.COMPLETED

        except PermissionError as e:
            self._record_error(operation, f"Permission denied: {source} -> {target} - {e}")
        except OSError as e:
            if e.errno == errno.ENOSPC:
                self._record_error(operation, f"Disk full: {source} -> {target} - {e}")
            else:
                self._record_error(operation, f"Error copying {source} -> {target}: {e}")

        return CopyOutcome.COMPLETED

    def _ensure_dir(self, directory: Path, operation: PasteOperation) -> bool:
        """
        Create ``directory`` and any missing parents.

        Returns:
            bool: False if the folder could not be created; the failure is
                recorded and the caller skips that subtree.
        """
        missing = 0
        probe = directory
        while probe != probe.parent and not probe.exists():
            missing += 1
            probe = probe.parent

        if missing == 0 and directory.is_dir():
            return True

        try:
            directory.mkdir(parents=True, exist_ok=True)
        except OSError as e:
            self._record_error(operation, f"Cannot create folder {directory}: {e}")
            return False

        operation.dirs_created += missing
        logger.debug(f"Created folder: {directory}")
        return True

    def _exceeds_limit(
        self, path: Path, limit: int, label: str, operation: PasteOperation
    ) -> bool:
        length = len(str(path))
        if length <= limit:
            return False

        warning = f"{label} path too long ({length} > {limit} characters), skipped: {path}"
        logger.warning(warning)
        operation.warnings.append(warning)
        operation.paths_too_long += 1
        if self.trace is not None:
            self.trace.log_warning(warning)
        return True

    def _copy(self, source: Path, dest: Path) -> None:
        # Copy file preserving metadata
        shutil.copy2(source, dest)

    def _record_error(self, operation: PasteOperation, error_msg: str) -> None:
        logger.warning(error_msg)
        operation.errors.append(error_msg)
        if self.trace is not None:
            self.trace.log_error(error_msg)

    def _trace_action(self, source: Path, target: Path, action: str) -> None:
        logger.debug(f"{action}: {source} -> {target}")
        if self.trace is not None:
            self.trace.log_file_action(source, target, action)
