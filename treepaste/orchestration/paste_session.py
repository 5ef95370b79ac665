"""PasteSession for driving a complete paste of clipboard items.

This module provides the PasteSession class, the top-level driver of a
paste. It validates the inputs, runs the subtree guard over every item
before anything is written, then hands the items to the CopyEngine one at
a time, stopping as soon as the user cancels.

State machine:
    Idle -> GuardCheck -> Aborted            (subtree conflicts found)
                       -> Copying -> Done    (last item finished)
                                  -> Cancelled (Cancel chosen at a conflict)

Example:
    from treepaste.orchestration import PasteSession
    from pathlib import Path

    session = PasteSession(
        destination=Path("/data/archive"),
        items=items,
        prompt=RichConflictPrompt(),
    )
    summary = session.run()
"""

import logging
import time
from pathlib import Path
from typing import List, Optional, Sequence

from treepaste.conflicts import ConflictPrompt, ConflictResolver
from treepaste.exceptions import (
    EmptyInputSetError,
    InvalidDestinationError,
    SubtreeConflictError,
)
from treepaste.models import (
    ClipboardItem,
    ConflictChoice,
    ConflictDecision,
    PasteOperation,
    PasteSummary,
    SessionState,
    SessionStatus,
)
from treepaste.operations import CopyEngine
from treepaste.orchestration.paste_logger import PasteLogger
from treepaste.paths import PathResolver, SubtreeGuard

logger = logging.getLogger("treepaste.session")


class PasteSession:
    """Drives one paste of clipboard items into a destination folder.

    Each session owns its SessionState, so several sessions can run in
    the same process without sharing an apply-to-all decision.

    Attributes:
        destination: Absolute destination folder.
        items: Clipboard items in the order they will be pasted.
        state: Sticky decision and abort flag for this run.
        operations: Per-item results of the last run.
    """

    def __init__(
        self,
        destination: Path,
        items: Sequence[ClipboardItem],
        prompt: ConflictPrompt,
        trace: Optional[PasteLogger] = None,
        preset: Optional[ConflictChoice] = None,
        case_sensitive: bool = False,
        max_file_path_length: Optional[int] = None,
        max_folder_path_length: Optional[int] = None,
    ) -> None:
        """Initialize the PasteSession.

        Args:
            destination: Existing folder to paste into.
            items: Files and folders to paste, in clipboard order.
            prompt: Asks the user about existing target files.
            trace: Optional PasteLogger receiving the session trace.
            preset: Optional choice applied to every conflict without
                prompting. Cancel is not allowed.
            case_sensitive: Compare path components exactly instead of
                case-insensitively.
            max_file_path_length: Override for CopyEngine.MAX_FILE_PATH_LENGTH.
            max_folder_path_length: Override for CopyEngine.MAX_FOLDER_PATH_LENGTH.

        Raises:
            InvalidDestinationError: If destination is missing or not a directory.
            EmptyInputSetError: If there are no items.
            ValueError: If preset is Cancel.
        """
        destination = Path(destination).absolute()
        if not destination.exists():
            raise InvalidDestinationError(f"Destination does not exist: {destination}")
        if not destination.is_dir():
            raise InvalidDestinationError(f"Destination is not a directory: {destination}")

        if not items:
            raise EmptyInputSetError("Nothing to paste: the clipboard holds no files or folders")

        if preset is ConflictChoice.CANCEL:
            raise ValueError("Cancel cannot be applied to all conflicts")

        self.destination = destination
        self.items: List[ClipboardItem] = list(items)
        self.trace = trace
        self.state = SessionState()
        if preset is not None:
            self.state.remember(ConflictDecision(preset, apply_to_all=True))

        self.operations: List[PasteOperation] = []

        self._path_resolver = PathResolver(case_sensitive=case_sensitive)
        self._guard = SubtreeGuard(self._path_resolver)
        self._conflict_resolver = ConflictResolver(self.state, prompt, trace)
        self._engine = CopyEngine(
            self._path_resolver,
            self._conflict_resolver,
            self.state,
            trace=trace,
            max_file_path_length=max_file_path_length,
            max_folder_path_length=max_folder_path_length,
        )

    def run(self) -> PasteSummary:
        """Execute the paste.

        Returns:
            PasteSummary with the terminal status and aggregated counters.
            On ABORTED, ``subtree_conflicts`` lists every offending item and
            nothing has been written.
        """
        start_time = time.time()
        self.operations = []
        summary = PasteSummary(total_items=len(self.items))

        if self.trace is not None:
            self.trace.log_header(self.destination, self.items)

        # Guard pass: every item, before any filesystem change
        try:
            self._guard.ensure_safe(self.items, self.destination)
        except SubtreeConflictError as e:
            logger.warning(str(e))
            summary.status = SessionStatus.ABORTED
            summary.subtree_conflicts = e.conflicts
            summary.errors.append(str(e))
            if self.trace is not None:
                self.trace.log_subtree_conflicts(e.conflicts)
            return self._finish(summary, start_time)

        # Copy pass
        for item in self.items:
            if self.state.aborted:
                summary.status = SessionStatus.CANCELLED
                break

            summary.items_processed += 1
            operation = self._engine.copy_item(item, self.destination)
            self.operations.append(operation)
            self._accumulate(summary, operation)

            if operation.cancelled:
                summary.status = SessionStatus.CANCELLED
                logger.info(f"Paste cancelled by user while copying {item.path}")
                break

        return self._finish(summary, start_time)

    def _accumulate(self, summary: PasteSummary, operation: PasteOperation) -> None:
        summary.files_copied += operation.files_copied
        summary.files_overwritten += operation.files_overwritten
        summary.files_renamed += operation.files_renamed
        summary.files_skipped += operation.files_skipped
        summary.dirs_created += operation.dirs_created
        summary.paths_too_long += operation.paths_too_long
        summary.warnings.extend(operation.warnings)
        summary.errors.extend(operation.errors)

    def _finish(self, summary: PasteSummary, start_time: float) -> PasteSummary:
        summary.duration_seconds = time.time() - start_time
        if self.trace is not None:
            self.trace.log_summary(summary)
        return summary
