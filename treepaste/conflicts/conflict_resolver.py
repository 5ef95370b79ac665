"""
Conflict resolution for files that already exist in the destination.

This module contains the ConflictResolver class, which answers "what do we
do with this existing file?" for a whole paste run, and the unique_name
helper used by the Rename choice.
"""

import logging
from pathlib import Path
from typing import TYPE_CHECKING, Optional, Protocol

from treepaste.models import ConflictChoice, ConflictDecision, SessionState

if TYPE_CHECKING:
    from treepaste.orchestration.paste_logger import PasteLogger

# Configure module logger
logger = logging.getLogger("treepaste.conflicts")


class ConflictPrompt(Protocol):
    """Asks the user how to handle one existing target file.

    Production code backs this with an interactive dialog; tests return
    scripted decisions.
    """

    def ask(self, source_path: Path, target_path: Path) -> ConflictDecision:
        """Block until the user picks a choice for ``target_path``."""
        ...


def unique_name(path: Path) -> Path:
    """
    Return ``path`` or the first free sibling named ``"<base> (<n>)<ext>"``.

    The counter starts at 1 and only ever increases: with the original and
    copies (1) to (N-1) already present, copy (N) is returned.

    Parameters:
        path (Path): Desired target file path.

    Returns:
        Path: ``path`` itself if it does not exist, otherwise the first
            unused numbered sibling in the same directory.
    """
    if not path.exists():
        return path

    stem = path.stem
    suffix = path.suffix
    counter = 1
    while True:
        candidate = path.with_name(f"{stem} ({counter}){suffix}")
        if not candidate.exists():
            return candidate
        counter += 1


class ConflictResolver:
    """
    Stateful decision engine for file conflicts during one paste run.

    A remembered ("apply to all") decision in the session state is returned
    without prompting. Otherwise the prompt is asked, and its answer is
    remembered when the user requested it and the choice is not Cancel.
    Cancel marks the session as aborted.
    """

    def __init__(
        self,
        state: SessionState,
        prompt: ConflictPrompt,
        trace: "Optional[PasteLogger]" = None,
    ) -> None:
        """
        Create a resolver bound to one session.

        Parameters:
            state (SessionState): Shared state for the run; holds the sticky decision.
            prompt (ConflictPrompt): Collaborator that asks the user.
            trace (PasteLogger, optional): Trace log receiving every decision.
        """
        self.state = state
        self.prompt = prompt
        self.trace = trace

    def resolve(self, source_path: Path, target_path: Path) -> ConflictDecision:
        """
        Decide what to do with an existing ``target_path``.

        Returns:
            ConflictDecision: The sticky decision if one is set, otherwise
                the prompt's answer.
        """
        sticky = self.state.sticky_decision
        if sticky is not None:
            logger.debug(f"Applying remembered {sticky.choice.value} to {target_path}")
            self._record(source_path, target_path, sticky, remembered=True)
            return sticky

        decision = self.prompt.ask(source_path, target_path)
        logger.debug(
            f"Conflict {target_path}: {decision.choice.value}"
            f"{' (apply to all)' if decision.apply_to_all else ''}"
        )

        if decision.choice is ConflictChoice.CANCEL:
            self.state.abort()
        elif decision.apply_to_all:
            self.state.remember(decision)

        self._record(source_path, target_path, decision, remembered=False)
        return decision

    def _record(
        self,
        source_path: Path,
        target_path: Path,
        decision: ConflictDecision,
        remembered: bool,
    ) -> None:
        if self.trace is not None:
            self.trace.log_conflict(source_path, target_path, decision, remembered)
