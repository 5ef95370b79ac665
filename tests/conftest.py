"""Pytest fixtures for TreePaste tests."""

import io
import tempfile
from pathlib import Path
from typing import Dict, Generator, List, Optional, Sequence, Tuple

import pytest
from rich.console import Console

from treepaste.conflicts import ConflictResolver
from treepaste.models import (
    ClipboardItem,
    ConflictChoice,
    ConflictDecision,
    ItemKind,
    PasteOperation,
    SessionState,
)
from treepaste.operations import CopyEngine
from treepaste.paths import PathResolver


def pytest_configure(config) -> None:
    config.addinivalue_line("markers", "unit: fast tests of a single component")
    config.addinivalue_line("markers", "integration: tests running a whole paste session")


class ScriptedPrompt:
    """ConflictPrompt stub returning scripted decisions in order.

    Every call is recorded in ``calls`` as (source_path, target_path).
    Running out of decisions fails the test.
    """

    def __init__(self, decisions: Sequence[ConflictDecision] = ()) -> None:
        self.decisions: List[ConflictDecision] = list(decisions)
        self.calls: List[Tuple[Path, Path]] = []

    def ask(self, source_path: Path, target_path: Path) -> ConflictDecision:
        self.calls.append((source_path, target_path))
        if not self.decisions:
            raise AssertionError(f"Unexpected conflict prompt for {target_path}")
        return self.decisions.pop(0)


def decide(choice: ConflictChoice, apply_to_all: bool = False) -> ConflictDecision:
    """Shorthand for building a ConflictDecision."""
    return ConflictDecision(choice, apply_to_all=apply_to_all)


def file_item(path: Path) -> ClipboardItem:
    return ClipboardItem(path=path, kind=ItemKind.FILE)


def dir_item(path: Path) -> ClipboardItem:
    return ClipboardItem(path=path, kind=ItemKind.DIRECTORY)


def snapshot_tree(root: Path) -> Dict[str, bytes]:
    """Map every file below ``root`` (relative, posix style) to its bytes."""
    return {
        p.relative_to(root).as_posix(): p.read_bytes()
        for p in sorted(root.rglob("*"))
        if p.is_file()
    }


def make_engine(
    decisions: Sequence[ConflictDecision] = (),
    preset: Optional[ConflictChoice] = None,
    **limits,
) -> Tuple[CopyEngine, ScriptedPrompt, SessionState]:
    """Build a CopyEngine wired to a ScriptedPrompt and a fresh SessionState."""
    state = SessionState()
    if preset is not None:
        state.remember(ConflictDecision(preset, apply_to_all=True))
    prompt = ScriptedPrompt(decisions)
    resolver = PathResolver()
    engine = CopyEngine(resolver, ConflictResolver(state, prompt), state, **limits)
    return engine, prompt, state


def new_operation(item: ClipboardItem, target: Path) -> PasteOperation:
    return PasteOperation(item=item, target_path=target)


@pytest.fixture
def temp_dir() -> Generator[Path, None, None]:
    """Create a temporary directory for isolated test environments.

    Yields:
        Path to the temporary directory.
    """
    with tempfile.TemporaryDirectory() as tmpdir:
        yield Path(tmpdir)


@pytest.fixture
def source_tree(temp_dir: Path) -> Dict[str, Path]:
    """Create a source tree and an empty destination.

    Creates:
        temp_dir/
        ├── src/
        │   └── Company/
        │       └── Finance/
        │           ├── report.txt
        │           └── Projects/
        │               ├── budget.xlsx
        │               ├── notes.txt
        │               └── Archive/
        │                   └── old.txt
        └── dest/

    Returns:
        Dictionary with keys "root", "finance", "projects", "report", "dest".
    """
    finance = temp_dir / "src" / "Company" / "Finance"
    projects = finance / "Projects"
    archive = projects / "Archive"
    archive.mkdir(parents=True)

    report = finance / "report.txt"
    report.write_text("quarterly report")
    (projects / "budget.xlsx").write_bytes(b"budget-v2")
    (projects / "notes.txt").write_text("project notes")
    (archive / "old.txt").write_text("archived")

    dest = temp_dir / "dest"
    dest.mkdir()

    return {
        "root": temp_dir,
        "finance": finance,
        "projects": projects,
        "report": report,
        "dest": dest,
    }


@pytest.fixture
def scripted_prompt() -> ScriptedPrompt:
    """A prompt that fails the test if it is ever asked."""
    return ScriptedPrompt()


@pytest.fixture
def captured_console() -> Tuple[Console, io.StringIO]:
    """Rich Console writing plain text to a StringIO."""
    output = io.StringIO()
    console = Console(file=output, width=200, color_system=None)
    return console, output
