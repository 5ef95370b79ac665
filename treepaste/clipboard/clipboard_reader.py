"""
Reading the list of files and folders to paste.

The system clipboard is read as text through pyperclip: one path per line,
optionally quoted or given as a ``file://`` URI, which is what file
managers put on the text clipboard when files are copied.
"""

import logging
from pathlib import Path
from typing import Iterable, List, Tuple
from urllib.parse import urlparse
from urllib.request import url2pathname

import pyperclip

from treepaste.exceptions import ClipboardUnavailableError
from treepaste.models import ClipboardItem, ItemKind

logger = logging.getLogger("treepaste.clipboard")


def parse_clipboard_text(text: str) -> List[str]:
    """Split clipboard text into path strings, dropping blank lines."""
    paths: List[str] = []
    for line in text.splitlines():
        entry = line.strip().strip('"').strip("'").strip()
        if not entry:
            continue
        if entry.lower().startswith("file://"):
            entry = url2pathname(urlparse(entry).path)
        paths.append(entry)
    return paths


def items_from_paths(paths: Iterable[str]) -> Tuple[List[ClipboardItem], List[str]]:
    """
    Classify each path as a file or folder.

    Paths are made absolute; duplicates are dropped keeping the first
    occurrence, and input order is preserved.

    Returns:
        Tuple of (items, skipped) where ``skipped`` holds a message for each
        path that does not exist.
    """
    items: List[ClipboardItem] = []
    skipped: List[str] = []
    seen = set()

    for raw in paths:
        path = Path(raw).expanduser().absolute()
        if path in seen:
            continue
        seen.add(path)

        if path.is_dir():
            kind = ItemKind.DIRECTORY
        elif path.exists():
            kind = ItemKind.FILE
        else:
            message = f"Source does not exist: {path}"
            logger.warning(message)
            skipped.append(message)
            continue

        items.append(ClipboardItem(path=path, kind=kind))

    return items, skipped


def read_clipboard_items() -> Tuple[List[ClipboardItem], List[str]]:
    """
    Read the file list from the system clipboard.

    Raises:
        ClipboardUnavailableError: If no clipboard mechanism is available.
    """
    try:
        text = pyperclip.paste()
    except pyperclip.PyperclipException as e:
        raise ClipboardUnavailableError(f"Cannot read the clipboard: {e}") from e

    paths = parse_clipboard_text(text or "")
    logger.debug(f"Clipboard holds {len(paths)} path(s)")
    return items_from_paths(paths)
