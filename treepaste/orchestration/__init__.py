"""Workflow orchestration package for TreePaste.

This package contains orchestration components for paste sessions:
- PasteLogger: Append-only trace of inputs, computed paths and decisions.
- PasteSession: Top-level driver running the guard and copy passes.
"""

from treepaste.orchestration.paste_logger import PasteLogger
from treepaste.orchestration.paste_session import PasteSession

__all__ = ["PasteLogger", "PasteSession"]
