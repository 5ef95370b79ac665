"""Clipboard input package for TreePaste."""

from .clipboard_reader import items_from_paths, parse_clipboard_text, read_clipboard_items

__all__ = ["items_from_paths", "parse_clipboard_text", "read_clipboard_items"]
