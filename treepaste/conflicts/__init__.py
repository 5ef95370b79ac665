"""Conflict resolution package for TreePaste.

Example:
    >>> from treepaste.conflicts import ConflictResolver
    >>> from treepaste.models import SessionState
    >>> resolver = ConflictResolver(SessionState(), prompt)
    >>> decision = resolver.resolve(source, existing_target)
"""

from .conflict_resolver import ConflictPrompt, ConflictResolver, unique_name

__all__ = ["ConflictPrompt", "ConflictResolver", "unique_name"]
