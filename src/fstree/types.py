"""Shared data types for fstree."""

from __future__ import annotations

from enum import Enum

__all__ = ["WRITE_MODES", "WritePolicy"]


class WritePolicy(str, Enum):
    """What to do when the destination of a write already exists.

    Applies both to on-disk entries and to same-named children of a DirNode.

    Attributes:
        SKIP: Keep the existing entry and drop the new one.
        OVERRIDE: Replace the existing entry.
    """

    SKIP = "skip"
    OVERRIDE = "override"


# Open modes accepted for file writes: truncate or append.
WRITE_MODES = frozenset({"wb", "ab"})
