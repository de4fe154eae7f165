"""Dependency container for disk-facing node operations.

FileNode and DirNode never construct a filesystem themselves. Every method
that touches the disk accepts an optional TreeContext; when it is omitted
the shared default context (RealFileSystem with default options) is used.
Tests construct TreeContext directly with test doubles.
"""

from __future__ import annotations

from dataclasses import dataclass, field

from fstree.config import TreeOptions
from fstree.protocols import FileSystem


def _default_filesystem() -> FileSystem:
    """Create the default filesystem implementation."""
    from fstree.filesystem import RealFileSystem
    return RealFileSystem()


@dataclass(frozen=True)
class TreeContext:
    """Filesystem and options used by a disk operation."""

    filesystem: FileSystem = field(default_factory=_default_filesystem)
    options: TreeOptions = field(default_factory=TreeOptions)


_DEFAULT_CONTEXT: TreeContext | None = None


def create_context(
    filesystem: FileSystem | None = None,
    options: TreeOptions | None = None,
) -> TreeContext:
    """Factory for a TreeContext.

    Args:
        filesystem: Override the filesystem implementation.
        options: Override the default options.

    Returns:
        Configured TreeContext.
    """
    return TreeContext(
        filesystem=filesystem if filesystem is not None else _default_filesystem(),
        options=options if options is not None else TreeOptions(),
    )


def default_context() -> TreeContext:
    """Return the shared default context, creating it on first use."""
    global _DEFAULT_CONTEXT
    if _DEFAULT_CONTEXT is None:
        _DEFAULT_CONTEXT = create_context()
    return _DEFAULT_CONTEXT


def resolve_context(context: TreeContext | None) -> TreeContext:
    return context if context is not None else default_context()
