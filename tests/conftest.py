"""Shared test fixtures."""

from __future__ import annotations

from pathlib import Path
from unittest.mock import MagicMock

import pytest

from fstree.config import TreeOptions
from fstree.context import TreeContext
from fstree.directory import DirNode
from fstree.file import FileNode


# ============================================================================
# In-Memory Tree Fixtures
# ============================================================================


@pytest.fixture
def sample_tree() -> DirNode:
    """root/a.txt ("hi") and root/sub/b.txt ("bye")."""
    root = DirNode("root")
    root.add_file(FileNode("a.txt", b"hi"))
    sub = DirNode("sub")
    sub.add_file(FileNode("b.txt", b"bye"))
    root.add_dir(sub)
    return root


@pytest.fixture
def nested_tree() -> DirNode:
    """Three levels deep, with an empty file and an empty directory."""
    root = DirNode("project")
    root.file("README.md").set_content(b"# project\n")
    root.file("empty.txt").set_content(b"")
    src = root.dir("src")
    src.file("main.py").set_content(b"print('hello')\n")
    pkg = src.dir("pkg")
    pkg.file("__init__.py").set_content(b"")
    pkg.file("data.bin").set_content(bytes(range(256)))
    root.dir("build")
    return root


# ============================================================================
# On-Disk Fixtures
# ============================================================================


@pytest.fixture
def disk_tree(tmp_path: Path) -> Path:
    """Create a small directory tree on disk and return its root."""
    root = tmp_path / "source"
    (root / "docs" / "api").mkdir(parents=True)
    (root / "empty_dir").mkdir()
    (root / "top.txt").write_bytes(b"top level")
    (root / "docs" / "guide.md").write_bytes(b"# Guide\n")
    (root / "docs" / "api" / "index.html").write_bytes(b"<html></html>")
    (root / "zero.bin").write_bytes(b"")
    return root


# ============================================================================
# Mock FileSystem Fixture
# ============================================================================


@pytest.fixture
def mock_filesystem() -> MagicMock:
    """Create a mock FileSystem for testing.

    The mock tracks all filesystem operations without touching real files.
    """
    fs = MagicMock()
    fs.exists.return_value = False
    fs.is_file.return_value = False
    fs.is_dir.return_value = False
    fs.is_symlink.return_value = False
    return fs


@pytest.fixture
def mock_context(mock_filesystem: MagicMock) -> TreeContext:
    """TreeContext wired to the mock filesystem."""
    return TreeContext(filesystem=mock_filesystem, options=TreeOptions())
