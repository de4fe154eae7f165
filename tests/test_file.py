"""Tests for FileNode."""

from __future__ import annotations

import copy
import io
from pathlib import Path
from unittest.mock import MagicMock

import pytest

from fstree.config import TreeOptions
from fstree.context import TreeContext
from fstree.errors import (
    InvalidArgumentError,
    InvalidNameError,
    OpenFailedError,
    PathNotFoundError,
)
from fstree.file import FileNode
from fstree.types import WritePolicy


class TestConstruction:
    """Tests for creating file nodes."""

    def test_name_only(self) -> None:
        """Test a node without content has no buffer."""
        node = FileNode("a.txt")
        assert node.name == "a.txt"
        assert node.has_content is False
        assert node.size == 0
        assert node.is_empty is True
        assert node.data == b""

    def test_with_bytes(self) -> None:
        node = FileNode("a.txt", b"hello")
        assert node.data == b"hello"
        assert node.size == 5
        assert node.is_empty is False

    def test_with_empty_content(self) -> None:
        """Test an empty buffer is present but empty."""
        node = FileNode("a.txt", b"")
        assert node.has_content is True
        assert node.is_empty is True

    @pytest.mark.parametrize("name", ["", ".", "..", "a/b", "a\\b", "a:b", "what?", "<x>", "a|b"])
    def test_invalid_name(self, name: str) -> None:
        with pytest.raises(InvalidNameError):
            FileNode(name)

    def test_rename(self) -> None:
        node = FileNode("a.txt", b"x")
        node.rename("b.txt")
        assert node.name == "b.txt"
        assert node.data == b"x"

    def test_rename_invalid_keeps_name(self) -> None:
        node = FileNode("a.txt")
        with pytest.raises(InvalidNameError):
            node.rename("bad*name")
        assert node.name == "a.txt"


class TestAppend:
    """Tests for append and set_content."""

    def test_append_creates_buffer(self) -> None:
        node = FileNode("a.txt")
        node.append(b"ab").append(b"cd")
        assert node.data == b"abcd"

    def test_append_str_is_utf8(self) -> None:
        node = FileNode("a.txt")
        node.append("héllo")
        assert node.data == "héllo".encode("utf-8")

    def test_append_file_node(self) -> None:
        source = FileNode("src.bin", b"\x00\x01")
        node = FileNode("a.bin", b"\xff")
        node.append(source)
        assert node.data == b"\xff\x00\x01"
        assert source.data == b"\x00\x01"

    def test_append_binary_stream(self) -> None:
        """Test a stream is read to EOF in chunks."""
        payload = bytes(range(256)) * 40
        node = FileNode("a.bin")
        node.append(io.BytesIO(payload), buffer_size=7)
        assert node.data == payload

    def test_append_text_stream_rejected(self) -> None:
        node = FileNode("a.txt", b"keep")
        with pytest.raises(InvalidArgumentError):
            node.append(io.StringIO("text"))

    def test_append_iterable_narrows_elements(self) -> None:
        """Test each element of a sequence becomes exactly one byte."""
        node = FileNode("a.bin")
        node.append([65, 66, 256 + 67, -1, True, "Z"])
        assert node.data == b"ABC\xff\x01Z"

    def test_append_iterable_bad_element(self) -> None:
        node = FileNode("a.bin")
        with pytest.raises(InvalidArgumentError):
            node.append([1, 2.5])

    def test_append_unsupported_type(self) -> None:
        node = FileNode("a.bin")
        with pytest.raises(InvalidArgumentError):
            node.append(42)  # type: ignore[arg-type]

    def test_set_content_replaces(self) -> None:
        node = FileNode("a.txt", b"old")
        node.set_content(b"new")
        assert node.data == b"new"

    def test_set_content_error_keeps_previous(self) -> None:
        node = FileNode("a.txt", b"old")
        with pytest.raises(InvalidArgumentError):
            node.set_content(io.StringIO("text"))
        assert node.data == b"old"

    def test_set_content_from_itself(self) -> None:
        node = FileNode("a.txt", b"same")
        node.set_content(node)
        assert node.data == b"same"

    def test_set_content_from_other_node(self) -> None:
        source = FileNode("src.txt", b"copied")
        node = FileNode("a.txt", b"old")
        node.set_content(source)
        assert node.data == b"copied"
        assert source.data == b"copied"

    def test_release_content(self) -> None:
        node = FileNode("a.txt", b"data")
        node.release_content()
        assert node.has_content is False
        assert node.size == 0
        node.release_content()
        assert node.has_content is False


class TestCopyAndMove:
    """Tests for copy and move semantics."""

    def test_copy_is_independent(self) -> None:
        original = FileNode("a.txt", b"abc")
        clone = original.copy()
        clone.append(b"d")
        assert original.data == b"abc"
        assert clone.data == b"abcd"
        assert clone == FileNode("a.txt", b"abcd")

    def test_copy_module(self) -> None:
        original = FileNode("a.txt", b"abc")
        assert copy.copy(original) == original
        assert copy.deepcopy(original) == original
        assert copy.copy(original) is not original

    def test_move_transfers_buffer(self) -> None:
        original = FileNode("a.txt", b"abc")
        moved = original.move()
        assert moved.data == b"abc"
        assert moved.name == "a.txt"
        assert original.name == "a.txt"
        assert original.has_content is False

    def test_equality(self) -> None:
        assert FileNode("a.txt", b"x") == FileNode("a.txt", b"x")
        assert FileNode("a.txt", b"x") != FileNode("b.txt", b"x")
        assert FileNode("a.txt") != FileNode("a.txt", b"")

    def test_unhashable(self) -> None:
        with pytest.raises(TypeError):
            hash(FileNode("a.txt"))

    def test_repr(self) -> None:
        assert repr(FileNode("a.txt", b"hi")) == "FileNode('a.txt', 2 bytes)"
        assert repr(FileNode("a.txt")) == "FileNode('a.txt', <no content>)"


class TestWriteTo:
    """Tests for writing to a stream."""

    def test_write_to_stream(self) -> None:
        stream = io.BytesIO()
        assert FileNode("a.txt", b"payload").write_to(stream) == 7
        assert stream.getvalue() == b"payload"

    def test_write_to_without_content(self) -> None:
        stream = MagicMock()
        assert FileNode("a.txt").write_to(stream) == 0
        stream.write.assert_not_called()


class TestDisk:
    """Tests for hydrating from and writing to disk."""

    def test_from_disk_path(self, disk_tree: Path) -> None:
        node = FileNode.from_disk_path(disk_tree / "docs" / "guide.md")
        assert node.name == "guide.md"
        assert node.data == b"# Guide\n"

    def test_from_disk_path_empty_file(self, disk_tree: Path) -> None:
        """Test an empty file loads as a present, empty buffer."""
        node = FileNode.from_disk_path(disk_tree / "zero.bin")
        assert node.has_content is True
        assert node.size == 0

    def test_from_disk_path_missing(self) -> None:
        with pytest.raises(PathNotFoundError):
            FileNode.from_disk_path("/nonexistent")

    def test_from_disk_path_directory(self, disk_tree: Path) -> None:
        with pytest.raises(PathNotFoundError):
            FileNode.from_disk_path(disk_tree / "docs")

    def test_from_disk_path_small_buffer(self, tmp_path: Path) -> None:
        target = tmp_path / "big.bin"
        payload = bytes(range(256)) * 100
        target.write_bytes(payload)
        ctx = TreeContext(options=TreeOptions(buffer_size=3))

        assert FileNode.from_disk_path(target, context=ctx).data == payload

    def test_write_to_disk(self, tmp_path: Path) -> None:
        assert FileNode("a.txt", b"hello").write_to_disk(tmp_path) is True
        assert (tmp_path / "a.txt").read_bytes() == b"hello"

    def test_write_empty_buffer_creates_file(self, tmp_path: Path) -> None:
        assert FileNode("empty.txt", b"").write_to_disk(tmp_path) is True
        assert (tmp_path / "empty.txt").read_bytes() == b""

    def test_write_without_content_creates_nothing(self, tmp_path: Path) -> None:
        assert FileNode("none.txt").write_to_disk(tmp_path) is False
        assert not (tmp_path / "none.txt").exists()

    def test_write_skip_existing(self, tmp_path: Path) -> None:
        (tmp_path / "a.txt").write_bytes(b"old")
        assert FileNode("a.txt", b"new").write_to_disk(tmp_path, WritePolicy.SKIP) is False
        assert (tmp_path / "a.txt").read_bytes() == b"old"

    def test_write_override_existing(self, tmp_path: Path) -> None:
        (tmp_path / "a.txt").write_bytes(b"old content")
        assert FileNode("a.txt", b"new").write_to_disk(tmp_path, WritePolicy.OVERRIDE) is True
        assert (tmp_path / "a.txt").read_bytes() == b"new"

    def test_write_append_mode(self, tmp_path: Path) -> None:
        (tmp_path / "log.txt").write_bytes(b"one,")
        FileNode("log.txt", b"two").write_to_disk(tmp_path, WritePolicy.OVERRIDE, mode="ab")
        assert (tmp_path / "log.txt").read_bytes() == b"one,two"

    def test_write_bad_mode(self, tmp_path: Path) -> None:
        with pytest.raises(InvalidArgumentError):
            FileNode("a.txt", b"x").write_to_disk(tmp_path, mode="w")

    def test_write_missing_directory(self, tmp_path: Path) -> None:
        with pytest.raises(OpenFailedError):
            FileNode("a.txt", b"x").write_to_disk(tmp_path / "missing")

    def test_write_uses_context_default_policy(self, tmp_path: Path) -> None:
        (tmp_path / "a.txt").write_bytes(b"old")
        ctx = TreeContext(options=TreeOptions(default_policy=WritePolicy.OVERRIDE))
        assert FileNode("a.txt", b"new").write_to_disk(tmp_path, context=ctx) is True
        assert (tmp_path / "a.txt").read_bytes() == b"new"


class TestWithMockFileSystem:
    """Tests against an injected filesystem double."""

    def test_write_to_disk_calls_open_write(
        self, mock_filesystem: MagicMock, mock_context: TreeContext
    ) -> None:
        FileNode("a.txt", b"abc").write_to_disk(Path("/out"), context=mock_context)

        mock_filesystem.open_write.assert_called_once_with(Path("/out/a.txt"), "wb")
        stream = mock_filesystem.open_write.return_value.__enter__.return_value
        stream.write.assert_called_once_with(b"abc")

    def test_write_skip_checks_exists(
        self, mock_filesystem: MagicMock, mock_context: TreeContext
    ) -> None:
        mock_filesystem.exists.return_value = True

        result = FileNode("a.txt", b"abc").write_to_disk(Path("/out"), context=mock_context)

        assert result is False
        mock_filesystem.open_write.assert_not_called()

    def test_from_disk_path_not_a_file(
        self, mock_filesystem: MagicMock, mock_context: TreeContext
    ) -> None:
        with pytest.raises(PathNotFoundError):
            FileNode.from_disk_path(Path("/in/a.txt"), context=mock_context)
        mock_filesystem.open_read.assert_not_called()

    def test_from_disk_path_reads_stream(
        self, mock_filesystem: MagicMock, mock_context: TreeContext
    ) -> None:
        mock_filesystem.is_file.return_value = True
        mock_filesystem.open_read.return_value = io.BytesIO(b"streamed")

        node = FileNode.from_disk_path(Path("/in/a.txt"), context=mock_context)

        assert node.name == "a.txt"
        assert node.data == b"streamed"
