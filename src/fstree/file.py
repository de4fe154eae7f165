"""In-memory file node: a validated name plus an optional byte buffer."""

from __future__ import annotations

import logging
from collections.abc import Iterable
from pathlib import Path
from typing import Any, BinaryIO, Union

from fstree.config import DEFAULT_BUFFER_SIZE
from fstree.context import TreeContext, resolve_context
from fstree.errors import InvalidArgumentError, PathNotFoundError
from fstree.types import WRITE_MODES, WritePolicy
from fstree.validation import validate_name

logger = logging.getLogger(__name__)

ContentSource = Union[bytes, bytearray, memoryview, str, "FileNode", BinaryIO, Iterable[Any]]


def _narrow(element: Any) -> int:
    """Reduce one element of an arbitrary sequence to a single byte."""
    if isinstance(element, bool):
        return int(element)
    if isinstance(element, int):
        return element & 0xFF
    if isinstance(element, str) and len(element) == 1:
        return ord(element) & 0xFF
    raise InvalidArgumentError(f"Cannot convert {element!r} to a byte")


class FileNode:
    """A file held in memory.

    Content is optional: a node created with a name only has no buffer at
    all, which is different from holding an empty buffer. Both report a
    size of 0, but only a present buffer is written to disk.

    Example:
        >>> node = FileNode("a.txt", b"hi")
        >>> node.size
        2
    """

    __slots__ = ("_name", "_content")

    def __init__(self, name: str, content: ContentSource | None = None) -> None:
        """Create a file node.

        Args:
            name: File name, validated by fstree.validation.validate_name.
            content: Optional initial content, accepted in any form
                append() accepts.

        Raises:
            InvalidNameError: If name is not a valid file name.
        """
        self._name = validate_name(name)
        self._content: bytearray | None = None
        if content is not None:
            self.set_content(content)

    @classmethod
    def from_disk_path(cls, path: str | Path, context: TreeContext | None = None) -> FileNode:
        """Hydrate a node from a regular file on disk.

        Args:
            path: Path to the file. Its final segment becomes the node name.
            context: Filesystem and options to use.

        Returns:
            A node holding the complete file content.

        Raises:
            PathNotFoundError: If path is not an existing regular file.
            OpenFailedError: If the file cannot be opened for reading.
            InvalidNameError: If the file name is not a valid node name.
        """
        ctx = resolve_context(context)
        path = Path(path)
        if not ctx.filesystem.is_file(path):
            raise PathNotFoundError(path, "The path is not a regular file or does not exist")

        node = cls(path.name)
        with ctx.filesystem.open_read(path) as stream:
            node.append(stream, buffer_size=ctx.options.buffer_size)
        logger.debug("Loaded %s (%d bytes)", path, node.size)
        return node

    # --- Identity ---

    @property
    def name(self) -> str:
        return self._name

    @name.setter
    def name(self, value: str) -> None:
        self._name = validate_name(value)

    def rename(self, new_name: str) -> None:
        """Change the node name.

        Raises:
            InvalidNameError: If new_name is not a valid file name.
        """
        self.name = new_name

    # --- Content queries ---

    @property
    def data(self) -> bytes:
        """Content as bytes, or b"" when no buffer is loaded."""
        if self._content is None:
            return b""
        return bytes(self._content)

    @property
    def size(self) -> int:
        if self._content is None:
            return 0
        return len(self._content)

    @property
    def is_empty(self) -> bool:
        return self.size == 0

    @property
    def has_content(self) -> bool:
        """True when a buffer is present, even a zero-length one."""
        return self._content is not None

    # --- Content mutation ---

    def set_content(self, data: ContentSource, buffer_size: int = DEFAULT_BUFFER_SIZE) -> FileNode:
        """Replace the buffer with data.

        Accepts everything append() accepts. On error the previous content
        is kept. Setting a node's content from itself leaves it unchanged.
        """
        if data is self:
            return self
        previous = self._content
        self._content = None
        try:
            self.append(data, buffer_size=buffer_size)
        except Exception:
            self._content = previous
            raise
        return self

    def append(self, data: ContentSource, buffer_size: int = DEFAULT_BUFFER_SIZE) -> FileNode:
        """Append data to the buffer, creating the buffer if absent.

        Args:
            data: One of
                - bytes, bytearray or memoryview: appended as is
                - str: appended UTF-8 encoded
                - FileNode: its content is appended
                - a readable binary stream: read to EOF in buffer_size chunks
                - any other iterable: each element becomes exactly one byte
                  (ints are truncated to their low 8 bits, one-character
                  strings to the low 8 bits of their code point)
            buffer_size: Chunk size for stream reads.

        Returns:
            self, so calls can be chained.

        Raises:
            InvalidArgumentError: If data, or an element of it, cannot be
                converted to bytes.
        """
        if isinstance(data, (bytes, bytearray, memoryview)):
            chunk = bytes(data)
        elif isinstance(data, str):
            chunk = data.encode("utf-8")
        elif isinstance(data, FileNode):
            chunk = data.data
        elif hasattr(data, "read"):
            self._append_stream(data, buffer_size)
            return self
        elif isinstance(data, Iterable):
            chunk = bytes(_narrow(element) for element in data)
        else:
            raise InvalidArgumentError(f"Cannot append {type(data).__name__} to a file")

        if self._content is None:
            self._content = bytearray()
        self._content += chunk
        return self

    def _append_stream(self, stream: BinaryIO, buffer_size: int) -> None:
        if buffer_size <= 0:
            raise InvalidArgumentError(f"buffer_size must be positive, got {buffer_size}")

        received = bytearray()
        while True:
            chunk = stream.read(buffer_size)
            if not chunk:
                break
            if isinstance(chunk, str):
                raise InvalidArgumentError("Cannot append a text stream; open it in binary mode")
            received += chunk

        if self._content is None:
            self._content = bytearray()
        self._content += received

    def release_content(self) -> None:
        """Drop the buffer. Safe to call when no buffer is loaded."""
        self._content = None

    # --- Output ---

    def write_to(self, stream: BinaryIO) -> int:
        """Write the buffer to a binary stream.

        Returns:
            Number of bytes written; 0 and no write call when no buffer is loaded.
        """
        if self._content is None:
            return 0
        stream.write(bytes(self._content))
        return len(self._content)

    def write_to_disk(
        self,
        directory: str | Path,
        policy: WritePolicy | None = None,
        mode: str = "wb",
        context: TreeContext | None = None,
    ) -> bool:
        """Write the node as ``directory/name``.

        Args:
            directory: Existing directory to write into.
            policy: SKIP leaves an existing destination untouched; OVERRIDE
                replaces it. Defaults to the context's default_policy.
            mode: "wb" to truncate or "ab" to append to an existing file.
            context: Filesystem and options to use.

        Returns:
            True if the file was written, False if it was skipped because
            the destination exists or no buffer is loaded.

        Raises:
            InvalidArgumentError: If mode is not supported.
            OpenFailedError: If the destination cannot be opened for writing.
        """
        if mode not in WRITE_MODES:
            raise InvalidArgumentError(
                f"Unsupported write mode: {mode!r}. Expected one of {sorted(WRITE_MODES)}"
            )
        ctx = resolve_context(context)
        policy = ctx.options.resolve_policy(policy)
        destination = Path(directory) / self._name

        if policy is WritePolicy.SKIP and ctx.filesystem.exists(destination):
            logger.debug("Skipping write, destination exists: %s", destination)
            return False
        if self._content is None:
            logger.debug("Skipping write, no content loaded: %s", destination)
            return False

        with ctx.filesystem.open_write(destination, mode) as stream:
            self.write_to(stream)
        logger.debug("Wrote %s (%d bytes)", destination, len(self._content))
        return True

    # --- Copy / move ---

    def copy(self) -> FileNode:
        """Return an independent copy, buffer included."""
        clone = FileNode(self._name)
        if self._content is not None:
            clone._content = bytearray(self._content)
        return clone

    def move(self) -> FileNode:
        """Transfer the buffer to a new node with the same name.

        The source keeps its name but no longer holds a buffer.
        """
        moved = FileNode(self._name)
        moved._content, self._content = self._content, None
        return moved

    def __copy__(self) -> FileNode:
        return self.copy()

    def __deepcopy__(self, memo: dict) -> FileNode:
        return self.copy()

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, FileNode):
            return NotImplemented
        return self._name == other._name and self._content == other._content

    __hash__ = None  # type: ignore[assignment]

    def __repr__(self) -> str:
        if self._content is None:
            return f"FileNode({self._name!r}, <no content>)"
        return f"FileNode({self._name!r}, {len(self._content)} bytes)"
