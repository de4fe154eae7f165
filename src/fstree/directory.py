"""In-memory directory node: a validated name plus owned child nodes."""

from __future__ import annotations

import logging
from collections.abc import Iterator
from pathlib import Path

from fstree.context import TreeContext, resolve_context
from fstree.errors import InvalidArgumentError, PathNotFoundError
from fstree.file import FileNode
from fstree.types import WRITE_MODES, WritePolicy
from fstree.validation import validate_name

logger = logging.getLogger(__name__)


def _disk_name(path: Path) -> str:
    """Name for a node hydrated from path; "." and ".." are resolved first."""
    if path.name in ("", ".", ".."):
        return path.resolve().name
    return path.name


class DirNode:
    """A directory held in memory.

    A DirNode owns two ordered collections: child files and child
    directories. Names are unique within each collection, but a file and a
    subdirectory may share a name. Every child is owned by exactly one
    parent: add_file()/add_dir() move the argument into a new node owned by
    this directory, and copy() duplicates the whole subtree.

    Children returned by file(), dir(), files and dirs are live nodes; their
    content may be changed in place. Rename them through rename_file() and
    rename_dir() so name uniqueness is preserved.

    DirNode does no locking. Callers mutating one tree from several threads
    must serialize access themselves.

    Example:
        >>> root = DirNode("root")
        >>> root.file("a.txt").set_content(b"hi")
        FileNode('a.txt', 2 bytes)
        >>> root.dir("sub").file("b.txt").set_content(b"bye")
        FileNode('b.txt', 3 bytes)
        >>> root.total_size(), root.file_count(), root.dir_count()
        (5, 2, 1)
    """

    __slots__ = ("_name", "_files", "_dirs")

    def __init__(self, name: str) -> None:
        """Create an empty directory node.

        Raises:
            InvalidNameError: If name is not a valid directory name.
        """
        self._name = validate_name(name)
        self._files: list[FileNode] = []
        self._dirs: list[DirNode] = []

    @classmethod
    def from_disk_path(cls, path: str | Path, context: TreeContext | None = None) -> DirNode:
        """Hydrate a directory tree from disk.

        Each level is listed without recursion; subdirectories are loaded
        first, then files.

        Args:
            path: Directory to read. Its final segment becomes the node name.
            context: Filesystem and options to use.

        Returns:
            A node holding the complete tree with all file content loaded.

        Raises:
            PathNotFoundError: If path is not an existing directory.
            OpenFailedError: If a file cannot be opened for reading.
            InvalidNameError: If an entry name is not a valid node name.
            InvalidArgumentError: If following symlinks leads back into a
                directory that is already being loaded.
        """
        ctx = resolve_context(context)
        path = Path(path)
        if not ctx.filesystem.is_dir(path):
            raise PathNotFoundError(path, "The path is not a directory or does not exist")
        return cls._load(path, ctx, frozenset())

    @classmethod
    def _load(cls, path: Path, ctx: TreeContext, ancestors: frozenset[Path]) -> DirNode:
        real = path.resolve()
        if real in ancestors:
            raise InvalidArgumentError(f"Symlink loop while loading directory: {path}")
        ancestors = ancestors | {real}

        fs = ctx.filesystem
        root = cls(_disk_name(path))
        files, dirs = fs.list_entries(path)

        for sub in dirs:
            if not ctx.options.follow_symlinks and fs.is_symlink(sub):
                logger.debug("Not following symlinked directory: %s", sub)
                continue
            root._dirs.append(cls._load(sub, ctx, ancestors))

        for file_path in files:
            if not ctx.options.follow_symlinks and fs.is_symlink(file_path):
                logger.debug("Not following symlinked file: %s", file_path)
                continue
            root._files.append(FileNode.from_disk_path(file_path, ctx))

        logger.debug(
            "Loaded directory %s (%d files, %d dirs)", path, len(root._files), len(root._dirs)
        )
        return root

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
            InvalidNameError: If new_name is not a valid directory name.
        """
        self.name = new_name

    # --- Aggregates ---

    def total_size(self) -> int:
        """Sum of the sizes of all descendant files."""
        return sum(f.size for f in self._files) + sum(d.total_size() for d in self._dirs)

    def file_count(self, recursive: bool = True) -> int:
        count = len(self._files)
        if recursive:
            count += sum(d.file_count(True) for d in self._dirs)
        return count

    def dir_count(self, recursive: bool = True) -> int:
        count = len(self._dirs)
        if recursive:
            count += sum(d.dir_count(True) for d in self._dirs)
        return count

    def total_count(self, recursive: bool = True) -> int:
        """Number of files plus directories below this node."""
        return self.file_count(recursive) + self.dir_count(recursive)

    @property
    def is_empty(self) -> bool:
        """True when there are no direct children.

        A directory holding only empty subdirectories is not empty.
        """
        return not self._files and not self._dirs

    # --- Lookup ---

    def _find_file(self, name: str) -> int | None:
        for index, node in enumerate(self._files):
            if node.name == name:
                return index
        return None

    def _find_dir(self, name: str) -> int | None:
        for index, node in enumerate(self._dirs):
            if node.name == name:
                return index
        return None

    def has_file(self, name: str, recursive: bool = False) -> bool:
        """Check for a file by exact name.

        Args:
            name: File name.
            recursive: Also search every subdirectory, depth-first.
        """
        if self._find_file(name) is not None:
            return True
        if recursive:
            return any(d.has_file(name, True) for d in self._dirs)
        return False

    def has_dir(self, name: str, recursive: bool = False) -> bool:
        """Check for a subdirectory by exact name.

        Args:
            name: Directory name.
            recursive: Also search every subdirectory, depth-first.
        """
        if self._find_dir(name) is not None:
            return True
        if recursive:
            return any(d.has_dir(name, True) for d in self._dirs)
        return False

    @property
    def files(self) -> tuple[FileNode, ...]:
        """Direct child files, in insertion order."""
        return tuple(self._files)

    @property
    def dirs(self) -> tuple[DirNode, ...]:
        """Direct child directories, in insertion order."""
        return tuple(self._dirs)

    def file(self, name: str) -> FileNode:
        """Return the direct child file called name, creating it if missing.

        Raises:
            InvalidNameError: If the file has to be created and name is invalid.
        """
        index = self._find_file(name)
        if index is not None:
            return self._files[index]
        node = FileNode(name)
        self._files.append(node)
        return node

    def dir(self, name: str) -> DirNode:
        """Return the direct child directory called name, creating it if missing.

        Raises:
            InvalidNameError: If the directory has to be created and name is invalid.
        """
        index = self._find_dir(name)
        if index is not None:
            return self._dirs[index]
        node = DirNode(name)
        self._dirs.append(node)
        return node

    def _contains(self, node: DirNode) -> bool:
        """True if node is this directory or any directory below it."""
        return any(sub is node for _, sub in self.walk())

    def walk(self) -> Iterator[tuple[str, DirNode]]:
        """Yield (relative_path, node) for this node and every subdirectory.

        Depth-first, pre-order. The root is yielded with an empty path;
        nested paths use "/" as separator.
        """
        yield "", self
        for sub in self._dirs:
            for rel, node in sub.walk():
                yield (f"{sub.name}/{rel}" if rel else sub.name), node

    # --- Mutation ---

    def add_file(self, file: FileNode, policy: WritePolicy = WritePolicy.SKIP) -> FileNode | None:
        """Insert a direct child file.

        The argument's content is moved into a new node owned by this
        directory. When a file with the same name exists, SKIP leaves both
        nodes untouched and OVERRIDE replaces the existing one in place.

        Returns:
            The owned child, or None when skipped.

        Raises:
            InvalidArgumentError: If file is not a FileNode.
        """
        if not isinstance(file, FileNode):
            raise InvalidArgumentError(f"Expected a FileNode, got {type(file).__name__}")

        index = self._find_file(file.name)
        if index is None:
            owned = file.move()
            self._files.append(owned)
            return owned
        if policy is WritePolicy.SKIP:
            logger.debug("Skipping add, file %r exists in %r", file.name, self._name)
            return None
        owned = file.move()
        self._files[index] = owned
        return owned

    def add_dir(self, dir: DirNode, policy: WritePolicy = WritePolicy.SKIP) -> DirNode | None:
        """Insert a direct child directory.

        The argument's children are moved into a new node owned by this
        directory. When a subdirectory with the same name exists, SKIP
        leaves both nodes untouched and OVERRIDE replaces the existing one
        in place.

        Returns:
            The owned child, or None when skipped.

        Raises:
            InvalidArgumentError: If dir is not a DirNode, or is this node or
                one of its ancestors.
        """
        if not isinstance(dir, DirNode):
            raise InvalidArgumentError(f"Expected a DirNode, got {type(dir).__name__}")
        if dir._contains(self):
            raise InvalidArgumentError(
                f"Cannot add directory {dir.name!r} to itself or one of its subdirectories"
            )

        index = self._find_dir(dir.name)
        if index is None:
            owned = dir.move()
            self._dirs.append(owned)
            return owned
        if policy is WritePolicy.SKIP:
            logger.debug("Skipping add, directory %r exists in %r", dir.name, self._name)
            return None
        owned = dir.move()
        self._dirs[index] = owned
        return owned

    def add(
        self, node: FileNode | DirNode, policy: WritePolicy = WritePolicy.SKIP
    ) -> FileNode | DirNode | None:
        """Insert a file or directory; see add_file() and add_dir()."""
        if isinstance(node, FileNode):
            return self.add_file(node, policy)
        if isinstance(node, DirNode):
            return self.add_dir(node, policy)
        raise InvalidArgumentError(f"Expected a FileNode or DirNode, got {type(node).__name__}")

    def merge(self, other: DirNode, policy: WritePolicy = WritePolicy.SKIP) -> None:
        """Fold the children of other into this directory, recursively.

        Files go through add_file() with policy. A subdirectory that exists
        on both sides is merged recursively; otherwise it is added. Children
        taken over are removed from other; skipped ones stay there.

        Raises:
            InvalidArgumentError: If other is this node or one of its
                ancestors. Nothing is moved in that case.
        """
        if other._contains(self):
            raise InvalidArgumentError(
                f"Cannot merge directory {other.name!r} into itself or one of its subdirectories"
            )

        remaining_files: list[FileNode] = []
        for node in other._files:
            if self.add_file(node, policy) is None:
                remaining_files.append(node)
        other._files = remaining_files

        remaining_dirs: list[DirNode] = []
        for node in other._dirs:
            index = self._find_dir(node.name)
            if index is None:
                self.add_dir(node)
                continue
            self._dirs[index].merge(node, policy)
            if not node.is_empty:
                remaining_dirs.append(node)
        other._dirs = remaining_dirs

    def rename_file(self, old: str, new: str, policy: WritePolicy = WritePolicy.SKIP) -> bool:
        """Rename a direct child file, keeping names unique.

        Returns:
            True if renamed, False if new is taken and policy is SKIP.

        Raises:
            PathNotFoundError: If there is no file called old.
            InvalidNameError: If new is not a valid name.
        """
        return self._rename_child(self._files, old, new, policy, "file")

    def rename_dir(self, old: str, new: str, policy: WritePolicy = WritePolicy.SKIP) -> bool:
        """Rename a direct child directory, keeping names unique.

        Returns:
            True if renamed, False if new is taken and policy is SKIP.

        Raises:
            PathNotFoundError: If there is no directory called old.
            InvalidNameError: If new is not a valid name.
        """
        return self._rename_child(self._dirs, old, new, policy, "directory")

    def _rename_child(
        self,
        children: list,
        old: str,
        new: str,
        policy: WritePolicy,
        kind: str,
    ) -> bool:
        validate_name(new)
        names = [child.name for child in children]
        if old not in names:
            raise PathNotFoundError(f"{self._name}/{old}", f"No such {kind}")
        if old == new:
            return True

        if new in names:
            if policy is WritePolicy.SKIP:
                logger.debug("Skipping rename, %s %r exists in %r", kind, new, self._name)
                return False
            del children[names.index(new)]

        for child in children:
            if child.name == old:
                child.rename(new)
                break
        return True

    def remove_file(self, name: str) -> bool:
        """Remove a direct child file. Returns False if there was none."""
        index = self._find_file(name)
        if index is None:
            return False
        del self._files[index]
        return True

    def remove_dir(self, name: str) -> bool:
        """Remove a direct child directory. Returns False if there was none."""
        index = self._find_dir(name)
        if index is None:
            return False
        del self._dirs[index]
        return True

    def release_all_content(self) -> None:
        """Release the buffer of every descendant file, keeping the structure."""
        for node in self._files:
            node.release_content()
        for sub in self._dirs:
            sub.release_all_content()

    def clear_files(self) -> None:
        self._files = []

    def clear_dirs(self) -> None:
        self._dirs = []

    def clear(self) -> None:
        self.clear_files()
        self.clear_dirs()

    # --- Output ---

    def write_to_disk(
        self,
        parent: str | Path,
        policy: WritePolicy | None = None,
        mode: str = "wb",
        context: TreeContext | None = None,
    ) -> Path:
        """Write the tree as ``parent/name``.

        The root directory is created if missing (parents included). Files
        are written first, then each subdirectory recursively, all with the
        same policy and mode. A failure stops the walk; anything written
        before it stays on disk.

        Args:
            parent: Directory to write into.
            policy: Applied to every file; defaults to the context's
                default_policy.
            mode: "wb" to truncate or "ab" to append to existing files.
            context: Filesystem and options to use.

        Returns:
            Path of the written root directory.

        Raises:
            InvalidArgumentError: If mode is not supported.
            OpenFailedError: If a file cannot be opened for writing.
        """
        if mode not in WRITE_MODES:
            raise InvalidArgumentError(
                f"Unsupported write mode: {mode!r}. Expected one of {sorted(WRITE_MODES)}"
            )
        ctx = resolve_context(context)
        policy = ctx.options.resolve_policy(policy)
        root = Path(parent) / self._name

        ctx.filesystem.create_directory(root)
        for node in self._files:
            node.write_to_disk(root, policy, mode, ctx)
        for sub in self._dirs:
            sub.write_to_disk(root, policy, mode, ctx)

        logger.debug("Wrote directory %s", root)
        return root

    # --- Copy / move ---

    def copy(self) -> DirNode:
        """Return a deep copy of the whole subtree."""
        clone = DirNode(self._name)
        clone._files = [node.copy() for node in self._files]
        clone._dirs = [sub.copy() for sub in self._dirs]
        return clone

    def move(self) -> DirNode:
        """Transfer all children to a new node with the same name.

        The source keeps its name but is left without children.
        """
        moved = DirNode(self._name)
        moved._files, self._files = self._files, []
        moved._dirs, self._dirs = self._dirs, []
        return moved

    def __copy__(self) -> DirNode:
        return self.copy()

    def __deepcopy__(self, memo: dict) -> DirNode:
        return self.copy()

    def __eq__(self, other: object) -> bool:
        """Compare name and children, ignoring child order."""
        if not isinstance(other, DirNode):
            return NotImplemented
        if self._name != other._name:
            return False
        if len(self._files) != len(other._files) or len(self._dirs) != len(other._dirs):
            return False
        files = {node.name: node for node in self._files}
        dirs = {sub.name: sub for sub in self._dirs}
        return all(files.get(node.name) == node for node in other._files) and all(
            dirs.get(sub.name) == sub for sub in other._dirs
        )

    __hash__ = None  # type: ignore[assignment]

    def __repr__(self) -> str:
        return f"DirNode({self._name!r}, {len(self._files)} files, {len(self._dirs)} dirs)"
