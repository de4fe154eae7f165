"""Protocol definitions for the filesystem collaborator.

The tree model (FileNode, DirNode) only talks to the disk through the
FileSystem protocol defined here. Designing to this interface enables:
- Substituting test doubles for real I/O
- Alternative backends with the same contract

RealFileSystem in fstree.filesystem satisfies the protocol structurally.
"""

from __future__ import annotations

from pathlib import Path
from typing import BinaryIO, Callable, Protocol, runtime_checkable

from fstree.types import WritePolicy

PathFilter = Callable[[Path], bool]


@runtime_checkable
class FileSystem(Protocol):
    """Protocol for filesystem operations.

    Abstracts filesystem access so nodes can be hydrated and written
    without depending on a concrete implementation.
    """

    # --- Streams ---

    def open_read(self, path: Path) -> BinaryIO:
        """Open a file for binary reading.

        Raises:
            OpenFailedError: If the file cannot be opened.
        """
        ...

    def open_write(self, path: Path, mode: str = "wb") -> BinaryIO:
        """Open a file for binary writing.

        Args:
            path: Path to the file.
            mode: "wb" to truncate or "ab" to append.

        Raises:
            OpenFailedError: If the file cannot be opened.
        """
        ...

    # --- Queries ---

    def exists(self, path: Path) -> bool:
        """Check if a path exists."""
        ...

    def is_file(self, path: Path) -> bool:
        """Check if a path exists and is a regular file."""
        ...

    def is_dir(self, path: Path) -> bool:
        """Check if a path exists and is a directory."""
        ...

    def is_symlink(self, path: Path) -> bool:
        """Check if a path is a symbolic link."""
        ...

    def is_empty(self, path: Path) -> bool:
        """Check if a file has size 0 or a directory has no entries.

        Raises:
            PathNotFoundError: If the path does not exist.
        """
        ...

    def sizes(self, path: Path) -> int:
        """Size of a file, or the total size of regular files under a directory.

        Raises:
            PathNotFoundError: If the path does not exist.
        """
        ...

    def list_entries(
        self,
        path: Path,
        recursive: bool = False,
        predicate: PathFilter | None = None,
    ) -> tuple[list[Path], list[Path]]:
        """List regular files and directories under a directory.

        Args:
            path: Directory to list.
            recursive: Descend into subdirectories.
            predicate: Optional filter; entries for which it returns False
                are left out.

        Returns:
            Tuple of (files, dirs), each sorted.

        Raises:
            PathNotFoundError: If path is not a directory.
        """
        ...

    # --- Mutations ---

    def create_directory(self, path: Path) -> bool:
        """Create a directory and any missing parents.

        Returns:
            True if created, False if it already existed.
        """
        ...

    def delete(self, path: Path) -> int:
        """Delete a file or a directory tree.

        Returns:
            Number of removed entries, 0 if the path did not exist.
        """
        ...

    def copy(self, src: Path, dst: Path, policy: WritePolicy = WritePolicy.SKIP) -> None:
        """Copy a file or a directory tree to dst."""
        ...

    def move(self, src: Path, dst: Path, policy: WritePolicy = WritePolicy.SKIP) -> None:
        """Move a file or a directory tree to dst."""
        ...

    def create_symlink(
        self, src: Path, dst: Path, policy: WritePolicy = WritePolicy.SKIP
    ) -> None:
        """Create a symbolic link at dst pointing to src."""
        ...

    def create_hardlink(
        self, src: Path, dst: Path, policy: WritePolicy = WritePolicy.SKIP
    ) -> None:
        """Create a hard link at dst for the file src."""
        ...

    def hardlink_count(self, path: Path) -> int:
        """Number of hard links to path."""
        ...

    def symlink_target(self, path: Path) -> Path:
        """Return the path a symbolic link points to.

        Raises:
            InvalidArgumentError: If path is not a symbolic link.
        """
        ...

    def current_path(self) -> Path:
        """Current working directory."""
        ...

    def temp_directory(self) -> Path:
        """Directory for temporary files."""
        ...

    def list_files(
        self,
        path: Path,
        recursive: bool = False,
        predicate: PathFilter | None = None,
    ) -> list[Path]:
        """List regular files under a directory. See list_entries()."""
        ...

    def list_dirs(
        self,
        path: Path,
        recursive: bool = False,
        predicate: PathFilter | None = None,
    ) -> list[Path]:
        """List directories under a directory. See list_entries()."""
        ...

    def rename_entry(
        self, path: Path, new_name: str, policy: WritePolicy = WritePolicy.SKIP
    ) -> Path:
        """Rename the final segment of path, staying in the same directory.

        Raises:
            InvalidNameError: If new_name is not a valid name.
        """
        ...

    def change_stem(
        self, path: Path, new_stem: str, policy: WritePolicy = WritePolicy.SKIP
    ) -> Path:
        """Rename a file keeping its extension."""
        ...

    def change_extension(
        self, path: Path, new_extension: str, policy: WritePolicy = WritePolicy.SKIP
    ) -> Path:
        """Rename a file keeping its stem."""
        ...
