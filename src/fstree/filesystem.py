"""Filesystem primitives backing the tree model.

RealFileSystem wraps standard library Path, os and shutil operations and
satisfies the FileSystem protocol structurally. Copy, move and link
operations take a WritePolicy deciding what happens when the destination
already exists.
"""

from __future__ import annotations

import logging
import os
import shutil
import tempfile
from pathlib import Path
from typing import BinaryIO

from fstree import paths
from fstree.errors import InvalidArgumentError, OpenFailedError, PathNotFoundError
from fstree.protocols import PathFilter
from fstree.types import WRITE_MODES, WritePolicy
from fstree.validation import validate_name

logger = logging.getLogger(__name__)


class RealFileSystem:
    """Production filesystem implementation."""

    # --- Streams ---

    def open_read(self, path: Path) -> BinaryIO:
        """Open a file for binary reading."""
        try:
            return open(path, "rb")
        except OSError as e:
            raise OpenFailedError(path, e.strerror or str(e)) from e

    def open_write(self, path: Path, mode: str = "wb") -> BinaryIO:
        """Open a file for binary writing ("wb" truncates, "ab" appends)."""
        if mode not in WRITE_MODES:
            raise InvalidArgumentError(
                f"Unsupported write mode: {mode!r}. Expected one of {sorted(WRITE_MODES)}"
            )
        try:
            return open(path, mode)
        except OSError as e:
            raise OpenFailedError(path, e.strerror or str(e)) from e

    # --- Queries ---

    def exists(self, path: Path) -> bool:
        """Check if a path exists."""
        return Path(path).exists()

    def is_file(self, path: Path) -> bool:
        """Check if a path is an existing regular file."""
        return Path(path).is_file()

    def is_dir(self, path: Path) -> bool:
        """Check if a path is an existing directory."""
        return Path(path).is_dir()

    def is_symlink(self, path: Path) -> bool:
        """Check if a path is a symbolic link."""
        return Path(path).is_symlink()

    def is_empty(self, path: Path) -> bool:
        """Check if a file has no bytes or a directory has no entries.

        Raises:
            PathNotFoundError: If the path does not exist.
        """
        p = Path(path)
        if p.is_file():
            return p.stat().st_size == 0
        if p.is_dir():
            return not any(p.iterdir())
        raise PathNotFoundError(p)

    def sizes(self, path: Path) -> int:
        """Size of a file, or the summed size of regular files under a directory.

        Raises:
            PathNotFoundError: If the path does not exist.
        """
        p = Path(path)
        if p.is_file():
            return p.stat().st_size
        if not p.is_dir():
            raise PathNotFoundError(p)

        total = 0
        for dirpath, _dirnames, filenames in os.walk(p):
            for filename in filenames:
                full = os.path.join(dirpath, filename)
                if os.path.isfile(full):
                    total += os.path.getsize(full)
        return total

    def hardlink_count(self, path: Path) -> int:
        """Number of hard links to path.

        Raises:
            PathNotFoundError: If the path does not exist.
        """
        p = Path(path)
        if not p.exists():
            raise PathNotFoundError(p)
        return p.stat().st_nlink

    def symlink_target(self, path: Path) -> Path:
        """Return the path a symbolic link points to."""
        p = Path(path)
        if not p.is_symlink():
            raise InvalidArgumentError(f"Not a symbolic link: {p}")
        return Path(os.readlink(p))

    def current_path(self) -> Path:
        return Path.cwd()

    def temp_directory(self) -> Path:
        return Path(tempfile.gettempdir())

    # --- Listing ---

    def list_entries(
        self,
        path: Path,
        recursive: bool = False,
        predicate: PathFilter | None = None,
    ) -> tuple[list[Path], list[Path]]:
        """List regular files and directories under a directory.

        Symlinked directories are reported but never descended into.

        Args:
            path: Directory to list.
            recursive: Descend into subdirectories.
            predicate: Optional filter applied to each entry path.

        Returns:
            Tuple of (files, dirs), each sorted.

        Raises:
            PathNotFoundError: If path is not a directory.
        """
        root = Path(path)
        if not root.is_dir():
            raise PathNotFoundError(root, "The path is not a directory or does not exist")

        files: list[Path] = []
        dirs: list[Path] = []

        def _collect(entry: Path) -> None:
            if predicate is not None and not predicate(entry):
                return
            if entry.is_file():
                files.append(entry)
            elif entry.is_dir():
                dirs.append(entry)

        if recursive:
            for dirpath, dirnames, filenames in os.walk(root):
                base = Path(dirpath)
                for name in dirnames + filenames:
                    _collect(base / name)
        else:
            for entry in root.iterdir():
                _collect(entry)

        return sorted(files), sorted(dirs)

    def list_files(
        self,
        path: Path,
        recursive: bool = False,
        predicate: PathFilter | None = None,
    ) -> list[Path]:
        """List regular files under a directory. See list_entries()."""
        return self.list_entries(path, recursive, predicate)[0]

    def list_dirs(
        self,
        path: Path,
        recursive: bool = False,
        predicate: PathFilter | None = None,
    ) -> list[Path]:
        """List directories under a directory. See list_entries()."""
        return self.list_entries(path, recursive, predicate)[1]

    # --- Mutations ---

    def create_directory(self, path: Path) -> bool:
        """Create a directory and any missing parents.

        Returns:
            True if created, False if it already existed.

        Raises:
            InvalidArgumentError: If path, or one of its parents, exists as
                something other than a directory.
        """
        p = Path(path)
        if p.is_dir():
            return False
        if p.exists() or p.is_symlink():
            raise InvalidArgumentError(f'The path exists and is not a directory: "{p}"')
        try:
            p.mkdir(parents=True, exist_ok=True)
        except (FileExistsError, NotADirectoryError) as e:
            raise InvalidArgumentError(
                f'A parent of the path is not a directory: "{p}"'
            ) from e
        return True

    def delete(self, path: Path) -> int:
        """Delete a file, link or directory tree.

        Returns:
            Number of removed entries, 0 if the path did not exist.
        """
        p = Path(path)
        if p.is_symlink() or p.is_file():
            p.unlink()
            return 1
        if not p.is_dir():
            return 0

        count = 1
        for _dirpath, dirnames, filenames in os.walk(p):
            count += len(dirnames) + len(filenames)
        shutil.rmtree(p)
        logger.debug("Deleted %d entries under %s", count, p)
        return count

    def copy(self, src: Path, dst: Path, policy: WritePolicy = WritePolicy.SKIP) -> None:
        """Copy a file or a directory tree to dst.

        Directory copies merge into an existing dst; policy is applied to
        each file individually.

        Raises:
            PathNotFoundError: If src does not exist.
            InvalidArgumentError: If a file would replace a directory (or the
                reverse), or a directory would be copied into itself.
        """
        src, dst = Path(src), Path(dst)
        if paths.is_equal_path(src, dst):
            return

        if src.is_file():
            if policy is WritePolicy.SKIP and dst.exists():
                logger.debug("Skipping copy, destination exists: %s", dst)
                return
            if dst.is_dir():
                raise InvalidArgumentError(
                    f'The destination path contains same name directory. "{src}" -> "{dst}"'
                )
            self.create_directory(dst.parent)
            self.delete(dst)
            shutil.copy2(src, dst)
        elif src.is_dir():
            if dst.is_file():
                raise InvalidArgumentError(
                    f'The destination path contains same name file. "{src}" -> "{dst}"'
                )
            if paths.is_sub_path(dst, src):
                raise InvalidArgumentError(
                    f'Can\'t copy directory to a subdirectory. "{src}" -> "{dst}"'
                )
            self.create_directory(dst)
            for dirpath, dirnames, filenames in os.walk(src):
                rel = Path(dirpath).relative_to(src)
                for name in dirnames:
                    self.create_directory(dst / rel / name)
                for name in filenames:
                    self.copy(Path(dirpath) / name, dst / rel / name, policy)
        else:
            raise PathNotFoundError(src, "The source path does not exist")

    def move(self, src: Path, dst: Path, policy: WritePolicy = WritePolicy.SKIP) -> None:
        """Move a file or a directory tree to dst.

        Moving a directory merges its contents into dst entry by entry;
        entries skipped by policy stay behind in src.

        Raises:
            PathNotFoundError: If src does not exist.
            InvalidArgumentError: If a file would replace a directory (or the
                reverse), or a directory would be moved into itself.
        """
        src, dst = Path(src), Path(dst)
        if paths.is_equal_path(src, dst):
            return

        if src.is_file():
            if policy is WritePolicy.SKIP and dst.exists():
                logger.debug("Skipping move, destination exists: %s", dst)
                return
            if dst.is_dir():
                raise InvalidArgumentError(
                    f'The destination path contains same name directory. "{src}" -> "{dst}"'
                )
            self.create_directory(dst.parent)
            os.replace(src, dst)
        elif src.is_dir():
            if dst.is_file():
                raise InvalidArgumentError(
                    f'The destination path contains same name file. "{src}" -> "{dst}"'
                )
            if paths.is_sub_path(dst, src):
                raise InvalidArgumentError(
                    f'Can\'t move directory to a subdirectory. "{src}" -> "{dst}"'
                )
            self.create_directory(dst)
            for entry in sorted(src.iterdir()):
                self.move(entry, dst / entry.name, policy)
            if not any(src.iterdir()):
                src.rmdir()
        else:
            raise PathNotFoundError(src, "The source path does not exist")

    def rename_entry(
        self, path: Path, new_name: str, policy: WritePolicy = WritePolicy.SKIP
    ) -> Path:
        """Rename the final segment of path, staying in the same directory.

        Returns:
            The new path.

        Raises:
            InvalidNameError: If new_name is not a valid name.
        """
        p = Path(path)
        target = p.parent / validate_name(new_name)
        self.move(p, target, policy)
        return target

    def change_stem(
        self, path: Path, new_stem: str, policy: WritePolicy = WritePolicy.SKIP
    ) -> Path:
        """Rename a file keeping its extension ("old.dat" -> "new.dat")."""
        return self.rename_entry(path, new_stem + paths.path_extension(path), policy)

    def change_extension(
        self, path: Path, new_extension: str, policy: WritePolicy = WritePolicy.SKIP
    ) -> Path:
        """Rename a file keeping its stem ("a.txt" -> "a.md")."""
        return self.rename_entry(path, paths.path_stem(path) + new_extension, policy)

    def create_symlink(
        self, src: Path, dst: Path, policy: WritePolicy = WritePolicy.SKIP
    ) -> None:
        """Create a symbolic link at dst pointing to src.

        Raises:
            PathNotFoundError: If src does not exist.
            InvalidArgumentError: If dst is an entry of the other kind.
        """
        src, dst = Path(src), Path(dst)
        if paths.is_equal_path(src, dst):
            return
        if policy is WritePolicy.SKIP and (dst.exists() or dst.is_symlink()):
            logger.debug("Skipping symlink, destination exists: %s", dst)
            return

        if src.is_file():
            if dst.is_dir() and not dst.is_symlink():
                raise InvalidArgumentError(
                    f'The destination path contains same name directory. "{src}" -> "{dst}"'
                )
        elif src.is_dir():
            if dst.is_file() and not dst.is_symlink():
                raise InvalidArgumentError(
                    f'The destination path contains same name file. "{src}" -> "{dst}"'
                )
        else:
            raise PathNotFoundError(src)

        self.delete(dst)
        self.create_directory(dst.parent)
        os.symlink(src, dst, target_is_directory=src.is_dir())

    def create_hardlink(
        self, src: Path, dst: Path, policy: WritePolicy = WritePolicy.SKIP
    ) -> None:
        """Create a hard link at dst for the regular file src.

        Raises:
            PathNotFoundError: If src does not exist.
            InvalidArgumentError: If src is a directory or dst is a directory.
        """
        src, dst = Path(src), Path(dst)
        if paths.is_equal_path(src, dst):
            return

        if src.is_dir():
            raise InvalidArgumentError(f'Can\'t hardlink for directory. "{src}"')
        if not src.is_file():
            raise PathNotFoundError(src)
        if policy is WritePolicy.SKIP and dst.exists():
            logger.debug("Skipping hardlink, destination exists: %s", dst)
            return
        if dst.is_dir():
            raise InvalidArgumentError(
                f'The destination path contains same name directory. "{src}" -> "{dst}"'
            )

        self.delete(dst)
        self.create_directory(dst.parent)
        os.link(src, dst)
