"""Path string helpers.

These functions work on path strings lexically and never touch the disk,
except absolute()/relative() and the comparisons built on them, which
resolve against the current working directory.
"""

from __future__ import annotations

import os
import posixpath
from pathlib import Path, PurePosixPath

__all__ = [
    "absolute",
    "change_stem",
    "is_absolute",
    "is_equal_path",
    "is_relative",
    "is_sub_path",
    "normalize",
    "parent_name",
    "path_extension",
    "path_join",
    "path_parent",
    "path_segment",
    "path_stem",
    "quote_path",
    "relative",
]

PathLike = str | os.PathLike


def _text(path: PathLike) -> str:
    return os.fspath(path)


def normalize(path: PathLike, remove_quotes: bool = True) -> str:
    """Normalize a path string.

    1. discard double quotation marks (when remove_quotes is True)
    2. convert backslashes to forward slashes
    3. merge repeated separators and resolve "." / ".." lexically
    4. discard the trailing separator

    Example:
        >>> normalize("a//b/./c/../d/")
        'a/b/d'
    """
    text = _text(path)
    if remove_quotes:
        text = text.replace('"', "")
    text = text.replace("\\", "/")
    if not text:
        return ""
    return posixpath.normpath(text)


def path_join(*parts: PathLike) -> str:
    """Concatenate path parts with the platform separator.

    Example:
        >>> path_join("/data", "logs", "a.txt")
        '/data/logs/a.txt'
    """
    if not parts:
        return ""
    return os.path.join(*(_text(p) for p in parts))


def path_parent(path: PathLike) -> str:
    """Return the path without its final segment.

    Example:
        >>> path_parent("/path/to/file.txt")
        '/path/to'
    """
    text = _text(path)
    return os.path.dirname(text.rstrip("/\\") or text)


def parent_name(path: PathLike) -> str:
    """Return the name of the directory containing the final segment.

    Example:
        >>> parent_name("/path/to/file.txt")
        'to'
    """
    return path_segment(path_parent(path))


def path_segment(path: PathLike) -> str:
    """Return the final segment (file name with extension).

    A trailing separator is ignored, so "/path/to/" yields "to".
    """
    text = _text(path)
    stripped = text.rstrip("/\\")
    if not stripped:
        return ""
    return os.path.basename(stripped)


def path_stem(path: PathLike) -> str:
    """Return the final segment without its extension.

    Example:
        >>> path_stem("/path/to/file.txt")
        'file'
    """
    segment = path_segment(path)
    if not segment:
        return ""
    return PurePosixPath(segment).stem


def path_extension(path: PathLike) -> str:
    """Return the extension of the final segment, including the dot.

    Example:
        >>> path_extension("/path/to/file.txt")
        '.txt'
    """
    segment = path_segment(path)
    if not segment:
        return ""
    return PurePosixPath(segment).suffix


def change_stem(path: PathLike, new_stem: str) -> str:
    """Replace the stem of the final segment, keeping its extension.

    Example:
        >>> change_stem("/path/to/old.dat", "new")
        '/path/to/new.dat'
    """
    return path_join(path_parent(path), new_stem + path_extension(path))


def is_absolute(path: PathLike) -> bool:
    return os.path.isabs(_text(path))


def is_relative(path: PathLike) -> bool:
    return not is_absolute(path)


def absolute(path: PathLike) -> str:
    return os.path.abspath(_text(path))


def relative(path: PathLike, base: PathLike | None = None) -> str:
    """Return path relative to base (default: the current directory)."""
    return os.path.relpath(_text(path), _text(base) if base is not None else os.getcwd())


def is_equal_path(path1: PathLike, path2: PathLike) -> bool:
    """Check whether two paths name the same location, lexically."""
    return normalize(absolute(path1)) == normalize(absolute(path2))


def is_sub_path(path: PathLike, base: PathLike) -> bool:
    """Check whether path lies inside base (or is base itself)."""
    candidate = Path(normalize(absolute(path)))
    root = Path(normalize(absolute(base)))
    return candidate == root or root in candidate.parents


def quote_path(path: PathLike) -> str:
    return f'"{_text(path)}"'
