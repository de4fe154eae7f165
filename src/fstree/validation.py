"""Name validation shared by FileNode and DirNode."""

from __future__ import annotations

from fstree.errors import InvalidNameError

# Characters that may not appear in a file or directory name.
INVALID_NAME_CHARS = frozenset('\\/:*?"<>|')

RESERVED_NAMES = frozenset({".", ".."})


def is_valid_name(name: str) -> bool:
    """Check whether a string is usable as a file or directory name.

    A valid name is non-empty, is not "." or "..", and contains none of
    the characters in INVALID_NAME_CHARS.

    Args:
        name: Candidate name.

    Returns:
        True if the name is valid, False otherwise.

    Example:
        >>> is_valid_name("notes.txt")
        True
        >>> is_valid_name("a/b")
        False
    """
    if not isinstance(name, str) or not name:
        return False
    if name in RESERVED_NAMES:
        return False
    return not any(ch in INVALID_NAME_CHARS for ch in name)


def validate_name(name: str) -> str:
    """Return the name unchanged, or raise if it is invalid.

    Raises:
        InvalidNameError: If is_valid_name() rejects the name.
    """
    if not is_valid_name(name):
        raise InvalidNameError(name)
    return name
