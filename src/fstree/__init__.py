"""In-memory file and directory trees synchronized with the real filesystem."""

__version__ = "0.1.0"

from fstree.config import TreeOptions
from fstree.context import TreeContext, create_context
from fstree.directory import DirNode
from fstree.errors import (
    FsTreeError,
    InvalidArgumentError,
    InvalidNameError,
    OpenFailedError,
    PathNotFoundError,
)
from fstree.file import FileNode
from fstree.filesystem import RealFileSystem
from fstree.protocols import FileSystem
from fstree.types import WritePolicy
from fstree.validation import is_valid_name

__all__ = [
    "__version__",
    "DirNode",
    "FileNode",
    "FileSystem",
    "FsTreeError",
    "InvalidArgumentError",
    "InvalidNameError",
    "OpenFailedError",
    "PathNotFoundError",
    "RealFileSystem",
    "TreeContext",
    "TreeOptions",
    "WritePolicy",
    "create_context",
    "is_valid_name",
]
