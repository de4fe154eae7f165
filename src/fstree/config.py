"""Options controlling how trees are read from and written to disk."""

from __future__ import annotations

import json
from pathlib import Path

from pydantic import BaseModel, ConfigDict, Field

from fstree.errors import PathNotFoundError
from fstree.types import WritePolicy

# Chunk size for buffered reads
DEFAULT_BUFFER_SIZE = 4096


class TreeOptions(BaseModel):
    """Tuning knobs for hydration and writes.

    Attributes:
        buffer_size: Bytes read per chunk when loading file content.
        follow_symlinks: Hydrate symlinked files and directories as if they
            were regular entries. When False they are skipped.
        default_policy: Policy used when a caller passes ``policy=None``.
    """

    model_config = ConfigDict(populate_by_name=True, frozen=True)

    buffer_size: int = Field(default=DEFAULT_BUFFER_SIZE, gt=0, alias="bufferSize")
    follow_symlinks: bool = Field(default=True, alias="followSymlinks")
    default_policy: WritePolicy = Field(default=WritePolicy.SKIP, alias="defaultPolicy")

    @classmethod
    def from_file(cls, path: Path) -> TreeOptions:
        """Load options from a JSON file.

        Args:
            path: Path to the JSON file.

        Returns:
            Parsed TreeOptions.

        Raises:
            PathNotFoundError: If file doesn't exist.
            pydantic.ValidationError: If a value is out of range.
        """
        path = Path(path)
        if not path.is_file():
            raise PathNotFoundError(path, "Options file not found")

        data = json.loads(path.read_text())
        return cls.model_validate(data)

    def resolve_policy(self, policy: WritePolicy | None) -> WritePolicy:
        """Return policy, or default_policy when policy is None."""
        return self.default_policy if policy is None else policy
