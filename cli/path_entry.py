from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import TYPE_CHECKING

from cli.path_strings import SEP, basename, dirname, join

if TYPE_CHECKING:
    from interfaces.filesystem import Filesystem


class PathKind(str, Enum):
    DIRECTORY = "directory"
    FILE = "file"


@dataclass(frozen=True, slots=True, eq=False)
class PathEntry:
    """
    A file or directory reference built from a path string.

    The kind comes from the string alone: a trailing separator means a
    directory. Entries compare by identity, two entries with the same path
    are still distinct.
    """

    path: str
    kind: PathKind
    name: str
    parent_directory: str

    @staticmethod
    def from_parts(*parts: str) -> "PathEntry":
        path = join(*parts)
        kind = PathKind.DIRECTORY if path.endswith(SEP) else PathKind.FILE
        return PathEntry(
            path=path,
            kind=kind,
            name=basename(path),
            parent_directory=dirname(path),
        )

    def is_directory(self) -> bool:
        return self.kind is PathKind.DIRECTORY

    def is_file(self) -> bool:
        return self.kind is PathKind.FILE

    @property
    def deepest_directory(self) -> str:
        """The entry itself for a directory, otherwise its parent."""
        return self.path if self.is_directory() else self.parent_directory

    def exists(self, filesystem: "Filesystem") -> bool:
        return filesystem.exists(self.path)

    def __repr__(self) -> str:
        return f"PathEntry({self.path!r}, kind={self.kind.value})"
