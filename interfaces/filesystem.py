from __future__ import annotations

from typing import Protocol


class Filesystem(Protocol):
    def exists(self, path: str) -> bool:
        ...

    def is_directory(self, path: str) -> bool:
        ...

    def is_file(self, path: str) -> bool:
        ...

    def list_directory(self, path: str) -> list[str]:
        """Child names of a directory. Raises OSError when it cannot be read."""
        ...
