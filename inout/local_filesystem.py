from __future__ import annotations

from dataclasses import dataclass
import os
from pathlib import Path


@dataclass(frozen=True, slots=True)
class LocalFilesystem:
    """
    Filesystem access backed by the local disk.

    Existence means "readable by the current user", so unreadable entries are
    reported as missing.
    """

    def exists(self, path: str) -> bool:
        return bool(path) and os.access(path, os.R_OK)

    def is_directory(self, path: str) -> bool:
        return self.exists(path) and Path(path).is_dir()

    def is_file(self, path: str) -> bool:
        return self.exists(path) and Path(path).is_file()

    def list_directory(self, path: str) -> list[str]:
        return os.listdir(path)
