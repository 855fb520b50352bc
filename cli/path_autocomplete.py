from __future__ import annotations

import logging
import os

from cli.path_entry import PathEntry
from cli.path_strings import SEP, append_separator, join, resolve
from inout.local_filesystem import LocalFilesystem
from interfaces.filesystem import Filesystem

logger = logging.getLogger(__name__)


class InvalidWorkingDirectory(ValueError):
    def __init__(self, cwd: str) -> None:
        super().__init__(f"The provided working directory {cwd} does not exist or is not a directory.")
        self.cwd = cwd


class PathAutocomplete:
    """
    Shell-style (zsh-like) completion state for a single path input.

    The input is kept as typed (relative or absolute) and resolved against the
    working directory without collapsing '.' or '..'. Candidates are listed
    lazily: any change to the input marks them stale and refresh() rebuilds
    them on demand.
    """

    def __init__(
        self,
        cwd: str,
        directory_only: bool = False,
        *,
        filesystem: Filesystem | None = None,
    ) -> None:
        self._fs: Filesystem = filesystem or LocalFilesystem()
        if not self._fs.is_directory(cwd):
            raise InvalidWorkingDirectory(cwd)

        self._cwd = PathEntry.from_parts(append_separator(cwd))
        self.directory_only = bool(directory_only)
        self._input_path = ""
        self._input_reference: PathEntry | None = None
        self._candidates: list[PathEntry] | None = None
        self._common_candidate: PathEntry | None = None
        self._selected_index = -1
        self._fresh = False

        self.set_input_path(self._input_path)
        self.refresh()

    @property
    def working_directory(self) -> PathEntry:
        return self._cwd

    @property
    def input_reference(self) -> PathEntry:
        assert self._input_reference is not None
        return self._input_reference

    @property
    def candidates(self) -> list[PathEntry]:
        return list(self._candidates or [])

    @property
    def common_candidate(self) -> PathEntry | None:
        return self._common_candidate

    @property
    def is_fresh(self) -> bool:
        return self._fresh

    def get_input_path(self, include_selection: bool = False) -> str:
        """The typed path, or the selected candidate formatted like it."""
        selected = self.selected_entry()
        if not include_selection or selected is None:
            return self._input_path
        return self._format(selected)

    def set_input_path(self, value: str | PathEntry) -> None:
        input_path = self._format(value) if isinstance(value, PathEntry) else value
        if self._input_reference is not None and input_path == self._input_path:
            return
        self._fresh = False
        self._input_path = input_path
        self._input_reference = PathEntry.from_parts(resolve(self._cwd.path, input_path))
        self._selected_index = -1

    def refresh(self) -> None:
        if self._fresh:
            return
        self._fresh = True
        self._candidates = self._find_candidates()
        self._common_candidate = self.find_common_candidate()
        logger.debug(
            "Refreshed %d candidate(s) for %r",
            len(self._candidates),
            self.input_reference.path,
        )

    def has_selection(self) -> bool:
        return self._selected_index != -1

    def selected_entry(self) -> PathEntry | None:
        if not self.has_selection() or not self._candidates:
            return None
        return self._candidates[self._selected_index]

    def reset_selection(self) -> None:
        self._selected_index = -1

    def select_next(self, forward: bool = True) -> PathEntry | None:
        """Move the selection one step, wrapping around at both ends."""
        if not self._candidates:
            self._selected_index = -1
            return None
        count = len(self._candidates)
        if self._selected_index == -1:
            self._selected_index = 0 if forward else count - 1
        else:
            self._selected_index = (self._selected_index + (1 if forward else -1)) % count
        return self.selected_entry()

    def has_common_candidate(self) -> bool:
        return self._common_candidate is not self._input_reference

    def find_common_candidate(self) -> PathEntry:
        """
        Entry for the longest prefix shared by every candidate name.

        Returns the input reference itself (same object) when there is nothing
        to complete.
        """
        candidates = self._candidates or []
        reference = self.input_reference

        if not candidates:
            return reference
        if len(candidates) == 1:
            return candidates[0]

        # After sorting, the first and last names diverge the earliest.
        names = sorted(candidate.name for candidate in candidates)
        prefix = os.path.commonprefix([names[0], names[-1]])
        if not prefix or prefix == reference.name:
            return reference
        return PathEntry.from_parts(reference.deepest_directory, prefix)

    def _format(self, entry: PathEntry) -> str:
        # Keep whatever directory part the user typed, swap in the entry name.
        head = self._input_path[: self._input_path.rfind(SEP) + 1]
        formatted = head + entry.name
        return formatted + SEP if entry.is_directory() else formatted

    def _find_candidates(self) -> list[PathEntry]:
        reference = self.input_reference
        directory = reference.deepest_directory
        prefix = "" if reference.is_directory() else reference.name

        if not self._fs.is_directory(directory):
            return []
        try:
            names = self._fs.list_directory(directory)
        except OSError as exc:
            logger.debug("Could not list %r: %s", directory, exc)
            return []

        entries: list[PathEntry] = []
        for name in names:
            if not name.startswith(prefix):
                continue
            child = join(directory, name)
            if self._fs.is_directory(child):
                entries.append(PathEntry.from_parts(child + SEP))
            elif not self.directory_only:
                entries.append(PathEntry.from_parts(child))

        entries.sort(key=lambda entry: (not entry.is_directory(), entry.name))
        return entries
