from __future__ import annotations

import os
import tempfile
import unittest
from pathlib import Path
from unittest.mock import Mock

from cli.path_autocomplete import InvalidWorkingDirectory, PathAutocomplete
from cli.path_entry import PathEntry


def _names(entries: list[PathEntry]) -> list[str]:
    return [entry.name + (os.sep if entry.is_directory() else "") for entry in entries]


class PathAutocompleteTests(unittest.TestCase):
    def setUp(self) -> None:
        self._tmp = tempfile.TemporaryDirectory()
        self.root = Path(self._tmp.name)
        (self.root / "a").mkdir()
        (self.root / "ab").mkdir()
        (self.root / "b.txt").write_text("x", encoding="utf-8")
        self.cwd = str(self.root) + os.sep

    def tearDown(self) -> None:
        self._tmp.cleanup()

    def test_rejects_missing_working_directory(self) -> None:
        with self.assertRaises(InvalidWorkingDirectory):
            PathAutocomplete(str(self.root / "missing"))

    def test_rejects_file_as_working_directory(self) -> None:
        with self.assertRaisesRegex(ValueError, "not a directory"):
            PathAutocomplete(str(self.root / "b.txt"))

    def test_working_directory_gets_trailing_separator(self) -> None:
        shell = PathAutocomplete(str(self.root))
        self.assertEqual(shell.working_directory.path, self.cwd)
        self.assertTrue(shell.working_directory.is_directory())

    def test_initial_candidates_sort_directories_first(self) -> None:
        shell = PathAutocomplete(self.cwd)
        self.assertTrue(shell.is_fresh)
        self.assertEqual(_names(shell.candidates), [f"a{os.sep}", f"ab{os.sep}", "b.txt"])

    def test_prefix_filters_candidates(self) -> None:
        shell = PathAutocomplete(self.cwd)
        shell.set_input_path("a")
        shell.refresh()
        self.assertEqual(_names(shell.candidates), [f"a{os.sep}", f"ab{os.sep}"])

    def test_directory_only_drops_files(self) -> None:
        shell = PathAutocomplete(self.cwd, directory_only=True)
        self.assertEqual(_names(shell.candidates), [f"a{os.sep}", f"ab{os.sep}"])

    def test_relative_input_resolves_against_working_directory(self) -> None:
        shell = PathAutocomplete(self.cwd)
        shell.set_input_path("x")
        self.assertEqual(shell.input_reference.path, self.cwd + "x")

    def test_absolute_input_overrides_working_directory(self) -> None:
        shell = PathAutocomplete(self.cwd)
        absolute = str(self.root / "a") + os.sep
        shell.set_input_path(absolute)
        self.assertEqual(shell.input_reference.path, absolute)
        self.assertTrue(shell.input_reference.is_directory())

    def test_dot_segments_are_not_collapsed(self) -> None:
        shell = PathAutocomplete(self.cwd)
        shell.set_input_path(f"a{os.sep}..{os.sep}")
        self.assertEqual(shell.input_reference.path, f"{self.cwd}a{os.sep}..{os.sep}")
        shell.refresh()
        self.assertEqual(_names(shell.candidates), [f"a{os.sep}", f"ab{os.sep}", "b.txt"])

    def test_same_input_twice_keeps_candidates_fresh(self) -> None:
        shell = PathAutocomplete(self.cwd)
        shell.set_input_path("a")
        shell.refresh()
        shell.set_input_path("a")
        self.assertTrue(shell.is_fresh)

    def test_input_change_marks_stale_and_clears_selection(self) -> None:
        shell = PathAutocomplete(self.cwd)
        shell.select_next()
        self.assertTrue(shell.has_selection())
        shell.set_input_path("b")
        self.assertFalse(shell.is_fresh)
        self.assertFalse(shell.has_selection())
        self.assertIsNone(shell.selected_entry())

    def test_refresh_is_skipped_when_fresh(self) -> None:
        filesystem = Mock()
        filesystem.is_directory.side_effect = lambda path: path.endswith(os.sep)
        filesystem.list_directory.return_value = ["one"]
        shell = PathAutocomplete(self.cwd, filesystem=filesystem)
        shell.refresh()
        shell.refresh()
        filesystem.list_directory.assert_called_once_with(self.cwd)

    def test_common_candidate_extends_shared_prefix(self) -> None:
        (self.root / "notes-2023.txt").write_text("x", encoding="utf-8")
        (self.root / "notes-2024.txt").write_text("x", encoding="utf-8")
        shell = PathAutocomplete(self.cwd)
        shell.set_input_path("n")
        shell.refresh()
        self.assertTrue(shell.has_common_candidate())
        common = shell.common_candidate
        assert common is not None
        self.assertEqual(common.name, "notes-202")
        for candidate in shell.candidates:
            self.assertTrue(candidate.name.startswith(common.name))
        extended = {candidate.name[: len(common.name) + 1] for candidate in shell.candidates}
        self.assertGreater(len(extended), 1)

    def test_common_candidate_equal_to_input_is_not_useful(self) -> None:
        shell = PathAutocomplete(self.cwd)
        shell.set_input_path("a")
        shell.refresh()
        self.assertIs(shell.common_candidate, shell.input_reference)
        self.assertFalse(shell.has_common_candidate())

    def test_single_candidate_is_the_common_candidate(self) -> None:
        shell = PathAutocomplete(self.cwd)
        shell.set_input_path("b")
        shell.refresh()
        self.assertTrue(shell.has_common_candidate())
        shell.set_input_path(shell.common_candidate)  # type: ignore[arg-type]
        self.assertEqual(shell.get_input_path(), "b.txt")

    def test_no_candidates_returns_input_reference(self) -> None:
        shell = PathAutocomplete(self.cwd)
        shell.set_input_path("zzz")
        shell.refresh()
        self.assertEqual(shell.candidates, [])
        self.assertIs(shell.common_candidate, shell.input_reference)
        self.assertIsNone(shell.select_next())
        self.assertFalse(shell.has_selection())

    def test_select_next_wraps_in_both_directions(self) -> None:
        shell = PathAutocomplete(self.cwd)
        candidates = shell.candidates
        self.assertIs(shell.select_next(forward=False), candidates[-1])
        shell.reset_selection()
        first = shell.select_next()
        self.assertIs(first, candidates[0])
        for _ in range(len(candidates)):
            shell.select_next()
        self.assertIs(shell.selected_entry(), first)
        shell.select_next()
        shell.select_next(forward=False)
        self.assertIs(shell.selected_entry(), first)

    def test_reset_selection_keeps_candidates(self) -> None:
        shell = PathAutocomplete(self.cwd)
        shell.select_next()
        shell.reset_selection()
        self.assertFalse(shell.has_selection())
        self.assertEqual(len(shell.candidates), 3)

    def test_selection_is_formatted_with_typed_directory(self) -> None:
        (self.root / "a" / "inner").mkdir()
        (self.root / "a" / "item.txt").write_text("x", encoding="utf-8")
        shell = PathAutocomplete(self.cwd)
        shell.set_input_path(f"a{os.sep}i")
        shell.refresh()
        shell.select_next()
        self.assertEqual(shell.get_input_path(), f"a{os.sep}i")
        self.assertEqual(shell.get_input_path(include_selection=True), f"a{os.sep}inner{os.sep}")
        shell.select_next()
        self.assertEqual(shell.get_input_path(include_selection=True), f"a{os.sep}item.txt")

    def test_empty_directory_has_no_candidates(self) -> None:
        (self.root / "empty").mkdir()
        shell = PathAutocomplete(str(self.root / "empty"))
        self.assertEqual(shell.candidates, [])
        self.assertIs(shell.common_candidate, shell.input_reference)

    def test_missing_directory_yields_no_candidates(self) -> None:
        shell = PathAutocomplete(self.cwd)
        shell.set_input_path(f"missing{os.sep}x")
        shell.refresh()
        self.assertEqual(shell.candidates, [])

    def test_listing_error_yields_no_candidates(self) -> None:
        filesystem = Mock()
        filesystem.is_directory.return_value = True
        filesystem.list_directory.side_effect = PermissionError("denied")
        shell = PathAutocomplete(self.cwd, filesystem=filesystem)
        self.assertEqual(shell.candidates, [])


if __name__ == "__main__":
    unittest.main()
