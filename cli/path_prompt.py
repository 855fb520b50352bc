from __future__ import annotations

import asyncio
from dataclasses import dataclass
import inspect
import logging
from typing import Any, Callable, Sequence, TypeVar

from cli.path_autocomplete import PathAutocomplete
from cli.path_entry import PathEntry
from cli.path_strings import strip_separator
from cli.prompt_state import CandidateRow, PromptState, PromptView
from config.path_prompt_config import PromptConfig
from interfaces.filesystem import Filesystem

logger = logging.getLogger(__name__)

TAB_KEY = "tab"
ENTER_KEY = "enter"
RANGE_SIZE = 5
DEFAULT_ERROR_MESSAGE = "Please enter a valid path."

T = TypeVar("T")


@dataclass(frozen=True, slots=True)
class KeyPress:
    name: str
    shift: bool = False
    ctrl: bool = False


def _raise_keyboard_interrupt() -> None:
    raise KeyboardInterrupt


async def _maybe_await(value: Any) -> Any:
    if inspect.isawaitable(value):
        return await value
    return value


def slice_around(items: Sequence[T], index: int, size: int) -> list[T]:
    """
    Up to `size` items with items[index] kept inside the window. An index of
    -1 yields the head of the sequence.
    """
    length = len(items)
    low = index - size // 2
    high = index + (size + 1) // 2
    if low < 0:
        high = min(length, high - low)
        low = 0
    elif high >= length:
        low = max(0, low - (high - length))
        high = length
    return list(items[low:high])


class PathPrompt:
    """
    Interaction state machine for a path question.

    Hosts feed it key presses, submissions and interrupts from a single
    asyncio loop and draw the PromptView handed to `render`. The only
    asynchronous step is validation, at most one at a time.
    """

    def __init__(
        self,
        config: PromptConfig,
        *,
        render: Callable[[PromptView], None] | None = None,
        on_interrupt: Callable[[], None] | None = None,
        filesystem: Filesystem | None = None,
    ) -> None:
        config.validate()
        self.config = config
        self.shell = PathAutocomplete(
            config.working_directory(),
            config.directory_only,
            filesystem=filesystem,
        )
        self.state = PromptState(multi=config.multi)
        self.line = ""
        self._render_fn = render or (lambda _view: None)
        self._interrupt_fallback = on_interrupt or _raise_keyboard_interrupt
        self._validation_task: asyncio.Task[None] | None = None
        self._done: asyncio.Future[Any] | None = None

    def start(self) -> asyncio.Future[Any]:
        """Render the first frame; the returned future holds the final answer."""
        if self._done is None:
            self._done = asyncio.get_running_loop().create_future()
            self._render()
        return self._done

    def result(self) -> Any:
        return self.state.result()

    async def settled(self) -> None:
        """Wait for the in-flight validation, if any."""
        task = self._validation_task
        if task is not None:
            await task

    def submission_value(self) -> str:
        return strip_separator(self.shell.input_reference.path)

    def on_edit(self, line: str) -> None:
        self.on_keypress(KeyPress(name=""), line)

    def on_keypress(self, key: KeyPress, line: str = "") -> None:
        if self.state.terminated:
            return

        if key.name == TAB_KEY:
            self._complete(forward=not key.shift)
        elif key.name == ENTER_KEY:
            if not (self.state.selection_active and self.shell.has_selection()):
                self.submit(line)
                return
            self.shell.set_input_path(self._selected())
            self.state.selection_active = False
        else:
            self.state.selection_active = False
            self.shell.set_input_path(line)

        # Drop whatever the host appended for the action key itself.
        self.line = self.shell.get_input_path(include_selection=True)
        self._render()

    def submit(self, line: str | None = None) -> bool:
        """
        Start validating the current input. Ignored while a candidate is
        selected, while another validation runs, and after termination.
        """
        if self.state.terminated or self.state.validating or self.shell.has_selection():
            return False
        if line is not None:
            self.shell.set_input_path(line)
            self.line = self.shell.get_input_path()

        value = self.submission_value()
        self.state.validating = True
        self._validation_task = asyncio.get_running_loop().create_task(self._run_validation(value))
        return True

    def interrupt(self) -> None:
        if self.state.terminated:
            return
        if self.shell.has_selection():
            self.state.selection_active = False
            self.shell.reset_selection()
            self.line = self.shell.get_input_path(include_selection=True)
            self._render()
        elif self.config.multi:
            logger.debug("Interrupted with %d answer(s) collected", len(self.state.answers))
            self.line = ""
            self._finish()
        else:
            self._interrupt_fallback()

    def _complete(self, *, forward: bool) -> None:
        self.shell.refresh()
        if self.shell.has_common_candidate():
            self.state.selection_active = False
            common = self.shell.common_candidate
            assert common is not None
            self.shell.set_input_path(common)
        elif not self.state.selection_active:
            self.state.selection_active = True
        else:
            self.shell.select_next(forward)

    def _selected(self) -> PathEntry:
        selected = self.shell.selected_entry()
        assert selected is not None
        return selected

    async def _run_validation(self, value: str) -> None:
        try:
            try:
                outcome = await _maybe_await(self.config.validator(value, list(self.state.answers)))
            except Exception as exc:
                logger.debug("Validator failed for %r", value, exc_info=True)
                outcome = str(exc) or DEFAULT_ERROR_MESSAGE

            if self.state.terminated:
                logger.debug("Dropping validation result for %r after termination", value)
                return
            if outcome is True:
                await self._on_success(value)
            else:
                self._on_error(outcome)
        finally:
            self.state.validating = False
            self._validation_task = None

    async def _on_success(self, value: str) -> None:
        try:
            filtered = await _maybe_await(self.config.filter(value))
        except Exception as exc:
            logger.debug("Filter failed for %r", value, exc_info=True)
            self._on_error(str(exc) or DEFAULT_ERROR_MESSAGE)
            return
        if self.state.terminated:
            return

        logger.debug("Accepted %r", filtered)
        self.state.last_error = None
        self._render(final_answer=filtered)

        if self.config.multi:
            self.shell.set_input_path("")
            self.shell.reset_selection()
            self.state.selection_active = False
            self.state.answers.append(filtered)
            self.line = ""
            self._render()
        else:
            self.state.answer = filtered
            self._finish()

    def _on_error(self, outcome: Any) -> None:
        message = outcome if isinstance(outcome, str) and outcome else DEFAULT_ERROR_MESSAGE
        logger.debug("Rejected input %r: %s", self.shell.get_input_path(), message)
        self.state.last_error = message
        self.line = self.shell.get_input_path(include_selection=True)
        self._render(error=message)

    def _finish(self) -> None:
        self.state.terminated = True
        result = self.state.result()
        if self._done is not None and not self._done.done():
            self._done.set_result(result)

    def _candidate_rows(self) -> tuple[CandidateRow, ...]:
        if not self.state.selection_active:
            return ()
        self.shell.refresh()
        candidates = self.shell.candidates
        selected = self.shell.selected_entry()
        index = candidates.index(selected) if selected is not None else -1
        return tuple(
            CandidateRow(
                name=entry.name,
                is_directory=entry.is_directory(),
                selected=entry is selected,
            )
            for entry in slice_around(candidates, index, RANGE_SIZE)
        )

    def build_view(self, *, final_answer: Any = None, error: str | None = None) -> PromptView:
        return PromptView(
            message=self.config.message,
            default=self.shell.working_directory.name,
            line=self.line,
            candidates=() if final_answer is not None else self._candidate_rows(),
            error=error,
            final_answer=final_answer,
        )

    def _render(self, *, final_answer: Any = None, error: str | None = None) -> None:
        self._render_fn(self.build_view(final_answer=final_answer, error=error))
