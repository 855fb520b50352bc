from __future__ import annotations

import asyncio
from typing import Any

from cli.path_prompt import ENTER_KEY, TAB_KEY, KeyPress, PathPrompt
from cli.prompt_render import markup_answer, markup_candidates, markup_error, markup_question
from cli.prompt_state import PromptView
from config.path_prompt_config import PromptConfig
from interfaces.filesystem import Filesystem

try:
    from textual.app import App, ComposeResult
    from textual.binding import Binding
    from textual.containers import Horizontal, Vertical
    from textual.widgets import Input, Static
except Exception:  # pragma: no cover - exercised in runtime environments without textual.
    App = object  # type: ignore[assignment]
    ComposeResult = object  # type: ignore[assignment]
    Binding = object  # type: ignore[assignment]
    Horizontal = object  # type: ignore[assignment]
    Vertical = object  # type: ignore[assignment]
    Input = object  # type: ignore[assignment]
    Static = object  # type: ignore[assignment]
    TEXTUAL_AVAILABLE = False
else:
    TEXTUAL_AVAILABLE = True

INTERRUPTED_RETURN_CODE = 130


if TEXTUAL_AVAILABLE:

    class PathPromptApp(App[Any]):
        CSS = """
        Screen {
            height: auto;
        }
        #root {
            layout: vertical;
            height: auto;
        }
        #answers {
            height: auto;
        }
        #prompt-row {
            height: 1;
        }
        #question {
            width: auto;
        }
        #path {
            border: none;
            height: 1;
            padding: 0;
            width: 1fr;
        }
        #completion {
            height: auto;
            display: none;
        }
        #error {
            height: auto;
            display: none;
        }
        """

        BINDINGS = [
            Binding("tab", "complete_next", "Complete", priority=True, show=False),
            Binding("shift+tab", "complete_previous", "Complete Back", priority=True, show=False),
            Binding("ctrl+c", "interrupt", "Interrupt", priority=True, show=False),
        ]

        def __init__(self, config: PromptConfig, *, filesystem: Filesystem | None = None) -> None:
            super().__init__()
            self.prompt = PathPrompt(
                config,
                render=self._render_view,
                on_interrupt=self._forward_interrupt,
                filesystem=filesystem,
            )
            self._synced_line = ""
            self._committed: list[str] = []

        def compose(self) -> ComposeResult:
            with Vertical(id="root"):
                yield Static(id="answers")
                with Horizontal(id="prompt-row"):
                    yield Static(id="question")
                    yield Input(id="path")
                yield Static(id="completion")
                yield Static(id="error")

        def on_mount(self) -> None:
            done = self.prompt.start()
            done.add_done_callback(self._on_done)
            self.query_one("#path", Input).focus()

        def action_complete_next(self) -> None:
            self.prompt.on_keypress(KeyPress(name=TAB_KEY), self._current_line())

        def action_complete_previous(self) -> None:
            self.prompt.on_keypress(KeyPress(name=TAB_KEY, shift=True), self._current_line())

        def action_interrupt(self) -> None:
            self.prompt.interrupt()

        def on_input_changed(self, event: Input.Changed) -> None:
            value = event.value or ""
            # Echo of a value pushed by _render_view.
            if value == self._synced_line:
                return
            self.prompt.on_edit(value)

        def on_input_submitted(self, event: Input.Submitted) -> None:
            self.prompt.on_keypress(KeyPress(name=ENTER_KEY), event.value or "")

        def _current_line(self) -> str:
            return self.query_one("#path", Input).value or ""

        def _forward_interrupt(self) -> None:
            self.exit(None, return_code=INTERRUPTED_RETURN_CODE)

        def _on_done(self, future: asyncio.Future[Any]) -> None:
            if future.cancelled():
                return
            self.exit(future.result())

        def _render_view(self, view: PromptView) -> None:
            path_input = self.query_one("#path", Input)
            self._synced_line = view.line
            if path_input.value != view.line:
                path_input.value = view.line
            path_input.cursor_position = view.cursor

            self.query_one("#question", Static).update(markup_question(view))

            if view.is_final and self.prompt.config.multi:
                self._committed.append(markup_answer(view))
                self.query_one("#answers", Static).update("\n".join(self._committed))

            completion = self.query_one("#completion", Static)
            if view.candidates:
                completion.update(markup_candidates(view))
                completion.styles.display = "block"
            else:
                completion.update("")
                completion.styles.display = "none"

            error = self.query_one("#error", Static)
            if view.error is not None:
                error.update(markup_error(view.error))
                error.styles.display = "block"
            else:
                error.update("")
                error.styles.display = "none"


def run_tui(config: PromptConfig, *, filesystem: Filesystem | None = None) -> tuple[Any, int]:
    """Run the prompt inline; returns (answer, return code)."""
    app = PathPromptApp(config, filesystem=filesystem)
    answer = app.run(inline=True)
    return answer, app.return_code or 0
