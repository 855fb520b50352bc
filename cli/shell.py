from __future__ import annotations

import asyncio
import sys
from typing import Any, Callable

from cli.path_prompt import PathPrompt
from cli.prompt_render import render_error, render_message, render_question
from cli.prompt_state import PromptView
from config.path_prompt_config import PromptConfig
from interfaces.filesystem import Filesystem
from utils.terminal_ui import supports_color


class LinePromptShell:
    """
    Asks a path question on a plain line-oriented terminal.

    Every line read is a submission and Ctrl+C is the interrupt; there is no
    tab completion. In single mode Ctrl+C propagates as KeyboardInterrupt.
    """

    def __init__(
        self,
        config: PromptConfig,
        input_fn: Callable[[str], str] = input,
        *,
        color: bool | None = None,
        filesystem: Filesystem | None = None,
    ) -> None:
        self._input = input_fn
        self._color = supports_color(sys.stdout) if color is None else color
        self._last_view: PromptView | None = None
        self.prompt = PathPrompt(config, render=self._render, filesystem=filesystem)

    def run(self) -> Any:
        loop = asyncio.new_event_loop()
        try:
            return loop.run_until_complete(self._run())
        finally:
            loop.close()

    async def _run(self) -> Any:
        self.prompt.start()
        while not self.prompt.state.terminated:
            try:
                line = self._input(self._question())
            except (EOFError, KeyboardInterrupt):
                print()
                self.prompt.interrupt()
                continue

            self.prompt.submit(line or "")
            await self.prompt.settled()
        return self.prompt.result()

    def _question(self) -> str:
        if self._last_view is None:
            return ""
        return render_question(self._last_view, color=self._color)

    def _render(self, view: PromptView) -> None:
        self._last_view = view
        if view.error is not None:
            print(render_error(view.error, color=self._color))
        elif view.is_final and self.prompt.config.multi:
            print(render_message(view, color=self._color))
