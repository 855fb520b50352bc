from __future__ import annotations

from dataclasses import dataclass, field
import logging
from typing import Any, Callable, Iterable

from cli.shell import LinePromptShell
from cli.tui_app import INTERRUPTED_RETURN_CODE, TEXTUAL_AVAILABLE, run_tui
from config.path_prompt_config import PromptConfig
from interfaces.filesystem import Filesystem

logger = logging.getLogger(__name__)


class TuiUnavailableError(RuntimeError):
    pass


@dataclass
class PromptSession:
    """
    Asks path questions one after another and keeps the answers by name.

    A question whose `when` is false (or returns false for the answers so far)
    is skipped and leaves no answer.
    """

    plain: bool = False
    input_fn: Callable[[str], str] = input
    filesystem: Filesystem | None = None
    answers: dict[str, Any] = field(default_factory=dict)

    def ask(self, config: PromptConfig) -> Any:
        config.validate()
        if not config.is_enabled(self.answers):
            logger.debug("Skipping question %r", config.name)
            return None

        if self.plain:
            answer = LinePromptShell(config, self.input_fn, filesystem=self.filesystem).run()
        else:
            answer = self._ask_tui(config)

        self.answers[config.name] = answer
        return answer

    def ask_all(self, configs: Iterable[PromptConfig]) -> dict[str, Any]:
        for config in configs:
            self.ask(config)
        return dict(self.answers)

    def _ask_tui(self, config: PromptConfig) -> Any:
        if not TEXTUAL_AVAILABLE:
            raise TuiUnavailableError("textual is not installed. Install it or use --plain.")
        answer, return_code = run_tui(config, filesystem=self.filesystem)
        if return_code == INTERRUPTED_RETURN_CODE:
            raise KeyboardInterrupt
        return answer
