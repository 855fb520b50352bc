from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any


@dataclass
class PromptState:
    multi: bool = False
    answers: list[Any] = field(default_factory=list)
    answer: Any = None
    terminated: bool = False
    selection_active: bool = False
    validating: bool = False
    last_error: str | None = None

    def result(self) -> Any:
        return list(self.answers) if self.multi else self.answer


@dataclass(frozen=True, slots=True)
class CandidateRow:
    name: str
    is_directory: bool
    selected: bool = False


@dataclass(frozen=True, slots=True)
class PromptView:
    """Everything a host needs to draw the prompt once."""

    message: str
    default: str
    line: str
    candidates: tuple[CandidateRow, ...] = ()
    error: str | None = None
    final_answer: Any = None

    @property
    def cursor(self) -> int:
        return len(self.line)

    @property
    def is_final(self) -> bool:
        return self.final_answer is not None
