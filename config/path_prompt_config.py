from __future__ import annotations

from dataclasses import dataclass
import os
from typing import Any, Callable, Union

Validator = Callable[[str, list[Any]], Any]
Filter = Callable[[Any], Any]
When = Union[bool, Callable[[dict[str, Any]], bool]]


def accept_any(_value: str, _answers: list[Any]) -> bool:
    return True


def keep_value(value: Any) -> Any:
    return value


@dataclass(frozen=True, slots=True)
class PromptConfig:
    """
    Options for one path question.

    validator(value, answers) returns True, an error message, or False; it may
    also return an awaitable resolving to one of those. filter(value) may be
    async too.
    """

    name: str = "path"
    message: str = "Enter a path"
    cwd: str | None = None
    default: str | None = None
    multi: bool = False
    directory_only: bool = False
    validator: Validator = accept_any
    filter: Filter = keep_value
    when: When = True

    def validate(self) -> None:
        if not isinstance(self.name, str) or not self.name.strip():
            raise ValueError("PromptConfig.name must be a non-empty string.")

        if not isinstance(self.message, str):
            raise ValueError("PromptConfig.message must be a string.")

        for label, value in [("cwd", self.cwd), ("default", self.default)]:
            if value is not None and (not isinstance(value, str) or not value.strip()):
                raise ValueError(f"PromptConfig.{label} must be a non-empty string when provided.")

        if not isinstance(self.multi, bool):
            raise ValueError("PromptConfig.multi must be a boolean.")

        if not isinstance(self.directory_only, bool):
            raise ValueError("PromptConfig.directory_only must be a boolean.")

        if not callable(self.validator):
            raise ValueError("PromptConfig.validator must be callable.")

        if not callable(self.filter):
            raise ValueError("PromptConfig.filter must be callable.")

        if not isinstance(self.when, bool) and not callable(self.when):
            raise ValueError("PromptConfig.when must be a boolean or a callable.")

    def working_directory(self) -> str:
        """
        Directory completion starts from: cwd, then default, then the
        filesystem root. Expands ~ and makes it absolute, symlinks untouched.
        """
        raw = self.cwd or self.default or os.sep
        return os.path.abspath(os.path.expanduser(raw))

    def is_enabled(self, answers: dict[str, Any] | None = None) -> bool:
        if isinstance(self.when, bool):
            return self.when
        return bool(self.when(dict(answers or {})))
