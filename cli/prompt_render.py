from __future__ import annotations

from typing import Any

from rich.markup import escape

from cli.path_strings import SEP
from cli.prompt_state import CandidateRow, PromptView
from utils.terminal_ui import Color, paint


def render_question(view: PromptView, *, color: bool = True) -> str:
    question = f"{paint('?', Color.GREEN, enabled=color)} {paint(view.message, Color.BOLD, enabled=color)} "
    if view.default:
        question += paint(f"({view.default}) ", Color.DIM, enabled=color)
    return question


def render_message(view: PromptView, *, color: bool = True) -> str:
    message = render_question(view, color=color)
    if view.is_final:
        return message + paint(str(view.final_answer), Color.CYAN, enabled=color)
    return message + view.line


def render_candidate(row: CandidateRow, *, color: bool = True) -> str:
    suffix = SEP if row.is_directory else ""
    if row.selected:
        return paint(row.name + suffix, Color.REVERSE, enabled=color)
    return paint(row.name, Color.RED if row.is_directory else Color.GREEN, enabled=color) + suffix


def render_bottom(view: PromptView, *, color: bool = True) -> str:
    if view.is_final:
        return ""
    if view.error is not None:
        return render_error(view.error, color=color)
    return "\n".join(render_candidate(row, color=color) for row in view.candidates)


def render_error(message: str, *, color: bool = True) -> str:
    return paint(">> ", Color.RED, enabled=color) + message


def render_view(view: PromptView, *, color: bool = True) -> str:
    bottom = render_bottom(view, color=color)
    message = render_message(view, color=color)
    return f"{message}\n{bottom}" if bottom else message


# Textual markup flavour of the same layout.


def markup_question(view: PromptView) -> str:
    question = f"[green]?[/] [b]{escape(view.message)}[/b] "
    if view.default:
        question += f"[dim]({escape(view.default)})[/dim] "
    return question


def markup_answer(view: PromptView) -> str:
    return markup_question(view) + f"[cyan]{escape(str(view.final_answer))}[/cyan]"


def markup_candidates(view: PromptView) -> str:
    lines: list[str] = []
    for row in view.candidates:
        suffix = SEP if row.is_directory else ""
        name = escape(row.name)
        if row.selected:
            lines.append(f"[reverse]{name}{escape(suffix)}[/reverse]")
        elif row.is_directory:
            lines.append(f"[red]{name}[/red]{escape(suffix)}")
        else:
            lines.append(f"[green]{name}[/green]")
    return "\n".join(lines)


def markup_error(message: str) -> str:
    return f"[red]>>[/red] {escape(message)}"


def format_answer(answer: Any) -> list[str]:
    if answer is None:
        return []
    if isinstance(answer, list):
        return [str(item) for item in answer]
    return [str(answer)]
