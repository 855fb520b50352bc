from __future__ import annotations

import argparse
import logging
import sys
from typing import Any, Callable, Sequence

from cli.prompt_render import format_answer
from cli.runner import PromptSession, TuiUnavailableError
from config.path_prompt_config import PromptConfig
from inout.local_filesystem import LocalFilesystem
from interfaces.filesystem import Filesystem

LOG_LEVELS = ("debug", "info", "warning", "error")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="pathprompt",
        description="Ask for one or more filesystem paths with zsh-like tab completion.",
    )
    parser.add_argument("--cwd", default=None, help="Directory completion starts from (default: current directory).")
    parser.add_argument("--message", default="Enter a path")
    parser.add_argument("--multi", action="store_true", help="Collect paths until Ctrl+C.")
    parser.add_argument("--directory-only", action="store_true", help="Only complete directories.")
    parser.add_argument("--must-exist", action="store_true", help="Reject paths that do not exist.")
    parser.add_argument("--plain", action="store_true", help="Line-based prompt without tab completion.")
    parser.add_argument("--log-level", choices=LOG_LEVELS, default="warning")
    return parser


def must_exist(filesystem: Filesystem) -> Callable[[str, list[Any]], bool | str]:
    def _validate(value: str, _answers: list[Any]) -> bool | str:
        return True if filesystem.exists(value) else "The path does not exist"

    return _validate


def build_config(args: argparse.Namespace, filesystem: Filesystem) -> PromptConfig:
    options: dict[str, Any] = {
        "message": args.message,
        "cwd": args.cwd or ".",
        "multi": args.multi,
        "directory_only": args.directory_only,
    }
    if args.must_exist:
        options["validator"] = must_exist(filesystem)
    return PromptConfig(**options)


def main(argv: Sequence[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(list(argv) if argv is not None else None)

    logging.basicConfig(
        level=getattr(logging, args.log_level.upper()),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
        stream=sys.stderr,
    )

    filesystem = LocalFilesystem()
    session = PromptSession(plain=args.plain, filesystem=filesystem)

    try:
        config = build_config(args, filesystem)
        answer = session.ask(config)
    except KeyboardInterrupt:
        print()
        return 130
    except (ValueError, TuiUnavailableError) as exc:
        print(f"Error: {exc}")
        return 1

    for line in format_answer(answer):
        print(line)
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
