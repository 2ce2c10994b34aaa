"""Interactive prompts for the add command.

Prompts only run on an interactive terminal. Without a TTY, confirmations are
auto-accepted and reported through the logger so scripted runs never block.
"""

from __future__ import annotations

import sys
from typing import Callable, Optional, Sequence, Tuple

from .constants import DEFAULT_OUTPUT
from .logging import get_logger

Choice = Tuple[str, str]

logger = get_logger("prompting")


def stdio_is_tty() -> bool:
    return sys.stdin.isatty() and sys.stdout.isatty()


class PromptCancelled(KeyboardInterrupt):
    """Raised when the user aborts a prompt with EOF or Ctrl+C."""


class Prompter:
    """Reads answers from ``input_fn``; interactive only when ``is_tty`` says so."""

    def __init__(
        self,
        input_fn: Callable[[str], str] = input,
        is_tty: Callable[[], bool] = stdio_is_tty,
    ) -> None:
        self._input = input_fn
        self._is_tty = is_tty

    @property
    def interactive(self) -> bool:
        return self._is_tty()

    def ask(self, message: str, *, default: str = "") -> str:
        suffix = f" [{default}]" if default else ""
        try:
            answer = self._input(f"{message}{suffix}: ").strip()
        except (EOFError, KeyboardInterrupt) as exc:
            raise PromptCancelled() from exc
        return answer or default

    def ask_valid(
        self,
        message: str,
        validate: Callable[[str], Optional[str]],
        *,
        default: str = "",
    ) -> str:
        """Repeat ``ask`` until ``validate`` returns None (no error message)."""
        while True:
            answer = self.ask(message, default=default)
            problem = validate(answer)
            if problem is None:
                return answer
            print(f"  {problem}")

    def confirm(self, message: str, *, default: bool = True) -> bool:
        hint = "Y/n" if default else "y/N"
        answer = self.ask(f"{message} ({hint})").lower()
        if not answer:
            return default
        return answer in {"y", "yes"}

    def select(self, message: str, choices: Sequence[Choice]) -> str:
        """Show numbered ``(title, value)`` choices and return the chosen value."""
        print(message)
        for position, (title, _) in enumerate(choices, start=1):
            print(f"  {position}. {title}")

        def _validate(answer: str) -> Optional[str]:
            if answer.isdigit() and 1 <= int(answer) <= len(choices):
                return None
            return f"Enter a number between 1 and {len(choices)}"

        picked = self.ask_valid("Choice", _validate, default="1")
        return choices[int(picked) - 1][1]

    def confirm_or_auto_accept(self, confirm_message: str, auto_message: str) -> bool:
        if self.interactive:
            return self.confirm(confirm_message)
        logger.info(auto_message)
        return True

    def output_file(self) -> str:
        choice = self.select(
            "Target file",
            [(DEFAULT_OUTPUT, DEFAULT_OUTPUT), ("CLAUDE.md", "CLAUDE.md"), ("Custom...", "__custom__")],
        )
        if choice == "__custom__":
            return self.ask("Enter file path", default=DEFAULT_OUTPUT)
        return choice


__all__ = ["Choice", "PromptCancelled", "Prompter", "stdio_is_tty"]
