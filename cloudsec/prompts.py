"""Interactive terminal prompts."""

from __future__ import annotations

import getpass
import sys
from typing import Callable, Sequence, TextIO

from cloudsec.base.exceptions import InvalidInputError


class Prompter:
    """Blocking prompts on the controlling terminal.

    ``input_fn`` and ``secret_fn`` default to :func:`input` and
    :func:`getpass.getpass`. Prompt text and hints go to *err* (stderr by
    default) so stdout carries only command results.
    """

    def __init__(
        self,
        input_fn: Callable[[str], str] | None = None,
        secret_fn: Callable[[str], str] | None = None,
        max_attempts: int = 3,
        err: TextIO | None = None,
    ) -> None:
        self._err = err
        self.input_fn = input_fn or self._read_line
        self.secret_fn = secret_fn or getpass.getpass
        self.max_attempts = max_attempts

    @property
    def err(self) -> TextIO:
        return self._err if self._err is not None else sys.stderr

    def _read_line(self, prompt: str) -> str:
        self.err.write(prompt)
        self.err.flush()
        return input()

    def _ask(self, read: Callable[[str], str], message: str, required: bool, what: str) -> str:
        for _ in range(self.max_attempts):
            answer = read(message)
            if answer or not required:
                return answer
            print(f"{what} is required", file=self.err)
        raise InvalidInputError(f"{what} is required")

    def text(self, message: str, default: str | None = None, required: bool = True) -> str:
        """Prompt for a line of text; an empty answer takes *default*."""
        suffix = f" [{default}]" if default else ""

        def read(msg: str) -> str:
            return self.input_fn(f"{msg}{suffix}: ").strip() or (default or "")

        return self._ask(read, message, required, message.rstrip(":"))

    def secret(self, message: str) -> str:
        """Prompt for a non-empty value without echoing it."""
        return self._ask(lambda msg: self.secret_fn(f"{msg}: "), message, True, "Value")

    def confirm(self, message: str, default: bool = False) -> bool:
        hint = "Y/n" if default else "y/N"
        answer = self.input_fn(f"{message} [{hint}]: ").strip().lower()
        if not answer:
            return default
        return answer in ("y", "yes")

    def choice(
        self,
        message: str,
        choices: Sequence[tuple[str, str]],
        default: str | None = None,
        disabled: Sequence[str] = (),
    ) -> str:
        """Pick one of ``(value, label)`` *choices*; values in *disabled* are shown but refused."""
        for index, (value, label) in enumerate(choices, start=1):
            note = " - Not yet implemented" if value in disabled else ""
            print(f"  {index}) {label}{note}", file=self.err)
        values = [value for value, _ in choices]
        for _ in range(self.max_attempts):
            answer = self.text(message, default=default)
            if answer.isdigit() and 1 <= int(answer) <= len(values):
                answer = values[int(answer) - 1]
            if answer in values and answer not in disabled:
                return answer
            print(f"Please choose one of: {', '.join(v for v in values if v not in disabled)}", file=self.err)
        raise InvalidInputError(f"No valid choice for: {message}")
