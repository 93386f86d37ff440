"""Output boundary for command results.

Commands write through an :class:`OutputWriter` instead of printing, so a
command can drop known-noisy diagnostic lines for its own duration without
touching the process-wide streams. Result lines are never filtered.
"""

from __future__ import annotations

import sys
from typing import TextIO


class OutputWriter:
    """Writes result lines to *out* and diagnostics to *err*."""

    def __init__(
        self,
        out: TextIO | None = None,
        err: TextIO | None = None,
        suppress: tuple[str, ...] = (),
    ) -> None:
        self._out = out
        self._err = err
        self.suppress = suppress

    @property
    def out(self) -> TextIO:
        return self._out if self._out is not None else sys.stdout

    @property
    def err(self) -> TextIO:
        return self._err if self._err is not None else sys.stderr

    def suppressing(self, *markers: str) -> OutputWriter:
        """Return a writer sharing these streams that also drops diagnostics containing *markers*."""
        return OutputWriter(self._out, self._err, self.suppress + markers)

    def write(self, text: str = "") -> None:
        self.out.write(text + "\n")

    def error(self, text: str) -> None:
        lines = [
            line
            for line in text.split("\n")
            if not any(marker in line for marker in self.suppress)
        ]
        if lines:
            self.err.write("\n".join(lines) + "\n")
