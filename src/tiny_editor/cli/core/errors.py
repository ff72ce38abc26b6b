"""Terminal failures that end the session."""

from __future__ import annotations

from typing import Optional


class TerminalError(Exception):
    """
    A terminal operation failed and the session cannot continue.

    Carries the name of the failing operation so the diagnostic reads
    like ``tcsetattr: Inappropriate ioctl for device``.
    """

    def __init__(self, operation: str, cause: Optional[BaseException] = None) -> None:
        self.operation = operation
        self.cause = cause
        super().__init__(self.describe())

    @property
    def reason(self) -> str:
        if self.cause is None:
            return "failed"
        if isinstance(self.cause, OSError) and self.cause.strerror:
            return self.cause.strerror
        # termios.error carries (errno, message) without being an OSError
        args = self.cause.args
        if len(args) == 2 and isinstance(args[1], str):
            return args[1]
        return str(self.cause) or type(self.cause).__name__

    def describe(self) -> str:
        return f"{self.operation}: {self.reason}"


class WindowSizeError(TerminalError):
    """Neither the size query nor the cursor probe produced a size."""


class PositionReportError(TerminalError):
    """The terminal's cursor position report was missing or malformed."""
