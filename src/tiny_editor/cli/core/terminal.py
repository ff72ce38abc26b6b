"""Low-level terminal operations - raw mode, byte I/O and size probing."""

from __future__ import annotations

import atexit
import logging
import os
import sys
import termios
from contextlib import contextmanager
from dataclasses import dataclass, replace
from tty import CC, CFLAG, IFLAG, LFLAG, OFLAG
from typing import Callable, Iterator, Optional, Union

from tiny_editor.cli.core.errors import TerminalError, WindowSizeError
from tiny_editor.cli.core.input import KeyDecoder
from tiny_editor.core.constants import (
    CLEAR_SCREEN,
    CURSOR_FAR_DOWN,
    CURSOR_FAR_RIGHT,
    CURSOR_HOME,
    DEFAULT_READ_TIMEOUT,
)

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class TerminalConfiguration:
    """Immutable snapshot of the line-discipline settings (termios attrs)."""
    iflag: int
    oflag: int
    cflag: int
    lflag: int
    ispeed: int
    ospeed: int
    cc: tuple

    @classmethod
    def from_attrs(cls, attrs: list) -> TerminalConfiguration:
        return cls(
            iflag=attrs[IFLAG],
            oflag=attrs[OFLAG],
            cflag=attrs[CFLAG],
            lflag=attrs[LFLAG],
            ispeed=attrs[4],
            ospeed=attrs[5],
            cc=tuple(attrs[CC]),
        )

    def to_attrs(self) -> list:
        """Return the list shape expected by ``termios.tcsetattr``."""
        return [
            self.iflag,
            self.oflag,
            self.cflag,
            self.lflag,
            self.ispeed,
            self.ospeed,
            list(self.cc),
        ]

    def raw(self, timeout: int = DEFAULT_READ_TIMEOUT) -> TerminalConfiguration:
        """
        Derive the raw-mode variant of this configuration.

        Input arrives byte by byte, unechoed and untranslated; Ctrl-C and
        Ctrl-Z become ordinary bytes. Reads return after at most
        ``timeout`` tenths of a second, possibly with no data.
        """
        cc = list(self.cc)
        cc[termios.VMIN] = 0
        cc[termios.VTIME] = timeout
        return replace(
            self,
            iflag=self.iflag & ~(
                termios.BRKINT | termios.ICRNL | termios.INPCK | termios.ISTRIP | termios.IXON
            ),
            oflag=self.oflag & ~termios.OPOST,
            cflag=self.cflag | termios.CS8,
            lflag=self.lflag & ~(termios.ECHO | termios.ICANON | termios.IEXTEN | termios.ISIG),
            cc=tuple(cc),
        )


class TerminalIO:
    """Unbuffered byte I/O on the terminal file descriptors."""

    def __init__(self, stdin_fd: Optional[int] = None, stdout_fd: Optional[int] = None) -> None:
        self.stdin_fd = sys.stdin.fileno() if stdin_fd is None else stdin_fd
        self.stdout_fd = sys.stdout.fileno() if stdout_fd is None else stdout_fd

    def read_byte(self) -> Optional[int]:
        """Read one byte; None when the read timed out with no data."""
        try:
            data = os.read(self.stdin_fd, 1)
        except BlockingIOError:
            return None
        except OSError as exc:
            raise TerminalError("read", exc) from exc
        if not data:
            return None
        return data[0]

    def write(self, data: Union[bytes, str], operation: str = "write") -> None:
        """Write everything in one call; a short write is a failure."""
        if isinstance(data, str):
            data = data.encode("utf-8")
        try:
            written = os.write(self.stdout_fd, data)
        except OSError as exc:
            raise TerminalError(operation, exc) from exc
        if written != len(data):
            raise TerminalError(operation)

    def clear_screen(self) -> None:
        """Clear screen and move cursor to home."""
        self.write(CLEAR_SCREEN + CURSOR_HOME)


class TerminalModeController:
    """
    Owns the one raw-mode transition of a session.

    The captured configuration is restored exactly once: either when the
    ``raw_mode()`` block exits, or by the interpreter-exit hook when the
    process leaves without unwinding through it.
    """

    def __init__(self, fd: Optional[int] = None, timeout: int = DEFAULT_READ_TIMEOUT) -> None:
        self.fd = sys.stdin.fileno() if fd is None else fd
        self.timeout = timeout
        self._saved: Optional[TerminalConfiguration] = None
        self._raw_active = False

    @property
    def saved(self) -> Optional[TerminalConfiguration]:
        """The configuration captured at start, restored on exit."""
        return self._saved

    @property
    def raw_active(self) -> bool:
        return self._raw_active

    def capture_current_settings(self) -> TerminalConfiguration:
        """Snapshot the terminal's current settings."""
        try:
            attrs = termios.tcgetattr(self.fd)
        except termios.error as exc:
            raise TerminalError("tcgetattr", exc) from exc
        self._saved = TerminalConfiguration.from_attrs(attrs)
        return self._saved

    def enter_raw_mode(self) -> None:
        """Apply the raw variant of the captured settings."""
        if self._saved is None:
            raise RuntimeError("capture_current_settings() must run before enter_raw_mode()")
        if self._raw_active:
            raise RuntimeError("raw mode is already active")

        atexit.register(self.restore_settings)
        raw = self._saved.raw(self.timeout)
        try:
            termios.tcsetattr(self.fd, termios.TCSAFLUSH, raw.to_attrs())
        except termios.error as exc:
            atexit.unregister(self.restore_settings)
            raise TerminalError("tcsetattr", exc) from exc
        self._raw_active = True
        logger.debug("raw mode entered on fd %d (timeout %d ds)", self.fd, self.timeout)

    def restore_settings(self) -> None:
        """Reapply the captured settings. Safe to call more than once."""
        if not self._raw_active or self._saved is None:
            return
        try:
            termios.tcsetattr(self.fd, termios.TCSAFLUSH, self._saved.to_attrs())
        except termios.error as exc:
            raise TerminalError("tcsetattr", exc) from exc
        self._raw_active = False
        atexit.unregister(self.restore_settings)
        logger.debug("terminal settings restored on fd %d", self.fd)

    @contextmanager
    def raw_mode(self) -> Iterator[TerminalModeController]:
        """Context manager for raw terminal mode; always restores on exit."""
        self.capture_current_settings()
        self.enter_raw_mode()
        try:
            yield self
        finally:
            self.restore_settings()


SizeQuery = Callable[[int], os.terminal_size]


class WindowSizeProbe:
    """Determine the terminal's rows and columns."""

    def __init__(self, io: TerminalIO, size_query: SizeQuery = os.get_terminal_size) -> None:
        self.io = io
        self.size_query = size_query

    def get_window_size(self) -> tuple[int, int]:
        """
        Return ``(rows, cols)``.

        Asks the device directly first. When that fails or reports an
        empty screen, pushes the cursor to the bottom-right corner and
        reads back its position instead.
        """
        try:
            size = self.size_query(self.io.stdout_fd)
        except OSError as exc:
            logger.info("direct size query failed (%s), probing cursor position", exc)
        else:
            if size.columns > 0 and size.lines > 0:
                return size.lines, size.columns
            logger.info(
                "direct size query reported %dx%d, probing cursor position",
                size.columns, size.lines,
            )

        try:
            self.io.write(CURSOR_FAR_RIGHT + CURSOR_FAR_DOWN)
            rows, cols = KeyDecoder(self.io).read_cursor_position(self.io)
        except TerminalError as exc:
            raise WindowSizeError("getWindowSize", exc) from exc
        if rows <= 0 or cols <= 0:
            raise WindowSizeError(
                "getWindowSize", ValueError(f"cursor position reported {cols}x{rows}")
            )
        return rows, cols
