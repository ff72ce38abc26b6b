"""Keyboard input decoding with event abstraction."""

from __future__ import annotations

import logging
import re
from enum import Enum, auto
from typing import Optional, Protocol, Union

from tiny_editor.cli.core.errors import PositionReportError
from tiny_editor.core.constants import ESC_BYTE, POSITION_REPORT_LIMIT, REQUEST_CURSOR_POSITION
from tiny_editor.core.keys import Key, KeyEvent

logger = logging.getLogger(__name__)


ESCAPE = KeyEvent.named(Key.ESCAPE)


class ByteSource(Protocol):
    def read_byte(self) -> Optional[int]:
        """Return the next byte, or None if none arrived within the timeout."""
        ...


class ByteSink(Protocol):
    def write(self, data: Union[bytes, str], operation: str = ...) -> None:
        ...


class DecoderState(Enum):
    """Position inside an escape sequence."""
    START = auto()
    SAW_ESCAPE = auto()
    SAW_INTRODUCER = auto()  # ESC followed by '[' or 'O' (or anything else)
    SAW_DIGIT = auto()       # ESC [ <digit>


# ESC [ <letter>
CSI_LETTERS: dict[int, Key] = {
    ord('A'): Key.UP,
    ord('B'): Key.DOWN,
    ord('C'): Key.RIGHT,
    ord('D'): Key.LEFT,
    ord('H'): Key.HOME,
    ord('F'): Key.END,
}

# ESC [ <digit> ~
CSI_TILDE_DIGITS: dict[int, Key] = {
    ord('1'): Key.HOME,
    ord('3'): Key.DELETE,
    ord('4'): Key.END,
    ord('5'): Key.PAGE_UP,
    ord('6'): Key.PAGE_DOWN,
    ord('7'): Key.HOME,
    ord('8'): Key.END,
}

# ESC O <letter>
SS3_LETTERS: dict[int, Key] = {
    ord('H'): Key.HOME,
    ord('F'): Key.END,
}

_POSITION_REPORT = re.compile(rb"\x1b\[\s*(\d+);\s*(\d+)")


class KeyDecoder:
    """
    Turn raw terminal bytes into key events.

    Escape sequences are decoded by a small state machine fed one byte at a
    time. A read that times out in the middle of a sequence resolves it to
    a bare Escape. Bytes of a sequence that turns out to be unknown are
    consumed and dropped; they are not replayed on the next read.
    """

    def __init__(self, source: ByteSource) -> None:
        self._source = source
        self.state = DecoderState.START
        self._introducer: Optional[int] = None
        self._digit: Optional[int] = None

    def read_key(self) -> KeyEvent:
        """Block until one complete key event has been read."""
        self._reset()
        byte = self._source.read_byte()
        while byte is None:
            byte = self._source.read_byte()

        event = self.feed(byte)
        while event is None:
            event = self.feed(self._source.read_byte())
        return event

    def feed(self, byte: Optional[int]) -> Optional[KeyEvent]:
        """
        Advance the state machine by one input.

        ``None`` stands for a read timeout. Returns the decoded event once
        the sequence is resolved, otherwise None.
        """
        state = self.state

        if state is DecoderState.START:
            if byte is None:
                return None
            if byte != ESC_BYTE:
                return KeyEvent.literal(byte)
            self.state = DecoderState.SAW_ESCAPE
            return None

        if byte is None:
            logger.debug("timeout in state %s, resolving to Escape", state.name)
            return self._resolve(ESCAPE)

        if state is DecoderState.SAW_ESCAPE:
            self._introducer = byte
            self.state = DecoderState.SAW_INTRODUCER
            return None

        if state is DecoderState.SAW_INTRODUCER:
            if self._introducer == ord('['):
                if ord('0') <= byte <= ord('9'):
                    self._digit = byte
                    self.state = DecoderState.SAW_DIGIT
                    return None
                return self._resolve_named(CSI_LETTERS.get(byte))
            if self._introducer == ord('O'):
                return self._resolve_named(SS3_LETTERS.get(byte))
            return self._resolve(ESCAPE)

        # SAW_DIGIT
        if byte == ord('~'):
            return self._resolve_named(CSI_TILDE_DIGITS.get(self._digit))
        return self._resolve(ESCAPE)

    def read_cursor_position(self, sink: ByteSink) -> tuple[int, int]:
        """
        Ask the terminal where the cursor is and parse the reply.

        Returns ``(rows, cols)`` as reported (1-indexed).
        """
        sink.write(REQUEST_CURSOR_POSITION, "getCursorPosition")

        reply = bytearray()
        while True:
            byte = self._source.read_byte()
            if byte is None or byte == ord('R'):
                break
            reply.append(byte)
            if len(reply) >= POSITION_REPORT_LIMIT - 1:
                raise PositionReportError(
                    "getCursorPosition",
                    ValueError(f"no report terminator within {POSITION_REPORT_LIMIT} bytes"),
                )

        match = _POSITION_REPORT.match(bytes(reply))
        if match is None:
            raise PositionReportError(
                "getCursorPosition", ValueError(f"malformed position report {bytes(reply)!r}")
            )
        return int(match.group(1)), int(match.group(2))

    def _resolve_named(self, key: Optional[Key]) -> KeyEvent:
        if key is None:
            return self._resolve(ESCAPE)
        return self._resolve(KeyEvent.named(key))

    def _resolve(self, event: KeyEvent) -> KeyEvent:
        self._reset()
        return event

    def _reset(self) -> None:
        self.state = DecoderState.START
        self._introducer = None
        self._digit = None
