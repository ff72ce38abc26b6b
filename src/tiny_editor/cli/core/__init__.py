"""Core TUI infrastructure - terminal I/O, input decoding, frame buffering."""

from tiny_editor.cli.core.buffer import RenderBuffer
from tiny_editor.cli.core.errors import PositionReportError, TerminalError, WindowSizeError
from tiny_editor.cli.core.input import DecoderState, KeyDecoder
from tiny_editor.cli.core.terminal import (
    TerminalConfiguration,
    TerminalIO,
    TerminalModeController,
    WindowSizeProbe,
)
from tiny_editor.core.keys import Key, KeyEvent

__all__ = [
    "RenderBuffer",
    "TerminalError",
    "WindowSizeError",
    "PositionReportError",
    "DecoderState",
    "Key",
    "KeyDecoder",
    "KeyEvent",
    "TerminalConfiguration",
    "TerminalIO",
    "TerminalModeController",
    "WindowSizeProbe",
]
