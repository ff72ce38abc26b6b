"""
tiny-editor: raw-mode terminal screen driver

Puts the terminal into raw mode, decodes key sequences, tracks a
screen-bounded cursor and redraws the whole screen each iteration.

Quick Start:
    >>> from tiny_editor import EditorApp
    >>> EditorApp().run()   # q or Esc quits

Features:
    - Raw mode entered once and always restored, even on fatal errors
    - Arrow, Home/End, PageUp/PageDown and Delete key decoding
    - Window size from the device, or from a cursor position probe
    - One buffered write per frame
    - Key inspector that prints raw key codes
"""

__version__ = "0.0.1"

from tiny_editor.cli.core.errors import TerminalError
from tiny_editor.cli.core.input import KeyDecoder
from tiny_editor.cli.core.terminal import TerminalIO, TerminalModeController, WindowSizeProbe
from tiny_editor.cli.studio.editor import EditorApp, LoopState
from tiny_editor.cli.studio.inspector import KeyInspector
from tiny_editor.config import EditorConfig
from tiny_editor.core.cursor import EditorState, move_cursor
from tiny_editor.core.keys import Key, KeyEvent

__all__ = [
    # Version
    "__version__",
    # Session
    "EditorApp",
    "EditorConfig",
    "KeyInspector",
    "LoopState",
    # State
    "EditorState",
    "move_cursor",
    # Terminal
    "TerminalError",
    "TerminalIO",
    "TerminalModeController",
    "WindowSizeProbe",
    # Input
    "Key",
    "KeyDecoder",
    "KeyEvent",
]
