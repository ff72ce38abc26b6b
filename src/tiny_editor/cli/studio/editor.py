"""Interactive full-screen editor session."""

from __future__ import annotations

import logging
from enum import Enum
from typing import Optional

from tiny_editor.cli.core.input import KeyDecoder
from tiny_editor.cli.core.terminal import TerminalIO, TerminalModeController, WindowSizeProbe
from tiny_editor.cli.widgets.screen import ScreenCompositor
from tiny_editor.config import EditorConfig
from tiny_editor.core.constants import EXIT_MESSAGE
from tiny_editor.core.cursor import EditorState, move_cursor
from tiny_editor.core.keys import Key, KeyEvent

logger = logging.getLogger(__name__)


class LoopState(Enum):
    """Lifecycle of the editor loop."""
    INITIALIZING = "initializing"
    RUNNING = "running"
    EXITING = "exiting"


class EditorApp:
    """
    Raw-mode editor screen.

    Simple design:
    - Every iteration redraws the whole screen, then waits for one key
    - Arrows, Home/End and PageUp/PageDown move the cursor
    - q or Escape clears the screen and quits
    """

    def __init__(
        self,
        config: Optional[EditorConfig] = None,
        io: Optional[TerminalIO] = None,
        controller: Optional[TerminalModeController] = None,
        size_probe: Optional[WindowSizeProbe] = None,
    ) -> None:
        self.config = config or EditorConfig()
        self.io = io or TerminalIO()
        self.controller = controller or TerminalModeController(
            self.io.stdin_fd, self.config.read_timeout
        )
        self.size_probe = size_probe or WindowSizeProbe(self.io)
        self.decoder = KeyDecoder(self.io)
        self.compositor = ScreenCompositor(self.config.banner)

        self.loop_state = LoopState.INITIALIZING
        self.state: Optional[EditorState] = None

    def run(self) -> int:
        """Main application loop. Returns the process exit status."""
        with self.controller.raw_mode():
            self._initialize()
            while self.loop_state is LoopState.RUNNING:
                self.compositor.render_frame(self.state, self.io)
                self.step(self.decoder.read_key())
            self.controller.restore_settings()

        self.io.write(f"{EXIT_MESSAGE}\r\n")
        return 0

    def _initialize(self) -> None:
        rows, cols = self.size_probe.get_window_size()
        self.state = EditorState(screen_rows=rows, screen_cols=cols)
        logger.info("editor started on a %dx%d screen, config %s", cols, rows, self.config.to_dict())
        self.loop_state = LoopState.RUNNING

    def step(self, event: KeyEvent) -> LoopState:
        """Dispatch one key event."""
        if self.loop_state is not LoopState.RUNNING or self.state is None:
            raise RuntimeError(f"Cannot dispatch keys while {self.loop_state.value}")

        if event.key is Key.ESCAPE or event.byte == self.config.quit_byte:
            self.io.clear_screen()
            self.loop_state = LoopState.EXITING
        elif event.is_movement:
            move_cursor(self.state, event)
        return self.loop_state


def run_editor(config: Optional[EditorConfig] = None) -> int:
    """Launch the editor on the process's terminal."""
    app = EditorApp(config)
    return app.run()
