"""Full-screen frame composition."""

from __future__ import annotations

import logging

from tiny_editor.cli.core.buffer import FrameSink, RenderBuffer
from tiny_editor.cli.core.errors import TerminalError
from tiny_editor.cli.widgets.status_bar import StatusBarWidget
from tiny_editor.cli.widgets.welcome import WelcomeWidget
from tiny_editor.core.constants import (
    CLEAR_LINE_RIGHT,
    CURSOR_HOME,
    HIDE_CURSOR,
    SHOW_CURSOR,
    WELCOME_BANNER,
    cursor_to,
)
from tiny_editor.core.cursor import EditorState

logger = logging.getLogger(__name__)


class ScreenCompositor:
    """
    Builds one frame and writes it in a single call.

    The cursor is hidden while the frame is drawn and shown again at the
    editor's cursor position, so a partially drawn screen never flickers.
    """

    def __init__(self, banner: str = WELCOME_BANNER) -> None:
        self.welcome = WelcomeWidget(banner)
        self.status_bar = StatusBarWidget()

    def compose(self, state: EditorState) -> RenderBuffer:
        buffer = RenderBuffer()
        buffer.append(HIDE_CURSOR)
        buffer.append(CURSOR_HOME)

        for y in range(state.screen_rows):
            buffer.append(f"{y + 1} ")
            if y == 0:
                buffer.append(self.welcome.render(state.screen_cols))
            else:
                buffer.append("~")
            buffer.append(CLEAR_LINE_RIGHT)
            if y < state.screen_rows - 1:
                buffer.append("\r\n")

        buffer.append(self.status_bar.render(state))
        buffer.append(cursor_to(state.cursor_y + 1, state.cursor_x + 1))
        buffer.append(SHOW_CURSOR)
        return buffer

    def render_frame(self, state: EditorState, sink: FrameSink) -> bool:
        """Draw the frame. A failed write drops the frame; returns False."""
        buffer = self.compose(state)
        try:
            buffer.flush(sink)
        except TerminalError as exc:
            logger.warning("dropped frame of %d bytes: %s", len(buffer), exc)
            return False
        return True
