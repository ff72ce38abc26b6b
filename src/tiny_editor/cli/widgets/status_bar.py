"""Status bar widget showing cursor position and screen size."""

from __future__ import annotations

from tiny_editor.core.constants import (
    CURSOR_FAR_RIGHT,
    CURSOR_UP_ONE,
    RESET_ATTRIBUTES,
    REVERSE_VIDEO,
)
from tiny_editor.core.cursor import EditorState


class StatusBarWidget:
    """Reverse-video readout drawn one row above the bottom of the screen."""

    def text(self, state: EditorState) -> str:
        """Plain status text, 1-based coordinates, cut to screen width."""
        status = (
            f"[Cursor: {state.cursor_y + 1},{state.cursor_x + 1}] "
            f"[Size: {state.screen_cols}×{state.screen_rows}]"
        )
        return status[:state.screen_cols]

    def render(self, state: EditorState) -> str:
        # Jump to the far right of the current line, then up one row
        return (
            f"{CURSOR_FAR_RIGHT}{CURSOR_UP_ONE}"
            f"{REVERSE_VIDEO}{self.text(state)}{RESET_ATTRIBUTES}"
        )
