"""Editor state and bounded cursor movement."""

from __future__ import annotations

from dataclasses import dataclass

from tiny_editor.core.keys import Key, KeyEvent


@dataclass
class EditorState:
    """Screen extent and cursor position (0-indexed)."""
    screen_rows: int
    screen_cols: int
    cursor_x: int = 0
    cursor_y: int = 0

    def __post_init__(self) -> None:
        if self.screen_rows <= 0 or self.screen_cols <= 0:
            raise ValueError(
                f"Screen must be at least 1x1, got {self.screen_cols}x{self.screen_rows}"
            )
        if not (0 <= self.cursor_x < self.screen_cols and 0 <= self.cursor_y < self.screen_rows):
            raise ValueError(
                f"Cursor ({self.cursor_x}, {self.cursor_y}) out of bounds "
                f"({self.screen_cols}x{self.screen_rows})"
            )


def move_cursor(state: EditorState, event: KeyEvent) -> None:
    """Apply a movement key to the cursor, clamped to the screen."""
    key = event.key
    if key is Key.UP:
        if state.cursor_y > 0:
            state.cursor_y -= 1
    elif key is Key.DOWN:
        if state.cursor_y < state.screen_rows - 1:
            state.cursor_y += 1
    elif key is Key.LEFT:
        if state.cursor_x > 0:
            state.cursor_x -= 1
    elif key is Key.RIGHT:
        if state.cursor_x < state.screen_cols - 1:
            state.cursor_x += 1
    elif key is Key.HOME:
        state.cursor_x = 0
    elif key is Key.END:
        state.cursor_x = state.screen_cols - 1
    elif key is Key.PAGE_UP:
        state.cursor_y = 0
    elif key is Key.PAGE_DOWN:
        state.cursor_y = state.screen_rows - 1
