"""Shared constants for terminal control."""

# ANSI escape sequences
ESC = "\x1b"
CSI = f"{ESC}["

ESC_BYTE = 0x1B

# Screen and cursor control (VT100)
CLEAR_SCREEN = f"{CSI}2J"
CURSOR_HOME = f"{CSI}H"
CLEAR_LINE_RIGHT = f"{CSI}K"
HIDE_CURSOR = f"{CSI}?25l"
SHOW_CURSOR = f"{CSI}?25h"
REVERSE_VIDEO = f"{CSI}7m"
RESET_ATTRIBUTES = f"{CSI}m"
CURSOR_UP_ONE = f"{CSI}1A"
CURSOR_FAR_RIGHT = f"{CSI}999C"
CURSOR_FAR_DOWN = f"{CSI}999B"
REQUEST_CURSOR_POSITION = f"{CSI}6n"


def cursor_to(row: int, col: int) -> str:
    """Absolute cursor move (1-indexed)."""
    return f"{CSI}{row};{col}H"


# Cursor position reports are read into a bounded buffer
POSITION_REPORT_LIMIT = 32

# Read timeout in tenths of a second (termios VTIME)
DEFAULT_READ_TIMEOUT = 1

WELCOME_BANNER = "Tiny Editor -- version 0.0.1"
EXIT_MESSAGE = "Raw mode disabled, terminal settings restored."
