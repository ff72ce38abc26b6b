"""Key inspector: echo the code of every byte typed in raw mode."""

from __future__ import annotations

from typing import Optional

from tiny_editor.cli.core.terminal import TerminalIO, TerminalModeController
from tiny_editor.config import EditorConfig
from tiny_editor.core.constants import EXIT_MESSAGE

HEADER = (
    "Raw mode enabled. Press 'q' to quit.\r\n"
    "Keys are shown as: code (character)\r\n"
    "------------------------------------\r\n"
)


def describe_byte(byte: int) -> str:
    """
    Format one input byte as an ASCII line.

    Control codes use caret notation (``27 (^[)``, DEL is ``127 (^?)``),
    printable ASCII is quoted (``97 ('a')``) and bytes from 0x80 up, such
    as pieces of a UTF-8 character, are shown in hex (``195 (0xc3)``).
    """
    if byte < 0x20:
        return f"{byte} (^{chr(byte + 64)})\r\n"
    if byte == 0x7F:
        return f"{byte} (^?)\r\n"
    if byte >= 0x80:
        return f"{byte} (0x{byte:02x})\r\n"
    return f"{byte} ('{chr(byte)}')\r\n"


class KeyInspector:
    """Prints each raw input byte until the quit key is pressed."""

    def __init__(
        self,
        config: Optional[EditorConfig] = None,
        io: Optional[TerminalIO] = None,
        controller: Optional[TerminalModeController] = None,
    ) -> None:
        self.config = config or EditorConfig()
        self.io = io or TerminalIO()
        self.controller = controller or TerminalModeController(
            self.io.stdin_fd, self.config.read_timeout
        )

    def run(self) -> int:
        with self.controller.raw_mode():
            self.io.write(HEADER)
            while True:
                byte = self.io.read_byte()
                if byte is None:
                    continue
                self.io.write(describe_byte(byte))
                if byte == self.config.quit_byte:
                    break

        self.io.write(f"\r\n{EXIT_MESSAGE}\r\n")
        return 0


def run_inspector(config: Optional[EditorConfig] = None) -> int:
    """Launch the key inspector on the process's terminal."""
    return KeyInspector(config).run()
