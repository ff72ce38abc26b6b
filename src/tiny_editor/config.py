"""Session configuration and logging setup."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Optional

from tiny_editor.core.constants import DEFAULT_READ_TIMEOUT, WELCOME_BANNER

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


@dataclass(frozen=True)
class EditorConfig:
    """Settings for one editor session."""
    read_timeout: int = DEFAULT_READ_TIMEOUT  # tenths of a second (VTIME)
    banner: str = WELCOME_BANNER
    quit_byte: int = ord('q')

    def __post_init__(self) -> None:
        # VTIME is an unsigned char; 0 would turn reads into busy polling
        if not 1 <= self.read_timeout <= 255:
            raise ValueError(f"Invalid read timeout: {self.read_timeout} (expected 1-255)")
        if not 0 <= self.quit_byte <= 255:
            raise ValueError(f"Invalid quit byte: {self.quit_byte}")

    def to_dict(self) -> dict[str, Any]:
        """Serialize for logging."""
        return {
            "read_timeout": self.read_timeout,
            "banner": self.banner,
            "quit_byte": self.quit_byte,
        }


def configure_logging(log_file: Optional[Path] = None, level: str = "WARNING") -> None:
    """
    Route package logs to a file.

    The screen belongs to the raw-mode session, so nothing is ever logged
    to the terminal. Without ``log_file`` records are discarded.
    """
    package_logger = logging.getLogger("tiny_editor")
    numeric = logging.getLevelName(level.upper())
    if not isinstance(numeric, int):
        raise ValueError(f"Unknown log level: {level}")

    for handler in list(package_logger.handlers):
        package_logger.removeHandler(handler)
        handler.close()

    package_logger.propagate = False
    if log_file is None:
        package_logger.addHandler(logging.NullHandler())
        return

    handler = logging.FileHandler(Path(log_file).expanduser(), encoding="utf-8")
    handler.setFormatter(logging.Formatter(LOG_FORMAT))
    package_logger.addHandler(handler)
    package_logger.setLevel(numeric)
