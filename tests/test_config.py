"""Tests for configuration and error descriptions."""

import logging
import termios

import pytest

from tiny_editor.cli.core.errors import TerminalError, WindowSizeError
from tiny_editor.config import EditorConfig, configure_logging


class TestEditorConfig:
    """Tests for EditorConfig validation."""

    def test_defaults(self) -> None:
        config = EditorConfig()
        assert config.read_timeout == 1
        assert config.quit_byte == ord("q")
        assert config.banner == "Tiny Editor -- version 0.0.1"

    @pytest.mark.parametrize("timeout", [0, 256, -1])
    def test_rejects_bad_timeout(self, timeout: int) -> None:
        with pytest.raises(ValueError):
            EditorConfig(read_timeout=timeout)

    def test_rejects_bad_quit_byte(self) -> None:
        with pytest.raises(ValueError):
            EditorConfig(quit_byte=300)

    def test_to_dict(self) -> None:
        assert EditorConfig(read_timeout=2).to_dict()["read_timeout"] == 2


class TestConfigureLogging:
    """Tests for configure_logging."""

    def test_unknown_level(self) -> None:
        with pytest.raises(ValueError):
            configure_logging(None, "loud")

    def test_without_file_discards(self) -> None:
        configure_logging()
        handlers = logging.getLogger("tiny_editor").handlers
        assert len(handlers) == 1
        assert isinstance(handlers[0], logging.NullHandler)


class TestTerminalError:
    """Diagnostic text for fatal errors."""

    def test_os_error_reason(self) -> None:
        error = TerminalError("read", OSError(5, "Input/output error"))
        assert str(error) == "read: Input/output error"

    def test_termios_error_reason(self) -> None:
        error = TerminalError("tcsetattr", termios.error(25, "Inappropriate ioctl for device"))
        assert error.describe() == "tcsetattr: Inappropriate ioctl for device"

    def test_without_cause(self) -> None:
        assert TerminalError("write").describe() == "write: failed"

    def test_nested_cause(self) -> None:
        inner = TerminalError("getCursorPosition", ValueError("malformed position report b''"))
        error = WindowSizeError("getWindowSize", inner)
        assert error.describe() == "getWindowSize: getCursorPosition: malformed position report b''"
