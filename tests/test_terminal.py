"""Tests for raw mode, terminal I/O and window size probing."""

import atexit
import os
import termios

import pytest

from conftest import FakeTerminal, fixed_size, script
from tiny_editor.cli.core.errors import TerminalError, WindowSizeError
from tiny_editor.cli.core.terminal import (
    TerminalConfiguration,
    TerminalIO,
    TerminalModeController,
    WindowSizeProbe,
)


def cooked_configuration() -> TerminalConfiguration:
    cc = [b"\x00"] * 32
    return TerminalConfiguration(
        iflag=termios.BRKINT | termios.ICRNL | termios.INPCK | termios.ISTRIP | termios.IXON,
        oflag=termios.OPOST,
        cflag=termios.CS7,
        lflag=termios.ECHO | termios.ICANON | termios.IEXTEN | termios.ISIG,
        ispeed=termios.B38400,
        ospeed=termios.B38400,
        cc=tuple(cc),
    )


class TestTerminalConfiguration:
    """Deriving raw settings from a snapshot."""

    def test_raw_clears_input_processing(self) -> None:
        raw = cooked_configuration().raw()
        for flag in (termios.BRKINT, termios.ICRNL, termios.INPCK, termios.ISTRIP, termios.IXON):
            assert raw.iflag & flag == 0

    def test_raw_clears_output_processing(self) -> None:
        assert cooked_configuration().raw().oflag & termios.OPOST == 0

    def test_raw_clears_local_modes(self) -> None:
        raw = cooked_configuration().raw()
        for flag in (termios.ECHO, termios.ICANON, termios.IEXTEN, termios.ISIG):
            assert raw.lflag & flag == 0

    def test_raw_sets_eight_bit_characters(self) -> None:
        assert cooked_configuration().raw().cflag & termios.CS8 == termios.CS8

    def test_raw_read_timeout(self) -> None:
        raw = cooked_configuration().raw(timeout=3)
        assert raw.cc[termios.VMIN] == 0
        assert raw.cc[termios.VTIME] == 3

    def test_raw_leaves_snapshot_untouched(self) -> None:
        snapshot = cooked_configuration()
        snapshot.raw()
        assert snapshot == cooked_configuration()

    def test_attrs_round_trip(self) -> None:
        snapshot = cooked_configuration()
        assert TerminalConfiguration.from_attrs(snapshot.to_attrs()) == snapshot


class TestTerminalModeController:
    """Raw mode on a real pseudo-terminal."""

    def test_enter_and_restore_round_trip(self, pty_fd: int) -> None:
        controller = TerminalModeController(pty_fd)
        before = termios.tcgetattr(pty_fd)
        controller.capture_current_settings()
        controller.enter_raw_mode()

        raw = termios.tcgetattr(pty_fd)
        assert raw[3] & (termios.ECHO | termios.ICANON) == 0
        assert raw[6][termios.VMIN] == 0
        assert raw[6][termios.VTIME] == 1

        controller.restore_settings()
        after = termios.tcgetattr(pty_fd)
        assert after == before
        assert controller.saved is not None
        assert after == controller.saved.to_attrs()

    def test_raw_mode_context_restores(self, pty_fd: int) -> None:
        before = termios.tcgetattr(pty_fd)
        controller = TerminalModeController(pty_fd, timeout=5)
        with controller.raw_mode():
            assert controller.raw_active
            assert termios.tcgetattr(pty_fd)[6][termios.VTIME] == 5
        assert not controller.raw_active
        assert termios.tcgetattr(pty_fd) == before

    def test_raw_mode_context_restores_on_error(self, pty_fd: int) -> None:
        before = termios.tcgetattr(pty_fd)
        controller = TerminalModeController(pty_fd)
        with pytest.raises(TerminalError):
            with controller.raw_mode():
                raise TerminalError("getWindowSize")
        assert termios.tcgetattr(pty_fd) == before

    def test_restore_is_idempotent(self, pty_fd: int) -> None:
        controller = TerminalModeController(pty_fd)
        controller.capture_current_settings()
        controller.enter_raw_mode()
        controller.restore_settings()
        controller.restore_settings()
        assert not controller.raw_active

    def test_registers_exit_hook(self, pty_fd: int, monkeypatch: pytest.MonkeyPatch) -> None:
        registered: list = []
        monkeypatch.setattr(atexit, "register", registered.append)
        monkeypatch.setattr(atexit, "unregister", registered.remove)
        controller = TerminalModeController(pty_fd)
        controller.capture_current_settings()
        controller.enter_raw_mode()
        assert registered == [controller.restore_settings]
        controller.restore_settings()
        assert registered == []

    def test_enter_requires_capture(self, pty_fd: int) -> None:
        with pytest.raises(RuntimeError):
            TerminalModeController(pty_fd).enter_raw_mode()

    def test_single_raw_transition(self, pty_fd: int) -> None:
        controller = TerminalModeController(pty_fd)
        with controller.raw_mode():
            with pytest.raises(RuntimeError):
                controller.enter_raw_mode()

    def test_capture_fails_on_non_terminal(self, tmp_path) -> None:
        path = tmp_path / "not-a-tty"
        path.write_bytes(b"")
        fd = os.open(path, os.O_RDONLY)
        try:
            with pytest.raises(TerminalError) as excinfo:
                TerminalModeController(fd).capture_current_settings()
        finally:
            os.close(fd)
        assert excinfo.value.operation == "tcgetattr"


class TestTerminalIO:
    """Byte reads and writes on a pseudo-terminal."""

    def test_write_and_read(self) -> None:
        master, slave = os.openpty()
        try:
            controller = TerminalModeController(slave)
            with controller.raw_mode():
                io = TerminalIO(stdin_fd=slave, stdout_fd=slave)
                io.write("\x1b[H")
                assert os.read(master, 16) == b"\x1b[H"
                os.write(master, b"k")
                assert io.read_byte() == ord("k")
                # VMIN=0/VTIME=1: an idle read returns nothing after ~100ms
                assert io.read_byte() is None
        finally:
            os.close(slave)
            os.close(master)

    def test_write_failure_names_operation(self) -> None:
        read_fd, write_fd = os.pipe()
        os.close(write_fd)
        io = TerminalIO(stdin_fd=read_fd, stdout_fd=write_fd)
        try:
            with pytest.raises(TerminalError) as excinfo:
                io.write(b"x", "clearScreen")
        finally:
            os.close(read_fd)
        assert excinfo.value.operation == "clearScreen"


class TestWindowSizeProbe:
    """Direct size query with cursor-position fallback."""

    def test_direct_query(self, fake_terminal: FakeTerminal) -> None:
        probe = WindowSizeProbe(fake_terminal, size_query=fixed_size(80, 24))
        assert probe.get_window_size() == (24, 80)
        assert fake_terminal.written == b""

    def test_zero_columns_uses_cursor_report(self) -> None:
        terminal = FakeTerminal(script("\x1b[50;132R"))
        probe = WindowSizeProbe(terminal, size_query=fixed_size(0, 0))
        assert probe.get_window_size() == (50, 132)
        assert terminal.written == b"\x1b[999C\x1b[999B\x1b[6n"

    def test_failed_query_uses_cursor_report(self) -> None:
        def broken(fd: int) -> os.terminal_size:
            raise OSError(25, "Inappropriate ioctl for device")

        terminal = FakeTerminal(script("\x1b[30;100R"))
        assert WindowSizeProbe(terminal, size_query=broken).get_window_size() == (30, 100)

    def test_both_paths_failing(self) -> None:
        terminal = FakeTerminal(script("garbage", None))
        probe = WindowSizeProbe(terminal, size_query=fixed_size(0, 0))
        with pytest.raises(WindowSizeError) as excinfo:
            probe.get_window_size()
        assert excinfo.value.operation == "getWindowSize"

    def test_cursor_move_write_failure(self) -> None:
        terminal = FakeTerminal(fail_writes=True)
        probe = WindowSizeProbe(terminal, size_query=fixed_size(0, 0))
        with pytest.raises(WindowSizeError):
            probe.get_window_size()

    def test_zero_rows_uses_cursor_report(self) -> None:
        terminal = FakeTerminal(script("\x1b[24;80R"))
        probe = WindowSizeProbe(terminal, size_query=fixed_size(80, 0))
        assert probe.get_window_size() == (24, 80)
        assert terminal.written == b"\x1b[999C\x1b[999B\x1b[6n"

    @pytest.mark.parametrize("report", ["\x1b[0;0R", "\x1b[0;80R", "\x1b[24;0R"])
    def test_empty_cursor_report_is_a_failure(self, report: str) -> None:
        terminal = FakeTerminal(script(report))
        probe = WindowSizeProbe(terminal, size_query=fixed_size(80, 0))
        with pytest.raises(WindowSizeError) as excinfo:
            probe.get_window_size()
        assert excinfo.value.operation == "getWindowSize"
