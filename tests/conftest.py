"""Pytest configuration and shared terminal fakes."""

import os
from collections import deque
from typing import Iterable, Iterator, Optional, Union

import pytest

from tiny_editor.cli.core.errors import TerminalError
from tiny_editor.cli.core.terminal import TerminalIO


def script(*parts: Union[bytes, str, int, None]) -> list[Optional[int]]:
    """
    Build a byte script for FakeTerminal.

    bytes/str expand to their bytes, ints are single bytes and None is a
    read timeout.
    """
    out: list[Optional[int]] = []
    for part in parts:
        if part is None or isinstance(part, int):
            out.append(part)
        else:
            if isinstance(part, str):
                part = part.encode("utf-8")
            out.extend(part)
    return out


class FakeTerminal(TerminalIO):
    """TerminalIO replaying scripted input and recording output."""

    def __init__(self, reads: Iterable[Optional[int]] = (), fail_writes: bool = False) -> None:
        super().__init__(stdin_fd=-1, stdout_fd=-1)
        self._reads = deque(reads)
        self.fail_writes = fail_writes
        self.written = bytearray()

    def read_byte(self) -> Optional[int]:
        if not self._reads:
            raise AssertionError("scripted input exhausted")
        return self._reads.popleft()

    def write(self, data: Union[bytes, str], operation: str = "write") -> None:
        if isinstance(data, str):
            data = data.encode("utf-8")
        if self.fail_writes:
            raise TerminalError(operation, OSError(5, "Input/output error"))
        self.written += data

    @property
    def output(self) -> str:
        return self.written.decode("utf-8")


@pytest.fixture
def fake_terminal() -> FakeTerminal:
    return FakeTerminal()


@pytest.fixture
def pty_fd() -> Iterator[int]:
    """Slave side of a fresh pseudo-terminal."""
    if not hasattr(os, "openpty"):
        pytest.skip("pseudo-terminals not available")
    master, slave = os.openpty()
    try:
        yield slave
    finally:
        os.close(slave)
        os.close(master)


def fixed_size(cols: int, rows: int):
    """size_query stand-in returning a fixed terminal size."""
    def query(fd: int) -> os.terminal_size:
        return os.terminal_size((cols, rows))
    return query
