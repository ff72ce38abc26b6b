"""Append buffer that batches one frame into a single write."""

from __future__ import annotations

from typing import Protocol, Union


class FrameSink(Protocol):
    def write(self, data: Union[bytes, str], operation: str = ...) -> None:
        ...


class RenderBuffer:
    """Append-only byte accumulator, flushed once per frame."""

    def __init__(self) -> None:
        self._data = bytearray()

    def append(self, chunk: Union[bytes, str]) -> None:
        if isinstance(chunk, str):
            chunk = chunk.encode("utf-8")
        self._data += chunk

    def getvalue(self) -> bytes:
        return bytes(self._data)

    def flush(self, sink: FrameSink) -> None:
        """Write the whole frame in one call."""
        sink.write(bytes(self._data), "write")

    def __len__(self) -> int:
        return len(self._data)
