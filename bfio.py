from __future__ import annotations

import sys
from typing import BinaryIO, Optional, Protocol


class ByteSource(Protocol):
    def read_byte(self) -> int:
        """Return the next byte, raising EOFError when the input is exhausted."""


class ByteSink(Protocol):
    def write_byte(self, value: int) -> None:
        ...


class StreamSource:
    def __init__(self, stream: Optional[BinaryIO] = None):
        self.stream = stream

    def read_byte(self) -> int:
        stream = self.stream if self.stream is not None else sys.stdin.buffer
        data = stream.read(1)
        if not data:
            raise EOFError("end of input")
        return data[0]


class StreamSink:
    def __init__(self, stream: Optional[BinaryIO] = None):
        self.stream = stream

    def write_byte(self, value: int) -> None:
        stream = self.stream if self.stream is not None else sys.stdout.buffer
        stream.write(bytes((value,)))
        stream.flush()
