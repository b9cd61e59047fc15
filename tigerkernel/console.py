"""Byte console over a pair of binary streams."""

import sys


class Console:
    """Serial-style console: newlines go out as CR LF."""

    def __init__(self, output=None, input=None) -> None:
        self._output = output
        self._input = input

    @property
    def output(self):
        return self._output if self._output is not None else sys.stdout.buffer

    @property
    def input(self):
        return self._input if self._input is not None else sys.stdin.buffer

    def _emit(self, data: bytes) -> None:
        out = self.output
        out.write(data)
        flush = getattr(out, "flush", None)
        if flush is not None:
            flush()

    @staticmethod
    def _encode(text: str) -> bytes:
        return text.replace("\n", "\r\n").encode("latin-1", errors="replace")

    def putc(self, ch: str) -> None:
        """Write one character."""
        self._emit(self._encode(ch))

    def write(self, text: str) -> None:
        """Write a string."""
        self._emit(self._encode(text))

    def getc_nonblocking(self) -> "int | None":
        """Return the next input byte, or None if nothing is available."""
        data = self.input.read(1)
        if not data:
            return None
        return data[0]

    def getc_blocking(self) -> int:
        """Return the next input byte; raise EOFError once the input has ended."""
        data = self.input.read(1)
        if not data:
            raise EOFError("console input closed")
        return data[0]