"""Interactive line reading with echo and backspace handling."""

from typing import List, Optional

LINE_BUFFER_SIZE = 256

_CR = 0x0D
_LF = 0x0A
_BACKSPACES = (0x08, 0x7F)


class LineReader:
    """Collects printable console input into lines, echoing as it goes."""

    def __init__(self, console) -> None:
        self._console = console
        self._buffer: List[str] = []
        self._skip_lf_after_cr = False

    def write(self, text: str) -> None:
        """Write text to the console."""
        self._console.write(text)

    @property
    def pending(self) -> str:
        """Characters typed so far on the unfinished line."""
        return "".join(self._buffer)

    def _backspace(self) -> None:
        if not self._buffer:
            return
        self._buffer.pop()
        self._console.write("\b \b")

    def _append(self, byte: int) -> None:
        if len(self._buffer) + 1 >= LINE_BUFFER_SIZE:
            return
        ch = chr(byte)
        self._buffer.append(ch)
        self._console.putc(ch)

    def readline(self, max_len: Optional[int] = None, blocking: bool = True) -> Optional[str]:
        """Return the next complete line, cut to max_len characters.

        Without blocking, None is returned once input runs dry; the partial
        line is kept for the next call. With blocking, EOFError propagates
        when the console input has ended.
        """
        if max_len is not None and max_len < 0:
            raise ValueError("max_len must not be negative")

        while True:
            if blocking:
                byte = self._console.getc_blocking()
            else:
                byte = self._console.getc_nonblocking()
                if byte is None:
                    return None

            if self._skip_lf_after_cr:
                self._skip_lf_after_cr = False
                if byte == _LF:
                    continue

            if byte in (_CR, _LF):
                self._skip_lf_after_cr = byte == _CR
                self._console.write("\n")
                line = "".join(self._buffer)
                self._buffer.clear()
                return line if max_len is None else line[:max_len]

            if byte in _BACKSPACES:
                self._backspace()
                continue

            if 0x20 <= byte <= 0x7E:
                self._append(byte)