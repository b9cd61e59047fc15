"""Shell standard streams: console or capture buffer for stdout, text for stdin."""

import enum
from typing import List, Optional

CAPTURE_CAP = 2048


class _StdoutMode(enum.Enum):
    CONSOLE = 0
    CAPTURE = 1


class FdTable:
    """Routes shell output to the console or into a bounded capture buffer."""

    def __init__(self, console) -> None:
        self._console = console
        self._mode = _StdoutMode.CONSOLE
        self._stdin: Optional[str] = None
        self._capture: List[str] = []

    def reset(self) -> None:
        """Send stdout to the console, drop stdin and clear the capture."""
        self._mode = _StdoutMode.CONSOLE
        self._stdin = None
        self._capture = []

    def set_stdout_console(self) -> None:
        self._mode = _StdoutMode.CONSOLE

    def set_stdout_capture(self) -> None:
        """Start capturing stdout into a fresh, empty buffer."""
        self._mode = _StdoutMode.CAPTURE
        self._capture = []

    @property
    def capturing(self) -> bool:
        return self._mode is _StdoutMode.CAPTURE

    def set_stdin(self, data: Optional[str]) -> None:
        self._stdin = data

    @property
    def stdin(self) -> Optional[str]:
        return self._stdin

    def has_stdin(self) -> bool:
        """True when stdin holds non-empty text."""
        return bool(self._stdin)

    def putc(self, ch: str) -> None:
        """Write one character; excess captured output is dropped."""
        if self._mode is _StdoutMode.CONSOLE:
            self._console.putc(ch)
            return
        if len(self._capture) + 1 >= CAPTURE_CAP:
            return
        self._capture.append(ch)

    def write(self, text: Optional[str]) -> None:
        if text is None:
            return
        if self._mode is _StdoutMode.CONSOLE:
            self._console.write(text)
            return
        for ch in text:
            self.putc(ch)

    @property
    def captured(self) -> str:
        return "".join(self._capture)