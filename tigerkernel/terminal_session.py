"""A per-window terminal: line editing, command execution and a state hash."""

from collections import deque
from typing import Deque, Optional, Sequence, Tuple

from .keyboard_dispatch import KeyboardControl, KeyboardEvent, KeyboardEventType
from .parser import split_args
from .path_state import EntryKind, PathState, PathStateError

INPUT_CAP = 128
HISTORY_CAP = 16
ARGV_CAP = 16

_U32 = 0xFFFFFFFF
_FNV_BASIS = 2166136261
_FNV_PRIME = 16777619


class TerminalSession:
    """Executes commands against its own filesystem view and hashes every result."""

    def __init__(self, endpoint_id: int, window=None) -> None:
        if endpoint_id == 0:
            raise ValueError("endpoint id must be non-zero")
        self._endpoint_id = endpoint_id
        self._window = window
        self._paths = PathState(None)
        self._input = ""
        self._history: Deque[str] = deque(maxlen=HISTORY_CAP)
        self._lines_executed = 0
        self._marker = _FNV_BASIS
        self._cwd = "/"
        self._hash_u32(endpoint_id)
        self._refresh_cwd()

    @property
    def endpoint_id(self) -> int:
        return self._endpoint_id

    @property
    def window(self):
        return self._window

    @property
    def input_buffer(self) -> str:
        return self._input

    @property
    def input_len(self) -> int:
        return len(self._input)

    @property
    def history(self) -> Tuple[str, ...]:
        """Remembered lines, oldest first."""
        return tuple(self._history)

    @property
    def history_count(self) -> int:
        return len(self._history)

    @property
    def lines_executed(self) -> int:
        return self._lines_executed

    @property
    def marker(self) -> int:
        return self._marker

    @property
    def cwd(self) -> str:
        return self._cwd

    def _hash_byte(self, byte: int) -> None:
        self._marker = ((self._marker ^ (byte & 0xFF)) * _FNV_PRIME) & _U32

    def _hash_text(self, text: str) -> None:
        for byte in text.encode("latin-1", errors="replace"):
            self._hash_byte(byte)
        self._hash_byte(0)

    def _hash_u32(self, value: int) -> None:
        for byte in (value & _U32).to_bytes(4, "little"):
            self._hash_byte(byte)

    def _refresh_cwd(self) -> None:
        self._cwd = self._paths.pwd() or "/"

    def _help(self, argv: Sequence[str]) -> None:
        for name in ("help", "echo", "pwd", "cd", "mkdir", "ls", "cat"):
            self._hash_text(name)

    def _echo(self, argv: Sequence[str]) -> None:
        for arg in argv[1:]:
            self._hash_text(arg)

    def _pwd(self, argv: Sequence[str]) -> None:
        self._hash_text(self._paths.pwd())

    def _cd(self, argv: Sequence[str]) -> None:
        target = argv[1] if len(argv) >= 2 else "/"
        try:
            self._paths.cd(target)
        except PathStateError:
            self._hash_text("cd:error")
        else:
            self._hash_text("cd:ok")

    def _mkdir(self, argv: Sequence[str]) -> None:
        if len(argv) < 2:
            self._hash_text("mkdir:missing")
            return
        for path in argv[1:]:
            self._hash_text(path)
            try:
                self._paths.mkdir(path)
            except PathStateError:
                self._hash_text("mkdir:error")
            else:
                self._hash_text("mkdir:ok")

    def _ls(self, argv: Sequence[str]) -> None:
        target = argv[1] if len(argv) >= 2 else "."
        try:
            entries = self._paths.ls(target)
        except PathStateError:
            self._hash_text("ls:error")
            return
        self._hash_u32(len(entries))
        for entry in entries:
            self._hash_text(entry.name)
            self._hash_byte(ord("/") if entry.kind is EntryKind.DIR else ord("f"))

    def _cat(self, argv: Sequence[str]) -> None:
        if len(argv) < 2:
            self._hash_text("cat:missing")
            return
        for path in argv[1:]:
            try:
                content = self._paths.cat(path)
            except PathStateError:
                self._hash_text("cat:error")
                self._hash_text(path)
                continue
            self._hash_text(content)

    def execute_line(self, line: Optional[str]) -> None:
        """Run one command line; raise ValueError if it does not fit the input."""
        if line is None:
            raise ValueError("no command line")
        if len(line) + 1 > INPUT_CAP:
            raise ValueError("command line too long")

        argv = split_args(line, ARGV_CAP)
        if not argv:
            return

        self._history.append(line)
        self._lines_executed += 1
        self._hash_text(line)

        commands = {
            "help": self._help,
            "echo": self._echo,
            "pwd": self._pwd,
            "cd": self._cd,
            "mkdir": self._mkdir,
            "ls": self._ls,
            "cat": self._cat,
        }
        command = commands.get(argv[0])
        if command is None:
            self._hash_text("unknown")
        else:
            command(argv)

        self._refresh_cwd()

    def handle_event(self, event: Optional[KeyboardEvent]) -> None:
        """Edit the input line, or run it on Enter; raise OverflowError when full."""
        if event is None:
            raise ValueError("event is required")

        if event.type is KeyboardEventType.TEXT:
            if len(event.text) != 1 or not 0x20 <= ord(event.text) <= 0x7E:
                return
            if len(self._input) + 1 >= INPUT_CAP:
                raise OverflowError("input line is full")
            self._input += event.text
            return

        if event.type is KeyboardEventType.CONTROL:
            if event.control is KeyboardControl.BACKSPACE:
                self._input = self._input[:-1]
            elif event.control is KeyboardControl.ENTER:
                line, self._input = self._input, ""
                self.execute_line(line)