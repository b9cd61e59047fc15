"""Terminal windows and the routing of keyboard input to their sessions."""

from dataclasses import dataclass
from typing import List, Optional

from .keyboard_dispatch import KeyboardDispatcher, KeyboardEvent
from .layers import DEFAULT_CAPACITY as MAX_BINDINGS
from .terminal_session import TerminalSession
from .window import Window

TITLE_BAR_COLOR = 0x003A4B69
CONTENT_COLOR = 0x00F4F7FC


class TerminalWindow:
    """A window paired with a terminal session and the task that owns it."""

    def __init__(self, title: Optional[str], x: int, y: int, width: int, height: int,
                 endpoint_id: int, owner_task_id: int) -> None:
        self.window = Window(title, x, y, width, height)
        self.window.style.title_bar_color = TITLE_BAR_COLOR
        self.window.style.content_color = CONTENT_COLOR
        self.owner_task_id = owner_task_id
        self.session = TerminalSession(endpoint_id, self.window)

    def __repr__(self) -> str:
        return f"TerminalWindow({self.window.title!r}, endpoint={self.endpoint})"

    @property
    def endpoint(self) -> int:
        return self.session.endpoint_id

    @property
    def native(self) -> Window:
        """The underlying compositor window."""
        return self.window

    @property
    def input_len(self) -> int:
        return self.session.input_len

    @property
    def history_count(self) -> int:
        return self.session.history_count

    @property
    def lines_executed(self) -> int:
        return self.session.lines_executed

    @property
    def marker(self) -> int:
        return self.session.marker

    @property
    def cwd(self) -> str:
        return self.session.cwd

    def handle_key(self, event: KeyboardEvent) -> None:
        """Feed one keyboard event to the session."""
        self.session.handle_event(event)


@dataclass(eq=False)
class _Binding:
    terminal_window: TerminalWindow
    endpoint_id: int


class TerminalRouter:
    """Attaches terminal windows to the compositor and delivers keys by endpoint."""

    def __init__(self, compositor, keyboard: Optional[KeyboardDispatcher] = None) -> None:
        self._compositor = compositor
        self._keyboard = keyboard if keyboard is not None else KeyboardDispatcher()
        self._bindings: List[_Binding] = []

    @property
    def keyboard(self) -> KeyboardDispatcher:
        return self._keyboard

    def __len__(self) -> int:
        return len(self._bindings)

    def reset(self) -> None:
        """Forget every attached terminal."""
        self._bindings = []

    def _by_endpoint(self, endpoint_id: int) -> Optional[_Binding]:
        if endpoint_id == 0:
            return None
        for binding in self._bindings:
            if binding.endpoint_id == endpoint_id:
                return binding
        return None

    def _by_window(self, terminal_window) -> Optional[_Binding]:
        if terminal_window is None:
            return None
        for binding in self._bindings:
            if binding.terminal_window is terminal_window:
                return binding
        return None

    def _unregister(self, terminal_window: TerminalWindow) -> None:
        self._bindings = [
            binding for binding in self._bindings if binding.terminal_window is not terminal_window
        ]

    def _register(self, terminal_window: TerminalWindow) -> None:
        endpoint_id = terminal_window.endpoint
        if endpoint_id == 0:
            raise ValueError("terminal has no endpoint")

        binding = self._by_window(terminal_window)
        if binding is not None:
            existing = self._by_endpoint(endpoint_id)
            if existing is not None and existing is not binding:
                raise ValueError(f"endpoint {endpoint_id} is already bound")
            binding.endpoint_id = endpoint_id
            return

        if self._by_endpoint(endpoint_id) is not None:
            raise ValueError(f"endpoint {endpoint_id} is already bound")
        if len(self._bindings) >= MAX_BINDINGS:
            raise OverflowError("too many terminal bindings")
        self._bindings.append(_Binding(terminal_window, endpoint_id))

    def attach(self, terminal_window: TerminalWindow) -> None:
        """Bind the terminal, add its window to the compositor and route keys to it."""
        if terminal_window is None:
            raise ValueError("terminal window is required")

        was_registered = self._by_window(terminal_window) is not None
        self._register(terminal_window)

        try:
            self._compositor.add_window(terminal_window.window)
        except (ValueError, OverflowError):
            if not was_registered:
                self._unregister(terminal_window)
            raise

        self._keyboard.register_window(terminal_window.window, terminal_window.endpoint)

    def dispatch_event(self, endpoint_id: int, event: KeyboardEvent) -> None:
        """Deliver a key to the terminal bound to endpoint_id; unknown ids are ignored."""
        binding = self._by_endpoint(endpoint_id)
        if binding is None:
            return
        try:
            binding.terminal_window.handle_key(event)
        except OverflowError:
            pass