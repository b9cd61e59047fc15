"""Routing of keyboard events to the endpoint bound to the focused window."""

import enum
from dataclasses import dataclass
from typing import Callable, Iterable, List, Optional, Tuple

from .layers import DEFAULT_CAPACITY as MAX_BINDINGS


class KeyboardEventType(enum.IntEnum):
    TEXT = 1
    CONTROL = 2


class KeyboardControl(enum.IntEnum):
    NONE = 0
    ENTER = 1
    BACKSPACE = 2


@dataclass(frozen=True)
class KeyboardEvent:
    """A typed character or a control key."""

    type: KeyboardEventType
    text: str = ""
    control: KeyboardControl = KeyboardControl.NONE


SinkFn = Callable[[int, KeyboardEvent], None]


@dataclass(eq=False)
class _Binding:
    window: object
    endpoint_id: int


class KeyboardDispatcher:
    """Maps windows to endpoint ids and forwards events to a sink."""

    def __init__(self) -> None:
        self.reset()

    def reset(self) -> None:
        """Drop all bindings and the sink."""
        self._bindings: List[_Binding] = []
        self._sink: Optional[SinkFn] = None

    def _find(self, window) -> Optional[_Binding]:
        if window is None:
            return None
        for binding in self._bindings:
            if binding.window is window:
                return binding
        return None

    def endpoint_for(self, window) -> Optional[int]:
        """The endpoint bound to window, or None."""
        binding = self._find(window)
        return binding.endpoint_id if binding is not None else None

    def register_window(self, window, endpoint_id: int) -> None:
        """Bind window to a non-zero endpoint, replacing an earlier binding."""
        if window is None or endpoint_id == 0:
            raise ValueError("window and non-zero endpoint id are required")
        binding = self._find(window)
        if binding is not None:
            binding.endpoint_id = endpoint_id
            return
        if len(self._bindings) >= MAX_BINDINGS:
            raise OverflowError("too many keyboard bindings")
        self._bindings.append(_Binding(window, endpoint_id))

    def set_sink(self, sink: Optional[SinkFn]) -> None:
        self._sink = sink

    def _deliver(self, focus_window, event: KeyboardEvent) -> None:
        if event is None or self._sink is None:
            return
        binding = self._find(focus_window)
        if binding is None:
            return
        self._sink(binding.endpoint_id, event)

    def dispatch_pending(self, events: Iterable[Tuple[KeyboardEvent, object]]) -> int:
        """Deliver (event, focus window) pairs; return how many were taken."""
        processed = 0
        for event, focus_window in events:
            self._deliver(focus_window, event)
            processed += 1
        return processed