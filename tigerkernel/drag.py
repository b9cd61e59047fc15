"""Mouse routing to window owners, with title-bar dragging."""

import enum
from dataclasses import dataclass
from typing import Callable, List, Optional

from .event_queue import EventQueue, InputEvent, InputEventType, MouseButton
from .layers import DEFAULT_CAPACITY as MAX_BINDINGS
from .window import Window


class DispatchEventType(enum.Enum):
    MOVE = 1
    CLICK_DOWN = 2
    CLICK_UP = 3
    DRAG = 4


DispatchFn = Callable[[int, DispatchEventType, InputEvent], None]


@dataclass(eq=False)
class _Binding:
    window: Window
    task_id: int


def _clamp_sub(value: int, subtractor: int) -> int:
    return value - subtractor if value > subtractor else 0


class DragController:
    """Drains pointer events, moves dragged windows and notifies owning tasks."""

    def __init__(self, compositor, queue: Optional[EventQueue] = None) -> None:
        self._compositor = compositor
        self._queue = queue if queue is not None else EventQueue()
        self.reset()

    @property
    def queue(self) -> EventQueue:
        return self._queue

    @property
    def dragging(self) -> Optional[Window]:
        """The window being dragged, if any."""
        return self._drag.window if self._drag is not None else None

    def reset(self) -> None:
        """Drop all bindings, any drag in progress and the dispatch callback."""
        self._bindings: List[_Binding] = []
        self._drag: Optional[_Binding] = None
        self._offset_x = 0
        self._offset_y = 0
        self._dispatch: Optional[DispatchFn] = None

    def register_window(self, window: Window, task_id: int) -> None:
        """Bind a window to the task that receives its pointer events."""
        if window is None:
            raise ValueError("window is required")
        if len(self._bindings) >= MAX_BINDINGS:
            raise OverflowError("too many window bindings")
        self._bindings.append(_Binding(window, task_id))

    def set_dispatch(self, dispatch: Optional[DispatchFn]) -> None:
        self._dispatch = dispatch

    def _binding_for(self, window) -> Optional[_Binding]:
        if window is None:
            return None
        for binding in self._bindings:
            if binding.window is window:
                return binding
        return None

    def _binding_at(self, x: int, y: int) -> Optional[_Binding]:
        return self._binding_for(self._compositor.hit_test(x, y))

    def _send(self, binding: Optional[_Binding], kind: DispatchEventType,
              event: InputEvent) -> None:
        if binding is None or self._dispatch is None:
            return
        self._dispatch(binding.task_id, kind, event)

    def _on_move(self, event: InputEvent) -> None:
        binding = self._drag
        if binding is not None and event.buttons & MouseButton.LEFT:
            binding.window.frame.x = _clamp_sub(event.x, self._offset_x)
            binding.window.frame.y = _clamp_sub(event.y, self._offset_y)
            self._send(binding, DispatchEventType.DRAG, event)
            return
        self._send(self._binding_at(event.x, event.y), DispatchEventType.MOVE, event)

    def _on_button_down(self, event: InputEvent) -> None:
        binding = self._binding_at(event.x, event.y)
        if binding is None:
            return

        try:
            self._compositor.activate_window(binding.window)
        except ValueError:
            pass
        self._send(binding, DispatchEventType.CLICK_DOWN, event)

        if event.button & MouseButton.LEFT:
            if binding.window.title_bar_rect().contains(event.x, event.y):
                self._drag = binding
                self._offset_x = event.x - binding.window.frame.x
                self._offset_y = event.y - binding.window.frame.y

    def _on_button_up(self, event: InputEvent) -> None:
        binding = self._drag
        if binding is None:
            binding = self._binding_at(event.x, event.y)
        self._send(binding, DispatchEventType.CLICK_UP, event)
        if event.button & MouseButton.LEFT:
            self._drag = None

    def _process(self, event: InputEvent) -> None:
        if event.type is InputEventType.MOUSE_MOVE:
            self._on_move(event)
        elif event.type is InputEventType.MOUSE_BUTTON_DOWN:
            self._on_button_down(event)
        elif event.type is InputEventType.MOUSE_BUTTON_UP:
            self._on_button_up(event)

    def dispatch_pending(self) -> int:
        """Process every queued event; return how many were taken."""
        processed = 0
        for event in self._queue.drain():
            self._process(event)
            processed += 1
        return processed