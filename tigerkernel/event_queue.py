"""Bounded FIFO of pointer input events."""

import enum
from collections import deque
from dataclasses import dataclass
from typing import Deque, Iterator

DEFAULT_CAPACITY = 64


class InputEventType(enum.Enum):
    MOUSE_MOVE = 1
    MOUSE_BUTTON_DOWN = 2
    MOUSE_BUTTON_UP = 3


class MouseButton(enum.IntFlag):
    NONE = 0
    LEFT = 1
    RIGHT = 2
    MIDDLE = 4


@dataclass(frozen=True)
class InputEvent:
    """A pointer event: position, buttons held and the button that changed."""

    type: InputEventType
    x: int = 0
    y: int = 0
    buttons: MouseButton = MouseButton.NONE
    button: MouseButton = MouseButton.NONE


class EventQueue:
    """First-in first-out queue holding at most `capacity` events."""

    def __init__(self, capacity: int = DEFAULT_CAPACITY) -> None:
        if capacity <= 0:
            raise ValueError("capacity must be positive")
        self._capacity = capacity
        self._events: Deque[InputEvent] = deque()

    @property
    def capacity(self) -> int:
        return self._capacity

    def reset(self) -> None:
        """Drop every queued event."""
        self._events.clear()

    def push(self, event: InputEvent) -> None:
        """Append an event; raise OverflowError when the queue is full."""
        if event is None:
            raise ValueError("event is required")
        if len(self._events) >= self._capacity:
            raise OverflowError("input event queue is full")
        self._events.append(event)

    def pop(self) -> InputEvent:
        """Remove and return the oldest event; raise IndexError when empty."""
        if not self._events:
            raise IndexError("input event queue is empty")
        return self._events.popleft()

    def drain(self) -> Iterator[InputEvent]:
        """Yield queued events oldest first, removing each as it is taken."""
        while self._events:
            yield self._events.popleft()

    def __len__(self) -> int:
        return len(self._events)