"""Z-ordered stack of windows, back to front."""

from typing import Iterator, List

DEFAULT_CAPACITY = 8


class LayerStack:
    """Windows in stacking order; index 0 is the bottom, the last is on top."""

    def __init__(self, capacity: int = DEFAULT_CAPACITY) -> None:
        if capacity <= 0:
            raise ValueError("capacity must be positive")
        self._capacity = capacity
        self._windows: List[object] = []

    @property
    def capacity(self) -> int:
        return self._capacity

    def reset(self) -> None:
        """Remove every window."""
        self._windows = []

    def push_back(self, window) -> None:
        """Put a window on top; raise OverflowError when the stack is full."""
        if window is None:
            raise ValueError("window is required")
        if len(self._windows) >= self._capacity:
            raise OverflowError("layer stack is full")
        self._windows.append(window)

    def index_of(self, window) -> int:
        """Return the window's z-index; raise ValueError if it is not stacked."""
        for index, stacked in enumerate(self._windows):
            if stacked is window:
                return index
        raise ValueError("window is not in the layer stack")

    def __contains__(self, window) -> bool:
        return any(stacked is window for stacked in self._windows)

    def move_to_front(self, window) -> None:
        """Raise a stacked window to the top, keeping the others' order."""
        index = self.index_of(window)
        self._windows.append(self._windows.pop(index))

    def __len__(self) -> int:
        return len(self._windows)

    def __getitem__(self, index: int):
        return self._windows[index]

    def __iter__(self) -> Iterator:
        return iter(list(self._windows))