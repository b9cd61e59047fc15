"""Active-window tracking and topmost-window hit testing."""

from typing import Optional


class Focus:
    """Remembers which window is active."""

    def __init__(self) -> None:
        self.active_window = None

    def reset(self) -> None:
        """Forget the active window."""
        self.active_window = None

    def set_active_window(self, window) -> None:
        self.active_window = window

    def is_active_window(self, window) -> bool:
        return window is not None and self.active_window is window

    def clear_if_active(self, window) -> bool:
        """Clear focus if window holds it; return whether it did."""
        if not self.is_active_window(window):
            return False
        self.active_window = None
        return True

    @staticmethod
    def window_contains_point(window, x: int, y: int) -> bool:
        return window is not None and window.frame.contains(x, y)

    def hit_test(self, stack, x: int, y: int) -> Optional[object]:
        """Return the topmost window in stack whose frame holds (x, y), or None."""
        if stack is None:
            return None
        for index in range(len(stack) - 1, -1, -1):
            window = stack[index]
            if self.window_contains_point(window, x, y):
                return window
        return None