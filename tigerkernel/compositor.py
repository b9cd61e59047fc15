"""Scene compositor: stacks windows, tracks focus and renders to a framebuffer."""

from typing import Optional

from .focus import Focus
from .framebuffer import Framebuffer
from .layers import LayerStack
from .window import Window

_U32 = 0xFFFFFFFF
_FNV_BASIS = 2166136261
_FNV_PRIME = 16777619


def _hash_title(title: Optional[str]) -> int:
    value_hash = _FNV_BASIS
    if not title:
        return value_hash
    for byte in title.encode("latin-1", errors="replace"):
        value_hash ^= byte
        value_hash = (value_hash * _FNV_PRIME) & _U32
    return value_hash


class Compositor:
    """Owns the window stack and draws it over a background colour."""

    def __init__(self, framebuffer: Optional[Framebuffer] = None) -> None:
        self.framebuffer = framebuffer
        self.background_color = 0
        self.layers = LayerStack()
        self.focus = Focus()

    def reset(self, background_color: int) -> None:
        """Remove all windows and focus, and set the background colour."""
        self.background_color = background_color
        self.layers.reset()
        self.focus.reset()

    def add_window(self, window: Window) -> None:
        """Stack a valid, new window on top and make it active."""
        if window is None or not window.is_valid():
            raise ValueError("window is not valid")
        if window in self.layers:
            raise ValueError("window already added")
        self.layers.push_back(window)
        self.focus.set_active_window(window)

    @property
    def window_count(self) -> int:
        return len(self.layers)

    def window_at(self, z_index: int) -> Window:
        """Return the window at a z-index, 0 being the bottom."""
        return self.layers[z_index]

    def hit_test(self, x: int, y: int) -> Optional[Window]:
        """Topmost window under (x, y), or None."""
        return self.focus.hit_test(self.layers, x, y)

    def activate_window(self, window: Window) -> None:
        """Raise a stacked window to the top and focus it."""
        self.layers.move_to_front(window)
        self.focus.set_active_window(window)

    def activate_at(self, x: int, y: int) -> Window:
        """Activate the window under (x, y); raise LookupError if there is none."""
        window = self.hit_test(x, y)
        if window is None:
            raise LookupError(f"no window at ({x}, {y})")
        self.activate_window(window)
        return window

    @property
    def active_window(self) -> Optional[Window]:
        return self.focus.active_window

    def _draw_window(self, fb: Framebuffer, window: Window) -> None:
        if not window.is_valid():
            return
        frame = window.frame
        style = window.style
        fb.fill_rect(frame.x, frame.y, frame.width, frame.height, style.border_color)

        title_bar = window.title_bar_rect()
        if not title_bar.empty:
            fb.fill_rect(title_bar.x, title_bar.y, title_bar.width, title_bar.height,
                         style.title_bar_color)

        content = window.content_rect()
        if not content.empty:
            fb.fill_rect(content.x, content.y, content.width, content.height, style.content_color)

        if title_bar.width > 8 and title_bar.height > 4:
            title_hash = _hash_title(window.title)
            accent_width = 8 + title_hash % (title_bar.width - 8)
            accent_color = 0x00202020 | (title_hash & 0x000F0F0F)
            fb.fill_rect(title_bar.x + 4, title_bar.y + 4, accent_width - 4, 1, accent_color)

    def render(self) -> int:
        """Draw the scene back to front and return the framebuffer checksum, or 0."""
        fb = self.framebuffer
        if fb is None:
            return 0
        fb.fill_rect(0, 0, fb.width, fb.height, self.background_color)
        for window in self.layers:
            self._draw_window(fb, window)
        if fb.height * fb.stride > _U32:
            return 0
        return fb.checksum()