"""Window geometry: frame, title bar and content areas."""

from dataclasses import dataclass, field
from typing import Optional

_U32 = 0xFFFFFFFF

DEFAULT_BORDER_THICKNESS = 1
DEFAULT_TITLE_BAR_HEIGHT = 18


def _saturating_add(a: int, b: int) -> int:
    return min(a + b, _U32)


def _safe_sub(value: int, subtractor: int) -> int:
    return value - subtractor if value > subtractor else 0


@dataclass
class Rect:
    x: int = 0
    y: int = 0
    width: int = 0
    height: int = 0

    @property
    def empty(self) -> bool:
        return self.width == 0 or self.height == 0

    def contains(self, x: int, y: int) -> bool:
        """True if (x, y) lies inside a non-empty rectangle."""
        if self.empty or x < self.x or y < self.y:
            return False
        return (x - self.x) < self.width and (y - self.y) < self.height


@dataclass
class WindowStyle:
    border_color: int = 0x00D8D8D8
    title_bar_color: int = 0x0039699F
    content_color: int = 0x00F2F4F8
    border_thickness: int = DEFAULT_BORDER_THICKNESS
    title_bar_height: int = DEFAULT_TITLE_BAR_HEIGHT


class Window:
    """A titled rectangle with a border, a title bar and a content area."""

    def __init__(self, title: Optional[str], x: int, y: int, width: int, height: int) -> None:
        self.title = "" if title is None else title
        self.frame = Rect(x, y, width, height)
        self.style = WindowStyle()

    def __repr__(self) -> str:
        return f"Window({self.title!r}, {self.frame!r})"

    def _effective_border(self) -> int:
        max_border = min(self.frame.width // 2, self.frame.height // 2)
        return min(self.style.border_thickness, max_border)

    def title_bar_rect(self) -> Rect:
        """The title bar, just inside the border at the top."""
        frame = self.frame
        if frame.width == 0 or frame.height == 0:
            return Rect()
        border = self._effective_border()
        inner_width = _safe_sub(_safe_sub(frame.width, border), border)
        inner_height = _safe_sub(_safe_sub(frame.height, border), border)
        return Rect(
            _saturating_add(frame.x, border),
            _saturating_add(frame.y, border),
            inner_width,
            min(self.style.title_bar_height, inner_height),
        )

    def content_rect(self) -> Rect:
        """The area below the title bar, inside the border."""
        title_bar = self.title_bar_rect()
        if self.frame.height == 0:
            return Rect()
        border = self._effective_border()
        inner_height = _safe_sub(_safe_sub(self.frame.height, border), border)
        return Rect(
            title_bar.x,
            _saturating_add(title_bar.y, title_bar.height),
            title_bar.width,
            _safe_sub(inner_height, title_bar.height),
        )

    def is_valid(self) -> bool:
        """True when the frame, title bar and content area are all non-empty."""
        if self.frame.empty:
            return False
        if self.title_bar_rect().empty:
            return False
        return not self.content_rect().empty