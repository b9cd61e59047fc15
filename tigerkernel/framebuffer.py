"""A 32-bit pixel framebuffer with drawing primitives and a checksum."""

from typing import Iterable, List, Optional, Sequence

_U32 = 0xFFFFFFFF
_FNV_BASIS = 2166136261
_FNV_PRIME = 16777619

_WHITE = 0x00FFFFFF
_BLACK = 0x00000000

_STAMP_SIZE = 8
_CENTER_STAMP = tuple(
    _WHITE if (row + col) % 2 == 0 else _BLACK
    for row in range(_STAMP_SIZE)
    for col in range(_STAMP_SIZE)
)


def fnv1a32_pixels(pixels: Iterable[int]) -> int:
    """FNV-1a over each pixel's four bytes, least significant first."""
    value_hash = _FNV_BASIS
    for value in pixels:
        for shift in (0, 8, 16, 24):
            value_hash ^= (value >> shift) & 0xFF
            value_hash = (value_hash * _FNV_PRIME) & _U32
    return value_hash


class Framebuffer:
    """Row-major pixels; each row holds `stride` pixels, `width` of them visible."""

    def __init__(self, width: int, height: int, stride: Optional[int] = None) -> None:
        if stride is None:
            stride = width
        if width <= 0 or height <= 0 or stride < width:
            raise ValueError("invalid framebuffer geometry")
        self.width = width
        self.height = height
        self.stride = stride
        self.pixels: List[int] = [0] * (height * stride)

    def _inside(self, x: int, y: int) -> bool:
        return 0 <= x < self.width and 0 <= y < self.height

    def pixel(self, x: int, y: int) -> int:
        """Return the colour at (x, y); raise IndexError outside the screen."""
        if not self._inside(x, y):
            raise IndexError("pixel outside framebuffer")
        return self.pixels[y * self.stride + x]

    def put_pixel(self, x: int, y: int, color: int) -> None:
        """Set one pixel; points off screen are ignored."""
        if self._inside(x, y):
            self.pixels[y * self.stride + x] = color & _U32

    def fill_rect(self, x: int, y: int, width: int, height: int, color: int) -> None:
        """Fill a rectangle clipped to the screen; an off-screen origin draws nothing."""
        if width <= 0 or height <= 0 or not self._inside(x, y):
            return
        max_x = min(x + width, self.width)
        max_y = min(y + height, self.height)
        row_fill = [color & _U32] * (max_x - x)
        for row in range(y, max_y):
            base = row * self.stride
            self.pixels[base + x:base + max_x] = row_fill

    def blit(self, src: Sequence[int], src_stride: int, x: int, y: int,
             width: int, height: int) -> None:
        """Copy a width x height block from src, clipped to the screen."""
        if not src or src_stride <= 0 or width <= 0 or height <= 0:
            return
        if src_stride < width or not self._inside(x, y):
            return
        copy_width = min(width, self.width - x)
        copy_height = min(height, self.height - y)
        if len(src) < (copy_height - 1) * src_stride + copy_width:
            raise ValueError("source buffer too small")
        for row in range(copy_height):
            dest = (y + row) * self.stride + x
            start = row * src_stride
            self.pixels[dest:dest + copy_width] = [
                value & _U32 for value in src[start:start + copy_width]
            ]

    def checksum(self) -> int:
        """FNV-1a hash of every pixel, padding included."""
        return fnv1a32_pixels(self.pixels)

    def render_test_pattern(self) -> int:
        """Draw quadrants, a border, a diagonal and a centre stamp; return the checksum."""
        w, h = self.width, self.height
        half_w, half_h = w // 2, h // 2

        self.fill_rect(0, 0, w, h, 0x00101010)
        self.fill_rect(0, 0, half_w, half_h, 0x00E53935)
        self.fill_rect(half_w, 0, half_w, half_h, 0x0043A047)
        self.fill_rect(0, half_h, half_w, half_h, 0x001E88E5)
        self.fill_rect(half_w, half_h, half_w, half_h, 0x00FDD835)

        for i in range(w):
            self.put_pixel(i, 0, _WHITE)
            self.put_pixel(i, h - 1, _WHITE)
        for i in range(h):
            self.put_pixel(0, i, _WHITE)
            self.put_pixel(w - 1, i, _WHITE)
        for i in range(min(w, h)):
            self.put_pixel(i, i, _WHITE)

        offset = _STAMP_SIZE // 2
        self.blit(
            _CENTER_STAMP,
            _STAMP_SIZE,
            (half_w - offset) & _U32,
            (half_h - offset) & _U32,
            _STAMP_SIZE,
            _STAMP_SIZE,
        )
        return self.checksum()