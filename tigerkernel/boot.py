"""Boot-time self checks of the graphics, window manager and input routing."""

from dataclasses import dataclass
from typing import Dict, List, Optional, Tuple

from .compositor import Compositor
from .drag import DispatchEventType, DragController
from .event_queue import EventQueue, InputEvent, InputEventType, MouseButton
from .framebuffer import Framebuffer
from .keyboard_dispatch import (
    KeyboardControl,
    KeyboardDispatcher,
    KeyboardEvent,
    KeyboardEventType,
)
from .window import Window

_U32 = 0xFFFFFFFF
_FNV_BASIS = 2166136261
_FNV_PRIME = 16777619


@dataclass
class BootReport:
    """Markers and outcomes of each boot check."""

    gfx_marker: int = 0
    gfx_deterministic: bool = False
    wm_marker: Optional[int] = None
    overlap_ok: bool = False
    overlap_marker: int = 0
    mouse_ok: bool = False
    mouse_marker: int = 0
    keyboard_ok: bool = False
    keyboard_marker: int = 0


def _hex32(value: int) -> str:
    return f"{value & _U32:08X}"


def _back_and_front() -> Tuple[Window, Window]:
    back = Window("Back", 48, 40, 220, 160)
    back.style.title_bar_color = 0x00326F95
    back.style.content_color = 0x00E9F3FB
    front = Window("Front", 120, 92, 220, 160)
    front.style.title_bar_color = 0x00814444
    front.style.content_color = 0x00F5E6DE
    return back, front


def _check_gfx(console, framebuffer: Framebuffer, report: BootReport) -> None:
    marker_a = framebuffer.render_test_pattern()
    marker_b = framebuffer.render_test_pattern()
    report.gfx_marker = marker_a
    report.gfx_deterministic = marker_a == marker_b
    if report.gfx_deterministic:
        console.write(f"GFX: deterministic marker 0x{_hex32(marker_a)}\n")
    else:
        console.write(f"GFX: marker mismatch 0x{_hex32(marker_a)} != 0x{_hex32(marker_b)}\n")


def _check_single_window(console, compositor: Compositor, report: BootReport) -> None:
    main_window = Window("Terminal", 32, 20, 220, 140)
    main_window.style.title_bar_color = 0x002F4F89
    main_window.style.content_color = 0x00F8F9FB
    compositor.reset(0x00161C26)
    try:
        compositor.add_window(main_window)
    except (ValueError, OverflowError):
        console.write("WM: single window compose failed\n")
        return
    report.wm_marker = compositor.render()
    console.write(f"WM: single window composed marker 0x{_hex32(report.wm_marker)}\n")


def _check_overlap(console, compositor: Compositor, report: BootReport) -> None:
    back, front = _back_and_front()
    compositor.reset(0x0012181F)
    try:
        compositor.add_window(back)
        compositor.add_window(front)
        hit_before = compositor.hit_test(140, 120)
        marker_before = compositor.render()
        compositor.activate_window(back)
        hit_after = compositor.hit_test(140, 120)
        marker_after = compositor.render()
        report.overlap_marker = marker_after
        report.overlap_ok = (
            hit_before is front
            and hit_after is back
            and compositor.active_window is back
            and marker_before != marker_after
        )
    except (ValueError, OverflowError):
        report.overlap_ok = False

    if report.overlap_ok:
        console.write(f"WM: overlap focus activation marker 0x{_hex32(report.overlap_marker)}\n")
    else:
        console.write("WM: overlap focus activation failed\n")


def _check_mouse(console, compositor: Compositor, report: BootReport) -> None:
    back, front = _back_and_front()
    compositor.reset(0x0012171D)
    queue = EventQueue()
    drag = DragController(compositor, queue)
    counts: Dict[DispatchEventType, int] = {kind: 0 for kind in DispatchEventType}
    last_task: Dict[DispatchEventType, int] = {}

    def record(task_id: int, kind: DispatchEventType, event: InputEvent) -> None:
        counts[kind] += 1
        last_task[kind] = task_id

    drag.set_dispatch(record)
    left = MouseButton.LEFT
    try:
        compositor.add_window(back)
        compositor.add_window(front)
        drag.register_window(back, 1)
        drag.register_window(front, 2)
    except (ValueError, OverflowError):
        console.write("WM: mouse dispatch drag failed\n")
        return

    front_x, front_y = front.frame.x, front.frame.y
    for event in (
        InputEvent(InputEventType.MOUSE_MOVE, 150, 100),
        InputEvent(InputEventType.MOUSE_BUTTON_DOWN, 150, 100, buttons=left, button=left),
        InputEvent(InputEventType.MOUSE_MOVE, 180, 120, buttons=left),
        InputEvent(InputEventType.MOUSE_MOVE, 210, 142, buttons=left),
        InputEvent(InputEventType.MOUSE_BUTTON_UP, 210, 142, button=left),
    ):
        queue.push(event)

    processed = drag.dispatch_pending()
    report.mouse_marker = compositor.render()
    report.mouse_ok = (
        processed == 5
        and counts[DispatchEventType.CLICK_DOWN] == 1
        and last_task.get(DispatchEventType.CLICK_DOWN) == 2
        and counts[DispatchEventType.DRAG] >= 1
        and last_task.get(DispatchEventType.DRAG) == 2
        and front.frame.x > front_x
        and front.frame.y > front_y
        and back.frame.x == 48
        and back.frame.y == 40
        and compositor.active_window is front
    )

    if report.mouse_ok:
        console.write(f"WM: mouse dispatch drag marker 0x{_hex32(report.mouse_marker)}\n")
    else:
        console.write("WM: mouse dispatch drag failed\n")


class _KeyboardStats:
    def __init__(self) -> None:
        self.text = {1: 0, 2: 0}
        self.control = {1: 0, 2: 0}
        self.invalid = 0
        self.marker = _FNV_BASIS

    def _hash(self, byte: int) -> None:
        self.marker = ((self.marker ^ (byte & 0xFF)) * _FNV_PRIME) & _U32

    def record(self, endpoint_id: int, event: KeyboardEvent) -> None:
        if event is None:
            return
        self._hash(endpoint_id)
        self._hash(int(event.type))
        if event.type is KeyboardEventType.TEXT:
            self._hash(ord(event.text) if event.text else 0)
            counter = self.text
        elif event.type is KeyboardEventType.CONTROL:
            self._hash(int(event.control))
            counter = self.control
        else:
            self.invalid += 1
            return
        if endpoint_id in counter:
            counter[endpoint_id] += 1
        else:
            self.invalid += 1


def _check_keyboard(console, compositor: Compositor, report: BootReport) -> None:
    back, front = _back_and_front()
    compositor.reset(0x0014131A)
    keyboard = KeyboardDispatcher()
    stats = _KeyboardStats()
    keyboard.set_sink(stats.record)
    pending: List[Tuple[KeyboardEvent, object]] = []

    def press(event: KeyboardEvent) -> None:
        pending.append((event, compositor.active_window))

    def flush() -> int:
        events = list(pending)
        pending.clear()
        return keyboard.dispatch_pending(events)

    try:
        compositor.add_window(back)
        compositor.add_window(front)
        keyboard.register_window(back, 1)
        keyboard.register_window(front, 2)
    except (ValueError, OverflowError):
        console.write("WM: keyboard focus routing failed\n")
        return

    press(KeyboardEvent(KeyboardEventType.TEXT, text="h"))
    press(KeyboardEvent(KeyboardEventType.TEXT, text="i"))
    press(KeyboardEvent(KeyboardEventType.CONTROL, control=KeyboardControl.ENTER))
    front_count = flush()

    back_count = 0
    try:
        compositor.activate_window(back)
    except ValueError:
        pass
    else:
        press(KeyboardEvent(KeyboardEventType.TEXT, text="o"))
        press(KeyboardEvent(KeyboardEventType.CONTROL, control=KeyboardControl.BACKSPACE))
        back_count = flush()

    report.keyboard_marker = stats.marker
    report.keyboard_ok = (
        front_count == 3
        and back_count == 2
        and not pending
        and stats.text[1] == 1
        and stats.control[1] == 1
        and stats.text[2] == 2
        and stats.control[2] == 1
        and stats.invalid == 0
        and compositor.active_window is back
    )

    if report.keyboard_ok:
        console.write(f"WM: keyboard focus routing marker 0x{_hex32(report.keyboard_marker)}\n")
    else:
        console.write("WM: keyboard focus routing failed\n")


def run_boot_checks(console, framebuffer: Optional[Framebuffer]) -> BootReport:
    """Run the boot self checks, logging each to the console; return their results.

    Raises RuntimeError when there is no framebuffer to draw on.
    """
    console.write("BOOT: kernel entry\n")
    if framebuffer is None:
        console.write("GFX: framebuffer init failed\n")
        raise RuntimeError("framebuffer init failed")
    console.write("GFX: framebuffer initialized\n")

    report = BootReport()
    compositor = Compositor(framebuffer)
    _check_gfx(console, framebuffer, report)
    _check_single_window(console, compositor, report)
    _check_overlap(console, compositor, report)
    _check_mouse(console, compositor, report)
    _check_keyboard(console, compositor, report)
    return report