import pytest

from tigerkernel.compositor import Compositor
from tigerkernel.drag import DispatchEventType, DragController
from tigerkernel.event_queue import EventQueue, InputEvent, InputEventType, MouseButton
from tigerkernel.layers import DEFAULT_CAPACITY
from tigerkernel.window import Window


def move(x, y, buttons=MouseButton.NONE):
    return InputEvent(InputEventType.MOUSE_MOVE, x, y, buttons=buttons)


def down(x, y, button=MouseButton.LEFT):
    return InputEvent(InputEventType.MOUSE_BUTTON_DOWN, x, y, buttons=button, button=button)


def up(x, y, button=MouseButton.LEFT):
    return InputEvent(InputEventType.MOUSE_BUTTON_UP, x, y, button=button)


@pytest.fixture
def scene():
    compositor = Compositor()
    compositor.reset(0x0012171D)
    back = Window("Back", 48, 40, 220, 160)
    front = Window("Front", 120, 92, 220, 160)
    compositor.add_window(back)
    compositor.add_window(front)
    queue = EventQueue()
    drag = DragController(compositor, queue)
    drag.register_window(back, 1)
    drag.register_window(front, 2)
    log = []
    drag.set_dispatch(lambda task, kind, event: log.append((task, kind)))
    return compositor, queue, drag, back, front, log


def test_drag_front_window_by_title_bar(scene):
    compositor, queue, drag, back, front, log = scene
    for event in (
        move(150, 100),
        down(150, 100),
        move(180, 120, MouseButton.LEFT),
        move(210, 142, MouseButton.LEFT),
        up(210, 142),
    ):
        queue.push(event)

    assert drag.dispatch_pending() == 5
    assert len(queue) == 0
    assert [k for _, k in log].count(DispatchEventType.CLICK_DOWN) == 1
    assert (2, DispatchEventType.CLICK_DOWN) in log
    drags = [t for t, k in log if k is DispatchEventType.DRAG]
    assert drags and all(t == 2 for t in drags)
    assert (front.frame.x, front.frame.y) == (180, 134)
    assert (back.frame.x, back.frame.y) == (48, 40)
    assert compositor.active_window is front
    assert drag.dragging is None


def test_click_on_back_window_activates_it(scene):
    compositor, queue, drag, back, front, log = scene
    queue.push(down(60, 50))
    drag.dispatch_pending()
    assert compositor.active_window is back
    assert compositor.window_at(len(compositor.layers) - 1) is back
    assert log == [(1, DispatchEventType.CLICK_DOWN)]
    assert drag.dragging is back


def test_click_in_content_does_not_start_drag(scene):
    compositor, queue, drag, back, front, log = scene
    queue.push(down(200, 200))
    queue.push(move(250, 230, MouseButton.LEFT))
    drag.dispatch_pending()
    assert drag.dragging is None
    assert (front.frame.x, front.frame.y) == (120, 92)
    assert log == [(2, DispatchEventType.CLICK_DOWN), (2, DispatchEventType.MOVE)]


def test_drag_position_clamps_at_zero(scene):
    compositor, queue, drag, back, front, log = scene
    queue.push(down(125, 95))
    queue.push(move(2, 1, MouseButton.LEFT))
    drag.dispatch_pending()
    assert (front.frame.x, front.frame.y) == (0, 0)


def test_events_outside_windows_are_counted_but_not_dispatched(scene):
    compositor, queue, drag, back, front, log = scene
    queue.push(move(5, 5))
    queue.push(down(5, 5))
    queue.push(up(5, 5))
    assert drag.dispatch_pending() == 3
    assert log == []


def test_button_up_goes_to_dragged_window(scene):
    compositor, queue, drag, back, front, log = scene
    queue.push(down(150, 100))
    queue.push(up(60, 50))
    drag.dispatch_pending()
    assert log[-1] == (2, DispatchEventType.CLICK_UP)
    assert drag.dragging is None


def test_register_limits():
    drag = DragController(Compositor())
    with pytest.raises(ValueError):
        drag.register_window(None, 1)
    for i in range(DEFAULT_CAPACITY):
        drag.register_window(Window("w", 0, 0, 50, 50), i + 1)
    with pytest.raises(OverflowError):
        drag.register_window(Window("extra", 0, 0, 50, 50), 99)


def test_reset_forgets_bindings(scene):
    compositor, queue, drag, back, front, log = scene
    drag.reset()
    queue.push(down(150, 100))
    assert drag.dispatch_pending() == 1
    assert log == []
    assert drag.dragging is None