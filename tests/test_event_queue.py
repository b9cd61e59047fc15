import pytest

from tigerkernel.event_queue import EventQueue, InputEvent, InputEventType, MouseButton


def _move(x, y):
    return InputEvent(InputEventType.MOUSE_MOVE, x, y)


def test_fifo_order():
    queue = EventQueue(4)
    events = [_move(i, i) for i in range(3)]
    for event in events:
        queue.push(event)
    assert len(queue) == 3
    assert [queue.pop() for _ in range(3)] == events
    assert len(queue) == 0


def test_pop_empty_raises():
    queue = EventQueue(2)
    with pytest.raises(IndexError):
        queue.pop()


def test_push_full_raises_and_keeps_contents():
    queue = EventQueue(2)
    queue.push(_move(1, 1))
    queue.push(_move(2, 2))
    with pytest.raises(OverflowError):
        queue.push(_move(3, 3))
    assert len(queue) == 2
    assert queue.pop() == _move(1, 1)


def test_wraparound_keeps_order():
    queue = EventQueue(3)
    for round_no in range(5):
        queue.push(_move(round_no, 0))
        queue.push(_move(round_no, 1))
        assert queue.pop() == _move(round_no, 0)
        assert queue.pop() == _move(round_no, 1)
    assert len(queue) == 0


def test_reset_empties_queue():
    queue = EventQueue(3)
    queue.push(_move(1, 2))
    queue.reset()
    assert len(queue) == 0
    with pytest.raises(IndexError):
        queue.pop()


def test_push_none_rejected():
    queue = EventQueue(3)
    with pytest.raises(ValueError):
        queue.push(None)
    assert len(queue) == 0


def test_invalid_capacity():
    with pytest.raises(ValueError):
        EventQueue(0)


def test_drain_yields_all_in_order():
    queue = EventQueue(4)
    down = InputEvent(InputEventType.MOUSE_BUTTON_DOWN, 5, 6, MouseButton.LEFT, MouseButton.LEFT)
    up = InputEvent(InputEventType.MOUSE_BUTTON_UP, 5, 6, MouseButton.NONE, MouseButton.LEFT)
    queue.push(down)
    queue.push(up)
    assert list(queue.drain()) == [down, up]
    assert len(queue) == 0