from tigerkernel.focus import Focus
from tigerkernel.layers import LayerStack
from tigerkernel.window import Window


def _stack():
    back = Window("Back", 48, 40, 220, 160)
    front = Window("Front", 120, 92, 220, 160)
    stack = LayerStack()
    stack.push_back(back)
    stack.push_back(front)
    return stack, back, front


def test_set_and_query_active():
    focus = Focus()
    window = Window("w", 0, 0, 50, 50)
    assert not focus.is_active_window(window)
    focus.set_active_window(window)
    assert focus.active_window is window
    assert focus.is_active_window(window)
    assert not focus.is_active_window(None)


def test_clear_if_active():
    focus = Focus()
    active = Window("a", 0, 0, 50, 50)
    other = Window("b", 0, 0, 50, 50)
    focus.set_active_window(active)
    assert focus.clear_if_active(other) is False
    assert focus.active_window is active
    assert focus.clear_if_active(active) is True
    assert focus.active_window is None


def test_reset():
    focus = Focus()
    focus.set_active_window(Window("a", 0, 0, 50, 50))
    focus.reset()
    assert focus.active_window is None


def test_hit_test_prefers_topmost():
    stack, back, front = _stack()
    focus = Focus()
    assert focus.hit_test(stack, 140, 120) is front
    assert focus.hit_test(stack, 50, 42) is back


def test_hit_test_follows_restacking():
    stack, back, front = _stack()
    stack.move_to_front(back)
    assert Focus().hit_test(stack, 140, 120) is back


def test_hit_test_miss_returns_none():
    stack, _, _ = _stack()
    focus = Focus()
    assert focus.hit_test(stack, 0, 0) is None
    assert focus.hit_test(None, 140, 120) is None


def test_zero_size_window_never_hit():
    stack = LayerStack()
    window = Window("z", 10, 10, 0, 0)
    stack.push_back(window)
    assert Focus().hit_test(stack, 10, 10) is None