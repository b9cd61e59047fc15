import pytest

from tigerkernel.keyboard_dispatch import (
    KeyboardControl,
    KeyboardDispatcher,
    KeyboardEvent,
    KeyboardEventType,
)
from tigerkernel.layers import DEFAULT_CAPACITY
from tigerkernel.window import Window


def text(ch):
    return KeyboardEvent(KeyboardEventType.TEXT, text=ch)


def control(code):
    return KeyboardEvent(KeyboardEventType.CONTROL, control=code)


@pytest.fixture
def setup():
    back = Window("Back", 48, 40, 220, 160)
    front = Window("Front", 120, 92, 220, 160)
    dispatcher = KeyboardDispatcher()
    dispatcher.register_window(back, 1)
    dispatcher.register_window(front, 2)
    received = []
    dispatcher.set_sink(lambda endpoint, event: received.append((endpoint, event)))
    return dispatcher, back, front, received


def test_events_follow_focus(setup):
    dispatcher, back, front, received = setup
    front_events = [(text("h"), front), (text("i"), front), (control(KeyboardControl.ENTER), front)]
    assert dispatcher.dispatch_pending(front_events) == 3
    back_events = [(text("o"), back), (control(KeyboardControl.BACKSPACE), back)]
    assert dispatcher.dispatch_pending(iter(back_events)) == 2

    assert [e for e, _ in received] == [2, 2, 2, 1, 1]
    assert [ev for _, ev in received] == [ev for ev, _ in front_events + back_events]


def test_unbound_focus_counts_but_does_not_deliver(setup):
    dispatcher, back, front, received = setup
    stranger = Window("Other", 0, 0, 50, 50)
    assert dispatcher.dispatch_pending([(text("x"), stranger), (text("y"), None)]) == 2
    assert received == []


def test_no_sink_delivers_nothing(setup):
    dispatcher, back, front, received = setup
    dispatcher.set_sink(None)
    assert dispatcher.dispatch_pending([(text("x"), front)]) == 1
    assert received == []


def test_reregister_updates_endpoint(setup):
    dispatcher, back, front, received = setup
    dispatcher.register_window(front, 7)
    assert dispatcher.endpoint_for(front) == 7
    dispatcher.dispatch_pending([(text("z"), front)])
    assert received[0][0] == 7


def test_register_rejects_bad_input():
    dispatcher = KeyboardDispatcher()
    with pytest.raises(ValueError):
        dispatcher.register_window(None, 1)
    with pytest.raises(ValueError):
        dispatcher.register_window(Window("w", 0, 0, 50, 50), 0)


def test_register_capacity():
    dispatcher = KeyboardDispatcher()
    for i in range(DEFAULT_CAPACITY):
        dispatcher.register_window(Window("w", 0, 0, 50, 50), i + 1)
    with pytest.raises(OverflowError):
        dispatcher.register_window(Window("extra", 0, 0, 50, 50), 99)


def test_reset_drops_bindings(setup):
    dispatcher, back, front, received = setup
    dispatcher.reset()
    assert dispatcher.endpoint_for(front) is None
    dispatcher.set_sink(lambda endpoint, event: received.append(endpoint))
    dispatcher.dispatch_pending([(text("a"), front)])
    assert received == []