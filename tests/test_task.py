from types import SimpleNamespace

import pytest

from tigerkernel.task import TaskState, TaskTable


def noop(task):
    return None


def test_create_assigns_sequential_ids():
    table = TaskTable(4)
    first = table.create("task-1", noop)
    second = table.create("task-2", noop)
    assert (first.id, second.id) == (1, 2)
    assert first.state is TaskState.RUNNABLE
    assert first.name == "task-1"
    assert table.find(2) is second


def test_find_unknown_returns_none():
    table = TaskTable(4)
    table.create("task-1", noop)
    assert table.find(3) is None


def test_create_requires_entry():
    table = TaskTable(2)
    with pytest.raises(ValueError):
        table.create("broken", None)


def test_create_fails_when_full():
    table = TaskTable(2)
    table.create("a", noop)
    table.create("b", noop)
    with pytest.raises(RuntimeError):
        table.create("c", noop)


def test_switch_in_and_out_record_frame():
    table = TaskTable(2)
    task = table.create("t", noop)
    frame = SimpleNamespace(mepc=0x1000, mcause=7)

    task.switch_in(frame)
    assert task.state is TaskState.RUNNING
    assert task.context.switches_in == 1
    assert task.context.last_mepc == frame.mepc

    task.switch_out(SimpleNamespace(mepc=0x2000, mcause=5))
    assert task.state is TaskState.RUNNABLE
    assert task.context.switches_out == 1
    assert task.context.last_mcause == 5


def test_switch_without_frame_keeps_previous_values():
    table = TaskTable(1)
    task = table.create("t", noop)
    task.switch_in(None)
    assert task.context.last_mepc == 0
    assert task.context.switches_in == 1


def test_reset_frees_all_slots():
    table = TaskTable(2)
    table.create("a", noop)
    table.reset()
    assert table.find(1) is None
    assert table.create("again", noop).id == 1