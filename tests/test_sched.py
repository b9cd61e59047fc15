import io
from types import SimpleNamespace

from tigerkernel.console import Console
from tigerkernel.sched import TASK_LOG_LIMIT, RoundRobinScheduler
from tigerkernel.task import TaskState, TaskTable

FRAME = SimpleNamespace(mepc=0x80000000, mcause=(1 << 63) | 7)


def make_scheduler(capacity=8):
    out = io.BytesIO()
    sched = RoundRobinScheduler(Console(out, io.BytesIO()), TaskTable(capacity))
    return sched, out


def text(out):
    return out.getvalue().decode()


def test_bootstrap_announces_policy():
    sched, out = make_scheduler()
    sched.bootstrap_test_tasks()
    assert sched.runnable_count == 2
    assert sched.running
    assert "SCHED: policy=round-robin runnable=2" in text(out)


def test_bootstrap_runs_once():
    sched, out = make_scheduler()
    sched.bootstrap_test_tasks()
    sched.bootstrap_test_tasks()
    assert text(out).count("SCHED: policy=round-robin") == 1


def test_ticks_alternate_between_tasks():
    sched, out = make_scheduler()
    sched.bootstrap_test_tasks()
    seen = []
    for _ in range(5):
        sched.handle_timer_interrupt(FRAME)
        seen.append(sched.current_task.id)
    assert seen == [1, 2, 1, 2, 1]
    log = text(out)
    assert "SCHED: switch 1 -> 2" in log
    assert "SCHED: switch 2 -> 1" in log
    assert "TASK: 1 running" in log
    assert "TASK: 2 running" in log
    assert log.count("SCHED_TEST: alternating tasks confirmed") == 1


def test_task_state_is_runnable_after_tick():
    sched, _ = make_scheduler()
    sched.bootstrap_test_tasks()
    sched.handle_timer_interrupt(FRAME)
    task = sched.current_task
    assert task.state is TaskState.RUNNABLE
    assert task.run_count == 1
    assert task.context.last_mepc == FRAME.mepc


def test_task_log_is_limited():
    sched, out = make_scheduler()
    sched.bootstrap_test_tasks()
    for _ in range(20):
        sched.handle_timer_interrupt(FRAME)
    assert text(out).count("TASK: 1 running") == TASK_LOG_LIMIT


def test_idle_without_bootstrap():
    sched, out = make_scheduler()
    sched.handle_timer_interrupt(FRAME)
    assert sched.current_task is None
    assert out.getvalue() == b""


def test_bootstrap_failure_with_one_slot():
    sched, out = make_scheduler(capacity=1)
    sched.bootstrap_test_tasks()
    sched.handle_timer_interrupt(FRAME)
    assert "SCHED: bootstrap failed" in text(out)
    assert not sched.running
    assert sched.current_task is None