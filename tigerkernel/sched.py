"""Round-robin scheduler driven by timer interrupts."""

from functools import partial
from typing import List, Optional

from .task import Task, TaskState, TaskTable

SWITCH_LOG_LIMIT = 12
TASK_LOG_LIMIT = 4
ALT_SWITCH_TARGET = 4


class RoundRobinScheduler:
    """Cycles through a queue of runnable tasks, one per timer tick."""

    def __init__(self, console, tasks: Optional[TaskTable] = None) -> None:
        self._console = console
        self._tasks = tasks if tasks is not None else TaskTable()
        self.reset()

    def reset(self) -> None:
        """Clear the task table and the run queue."""
        self._tasks.reset()
        self._queue: List[int] = []
        self._current_slot: Optional[int] = None
        self._switch_log_count = 0
        self._alternating_switches = 0
        self._alternation_reported = False
        self._running = False
        self._bootstrapped = False

    @property
    def runnable_count(self) -> int:
        return len(self._queue)

    @property
    def running(self) -> bool:
        return self._running

    @property
    def current_task(self) -> Optional[Task]:
        return self._task_at(self._current_slot)

    def _task_at(self, slot: Optional[int]) -> Optional[Task]:
        if slot is None or slot >= len(self._queue):
            return None
        return self._tasks.find(self._queue[slot])

    def _find_next_slot(self) -> Optional[int]:
        count = len(self._queue)
        if count == 0:
            return None
        start = 0 if self._current_slot is None else (self._current_slot + 1) % count
        for offset in range(count):
            slot = (start + offset) % count
            task = self._task_at(slot)
            if task is not None and task.state is TaskState.RUNNABLE:
                return slot
        return None

    def _enqueue(self, task: Task) -> bool:
        if len(self._queue) >= self._tasks.capacity:
            return False
        self._queue.append(task.id)
        return True

    def _run_test_task(self, label: int, task: Task) -> None:
        if task.run_count <= TASK_LOG_LIMIT:
            self._console.write(f"TASK: {label} running\n")

    def bootstrap_test_tasks(self) -> None:
        """Create and queue the two demonstration tasks, once."""
        if self._bootstrapped:
            return

        self.reset()
        try:
            first = self._tasks.create("task-1", partial(self._run_test_task, 1))
            second = self._tasks.create("task-2", partial(self._run_test_task, 2))
        except RuntimeError:
            ok = False
        else:
            ok = self._enqueue(first) and self._enqueue(second)

        self._bootstrapped = True
        if not ok:
            self._console.write("SCHED: bootstrap failed\n")
            return

        self._running = True
        self._console.write("SCHED: policy=round-robin runnable=2\n")

    def handle_timer_interrupt(self, frame) -> None:
        """Switch to the next runnable task and run its entry."""
        if not self._running or not self._queue:
            return

        prev = self._task_at(self._current_slot)
        prev_id = 0
        if prev is not None:
            prev_id = prev.id
            prev.switch_out(frame)

        slot = self._find_next_slot()
        if slot is None:
            return
        nxt = self._task_at(slot)
        if nxt is None:
            return

        self._current_slot = slot
        nxt.switch_in(frame)

        if prev is not None and prev_id != nxt.id and self._switch_log_count < SWITCH_LOG_LIMIT:
            self._console.write(f"SCHED: switch {prev_id} -> {nxt.id}\n")
            self._switch_log_count += 1

        if {prev_id, nxt.id} == {1, 2}:
            self._alternating_switches += 1
            if not self._alternation_reported and self._alternating_switches >= ALT_SWITCH_TARGET:
                self._console.write("SCHED_TEST: alternating tasks confirmed\n")
                self._alternation_reported = True

        nxt.run_count += 1
        if nxt.entry is not None:
            nxt.entry(nxt)

        if nxt.state is TaskState.RUNNING:
            nxt.state = TaskState.RUNNABLE