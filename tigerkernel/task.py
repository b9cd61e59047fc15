"""Task control blocks and the fixed-size task table."""

import enum
from dataclasses import dataclass, field
from typing import Callable, List, Optional

DEFAULT_CAPACITY = 8


class TaskState(enum.Enum):
    UNUSED = 0
    RUNNABLE = 1
    RUNNING = 2


@dataclass
class TaskContext:
    switches_in: int = 0
    switches_out: int = 0
    last_mepc: int = 0
    last_mcause: int = 0


@dataclass(eq=False)
class Task:
    id: int
    name: Optional[str] = None
    state: TaskState = TaskState.UNUSED
    run_count: int = 0
    context: TaskContext = field(default_factory=TaskContext)
    entry: Optional[Callable[["Task"], None]] = None

    def _record_frame(self, frame) -> None:
        if frame is not None:
            self.context.last_mepc = frame.mepc
            self.context.last_mcause = frame.mcause

    def switch_out(self, frame) -> None:
        """Account for leaving the CPU; a running task becomes runnable."""
        self.context.switches_out += 1
        self._record_frame(frame)
        if self.state is TaskState.RUNNING:
            self.state = TaskState.RUNNABLE

    def switch_in(self, frame) -> None:
        """Account for taking the CPU; the task becomes running."""
        self.context.switches_in += 1
        self._record_frame(frame)
        self.state = TaskState.RUNNING


class TaskTable:
    """Fixed set of task slots with ids 1..capacity."""

    def __init__(self, capacity: int = DEFAULT_CAPACITY) -> None:
        self._capacity = capacity
        self._tasks: List[Task] = []
        self.reset()

    @property
    def capacity(self) -> int:
        return self._capacity

    def reset(self) -> None:
        """Mark every slot unused."""
        self._tasks = [Task(id=slot + 1) for slot in range(self._capacity)]

    def create(self, name: str, entry: Callable[[Task], None]) -> Task:
        """Take the first unused slot; raise if entry is missing or the table is full."""
        if entry is None:
            raise ValueError("task entry is required")

        for task in self._tasks:
            if task.state is not TaskState.UNUSED:
                continue
            task.name = name
            task.state = TaskState.RUNNABLE
            task.run_count = 0
            task.context = TaskContext()
            task.entry = entry
            return task

        raise RuntimeError("task table is full")

    def find(self, task_id: int) -> Optional[Task]:
        """Return the live task with this id, or None."""
        for task in self._tasks:
            if task.id == task_id and task.state is not TaskState.UNUSED:
                return task
        return None