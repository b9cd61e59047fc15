"""Periodic tick clock driven by a deadline timer."""

INTERVAL_TICKS = 1_000_000
LOG_LIMIT = 4


class Timer:
    """Software deadline timer with a settable notion of time."""

    def __init__(self, now: int = 0) -> None:
        self.now = now
        self.deadline: "int | None" = None
        self.interrupts_enabled = False

    def read_time(self) -> int:
        return self.now

    def set_deadline(self, deadline: int) -> None:
        self.deadline = deadline

    def enable_interrupts(self) -> None:
        self.interrupts_enabled = True

    def advance(self, delta: int) -> int:
        """Move time forward and return the new time."""
        self.now += delta
        return self.now

    @property
    def pending(self) -> bool:
        """True when the deadline has been reached."""
        return self.deadline is not None and self.now >= self.deadline


class Clock:
    """Counts timer ticks and keeps the next deadline in the future."""

    INTERVAL_TICKS = INTERVAL_TICKS
    LOG_LIMIT = LOG_LIMIT

    def __init__(self, timer: Timer, console) -> None:
        self._timer = timer
        self._console = console
        self._ticks = 0
        self._next_deadline = 0
        self._log_count = 0

    @property
    def ticks(self) -> int:
        return self._ticks

    @property
    def next_deadline(self) -> int:
        return self._next_deadline

    def start(self) -> None:
        """Reset the tick count and arm the first deadline."""
        self._ticks = 0
        self._log_count = 0
        self._next_deadline = self._timer.read_time() + INTERVAL_TICKS
        self._timer.set_deadline(self._next_deadline)
        self._timer.enable_interrupts()

    def _program_deadline(self) -> None:
        now = self._timer.read_time()
        if self._next_deadline <= now:
            missed = (now - self._next_deadline) // INTERVAL_TICKS + 1
            self._next_deadline += missed * INTERVAL_TICKS
        self._timer.set_deadline(self._next_deadline)

    def handle_timer_interrupt(self) -> None:
        """Count a tick and rearm the timer, skipping missed intervals."""
        self._ticks += 1
        self._next_deadline += INTERVAL_TICKS
        self._program_deadline()

        if self._log_count < LOG_LIMIT:
            self._console.write("TICK: periodic interrupt\n")
            self._log_count += 1