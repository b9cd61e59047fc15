"""Trap dispatch: timer interrupts and the breakpoint self-test."""

from dataclasses import dataclass
from typing import Callable

INTERRUPT_BIT = 1 << 63
CODE_MASK = INTERRUPT_BIT - 1
INTERRUPT_SUPERVISOR_TIMER = 5
INTERRUPT_MACHINE_TIMER = 7
EXCEPTION_BREAKPOINT = 3


def format_hex_u64(value: int) -> str:
    """Format as 0x followed by 16 lower-case hex digits."""
    return f"0x{value & 0xFFFFFFFFFFFFFFFF:016x}"


@dataclass
class TrapFrame:
    mcause: int = 0
    mepc: int = 0
    mtval: int = 0

    @property
    def is_interrupt(self) -> bool:
        return bool(self.mcause & INTERRUPT_BIT)

    @property
    def code(self) -> int:
        return self.mcause & CODE_MASK


class TrapHalt(RuntimeError):
    """Raised where the machine would stop on an unhandled trap."""

    def __init__(self, message: str, frame: "TrapFrame | None" = None) -> None:
        super().__init__(message)
        self.frame = frame


class TrapHandler:
    """Routes traps to the clock, the scheduler and the breakpoint test."""

    def __init__(self, console, clock, scheduler, read_halfword: Callable[[int], int]) -> None:
        self._console = console
        self._clock = clock
        self._scheduler = scheduler
        self._read_halfword = read_halfword
        self._test_armed = False
        self._test_passed = False

    def _instruction_len(self, pc: int) -> int:
        insn = self._read_halfword(pc) & 0xFFFF
        return 4 if (insn & 0x3) == 0x3 else 2

    def _dispatch_exception(self, frame: TrapFrame) -> bool:
        if frame.code != EXCEPTION_BREAKPOINT or not self._test_armed:
            return False
        self._test_armed = False
        self._test_passed = True
        self._console.write(
            f"TRAP_TEST: mcause={format_hex_u64(frame.mcause)} mepc={format_hex_u64(frame.mepc)}\n"
        )
        frame.mepc += self._instruction_len(frame.mepc)
        return True

    def _dispatch_interrupt(self, frame: TrapFrame) -> bool:
        if frame.code not in (INTERRUPT_SUPERVISOR_TIMER, INTERRUPT_MACHINE_TIMER):
            return False
        self._clock.handle_timer_interrupt()
        self._scheduler.handle_timer_interrupt(frame)
        return True

    def trigger_test(self, pc: int) -> int:
        """Raise a breakpoint at pc and return the address execution resumes at."""
        self._test_armed = True
        self._test_passed = False
        self._console.write("TRAP_TEST: trigger\n")

        frame = TrapFrame(mcause=EXCEPTION_BREAKPOINT, mepc=pc)
        self.handle(frame)

        if self._test_passed:
            self._console.write("TRAP_TEST: handled\n")
            return frame.mepc

        self._console.write("TRAP_TEST: failed\n")
        raise TrapHalt("trap self-test failed", frame)

    def handle(self, frame: TrapFrame) -> None:
        """Handle one trap; raise TrapHalt if nothing claims it."""
        if frame.is_interrupt:
            if self._dispatch_interrupt(frame):
                return
        elif self._dispatch_exception(frame):
            return

        self._console.write(
            f"TRAP: unexpected mcause={format_hex_u64(frame.mcause)}"
            f" mepc={format_hex_u64(frame.mepc)}"
            f" mtval={format_hex_u64(frame.mtval)}\n"
        )
        raise TrapHalt(f"unexpected trap {format_hex_u64(frame.mcause)}", frame)