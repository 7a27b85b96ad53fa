"""Work/break phase state machine.

Cycle: PreWork -> Working -> PostWork -> Break -> Complete

Each phase is its own immutable value. A timed phase (Working, Break) is
ticked with the elapsed time since it started and either comes back
unchanged (Continue) or hands over its successor marker (Completed).
"""

import abc
import enum
from dataclasses import dataclass
from typing import Union


class TransitionError(ValueError):
    """Raised when an operation is applied to a phase that does not support it."""


class PhaseKind(enum.Enum):
    PRE_WORK = "PreWork"
    WORKING = "Working"
    POST_WORK = "PostWork"
    BREAK = "Break"
    COMPLETE = "Complete"


@dataclass(frozen=True)
class Phase:
    """Base for all phases. `kind` is the discriminant."""

    kind = None


# ── Markers ──────────────────────────────────────────────────────────

@dataclass(frozen=True)
class PreWork(Phase):
    """Nothing started yet."""

    kind = PhaseKind.PRE_WORK

    def start_working(self, working_period: float, start_time: float) -> "Working":
        return Working(start_time=start_time, working_period=working_period)


@dataclass(frozen=True)
class PostWork(Phase):
    """Work period is over; waiting for the decision to take a break."""

    kind = PhaseKind.POST_WORK

    def start_break(self, break_length: float, start_time: float) -> "Break":
        return Break(start_time=start_time, break_length=break_length)


@dataclass(frozen=True)
class Complete(Phase):
    """Break is over; the cycle is finished."""

    kind = PhaseKind.COMPLETE


# ── Tick outcomes ────────────────────────────────────────────────────

@dataclass(frozen=True)
class Continue:
    """Period not over yet. `phase` is the ticked phase, untouched."""
    phase: "TimedPhase"


@dataclass(frozen=True)
class Completed:
    """Period over. `phase` is the successor marker."""
    phase: Phase


TickResult = Union[Continue, Completed]


# ── Timed phases ─────────────────────────────────────────────────────

@dataclass(frozen=True)
class TimedPhase(Phase, abc.ABC):
    """A phase with a start instant and a period length.

    Abstract: Working and Break provide `period_length`, `successor()` and `stop()`.
    """

    @property
    @abc.abstractmethod
    def period_length(self) -> float:
        ...

    @abc.abstractmethod
    def successor(self) -> Phase:
        ...

    @abc.abstractmethod
    def stop(self) -> Phase:
        ...

    def tick(self, elapsed: float) -> TickResult:
        """Continue while elapsed < period, otherwise complete.

        Elapsed equal to the period counts as complete.
        """
        if elapsed < self.period_length:
            return Continue(self)
        return Completed(self.successor())

    def remaining(self, elapsed: float) -> float:
        return self.period_length - elapsed


@dataclass(frozen=True)
class Working(TimedPhase):
    start_time: float
    working_period: float

    kind = PhaseKind.WORKING

    def __post_init__(self):
        if self.working_period < 0:
            raise ValueError(f"working_period must not be negative: {self.working_period}")

    @property
    def period_length(self) -> float:
        return self.working_period

    def successor(self) -> PostWork:
        return PostWork()

    def stop(self) -> PreWork:
        """Abandon the work period, whatever time has elapsed."""
        return PreWork()


@dataclass(frozen=True)
class Break(TimedPhase):
    start_time: float
    break_length: float

    kind = PhaseKind.BREAK

    def __post_init__(self):
        if self.break_length < 0:
            raise ValueError(f"break_length must not be negative: {self.break_length}")

    @property
    def period_length(self) -> float:
        return self.break_length

    def successor(self) -> Complete:
        return Complete()

    def stop(self) -> Complete:
        """End the break early, whatever time has elapsed."""
        return Complete()


# ── Checked dispatch ─────────────────────────────────────────────────
# For callers holding a phase of unknown type. Illegal pairs raise.

def _illegal(operation: str, phase) -> TransitionError:
    kind = getattr(phase, "kind", None)
    name = kind.value if isinstance(kind, PhaseKind) else type(phase).__name__
    return TransitionError(f"cannot {operation} from {name}")


def start_working(phase: Phase, working_period: float, start_time: float) -> Working:
    if not isinstance(phase, PreWork):
        raise _illegal("start working", phase)
    return phase.start_working(working_period, start_time)


def start_break(phase: Phase, break_length: float, start_time: float) -> Break:
    if not isinstance(phase, PostWork):
        raise _illegal("start break", phase)
    return phase.start_break(break_length, start_time)


def tick(phase: Phase, elapsed: float) -> TickResult:
    if not isinstance(phase, TimedPhase):
        raise _illegal("tick", phase)
    return phase.tick(elapsed)


def stop(phase: Phase) -> Phase:
    if not isinstance(phase, TimedPhase):
        raise _illegal("stop", phase)
    return phase.stop()
