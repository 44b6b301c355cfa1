"""Turn time tracker model.

Tracks how long each participant spends on their turns. Participants sit
in a ``TurnCycle``, a fixed roster with a wrap-around cursor. The
``TurnTimeTracker`` state machine is ticked once per frame with the
current monotonic time and two edge-triggered inputs (pause toggle and
next participant). While running, it accrues elapsed time to whoever
holds the cursor.
"""

from __future__ import annotations

import dataclasses
from typing import Generic, Iterator, TypeVar

T = TypeVar("T")


# =============================================================================
# ANSI Color Constants
# =============================================================================

class _Colors:
    """ANSI escape codes for terminal coloring."""
    DIM = "\033[2m"
    BOLD = "\033[1m"
    RESET = "\033[0m"


# =============================================================================
# Duration Formatting
# =============================================================================

def format_duration(seconds: float) -> str:
    """Format a duration as ``HH:MM:SS.hh``.

    The duration is first rounded to whole nanoseconds so float drift
    does not drop a hundredth. Hundredths are then truncated.

    Args:
        seconds: Non-negative duration in seconds.

    Returns:
        The formatted duration, e.g. ``"00:01:02.50"``.
    """
    total_ns = round(seconds * 1_000_000_000)
    total_seconds, remainder_ns = divmod(total_ns, 1_000_000_000)
    hours = total_seconds // 3600
    minutes = (total_seconds % 3600) // 60
    secs = total_seconds % 60
    hundredths = remainder_ns // 10_000_000
    return f"{hours:02}:{minutes:02}:{secs:02}.{hundredths:02}"


# =============================================================================
# TurnCycle
# =============================================================================

class TurnCycle(Generic[T]):
    """An ordered roster whose cursor wraps around forever.

    The cursor is an index into the roster, so ``advance()`` past the
    last item returns to the first. ``current_index`` is valid whenever
    the roster is non-empty.
    """

    def __init__(self, items: list[T] | None = None) -> None:
        self._items: list[T] = list(items) if items else []
        self.current_index = 0

    def push(self, item: T) -> None:
        """Append an item to the roster. The cursor does not move."""
        self._items.append(item)

    def _check_invariants(self, method_name: str) -> None:
        if not self._items:
            raise IndexError(f"Can't call {method_name}() on empty TurnCycle")
        if not 0 <= self.current_index < len(self._items):
            raise RuntimeError(
                f"TurnCycle invariant broken: {method_name}() called with "
                f"current_index={self.current_index} and len={len(self._items)}"
            )

    def current(self) -> T:
        """Return the item under the cursor.

        Raises:
            IndexError: If the roster is empty.
        """
        self._check_invariants("current")
        return self._items[self.current_index]

    def advance(self) -> None:
        """Move the cursor to the next item, wrapping to the first.

        Raises:
            IndexError: If the roster is empty.
        """
        self._check_invariants("advance")
        self.current_index = (self.current_index + 1) % len(self._items)

    def raw(self) -> tuple[tuple[T, ...], int]:
        """Return a read-only view of the roster and the cursor index.

        Raises:
            IndexError: If the roster is empty.
        """
        self._check_invariants("raw")
        return tuple(self._items), self.current_index

    def __len__(self) -> int:
        return len(self._items)

    def __iter__(self) -> Iterator[T]:
        return iter(self._items)


# =============================================================================
# Participant
# =============================================================================

@dataclasses.dataclass
class Participant:
    """Someone taking turns.

    Attributes:
        name: Display name.
        display_color: Opaque display tag for the driver (the example
            driver uses an ANSI escape code).
        turn_count: Number of turns taken so far.
        total_time: Seconds accrued across all turns.
    """
    name: str
    display_color: str = ""
    turn_count: int = 0
    total_time: float = 0.0


# =============================================================================
# Timer States
# =============================================================================

@dataclasses.dataclass(frozen=True)
class Paused:
    """The clock is stopped; no time accrues."""


@dataclasses.dataclass(frozen=True)
class Running:
    """The clock is running.

    Attributes:
        last_tick: Monotonic time at which the accruing interval began.
    """
    last_tick: float


TimerState = Paused | Running


# =============================================================================
# Snapshot
# =============================================================================

@dataclasses.dataclass(frozen=True)
class ParticipantRow:
    """One participant's line of the tracker display."""
    is_current: bool
    name: str
    display_color: str
    total_time: float
    percentage: float
    turn_count: int
    average_per_turn: float

    def describe(self, name_width: int = 9) -> str:
        """Human-readable status line for this participant."""
        marker = "[X]" if self.is_current else "[ ]"
        return (
            f"{marker} {self.name:<{name_width}}: "
            f"{format_duration(self.total_time)} ({self.percentage:>2.0f}%) -- "
            f"({self.turn_count} turns; avg {self.average_per_turn:.3f} sec/turn)"
        )


@dataclasses.dataclass(frozen=True)
class TrackerSnapshot:
    """Read-only view of the tracker for display.

    Attributes:
        paused: Whether the clock is stopped.
        rows: One row per participant, in roster order.
    """
    paused: bool
    rows: tuple[ParticipantRow, ...]

    @property
    def grand_total(self) -> float:
        return sum(row.total_time for row in self.rows)

    def __str__(self) -> str:
        name_width = max([9] + [len(row.name) for row in self.rows])
        lines = []
        for row in self.rows:
            line = row.describe(name_width)
            if row.is_current:
                line = f"{_Colors.BOLD}{line}"
            lines.append(f"{row.display_color}{line}{_Colors.RESET}")
        if self.paused:
            lines.append(f"{_Colors.DIM}PAUSED{_Colors.RESET}")
        return "\n".join(lines)


# =============================================================================
# TurnTimeTracker
# =============================================================================

class TurnTimeTracker:
    """Turn timer state machine.

    Starts ``Paused``. A toggle while paused starts the clock; a toggle
    while running stops it without accruing that tick. Otherwise each
    running tick credits the elapsed time to the current participant
    before handling a next-participant event, so the outgoing
    participant keeps the time up to the change.

    Attributes:
        participants: The roster.
        timer: Current timer state.
    """

    def __init__(self) -> None:
        self.participants: TurnCycle[Participant] = TurnCycle()
        self.timer: TimerState = Paused()

    def add_participant(self, name: str, display_color: str = "") -> Participant:
        """Add a participant to the end of the roster.

        Returns:
            The new participant.
        """
        participant = Participant(name=name, display_color=display_color)
        self.participants.push(participant)
        return participant

    @property
    def is_paused(self) -> bool:
        return isinstance(self.timer, Paused)

    def tick(
        self,
        now: float,
        toggle_pressed: bool = False,
        next_pressed: bool = False,
    ) -> None:
        """Advance the state machine by one frame.

        Args:
            now: Current monotonic time in seconds.
            toggle_pressed: Whether the pause/resume key was pressed
                this frame.
            next_pressed: Whether the next-participant key was pressed
                this frame. Ignored while paused.

        Raises:
            ValueError: If ``now`` is earlier than the last tick.
            IndexError: If the clock is running with an empty roster.
        """
        if isinstance(self.timer, Paused):
            if toggle_pressed:
                self.timer = Running(last_tick=now)
            return

        if toggle_pressed:
            self.timer = Paused()
            return

        elapsed = now - self.timer.last_tick
        if elapsed < 0:
            raise ValueError(
                f"Elapsed tick time underflow: now={now} is before "
                f"last_tick={self.timer.last_tick}"
            )

        current = self.participants.current()
        current.total_time += elapsed
        # The first participant never receives a next-participant event.
        if current.turn_count == 0:
            current.turn_count = 1

        self.timer = Running(last_tick=now)

        if next_pressed:
            self.participants.advance()
            self.participants.current().turn_count += 1

    def snapshot(self) -> TrackerSnapshot:
        """Capture the roster and timer state for display."""
        if len(self.participants) == 0:
            return TrackerSnapshot(paused=self.is_paused, rows=())

        participants, current_index = self.participants.raw()
        grand_total = sum(p.total_time for p in participants)
        rows = []
        for i, p in enumerate(participants):
            percentage = 100.0 * p.total_time / grand_total if grand_total > 0 else 0.0
            average = p.total_time / p.turn_count if p.turn_count > 0 else 0.0
            rows.append(ParticipantRow(
                is_current=i == current_index,
                name=p.name,
                display_color=p.display_color,
                total_time=p.total_time,
                percentage=percentage,
                turn_count=p.turn_count,
                average_per_turn=average,
            ))
        return TrackerSnapshot(paused=self.is_paused, rows=tuple(rows))

    def __str__(self) -> str:
        return str(self.snapshot())
