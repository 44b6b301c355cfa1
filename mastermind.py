"""Mastermind game model.

Core classes for the code-breaking puzzle: the color palette, guess
scoring, and the puzzle state machine that owns the hidden target, the
history of scored guesses, and the working row being assembled by the
solver. A driver calls into ``MastermindGame`` once per input tick and
reads back a ``PuzzleSnapshot`` to display.
"""

from __future__ import annotations

import collections
import dataclasses
import enum
import random


# =============================================================================
# ANSI Color Constants
# =============================================================================

class _Colors:
    """ANSI escape codes for terminal coloring."""
    RED = "\033[91m"
    ORANGE = "\033[38;5;208m"
    YELLOW = "\033[93m"
    GREEN = "\033[92m"
    BLUE = "\033[94m"
    PURPLE = "\033[95m"
    DIM = "\033[2m"
    BOLD = "\033[1m"
    RESET = "\033[0m"


# =============================================================================
# Enums
# =============================================================================

class Color(enum.Enum):
    """Color of a code peg."""
    RED = enum.auto()
    ORANGE = enum.auto()
    YELLOW = enum.auto()
    GREEN = enum.auto()
    BLUE = enum.auto()
    PURPLE = enum.auto()

    def ansi(self) -> str:
        """Returns the ANSI color code for this peg color."""
        return {
            Color.RED: _Colors.RED,
            Color.ORANGE: _Colors.ORANGE,
            Color.YELLOW: _Colors.YELLOW,
            Color.GREEN: _Colors.GREEN,
            Color.BLUE: _Colors.BLUE,
            Color.PURPLE: _Colors.PURPLE,
        }[self]

    def __str__(self) -> str:
        return f"{self.ansi()}{self.name[0]}{_Colors.RESET}"


# =============================================================================
# Configuration
# =============================================================================

COLOR_PALETTE: tuple[Color, ...] = (
    Color.RED,
    Color.ORANGE,
    Color.YELLOW,
    Color.GREEN,
    Color.BLUE,
    Color.PURPLE,
)
NUM_COLORS = len(COLOR_PALETTE)
NUM_SLOTS_PER_ROW = 4
NUM_GUESSES = 8

# Number keys 1-9 select a palette color.
MAX_COLOR_KEY = 9


@dataclasses.dataclass(frozen=True)
class PuzzleConfig:
    """Board dimensions for a Mastermind game.

    The palette is a subset of ``Color``, so K can range from 1 to 6.

    Attributes:
        slots: Number of pegs in a row (N).
        palette: Colors a peg may take (K = len(palette), at most 6).
        max_guesses: Number of guesses before the game is lost (G).
    """
    slots: int = NUM_SLOTS_PER_ROW
    palette: tuple[Color, ...] = COLOR_PALETTE
    max_guesses: int = NUM_GUESSES

    def __post_init__(self) -> None:
        if self.slots < 1:
            raise ValueError(f"Slot count must be positive, got {self.slots}")
        if not self.palette:
            raise ValueError("Palette must not be empty")
        for color in self.palette:
            if not isinstance(color, Color):
                raise ValueError(f"Palette entry {color!r} is not a Color")
        if len(set(self.palette)) != len(self.palette):
            raise ValueError(f"Palette contains duplicate colors: {self.palette}")
        if self.max_guesses < 1:
            raise ValueError(
                f"Max guesses must be positive, got {self.max_guesses}"
            )

    def random_target(self, rng: random.Random) -> tuple[Color, ...]:
        """Draw a target sequence, uniformly and independently per slot.

        Args:
            rng: Random source to draw from.

        Returns:
            A tuple of ``slots`` colors. Repeats are allowed.
        """
        return tuple(rng.choice(self.palette) for _ in range(self.slots))


# =============================================================================
# Guess Evaluation
# =============================================================================

@dataclasses.dataclass(frozen=True)
class ScoredGuess:
    """A submitted guess together with its key pegs.

    Attributes:
        guess: The guessed color sequence.
        exact_hits: Pegs matching the target in color and position.
        value_hits: Pegs matching a target color in another position,
            not already claimed by an exact hit.
    """
    guess: tuple[Color, ...]
    exact_hits: int
    value_hits: int

    def __str__(self) -> str:
        pegs = " ".join(str(c) for c in self.guess)
        keys = (
            f"{_Colors.BOLD}{'●' * self.exact_hits}{_Colors.RESET}"
            f"{_Colors.DIM}{'○' * self.value_hits}{_Colors.RESET}"
        )
        return f"{pegs}  | {keys}"


def evaluate_guess(
    guess: tuple[Color, ...], target: tuple[Color, ...],
) -> ScoredGuess:
    """Score a guess against the target.

    The first pass counts exact hits and collects the unmatched colors on
    each side. The second pass pairs leftover colors up to the smaller
    count on either side. The result does not depend on argument order.

    Args:
        guess: The guessed sequence.
        target: The hidden sequence.

    Returns:
        A ScoredGuess holding ``guess`` and both hit counts.

    Raises:
        ValueError: If the sequences differ in length.
    """
    if len(guess) != len(target):
        raise ValueError(
            f"Guess length {len(guess)} does not match target length {len(target)}"
        )

    guess_leftovers: collections.Counter[Color] = collections.Counter()
    target_leftovers: collections.Counter[Color] = collections.Counter()

    exact_hits = 0
    for guessed, hidden in zip(guess, target):
        if guessed == hidden:
            exact_hits += 1
        else:
            guess_leftovers[guessed] += 1
            target_leftovers[hidden] += 1

    value_hits = sum(
        min(count, target_leftovers[color])
        for color, count in guess_leftovers.items()
    )

    return ScoredGuess(
        guess=tuple(guess), exact_hits=exact_hits, value_hits=value_hits,
    )


# =============================================================================
# Game States
# =============================================================================

@dataclasses.dataclass(frozen=True)
class InProgress:
    """The solver is assembling a guess.

    Attributes:
        working_row: One entry per slot; None for slots not yet filled.
    """
    working_row: tuple[Color | None, ...]

    @classmethod
    def empty(cls, slots: int) -> InProgress:
        return cls(working_row=(None,) * slots)

    @property
    def is_complete(self) -> bool:
        return None not in self.working_row


@dataclasses.dataclass(frozen=True)
class Victory:
    """Terminal: the last guess matched the target exactly."""


@dataclasses.dataclass(frozen=True)
class TooManyGuesses:
    """Terminal: every guess was used without matching the target."""


PuzzleState = InProgress | Victory | TooManyGuesses


@dataclasses.dataclass(frozen=True)
class PuzzleSnapshot:
    """Read-only view of a game for display.

    Attributes:
        state: Current game state.
        working_row: Working row contents; all None once terminal.
        history: Scored guesses, oldest first.
        target: The hidden sequence, revealed only once the game is over.
        selected_color: Color the next placed peg will take.
        guesses_remaining: Guesses left before the game is lost.
    """
    state: PuzzleState
    working_row: tuple[Color | None, ...]
    history: tuple[ScoredGuess, ...]
    target: tuple[Color, ...] | None
    selected_color: Color
    guesses_remaining: int


# =============================================================================
# MastermindGame
# =============================================================================

class MastermindGame:
    """The Mastermind puzzle state machine.

    Starts ``InProgress`` with an empty working row. Each completed
    submission is scored and appended to the history, then the game moves
    to ``Victory``, ``TooManyGuesses``, or a fresh working row. Terminal
    states accept no further changes; to play again, create a new game.

    Attributes:
        config: Board dimensions.
        state: Current game state.
        history: Scored guesses, oldest first.
        selected_color: Color placed by ``place_selected_color()``.
    """

    def __init__(
        self,
        target: tuple[Color, ...],
        config: PuzzleConfig | None = None,
    ) -> None:
        """Create a game with a known target.

        Args:
            target: The hidden sequence.
            config: Board dimensions. Defaults to the standard 4 slots,
                6 colors, and 8 guesses.

        Raises:
            ValueError: If the target has the wrong length or uses a
                color outside the palette.
        """
        self.config = config if config is not None else PuzzleConfig()
        target = tuple(target)
        if len(target) != self.config.slots:
            raise ValueError(
                f"Target must have {self.config.slots} slots, got {len(target)}"
            )
        for color in target:
            if color not in self.config.palette:
                raise ValueError(f"Target color {color!r} is not in the palette")
        self._target = target
        self.state: PuzzleState = InProgress.empty(self.config.slots)
        self.history: list[ScoredGuess] = []
        self.selected_color: Color = self.config.palette[0]

    @classmethod
    def create_game(
        cls,
        config: PuzzleConfig | None = None,
        seed: int | None = None,
        rng: random.Random | None = None,
    ) -> MastermindGame:
        """Create a new game with a randomly drawn target.

        Args:
            config: Board dimensions.
            seed: Optional random seed for reproducibility. Ignored if
                ``rng`` is given.
            rng: Random source used to draw the target.

        Returns:
            A fresh game in the ``InProgress`` state.
        """
        config = config if config is not None else PuzzleConfig()
        if rng is None:
            rng = random.Random(seed)
        return cls(config.random_target(rng), config=config)

    # -----------------------------------------------------------------
    # Properties
    # -----------------------------------------------------------------

    @property
    def is_over(self) -> bool:
        """Whether the game has reached a terminal state."""
        return not isinstance(self.state, InProgress)

    @property
    def guesses_remaining(self) -> int:
        return self.config.max_guesses - len(self.history)

    @property
    def target(self) -> tuple[Color, ...] | None:
        """The hidden sequence, or None while the game is in progress."""
        return self._target if self.is_over else None

    # -----------------------------------------------------------------
    # Color selection
    # -----------------------------------------------------------------

    def select_color(self, color: Color) -> None:
        """Choose the color for subsequently placed pegs.

        Ignored once the game is over.

        Raises:
            ValueError: If the color is not in the palette.
        """
        if self.is_over:
            return
        if color not in self.config.palette:
            raise ValueError(f"Color {color!r} is not in the palette")
        self.selected_color = color

    def select_color_by_key(self, number: int) -> Color | None:
        """Choose a color by its 1-based number key.

        Args:
            number: Key pressed, 1-9. Key ``n`` selects ``palette[n - 1]``.

        Returns:
            The newly selected color, or None if the key maps to no
            color or the game is over.
        """
        if self.is_over:
            return None
        if not 1 <= number <= min(MAX_COLOR_KEY, len(self.config.palette)):
            return None
        self.selected_color = self.config.palette[number - 1]
        return self.selected_color

    # -----------------------------------------------------------------
    # Working row
    # -----------------------------------------------------------------

    def set_working_slot(self, index: int, color: Color) -> None:
        """Set one peg of the working row.

        Ignored once the game is over.

        Args:
            index: Slot index, 0 to ``slots - 1``.
            color: Color to place.

        Raises:
            IndexError: If the slot index is out of range.
            ValueError: If the color is not in the palette.
        """
        if not isinstance(self.state, InProgress):
            return
        if not 0 <= index < self.config.slots:
            raise IndexError(
                f"Slot index {index} out of range (0-{self.config.slots - 1})"
            )
        if color not in self.config.palette:
            raise ValueError(f"Color {color!r} is not in the palette")
        row = list(self.state.working_row)
        row[index] = color
        self.state = InProgress(working_row=tuple(row))

    submit_slot = set_working_slot

    def place_selected_color(self, index: int) -> None:
        """Set one peg of the working row to the selected color."""
        self.set_working_slot(index, self.selected_color)

    def submit_guess(self) -> ScoredGuess | None:
        """Score the working row if every slot is filled.

        An incomplete row, or a game that is already over, leaves the
        state untouched.

        Returns:
            The scored guess, or None if the submission was ignored.
        """
        if not isinstance(self.state, InProgress) or not self.state.is_complete:
            return None

        guess: tuple[Color, ...] = tuple(
            c for c in self.state.working_row if c is not None
        )
        scored = evaluate_guess(guess, self._target)
        self.history.append(scored)

        if scored.exact_hits == self.config.slots:
            self.state = Victory()
        elif len(self.history) >= self.config.max_guesses:
            self.state = TooManyGuesses()
        else:
            self.state = InProgress.empty(self.config.slots)
        return scored

    submit = submit_guess

    # -----------------------------------------------------------------
    # Display
    # -----------------------------------------------------------------

    def snapshot(self) -> PuzzleSnapshot:
        """Capture the current game for display."""
        if isinstance(self.state, InProgress):
            working_row = self.state.working_row
        else:
            working_row = (None,) * self.config.slots
        return PuzzleSnapshot(
            state=self.state,
            working_row=working_row,
            history=tuple(self.history),
            target=self.target,
            selected_color=self.selected_color,
            guesses_remaining=self.guesses_remaining,
        )

    def __str__(self) -> str:
        if isinstance(self.state, Victory):
            banner = f"{_Colors.GREEN}You win! You are a mastermind!{_Colors.RESET}"
        elif isinstance(self.state, TooManyGuesses):
            banner = f"{_Colors.RED}Out of guesses.{_Colors.RESET}"
        else:
            banner = f"Guesses remaining: {self.guesses_remaining}"

        if self.is_over:
            target_str = " ".join(str(c) for c in self._target)
        else:
            target_str = " ".join(["?"] * self.config.slots)

        lines = [f"{_Colors.BOLD}Target:{_Colors.RESET} {target_str}"]
        for i, scored in enumerate(self.history):
            lines.append(f"  {i + 1}. {scored}")
        if isinstance(self.state, InProgress):
            working = " ".join(
                str(c) if c is not None else "_" for c in self.state.working_row
            )
            lines.append(f"  > {working}   (selected: {self.selected_color})")
        lines.append(banner)
        return "\n".join(lines)
