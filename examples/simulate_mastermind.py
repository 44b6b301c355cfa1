"""Simulate a full Mastermind game from start to finish.

Creates a seeded game and plays it with a consistent-candidate solver:
each turn the solver submits the first code that would have produced
every key-peg result seen so far. Pegs are placed the way a player
would, by selecting a color with its number key and then clicking a
slot of the working row.
"""

import itertools
import pathlib
import sys

sys.path.insert(0, str(pathlib.Path(__file__).resolve().parent.parent))

import mastermind

_C = mastermind._Colors

# Seed for the hidden target. Set to None for a random game.
SEED = 7


def _consistent(
    candidate: tuple[mastermind.Color, ...],
    history: tuple[mastermind.ScoredGuess, ...],
) -> bool:
    """Whether the candidate would have scored every past guess the same."""
    for scored in history:
        result = mastermind.evaluate_guess(scored.guess, candidate)
        if (result.exact_hits, result.value_hits) != (
            scored.exact_hits, scored.value_hits,
        ):
            return False
    return True


def _next_guess(
    game: mastermind.MastermindGame,
) -> tuple[mastermind.Color, ...]:
    snap = game.snapshot()
    for candidate in itertools.product(
        game.config.palette, repeat=game.config.slots,
    ):
        if _consistent(candidate, snap.history):
            return candidate
    raise RuntimeError("No candidate matches the guess history")


def main() -> None:
    """Play one game and print the board after every guess."""
    print(f"{_C.BOLD}{'=' * 60}{_C.RESET}")
    print(f"{_C.BOLD}Mastermind Simulation{_C.RESET}")
    print(f"{_C.BOLD}{'=' * 60}{_C.RESET}")
    print()

    game = mastermind.MastermindGame.create_game(seed=SEED)
    palette = game.config.palette

    while not game.is_over:
        guess = _next_guess(game)
        for slot_index, color in enumerate(guess):
            game.select_color_by_key(palette.index(color) + 1)
            game.place_selected_color(slot_index)
        scored = game.submit_guess()
        print(
            f"Guess {len(game.history)}: {scored.exact_hits} exact,"
            f" {scored.value_hits} misplaced"
        )
        print(game)
        print()

    snap = game.snapshot()
    outcome = "solved" if isinstance(snap.state, mastermind.Victory) else "failed"
    print(f"{_C.BOLD}Game {outcome} in {len(snap.history)} guesses.{_C.RESET}")


if __name__ == "__main__":
    main()
