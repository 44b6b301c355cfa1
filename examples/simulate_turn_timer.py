"""Simulate a board game night with the turn time tracker.

Feeds a scripted timeline of key presses into ``TurnTimeTracker`` as if
the driver were polling the keyboard once per frame, then prints the
tracker display at a few checkpoints. Time is read from a monotonic
clock offset by the script, so the simulation runs instantly.
"""

import pathlib
import sys
import time

sys.path.insert(0, str(pathlib.Path(__file__).resolve().parent.parent))

import turn_time_tracker

_C = turn_time_tracker._Colors

# (seconds since start, event). "toggle" pauses or resumes the clock,
# "next" passes the turn to the next player, "show" prints the display.
TIMELINE = [
    (0.0, "toggle"),
    (12.4, "next"),
    (20.1, "next"),
    (47.9, "next"),
    (60.0, "show"),
    (63.2, "next"),
    (70.0, "toggle"),
    (95.0, "show"),
    (95.5, "toggle"),
    (101.3, "next"),
    (118.8, "next"),
    (130.0, "show"),
]


def main() -> None:
    """Replay the timeline and print the tracker at each checkpoint."""
    print(f"{_C.BOLD}{'=' * 60}{_C.RESET}")
    print(f"{_C.BOLD}Turn Time Tracker Simulation{_C.RESET}")
    print(f"{_C.BOLD}{'=' * 60}{_C.RESET}")
    print()

    tracker = turn_time_tracker.TurnTimeTracker()
    tracker.add_participant("Alice", "\033[94m")
    tracker.add_participant("Bob", "\033[91m")
    tracker.add_participant("Charlie", "\033[92m")
    tracker.add_participant("Diana", "\033[93m")

    start = time.monotonic()
    for offset, event in TIMELINE:
        tracker.tick(
            start + offset,
            toggle_pressed=event == "toggle",
            next_pressed=event == "next",
        )
        if event == "show":
            print(f"{_C.BOLD}t = {offset:.1f}s{_C.RESET}")
            print(tracker)
            print()


if __name__ == "__main__":
    main()
