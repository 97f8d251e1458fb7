"""Rock-Paper-Scissors variant — both seats choose simultaneously.

Choices are held as pending until both seats have chosen, then resolved
with the cyclic dominance table and cleared. There is no turn owner.
"""

from __future__ import annotations

import random
from dataclasses import dataclass, field

from gamerelay.variants.base import (
    MoveOutcome,
    RoundResult,
    TurnDirective,
    ValidationResult,
    Variant,
)

__all__ = ["BEATS", "RockPaperScissorsBoard", "RockPaperScissorsVariant"]

# choice -> the choice it beats
BEATS = {
    "rock": "scissors",
    "scissors": "paper",
    "paper": "rock",
}


@dataclass
class RockPaperScissorsBoard:
    pending: dict[int, str] = field(default_factory=dict)
    last_choices: list[str] | None = None


class RockPaperScissorsVariant(Variant):
    key = "rps"
    display_name = "Rock-Paper-Scissors"
    turn_based = False

    def new_board(self, rng: random.Random) -> RockPaperScissorsBoard:
        return RockPaperScissorsBoard()

    def validate(self, board: RockPaperScissorsBoard, seat: int, move: dict) -> ValidationResult:
        if move.get("choice") not in BEATS:
            return ValidationResult(legal=False, reason=f"Unknown choice: {move.get('choice')!r}.")
        if seat in board.pending:
            return ValidationResult(legal=False, reason="You already chose this round.")
        return ValidationResult(legal=True)

    def apply(self, board: RockPaperScissorsBoard, seat: int, move: dict) -> MoveOutcome:
        board.pending[seat] = move["choice"]
        if len(board.pending) < 2:
            return MoveOutcome(accepted=True, turn=TurnDirective.NONE)

        first, second = board.pending[0], board.pending[1]
        board.last_choices = [first, second]
        board.pending.clear()

        if first == second:
            return MoveOutcome(accepted=True, result=RoundResult.draw())
        if BEATS[first] == second:
            return MoveOutcome(accepted=True, result=RoundResult.winner(0))
        return MoveOutcome(accepted=True, result=RoundResult.winner(1))

    def pending_seats(self, board: RockPaperScissorsBoard) -> set[int]:
        return set(board.pending)

    def snapshot(self, board: RockPaperScissorsBoard, viewer_seat: int | None) -> dict:
        return {
            "chosen": [0 in board.pending, 1 in board.pending],
            "myChoice": board.pending.get(viewer_seat),
            "lastChoices": board.last_choices,
        }
