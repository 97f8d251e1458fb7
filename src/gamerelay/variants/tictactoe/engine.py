"""Tic-Tac-Toe variant.

The board is a flat list of 9 cells indexed 0-8, row-major. Seat 0 plays
X, seat 1 plays O.
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
    is_index,
)

__all__ = ["TicTacToeBoard", "TicTacToeVariant", "WIN_LINES"]

MARKS = ("X", "O")

# Eight lines to check for a win: 3 rows, 3 cols, 2 diagonals
WIN_LINES = [
    # Rows
    (0, 1, 2),
    (3, 4, 5),
    (6, 7, 8),
    # Columns
    (0, 3, 6),
    (1, 4, 7),
    (2, 5, 8),
    # Diagonals
    (0, 4, 8),
    (2, 4, 6),
]


@dataclass
class TicTacToeBoard:
    cells: list[str] = field(default_factory=lambda: [""] * 9)


class TicTacToeVariant(Variant):
    key = "tictactoe"
    display_name = "Tic-Tac-Toe"

    def new_board(self, rng: random.Random) -> TicTacToeBoard:
        return TicTacToeBoard()

    def validate(self, board: TicTacToeBoard, seat: int, move: dict) -> ValidationResult:
        index = move.get("index")
        if not is_index(index, 9):
            return ValidationResult(legal=False, reason=f"Cell must be 0-8. Got: {index!r}.")
        if board.cells[index] != "":
            return ValidationResult(legal=False, reason=f"Cell {index} is already taken.")
        return ValidationResult(legal=True)

    def apply(self, board: TicTacToeBoard, seat: int, move: dict) -> MoveOutcome:
        board.cells[move["index"]] = MARKS[seat]

        winner = self._check_winner(board)
        if winner is not None:
            return MoveOutcome(accepted=True, result=RoundResult.winner(MARKS.index(winner)))
        if all(board.cells):
            return MoveOutcome(accepted=True, result=RoundResult.draw())
        return MoveOutcome(accepted=True, turn=TurnDirective.PASS)

    def snapshot(self, board: TicTacToeBoard, viewer_seat: int | None) -> dict:
        return {"cells": list(board.cells)}

    @staticmethod
    def _check_winner(board: TicTacToeBoard) -> str | None:
        for a, b, c in WIN_LINES:
            mark = board.cells[a]
            if mark != "" and mark == board.cells[b] == board.cells[c]:
                return mark
        return None
