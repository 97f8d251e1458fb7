"""Connect Four variant — 6 rows × 7 columns, pieces drop to the bottom.

Cells hold the seat number (seat index + 1) or 0 for empty. Row 0 is the
top of the board.
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

__all__ = ["ConnectFourBoard", "ConnectFourVariant", "ROWS", "COLS"]

ROWS = 6
COLS = 7


def _empty_grid() -> list[list[int]]:
    return [[0] * COLS for _ in range(ROWS)]


@dataclass
class ConnectFourBoard:
    grid: list[list[int]] = field(default_factory=_empty_grid)
    last_row: int | None = None
    last_col: int | None = None


class ConnectFourVariant(Variant):
    key = "connectfour"
    display_name = "Connect Four"

    def new_board(self, rng: random.Random) -> ConnectFourBoard:
        return ConnectFourBoard()

    def validate(self, board: ConnectFourBoard, seat: int, move: dict) -> ValidationResult:
        col = move.get("column")
        if not is_index(col, COLS):
            return ValidationResult(
                legal=False, reason=f"Column must be an integer 0-6. Got: {col!r}."
            )
        # Column is full when its top cell is taken
        if board.grid[0][col] != 0:
            return ValidationResult(legal=False, reason=f"Column {col} is full.")
        return ValidationResult(legal=True)

    def apply(self, board: ConnectFourBoard, seat: int, move: dict) -> MoveOutcome:
        col = move["column"]
        row = self._drop_row(board, col)
        board.grid[row][col] = seat + 1
        board.last_row, board.last_col = row, col

        winner = self._check_winner(board)
        if winner:
            return MoveOutcome(accepted=True, result=RoundResult.winner(winner - 1))
        if all(board.grid[0][c] != 0 for c in range(COLS)):
            return MoveOutcome(accepted=True, result=RoundResult.draw())
        return MoveOutcome(accepted=True, turn=TurnDirective.PASS)

    def snapshot(self, board: ConnectFourBoard, viewer_seat: int | None) -> dict:
        return {
            "grid": [row[:] for row in board.grid],
            "lastMove": (
                {"row": board.last_row, "col": board.last_col}
                if board.last_row is not None else None
            ),
        }

    # ------------------------------------------------------------------
    # Internals
    # ------------------------------------------------------------------

    @staticmethod
    def _drop_row(board: ConnectFourBoard, col: int) -> int:
        """Find the lowest empty row in a column (gravity)."""
        for r in range(ROWS - 1, -1, -1):
            if board.grid[r][col] == 0:
                return r
        raise ValueError(f"Column {col} is full")

    @staticmethod
    def _check_winner(board: ConnectFourBoard) -> int:
        """Scan all groups of 4 for a win. Return winning seat number or 0."""
        b = board.grid
        # Horizontal
        for r in range(ROWS):
            for c in range(COLS - 3):
                if b[r][c] != 0 and b[r][c] == b[r][c+1] == b[r][c+2] == b[r][c+3]:
                    return b[r][c]
        # Vertical
        for r in range(ROWS - 3):
            for c in range(COLS):
                if b[r][c] != 0 and b[r][c] == b[r+1][c] == b[r+2][c] == b[r+3][c]:
                    return b[r][c]
        # Diagonal down-right
        for r in range(ROWS - 3):
            for c in range(COLS - 3):
                if b[r][c] != 0 and b[r][c] == b[r+1][c+1] == b[r+2][c+2] == b[r+3][c+3]:
                    return b[r][c]
        # Diagonal up-right
        for r in range(3, ROWS):
            for c in range(COLS - 3):
                if b[r][c] != 0 and b[r][c] == b[r-1][c+1] == b[r-2][c+2] == b[r-3][c+3]:
                    return b[r][c]
        return 0
