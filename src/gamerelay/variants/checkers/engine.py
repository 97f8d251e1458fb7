"""Checkers variant.

Simple moves go one diagonal step onto an empty square; jumps go two
steps over an opponent piece, which is removed. Men move only toward the
opponent's back rank, kings in all four diagonal directions. A man that
reaches the back rank is crowned.

Multi-jump chains are not supported: a jump always ends the turn. The
round ends when the opponent has no pieces left.
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

from .board import (
    SIZE,
    count_pieces,
    create_initial_board,
    crown,
    forward,
    is_king,
    owner,
    promotion_row,
)

__all__ = ["CheckersBoard", "CheckersVariant"]


@dataclass
class CheckersBoard:
    grid: list[list[int]] = field(default_factory=create_initial_board)
    last_move: dict | None = None


class CheckersVariant(Variant):
    key = "checkers"
    display_name = "Checkers"

    def new_board(self, rng: random.Random) -> CheckersBoard:
        return CheckersBoard()

    def validate(self, board: CheckersBoard, seat: int, move: dict) -> ValidationResult:
        fr, to = move.get("from", {}), move.get("to", {})
        fr_r, fr_c = fr.get("row"), fr.get("col")
        to_r, to_c = to.get("row"), to.get("col")
        if not all(is_index(v, SIZE) for v in (fr_r, fr_c, to_r, to_c)):
            return ValidationResult(legal=False, reason="Squares must be on the 8×8 board.")

        seat_number = seat + 1
        piece = board.grid[fr_r][fr_c]
        if piece == 0 or owner(piece) != seat_number:
            return ValidationResult(legal=False, reason="Not your piece.")

        dy, dx = to_r - fr_r, to_c - fr_c
        if not is_king(piece) and dy != 0 and (dy > 0) != (forward(seat_number) > 0):
            return ValidationResult(legal=False, reason="Men only move forward.")

        if board.grid[to_r][to_c] != 0:
            return ValidationResult(legal=False, reason="Destination is occupied.")

        if abs(dy) == 2 and abs(dx) == 2:
            jumped = board.grid[fr_r + dy // 2][fr_c + dx // 2]
            if jumped == 0 or owner(jumped) == seat_number:
                return ValidationResult(legal=False, reason="A jump must cross an opponent piece.")
            return ValidationResult(legal=True)

        if abs(dy) == 1 and abs(dx) == 1:
            return ValidationResult(legal=True)

        return ValidationResult(
            legal=False, reason="Move one diagonal step, or jump two over an opponent."
        )

    def apply(self, board: CheckersBoard, seat: int, move: dict) -> MoveOutcome:
        seat_number = seat + 1
        fr_r, fr_c = move["from"]["row"], move["from"]["col"]
        to_r, to_c = move["to"]["row"], move["to"]["col"]
        dy, dx = to_r - fr_r, to_c - fr_c

        piece = board.grid[fr_r][fr_c]
        board.grid[fr_r][fr_c] = 0

        captured = None
        if abs(dy) == 2:
            mid_r, mid_c = fr_r + dy // 2, fr_c + dx // 2
            board.grid[mid_r][mid_c] = 0
            captured = {"row": mid_r, "col": mid_c}

        # King promotion
        if not is_king(piece) and to_r == promotion_row(seat_number):
            piece = crown(seat_number)
        board.grid[to_r][to_c] = piece

        board.last_move = {
            "from": {"row": fr_r, "col": fr_c},
            "to": {"row": to_r, "col": to_c},
            "captured": captured,
        }

        opponent_number = 2 if seat_number == 1 else 1
        if count_pieces(board.grid)[opponent_number] == 0:
            return MoveOutcome(accepted=True, result=RoundResult.winner(seat))
        return MoveOutcome(accepted=True, turn=TurnDirective.PASS)

    def snapshot(self, board: CheckersBoard, viewer_seat: int | None) -> dict:
        pieces = count_pieces(board.grid)
        return {
            "grid": [row[:] for row in board.grid],
            "lastMove": board.last_move,
            "piecesRemaining": [pieces[1], pieces[2]],
        }
