"""Checkers board logic — 8×8 row/col representation.

Dark squares: (row + col) % 2 == 1.

Piece encoding (ints on an 8×8 grid):
  0  — empty (or light square)
  1  — seat 1 man
  2  — seat 2 man
  11 — seat 1 king
  22 — seat 2 king

A king is its man value × 11, so ``value % 11`` is always the owning
seat number and ``value > 10`` marks a king. Seat numbers are seat
index + 1.

Seat 1 starts on rows 5-7 and moves UP the board (decreasing row).
Seat 2 starts on rows 0-2 and moves DOWN the board (increasing row).
"""

from __future__ import annotations

SIZE = 8
KING_FACTOR = 11


def create_initial_board() -> list[list[int]]:
    """Return a fresh 8×8 board with pieces in starting positions."""
    board = [[0] * SIZE for _ in range(SIZE)]
    for r in range(SIZE):
        for c in range(SIZE):
            if (r + c) % 2 != 1:
                continue  # light square
            if r < 3:
                board[r][c] = 2
            elif r > 4:
                board[r][c] = 1
    return board


def owner(piece: int) -> int:
    """Return the owning seat number (1 or 2), 0 for empty."""
    return piece % KING_FACTOR


def is_king(piece: int) -> bool:
    return piece > 10


def forward(seat_number: int) -> int:
    """Row delta of a man's forward step."""
    return -1 if seat_number == 1 else 1


def promotion_row(seat_number: int) -> int:
    """The opponent's back rank, where a man is crowned."""
    return 0 if seat_number == 1 else SIZE - 1


def crown(seat_number: int) -> int:
    return seat_number * KING_FACTOR


def count_pieces(board: list[list[int]]) -> dict[int, int]:
    """Count remaining pieces for each seat number."""
    counts = {1: 0, 2: 0}
    for row in board:
        for piece in row:
            if piece:
                counts[owner(piece)] += 1
    return counts
