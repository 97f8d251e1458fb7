"""Dots-and-Boxes variant on an N×N grid of boxes.

Edges are addressed by kind and position:
  ``h`` edges — (N+1) rows × N cols, ``h[r][c]`` is the top of box (r, c)
  ``v`` edges — N rows × (N+1) cols, ``v[r][c]`` is the left of box (r, c)

Edges and boxes store the owning seat, or None while undrawn/unclaimed.
Completing at least one box earns the mover another turn.
"""

from __future__ import annotations

import random
from dataclasses import dataclass

from gamerelay.variants.base import (
    MoveOutcome,
    RoundResult,
    TurnDirective,
    ValidationResult,
    Variant,
    is_index,
)

__all__ = ["DotsAndBoxesBoard", "DotsAndBoxesVariant"]


@dataclass
class DotsAndBoxesBoard:
    size: int
    h: list[list[int | None]]
    v: list[list[int | None]]
    boxes: list[list[int | None]]

    @classmethod
    def empty(cls, size: int) -> DotsAndBoxesBoard:
        return cls(
            size=size,
            h=[[None] * size for _ in range(size + 1)],
            v=[[None] * (size + 1) for _ in range(size)],
            boxes=[[None] * size for _ in range(size)],
        )

    def box_closed(self, r: int, c: int) -> bool:
        return None not in (self.h[r][c], self.h[r + 1][c], self.v[r][c], self.v[r][c + 1])

    def box_counts(self) -> list[int]:
        counts = [0, 0]
        for row in self.boxes:
            for owner in row:
                if owner is not None:
                    counts[owner] += 1
        return counts


class DotsAndBoxesVariant(Variant):
    key = "dotsandboxes"
    display_name = "Dots and Boxes"

    def __init__(self, size: int = 4) -> None:
        super().__init__()
        self._size = size

    def new_board(self, rng: random.Random) -> DotsAndBoxesBoard:
        return DotsAndBoxesBoard.empty(self._size)

    def validate(self, board: DotsAndBoxesBoard, seat: int, move: dict) -> ValidationResult:
        kind, r, c = move.get("type"), move.get("r"), move.get("c")
        n = board.size
        if kind == "h":
            in_range = is_index(r, n + 1) and is_index(c, n)
            edges = board.h
        elif kind == "v":
            in_range = is_index(r, n) and is_index(c, n + 1)
            edges = board.v
        else:
            return ValidationResult(legal=False, reason=f"Edge type must be 'h' or 'v'. Got: {kind!r}.")

        if not in_range:
            return ValidationResult(legal=False, reason=f"Edge {kind}[{r}][{c}] is off the board.")
        if edges[r][c] is not None:
            return ValidationResult(legal=False, reason=f"Edge {kind}[{r}][{c}] is already drawn.")
        return ValidationResult(legal=True)

    def apply(self, board: DotsAndBoxesBoard, seat: int, move: dict) -> MoveOutcome:
        kind, r, c = move["type"], move["r"], move["c"]
        n = board.size

        if kind == "h":
            board.h[r][c] = seat
            adjacent = [(r - 1, c), (r, c)]
        else:
            board.v[r][c] = seat
            adjacent = [(r, c - 1), (r, c)]

        completed = 0
        for br, bc in adjacent:
            if not (0 <= br < n and 0 <= bc < n):
                continue
            if board.boxes[br][bc] is None and board.box_closed(br, bc):
                board.boxes[br][bc] = seat
                completed += 1

        counts = board.box_counts()
        if sum(counts) == n * n:
            if counts[0] == counts[1]:
                return MoveOutcome(accepted=True, result=RoundResult.draw())
            return MoveOutcome(
                accepted=True, result=RoundResult.winner(0 if counts[0] > counts[1] else 1)
            )

        turn = TurnDirective.KEEP if completed else TurnDirective.PASS
        return MoveOutcome(accepted=True, turn=turn)

    def snapshot(self, board: DotsAndBoxesBoard, viewer_seat: int | None) -> dict:
        return {
            "size": board.size,
            "h": [row[:] for row in board.h],
            "v": [row[:] for row in board.v],
            "boxes": [row[:] for row in board.boxes],
            "boxCounts": board.box_counts(),
        }
