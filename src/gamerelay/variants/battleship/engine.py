"""Battleship variant — each seat hides a fleet on its own 10×10 grid.

Cells are addressed by a flat index ``row * 10 + col``. A move fires at
one cell of the opponent's grid; the shot is a hit when the cell belongs
to one of the opponent's ships. The round ends when every ship cell of
a seat has been hit.
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
    other_seat,
)

__all__ = ["BattleshipBoard", "BattleshipVariant", "FLEET", "GRID", "place_fleet"]

GRID = 10
CELLS = GRID * GRID
FLEET = (5, 4, 3, 3, 2)

UNKNOWN = ""
HIT = "hit"
MISS = "miss"


def place_fleet(rng: random.Random) -> list[list[int]]:
    """Place every ship of the fleet at random, retrying until it fits.

    Returns one list of cell indices per ship. Ships lie horizontally or
    vertically, stay inside the grid and never overlap.
    """
    taken: set[int] = set()
    ships: list[list[int]] = []
    for length in FLEET:
        while True:
            horizontal = rng.random() < 0.5
            if horizontal:
                r, c = rng.randrange(GRID), rng.randrange(GRID - length + 1)
                cells = [r * GRID + c + i for i in range(length)]
            else:
                r, c = rng.randrange(GRID - length + 1), rng.randrange(GRID)
                cells = [(r + i) * GRID + c for i in range(length)]
            if taken.isdisjoint(cells):
                break
        taken.update(cells)
        ships.append(cells)
    return ships


@dataclass
class BattleshipBoard:
    # Per seat: the ships on that seat's own grid
    fleets: list[list[list[int]]] = field(default_factory=list)
    # Per seat: shot markers on that seat's own grid
    shots: list[list[str]] = field(
        default_factory=lambda: [[UNKNOWN] * CELLS, [UNKNOWN] * CELLS]
    )
    last_shot: dict | None = None

    def ship_cells(self, seat: int) -> set[int]:
        return {cell for ship in self.fleets[seat] for cell in ship}


class BattleshipVariant(Variant):
    key = "battleship"
    display_name = "Battleship"

    def new_board(self, rng: random.Random) -> BattleshipBoard:
        return BattleshipBoard(fleets=[place_fleet(rng), place_fleet(rng)])

    def validate(self, board: BattleshipBoard, seat: int, move: dict) -> ValidationResult:
        index = move.get("index")
        if not is_index(index, CELLS):
            return ValidationResult(legal=False, reason=f"Cell must be 0-{CELLS - 1}. Got: {index!r}.")
        if board.shots[other_seat(seat)][index] != UNKNOWN:
            return ValidationResult(legal=False, reason=f"Cell {index} was already fired at.")
        return ValidationResult(legal=True)

    def apply(self, board: BattleshipBoard, seat: int, move: dict) -> MoveOutcome:
        target = other_seat(seat)
        index = move["index"]
        ship_cells = board.ship_cells(target)

        hit = index in ship_cells
        board.shots[target][index] = HIT if hit else MISS
        board.last_shot = {"seat": seat, "index": index, "hit": hit}

        if hit and all(board.shots[target][cell] == HIT for cell in ship_cells):
            return MoveOutcome(accepted=True, result=RoundResult.winner(seat))
        return MoveOutcome(accepted=True, turn=TurnDirective.PASS)

    def snapshot(self, board: BattleshipBoard, viewer_seat: int | None) -> dict:
        grids = []
        for seat in (0, 1):
            shots = board.shots[seat]
            sunk = [ship for ship in board.fleets[seat] if all(shots[c] == HIT for c in ship)]
            grid = {
                "shots": list(shots),
                "sunk": [list(ship) for ship in sunk],
                "shipsRemaining": len(board.fleets[seat]) - len(sunk),
            }
            # A seat only ever sees its own fleet
            if seat == viewer_seat:
                grid["ships"] = [list(ship) for ship in board.fleets[seat]]
            grids.append(grid)
        return {"grids": grids, "lastShot": board.last_shot}
