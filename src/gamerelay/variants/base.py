"""Variant — abstract base class for all game variants.

Each variant is a pure rules object: it builds a fresh board, validates a
seat's move against that board, applies it, and reports whether the round
is over. Variants hold no per-session state; the board lives on the
Session and is passed in on every call.

Class hierarchy:
    Variant (ABC)
    ├── TicTacToeVariant, ConnectFourVariant, CheckersVariant,
    │   BattleshipVariant, MemoryVariant, DotsAndBoxesVariant  (turn-based)
    └── RockPaperScissorsVariant                           (simultaneous)
"""

from __future__ import annotations

import random
import sys
from abc import ABC, abstractmethod
from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import Any

import jsonschema

from gamerelay.core.schemas import load_schema


@dataclass(frozen=True)
class ValidationResult:
    """Result of validating a seat's move against the variant rules."""

    legal: bool
    reason: str | None = None


class Outcome(Enum):
    CONTINUE = "continue"
    WINNER = "winner"
    DRAW = "draw"


@dataclass(frozen=True)
class RoundResult:
    kind: Outcome
    winner_seat: int | None = None

    @classmethod
    def cont(cls) -> RoundResult:
        return cls(Outcome.CONTINUE)

    @classmethod
    def winner(cls, seat: int) -> RoundResult:
        return cls(Outcome.WINNER, seat)

    @classmethod
    def draw(cls) -> RoundResult:
        return cls(Outcome.DRAW)

    @property
    def is_terminal(self) -> bool:
        return self.kind is not Outcome.CONTINUE


class TurnDirective(Enum):
    """What the turn arbiter does after an accepted, non-terminal move."""

    PASS = "pass"  # other seat moves next
    KEEP = "keep"  # same seat moves again
    HOLD = "hold"  # turn frozen until the variant's deferred settle runs
    NONE = "none"  # simultaneous variant, no turn owner


@dataclass(frozen=True)
class MoveOutcome:
    accepted: bool
    result: RoundResult = RoundResult.cont()
    turn: TurnDirective = TurnDirective.PASS
    reason: str | None = None

    @classmethod
    def rejected(cls, reason: str | None) -> MoveOutcome:
        return cls(accepted=False, reason=reason)


def other_seat(seat: int) -> int:
    return 1 - seat


def is_index(value: Any, upper: int) -> bool:
    """True if *value* is an int (not bool) in ``range(upper)``."""
    return isinstance(value, int) and not isinstance(value, bool) and 0 <= value < upper


class Variant(ABC):
    """Abstract base for game variants.

    Subclasses set ``key`` (the wire ``gameType``) and ``display_name``,
    and ship a ``schema.json`` next to their module describing the move
    payload.
    """

    key: str = ""
    display_name: str = ""
    turn_based: bool = True

    def __init__(self) -> None:
        self._move_schema = self._load_variant_schema()

    # ------------------------------------------------------------------
    # Concrete, shared by every variant
    # ------------------------------------------------------------------

    @property
    def move_schema(self) -> dict:
        """Return the JSON Schema for this variant's move payload."""
        return self._move_schema

    def play(self, board: Any, seat: int, move: dict) -> MoveOutcome:
        """Validate and apply a move. Rejected moves leave *board* untouched."""
        try:
            jsonschema.validate(move, self._move_schema)
        except jsonschema.ValidationError as e:
            return MoveOutcome.rejected(f"Malformed move: {e.message}")

        check = self.validate(board, seat, move)
        if not check.legal:
            return MoveOutcome.rejected(check.reason)
        return self.apply(board, seat, move)

    def settle(self, board: Any) -> TurnDirective | None:
        """Run the deferred follow-up of a HOLD move.

        Returns the turn directive to apply, or None when there is
        nothing left to settle. Only variants that return
        ``TurnDirective.HOLD`` override this.
        """
        return None

    def pending_seats(self, board: Any) -> set[int]:
        """Seats that have already committed a simultaneous move this round."""
        return set()

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------

    def _load_variant_schema(self) -> dict:
        """Load schema.json from the subclass's package directory."""
        mod = sys.modules[type(self).__module__]
        schema_path = Path(mod.__file__).parent / "schema.json"
        return load_schema(schema_path)

    # ------------------------------------------------------------------
    # Abstract, implemented by every variant
    # ------------------------------------------------------------------

    @abstractmethod
    def new_board(self, rng: random.Random) -> Any:
        """Return a fresh board for a new round."""

    @abstractmethod
    def validate(self, board: Any, seat: int, move: dict) -> ValidationResult:
        """Check if a move is legal. Does not modify the board."""

    @abstractmethod
    def apply(self, board: Any, seat: int, move: dict) -> MoveOutcome:
        """Apply a validated move to the board."""

    @abstractmethod
    def snapshot(self, board: Any, viewer_seat: int | None) -> dict:
        """Return a JSON-ready view of the board for one viewer."""
