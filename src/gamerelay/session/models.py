"""Player and Session — the aggregate root owned by the registry."""

from __future__ import annotations

import random
from dataclasses import dataclass, field
from typing import Any

from gamerelay.variants import VariantKind
from gamerelay.variants.base import Variant

MAX_SEATS = 2


@dataclass
class Player:
    id: str
    name: str
    seat: int


@dataclass
class Session:
    """One two-seat game: players, the active board and match status.

    ``board`` is the variant's own board dataclass and stays None until
    the second seat joins. ``epoch`` increases each time a round's board
    is initialised; deferred actions compare it to detect stale rounds.
    """

    session_id: str
    kind: VariantKind
    variant: Variant
    rng: random.Random
    players: list[Player] = field(default_factory=list)
    board: Any = None
    turn_seat: int | None = None
    match_score: dict[str, int] | None = None
    round_over: bool = False
    match_over: bool = False
    status: str = "Waiting for an opponent..."
    epoch: int = 0

    @property
    def is_full(self) -> bool:
        return len(self.players) >= MAX_SEATS

    def seat_of(self, player_id: str) -> int | None:
        for player in self.players:
            if player.id == player_id:
                return player.seat
        return None

    def player_at(self, seat: int) -> Player:
        return self.players[seat]

    def snapshot(self, viewer_id: str | None = None) -> dict:
        """Return the wire ``game`` object as seen by *viewer_id*."""
        viewer_seat = self.seat_of(viewer_id) if viewer_id else None
        score = self.match_score or {}
        return {
            "gameId": self.session_id,
            "gameType": self.kind.value,
            "players": [
                {"id": p.id, "name": p.name, "seat": p.seat, "score": score.get(p.id, 0)}
                for p in self.players
            ],
            "turn": self.players[self.turn_seat].id if self.turn_seat is not None else None,
            "status": self.status,
            "roundOver": self.round_over,
            "gameOver": self.match_over,
            "matchScore": dict(score) if self.match_score is not None else None,
            "round": self.epoch,
            "board": (
                self.variant.snapshot(self.board, viewer_seat)
                if self.board is not None else None
            ),
        }
