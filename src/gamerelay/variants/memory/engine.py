"""Memory-match variant — flip two cards per turn looking for pairs.

A match scores a point and keeps the turn. A mismatch leaves both cards
face-up (HOLD) until the engine runs ``settle`` after the reveal delay,
which turns them back down and passes the turn.
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

__all__ = ["Card", "MemoryBoard", "MemoryVariant", "SYMBOLS"]

SYMBOLS = ("🍎", "🍌", "🍇", "🍒", "🍋", "🍉", "🥝", "🍑")


@dataclass
class Card:
    symbol: str
    face_up: bool = False
    matched: bool = False


@dataclass
class MemoryBoard:
    cards: list[Card] = field(default_factory=list)
    face_up: list[int] = field(default_factory=list)  # flipped, not yet resolved
    points: list[int] = field(default_factory=lambda: [0, 0])


class MemoryVariant(Variant):
    key = "memory"
    display_name = "Memory"

    def new_board(self, rng: random.Random) -> MemoryBoard:
        deck = list(SYMBOLS) * 2
        rng.shuffle(deck)
        return MemoryBoard(cards=[Card(symbol=s) for s in deck])

    def validate(self, board: MemoryBoard, seat: int, move: dict) -> ValidationResult:
        index = move.get("index")
        if not is_index(index, len(board.cards)):
            return ValidationResult(
                legal=False, reason=f"Card must be 0-{len(board.cards) - 1}. Got: {index!r}."
            )
        if len(board.face_up) >= 2:
            return ValidationResult(legal=False, reason="Wait for the cards to turn back.")
        card = board.cards[index]
        if card.face_up or card.matched:
            return ValidationResult(legal=False, reason=f"Card {index} is already face-up.")
        return ValidationResult(legal=True)

    def apply(self, board: MemoryBoard, seat: int, move: dict) -> MoveOutcome:
        index = move["index"]
        board.cards[index].face_up = True
        board.face_up.append(index)

        if len(board.face_up) < 2:
            return MoveOutcome(accepted=True, turn=TurnDirective.KEEP)

        first, second = (board.cards[i] for i in board.face_up)
        if first.symbol != second.symbol:
            return MoveOutcome(accepted=True, turn=TurnDirective.HOLD)

        first.matched = second.matched = True
        board.face_up.clear()
        board.points[seat] += 1

        if all(card.matched for card in board.cards):
            a, b = board.points
            if a == b:
                return MoveOutcome(accepted=True, result=RoundResult.draw())
            return MoveOutcome(accepted=True, result=RoundResult.winner(0 if a > b else 1))
        return MoveOutcome(accepted=True, turn=TurnDirective.KEEP)

    def settle(self, board: MemoryBoard) -> TurnDirective | None:
        """Turn a mismatched pair back face-down and pass the turn."""
        if len(board.face_up) != 2:
            return None
        for i in board.face_up:
            board.cards[i].face_up = False
        board.face_up.clear()
        return TurnDirective.PASS

    def snapshot(self, board: MemoryBoard, viewer_seat: int | None) -> dict:
        return {
            "cards": [
                {
                    # Face-down symbols stay hidden
                    "symbol": card.symbol if (card.face_up or card.matched) else None,
                    "faceUp": card.face_up,
                    "matched": card.matched,
                }
                for card in board.cards
            ],
            "faceUp": list(board.face_up),
            "points": list(board.points),
        }
