"""TurnArbiter — decides who moves next after an accepted move."""

from __future__ import annotations

from gamerelay.session.models import Session
from gamerelay.variants.base import TurnDirective, other_seat


class TurnArbiter:
    """Applies a variant's TurnDirective to a session.

    PASS hands the turn to the other seat, KEEP grants an extra move, HOLD
    freezes the turn until the variant's deferred settle runs, and NONE is
    for simultaneous variants that have no turn owner.
    """

    def advance(self, session: Session, directive: TurnDirective) -> None:
        if directive is TurnDirective.NONE:
            session.turn_seat = None
            session.status = self.waiting_status(session)
            return

        if directive is TurnDirective.PASS:
            session.turn_seat = other_seat(session.turn_seat)
        elif directive is TurnDirective.HOLD:
            return
        session.status = self.turn_status(session)

    @staticmethod
    def turn_status(session: Session) -> str:
        return f"It's {session.player_at(session.turn_seat).name}'s turn."

    @staticmethod
    def waiting_status(session: Session) -> str:
        """Status for simultaneous variants: who still has to choose."""
        pending = session.variant.pending_seats(session.board)
        waiting = [p.name for p in session.players if p.seat not in pending]
        if len(waiting) == len(session.players):
            return "Make your choice!"
        return f"Waiting for {' and '.join(waiting)}..."
