"""RoundLifecycle — round start/end, match completion and round resets.

One instance per server. The win threshold is fixed at construction: the
first seat to win that many rounds takes the match, after which the
session accepts no further moves or resets.
"""

from __future__ import annotations

import logging

from gamerelay.session.models import Session
from gamerelay.session.turns import TurnArbiter

logger = logging.getLogger(__name__)

WIN_SCORE = 3


class RoundLifecycle:
    def __init__(self, win_score: int = WIN_SCORE, arbiter: TurnArbiter | None = None) -> None:
        self._win_score = win_score
        self._arbiter = arbiter or TurnArbiter()

    @property
    def win_score(self) -> int:
        return self._win_score

    def start_match(self, session: Session) -> None:
        """Zero both seats' match score and deal the first round."""
        session.match_score = {p.id: 0 for p in session.players}
        session.match_over = False
        self.start_round(session)

    def start_round(self, session: Session) -> None:
        """Initialise a fresh board and hand the first move to seat 0."""
        session.board = session.variant.new_board(session.rng)
        session.epoch += 1
        session.round_over = False
        if session.variant.turn_based:
            session.turn_seat = 0
            session.status = self._arbiter.turn_status(session)
        else:
            session.turn_seat = None
            session.status = self._arbiter.waiting_status(session)

    def end_round(self, session: Session, winner_seat: int | None) -> None:
        session.round_over = True
        if winner_seat is not None:
            winner = session.player_at(winner_seat)
            session.match_score[winner.id] += 1
            session.status = f"{winner.name} wins the round!"
        else:
            session.status = "It's a draw!"
        logger.info(
            "Session %s round %d over: %s", session.session_id, session.epoch, session.status
        )

    def check_match_over(self, session: Session) -> bool:
        """Flag the match as over once either seat reaches the threshold."""
        if not session.is_full or session.match_score is None:
            return False
        for player in session.players:
            if session.match_score[player.id] >= self._win_score:
                session.match_over = True
                session.status = f"{player.name} wins the match!"
                logger.info("Session %s match over: %s", session.session_id, session.status)
                return True
        return False

    def reset_round(self, session: Session) -> bool:
        """Deal a new round, keeping the match score.

        Refused once the match is over or while a seat is empty.
        """
        if session.match_over or not session.is_full:
            return False
        self.start_round(session)
        return True
