"""SessionRegistry — the only process-wide mutable store.

Maps session ids to Sessions, keeps a reverse index from player id to
the session that player sits in, and hands out one ``asyncio.Lock`` per
session so that at most one mutation per session is in flight.
"""

from __future__ import annotations

import asyncio
import logging
import secrets

from gamerelay.core.errors import GameNotJoinable
from gamerelay.core.seed import SeedManager
from gamerelay.session.models import Player, Session
from gamerelay.variants import VariantKind
from gamerelay.variants.base import Variant

logger = logging.getLogger(__name__)


def generate_id() -> str:
    return secrets.token_hex(4)


class SessionRegistry:
    """Creates, looks up and destroys Sessions by id."""

    def __init__(self, variants: dict[VariantKind, Variant], seeds: SeedManager | None = None) -> None:
        self._variants = variants
        self._seeds = seeds or SeedManager()
        self._sessions: dict[str, Session] = {}
        self._player_sessions: dict[str, str] = {}  # player_id -> session_id
        self._locks: dict[str, asyncio.Lock] = {}

    def __len__(self) -> int:
        return len(self._sessions)

    def __contains__(self, session_id: str) -> bool:
        return session_id in self._sessions

    def create(self, kind: VariantKind, creator_id: str, creator_name: str) -> Session:
        """Store a new Session with the creator in seat 0 and no board yet."""
        session_id = generate_id()
        while session_id in self._sessions:
            session_id = generate_id()

        session = Session(
            session_id=session_id,
            kind=kind,
            variant=self._variants[kind],
            rng=self._seeds.get_rng(session_id),
            players=[Player(id=creator_id, name=creator_name, seat=0)],
        )
        self._sessions[session_id] = session
        self._player_sessions[creator_id] = session_id
        self._locks[session_id] = asyncio.Lock()
        logger.info(
            "Session %s created (%s) by %s", session_id, session.variant.display_name, creator_id
        )
        return session

    def join(self, session_id: str, player_id: str, name: str) -> Session:
        """Seat *player_id* in the session's second seat.

        Raises GameNotJoinable when the session does not exist, is full,
        or already seats this player.
        """
        session = self._sessions.get(session_id)
        if session is None or session.is_full:
            raise GameNotJoinable(session_id)
        if session.seat_of(player_id) is not None:
            raise GameNotJoinable(session_id, "You are already in this game.")

        session.players.append(Player(id=player_id, name=name, seat=len(session.players)))
        self._player_sessions[player_id] = session_id
        logger.info("Player %s joined session %s", player_id, session_id)
        return session

    def lookup(self, session_id: str | None) -> Session | None:
        if session_id is None:
            return None
        return self._sessions.get(session_id)

    def session_for(self, player_id: str) -> Session | None:
        """Return the session *player_id* is seated in, if any."""
        return self.lookup(self._player_sessions.get(player_id))

    def remove(self, session_id: str) -> Session | None:
        session = self._sessions.pop(session_id, None)
        if session is None:
            return None
        for player in session.players:
            if self._player_sessions.get(player.id) == session_id:
                del self._player_sessions[player.id]
        self._locks.pop(session_id, None)
        logger.info("Session %s closed", session_id)
        return session

    def lock(self, session_id: str) -> asyncio.Lock:
        """Return the mutation lock for *session_id*.

        A removed session gets a fresh, unshared lock so late callers can
        still enter and observe that the session is gone.
        """
        return self._locks.get(session_id) or asyncio.Lock()
