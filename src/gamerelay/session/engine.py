"""Engine — routes parsed commands to the registry, variants and lifecycle.

The engine owns no transport. Outbound messages go through a Broadcaster
(anything with ``async send(player_id, message)``) and delayed follow-ups
through a Scheduler. Every mutation of a session, including its
broadcast, runs under that session's registry lock, so commands for one
session are applied strictly in arrival order.

Flow of a move:
    lookup -> lock -> seat/turn/round checks -> variant.play
    -> end_round | arbiter.advance -> check_match_over
    -> (schedule settle on HOLD) -> broadcast gameState
"""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Awaitable, Callable
from typing import Protocol

from gamerelay.core.errors import GameNotJoinable
from gamerelay.core.parser import Command, CommandKind
from gamerelay.session.lifecycle import RoundLifecycle
from gamerelay.session.models import Session
from gamerelay.session.registry import SessionRegistry
from gamerelay.session.turns import TurnArbiter
from gamerelay.variants import VariantKind
from gamerelay.variants.base import TurnDirective

logger = logging.getLogger(__name__)

DEFAULT_NAMES = ("Player 1", "Player 2")


class Broadcaster(Protocol):
    async def send(self, player_id: str, message: dict) -> None: ...


class Scheduler(Protocol):
    def call_later(self, delay: float, callback: Callable[[], Awaitable[None]]) -> None: ...

    def cancel_all(self) -> None: ...


class LoopScheduler:
    """Runs deferred coroutines on the running asyncio loop.

    Pending timers and running tasks are tracked until they finish so
    ``cancel_all`` can stop them at shutdown. A deferred coroutine that
    raises is logged here.
    """

    def __init__(self) -> None:
        self._handles: set[asyncio.TimerHandle] = set()
        self._tasks: set[asyncio.Task] = set()

    def __len__(self) -> int:
        return len(self._handles) + len(self._tasks)

    def call_later(self, delay: float, callback: Callable[[], Awaitable[None]]) -> None:
        def fire() -> None:
            self._handles.discard(handle)
            self._spawn(callback)

        handle = asyncio.get_running_loop().call_later(delay, fire)
        self._handles.add(handle)

    def cancel_all(self) -> None:
        for handle in self._handles:
            handle.cancel()
        for task in self._tasks:
            task.cancel()
        self._handles.clear()
        self._tasks.clear()

    def _spawn(self, callback: Callable[[], Awaitable[None]]) -> None:
        task = asyncio.get_running_loop().create_task(callback())
        self._tasks.add(task)
        task.add_done_callback(self._finished)

    def _finished(self, task: asyncio.Task) -> None:
        self._tasks.discard(task)
        if task.cancelled():
            return
        exc = task.exception()
        if exc is not None:
            logger.error("Deferred action failed", exc_info=exc)


class Engine:
    """Session engine façade: one instance per server."""

    def __init__(
        self,
        registry: SessionRegistry,
        broadcaster: Broadcaster,
        *,
        lifecycle: RoundLifecycle | None = None,
        arbiter: TurnArbiter | None = None,
        scheduler: Scheduler | None = None,
        reveal_delay_s: float = 1.0,
        reject_feedback: bool = False,
    ) -> None:
        self._registry = registry
        self._broadcaster = broadcaster
        self._arbiter = arbiter or TurnArbiter()
        self._lifecycle = lifecycle or RoundLifecycle(arbiter=self._arbiter)
        self._scheduler = scheduler if scheduler is not None else LoopScheduler()
        self._reveal_delay_s = reveal_delay_s
        self._reject_feedback = reject_feedback

    @property
    def registry(self) -> SessionRegistry:
        return self._registry

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    async def dispatch(self, player_id: str, command: Command) -> None:
        """Route one command from *player_id*."""
        kind = command.kind
        if kind is CommandKind.CREATE:
            await self._create(player_id, command)
        elif kind is CommandKind.JOIN:
            await self._join(player_id, command)
        elif kind is CommandKind.MOVE:
            await self._move(player_id, command)
        elif kind is CommandKind.CHAT:
            await self._chat(player_id, command)
        elif kind is CommandKind.RESET_ROUND:
            await self._reset_round(player_id, command)
        elif kind is CommandKind.LEAVE:
            await self._teardown(player_id)
        else:
            logger.debug("Ignoring unknown command %r from %s", kind, player_id)

    async def disconnect(self, player_id: str) -> None:
        """Transport lost *player_id*; destroy their session, if any."""
        await self._teardown(player_id)

    def close(self) -> None:
        """Cancel every pending deferred action. Called at server shutdown."""
        self._scheduler.cancel_all()

    # ------------------------------------------------------------------
    # Command handlers
    # ------------------------------------------------------------------

    async def _create(self, player_id: str, command: Command) -> None:
        try:
            kind = VariantKind(command.game_type)
        except ValueError:
            await self._send_error(player_id, f"Unknown game type: {command.game_type!r}.")
            return

        await self._teardown(player_id)
        session = self._registry.create(kind, player_id, command.name or DEFAULT_NAMES[0])
        async with self._registry.lock(session.session_id):
            await self._broadcaster.send(player_id, {"type": "created", "gameId": session.session_id})
            await self._broadcast_state(session)

    async def _join(self, player_id: str, command: Command) -> None:
        target = self._registry.lookup(command.game_id)
        if target is None or target.is_full:
            await self._send_error(player_id, GameNotJoinable(command.game_id).message)
            return

        current = self._registry.session_for(player_id)
        if current is not None and current is not target:
            await self._teardown(player_id)

        async with self._registry.lock(target.session_id):
            try:
                session = self._registry.join(
                    command.game_id, player_id, command.name or DEFAULT_NAMES[1]
                )
            except GameNotJoinable as e:
                await self._send_error(player_id, e.message)
                return
            self._lifecycle.start_match(session)
            await self._broadcast_state(session)

    async def _move(self, player_id: str, command: Command) -> None:
        session = self._registry.lookup(command.game_id)
        if session is None:
            await self._reject(player_id, "Game not found.")
            return

        async with self._registry.lock(session.session_id):
            if self._registry.lookup(session.session_id) is not session:
                await self._reject(player_id, "Game not found.")
                return

            seat = session.seat_of(player_id)
            blocker = self._move_blocker(session, seat)
            if blocker:
                await self._reject(player_id, blocker)
                return

            outcome = session.variant.play(session.board, seat, command.move)
            if not outcome.accepted:
                await self._reject(player_id, outcome.reason or "Illegal move.")
                return

            if outcome.result.is_terminal:
                self._lifecycle.end_round(session, outcome.result.winner_seat)
            else:
                self._arbiter.advance(session, outcome.turn)
                if outcome.turn is TurnDirective.HOLD:
                    self._schedule_settle(session)
            self._lifecycle.check_match_over(session)

            await self._broadcast_state(session)

    async def _chat(self, player_id: str, command: Command) -> None:
        session = self._registry.lookup(command.game_id)
        seat = session.seat_of(player_id) if session else None
        if seat is None:
            logger.debug("Ignoring chat from %s for game %r", player_id, command.game_id)
            return
        name = command.name or session.player_at(seat).name
        await self._broadcast(session, {"type": "chat", "name": name, "message": command.message})

    async def _reset_round(self, player_id: str, command: Command) -> None:
        session = self._registry.lookup(command.game_id)
        if session is None or session.seat_of(player_id) is None:
            logger.debug("Ignoring resetRound from %s for game %r", player_id, command.game_id)
            return

        async with self._registry.lock(session.session_id):
            if self._registry.lookup(session.session_id) is not session:
                return
            if not self._lifecycle.reset_round(session):
                logger.debug("Session %s refused round reset", session.session_id)
                return
            await self._broadcast_state(session)

    async def _teardown(self, player_id: str) -> None:
        session = self._registry.session_for(player_id)
        if session is None:
            return

        async with self._registry.lock(session.session_id):
            if self._registry.lookup(session.session_id) is not session:
                return
            self._registry.remove(session.session_id)
            for player in session.players:
                if player.id != player_id:
                    await self._broadcaster.send(player.id, {"type": "opponentLeft"})

    # ------------------------------------------------------------------
    # Deferred settle
    # ------------------------------------------------------------------

    def _schedule_settle(self, session: Session) -> None:
        session_id, epoch = session.session_id, session.epoch

        async def settle() -> None:
            await self._settle(session_id, epoch)

        self._scheduler.call_later(self._reveal_delay_s, settle)

    async def _settle(self, session_id: str, epoch: int) -> None:
        """Run a variant's deferred follow-up if its round is still live."""
        session = self._registry.lookup(session_id)
        if session is None:
            logger.debug("Dropping deferred settle for closed session %s", session_id)
            return

        async with self._registry.lock(session_id):
            if self._registry.lookup(session_id) is not session:
                return
            if session.epoch != epoch or session.round_over or session.match_over:
                logger.debug("Stale deferred settle for session %s (epoch %d)", session_id, epoch)
                return
            directive = session.variant.settle(session.board)
            if directive is None:
                return
            self._arbiter.advance(session, directive)
            await self._broadcast_state(session)

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------

    @staticmethod
    def _move_blocker(session: Session, seat: int | None) -> str | None:
        """Reason a seat may not move right now, or None."""
        if seat is None:
            return "You are not in this game."
        if not session.is_full or session.board is None:
            return "Waiting for an opponent."
        if session.match_over:
            return "The match is over."
        if session.round_over:
            return "The round is over."
        if session.variant.turn_based and session.turn_seat != seat:
            return "Not your turn."
        return None

    async def _reject(self, player_id: str, reason: str) -> None:
        logger.debug("Rejected move from %s: %s", player_id, reason)
        if self._reject_feedback:
            await self._send_error(player_id, reason)

    async def _send_error(self, player_id: str, message: str) -> None:
        await self._broadcaster.send(player_id, {"type": "error", "message": message})

    async def _broadcast(self, session: Session, message: dict) -> None:
        for player in session.players:
            await self._broadcaster.send(player.id, message)

    async def _broadcast_state(self, session: Session) -> None:
        for player in session.players:
            await self._broadcaster.send(
                player.id, {"type": "gameState", "game": session.snapshot(player.id)}
            )
