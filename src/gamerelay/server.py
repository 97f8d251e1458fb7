"""RelayServer — WebSocket transport in front of the session engine.

Each connection gets a fresh player id (sent as ``init``), every text
frame is parsed into a Command and dispatched, and a closed connection
is reported to the engine as a disconnect. The ConnectionHub is the
engine's Broadcaster: it maps player ids to open connections.
"""

from __future__ import annotations

import json
import logging

from websockets.asyncio.server import ServerConnection, serve
from websockets.exceptions import ConnectionClosed

from gamerelay.config import ServerConfig
from gamerelay.core.parser import EnvelopeParser
from gamerelay.core.seed import SeedManager
from gamerelay.session.engine import Engine
from gamerelay.session.lifecycle import RoundLifecycle
from gamerelay.session.registry import SessionRegistry, generate_id
from gamerelay.session.turns import TurnArbiter
from gamerelay.variants import build_variants

logger = logging.getLogger(__name__)


class ConnectionHub:
    """Player id -> open connection. Implements the engine's Broadcaster."""

    def __init__(self) -> None:
        self._connections: dict[str, ServerConnection] = {}

    def __len__(self) -> int:
        return len(self._connections)

    def register(self, player_id: str, connection: ServerConnection) -> None:
        self._connections[player_id] = connection

    def unregister(self, player_id: str) -> None:
        self._connections.pop(player_id, None)

    async def send(self, player_id: str, message: dict) -> None:
        connection = self._connections.get(player_id)
        if connection is None:
            return
        try:
            await connection.send(json.dumps(message, ensure_ascii=False))
        except ConnectionClosed:
            # The close handler tears the session down
            logger.warning("Send to %s failed: connection closed", player_id)


def build_engine(config: ServerConfig, hub: ConnectionHub) -> Engine:
    """Wire registry, lifecycle and engine from config."""
    arbiter = TurnArbiter()
    registry = SessionRegistry(
        build_variants(config.dots_grid_size), SeedManager(config.seed)
    )
    return Engine(
        registry,
        hub,
        lifecycle=RoundLifecycle(config.win_score, arbiter),
        arbiter=arbiter,
        reveal_delay_s=config.memory_reveal_delay_s,
        reject_feedback=config.reject_feedback,
    )


class RelayServer:
    def __init__(self, config: ServerConfig) -> None:
        self.config = config
        self.hub = ConnectionHub()
        self.engine = build_engine(config, self.hub)
        self.parser = EnvelopeParser()

    async def handler(self, connection: ServerConnection) -> None:
        player_id = generate_id()
        self.hub.register(player_id, connection)
        logger.info("Player %s connected", player_id)
        await self.hub.send(player_id, {"type": "init", "playerId": player_id})
        try:
            async for frame in connection:
                await self.handle_frame(player_id, frame)
        except ConnectionClosed as e:
            logger.info("Player %s connection dropped: %s", player_id, e)
        finally:
            self.hub.unregister(player_id)
            logger.info("Player %s disconnected", player_id)
            await self.engine.disconnect(player_id)

    async def handle_frame(self, player_id: str, frame: str | bytes) -> None:
        result = self.parser.parse(frame)
        if result.unknown_type:
            logger.debug("Ignoring frame from %s: %s", player_id, result.error)
            return
        if not result.success:
            logger.warning("Dropping malformed frame from %s: %s", player_id, result.error)
            return
        logger.debug("Received from %s: %s", player_id, result.command)
        await self.engine.dispatch(player_id, result.command)

    async def serve(self) -> None:
        """Accept connections until cancelled."""
        async with serve(self.handler, self.config.host, self.config.port) as server:
            logger.info("Server is listening on %s:%d", self.config.host, self.config.port)
            try:
                await server.serve_forever()
            finally:
                self.engine.close()
