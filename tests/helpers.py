"""Test doubles and command builders shared by the engine tests."""

from gamerelay.core.parser import Command, CommandKind


class RecordingBroadcaster:
    """Collects outbound messages per player id."""

    def __init__(self):
        self.sent: list[tuple[str, dict]] = []

    async def send(self, player_id, message):
        self.sent.append((player_id, message))

    def to(self, player_id, kind=None):
        return [
            m for pid, m in self.sent
            if pid == player_id and (kind is None or m["type"] == kind)
        ]

    def last_state(self, player_id):
        states = self.to(player_id, "gameState")
        return states[-1]["game"] if states else None

    def clear(self):
        self.sent.clear()


class ManualScheduler:
    """Captures deferred callbacks so tests decide when they fire."""

    def __init__(self):
        self.pending = []

    def call_later(self, delay, callback):
        self.pending.append((delay, callback))

    def cancel_all(self):
        self.pending.clear()

    async def fire_all(self):
        pending, self.pending = self.pending, []
        for _delay, callback in pending:
            await callback()


def create(game_type, name="Alice"):
    return Command(kind=CommandKind.CREATE, game_type=game_type, name=name)


def join(game_id, name="Bob"):
    return Command(kind=CommandKind.JOIN, game_id=game_id, name=name)


def move(game_id, **payload):
    return Command(kind=CommandKind.MOVE, game_id=game_id, move=payload)


def reset(game_id):
    return Command(kind=CommandKind.RESET_ROUND, game_id=game_id)


def leave(game_id=None):
    return Command(kind=CommandKind.LEAVE, game_id=game_id)


def chat(game_id, message, name=None):
    return Command(kind=CommandKind.CHAT, game_id=game_id, name=name, message=message)


async def start_game(engine, broadcaster, game_type, a="alice", b="bob"):
    """Create a session as *a*, join as *b*, return the session id."""
    await engine.dispatch(a, create(game_type))
    game_id = broadcaster.to(a, "created")[-1]["gameId"]
    await engine.dispatch(b, join(game_id))
    return game_id
