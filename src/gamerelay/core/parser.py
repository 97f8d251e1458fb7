"""EnvelopeParser — decode and validate inbound command envelopes.

Each WebSocket text frame carries one JSON object with a ``type``
discriminator. The frame is decoded, its type mapped onto the closed
``CommandKind`` enum, and the body validated against that kind's JSON
Schema. Variant-specific move payloads are validated later by the
variant itself.
"""

from __future__ import annotations

import json
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path

import jsonschema

from gamerelay.core.schemas import load_schema

_ENVELOPE_SCHEMA_PATH = Path(__file__).parent / "envelope.json"


class CommandKind(Enum):
    CREATE = "create"
    JOIN = "join"
    MOVE = "move"
    CHAT = "chat"
    RESET_ROUND = "resetRound"
    LEAVE = "leave"


@dataclass(frozen=True)
class Command:
    """A validated inbound command."""

    kind: CommandKind
    game_id: str | None = None
    game_type: str | None = None
    name: str | None = None
    move: dict = field(default_factory=dict)
    message: str | None = None


@dataclass(frozen=True)
class ParseResult:
    """Result of parsing one inbound frame.

    ``unknown_type`` marks a well-formed envelope whose ``type`` is not a
    command kind; callers ignore those without logging them as malformed.
    """

    success: bool
    command: Command | None
    error: str | None
    unknown_type: bool = False


class EnvelopeParser:
    """Decode a text frame into a ``Command``."""

    def __init__(self, schemas: dict | None = None) -> None:
        self._schemas = schemas if schemas is not None else load_schema(_ENVELOPE_SCHEMA_PATH)

    def parse(self, raw: str | bytes) -> ParseResult:
        if isinstance(raw, bytes):
            try:
                raw = raw.decode("utf-8")
            except UnicodeDecodeError as e:
                return ParseResult(success=False, command=None, error=f"Not UTF-8: {e}")

        try:
            data = json.loads(raw)
        except json.JSONDecodeError as e:
            return ParseResult(success=False, command=None, error=f"JSON parse error: {e}")

        if not isinstance(data, dict):
            return ParseResult(success=False, command=None, error="JSON value is not an object")

        kind_value = data.get("type")
        if not isinstance(kind_value, str):
            return ParseResult(success=False, command=None, error="Missing 'type' discriminator")

        try:
            kind = CommandKind(kind_value)
        except ValueError:
            return ParseResult(
                success=False,
                command=None,
                error=f"Unknown command type: {kind_value!r}",
                unknown_type=True,
            )

        try:
            jsonschema.validate(data, self._schemas[kind.value])
        except jsonschema.ValidationError as e:
            return ParseResult(success=False, command=None, error=f"Schema validation: {e.message}")

        command = Command(
            kind=kind,
            game_id=data.get("gameId"),
            game_type=data.get("gameType"),
            name=data.get("name"),
            move=data.get("move") or {},
            message=data.get("message"),
        )
        return ParseResult(success=True, command=command, error=None)
