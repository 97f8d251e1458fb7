"""Tests for EnvelopeParser — frame decoding and envelope validation."""

import pytest

from gamerelay.core.parser import CommandKind, EnvelopeParser


@pytest.fixture
def parser():
    return EnvelopeParser()


class TestEnvelopeParser:
    def test_create(self, parser):
        result = parser.parse('{"type": "create", "gameType": "checkers", "name": "Ann"}')
        assert result.success is True
        assert result.command.kind is CommandKind.CREATE
        assert result.command.game_type == "checkers"
        assert result.command.name == "Ann"
        assert result.command.game_id is None

    def test_create_without_name(self, parser):
        result = parser.parse('{"type": "create", "gameType": "rps"}')
        assert result.success is True
        assert result.command.name is None

    def test_join(self, parser):
        result = parser.parse('{"type": "join", "gameId": "ab12cd34", "name": "Bo"}')
        assert result.success is True
        assert result.command.kind is CommandKind.JOIN
        assert result.command.game_id == "ab12cd34"

    def test_move_keeps_payload_opaque(self, parser):
        raw = '{"type": "move", "gameId": "g1", "move": {"from": {"row": 5, "col": 0}}}'
        result = parser.parse(raw)
        assert result.success is True
        assert result.command.move == {"from": {"row": 5, "col": 0}}

    def test_reset_round(self, parser):
        result = parser.parse('{"type": "resetRound", "gameId": "g1"}')
        assert result.command.kind is CommandKind.RESET_ROUND

    def test_chat(self, parser):
        result = parser.parse('{"type": "chat", "gameId": "g1", "message": "gg"}')
        assert result.success is True
        assert result.command.message == "gg"

    def test_leave_needs_no_game(self, parser):
        result = parser.parse('{"type": "leave"}')
        assert result.success is True
        assert result.command.kind is CommandKind.LEAVE

    def test_bytes_frame(self, parser):
        result = parser.parse('{"type": "join", "gameId": "g1"}'.encode("utf-8"))
        assert result.success is True

    def test_move_without_payload_fails(self, parser):
        result = parser.parse('{"type": "move", "gameId": "g1"}')
        assert result.success is False
        assert result.unknown_type is False
        assert result.error is not None

    def test_move_payload_must_be_object(self, parser):
        result = parser.parse('{"type": "move", "gameId": "g1", "move": 4}')
        assert result.success is False

    def test_join_without_game_id_fails(self, parser):
        result = parser.parse('{"type": "join"}')
        assert result.success is False

    def test_overlong_name_fails(self, parser):
        result = parser.parse('{"type": "create", "gameType": "rps", "name": "%s"}' % ("x" * 65))
        assert result.success is False

    def test_unknown_type_flagged(self, parser):
        result = parser.parse('{"type": "spectate", "gameId": "g1"}')
        assert result.success is False
        assert result.unknown_type is True

    def test_malformed_json(self, parser):
        result = parser.parse('{"type": create}')
        assert result.success is False
        assert result.unknown_type is False

    def test_non_object(self, parser):
        assert parser.parse("[1, 2]").success is False

    def test_missing_type(self, parser):
        assert parser.parse('{"gameId": "g1"}').success is False

    def test_invalid_utf8(self, parser):
        assert parser.parse(b"\xff\xfe").success is False

    def test_empty_string(self, parser):
        assert parser.parse("").success is False
