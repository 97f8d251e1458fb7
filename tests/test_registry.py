"""Tests for SessionRegistry — create, join, lookup and teardown."""

import pytest

from gamerelay.core.errors import GameNotJoinable
from gamerelay.variants import VariantKind


class TestCreate:
    def test_create_seats_creator(self, registry):
        session = registry.create(VariantKind.CHECKERS, "alice", "Alice")
        assert [p.id for p in session.players] == ["alice"]
        assert session.players[0].seat == 0
        assert session.board is None
        assert session.match_score is None
        assert registry.lookup(session.session_id) is session

    def test_ids_are_unique(self, registry):
        ids = {registry.create(VariantKind.RPS, f"p{i}", "P").session_id for i in range(50)}
        assert len(ids) == 50
        assert len(registry) == 50

    def test_variant_matches_kind(self, registry):
        session = registry.create(VariantKind.MEMORY, "alice", "Alice")
        assert session.variant.key == "memory"


class TestJoin:
    def test_join_fills_second_seat(self, registry):
        session = registry.create(VariantKind.TICTACTOE, "alice", "Alice")
        registry.join(session.session_id, "bob", "Bob")
        assert [(p.id, p.seat) for p in session.players] == [("alice", 0), ("bob", 1)]
        assert session.is_full

    def test_join_missing_session_fails(self, registry):
        with pytest.raises(GameNotJoinable):
            registry.join("nope", "bob", "Bob")

    def test_join_full_session_fails(self, registry):
        session = registry.create(VariantKind.TICTACTOE, "alice", "Alice")
        registry.join(session.session_id, "bob", "Bob")
        with pytest.raises(GameNotJoinable) as exc:
            registry.join(session.session_id, "carol", "Carol")
        assert exc.value.message == "Game not found or is full."
        assert len(session.players) == 2

    def test_creator_cannot_take_both_seats(self, registry):
        session = registry.create(VariantKind.TICTACTOE, "alice", "Alice")
        with pytest.raises(GameNotJoinable):
            registry.join(session.session_id, "alice", "Alice")


class TestLookupAndRemove:
    def test_lookup_unknown_is_none(self, registry):
        assert registry.lookup("missing") is None
        assert registry.lookup(None) is None

    def test_session_for_player(self, registry):
        session = registry.create(VariantKind.CONNECTFOUR, "alice", "Alice")
        registry.join(session.session_id, "bob", "Bob")
        assert registry.session_for("alice") is session
        assert registry.session_for("bob") is session
        assert registry.session_for("carol") is None

    def test_remove_forgets_session_and_players(self, registry):
        session = registry.create(VariantKind.CONNECTFOUR, "alice", "Alice")
        registry.join(session.session_id, "bob", "Bob")
        assert registry.remove(session.session_id) is session
        assert session.session_id not in registry
        assert registry.session_for("alice") is None
        assert registry.session_for("bob") is None
        with pytest.raises(GameNotJoinable):
            registry.join(session.session_id, "carol", "Carol")

    def test_remove_twice_is_harmless(self, registry):
        session = registry.create(VariantKind.RPS, "alice", "Alice")
        registry.remove(session.session_id)
        assert registry.remove(session.session_id) is None

    def test_lock_is_per_session(self, registry):
        a = registry.create(VariantKind.RPS, "alice", "Alice")
        b = registry.create(VariantKind.RPS, "bob", "Bob")
        assert registry.lock(a.session_id) is registry.lock(a.session_id)
        assert registry.lock(a.session_id) is not registry.lock(b.session_id)
