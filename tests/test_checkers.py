"""Tests for the Checkers variant."""

import pytest

from gamerelay.variants.base import Outcome, TurnDirective
from gamerelay.variants.checkers.board import (
    count_pieces,
    create_initial_board,
    is_king,
    owner,
)
from gamerelay.variants.checkers.engine import CheckersBoard, CheckersVariant


@pytest.fixture
def variant():
    return CheckersVariant()


@pytest.fixture
def board(variant, rng):
    return variant.new_board(rng)


def _empty_board() -> CheckersBoard:
    return CheckersBoard(grid=[[0] * 8 for _ in range(8)])


def _mv(fr, to):
    return {"from": {"row": fr[0], "col": fr[1]}, "to": {"row": to[0], "col": to[1]}}


# ------------------------------------------------------------------
# Board setup
# ------------------------------------------------------------------

class TestBoardSetup:
    def test_initial_board_dimensions(self):
        grid = create_initial_board()
        assert len(grid) == 8
        assert all(len(row) == 8 for row in grid)

    def test_12_pieces_each(self):
        assert count_pieces(create_initial_board()) == {1: 12, 2: 12}

    def test_seat_2_on_top_rows(self):
        grid = create_initial_board()
        for r in range(3):
            for c in range(8):
                assert grid[r][c] == (2 if (r + c) % 2 == 1 else 0)

    def test_seat_1_on_bottom_rows(self):
        grid = create_initial_board()
        for r in range(5, 8):
            for c in range(8):
                assert grid[r][c] == (1 if (r + c) % 2 == 1 else 0)


class TestEncoding:
    @pytest.mark.parametrize("piece,expected", [(1, 1), (2, 2), (11, 1), (22, 2), (0, 0)])
    def test_owner_is_value_mod_11(self, piece, expected):
        assert owner(piece) == expected

    def test_kings_are_above_10(self):
        assert is_king(11) and is_king(22)
        assert not is_king(1) and not is_king(2)


# ------------------------------------------------------------------
# Simple moves
# ------------------------------------------------------------------

class TestSimpleMoves:
    def test_forward_step_accepted(self, variant, board):
        outcome = variant.play(board, 0, _mv((5, 0), (4, 1)))
        assert outcome.accepted is True
        assert outcome.turn is TurnDirective.PASS
        assert board.grid[5][0] == 0
        assert board.grid[4][1] == 1

    def test_seat_2_moves_down(self, variant, board):
        outcome = variant.play(board, 1, _mv((2, 1), (3, 0)))
        assert outcome.accepted is True
        assert board.grid[3][0] == 2

    def test_backward_man_rejected(self, variant):
        b = _empty_board()
        b.grid[4][1] = 1
        b.grid[0][1] = 2
        outcome = variant.play(b, 0, _mv((4, 1), (5, 2)))
        assert outcome.accepted is False
        assert b.grid[4][1] == 1

    def test_king_moves_backward(self, variant):
        b = _empty_board()
        b.grid[4][1] = 11
        b.grid[0][1] = 2
        outcome = variant.play(b, 0, _mv((4, 1), (5, 2)))
        assert outcome.accepted is True
        assert b.grid[5][2] == 11

    def test_opponent_piece_rejected(self, variant, board):
        outcome = variant.play(board, 0, _mv((2, 1), (3, 0)))
        assert outcome.accepted is False
        assert "not your piece" in outcome.reason.lower()

    def test_empty_source_rejected(self, variant, board):
        assert variant.play(board, 0, _mv((4, 1), (3, 2))).accepted is False

    def test_occupied_destination_rejected(self, variant, board):
        assert variant.play(board, 0, _mv((6, 1), (5, 0))).accepted is False

    def test_non_diagonal_rejected(self, variant, board):
        assert variant.play(board, 0, _mv((5, 0), (4, 0))).accepted is False

    def test_three_step_rejected(self, variant):
        b = _empty_board()
        b.grid[5][0] = 1
        b.grid[0][1] = 2
        assert variant.play(b, 0, _mv((5, 0), (2, 3))).accepted is False

    def test_off_board_rejected(self, variant, board):
        assert variant.play(board, 0, _mv((5, 0), (4, -1))).accepted is False


# ------------------------------------------------------------------
# Jumps
# ------------------------------------------------------------------

class TestJumps:
    def test_jump_removes_only_jumped_piece(self, variant):
        b = _empty_board()
        b.grid[5][2] = 1
        b.grid[4][3] = 2
        b.grid[0][1] = 2
        outcome = variant.play(b, 0, _mv((5, 2), (3, 4)))
        assert outcome.accepted is True
        assert b.grid[5][2] == 0
        assert b.grid[4][3] == 0
        assert b.grid[3][4] == 1
        assert b.grid[0][1] == 2
        assert b.last_move["captured"] == {"row": 4, "col": 3}

    def test_jump_over_own_piece_rejected(self, variant):
        b = _empty_board()
        b.grid[5][2] = 1
        b.grid[4][3] = 1
        b.grid[0][1] = 2
        assert variant.play(b, 0, _mv((5, 2), (3, 4))).accepted is False

    def test_jump_over_empty_rejected(self, variant):
        b = _empty_board()
        b.grid[5][2] = 1
        b.grid[0][1] = 2
        assert variant.play(b, 0, _mv((5, 2), (3, 4))).accepted is False

    def test_jump_onto_occupied_rejected(self, variant):
        b = _empty_board()
        b.grid[5][2] = 1
        b.grid[4][3] = 2
        b.grid[3][4] = 2
        assert variant.play(b, 0, _mv((5, 2), (3, 4))).accepted is False
        assert b.grid[4][3] == 2

    def test_jump_ends_turn_even_with_follow_up(self, variant):
        b = _empty_board()
        b.grid[5][2] = 1
        b.grid[4][3] = 2
        b.grid[2][5] = 2  # a second jump would be available from (3, 4)
        outcome = variant.play(b, 0, _mv((5, 2), (3, 4)))
        assert outcome.turn is TurnDirective.PASS
        assert outcome.result.kind is Outcome.CONTINUE

    def test_king_jumps_backward(self, variant):
        b = _empty_board()
        b.grid[3][2] = 22
        b.grid[2][3] = 1
        b.grid[7][0] = 1
        outcome = variant.play(b, 1, _mv((3, 2), (1, 4)))
        assert outcome.accepted is True
        assert b.grid[2][3] == 0


# ------------------------------------------------------------------
# Promotion and round end
# ------------------------------------------------------------------

class TestPromotionAndEnd:
    def test_seat_1_promotes_on_row_0(self, variant):
        b = _empty_board()
        b.grid[1][2] = 1
        b.grid[5][6] = 2
        variant.play(b, 0, _mv((1, 2), (0, 1)))
        assert b.grid[0][1] == 11

    def test_seat_2_promotes_on_row_7(self, variant):
        b = _empty_board()
        b.grid[6][1] = 2
        b.grid[2][1] = 1
        variant.play(b, 1, _mv((6, 1), (7, 2)))
        assert b.grid[7][2] == 22

    def test_promotion_by_jump(self, variant):
        b = _empty_board()
        b.grid[2][1] = 1
        b.grid[1][2] = 2
        b.grid[5][6] = 2
        variant.play(b, 0, _mv((2, 1), (0, 3)))
        assert b.grid[0][3] == 11

    def test_capturing_last_piece_ends_round(self, variant):
        b = _empty_board()
        b.grid[5][2] = 1
        b.grid[4][3] = 2
        outcome = variant.play(b, 0, _mv((5, 2), (3, 4)))
        assert outcome.result.kind is Outcome.WINNER
        assert outcome.result.winner_seat == 0

    def test_snapshot_counts_pieces(self, variant, board):
        snap = variant.snapshot(board, 0)
        assert snap["piecesRemaining"] == [12, 12]
        assert snap["lastMove"] is None
