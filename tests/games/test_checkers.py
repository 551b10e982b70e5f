"""
Tests for game_hub.games.checkers

Tests mandatory capture, multi-jump chains, crowning and terminal detection.
"""

import random

import numpy as np
import pytest

from game_hub.core.errors import IllegalMove
from game_hub.core.types import P1, P2, Outcome
from game_hub.games.checkers import KING, MAN, Checkers, CheckersMove, CheckersState


@pytest.fixture
def game() -> Checkers:
    """Fresh Checkers engine."""
    return Checkers()


def make_state(pieces, player=P1) -> CheckersState:
    """pieces: {(r, c): signed piece code}."""
    board = np.zeros((8, 8), dtype=np.int8)
    for (r, c), piece in pieces.items():
        board[r, c] = piece
    return CheckersState(board, current_player=player)


class TestInitialization:
    """Initial position tests."""

    def test_twelve_men_each(self, game: Checkers):
        """Both sides start with 12 men on dark squares."""
        board = game.initial_state().board
        assert np.count_nonzero(board == MAN) == 12
        assert np.count_nonzero(board == -MAN) == 12
        for r, c in zip(*np.nonzero(board)):
            assert (r + c) % 2 == 1

    def test_red_moves_first(self, game: Checkers):
        """Player 1 starts and no chain is pending."""
        state = game.initial_state()
        assert state.current_player == P1
        assert state.chain is None


class TestMoveGeneration:
    """Move generation tests."""

    def test_opening_has_seven_moves(self, game: Checkers):
        """Seven forward steps and no captures."""
        moves = game.legal_moves(game.initial_state())
        assert len(moves) == 7
        assert not any(m.is_capture for m in moves)

    def test_capture_is_mandatory(self, game: Checkers):
        """When a capture exists, steps are not offered."""
        state = make_state({(5, 2): MAN, (4, 3): -MAN, (5, 6): MAN})
        assert game.legal_moves(state) == [CheckersMove(5, 2, 3, 4)]

    def test_step_rejected_when_capture_available(self, game: Checkers):
        """Submitting a plain step during a forced capture raises IllegalMove."""
        state = make_state({(5, 2): MAN, (4, 3): -MAN, (5, 6): MAN})
        with pytest.raises(IllegalMove):
            game.apply_move(state, CheckersMove(5, 6, 4, 7))

    def test_men_move_forward_only(self, game: Checkers):
        """A man has at most two forward steps."""
        state = make_state({(4, 3): MAN, (0, 1): -MAN})
        targets = {(m.tr, m.tc) for m in game.destinations(state, 4, 3)}
        assert targets == {(3, 2), (3, 4)}

    def test_king_moves_both_ways(self, game: Checkers):
        """A king steps along all four diagonals."""
        state = make_state({(4, 3): KING, (0, 1): -MAN})
        targets = {(m.tr, m.tc) for m in game.destinations(state, 4, 3)}
        assert targets == {(3, 2), (3, 4), (5, 2), (5, 4)}


class TestMultiJump:
    """Continuation capture tests."""

    @pytest.fixture
    def double_jump(self) -> CheckersState:
        return make_state({
            (5, 0): MAN, (7, 6): MAN,
            (4, 1): -MAN, (2, 3): -MAN, (0, 7): -MAN,
        })

    def test_first_jump_holds_turn(self, game: Checkers, double_jump):
        """A jump that can continue keeps the turn and pins the jumper."""
        result = game.apply_move(double_jump, CheckersMove(5, 0, 3, 2))
        state = result.state

        assert state.current_player == P1
        assert state.chain == (3, 2)
        assert result.effects.extra_turn is True
        assert result.effects.captures == ((4, 1),)
        assert game.legal_moves(state) == [CheckersMove(3, 2, 1, 4)]

    def test_other_piece_cannot_move_mid_chain(self, game: Checkers, double_jump):
        """Only the jumping piece may act while a chain is pending."""
        state = game.apply_move(double_jump, CheckersMove(5, 0, 3, 2)).state
        with pytest.raises(IllegalMove):
            game.apply_move(state, CheckersMove(7, 6, 6, 5))

    def test_chain_completes(self, game: Checkers, double_jump):
        """The second jump ends the chain and passes the turn."""
        state = game.apply_move(double_jump, CheckersMove(5, 0, 3, 2)).state
        result = game.apply_move(state, CheckersMove(3, 2, 1, 4))

        assert result.state.chain is None
        assert result.state.current_player == P2
        assert result.state.board[2, 3] == 0
        assert result.outcome == Outcome()


class TestPromotion:
    """Crowning tests."""

    def test_man_crowned_on_back_rank(self, game: Checkers):
        """Reaching row 0 makes a red man a king."""
        state = make_state({(1, 2): MAN, (2, 7): -MAN})
        result = game.apply_move(state, CheckersMove(1, 2, 0, 1))
        assert result.state.board[0, 1] == KING
        assert result.effects.promotion is True

    def test_black_crowned_on_row_seven(self, game: Checkers):
        """Black men are crowned on the far side."""
        state = make_state({(6, 1): -MAN, (0, 3): MAN}, player=P2)
        result = game.apply_move(state, CheckersMove(6, 1, 7, 2))
        assert result.state.board[7, 2] == -KING


class TestTerminal:
    """Win detection tests."""

    def test_capturing_last_piece_wins(self, game: Checkers):
        """Opponent with zero pieces loses."""
        state = make_state({(5, 2): MAN, (4, 3): -MAN})
        result = game.apply_move(state, CheckersMove(5, 2, 3, 4))
        assert result.outcome == Outcome.win(P1)

    def test_blocking_all_moves_wins(self, game: Checkers):
        """Opponent with pieces but no legal move loses."""
        state = make_state({
            (7, 0): MAN, (7, 2): MAN, (5, 0): MAN, (5, 2): MAN,
            (6, 1): -MAN,
        })
        result = game.apply_move(state, CheckersMove(5, 0, 4, 1))
        assert result.outcome == Outcome.win(P1)


class TestOpponent:
    """Heuristic opponent tests."""

    def test_prefers_crowning(self, game: Checkers):
        """A man that can be crowned is always moved to the back rank."""
        state = make_state({(1, 2): MAN, (5, 0): MAN, (2, 7): -MAN})
        for seed in range(10):
            move = game.choose_move(state, rng=random.Random(seed))
            assert move.tr == 0

    def test_falls_back_to_any_move(self, game: Checkers, rng):
        """Without crowning options any legal move is chosen."""
        state = game.initial_state()
        assert game.choose_move(state, rng=rng) in game.legal_moves(state)
