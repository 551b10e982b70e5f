"""
Tests for game_hub.games.chess

Tests move generation, king safety, terminal detection and the opponent.
"""

import random

import numpy as np
import pytest

from game_hub.core.errors import AlreadyFinished, IllegalMove
from game_hub.core.types import DRAW, P1, P2, Outcome, Status
from game_hub.games.chess import KING, PAWN, QUEEN, ROOK, Chess, ChessMove, ChessState


@pytest.fixture
def game() -> Chess:
    """Fresh Chess engine."""
    return Chess()


def empty_board() -> np.ndarray:
    return np.zeros((8, 8), dtype=np.int8)


def play_moves(game: Chess, state: ChessState, moves):
    for move in moves:
        state = game.apply_move(state, ChessMove(*move)).state
    return state


class TestInitialization:
    """Initial position tests."""

    def test_initial_state(self, game: Chess):
        """White to move, not in check, game ongoing."""
        state = game.initial_state()
        assert state.current_player == P1
        assert state.in_check is False
        assert not state.is_over

    def test_back_ranks(self, game: Chess):
        """Kings and queens start on their files, pieces signed by owner."""
        board = game.initial_state().board
        assert board[7, 4] == KING
        assert board[0, 4] == -KING
        assert board[7, 3] == QUEEN
        assert np.all(board[6] == PAWN)
        assert np.all(board[1] == -PAWN)

    def test_metadata(self, game: Chess):
        """Game id is stable."""
        assert game.game_id() == "chess"


class TestMoveGeneration:
    """Legal move generation tests."""

    def test_opening_has_twenty_moves(self, game: Chess):
        """16 pawn moves plus 4 knight moves."""
        moves = game.legal_moves(game.initial_state())
        assert len(moves) == 20
        knight_moves = [m for m in moves if m.fr == 7]
        assert len(knight_moves) == 4

    def test_black_reply_count(self, game: Chess):
        """Black also has 20 replies after 1. e4."""
        state = play_moves(game, game.initial_state(), [(6, 4, 4, 4)])
        assert state.current_player == P2
        assert len(game.legal_moves(state)) == 20

    def test_pinned_rook_stays_on_file(self, game: Chess):
        """A rook pinned to its king may only move along the pin."""
        board = empty_board()
        board[7, 4] = KING
        board[6, 4] = ROOK
        board[0, 4] = -ROOK
        board[0, 0] = -KING
        state = ChessState(board, current_player=P1)

        rook_moves = game.destinations(state, 6, 4)
        assert len(rook_moves) == 6
        assert all(m.tc == 4 for m in rook_moves)

    def test_destinations_of_enemy_piece_empty(self, game: Chess):
        """Only the side to move has destinations."""
        state = game.initial_state()
        assert game.destinations(state, 1, 0) == []

    def test_never_leaves_king_in_check(self, game: Chess, play):
        """No legal move in a played-out game exposes the mover's king."""
        rng = random.Random(7)
        for state, move in play(game, game.initial_state(), rng, max_actions=60):
            for m in game.legal_moves(state):
                trial = state.board.copy()
                trial[m.tr, m.tc] = trial[m.fr, m.fc]
                trial[m.fr, m.fc] = 0
                assert not game.is_king_in_check(trial, state.current_player)


class TestExecution:
    """Move application tests."""

    def test_input_state_untouched(self, game: Chess):
        """apply_move returns a new state and leaves the old one alone."""
        state = game.initial_state()
        before = state.board.copy()
        result = game.apply_move(state, ChessMove(6, 4, 4, 4))
        assert np.array_equal(state.board, before)
        assert result.state.board[4, 4] == PAWN
        assert result.state.board[6, 4] == 0

    def test_capture_reported(self, game: Chess):
        """Capturing a piece lists its square in effects."""
        state = play_moves(game, game.initial_state(), [(6, 4, 4, 4), (1, 3, 3, 3)])
        result = game.apply_move(state, ChessMove(4, 4, 3, 3))
        assert result.effects.captures == ((3, 3),)

    def test_auto_queen(self, game: Chess):
        """A pawn reaching the last rank becomes a queen and gives check along the rank."""
        board = empty_board()
        board[1, 0] = PAWN
        board[7, 4] = KING
        board[0, 7] = -KING
        state = ChessState(board, current_player=P1)

        result = game.apply_move(state, ChessMove(1, 0, 0, 0))
        assert result.state.board[0, 0] == QUEEN
        assert result.effects.promotion is True
        assert result.effects.check is True
        assert result.state.in_check is True
        assert result.outcome == Outcome()

    def test_illegal_move_rejected(self, game: Chess):
        """Moves outside the legal set raise IllegalMove (a ValueError)."""
        state = game.initial_state()
        with pytest.raises(IllegalMove):
            game.apply_move(state, ChessMove(7, 0, 5, 0))
        with pytest.raises(ValueError):
            game.apply_move(state, ChessMove(1, 0, 2, 0))


class TestTerminal:
    """Checkmate and stalemate tests."""

    FOOLS_MATE = [(6, 5, 5, 5), (1, 4, 3, 4), (6, 6, 4, 6), (0, 3, 4, 7)]

    def test_fools_mate(self, game: Chess):
        """Check with no legal reply is a win for the mover."""
        state = play_moves(game, game.initial_state(), self.FOOLS_MATE)
        assert state.outcome == Outcome(Status.WIN, P2)
        assert state.in_check is True

    def test_finished_game_rejects_queries(self, game: Chess):
        """Terminal states raise AlreadyFinished."""
        state = play_moves(game, game.initial_state(), self.FOOLS_MATE)
        with pytest.raises(AlreadyFinished):
            game.legal_moves(state)
        with pytest.raises(RuntimeError):
            game.apply_move(state, ChessMove(7, 4, 6, 5))

    def test_stalemate(self, game: Chess):
        """No legal move without check is a draw."""
        board = empty_board()
        board[0, 0] = -KING
        board[5, 1] = QUEEN
        board[7, 7] = KING
        state = ChessState(board, current_player=P1)

        result = game.apply_move(state, ChessMove(5, 1, 2, 1))
        assert result.outcome == DRAW
        assert result.state.in_check is False


class TestOpponent:
    """Heuristic opponent tests."""

    def test_prefers_bigger_capture(self, game: Chess):
        """Capturing a queen beats capturing a pawn."""
        board = empty_board()
        board[4, 4] = ROOK
        board[4, 0] = -QUEEN
        board[2, 4] = -PAWN
        board[7, 7] = KING
        board[0, 7] = -KING
        state = ChessState(board, current_player=P1)

        for seed in range(5):
            move = game.choose_move(state, rng=random.Random(seed))
            assert move == ChessMove(4, 4, 4, 0)

    def test_choice_is_legal(self, game: Chess, rng):
        """The opponent only picks legal moves."""
        state = game.initial_state()
        assert game.choose_move(state, rng=rng) in game.legal_moves(state)


class TestDisplay:
    """state_string tests."""

    def test_mentions_side_to_move(self, game: Chess):
        """Rendering shows whose turn it is."""
        text = game.state_string(game.initial_state())
        assert "White to move" in text
        assert "K" in text and "k" in text
