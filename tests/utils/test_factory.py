"""
Tests for game_hub.utils.factory
"""

import pytest

from game_hub.games.chess import Chess
from game_hub.session import GameSession
from game_hub.utils.config import VariantConfig
from game_hub.utils.factory import create_engine, create_session


class TestCreateEngine:
    """create_engine tests."""

    def test_builds_registered_engine(self):
        """Names map to engine instances."""
        assert isinstance(create_engine("chess"), Chess)

    def test_unknown_game(self):
        """Unknown names list the available games."""
        with pytest.raises(ValueError, match="Available"):
            create_engine("backgammon")


class TestCreateSession:
    """create_session tests."""

    def test_unstarted_session(self, manual_scheduler):
        """The session is wired to the engine and scheduler but not started."""
        session = create_session(VariantConfig("reversi"), scheduler=manual_scheduler)
        assert isinstance(session, GameSession)
        assert session.engine.game_id() == "reversi"
        assert session.scheduler is manual_scheduler
        assert session.generation == 0
