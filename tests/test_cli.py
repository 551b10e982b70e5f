"""
Tests for game_hub.cli
"""

import pytest

from game_hub.cli import _describe_effects, main, parse_args, parse_human_players
from game_hub.core.types import Effects


class TestParseArgs:
    """Argument parsing tests."""

    def test_defaults(self):
        """Tic-Tac-Toe, inline, no simulation."""
        args = parse_args([])
        assert args.game == "tic_tac_toe"
        assert args.games == 0
        assert args.workers == 1
        assert args.delay is None

    def test_short_flags(self):
        """Short options map to their long names."""
        args = parse_args(["-g", "ludo", "-n", "4", "-p", "1,3", "-t", "50"])
        assert args.game == "ludo"
        assert args.num_players == 4
        assert args.players == "1,3"
        assert args.max_turns == 50

    def test_unknown_game(self):
        """argparse rejects games outside the registry."""
        with pytest.raises(SystemExit):
            parse_args(["--game", "go"])


class TestParseHumanPlayers:
    """parse_human_players tests."""

    def test_default_human_is_player_one(self):
        assert parse_human_players(None, 2, "chess", self_play=False) == [1]

    def test_self_play_has_no_humans(self):
        assert parse_human_players(None, 2, "chess", self_play=True) == []

    def test_explicit_players_override_self_play(self):
        """--players wins over --self-play and is deduplicated."""
        assert parse_human_players("3, 1,1", 4, "ludo", self_play=True) == [1, 3]

    def test_bad_format(self):
        with pytest.raises(ValueError, match="Invalid --players format"):
            parse_human_players("one", 2, "chess", self_play=False)

    def test_out_of_range(self):
        with pytest.raises(ValueError, match="only supports players 1-2"):
            parse_human_players("3", 2, "chess", self_play=False)


class TestEffectsText:
    """_describe_effects tests."""

    def test_empty(self):
        assert _describe_effects(Effects()) == ""

    def test_mill_suppresses_extra_turn(self):
        """A mill already implies the extra action."""
        assert _describe_effects(Effects(mill=True, extra_turn=True)) == "mill! remove a piece"

    def test_passes_and_captures(self):
        text = _describe_effects(Effects(captures=((0, 0),), passed=(2,)))
        assert text == "captured 1, passed: P2"


class TestMain:
    """Entry point tests."""

    def test_simulation_tally(self, capsys):
        """--games prints a batch summary."""
        main(["--game", "tic_tac_toe", "--games", "3", "--seed", "1"])
        out = capsys.readouterr().out
        assert out.startswith("tic_tac_toe: 3 games")

    def test_invalid_players_raise(self):
        """Configuration errors propagate out of main."""
        with pytest.raises(ValueError):
            main(["--game", "chess", "--players", "5"])
