"""
Games module - board game rule engines.
"""

from game_hub.games.game_state import GameState
from game_hub.games.game_base import GameBase
from game_hub.games.game_rules import in_bounds, board_full, opponent, line_through
from game_hub.games.chess import Chess, ChessMove
from game_hub.games.checkers import Checkers, CheckersMove
from game_hub.games.reversi import Reversi, ReversiMove
from game_hub.games.connect_four import ConnectFour
from game_hub.games.morris import NineMensMorris, MorrisMove, Phase
from game_hub.games.ludo import Ludo, LudoMove
from game_hub.games.tic_tac_toe import TicTacToe, TicTacToeMove

__all__ = [
    "GameState",
    "GameBase",
    "Chess",
    "ChessMove",
    "Checkers",
    "CheckersMove",
    "Reversi",
    "ReversiMove",
    "ConnectFour",
    "NineMensMorris",
    "MorrisMove",
    "Phase",
    "Ludo",
    "LudoMove",
    "TicTacToe",
    "TicTacToeMove",
    "in_bounds",
    "board_full",
    "opponent",
    "line_through",
]
