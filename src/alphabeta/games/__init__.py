"""
Game implementations for the minimax engine.

Each game implements the Game interface from base.py.
"""

from .base import (
    Game,
    GameSpec,
    Move,
    register_game,
    get_game,
    list_games,
)

# Import games to register them
from . import connect4
from . import tictactoe

from .tictactoe import Mark, Square, TicTacToeGame
from .connect4 import Connect4Game

__all__ = [
    "Game",
    "GameSpec",
    "Move",
    "Mark",
    "Square",
    "TicTacToeGame",
    "Connect4Game",
    "register_game",
    "get_game",
    "list_games",
]
