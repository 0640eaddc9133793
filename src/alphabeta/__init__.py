"""
alphabeta - Game-agnostic minimax search with alpha-beta pruning.

Finds the best move for the second player (MIN) of any two-player,
zero-sum, perfect-information game, using depth-limited minimax with
alpha-beta pruning, a heuristic at the search horizon, and a tactical
shortcut for immediate wins and forced blocks.

Supported games:
- Tic-Tac-Toe (any N x N board)
- Connect 4

Usage:
    from alphabeta.games import get_game, list_games
    from alphabeta.search import Minimax

    # List available games
    print(list_games())  # ['connect4', 'tictactoe']

    # Get a game and let the engine answer X's opening move
    game = get_game('tictactoe')
    game.execute(game.parse_move('1 1'), True)

    engine = Minimax(game, max_depth=5)
    move = engine.search()
    game.execute(move, False)
"""

__version__ = "0.1.0"

from . import errors
from . import games
from . import search
from . import play

__all__ = [
    "errors",
    "games",
    "search",
    "play",
    "__version__",
]
