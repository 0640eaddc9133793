"""
Players and the match loop.

A match alternates MAX and MIN players on one Game instance, applying
each chosen move with execute() until the game is over. The engine
always plays MIN; MAX is a human, a random mover, or any other Player.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Any, Callable, Optional
import numpy as np

from ..errors import GameContractError
from ..games.base import Game
from ..search import Minimax, SearchResult


class Player(ABC):
    """Anything that can pick a move for the side to play."""

    name: str = "player"

    @abstractmethod
    def choose_move(self, game: Game) -> Any:
        """Return a legal move for the current position."""
        pass


class EnginePlayer(Player):
    """
    Minimax engine as a player. Only valid on the MIN side.

    Args:
        max_depth: Search depth in plies
        use_tactical: Take immediate wins and blocks without searching
    """

    name = "engine"

    def __init__(self, max_depth: int, use_tactical: bool = True):
        self.max_depth = max_depth
        self.use_tactical = use_tactical
        self.last_result: Optional[SearchResult] = None

    def choose_move(self, game: Game) -> Any:
        engine = Minimax(game, self.max_depth, use_tactical=self.use_tactical)
        self.last_result = engine.analyze()
        return self.last_result.move


class RandomPlayer(Player):
    """Uniformly random legal moves, reproducible with a seed."""

    name = "random"

    def __init__(self, seed: Optional[int] = None):
        self.rng = np.random.default_rng(seed)

    def choose_move(self, game: Game) -> Any:
        moves = game.legal_moves()
        return moves[int(self.rng.integers(len(moves)))]


class HumanPlayer(Player):
    """
    Moves typed by a person.

    Args:
        prompt_fn: Returns one line of input, given the legal moves
        on_invalid: Called with an error message before re-prompting
    """

    name = "human"

    def __init__(
        self,
        prompt_fn: Callable[[list], str],
        on_invalid: Optional[Callable[[str], None]] = None,
    ):
        self.prompt_fn = prompt_fn
        self.on_invalid = on_invalid

    def choose_move(self, game: Game) -> Any:
        while True:
            text = self.prompt_fn(game.legal_moves())
            try:
                move = game.parse_move(text)
            except ValueError:
                self._reject(f"Could not read a move from '{text}'")
                continue
            if game.is_legal(move):
                return move
            self._reject("Invalid position, please try again.")

    def _reject(self, message: str) -> None:
        if self.on_invalid:
            self.on_invalid(message)


@dataclass
class MatchRecord:
    """Record of a complete match."""

    moves: list[tuple[Any, bool]] = field(default_factory=list)  # (move, is_max)
    outcome: int = 0  # utility() of the final position

    @property
    def num_moves(self) -> int:
        return len(self.moves)

    @property
    def result(self) -> str:
        """'max', 'min' or 'draw'."""
        if self.outcome > 0:
            return "max"
        if self.outcome < 0:
            return "min"
        return "draw"


def play_match(
    game: Game,
    max_player: Player,
    min_player: Player,
    min_first: bool = False,
    on_move: Optional[Callable[[Game, Any, bool], None]] = None,
) -> MatchRecord:
    """
    Play a game to the end.

    Args:
        game: Game to play on (mutated)
        max_player: Player for the MAX side (X)
        min_player: Player for the MIN side (O)
        min_first: Let MIN open the game
        on_move: Optional callback(game, move, is_max) after each move

    Returns:
        MatchRecord with the moves played and the final utility
    """
    record = MatchRecord()
    is_max = not min_first

    while not game.is_terminal():
        player = max_player if is_max else min_player
        move = player.choose_move(game)
        if not game.is_legal(move):
            raise GameContractError(f"{player.name} chose illegal move {move}")

        game.execute(move, is_max)
        record.moves.append((move, is_max))
        if on_move:
            on_move(game, move, is_max)
        is_max = not is_max

    record.outcome = game.utility()
    return record
