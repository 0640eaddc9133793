"""
Depth-limited minimax search with alpha-beta pruning.

The engine plays the MIN side (O in Tic-Tac-Toe). A search:
1. Tactical: ask the game for an immediate win or forced block
2. Search: otherwise alternate MIN and MAX nodes down to max_depth,
   scoring finished games with utility() and the horizon with
   heuristic_evaluation()
3. Choose: return the first move of the best line found

The game is explored in place: every move is executed before the
recursive call and undone after it, so the position the caller handed
in is unchanged when search() returns.
"""

from __future__ import annotations

import sys
import time
from contextlib import contextmanager
from typing import Generic, Iterator, Optional, TypeVar

from .result import BoundResult, ExactResult, ScoreAndPath, SearchResult, SearchStats
from ..errors import EngineMisuseError, GameContractError
from ..games.base import Game

Move = TypeVar('Move')

# Search bounds. Only ever compared, never added to.
NEG_INF = -sys.maxsize
POS_INF = sys.maxsize


@contextmanager
def applied(game: Game, move, is_max: bool) -> Iterator[None]:
    """
    Execute a move for the duration of a with-block.

    The move is undone on every exit from the block, including early
    returns and exceptions.
    """
    game.execute(move, is_max)
    try:
        yield
    finally:
        game.undo(move, is_max)


class Minimax(Generic[Move]):
    """
    Minimax search with alpha-beta pruning and a depth limit.

    Assumes MAX moves first overall and the engine answers for MIN.

    Args:
        game: Game to search. Owned by the caller; mutated only
            temporarily during a search.
        max_depth: Plies to look ahead. 0 scores the root with the
            heuristic, so only the tactical shortcut can produce a move.
        use_tactical: Ask the game for an immediate win or block before
            searching. Disabled only for deliberately weak play.
    """

    def __init__(self, game: Game[Move], max_depth: int, use_tactical: bool = True):
        if max_depth < 0:
            raise EngineMisuseError(f"max_depth must be non-negative, got {max_depth}")
        if not NEG_INF < -game.spec.win_score <= game.spec.win_score < POS_INF:
            raise EngineMisuseError(
                f"win_score {game.spec.win_score} collides with the search bounds"
            )
        self.game = game
        self.max_depth = max_depth
        self.use_tactical = use_tactical
        self._stats = SearchStats()

    def search(self) -> Move:
        """
        Return the best move for the MIN player.

        Raises:
            EngineMisuseError: if the game is already over, or max_depth
                is 0 and no tactical move exists
            GameContractError: if the game reports no legal moves for an
                unfinished position
        """
        return self.analyze().move

    def analyze(self) -> SearchResult[Move]:
        """
        Run a search and report the chosen move with its score,
        principal variation and statistics.
        """
        if self.game.is_terminal():
            raise EngineMisuseError("Cannot search a finished game")

        self._stats = SearchStats()
        start = time.perf_counter()

        # Immediate win or forced block: no search needed
        tactical = self.game.tactical_move() if self.use_tactical else None
        if tactical is not None:
            self._stats.elapsed = time.perf_counter() - start
            return SearchResult(
                move=tactical,
                principal_variation=(tactical,),
                tactical=True,
                stats=self._stats,
            )

        result = self.min_node(NEG_INF, POS_INF, 0)
        self._stats.elapsed = time.perf_counter() - start

        # With beta at POS_INF the root cannot be cut off
        if not isinstance(result, ExactResult) or result.best_move is None:
            raise EngineMisuseError(
                "Search produced no move; max_depth 0 needs a tactical move"
            )

        return SearchResult(
            move=result.best_move,
            score=result.score,
            principal_variation=result.path,
            stats=self._stats,
        )

    @property
    def stats(self) -> SearchStats:
        """Counters from the most recent search."""
        return self._stats

    def max_node(self, alpha: int, beta: int, depth: int) -> ScoreAndPath:
        """
        MAX node: maximize the score.

        Returns BoundResult as soon as a reply scores >= beta, since MIN
        will never allow this branch.
        """
        leaf = self._leaf(depth)
        if leaf is not None:
            return leaf

        best: ExactResult = ExactResult(alpha)
        for move in self._moves():
            with applied(self.game, move, True):
                child = self.min_node(alpha, beta, depth + 1)
            if child.score >= beta:
                self._stats.cutoffs += 1
                return BoundResult(child.score)
            if child.score > alpha:
                # A child that beats alpha was never cut off, so it has a path
                alpha = child.score
                best = child.prepend(move)
        return ExactResult(alpha, best.path)

    def min_node(self, alpha: int, beta: int, depth: int) -> ScoreAndPath:
        """
        MIN node: minimize the score.

        Returns BoundResult as soon as a reply scores <= alpha, since MAX
        will never allow this branch.
        """
        leaf = self._leaf(depth)
        if leaf is not None:
            return leaf

        best: ExactResult = ExactResult(beta)
        for move in self._moves():
            with applied(self.game, move, False):
                child = self.max_node(alpha, beta, depth + 1)
            if child.score <= alpha:
                self._stats.cutoffs += 1
                return BoundResult(child.score)
            if child.score < beta:
                beta = child.score
                best = child.prepend(move)
        return ExactResult(beta, best.path)

    # --- Helper methods ---

    def _leaf(self, depth: int) -> Optional[ExactResult]:
        """Score the node directly if it is terminal or at the horizon."""
        self._stats.nodes += 1
        if self.game.is_terminal():
            self._stats.terminal_leaves += 1
            return ExactResult(self.game.utility())
        if depth == self.max_depth:
            self._stats.heuristic_leaves += 1
            return ExactResult(self.game.heuristic_evaluation())
        return None

    def _moves(self) -> list:
        moves = self.game.legal_moves()
        if not moves:
            raise GameContractError(
                "Game is not terminal but reports no legal moves"
            )
        return moves


def best_move(game: Game[Move], max_depth: int) -> Move:
    """Convenience wrapper: build an engine and search once."""
    return Minimax(game, max_depth).search()
