"""
Search results.

Every node of the minimax tree returns one of two results:
- ExactResult: the node's value plus the line of best moves below it
  (the principal variation), built bottom-up by prepending moves
- BoundResult: the value that caused a cutoff. It has no moves at all,
  because the branch was abandoned before every reply was looked at.

Callers pick the best move through ExactResult.best_move; a BoundResult
offers no such attribute.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Generic, Optional, TypeVar, Union

Move = TypeVar('Move')


@dataclass(frozen=True)
class ExactResult(Generic[Move]):
    """Value of a fully examined node and the best line from it."""

    score: int
    path: tuple[Move, ...] = ()

    def prepend(self, move: Move) -> ExactResult[Move]:
        """Return the line that starts with `move` and continues with this one."""
        return ExactResult(self.score, (move,) + self.path)

    @property
    def best_move(self) -> Optional[Move]:
        """First move of the line, or None at the search horizon."""
        return self.path[0] if self.path else None


@dataclass(frozen=True)
class BoundResult:
    """Value returned from a pruned branch. Carries no moves."""

    score: int


ScoreAndPath = Union[ExactResult[Any], BoundResult]


@dataclass
class SearchStats:
    """Counters collected during one search."""

    nodes: int = 0               # nodes entered (root included)
    terminal_leaves: int = 0     # leaves scored by utility()
    heuristic_leaves: int = 0    # leaves scored by heuristic_evaluation()
    cutoffs: int = 0             # branches abandoned by alpha-beta
    elapsed: float = 0.0         # seconds

    @property
    def nodes_per_second(self) -> float:
        return self.nodes / self.elapsed if self.elapsed > 0 else 0.0


@dataclass
class SearchResult(Generic[Move]):
    """
    Outcome of a top-level search.

    Attributes:
        move: Move chosen for the MIN player
        score: Backed-up value (None when the tactical shortcut fired)
        principal_variation: Expected line of play, starting with move
        tactical: Whether the move came from the tactical shortcut
        stats: Node and timing counters
    """

    move: Move
    score: Optional[int] = None
    principal_variation: tuple[Move, ...] = ()
    tactical: bool = False
    stats: SearchStats = field(default_factory=SearchStats)
