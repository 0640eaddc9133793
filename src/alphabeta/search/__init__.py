"""
Minimax search module.
"""

from .result import (
    ExactResult,
    BoundResult,
    ScoreAndPath,
    SearchResult,
    SearchStats,
)
from .minimax import Minimax, applied, best_move, NEG_INF, POS_INF

__all__ = [
    "Minimax",
    "applied",
    "best_move",
    "ExactResult",
    "BoundResult",
    "ScoreAndPath",
    "SearchResult",
    "SearchStats",
    "NEG_INF",
    "POS_INF",
]
