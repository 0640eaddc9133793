"""
Arena for evaluating the engine through repeated matches.

Used to check a depth setting against an opponent before using it in play.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Optional

from ..games.base import Game
from .match import EnginePlayer, Player, RandomPlayer, play_match


@dataclass
class ArenaResult:
    """Results from arena evaluation, from the engine's perspective."""

    wins: int
    losses: int
    draws: int
    total_games: int
    win_rate: float

    @property
    def score(self) -> float:
        """Win rate counting draws as half."""
        return (self.wins + 0.5 * self.draws) / self.total_games if self.total_games > 0 else 0.0


class Arena:
    """
    Arena for engine evaluation matches.

    The engine always plays MIN (O). Who opens alternates between games.

    Args:
        game_factory: Creates a fresh game for each match
        max_depth: Engine search depth
        use_tactical: Whether the engine uses the tactical shortcut
    """

    def __init__(
        self,
        game_factory: Callable[[], Game],
        max_depth: int = 5,
        use_tactical: bool = True,
    ):
        self.game_factory = game_factory
        self.max_depth = max_depth
        self.use_tactical = use_tactical

    def evaluate(
        self,
        opponent: Player,
        num_games: int = 20,
        progress_callback: Optional[Callable[[int, str], None]] = None,
    ) -> ArenaResult:
        """
        Play num_games matches of the engine against an opponent.

        Args:
            opponent: Player for the MAX side
            num_games: Number of games to play
            progress_callback: Optional callback(games_completed, result)

        Returns:
            ArenaResult from the engine's perspective
        """
        engine = EnginePlayer(self.max_depth, use_tactical=self.use_tactical)

        wins = 0
        losses = 0
        draws = 0

        for i in range(num_games):
            # Alternate who plays first
            record = play_match(
                self.game_factory(),
                max_player=opponent,
                min_player=engine,
                min_first=(i % 2 == 1),
            )

            # Engine is MIN: negative outcome is an engine win
            if record.outcome < 0:
                wins += 1
                result = "W"
            elif record.outcome > 0:
                losses += 1
                result = "L"
            else:
                draws += 1
                result = "D"

            if progress_callback:
                progress_callback(i + 1, result)

        total = wins + losses + draws
        win_rate = wins / total if total > 0 else 0.0

        return ArenaResult(
            wins=wins,
            losses=losses,
            draws=draws,
            total_games=total,
            win_rate=win_rate,
        )

    def evaluate_vs_random(
        self,
        num_games: int = 20,
        seed: Optional[int] = None,
        progress_callback: Optional[Callable[[int, str], None]] = None,
    ) -> ArenaResult:
        """Evaluate the engine against a random MAX player."""
        return self.evaluate(RandomPlayer(seed), num_games, progress_callback)


def should_accept(result: ArenaResult, threshold: float = 0.55) -> bool:
    """
    Decide whether a setting performed well enough.

    Args:
        result: Arena evaluation result
        threshold: Minimum score to accept (draws count half)

    Returns:
        True if the result clears the threshold
    """
    return result.score >= threshold
