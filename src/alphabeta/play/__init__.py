"""
Play module: difficulty presets, players, matches and the arena.
"""

from .difficulty import (
    Difficulty,
    DifficultyConfig,
    DIFFICULTY_PRESETS,
    get_difficulty_config,
    difficulty_from_slider,
)
from .match import (
    Player,
    EnginePlayer,
    RandomPlayer,
    HumanPlayer,
    MatchRecord,
    play_match,
)
from .arena import Arena, ArenaResult, should_accept

__all__ = [
    "Difficulty",
    "DifficultyConfig",
    "DIFFICULTY_PRESETS",
    "get_difficulty_config",
    "difficulty_from_slider",
    "Player",
    "EnginePlayer",
    "RandomPlayer",
    "HumanPlayer",
    "MatchRecord",
    "play_match",
    "Arena",
    "ArenaResult",
    "should_accept",
]
