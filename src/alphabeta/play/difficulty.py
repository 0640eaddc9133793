"""
Difficulty system for the engine.

Difficulty is controlled by two parameters:
1. Depth: how many plies the minimax search looks ahead
2. Tactical: whether the engine takes immediate wins and blocks without searching

Deeper search = stronger play (more lookahead), at a cost that grows
exponentially with depth, so each game gets its own depth scale.

The system supports:
- Preset difficulties (Easy, Medium, Hard, Impossible)
- Continuous slider (0-100 mapped to search depth)
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Optional


class Difficulty(Enum):
    """Preset difficulty levels."""
    EASY = "easy"
    MEDIUM = "medium"
    HARD = "hard"
    IMPOSSIBLE = "impossible"


@dataclass
class DifficultyConfig:
    """
    Configuration for engine difficulty.

    Attributes:
        max_depth: Search depth in plies
        use_tactical: Take immediate wins and blocks before searching
        name: Human-readable name
        description: One-line summary shown by the CLI
    """
    max_depth: int
    use_tactical: bool = True
    name: str = ""
    description: str = ""

    def __post_init__(self):
        if self.max_depth < 0:
            raise ValueError("Depth must be non-negative")


# Default presets
DIFFICULTY_PRESETS: dict[Difficulty, DifficultyConfig] = {
    Difficulty.EASY: DifficultyConfig(
        max_depth=1,
        use_tactical=False,
        name="Easy",
        description="Looks one move ahead - misses threats",
    ),
    Difficulty.MEDIUM: DifficultyConfig(
        max_depth=2,
        name="Medium",
        description="Blocks threats but is short-sighted",
    ),
    Difficulty.HARD: DifficultyConfig(
        max_depth=4,
        name="Hard",
        description="Sees four plies ahead",
    ),
    Difficulty.IMPOSSIBLE: DifficultyConfig(
        max_depth=6,
        name="Impossible",
        description="Deepest practical search",
    ),
}


# Game-specific presets (search cost depends on branching factor)
GAME_DIFFICULTY_OVERRIDES: dict[str, dict[Difficulty, DifficultyConfig]] = {
    "tictactoe": {
        Difficulty.EASY: DifficultyConfig(
            max_depth=1,
            use_tactical=False,
            name="Easy",
            description="Makes careless moves",
        ),
        Difficulty.MEDIUM: DifficultyConfig(
            max_depth=2,
            name="Medium",
            description="Blocks open lines, misses forks",
        ),
        Difficulty.HARD: DifficultyConfig(
            max_depth=5,
            name="Hard",
            description="Spots most forks",
        ),
        Difficulty.IMPOSSIBLE: DifficultyConfig(
            max_depth=9,
            name="Impossible",
            description="Searches to the end of the game - never loses",
        ),
    },
    "connect4": {
        Difficulty.EASY: DifficultyConfig(
            max_depth=1,
            use_tactical=False,
            name="Easy",
            description="Drops pieces almost at random",
        ),
        Difficulty.MEDIUM: DifficultyConfig(
            max_depth=3,
            name="Medium",
            description="Takes wins and blocks threats",
        ),
        Difficulty.HARD: DifficultyConfig(
            max_depth=5,
            name="Hard",
            description="Plans a couple of drops ahead",
        ),
        Difficulty.IMPOSSIBLE: DifficultyConfig(
            max_depth=7,
            name="Impossible",
            description="Deepest practical search",
        ),
    },
}


def get_difficulty_config(
    difficulty: Difficulty,
    game_name: Optional[str] = None,
) -> DifficultyConfig:
    """
    Get difficulty configuration.

    Args:
        difficulty: Preset difficulty level
        game_name: Registered game name, for its own depth scale

    Returns:
        Search settings for that level
    """
    if game_name and game_name in GAME_DIFFICULTY_OVERRIDES:
        return GAME_DIFFICULTY_OVERRIDES[game_name][difficulty]
    return DIFFICULTY_PRESETS[difficulty]


def difficulty_from_slider(
    value: float,
    min_depth: int = 1,
    max_depth: int = 9,
) -> DifficultyConfig:
    """
    Create difficulty config from a continuous slider value.

    Maps a 0-100 slider linearly onto the depth range. The tactical
    shortcut is switched on from the lower quarter of the range up.

    Args:
        value: Slider value from 0 to 100
        min_depth: Depth at value=0
        max_depth: Depth at value=100

    Returns:
        Search settings for that slider position
    """
    # Out-of-range slider values pin to the ends
    value = max(0.0, min(100.0, value))
    t = value / 100.0

    depth = int(round(min_depth + t * (max_depth - min_depth)))
    use_tactical = value >= 25

    if value < 25:
        name = "Beginner"
    elif value < 50:
        name = "Intermediate"
    elif value < 75:
        name = "Advanced"
    elif value < 95:
        name = "Expert"
    else:
        name = "Maximum"

    return DifficultyConfig(
        max_depth=depth,
        use_tactical=use_tactical,
        name=name,
        description=f"depth {depth}, tactical={'on' if use_tactical else 'off'}",
    )
