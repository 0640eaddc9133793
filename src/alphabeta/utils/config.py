"""
Configuration management for alphabeta.

Uses dataclasses for clean configuration with sensible defaults.
Supports loading from YAML files.
"""

from __future__ import annotations

from dataclasses import dataclass, field, asdict
from pathlib import Path
from typing import Optional
import yaml


@dataclass
class SearchConfig:
    """Engine configuration."""

    max_depth: int = 5
    use_tactical: bool = True

    def __post_init__(self):
        if self.max_depth < 0:
            raise ValueError("max_depth must be non-negative")


@dataclass
class GameConfig:
    """Which game to play."""

    name: str = "tictactoe"
    board_size: int = 3  # Tic-Tac-Toe only


@dataclass
class PlayConfig:
    """Console play configuration."""

    ai_first: bool = True  # Engine (O) opens the game
    difficulty: Optional[str] = None  # Overrides search.max_depth when set


@dataclass
class Config:
    """Full configuration."""

    # Component configs
    search: SearchConfig = field(default_factory=SearchConfig)
    game: GameConfig = field(default_factory=GameConfig)
    play: PlayConfig = field(default_factory=PlayConfig)

    # Global settings
    log_dir: Optional[str] = None  # JSON-lines event log when set

    # Random opponent seed for the arena command
    seed: int = 42

    def save(self, path: str) -> None:
        """Save config to YAML file."""
        with open(path, "w") as f:
            yaml.dump(asdict(self), f, default_flow_style=False)

    @classmethod
    def load(cls, path: str) -> Config:
        """Load config from YAML file."""
        with open(path) as f:
            data = yaml.safe_load(f) or {}

        # Parse nested configs
        return cls(
            search=SearchConfig(**data.get("search", {})),
            game=GameConfig(**data.get("game", {})),
            play=PlayConfig(**data.get("play", {})),
            log_dir=data.get("log_dir"),
            seed=data.get("seed", 42),
        )

    def ensure_dirs(self) -> None:
        """Create output directories if they don't exist."""
        if self.log_dir:
            Path(self.log_dir).mkdir(parents=True, exist_ok=True)


def get_default_config() -> Config:
    """Get default configuration: 3x3 Tic-Tac-Toe at depth 5, engine opens."""
    return Config()
