"""Utilities module."""

from .config import (
    Config,
    SearchConfig,
    GameConfig,
    PlayConfig,
    get_default_config,
)
from .logging import (
    Logger,
    MoveEvent,
    console,
    create_progress,
    print_config,
    print_board,
    print_search,
)

__all__ = [
    "Config",
    "SearchConfig",
    "GameConfig",
    "PlayConfig",
    "get_default_config",
    "Logger",
    "MoveEvent",
    "console",
    "create_progress",
    "print_config",
    "print_board",
    "print_search",
]
