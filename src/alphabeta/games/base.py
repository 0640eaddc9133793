"""
Abstract base class for games searchable with minimax.

Any game that implements the Game interface can be played by the engine.
The search doesn't need to know anything about the game rules - it just
needs these methods to:
1. Know what moves are legal
2. Apply a move in place and take it back again
3. Know when the game is over and who won
4. Estimate positions it cannot search to the end
5. Spot an immediate win or a forced block without searching
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Generic, Optional, TypeVar


@dataclass(frozen=True)
class GameSpec:
    """
    Describes a game's structure for the engine and the CLI.

    The engine uses win_score to make sure its search bounds can never be
    reached by a real game value.
    """
    name: str
    board_shape: tuple[int, ...]  # e.g., (3, 3) for Tic-Tac-Toe, (6, 7) for Connect4
    win_score: int                # |utility()| of a decided game

    @property
    def board_size(self) -> int:
        """Total number of board cells."""
        result = 1
        for dim in self.board_shape:
            result *= dim
        return result


# Type variable for a single move
Move = TypeVar('Move')


class Game(ABC, Generic[Move]):
    """
    Abstract base class for any two-player zero-sum perfect-information game.

    Implement this interface for any game you want the engine to play.

    Key concepts:
    - MAX player: moves first, wants the score as high as possible (X)
    - MIN player: moves second, wants it as low as possible (O, the engine)
    - Scores are always from MAX's perspective

    A Game instance *is* the position. The engine explores it by calling
    execute() and undo() in strict stack order, so every implementation
    must restore its exact previous state on undo().
    """

    @property
    @abstractmethod
    def spec(self) -> GameSpec:
        """Return the game specification."""
        pass

    @abstractmethod
    def legal_moves(self) -> list[Move]:
        """
        Return all moves applicable to the current position.

        The order must be deterministic; the engine keeps the first of
        several equally good moves, so it decides tie-breaks.

        Returns:
            List of legal moves (empty only when the game is over)
        """
        pass

    @abstractmethod
    def is_terminal(self) -> bool:
        """
        Check if the game is over.

        Returns:
            True if a player has won or no legal moves remain
        """
        pass

    @abstractmethod
    def utility(self) -> int:
        """
        Exact value of a finished game from MAX's perspective.

        Returns:
            +win_score if MAX won, -win_score if MIN won, 0 for a draw.
            Non-terminal positions also return 0, so a stray call made
            before the game ends is well defined.
        """
        pass

    @abstractmethod
    def execute(self, move: Move, is_max: bool) -> None:
        """
        Apply a move in place.

        Args:
            move: Move to apply
            is_max: True if MAX plays it, False if MIN does

        Raises:
            GameContractError: if the move cannot be applied
        """
        pass

    @abstractmethod
    def undo(self, move: Move, is_max: bool) -> None:
        """
        Take back a move applied by the matching execute() call.

        Args:
            move: Move to take back
            is_max: Same flag that was passed to execute()

        Raises:
            GameContractError: if the move was never applied
        """
        pass

    @abstractmethod
    def heuristic_evaluation(self) -> int:
        """
        Estimate a non-terminal position from MAX's perspective.

        The magnitude must stay strictly below spec.win_score so an
        estimate can never outweigh a real win or loss.
        """
        pass

    @abstractmethod
    def tactical_move(self) -> Optional[Move]:
        """
        Return an immediate winning or blocking move for MIN, if any.

        Computed from the rules alone, without search.

        Returns:
            A move, or None if the position has no urgent tactic
        """
        pass

    def is_legal(self, move: Move) -> bool:
        """
        Check whether a move can be played now.

        Default implementation uses legal_moves(), but games can override
        for efficiency.
        """
        return move in self.legal_moves()

    def winner(self) -> Optional[bool]:
        """
        Return True if MAX won, False if MIN won, None otherwise.
        """
        value = self.utility()
        if value > 0:
            return True
        if value < 0:
            return False
        return None

    def parse_move(self, text: str) -> Move:
        """
        Convert human input into a move.

        Optional - default raises ValueError.

        Raises:
            ValueError: if the text does not describe a move
        """
        raise ValueError(f"{self.spec.name} does not accept typed moves")

    def render(self, last_move: Optional[Move] = None) -> str:
        """
        Render the position as a string for display.

        Optional - default returns empty string.

        Args:
            last_move: Most recent engine move, for highlighting

        Returns:
            Human-readable string representation
        """
        return ""

    def render_rich(self, last_move: Optional[Move] = None) -> str:
        """
        Render the position with rich markup.

        Default falls back to the plain render().
        """
        return self.render(last_move)


# Registry of available games
_GAME_REGISTRY: dict[str, type[Game]] = {}


def register_game(name: str):
    """Decorator to register a game class."""
    def decorator(cls: type[Game]):
        _GAME_REGISTRY[name] = cls
        return cls
    return decorator


def get_game(name: str, **kwargs) -> Game:
    """Get a fresh game instance by name."""
    if name not in _GAME_REGISTRY:
        available = ", ".join(_GAME_REGISTRY.keys())
        raise ValueError(f"Unknown game '{name}'. Available: {available}")
    return _GAME_REGISTRY[name](**kwargs)


def list_games() -> list[str]:
    """List all registered games."""
    return list(_GAME_REGISTRY.keys())
