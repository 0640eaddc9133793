"""
Error types raised by the search engine and game implementations.

Two failure families exist:
- Contract violations: a game implementation was driven into an invalid
  state (placing on an occupied square, undoing an untouched one, ...).
- Engine misuse: the engine was configured or called incorrectly
  (negative depth, searching a finished game, ...).

Neither is recoverable; both are surfaced immediately.
"""

from __future__ import annotations


class AlphaBetaError(Exception):
    """Base class for all errors raised by this package."""


class GameContractError(AlphaBetaError, RuntimeError):
    """A game implementation was used in a way its contract forbids."""


class EngineMisuseError(AlphaBetaError, ValueError):
    """The search engine was configured or invoked incorrectly."""
