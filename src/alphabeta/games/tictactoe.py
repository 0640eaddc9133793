"""
Tic-Tac-Toe game implementation.

Generalized N x N board (3x3 by default).

Rules:
- N x N board
- X (MAX, the human) and O (MIN, the engine) alternate placing their mark
- First to fill a whole row, column or diagonal wins
- If board fills with no winner, it's a draw

Board representation:
- +1 = X
- -1 = O
- 0 = empty
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import IntEnum
from typing import Iterator, Optional, Sequence
import numpy as np

from .base import Game, GameSpec, register_game
from ..errors import GameContractError


DEFAULT_BOARD_SIZE = 3


class Mark(IntEnum):
    """Cell contents. X is the MAX player, O the MIN player."""
    X = 1
    O = -1


EMPTY = 0

SYMBOLS = {EMPTY: " ", Mark.X: "X", Mark.O: "O"}


@dataclass(frozen=True, order=True)
class Square:
    """A cell on the board, addressed by zero-based row and column."""
    row: int
    column: int

    def __str__(self) -> str:
        return f"{self.row} {self.column}"


@register_game("tictactoe")
class TicTacToeGame(Game[Square]):
    """
    Tic-Tac-Toe implementation.

    Moves are Squares, numbered row-major on a 3x3 board:
    (0,0) | (0,1) | (0,2)
    ---------------------
    (1,0) | (1,1) | (1,2)
    ---------------------
    (2,0) | (2,1) | (2,2)
    """

    def __init__(self, size: int = DEFAULT_BOARD_SIZE):
        if size < 2:
            raise ValueError(f"Board size must be at least 2, got {size}")
        self.size = size
        self.board = np.zeros((size, size), dtype=np.int8)
        self._filled = 0
        self._spec = GameSpec(
            name="tictactoe",
            board_shape=(size, size),
            win_score=100 * size,
        )

        # Static weights rewarding central squares (used in heuristic)
        mid = size // 2
        rows, cols = np.indices((size, size))
        dist_to_center = np.maximum(np.abs(rows - mid), np.abs(cols - mid))
        self.position_weight = (size - dist_to_center).astype(np.int32)

        self._lines = list(self._build_lines())

    @classmethod
    def from_rows(cls, rows: Sequence[str]) -> TicTacToeGame:
        """
        Build a position from strings such as ["XO.", ".X.", "..O"].

        Any character other than X or O marks an empty square.
        """
        game = cls(size=len(rows))
        for r, line in enumerate(rows):
            if len(line) != game.size:
                raise ValueError(f"Row {r} has {len(line)} cells, expected {game.size}")
            for c, ch in enumerate(line.upper()):
                if ch == "X":
                    game.execute(Square(r, c), True)
                elif ch == "O":
                    game.execute(Square(r, c), False)
        return game

    @property
    def spec(self) -> GameSpec:
        return self._spec

    @property
    def win_score(self) -> int:
        return self._spec.win_score

    # --- Game contract ---

    def legal_moves(self) -> list[Square]:
        """Return empty squares, row by row."""
        return [Square(int(r), int(c)) for r, c in np.argwhere(self.board == EMPTY)]

    def is_terminal(self) -> bool:
        """A player has a complete line, or the board is full."""
        if self.utility() != 0:
            return True
        return self._filled == self.size * self.size

    def utility(self) -> int:
        """
        +win_score if X owns a full line, -win_score if O does, 0 otherwise.

        Rows are checked first, then columns, then the two diagonals.
        """
        n = self.size
        for line in self._lines:
            line_sum = int(self.board[line].sum())
            if line_sum == n:
                return self.win_score
            if line_sum == -n:
                return -self.win_score
        return 0

    def execute(self, move: Square, is_max: bool) -> None:
        """Place X (MAX) or O (MIN) on an empty square."""
        self._check_bounds(move)
        if self.board[move.row, move.column] != EMPTY:
            raise GameContractError(f"Square {move} is already marked")
        self.board[move.row, move.column] = Mark.X if is_max else Mark.O
        self._filled += 1

    def undo(self, move: Square, is_max: bool) -> None:
        """Clear a square that holds the given player's mark."""
        self._check_bounds(move)
        expected = Mark.X if is_max else Mark.O
        current = int(self.board[move.row, move.column])
        if current != expected:
            held = SYMBOLS[current].strip() or "nothing"
            raise GameContractError(
                f"Cannot undo {expected.name} at {move}: square holds {held}"
            )
        self.board[move.row, move.column] = EMPTY
        self._filled -= 1

    def heuristic_evaluation(self) -> int:
        """
        Estimate a non-terminal position.

        Two components:
        1. The strongest unblocked line for each side, worth 100 per mark
           (positive for X, negative for O), X's best plus O's best
        2. A positional bonus for holding central squares

        The result is kept strictly inside (-win_score, win_score).
        """
        best_x = 0
        best_o = 0
        for line in self._lines:
            score = self._score_line(line)
            if score > 0:
                best_x = max(best_x, score)
            elif score < 0:
                best_o = min(best_o, score)

        positional = int((self.board.astype(np.int32) * self.position_weight).sum())

        limit = self.win_score - 1
        return max(-limit, min(limit, best_x + best_o + positional))

    def tactical_move(self) -> Optional[Square]:
        """
        Return O's winning square if one exists, else the square that
        blocks an X win, else None.

        Winning is always checked before blocking.
        """
        win = self._find_line_missing_one(Mark.O)
        if win is not None:
            return win
        return self._find_line_missing_one(Mark.X)

    # --- Extras ---

    def is_legal(self, move: Square) -> bool:
        """Square is on the board and empty."""
        return (
            0 <= move.row < self.size
            and 0 <= move.column < self.size
            and self.board[move.row, move.column] == EMPTY
        )

    def is_marked(self, square: Square) -> bool:
        """True if X or O occupies the square."""
        return bool(self.board[square.row, square.column] != EMPTY)

    def parse_move(self, text: str) -> Square:
        """
        Parse "row column" (space or comma separated) into a Square.

        Raises:
            ValueError: if the text is not two integers
        """
        parts = text.replace(",", " ").split()
        if len(parts) != 2:
            raise ValueError(f"Expected 'row column', got '{text}'")
        row, column = (int(p) for p in parts)
        return Square(row, column)

    def render(self, last_move: Optional[Square] = None) -> str:
        """
        Render board as ASCII art with row and column numbers.

        The mark on last_move is shown in lower case.
        """
        def cell(mark: int, square: Square) -> str:
            symbol = SYMBOLS[mark]
            return symbol.lower() if square == last_move else symbol

        return self._render(cell)

    def render_rich(self, last_move: Optional[Square] = None) -> str:
        """
        Render board with rich markup.

        X is cyan, O is yellow, and the engine's most recent O is red.
        """
        def cell(mark: int, square: Square) -> str:
            if mark == Mark.X:
                return "[cyan]X[/]"
            if mark == Mark.O:
                color = "red" if square == last_move else "yellow"
                return f"[{color}]O[/]"
            return " "

        return self._render(cell)

    # --- Helper methods ---

    def _render(self, cell) -> str:
        n = self.size
        lines = ["   " + "".join(f" {c}  " for c in range(n)).rstrip()]
        for r in range(n):
            cells = [
                f" {cell(int(self.board[r, c]), Square(r, c))} "
                for c in range(n)
            ]
            lines.append(f" {r} " + "|".join(cells))
            if r < n - 1:
                lines.append("   " + "+".join("---" for _ in range(n)))
        return "\n".join(lines)

    def _build_lines(self) -> Iterator[tuple[np.ndarray, np.ndarray]]:
        """Yield index arrays for rows, columns, then both diagonals."""
        n = self.size
        idx = np.arange(n)
        for i in range(n):
            yield (np.full(n, i), idx)
        for i in range(n):
            yield (idx, np.full(n, i))
        yield (idx, idx)
        yield (idx, n - 1 - idx)

    def _tactical_lines(self) -> Iterator[tuple[np.ndarray, np.ndarray]]:
        """Row i, then column i, for each i; then both diagonals."""
        n = self.size
        for i in range(n):
            yield self._lines[i]
            yield self._lines[n + i]
        yield self._lines[2 * n]
        yield self._lines[2 * n + 1]

    def _score_line(self, line: tuple[np.ndarray, np.ndarray]) -> int:
        """
        Score a line by how many marks one side has in it.

        1 mark: 100, 2 marks: 200, ... Blocked lines (both marks present)
        score zero. X scores are positive, O scores negative.
        """
        cells = self.board[line]
        x_count = int(np.count_nonzero(cells == Mark.X))
        o_count = int(np.count_nonzero(cells == Mark.O))
        if x_count > 0 and o_count > 0:
            return 0
        score = max(x_count, o_count) * 100
        return score if x_count > 0 else -score

    def _find_line_missing_one(self, mark: Mark) -> Optional[Square]:
        """Find a line with N-1 of `mark` and one empty square; return that square."""
        n = self.size
        for rows, cols in self._tactical_lines():
            cells = self.board[rows, cols]
            if np.count_nonzero(cells == mark) != n - 1:
                continue
            empty = np.flatnonzero(cells == EMPTY)
            if len(empty) == 1:
                k = int(empty[0])
                return Square(int(rows[k]), int(cols[k]))
        return None

    def _check_bounds(self, move: Square) -> None:
        if not (0 <= move.row < self.size and 0 <= move.column < self.size):
            raise GameContractError(f"Square {move} is off the {self.size}x{self.size} board")
