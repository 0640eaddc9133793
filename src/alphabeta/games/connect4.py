"""
Connect 4 game implementation.

Rules:
- 6 rows x 7 columns board
- Players drop pieces into columns
- First to get 4 in a row (horizontal, vertical, or diagonal) wins
- If board fills up with no winner, it's a draw

Board representation:
- +1 = X (MAX)
- -1 = O (MIN)
- 0 = empty
Row 0 is the top of the board.
"""

from __future__ import annotations

from typing import Optional
import numpy as np

from .base import Game, GameSpec, register_game
from .tictactoe import Mark, EMPTY, SYMBOLS
from ..errors import GameContractError


# Board dimensions
ROWS = 6
COLS = 7
WIN_LENGTH = 4

WIN_SCORE = 10_000

# Score of an open window by number of marks in it (0..4)
WINDOW_WEIGHTS = np.array([0, 1, 10, 50, 0], dtype=np.int64)
CENTER_BONUS = 3


def _build_windows() -> np.ndarray:
    """Flat indices of every 4-cell window, shape (num_windows, 4)."""
    windows = []
    for r in range(ROWS):
        for c in range(COLS):
            for dr, dc in ((0, 1), (1, 0), (1, 1), (1, -1)):
                end_r = r + (WIN_LENGTH - 1) * dr
                end_c = c + (WIN_LENGTH - 1) * dc
                if 0 <= end_r < ROWS and 0 <= end_c < COLS:
                    windows.append([
                        (r + i * dr) * COLS + (c + i * dc)
                        for i in range(WIN_LENGTH)
                    ])
    return np.array(windows, dtype=np.intp)


WINDOWS = _build_windows()


@register_game("connect4")
class Connect4Game(Game[int]):
    """
    Connect 4 implementation.

    Moves are column indices (0-6).
    """

    _spec = GameSpec(
        name="connect4",
        board_shape=(ROWS, COLS),
        win_score=WIN_SCORE,
    )

    def __init__(self):
        self.board = np.zeros((ROWS, COLS), dtype=np.int8)
        self.heights = np.zeros(COLS, dtype=np.int8)

    @property
    def spec(self) -> GameSpec:
        return self._spec

    # --- Game contract ---

    def legal_moves(self) -> list[int]:
        """Return columns that aren't full, left to right."""
        return [c for c in range(COLS) if self.heights[c] < ROWS]

    def is_terminal(self) -> bool:
        if self.utility() != 0:
            return True
        return bool(np.all(self.heights == ROWS))

    def utility(self) -> int:
        sums = self.board.ravel()[WINDOWS].sum(axis=1)
        if np.any(sums == WIN_LENGTH):
            return WIN_SCORE
        if np.any(sums == -WIN_LENGTH):
            return -WIN_SCORE
        return 0

    def execute(self, move: int, is_max: bool) -> None:
        """Drop a piece into the column."""
        self._check_column(move)
        if self.heights[move] >= ROWS:
            raise GameContractError(f"Column {move} is full")
        row = ROWS - 1 - int(self.heights[move])
        self.board[row, move] = Mark.X if is_max else Mark.O
        self.heights[move] += 1

    def undo(self, move: int, is_max: bool) -> None:
        """Lift the top piece out of the column."""
        self._check_column(move)
        if self.heights[move] == 0:
            raise GameContractError(f"Column {move} is empty")
        row = ROWS - int(self.heights[move])
        expected = Mark.X if is_max else Mark.O
        if self.board[row, move] != expected:
            raise GameContractError(
                f"Top of column {move} is not {expected.name}"
            )
        self.board[row, move] = EMPTY
        self.heights[move] -= 1

    def heuristic_evaluation(self) -> int:
        """
        Sum of open windows (windows holding only one side's pieces),
        weighted by piece count, plus a bonus for the centre column.
        """
        cells = self.board.ravel()[WINDOWS]
        x_count = np.count_nonzero(cells == Mark.X, axis=1)
        o_count = np.count_nonzero(cells == Mark.O, axis=1)

        score = int(WINDOW_WEIGHTS[x_count][o_count == 0].sum())
        score -= int(WINDOW_WEIGHTS[o_count][x_count == 0].sum())
        score += CENTER_BONUS * int(self.board[:, COLS // 2].sum())

        limit = WIN_SCORE - 1
        return max(-limit, min(limit, score))

    def tactical_move(self) -> Optional[int]:
        """
        Column that wins for O right now, else the column that stops X
        from winning next move, else None.
        """
        for is_max, wins in ((False, lambda u: u < 0), (True, lambda u: u > 0)):
            for column in self.legal_moves():
                self.execute(column, is_max)
                outcome = self.utility()
                self.undo(column, is_max)
                if wins(outcome):
                    return column
        return None

    # --- Extras ---

    def is_legal(self, move: int) -> bool:
        return 0 <= move < COLS and self.heights[move] < ROWS

    def parse_move(self, text: str) -> int:
        """Parse a column number."""
        return int(text.strip())

    def render(self, last_move: Optional[int] = None) -> str:
        """Render board as ASCII art, the piece last dropped in last_move in lower case."""
        top = self._top_row(last_move)

        def cell(mark: int, row: int, col: int) -> str:
            if not mark:
                return "."
            symbol = SYMBOLS[mark]
            return symbol.lower() if (row, col) == (top, last_move) else symbol

        return self._render(cell)

    def render_rich(self, last_move: Optional[int] = None) -> str:
        """Render board with rich markup, highlighting the last O drop."""
        top = self._top_row(last_move)

        def cell(mark: int, row: int, col: int) -> str:
            if mark == Mark.X:
                return "[cyan]X[/]"
            if mark == Mark.O:
                color = "red" if (row, col) == (top, last_move) else "yellow"
                return f"[{color}]O[/]"
            return "."

        return self._render(cell)

    # --- Helper methods ---

    def _top_row(self, column: Optional[int]) -> int:
        """Row of the highest piece in column, or -1."""
        if column is None or not self.heights[column]:
            return -1
        return ROWS - int(self.heights[column])

    def _render(self, cell) -> str:
        lines = []
        lines.append(" " + " ".join(str(i) for i in range(COLS)))
        lines.append("-" * (COLS * 2 + 1))

        for r in range(ROWS):
            row_str = "|" + "|".join(
                cell(int(self.board[r, c]), r, c) for c in range(COLS)
            ) + "|"
            lines.append(row_str)

        lines.append("-" * (COLS * 2 + 1))
        return "\n".join(lines)

    def _check_column(self, move: int) -> None:
        if not 0 <= move < COLS:
            raise GameContractError(f"Invalid column {move}, must be 0-{COLS - 1}")
