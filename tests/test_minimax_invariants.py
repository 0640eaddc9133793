"""Tests for minimax / alpha-beta invariants."""

import sys

import numpy as np
import pytest

from alphabeta.errors import EngineMisuseError, GameContractError
from alphabeta.games.base import Game, GameSpec
from alphabeta.games.connect4 import Connect4Game
from alphabeta.games.tictactoe import Square, TicTacToeGame
from alphabeta.search import (
    BoundResult,
    ExactResult,
    Minimax,
    NEG_INF,
    POS_INF,
    applied,
    best_move,
)


CORNERS_AND_CENTER = {Square(0, 0), Square(0, 2), Square(2, 0), Square(2, 2), Square(1, 1)}


def plain_minimax(game, depth, max_depth, is_max):
    """Unpruned minimax with the engine's leaf rules and tie-break. Returns (score, move)."""
    if game.is_terminal():
        return game.utility(), None
    if depth == max_depth:
        return game.heuristic_evaluation(), None

    best_score, best = None, None
    for move in game.legal_moves():
        game.execute(move, is_max)
        score, _ = plain_minimax(game, depth + 1, max_depth, not is_max)
        game.undo(move, is_max)
        better = best_score is None or (score > best_score if is_max else score < best_score)
        if better:
            best_score, best = score, move
    return best_score, best


_SOLVED = {}


def solve(game, is_max):
    """Exact game value with perfect play from both sides (memoized on the board)."""
    key = (game.board.tobytes(), is_max)
    if key not in _SOLVED:
        if game.is_terminal():
            value = game.utility()
        else:
            values = []
            for move in game.legal_moves():
                with applied(game, move, is_max):
                    values.append(solve(game, not is_max))
            value = max(values) if is_max else min(values)
        _SOLVED[key] = value
    return _SOLVED[key]


def perfect_max_move(game):
    """First move for X that keeps the best achievable outcome."""
    best_value, best = None, None
    for move in game.legal_moves():
        with applied(game, move, True):
            value = solve(game, False)
        if best_value is None or value > best_value:
            best_value, best = value, move
    return best


def o_to_move_positions():
    """Positions where O is to move: the empty board (O opens) and every X opening."""
    positions = [TicTacToeGame()]
    for square in TicTacToeGame().legal_moves():
        game = TicTacToeGame()
        game.execute(square, True)
        positions.append(game)
    positions.append(TicTacToeGame.from_rows(["X..", ".O.", "..X"]))
    positions.append(TicTacToeGame.from_rows([".X.", "XO.", "..."]))
    return positions


class CountingTicTacToe(TicTacToeGame):
    """Tic-Tac-Toe that counts execute() calls."""

    def __init__(self, size=3):
        super().__init__(size)
        self.executes = 0

    def execute(self, move, is_max):
        self.executes += 1
        super().execute(move, is_max)


class StuckGame(Game[int]):
    """Broken game: never terminal, never has moves."""

    def __init__(self, win_score=10):
        self._spec = GameSpec(name="stuck", board_shape=(1,), win_score=win_score)

    @property
    def spec(self):
        return self._spec

    def legal_moves(self):
        return []

    def is_terminal(self):
        return False

    def utility(self):
        return 0

    def execute(self, move, is_max):
        pass

    def undo(self, move, is_max):
        pass

    def heuristic_evaluation(self):
        return 0

    def tactical_move(self):
        return None


class OneMoveGame(Game[str]):
    """Game that ends after a single move, each move worth a fixed score."""

    def __init__(self, scores):
        self.scores = scores
        self.played = None
        self._spec = GameSpec(name="one-move", board_shape=(len(scores),), win_score=100)

    @property
    def spec(self):
        return self._spec

    def legal_moves(self):
        return [] if self.played else list(self.scores)

    def is_terminal(self):
        return self.played is not None

    def utility(self):
        return self.scores[self.played] if self.played else 0

    def execute(self, move, is_max):
        if self.played is not None:
            raise GameContractError("game is over")
        self.played = move

    def undo(self, move, is_max):
        self.played = None

    def heuristic_evaluation(self):
        return 0

    def tactical_move(self):
        return None


class TestResults:
    def test_exact_result_prepends(self):
        result = ExactResult(5, ("b", "c")).prepend("a")
        assert result.score == 5
        assert result.path == ("a", "b", "c")
        assert result.best_move == "a"

    def test_horizon_result_has_no_best_move(self):
        assert ExactResult(3).best_move is None

    def test_bound_result_carries_no_path(self):
        bound = BoundResult(7)
        assert bound.score == 7
        assert not hasattr(bound, "path")
        assert not hasattr(bound, "best_move")

    def test_sentinels_survive_negation(self):
        assert -NEG_INF == POS_INF
        assert NEG_INF < -sys.maxsize + 1


class TestMoveGuard:
    def test_undo_after_block(self):
        game = TicTacToeGame()
        with applied(game, Square(1, 1), True):
            assert game.is_marked(Square(1, 1))
        assert not game.is_marked(Square(1, 1))

    def test_undo_on_exception(self):
        game = TicTacToeGame()
        with pytest.raises(RuntimeError):
            with applied(game, Square(0, 0), False):
                raise RuntimeError("boom")
        assert np.all(game.board == 0)

    def test_failed_execute_is_not_undone(self):
        game = TicTacToeGame.from_rows(["X..", "...", "..."])
        with pytest.raises(GameContractError):
            with applied(game, Square(0, 0), False):
                pass
        assert game.board[0, 0] == 1


class TestEngineMisuse:
    def test_negative_depth(self):
        with pytest.raises(EngineMisuseError):
            Minimax(TicTacToeGame(), -1)

    def test_negative_depth_is_value_error(self):
        with pytest.raises(ValueError):
            Minimax(TicTacToeGame(), -3)

    def test_search_finished_game(self):
        game = TicTacToeGame.from_rows(["XXX", "OO.", "..."])
        with pytest.raises(EngineMisuseError):
            Minimax(game, 3).search()

    def test_depth_zero_without_tactic(self):
        with pytest.raises(EngineMisuseError):
            Minimax(TicTacToeGame(), 0).search()

    def test_depth_zero_with_tactic(self):
        game = TicTacToeGame.from_rows(["XX.", ".O.", "..."])
        assert Minimax(game, 0).search() == Square(0, 2)

    def test_win_score_colliding_with_bounds(self):
        with pytest.raises(EngineMisuseError):
            Minimax(StuckGame(win_score=sys.maxsize), 2)

    def test_no_moves_in_unfinished_game(self):
        with pytest.raises(GameContractError):
            Minimax(StuckGame(), 2).search()


class TestTacticalShortcut:
    def test_block_returned_without_search(self):
        game = CountingTicTacToe.from_rows(["XX.", ".O.", "..."])
        game.executes = 0
        engine = Minimax(game, 5)
        result = engine.analyze()
        assert result.move == Square(0, 2)
        assert result.tactical
        assert game.executes == 0

    def test_win_returned_without_search(self):
        game = CountingTicTacToe.from_rows(["XX.", "OO.", "X.."])
        game.executes = 0
        assert Minimax(game, 5).search() == Square(1, 2)
        assert game.executes == 0

    def test_search_runs_when_no_tactic(self):
        game = CountingTicTacToe.from_rows(["X..", "...", "..."])
        game.executes = 0
        result = Minimax(game, 2).analyze()
        assert not result.tactical
        assert game.executes > 0

    def test_disabled_shortcut_still_blocks(self):
        game = TicTacToeGame.from_rows(["XX.", ".O.", "..."])
        result = Minimax(game, 2, use_tactical=False).analyze()
        assert not result.tactical
        assert result.move == Square(0, 2)


class TestSearch:
    def test_search_leaves_game_unchanged(self):
        game = TicTacToeGame.from_rows(["X..", ".O.", "..X"])
        before = game.board.copy()
        Minimax(game, 6).search()
        assert np.array_equal(game.board, before)
        assert game._filled == 3

    def test_single_remaining_square(self):
        game = TicTacToeGame.from_rows(["XOX", "XOO", "OX."])
        assert not game.is_terminal()
        assert game.tactical_move() is None
        assert Minimax(game, 5).search() == Square(2, 2)

    def test_opening_reply_is_center_or_corner(self):
        game = TicTacToeGame()
        move = Minimax(game, 5).search()
        assert move in CORNERS_AND_CENTER

    def test_principal_variation_starts_with_move(self):
        game = TicTacToeGame.from_rows(["X..", "...", "..."])
        result = Minimax(game, 4).analyze()
        assert result.principal_variation[0] == result.move
        assert 1 <= len(result.principal_variation) <= 4

    def test_principal_variation_is_playable(self):
        game = TicTacToeGame.from_rows(["X..", ".O.", "..X"])
        result = Minimax(game, 6, use_tactical=False).analyze()
        is_max = False
        for move in result.principal_variation:
            assert game.is_legal(move)
            game.execute(move, is_max)
            is_max = not is_max

    def test_stats_are_collected(self):
        result = Minimax(TicTacToeGame(), 4).analyze()
        stats = result.stats
        assert stats.nodes > 0
        assert stats.heuristic_leaves > 0
        assert stats.cutoffs > 0
        assert stats.elapsed >= 0

    def test_stats_reset_between_searches(self):
        game = TicTacToeGame.from_rows(["X..", "...", "..."])
        engine = Minimax(game, 3)
        first = engine.analyze().stats.nodes
        second = engine.analyze().stats.nodes
        assert first == second

    def test_best_move_wrapper(self):
        game = TicTacToeGame.from_rows(["XX.", ".O.", "..."])
        assert best_move(game, 3) == Square(0, 2)

    def test_ties_keep_first_move(self):
        game = OneMoveGame({"a": 5, "b": 2, "c": 2, "d": 3})
        result = Minimax(game, 3).analyze()
        assert result.move == "b"
        assert result.score == 2

    def test_move_order_decides_only_ties(self):
        game = OneMoveGame({"d": 3, "c": 2, "b": 2, "a": 5})
        assert Minimax(game, 3).search() == "c"


class TestAlphaBetaEquivalence:
    @pytest.mark.parametrize("max_depth", [1, 2, 3, 4])
    def test_same_move_and_score_as_plain_minimax(self, max_depth):
        for game in o_to_move_positions():
            expected_score, expected_move = plain_minimax(game, 0, max_depth, False)
            result = Minimax(game, max_depth, use_tactical=False).analyze()
            assert result.move == expected_move
            assert result.score == expected_score

    def test_pruning_visits_fewer_nodes(self):
        game = CountingTicTacToe.from_rows(["X..", "...", "..."])
        game.executes = 0
        plain_minimax(game, 0, 5, False)
        unpruned = game.executes

        game.executes = 0
        Minimax(game, 5, use_tactical=False).search()
        assert 0 < game.executes < unpruned


class TestOptimality:
    @pytest.mark.parametrize("rows", [
        ["X..", ".O.", "..X"],
        ["XO.", ".X.", "..."],
        [".X.", "XO.", "..."],
        ["XXO", "...", "O.X"],
    ])
    def test_full_depth_matches_game_value(self, rows):
        game = TicTacToeGame.from_rows(rows)
        result = Minimax(game, 9, use_tactical=False).analyze()
        assert result.score == solve(game, False)

        # The chosen move is as good as any alternative
        with applied(game, result.move, False):
            chosen = solve(game, True)
        for move in game.legal_moves():
            with applied(game, move, False):
                assert chosen <= solve(game, True)

    def test_engine_draws_against_perfect_opponent(self):
        game = TicTacToeGame()
        is_max = False  # Engine (O) opens
        first_move = None
        while not game.is_terminal():
            if is_max:
                move = perfect_max_move(game)
            else:
                move = Minimax(game, 5).search()
                if first_move is None:
                    first_move = move
            game.execute(move, is_max)
            is_max = not is_max

        assert first_move in CORNERS_AND_CENTER
        assert game.utility() == 0

    def test_engine_never_loses_as_second_player(self):
        for opening in TicTacToeGame().legal_moves():
            game = TicTacToeGame()
            game.execute(opening, True)
            is_max = False
            while not game.is_terminal():
                move = Minimax(game, 9).search() if not is_max else perfect_max_move(game)
                game.execute(move, is_max)
                is_max = not is_max
            assert game.utility() <= 0


class TestConnect4Search:
    def test_takes_immediate_win(self):
        game = Connect4Game()
        for col in (1, 2, 6):
            game.execute(col, True)
        for _ in range(3):
            game.execute(0, False)
        result = Minimax(game, 3, use_tactical=False).analyze()
        assert result.move == 0
        assert result.score == -game.spec.win_score

    def test_blocks_immediate_loss(self):
        game = Connect4Game()
        for _ in range(3):
            game.execute(3, True)
        game.execute(0, False)
        game.execute(6, False)
        assert Minimax(game, 2, use_tactical=False).search() == 3
        assert Minimax(game, 2).search() == 3

    def test_search_restores_board(self):
        game = Connect4Game()
        game.execute(3, True)
        before = game.board.copy()
        Minimax(game, 4).search()
        assert np.array_equal(game.board, before)
