import io
import random

import pytest

from board_ai.display import BasicDisplay
from board_ai.enums import Disc, Stone
from board_ai.error_handling import FinishedPositionError
from board_ai.games.gomoku import GomokuBoard
from board_ai.games.othello import OthelloBoard
from board_ai.play import GameResult, play_game
from board_ai.players import GreedyPlayer, RandomPlayer
from board_ai.search import GenericMCTS, MCTSConfig


class FixedPlayer:
    name = "Fixed"

    def __init__(self, move):
        self.move = move
        self.histories = []

    def choose_move(self, board, history=None):
        self.histories.append(list(history))
        return self.move


class TestPlayGame:
    def test_random_game(self):
        board = GomokuBoard(5)
        result = play_game(board, RandomPlayer(random.Random(1)), RandomPlayer(random.Random(2)))
        assert board.is_finished()
        assert result.winner == board.winner
        assert result.num_moves == board.num_moves
        assert not result.forfeit
        sides = [side for side, _ in result.history]
        assert sides[::2] == [Stone.BLACK] * len(sides[::2])
        assert sides[1::2] == [Stone.WHITE] * len(sides[1::2])

    def test_othello_game(self):
        board = OthelloBoard(6)
        result = play_game(board, GreedyPlayer(), RandomPlayer(random.Random(3)))
        assert board.is_finished()
        if board.num_dark > board.num_light:
            assert result.winner is Disc.DARK
        elif board.num_dark < board.num_light:
            assert result.winner is Disc.LIGHT
        else:
            assert result.is_draw

    def test_mcts_plays_a_full_game(self):
        board = OthelloBoard(4)
        engine = GenericMCTS(MCTSConfig(max_iterations=100, seed=5))
        result = play_game(board, engine, RandomPlayer(random.Random(5)))
        assert board.is_finished()
        assert not result.forfeit

    def test_illegal_move_forfeits(self):
        board = GomokuBoard(5)
        first = FixedPlayer(0)
        result = play_game(board, first, RandomPlayer(random.Random(0)))
        assert result.forfeit
        assert result.winner is Stone.WHITE
        assert result.num_moves == 3
        assert result.history[-1] == (Stone.BLACK, 0)
        assert not board.is_finished()

    def test_missing_move_forfeits(self):
        board = GomokuBoard(5)
        result = play_game(board, RandomPlayer(random.Random(0)), FixedPlayer(None))
        assert result.forfeit
        assert result.winner is Stone.BLACK
        assert result.history[-1] == (Stone.WHITE, None)

    def test_players_see_move_history(self):
        board = GomokuBoard(5)
        first = FixedPlayer(0)
        second = FixedPlayer(1)
        play_game(board, first, second)
        assert first.histories == [[], [0, 1]]
        assert second.histories == [[0]]

    def test_finished_board(self):
        board = OthelloBoard.from_rows(["@@@@", "....", "....", "...."])
        with pytest.raises(FinishedPositionError):
            play_game(board, GreedyPlayer(), GreedyPlayer())

    def test_game_result_defaults(self):
        result = GameResult(winner=None)
        assert result.is_draw
        assert result.num_moves == 0
        assert not result.forfeit


class TestDisplay:
    def _play(self, verbosity, color=False):
        out = io.StringIO()
        display = BasicDisplay(out, verbosity=verbosity, color=color)
        board = GomokuBoard(5)
        result = play_game(board, RandomPlayer(random.Random(8)), RandomPlayer(random.Random(9)), display)
        return result, out.getvalue()

    def test_default_verbosity(self):
        result, text = self._play(2)
        assert "A new game has started." in text
        assert "Player 1 (Black): Random" in text
        assert "Player 2 (White): Random" in text
        assert "Turn #1" in text
        assert "Board before move:" in text
        assert "Move: (" in text
        assert f"The game has finished after {result.num_moves} moves." in text
        assert ("has won the game." in text) or ("The game was a draw." in text)
        assert "Moves:" not in text

    def test_quiet(self):
        _, text = self._play(0)
        assert "Turn #" not in text
        assert "Move: " not in text
        assert "The game has finished" in text

    def test_move_list(self):
        result, text = self._play(3)
        assert "Moves:" in text
        assert f"#{result.num_moves}: " in text

    def test_illegal_move_reported(self):
        out = io.StringIO()
        play_game(GomokuBoard(5), FixedPlayer(0), FixedPlayer(0), BasicDisplay(out, verbosity=1))
        text = out.getvalue()
        assert "Illegal move: (1, 1)" in text
        assert "Black has won the game." in text

    def test_color(self):
        _, text = self._play(0, color=True)
        assert "\033[34m" in text or "\033[31m" in text
        _, plain = self._play(0)
        assert "\033[" not in plain
