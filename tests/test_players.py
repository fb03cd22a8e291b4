"""
Tests for the non-search players and the player factory.
"""

import io
import random

import pytest

from board_ai.error_handling import BoardAIError, FinishedPositionError, GameContractError
from board_ai.games.gomoku import GomokuBoard
from board_ai.games.othello import OthelloBoard
from board_ai.players import GreedyPlayer, HumanPlayer, RandomPlayer, check_player_game, make_player
from board_ai.search import GenericMCTS


class TestGreedyPlayer:
    def test_opening_move_on_standard_board(self):
        board = OthelloBoard(8)
        move = GreedyPlayer().choose_move(board, [])
        # All four openings flip one disc; the first in row-major order wins the tie
        assert move == board.move_at(3, 4) == 19

    def test_prefers_larger_flip(self):
        board = OthelloBoard.from_rows([
            "@O..",
            "....",
            "@OO.",
            "....",
        ])
        assert board.legal_moves() == [board.move_at(1, 3), board.move_at(3, 4)]
        assert GreedyPlayer().choose_move(board) == board.move_at(3, 4)

    def test_does_not_modify_board(self):
        board = OthelloBoard(8)
        GreedyPlayer().choose_move(board)
        assert board.num_dark == 2
        assert board.legal_moves() == [19, 26, 37, 44]

    def test_finished_board(self):
        board = OthelloBoard.from_rows(["@@@@", "....", "....", "...."])
        assert board.is_finished()
        with pytest.raises(FinishedPositionError):
            GreedyPlayer().choose_move(board)

    def test_rejects_gomoku(self):
        board = GomokuBoard(5)
        with pytest.raises(GameContractError) as exc_info:
            GreedyPlayer().choose_move(board)
        assert isinstance(exc_info.value, BoardAIError)
        assert "Othello only" in str(exc_info.value)
        assert board.num_moves == 0


class TestRandomPlayer:
    def test_plays_legal_moves(self):
        board = OthelloBoard(6)
        player = RandomPlayer(random.Random(0))
        for _ in range(10):
            if board.is_finished():
                break
            move = player.choose_move(board)
            assert move in board.legal_moves()
            board.apply_move(move)

    def test_seeded(self):
        board = GomokuBoard(9)
        a = [RandomPlayer(random.Random(4)).choose_move(board) for _ in range(3)]
        b = [RandomPlayer(random.Random(4)).choose_move(board) for _ in range(3)]
        assert a == b


class TestHumanPlayer:
    def _player(self, text):
        out = io.StringIO()
        return HumanPlayer(io.StringIO(text), out), out

    def test_reads_one_based_coordinates(self):
        board = GomokuBoard(5)
        player, out = self._player("2 3\n")
        assert player.choose_move(board) == board.move_at(2, 3)
        assert "Black, enter next move" in out.getvalue()

    def test_reprompts_on_bad_input(self):
        board = GomokuBoard(5)
        board.play(1, 1)
        player, out = self._player("x y\n1 2 3\n9 9\n1 1\n4 4\n")
        assert player.choose_move(board) == board.move_at(4, 4)
        text = out.getvalue()
        assert text.count("Illegal input") == 2
        assert "Illegal position: enter two numbers between 1 and 5" in text
        assert "Illegal move" in text

    def test_end_of_input_forfeits(self):
        player, _ = self._player("")
        assert player.choose_move(GomokuBoard(5)) is None


class TestMakePlayer:
    def test_kinds(self):
        assert isinstance(make_player('mcts', max_iterations=100, seed=1), GenericMCTS)
        assert isinstance(make_player('random', seed=1), RandomPlayer)
        assert isinstance(make_player('greedy'), GreedyPlayer)
        assert isinstance(make_player('human'), HumanPlayer)

    def test_mcts_budget(self):
        engine = make_player('mcts', thinking_time_s=0.5, max_iterations=200, seed=9)
        assert engine.config.thinking_time_s == 0.5
        assert engine.config.max_iterations == 200
        assert engine.config.seed == 9

    def test_unknown_kind(self):
        with pytest.raises(ValueError):
            make_player('oracle')

    def test_names(self):
        assert make_player('random').name == "Random"
        assert make_player('greedy').get_name() == "Greedy"

    def test_player_game_check(self):
        check_player_game('greedy', 'othello')
        check_player_game('mcts', 'gomoku')
        check_player_game('random', 'gomoku')
        with pytest.raises(ValueError, match="only plays othello"):
            check_player_game('greedy', 'gomoku')
