"""
Tests for the Gomoku rule engine.
"""

import numpy as np
import pytest

from board_ai.enums import Stone
from board_ai.error_handling import IllegalMoveError
from board_ai.games.gomoku import GomokuBoard
from board_ai.games.gomoku_positions import POSITION_BOARD_SIZE, POSITIONS, load_position
from board_ai.search.contract import GamePosition


def play_all(board, coords):
    for row, col in coords:
        board.play(row, col)


@pytest.fixture
def board():
    return GomokuBoard(7)


class TestInitialState:
    def test_empty_board(self, board):
        assert board.current_player is Stone.BLACK
        assert board.winner is None
        assert not board.is_finished()
        assert not board.is_draw()
        assert board.legal_moves() == list(range(49))
        assert board.num_moves == 0

    def test_satisfies_contract(self, board):
        assert isinstance(board, GamePosition)

    @pytest.mark.parametrize("size", [4, 182])
    def test_invalid_size(self, size):
        with pytest.raises(ValueError):
            GomokuBoard(size)


class TestMoves:
    def test_players_alternate(self, board):
        board.play(1, 1)
        assert board.current_player is Stone.WHITE
        assert board.cell(board.move_at(1, 1)) is Stone.BLACK
        board.play(2, 2)
        assert board.current_player is Stone.BLACK
        assert board.cell(board.move_at(2, 2)) is Stone.WHITE
        assert board.move_at(1, 1) not in board.legal_moves()
        assert len(board.legal_moves()) == 47

    def test_occupied_cell_is_illegal(self, board):
        board.play(3, 3)
        with pytest.raises(IllegalMoveError) as exc_info:
            board.play(3, 3)
        assert exc_info.value.move == board.move_at(3, 3)
        assert board.num_moves == 1

    @pytest.mark.parametrize("move", [-1, 49, None, "a"])
    def test_off_board_moves_are_illegal(self, board, move):
        assert not board.is_legal_move(move)
        with pytest.raises(IllegalMoveError):
            board.apply_move(move)

    def test_move_at_bounds(self, board):
        assert board.move_at(1, 1) == 0
        assert board.move_at(7, 7) == 48
        with pytest.raises(ValueError):
            board.move_at(0, 1)

    def test_format_move(self, board):
        assert board.format_move(board.move_at(2, 5)) == "(2, 5)"
        assert board.format_move(None) == "(none)"

    def test_clone_is_independent(self, board):
        board.play(4, 4)
        copy = board.clone()
        copy.play(1, 1)
        assert board.num_moves == 1
        assert board.cell(0) is None
        assert copy.current_player is Stone.BLACK
        assert board.current_player is Stone.WHITE


class TestWinning:
    def test_five_in_a_row_wins(self, board):
        play_all(board, [(1, 1), (7, 1), (1, 2), (7, 3), (1, 3), (7, 5), (1, 4), (7, 7)])
        assert not board.is_finished()
        board.play(1, 5)
        assert board.is_finished()
        assert board.winner is Stone.BLACK
        assert board.current_player is None
        assert not board.is_draw()
        assert board.legal_moves() == []

    def test_diagonal_win_for_white(self, board):
        play_all(board, [(7, 1), (1, 1), (7, 3), (2, 2), (7, 5), (3, 3), (6, 7), (4, 4), (1, 7)])
        board.play(5, 5)
        assert board.winner is Stone.WHITE

    def test_six_in_a_row_does_not_win(self, board):
        play_all(board, [(1, 1), (3, 1), (1, 2), (3, 3), (1, 3), (3, 5), (1, 5), (3, 7), (1, 6), (5, 1)])
        assert not board.is_finished()
        board.play(1, 4)
        assert not board.is_finished()
        assert board.winner is None
        assert board.current_player is Stone.WHITE

    def test_finished_board_rejects_moves(self, board):
        play_all(board, [(1, 1), (7, 1), (1, 2), (7, 3), (1, 3), (7, 5), (1, 4), (7, 7), (1, 5)])
        with pytest.raises(IllegalMoveError):
            board.play(4, 4)

    def test_full_board_is_a_draw(self):
        board = GomokuBoard(5)
        rows = ["BBWWB", "WWBBW", "BBWWB", "WWBBW", "BBWWB"]
        black = [(r + 1, c + 1) for r in range(5) for c in range(5) if rows[r][c] == "B"]
        white = [(r + 1, c + 1) for r in range(5) for c in range(5) if rows[r][c] == "W"]
        assert len(black) == 13 and len(white) == 12
        for i in range(25):
            row, col = black[i // 2] if i % 2 == 0 else white[i // 2]
            assert not board.is_finished()
            board.play(row, col)
        assert board.is_finished()
        assert board.is_draw()
        assert board.winner is None
        assert board.legal_moves() == []


class TestRendering:
    def test_str(self):
        board = GomokuBoard(5)
        board.play(1, 1)
        board.play(5, 5)
        assert str(board).splitlines() == ["@....", ".....", ".....", ".....", "....O"]

    def test_to_array(self):
        board = GomokuBoard(5)
        board.play(2, 3)
        arr = board.to_array()
        assert arr.shape == (5, 5)
        assert arr[1, 2] == Stone.BLACK.value
        assert np.count_nonzero(arr) == 1


class TestTacticalPositions:
    @pytest.mark.parametrize("number", sorted(POSITIONS))
    def test_positions_build(self, number):
        board, position = load_position(number)
        assert board.size == POSITION_BOARD_SIZE
        assert board.num_moves == len(position.moves)
        assert not board.is_finished()
        for move in position.solution_moves(board):
            assert board.is_legal_move(move)

    def test_side_to_move(self):
        board, _ = load_position(1)
        assert board.current_player is Stone.BLACK
        board, _ = load_position(2)
        assert board.current_player is Stone.WHITE

    def test_unknown_position(self):
        with pytest.raises(KeyError):
            load_position(99)
