# NOTE: To skip slow tests, run: pytest -m 'not slow'
import io
import random

import pytest

from board_ai.games.gomoku import GomokuBoard
from board_ai.games.othello import OthelloBoard
from board_ai.players import GreedyPlayer, RandomPlayer
from board_ai.search import GenericMCTS, MCTSConfig
from board_ai.tournament import FIRST_SEAT, SECOND_SEAT, TournamentConfig, TournamentResult, run_match

SLOW = pytest.mark.slow


class Resigner:
    name = "Resigner"

    def choose_move(self, board, history=None):
        return None


def seeded_random_factory(start):
    seeds = iter(range(start, start + 1000))
    return lambda: RandomPlayer(random.Random(next(seeds)))


class TestTournamentResult:
    def test_record_game(self):
        result = TournamentResult(["a", "b"])
        result.record_game("a", "b", FIRST_SEAT)
        result.record_game("a", "b", SECOND_SEAT)
        result.record_game("b", "a", FIRST_SEAT)
        assert result.total_games == 3
        assert result.wins("a") == 2
        assert result.results["b"]["a"]["losses"] == 2
        assert result.win_rates() == pytest.approx({"a": 2 / 3, "b": 1 / 3})
        assert result.seat_wins == {FIRST_SEAT: 2, SECOND_SEAT: 1}

    def test_record_draw(self):
        result = TournamentResult(["a", "b"])
        result.record_draw("a", "b")
        result.record_game("b", "a")
        assert result.draws == 1
        assert result.draw_rate() == pytest.approx(0.5)
        assert result.win_rates() == pytest.approx({"a": 0.0, "b": 0.5})
        assert result.results["a"]["b"]["games"] == 2

    def test_empty(self):
        result = TournamentResult(["a", "b"])
        assert result.win_rates() == {"a": 0.0, "b": 0.0}
        assert result.seat_win_rates() == {FIRST_SEAT: 0.0, SECOND_SEAT: 0.0}
        assert result.draw_rate() == 0.0

    def test_print_summary(self):
        result = TournamentResult(["a", "b"])
        result.record_game("a", "b", FIRST_SEAT)
        out = io.StringIO()
        result.print_summary(file=out)
        assert "Games played: 1" in out.getvalue()
        assert "a: 1 wins (100.0%)" in out.getvalue()


class TestTournamentConfig:
    def test_invalid(self):
        with pytest.raises(ValueError):
            TournamentConfig(num_games=0)
        with pytest.raises(ValueError):
            TournamentConfig(player_labels=("x", "x"))


class TestRunMatch:
    def test_forfeits_with_side_swapping(self):
        result = run_match(lambda: GomokuBoard(5), Resigner, seeded_random_factory(0),
                           config=TournamentConfig(num_games=4, verbose=0))
        assert result.total_games == 4
        assert result.forfeits == 4
        assert result.win_rates() == {"Resigner": 0.0, "Random": 1.0}
        assert result.seat_wins == {FIRST_SEAT: 2, SECOND_SEAT: 2}

    def test_without_swapping(self):
        config = TournamentConfig(num_games=3, swap_sides=False, verbose=0)
        result = run_match(lambda: GomokuBoard(5), Resigner, seeded_random_factory(0), config=config)
        assert result.seat_wins == {FIRST_SEAT: 0, SECOND_SEAT: 3}

    def test_duplicate_names_get_labels(self):
        result = run_match(lambda: GomokuBoard(5), seeded_random_factory(0), seeded_random_factory(100),
                           num_games=4, config=TournamentConfig(verbose=0))
        assert result.participants == ["Random #1", "Random #2"]
        assert result.total_games == 4
        assert result.wins("Random #1") + result.wins("Random #2") + result.draws == 4
        assert sum(result.seat_wins.values()) + result.draws == 4

    def test_custom_labels(self):
        config = TournamentConfig(num_games=2, player_labels=("greedy", "random"), verbose=0)
        result = run_match(lambda: OthelloBoard(6), GreedyPlayer, seeded_random_factory(0), config=config)
        assert result.participants == ["greedy", "random"]
        assert result.total_games == 2

    def test_progress_output(self, capsys):
        run_match(lambda: GomokuBoard(5), Resigner, seeded_random_factory(0), num_games=2)
        assert "1,2," in capsys.readouterr().out

    @SLOW
    def test_mcts_beats_random(self):
        config = TournamentConfig(num_games=4, verbose=0)
        result = run_match(
            lambda: OthelloBoard(6),
            lambda: GenericMCTS(MCTSConfig(max_iterations=200, seed=11)),
            seeded_random_factory(0),
            config=config,
        )
        assert result.wins("GenericMCTS") >= 2
