"""
Head-to-head matches between two players.

Each game gets a fresh board and fresh players from the supplied
factories, so engines never carry state from one game into the next.
"""

import logging
from dataclasses import dataclass, replace
from typing import Callable, Dict, List, Optional, Tuple

from board_ai.play import GameResult, play_game

logger = logging.getLogger(__name__)

FIRST_SEAT = 'first'
SECOND_SEAT = 'second'
SEATS = (FIRST_SEAT, SECOND_SEAT)


@dataclass
class TournamentConfig:
    num_games: int = 10
    # Alternate which participant moves first from game to game
    swap_sides: bool = True
    player_labels: Optional[Tuple[str, str]] = None
    verbose: int = 1

    def __post_init__(self):
        if self.num_games <= 0:
            raise ValueError(f"num_games must be positive, got {self.num_games}")
        if self.player_labels is not None:
            if len(self.player_labels) != 2 or self.player_labels[0] == self.player_labels[1]:
                raise ValueError(f"player_labels must be two distinct names, got {self.player_labels}")


class TournamentResult:
    def __init__(self, participants: List[str]):
        self.participants = participants
        self.results = {
            name: {opponent: {'wins': 0, 'losses': 0, 'draws': 0, 'games': 0}
                   for opponent in participants if opponent != name}
            for name in participants
        }
        # Wins by whichever participant sat in each seat
        self.seat_wins = {seat: 0 for seat in SEATS}
        self.draws = 0
        self.forfeits = 0
        self.total_games = 0

    def record_game(self, winner: str, loser: str, winner_seat: Optional[str] = None):
        self.results[winner][loser]['wins'] += 1
        self.results[winner][loser]['games'] += 1
        self.results[loser][winner]['losses'] += 1
        self.results[loser][winner]['games'] += 1
        if winner_seat is not None:
            self.seat_wins[winner_seat] += 1
        self.total_games += 1

    def record_draw(self, a: str, b: str):
        for x, y in ((a, b), (b, a)):
            self.results[x][y]['draws'] += 1
            self.results[x][y]['games'] += 1
        self.draws += 1
        self.total_games += 1

    def wins(self, name: str) -> int:
        return sum(r['wins'] for r in self.results[name].values())

    def win_rates(self) -> Dict[str, float]:
        win_rates = {}
        for name in self.participants:
            games = sum(r['games'] for r in self.results[name].values())
            win_rates[name] = self.wins(name) / games if games > 0 else 0.0
        return win_rates

    def seat_win_rates(self) -> Dict[str, float]:
        return {
            seat: self.seat_wins[seat] / self.total_games if self.total_games else 0.0
            for seat in SEATS
        }

    def draw_rate(self) -> float:
        return self.draws / self.total_games if self.total_games else 0.0

    def print_summary(self, file=None):
        print(f"Games played: {self.total_games} (draws: {self.draws}, forfeits: {self.forfeits})", file=file)
        for name, rate in self.win_rates().items():
            print(f"  {name}: {self.wins(name)} wins ({rate:.1%})", file=file)
        seat_rates = self.seat_win_rates()
        print(f"  First seat won {self.seat_wins[FIRST_SEAT]} ({seat_rates[FIRST_SEAT]:.1%}), "
              f"second seat won {self.seat_wins[SECOND_SEAT]} ({seat_rates[SECOND_SEAT]:.1%})", file=file)


def _labels(first_name: str, second_name: str, config: TournamentConfig) -> Tuple[str, str]:
    if config.player_labels is not None:
        return config.player_labels
    if first_name == second_name:
        return f"{first_name} #1", f"{second_name} #2"
    return first_name, second_name


def run_match(
    make_board: Callable,
    make_first: Callable,
    make_second: Callable,
    num_games: Optional[int] = None,
    config: Optional[TournamentConfig] = None,
    display=None,
) -> TournamentResult:
    """
    Play a match between the players built by ``make_first`` and ``make_second``.

    Args:
        make_board: Zero-argument factory for a fresh starting position.
        make_first, make_second: Zero-argument player factories. The first
            participant moves first in even-numbered games; with
            config.swap_sides the second participant moves first in the others.
        num_games: Overrides config.num_games when given.
        config: Match settings.
        display: Optional display handed to every play_game() call.

    Returns:
        TournamentResult keyed by participant label, with per-seat wins.
    """
    if config is None:
        config = TournamentConfig() if num_games is None else TournamentConfig(num_games=num_games)
    elif num_games is not None:
        config = replace(config, num_games=num_games)

    result: Optional[TournamentResult] = None
    labels: Tuple[str, str] = ("", "")
    for game_idx in range(config.num_games):
        a, b = make_first(), make_second()
        if result is None:
            labels = _labels(a.name, b.name, config)
            result = TournamentResult(list(labels))
        swapped = config.swap_sides and game_idx % 2 == 1
        board = make_board()
        first_side = board.current_player
        if swapped:
            game = play_game(board, b, a, display)
            seat_labels = {first_side: labels[1], first_side.opponent(): labels[0]}
        else:
            game = play_game(board, a, b, display)
            seat_labels = {first_side: labels[0], first_side.opponent(): labels[1]}
        _record(result, game, seat_labels, first_side)

        if config.verbose >= 2:
            print(f"Game {game_idx + 1} of {config.num_games}: {_describe(game, seat_labels)}")
        elif config.verbose >= 1:
            print(f"{game_idx + 1},", end="", flush=True)
    if config.verbose == 1:
        print()
    logger.info(f"Match finished: {result.win_rates()}, draws {result.draws}")
    return result


def _record(result: TournamentResult, game: GameResult, seat_labels: Dict, first_side) -> None:
    if game.forfeit:
        result.forfeits += 1
    if game.winner is None:
        result.record_draw(*seat_labels.values())
        return
    loser_side = game.winner.opponent()
    seat = FIRST_SEAT if game.winner == first_side else SECOND_SEAT
    result.record_game(seat_labels[game.winner], seat_labels[loser_side], seat)


def _describe(game: GameResult, seat_labels: Dict) -> str:
    if game.winner is None:
        return f"draw after {game.num_moves} moves"
    return f"{seat_labels[game.winner]} won after {game.num_moves} moves"
