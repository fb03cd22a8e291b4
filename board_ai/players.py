"""
Non-search players.

Every player exposes a display ``name`` and ``choose_move(board, history)``;
GenericMCTS from board_ai.search follows the same interface, so any of them
can be seated in play_game() or a tournament.
"""

import logging
import random
import sys
from abc import ABC, abstractmethod
from typing import Any, List, Optional, TextIO

from board_ai.enums import player_display_name
from board_ai.error_handling import GameContractError
from board_ai.search.contract import GamePosition, next_state, require_legal_moves, require_unfinished
from board_ai.search.mcts import GenericMCTS, MCTSConfig
from board_ai.utils.random_utils import make_rng

logger = logging.getLogger(__name__)


class BasePlayer(ABC):
    """Abstract base class for players."""

    name = "Player"

    def get_name(self) -> str:
        return self.name

    @abstractmethod
    def choose_move(self, board: GamePosition, history: Optional[List[Any]] = None) -> Any:
        """Return the move to play, or None to resign."""
        pass


class RandomPlayer(BasePlayer):
    """Plays a uniformly random legal move."""

    name = "Random"

    def __init__(self, rng: Optional[random.Random] = None):
        self.rng = rng if rng is not None else random.Random()

    def choose_move(self, board, history=None):
        require_unfinished(board)
        moves = require_legal_moves(board)
        return moves[self.rng.randrange(len(moves))]


class GreedyPlayer(BasePlayer):
    """
    Othello player maximising the disc differential right after its move.

    Ties go to the first move in legal_moves() order.
    """

    name = "Greedy"

    def choose_move(self, board, history=None):
        require_unfinished(board)
        if not hasattr(board, "difference"):
            raise GameContractError(
                f"{type(board).__name__} has no disc differential; the greedy player plays Othello only")
        me = board.current_player
        best_move = None
        best_difference = None
        for move in require_legal_moves(board):
            difference = next_state(board, move).difference(me)
            if best_difference is None or difference > best_difference:
                best_move = move
                best_difference = difference
        return best_move


class HumanPlayer(BasePlayer):
    """
    Reads moves as two 1-based numbers, ``row col``, from a text stream.

    Re-prompts on malformed, off-board or illegal input. Returns None when
    the input is exhausted, which the game loop scores as a forfeit.
    """

    name = "Human"

    def __init__(self, input_stream: Optional[TextIO] = None, output_stream: Optional[TextIO] = None):
        self.input_stream = input_stream if input_stream is not None else sys.stdin
        self.output_stream = output_stream if output_stream is not None else sys.stdout

    def choose_move(self, board, history=None):
        while True:
            print(f"{player_display_name(board.current_player)}, enter next move (row col): ",
                  end="", file=self.output_stream, flush=True)
            line = self.input_stream.readline()
            if not line:
                logger.info("Input closed; forfeiting")
                return None
            parts = line.split()
            try:
                row, col = (int(p) for p in parts)
            except ValueError:
                print("Illegal input: enter two numbers separated by a space", file=self.output_stream)
                continue
            if not (1 <= row <= board.size and 1 <= col <= board.size):
                print(f"Illegal position: enter two numbers between 1 and {board.size}",
                      file=self.output_stream)
                continue
            move = board.move_at(row, col)
            if board.is_legal_move(move):
                return move
            print("Illegal move", file=self.output_stream)


PLAYER_TYPES = ('mcts', 'random', 'greedy', 'human')

# Games each restricted player type understands
PLAYER_GAMES = {'greedy': ('othello',)}


def check_player_game(kind: str, game: str):
    """Raise ValueError if player type 'kind' cannot play 'game'."""
    games = PLAYER_GAMES.get(kind)
    if games is not None and game not in games:
        raise ValueError(f"Player type '{kind}' only plays {', '.join(games)}, not {game}")


def make_player(kind: str, thinking_time_s: Optional[float] = None, max_iterations: Optional[int] = None,
                seed: Optional[int] = None, exploration_bias: Optional[float] = None):
    """
    Build a player from a command-line name.

    Args:
        kind: One of PLAYER_TYPES.
        thinking_time_s: MCTS wall-clock budget per move.
        max_iterations: MCTS iteration budget; overrides the clock.
        seed: Seeds MCTS and random players.
        exploration_bias: MCTS UCB1 exploration weight.
    """
    if kind == 'mcts':
        kwargs = {}
        if thinking_time_s is not None:
            kwargs["thinking_time_s"] = thinking_time_s
        if exploration_bias is not None:
            kwargs["exploration_bias"] = exploration_bias
        return GenericMCTS(MCTSConfig(seed=seed, max_iterations=max_iterations, **kwargs))
    if kind == 'random':
        return RandomPlayer(make_rng(seed))
    if kind == 'greedy':
        return GreedyPlayer()
    if kind == 'human':
        return HumanPlayer()
    raise ValueError(f"Unknown player type '{kind}'; choose from {PLAYER_TYPES}")
