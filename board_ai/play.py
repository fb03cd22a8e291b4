"""
Game loop for two seated players.

The first player takes the side to move in the starting position and the
second player the other side. Players are asked for a move whenever their
side is to move, so a side that keeps the move after an Othello pass is
asked again.
"""

import logging
from dataclasses import dataclass, field
from typing import Any, List, Tuple

from board_ai.enums import get_opponent, player_display_name
from board_ai.error_handling import FinishedPositionError

logger = logging.getLogger(__name__)


@dataclass
class GameResult:
    """Result of a single game."""
    winner: Any  # side that won, or None for a draw
    history: List[Tuple[Any, Any]] = field(default_factory=list)  # (side, move) in order played
    forfeit: bool = False  # ended by an illegal or missing move

    @property
    def is_draw(self) -> bool:
        return self.winner is None

    @property
    def num_moves(self) -> int:
        return len(self.history)


def play_game(board, first, second, display=None) -> GameResult:
    """
    Play ``board`` to the end, mutating it.

    Args:
        board: Unfinished game position.
        first: Player for the side to move now.
        second: Player for the other side.
        display: Optional object with BasicDisplay's callbacks.

    Returns:
        GameResult. An illegal or missing (None) move is still recorded in
        the history, and ends the game at once with the opponent of the
        offending side as winner.
    """
    if board.is_finished():
        raise FinishedPositionError("Cannot start a game from a finished position")
    first_side = board.current_player
    seats = {first_side: first, get_opponent(first_side): second}
    result = GameResult(winner=None)

    if display is not None:
        display.on_game_start(board, first.name, second.name)

    while not board.is_finished():
        side = board.current_player
        player = seats[side]
        if display is not None:
            display.on_before_move(board, side, result.history)
        move = player.choose_move(board, [m for _, m in result.history])
        result.history.append((side, move))
        if move is None or not board.is_legal_move(move):
            logger.info(f"{player_display_name(side)} ({player.name}) played illegal move {move!r}; forfeit")
            if display is not None:
                display.on_illegal_move(board, side, move)
            result.winner = get_opponent(side)
            result.forfeit = True
            if display is not None:
                display.on_game_finish(board, result)
            return result
        board.apply_move(move)
        if display is not None:
            display.on_after_move(board, side, move)

    result.winner = board.winner
    logger.debug(f"Game over after {result.num_moves} moves, winner {player_display_name(result.winner)}")
    if display is not None:
        display.on_game_finish(board, result)
    return result
