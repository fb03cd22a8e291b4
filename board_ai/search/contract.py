"""
The capability contract a game position must satisfy to be searched.

The search engine never looks inside moves or boards; it only calls the
operations declared on GamePosition. Any class with these members can be
searched, no inheritance required.
"""

from typing import Any, Hashable, List, Optional, Protocol, runtime_checkable

from board_ai.error_handling import FinishedPositionError, GameContractError

Move = Hashable
Player = Hashable


@runtime_checkable
class GamePosition(Protocol):
    """
    A position of a finite, alternating two-player game.

    legal_moves() must be non-empty whenever is_finished() is False, and
    must list moves in the same order every time it is called on equal
    positions so that seeded searches are reproducible.
    """

    @property
    def current_player(self) -> Optional[Player]:
        """The player to move, or None once the game has ended."""
        ...

    @property
    def winner(self) -> Optional[Player]:
        """The winning player, or None while running or on a draw."""
        ...

    def is_finished(self) -> bool:
        ...

    def is_draw(self) -> bool:
        ...

    def legal_moves(self) -> List[Move]:
        ...

    def apply_move(self, move: Move) -> None:
        """Play ``move`` in place. Raises IllegalMoveError for illegal moves."""
        ...

    def clone(self) -> "GamePosition":
        """Return an independent copy."""
        ...


def require_unfinished(state: GamePosition) -> None:
    """Fail fast if a move is requested for a finished position."""
    if state.is_finished():
        raise FinishedPositionError(
            f"Cannot choose a move: the game is already finished (winner={state.winner})"
        )


def require_legal_moves(state: GamePosition) -> List[Any]:
    """Return the legal moves of an unfinished position, checking the contract."""
    moves = state.legal_moves()
    if not moves:
        raise GameContractError(
            f"{type(state).__name__} reports no legal moves but is not finished"
        )
    return moves


def next_state(state: GamePosition, move: Move) -> GamePosition:
    """Return a new position with ``move`` applied, leaving ``state`` untouched."""
    child = state.clone()
    child.apply_move(move)
    return child
