"""
Error types for board_ai.

Contract failures are programming errors in a game implementation or in the
caller: they are raised where they are detected and are never retried or
swallowed by the search engine. Resource errors fail the current move
decision only.
"""


class BoardAIError(Exception):
    """Base class for all board_ai errors."""
    pass


class GameContractError(BoardAIError):
    """A game position violated the capability contract the engine relies on."""
    pass


class IllegalMoveError(GameContractError, ValueError):
    """A move outside legal_moves() was applied to a position."""

    def __init__(self, move, reason: str = ""):
        self.move = move
        message = f"Illegal move: {move!r}"
        if reason:
            message += f" ({reason})"
        super().__init__(message)


class FinishedPositionError(GameContractError):
    """A move was requested for a position whose game is already over."""
    pass


class SearchResourceError(BoardAIError):
    """The search exhausted a configured resource budget."""
    pass


class ArenaCapacityError(SearchResourceError):
    """The node arena reached its configured node ceiling."""

    def __init__(self, max_nodes: int):
        self.max_nodes = max_nodes
        super().__init__(
            f"Node arena exhausted: max_nodes={max_nodes}. "
            f"Lower the thinking time or raise max_nodes."
        )
