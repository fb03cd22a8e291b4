"""
Rule engines for the supported games.

Every board class here implements the GamePosition contract from
board_ai.search.contract and can be handed straight to GenericMCTS.
"""

from .bitpack import BitPack
from .gomoku import GomokuBoard
from .othello import OthelloBoard

GAMES = {
    'gomoku': GomokuBoard,
    'othello': OthelloBoard,
}

__all__ = [
    'BitPack',
    'GomokuBoard',
    'OthelloBoard',
    'GAMES',
]
