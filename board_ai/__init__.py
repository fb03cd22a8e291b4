"""
board_ai: Monte Carlo Tree Search players for two-player board games.

The search engine in board_ai.search knows nothing about any particular
game; board_ai.games provides Gomoku and Othello rule engines that satisfy
its GamePosition contract.
"""

__version__ = "2025.1.0"

__all__ = [
    "search",
    "games",
    "players",
    "play",
    "display",
    "tournament",
]
