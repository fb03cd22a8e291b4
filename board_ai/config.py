"""
Configuration constants and settings for the board_ai project.

This module contains the defaults used throughout the project, including
search parameters, arena sizing and board geometry. Per-object knobs live in
dataclass configs (see board_ai.search.mcts.MCTSConfig) that default to the
values defined here.
"""

# Global configuration settings

# Game display verbosity:
# 0: Game start and result only
# 1: Also each move as it is played
# 2: Also the board before every move (default)
# 3: Also the full move list at the end
VERBOSE_LEVEL = 2

# MCTS defaults
DEFAULT_EXPLORATION_BIAS = 1.4   # UCB1 exploration weight c
DEFAULT_THINKING_TIME_S = 1.0    # Wall-clock budget per move decision
ITERATIONS_PER_BATCH = 100       # Iterations between deadline checks

# Node arena
ARENA_CHUNK_SIZE = 10_000        # Nodes per chunk
DEFAULT_MAX_NODES = None         # No node ceiling unless configured

# Gomoku geometry
GOMOKU_WIN_LENGTH = 5
GOMOKU_MIN_BOARD_SIZE = GOMOKU_WIN_LENGTH
GOMOKU_MAX_BOARD_SIZE = 181
GOMOKU_DEFAULT_BOARD_SIZE = 11
GOMOKU_CELL_BITS = 2

# Othello geometry
OTHELLO_MIN_BOARD_SIZE = 4
OTHELLO_MAX_BOARD_SIZE = 10
OTHELLO_DEFAULT_BOARD_SIZE = 8
OTHELLO_CELL_BITS = 3

# Packed storage
BITPACK_MAX_WIDTH = 7
