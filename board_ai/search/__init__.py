"""
Generic Monte Carlo Tree Search.

This package provides the node arena, the game-position contract, the
uniform rollout policy and the UCB1 search engine built on them.
"""

from .arena import NodeArena, NodeRef, SearchNode
from .contract import GamePosition
from .mcts import ChildStats, GenericMCTS, MCTSConfig, NodeSnapshot, SearchReport
from .rollout import RolloutPolicy

__all__ = [
    'NodeArena',
    'NodeRef',
    'SearchNode',
    'GamePosition',
    'RolloutPolicy',
    'GenericMCTS',
    'MCTSConfig',
    'SearchReport',
    'ChildStats',
    'NodeSnapshot',
]
