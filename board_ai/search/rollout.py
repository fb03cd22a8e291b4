"""
Uniform random rollout policy.

Both the expansion pick and every rollout move are drawn from one
random.Random instance, in a fixed order, so a seeded engine replays
exactly.
"""

import random
from typing import Any, Optional, Sequence, Tuple

from board_ai.error_handling import GameContractError
from board_ai.search.contract import GamePosition, require_legal_moves


class RolloutPolicy:
    def __init__(self, rng: Optional[random.Random] = None):
        self.rng = rng if rng is not None else random.Random()

    def pick_index(self, n: int) -> int:
        """Uniform index in [0, n)."""
        if n <= 0:
            raise GameContractError(f"Cannot pick from {n} candidates")
        return self.rng.randrange(n)

    def pick_uniform(self, moves: Sequence[Any]) -> Any:
        """Uniform choice from a non-empty sequence of moves."""
        if not moves:
            raise GameContractError("Cannot pick a move from an empty sequence")
        return moves[self.rng.randrange(len(moves))]

    def playout(self, state: GamePosition) -> Tuple[Any, bool]:
        """
        Play uniform random moves on ``state`` until the game ends.

        The state is mutated; pass a clone.

        Returns:
            (winner, is_draw) of the final position.
        """
        while not state.is_finished():
            state.apply_move(self.pick_uniform(require_legal_moves(state)))
        return state.winner, state.is_draw()
