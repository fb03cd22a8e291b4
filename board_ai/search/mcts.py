# Generic, single-threaded UCB1 Monte Carlo Tree Search.
#
# VALUE PERSPECTIVE:
# Every non-root node stores the win rate of its *mover*: the player who made
# the move leading into the node. That is exactly the player choosing among
# the node and its siblings one level up, so a parent always maximises over
# its children's own values and no sign flipping is needed anywhere.
#
# RANDOM STREAM:
# One random.Random instance feeds both the expansion pick (one draw per
# Expand, made before any rollout draws) and every rollout move. With a fixed
# seed and an iteration-count stopping rule a search replays exactly.

from __future__ import annotations

import logging
import math
import random
import time
from dataclasses import dataclass, field
from typing import Any, Callable, List, Optional, Tuple

from board_ai.config import (
    ARENA_CHUNK_SIZE,
    DEFAULT_EXPLORATION_BIAS,
    DEFAULT_MAX_NODES,
    DEFAULT_THINKING_TIME_S,
    ITERATIONS_PER_BATCH,
)
from board_ai.search.arena import NodeArena, NodeRef
from board_ai.search.contract import GamePosition, next_state, require_legal_moves, require_unfinished
from board_ai.search.rollout import RolloutPolicy
from board_ai.utils.random_utils import make_rng

logger = logging.getLogger(__name__)


# ------------------ Config ------------------
@dataclass
class MCTSConfig:
    # UCB1 exploration weight c
    exploration_bias: float = DEFAULT_EXPLORATION_BIAS
    # Wall-clock budget per decision; checked only between batches
    thinking_time_s: float = DEFAULT_THINKING_TIME_S
    iterations_per_batch: int = ITERATIONS_PER_BATCH
    # Iteration-count stopping rule, rounded up to whole batches. When set it
    # replaces the wall-clock rule.
    max_iterations: Optional[int] = None
    chunk_size: int = ARENA_CHUNK_SIZE
    max_nodes: Optional[int] = DEFAULT_MAX_NODES
    seed: Optional[int] = None
    # Win credit given to every node on the path when a rollout is drawn.
    # 0.0 leaves draws uncounted.
    draw_reward: float = 0.0
    # Keep a pre-order snapshot of the whole tree in the SearchReport
    record_tree: bool = False

    def __post_init__(self):
        """Validate configuration parameters after initialization."""
        if not self.exploration_bias > 0:
            raise ValueError(f"exploration_bias must be positive, got {self.exploration_bias}")
        if self.thinking_time_s < 0:
            raise ValueError(f"thinking_time_s must be non-negative, got {self.thinking_time_s}")
        if self.iterations_per_batch <= 0:
            raise ValueError(f"iterations_per_batch must be positive, got {self.iterations_per_batch}")
        if self.max_iterations is not None and self.max_iterations <= 0:
            raise ValueError(f"max_iterations must be positive, got {self.max_iterations}")
        if self.chunk_size <= 0:
            raise ValueError(f"chunk_size must be positive, got {self.chunk_size}")
        if self.max_nodes is not None and self.max_nodes <= 0:
            raise ValueError(f"max_nodes must be positive, got {self.max_nodes}")
        if not 0.0 <= self.draw_reward <= 1.0:
            raise ValueError(f"draw_reward must be between 0 and 1, got {self.draw_reward}")


# ------------------ Search Report ------------------
@dataclass(frozen=True)
class ChildStats:
    """Statistics of one root child, in sibling-list order."""
    move: Any
    value: float
    visit_count: int


@dataclass(frozen=True)
class NodeSnapshot:
    """One node of a recorded tree, listed in pre-order."""
    depth: int
    move: Any
    mover: Any
    visit_count: int
    win_count: float
    value: float
    num_children: int


@dataclass(frozen=True)
class SearchReport:
    """Result of one move decision."""
    move: Any
    children: List[ChildStats]
    iterations: int
    elapsed_s: float
    node_count: int
    root_visits: int
    tree: List[NodeSnapshot] = field(default_factory=list)

    @property
    def iterations_per_second(self) -> float:
        return self.iterations / self.elapsed_s if self.elapsed_s > 0 else 0.0


SearchObserver = Callable[[SearchReport], None]


# ------------------ Core MCTS ------------------
class GenericMCTS:
    """
    MCTS player for any position implementing the GamePosition contract.

    Usage:
        mcts = GenericMCTS(MCTSConfig(thinking_time_s=2.0, seed=7))
        move = mcts.choose_move(board)

    The tree is rebuilt from scratch for every decision and discarded before
    choose_move returns.
    """

    name = "GenericMCTS"

    def __init__(
        self,
        config: Optional[MCTSConfig] = None,
        rng: Optional[random.Random] = None,
        observer: Optional[SearchObserver] = None,
    ):
        self.config = config or MCTSConfig()
        # An engine owns its generator unless one is shared in explicitly
        self.rng = rng if rng is not None else make_rng(self.config.seed)
        self.rollout = RolloutPolicy(self.rng)
        self.observer = observer
        self.last_report: Optional[SearchReport] = None

    def get_name(self) -> str:
        return self.name

    # ---------- Public API ----------

    def choose_move(self, position: GamePosition, history: Optional[List[Any]] = None) -> Any:
        """
        Choose a move for the player to move in ``position``.

        Args:
            position: An unfinished game position. It is not modified.
            history: Moves played so far. Accepted for player-interface
                compatibility; the search does not use it.

        Raises:
            FinishedPositionError: If the game is already over.
            ArenaCapacityError: If config.max_nodes is exceeded.
        """
        return self.search(position).move

    def search(self, position: GamePosition) -> SearchReport:
        """Run one full decision and return the chosen move with statistics."""
        require_unfinished(position)
        arena = NodeArena(self.config.chunk_size, self.config.max_nodes)
        start_time = time.perf_counter()
        try:
            root = arena.allocate()
            arena.node(root).state = position.clone()
            iterations = self._run_batches(arena, root, start_time)

            children = [
                ChildStats(move=arena.node(ref).move, value=arena.node(ref).value,
                           visit_count=arena.node(ref).visit_count)
                for ref in arena.children(root)
            ]
            best = self._best_child(arena, root)
            move = arena.node(best).move
            tree = self._snapshot_tree(arena, root) if self.config.record_tree else []
            node_count = arena.size()
            root_visits = arena.node(root).visit_count
        finally:
            arena.clear()
        elapsed = time.perf_counter() - start_time

        report = SearchReport(
            move=move,
            children=children,
            iterations=iterations,
            elapsed_s=elapsed,
            node_count=node_count,
            root_visits=root_visits,
            tree=tree,
        )
        self.last_report = report
        self._log_report(report, position)
        if self.observer is not None:
            self.observer(report)
        return report

    # ---------- Main loop ----------

    def _run_batches(self, arena: NodeArena, root: NodeRef, start_time: float) -> int:
        """Iterate in whole batches until the budget is spent; always at least one batch."""
        batch = self.config.iterations_per_batch
        iterations = 0
        while True:
            for _ in range(batch):
                self._iterate(arena, root)
            iterations += batch
            if self._budget_exhausted(iterations, start_time):
                return iterations

    def _budget_exhausted(self, iterations: int, start_time: float) -> bool:
        if self.config.max_iterations is not None:
            return iterations >= self.config.max_iterations
        return time.perf_counter() - start_time >= self.config.thinking_time_s

    def _iterate(self, arena: NodeArena, root: NodeRef) -> None:
        leaf = self._select(arena, root)
        if arena.node(leaf).state.is_finished():
            target = leaf
        else:
            target = self._expand(arena, leaf)
        winner, is_draw = self._simulate(arena.node(target).state)
        self._backpropagate(arena, target, winner, is_draw)

    # ---------- Phases ----------

    def _select(self, arena: NodeArena, root: NodeRef) -> NodeRef:
        """
        Descend by UCB1 until reaching a node without children.

        Both the log argument and the visit denominator are floored at 1, so
        an unvisited child scores value + c * sqrt(ln(max(N_parent, 1)))
        rather than infinity. Ties go to the first child in sibling order.
        """
        c = self.config.exploration_bias
        ref = root
        node = arena.node(ref)
        while node.first_child is not None:
            log_n = math.log(max(node.visit_count, 1))
            best_ref = node.first_child
            best_score = -math.inf
            child_ref = node.first_child
            while child_ref is not None:
                child = arena.node(child_ref)
                score = child.value + c * math.sqrt(log_n / max(child.visit_count, 1))
                if score > best_score:
                    best_score = score
                    best_ref = child_ref
                child_ref = child.next_sibling
            ref = best_ref
            node = arena.node(ref)
        return ref

    def _expand(self, arena: NodeArena, leaf_ref: NodeRef) -> NodeRef:
        """
        Create one child per legal move, then pick one of them uniformly.

        Children are prepended, so the last legal move ends up first in the
        sibling list. Only the children created by this call are candidates
        for the pick.
        """
        leaf = arena.node(leaf_ref)
        mover = leaf.state.current_player
        first_new = arena.size()
        for move in require_legal_moves(leaf.state):
            ref = arena.allocate()
            child = arena.node(ref)
            child.state = next_state(leaf.state, move)
            child.mover = mover
            child.move = move
            arena.add_child(leaf_ref, ref)
        return first_new + self.rollout.pick_index(arena.size() - first_new)

    def _simulate(self, state: GamePosition) -> Tuple[Any, bool]:
        return self.rollout.playout(state.clone())

    def _backpropagate(self, arena: NodeArena, ref: Optional[NodeRef], winner: Any, is_draw: bool) -> None:
        """Fold one rollout outcome into every node from ``ref`` up to the root."""
        draw_reward = self.config.draw_reward
        while ref is not None:
            node = arena.node(ref)
            node.visit_count += 1
            if winner is not None and node.mover is not None and node.mover == winner:
                node.win_count += 1.0
            elif is_draw and draw_reward:
                node.win_count += draw_reward
            node.value = node.win_count / max(node.visit_count, 1)
            ref = node.parent

    # ---------- Results ----------

    def _best_child(self, arena: NodeArena, root: NodeRef) -> NodeRef:
        """Root child with the highest value; the first in sibling order wins ties."""
        best_ref = None
        best_value = -math.inf
        for ref in arena.children(root):
            value = arena.node(ref).value
            if value > best_value:
                best_ref = ref
                best_value = value
        if best_ref is None:
            raise RuntimeError("Search finished without expanding the root")
        return best_ref

    def _snapshot_tree(self, arena: NodeArena, root: NodeRef) -> List[NodeSnapshot]:
        snapshots = []
        stack = [(root, 0)]
        while stack:
            ref, depth = stack.pop()
            node = arena.node(ref)
            children = list(arena.children(ref))
            snapshots.append(NodeSnapshot(
                depth=depth,
                move=node.move,
                mover=node.mover,
                visit_count=node.visit_count,
                win_count=node.win_count,
                value=node.value,
                num_children=len(children),
            ))
            # Reversed so the first sibling is visited first
            stack.extend((child, depth + 1) for child in reversed(children))
        return snapshots

    def _log_report(self, report: SearchReport, position: GamePosition) -> None:
        if not logger.isEnabledFor(logging.DEBUG):
            return
        format_move = getattr(position, "format_move", repr)
        for child in report.children:
            logger.debug(f"[{self.name}] Move: {format_move(child.move)}, "
                         f"v_i = {child.value:.4f}, n_i = {child.visit_count}")
        logger.debug(f"[{self.name}] Chosen move: {format_move(report.move)}")
        logger.debug(f"[{self.name}] Iterated {report.iterations} times for {report.elapsed_s:.3f} sec "
                     f"({report.iterations_per_second:.0f} iter/s)")
        logger.debug(f"[{self.name}] {report.node_count} nodes created")
