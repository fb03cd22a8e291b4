"""
Chunked node arena for the MCTS search tree.

All nodes of one move decision live in a single NodeArena. Nodes refer to
each other (parent, first child, next sibling) by integer NodeRef indices
into the arena rather than by object references, so the tree shape is
expressed entirely in arena coordinates and a clear() releases everything
at once.

Storage grows by whole chunks. A chunk is a fixed-capacity list that is
never moved or resized once full, so a node obtained before a chunk
boundary is the same object, with the same field values, after any number
of further allocations.
"""

import logging
from typing import Any, Iterator, List, Optional

from board_ai.config import ARENA_CHUNK_SIZE, DEFAULT_MAX_NODES
from board_ai.error_handling import ArenaCapacityError

logger = logging.getLogger(__name__)

NodeRef = int


class SearchNode:
    """
    One position in the explored tree.

    value is always the empirical win rate of ``mover``, the player whose
    move produced this node. The root has no mover and its value is never
    used for decisions.
    """

    __slots__ = (
        "state", "mover", "move",
        "visit_count", "win_count", "value",
        "parent", "first_child", "next_sibling",
    )

    def __init__(self):
        self.reset()

    def reset(self) -> None:
        self.state: Any = None
        self.mover: Any = None
        self.move: Any = None
        self.visit_count: int = 0
        self.win_count: float = 0.0
        self.value: float = 0.0
        self.parent: Optional[NodeRef] = None
        self.first_child: Optional[NodeRef] = None
        self.next_sibling: Optional[NodeRef] = None

    @property
    def is_expanded(self) -> bool:
        return self.first_child is not None

    def __repr__(self):
        return (
            f"SearchNode(move={self.move!r}, mover={self.mover}, "
            f"N={self.visit_count}, W={self.win_count:.1f}, V={self.value:.3f})"
        )


class NodeArena:
    """
    Bump allocator for SearchNode objects addressed by stable indices.

    Args:
        chunk_size: Nodes per chunk.
        max_nodes: Optional ceiling on allocated nodes. Allocating past it
            raises ArenaCapacityError instead of growing without bound.
    """

    def __init__(self, chunk_size: int = ARENA_CHUNK_SIZE, max_nodes: Optional[int] = DEFAULT_MAX_NODES):
        if chunk_size <= 0:
            raise ValueError(f"chunk_size must be positive, got {chunk_size}")
        if max_nodes is not None and max_nodes <= 0:
            raise ValueError(f"max_nodes must be positive, got {max_nodes}")
        self.chunk_size = chunk_size
        self.max_nodes = max_nodes
        self._chunks: List[List[SearchNode]] = []
        self._size = 0

    def allocate(self) -> NodeRef:
        """Return the reference of a freshly default-initialised node."""
        if self.max_nodes is not None and self._size >= self.max_nodes:
            logger.error(f"Node arena full at {self._size} nodes")
            raise ArenaCapacityError(self.max_nodes)
        offset = self._size % self.chunk_size
        if offset == 0:
            self._chunks.append([])
        chunk = self._chunks[-1]
        chunk.append(SearchNode())
        ref = self._size
        self._size += 1
        return ref

    def node(self, ref: NodeRef) -> SearchNode:
        """Resolve a reference previously returned by allocate()."""
        if not 0 <= ref < self._size:
            raise IndexError(f"Node reference {ref} out of range (arena size {self._size})")
        return self._chunks[ref // self.chunk_size][ref % self.chunk_size]

    __getitem__ = node

    def size(self) -> int:
        return self._size

    def __len__(self) -> int:
        return self._size

    @property
    def num_chunks(self) -> int:
        return len(self._chunks)

    def clear(self) -> None:
        """Invalidate every reference and return to the empty state."""
        self._chunks = []
        self._size = 0

    def children(self, ref: NodeRef) -> Iterator[NodeRef]:
        """Iterate a node's children in sibling-list order."""
        child = self.node(ref).first_child
        while child is not None:
            yield child
            child = self.node(child).next_sibling

    def add_child(self, parent: NodeRef, child: NodeRef) -> None:
        """Link ``child`` in as the new head of ``parent``'s sibling list."""
        parent_node = self.node(parent)
        child_node = self.node(child)
        child_node.parent = parent
        child_node.next_sibling = parent_node.first_child
        parent_node.first_child = child
