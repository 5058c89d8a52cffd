"""
Search bookkeeping shared by BFS and A*.

- SearchNode / NodeArena: nodes of one run, parents stored as arena indices
- FifoFrontier: BFS queue
- PriorityFrontier: A* open list ordered by (f, h)
- ExploredSet: configurations that must not be expanded again
"""

import heapq
from collections import Counter, deque
from dataclasses import dataclass
from typing import Dict, Iterator, List, Optional, Set, Tuple

from .state import Configuration, Move


@dataclass(frozen=True)
class SearchNode:
    configuration: Configuration
    g: int
    h: int = 0
    move: Optional[Move] = None
    parent: Optional[int] = None

    @property
    def f(self) -> int:
        return self.g + self.h


class NodeArena:
    """
    Append-only owner of every node created in one search run.

    A node's parent is an index into the arena, never a direct reference, so
    dropping the arena releases the whole run at once.
    """

    def __init__(self):
        self._nodes: List[SearchNode] = []

    def add(self, node: SearchNode) -> int:
        if node.parent is not None and not 0 <= node.parent < len(self._nodes):
            raise IndexError(f"Parent index {node.parent} is not in the arena")
        self._nodes.append(node)
        return len(self._nodes) - 1

    def __getitem__(self, index: int) -> SearchNode:
        return self._nodes[index]

    def __len__(self) -> int:
        return len(self._nodes)

    def lineage(self, index: int) -> Iterator[SearchNode]:
        """Yield the node at `index` and then each ancestor up to the root."""
        current: Optional[int] = index
        while current is not None:
            node = self._nodes[current]
            yield node
            current = node.parent


# ============================================================================
# Frontiers
# ============================================================================


class FifoFrontier:
    """Strict first-in-first-out frontier used by BFS."""

    def __init__(self):
        self._queue = deque()

    def push(self, index: int, node: SearchNode) -> bool:
        self._queue.append(index)
        return True

    def pop(self) -> int:
        return self._queue.popleft()

    def __len__(self) -> int:
        return len(self._queue)


class PriorityFrontier:
    """
    A* open list: lowest f first, ties broken by lowest h.

    A new node is rejected when an entry for the same configuration with g no
    larger than the new one is already queued. Worse queued entries are left
    in place; the explored set filters them when they are popped.
    """

    def __init__(self):
        self._heap: List[Tuple[int, int, int, int]] = []
        self._counter = 0
        self._queued: Dict[Configuration, Counter] = {}
        self._nodes: Dict[int, SearchNode] = {}

    def push(self, index: int, node: SearchNode) -> bool:
        queued = self._queued.get(node.configuration)
        if queued and min(queued) <= node.g:
            return False

        self._counter += 1
        heapq.heappush(self._heap, (node.f, node.h, self._counter, index))
        self._queued.setdefault(node.configuration, Counter())[node.g] += 1
        self._nodes[index] = node
        return True

    def pop(self) -> int:
        _, _, _, index = heapq.heappop(self._heap)
        node = self._nodes.pop(index)

        queued = self._queued[node.configuration]
        queued[node.g] -= 1
        if queued[node.g] == 0:
            del queued[node.g]
        if not queued:
            del self._queued[node.configuration]
        return index

    def __len__(self) -> int:
        return len(self._heap)


# ============================================================================
# Explored set
# ============================================================================


class ExploredSet:
    def __init__(self):
        self._seen: Set[Configuration] = set()

    def add(self, configuration: Configuration) -> None:
        self._seen.add(configuration)

    def __contains__(self, configuration: Configuration) -> bool:
        return configuration in self._seen

    def __len__(self) -> int:
        return len(self._seen)
