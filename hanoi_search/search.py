"""
State-space search over Towers of Hanoi configurations.

SearchDriver runs either breadth-first search or A* with the disks-off-goal
heuristic. Both strategies share the node arena, move generator and path
reconstruction; they differ in frontier ordering and in when a configuration
enters the explored set:

- BFS marks configurations as soon as they are generated.
- A* marks a configuration when its node is popped for expansion and never
  reopens it. With unit move costs and an admissible heuristic the first pop
  of any configuration already carries its optimal g.
"""

import enum
import logging
from dataclasses import dataclass
from typing import Callable, List, Optional, Union

from .errors import InvalidProblemError, SearchExhaustedError
from .frontier import ExploredSet, FifoFrontier, NodeArena, PriorityFrontier, SearchNode
from .solution import SearchStats, Solution, reconstruct_path
from .state import NUM_PEGS, Configuration, Move, disks_off_goal, generate_moves

logger = logging.getLogger(__name__)

START_PEG = 0

# Above this many reachable configurations the frontier and explored set get large.
LARGE_STATE_SPACE = 3 ** 14

MoveGenerator = Callable[[Configuration], List[Move]]
Heuristic = Callable[[Configuration, int], int]


class SearchStrategy(str, enum.Enum):
    ASTAR = "astar"
    BFS = "bfs"

    @classmethod
    def parse(cls, value: Union["SearchStrategy", str]) -> "SearchStrategy":
        if isinstance(value, cls):
            return value
        try:
            return cls(str(value).strip().lower())
        except ValueError:
            choices = ", ".join(s.value for s in cls)
            raise InvalidProblemError(f"Unknown search strategy '{value}'; expected one of: {choices}") from None


class SearchStatus(enum.Enum):
    INITIALIZING = "initializing"
    EXPLORING = "exploring"
    SOLVED = "solved"
    EXHAUSTED = "exhausted"


@dataclass(frozen=True)
class SearchProblem:
    """A validated request: move the tower from START_PEG to `goal_peg`."""

    num_disks: int
    goal_peg: int = 2

    def __post_init__(self):
        if isinstance(self.num_disks, bool) or not isinstance(self.num_disks, int):
            raise InvalidProblemError(f"num_disks must be an integer, got {self.num_disks!r}")
        if self.num_disks <= 0:
            raise InvalidProblemError(f"num_disks must be positive, got {self.num_disks}")
        if (
            isinstance(self.goal_peg, bool)
            or not isinstance(self.goal_peg, int)
            or not 0 <= self.goal_peg < NUM_PEGS
        ):
            raise InvalidProblemError(f"goal_peg must be one of 0, 1, 2, got {self.goal_peg!r}")

    @property
    def initial(self) -> Configuration:
        return Configuration.tower(self.num_disks, START_PEG)

    @property
    def goal(self) -> Configuration:
        return Configuration.tower(self.num_disks, self.goal_peg)


class SearchDriver:
    """
    Runs one search for a SearchProblem.

    Args:
        problem: validated disk count and goal peg
        strategy: SearchStrategy.ASTAR or SearchStrategy.BFS (or their string values)
        move_generator: returns the legal moves of a configuration
        heuristic: remaining-cost estimate, used by A* only
        on_expand: called with every node popped for expansion, goal node included
    """

    def __init__(
        self,
        problem: SearchProblem,
        strategy: Union[SearchStrategy, str] = SearchStrategy.ASTAR,
        move_generator: MoveGenerator = generate_moves,
        heuristic: Heuristic = disks_off_goal,
        on_expand: Optional[Callable[[SearchNode], None]] = None,
    ):
        self.problem = problem
        self.strategy = SearchStrategy.parse(strategy)
        self.move_generator = move_generator
        self.heuristic = heuristic
        self.on_expand = on_expand

        self.status = SearchStatus.INITIALIZING
        self.arena = NodeArena()
        self.explored = ExploredSet()
        self.stats = SearchStats()
        if self.strategy is SearchStrategy.ASTAR:
            self.frontier = PriorityFrontier()
        else:
            self.frontier = FifoFrontier()

    def _estimate(self, configuration: Configuration) -> int:
        if self.strategy is SearchStrategy.ASTAR:
            return self.heuristic(configuration, self.problem.goal_peg)
        return 0

    def _push(self, node: SearchNode) -> None:
        index = self.arena.add(node)
        if not self.frontier.push(index, node):
            self.stats.duplicates_dropped += 1
            return
        self.stats.max_frontier_size = max(self.stats.max_frontier_size, len(self.frontier))

    def _seed(self) -> None:
        initial = self.problem.initial
        root = SearchNode(configuration=initial, g=0, h=self._estimate(initial))
        if self.strategy is SearchStrategy.BFS:
            self.explored.add(initial)
        self.stats.nodes_generated += 1
        self._push(root)

    def _expand(self, index: int, node: SearchNode) -> None:
        for move in self.move_generator(node.configuration):
            child_config = node.configuration.apply(move)
            self.stats.nodes_generated += 1

            if child_config in self.explored:
                self.stats.duplicates_dropped += 1
                continue
            if self.strategy is SearchStrategy.BFS:
                self.explored.add(child_config)

            self._push(
                SearchNode(
                    configuration=child_config,
                    g=node.g + 1,
                    h=self._estimate(child_config),
                    move=move,
                    parent=index,
                )
            )

    def run(self) -> Solution:
        if self.status is not SearchStatus.INITIALIZING:
            raise RuntimeError(f"SearchDriver.run() called twice (status={self.status.value})")

        problem = self.problem
        if 3 ** problem.num_disks > LARGE_STATE_SPACE:
            logger.warning(
                f"{problem.num_disks} disks give {3 ** problem.num_disks} configurations; "
                f"{self.strategy.value} search may need a lot of memory"
            )

        logger.info(f"Starting {self.strategy.value} search: {problem.num_disks} disks, peg {START_PEG} -> peg {problem.goal_peg}")
        self._seed()
        self.status = SearchStatus.EXPLORING

        while self.frontier:
            index = self.frontier.pop()
            node = self.arena[index]

            if self.strategy is SearchStrategy.ASTAR:
                if node.configuration in self.explored:
                    # Stale duplicate queued before its configuration was expanded.
                    self.stats.stale_skipped += 1
                    continue
                self.explored.add(node.configuration)

            if self.on_expand is not None:
                self.on_expand(node)
            logger.debug(f"pop g={node.g} h={node.h} f={node.f} {node.configuration}")

            if node.configuration.is_goal(problem.goal_peg):
                self.status = SearchStatus.SOLVED
                solution = reconstruct_path(self.arena, index, strategy=self.strategy.value, stats=self.stats)
                logger.info(
                    f"Solved {problem.num_disks}-disk puzzle with {self.strategy.value} in "
                    f"{solution.move_count} moves ({self.stats.nodes_expanded} nodes expanded, "
                    f"{len(self.arena)} created)"
                )
                return solution

            self.stats.nodes_expanded += 1
            self._expand(index, node)

        self.status = SearchStatus.EXHAUSTED
        logger.error(
            f"{self.strategy.value} frontier exhausted after expanding {self.stats.nodes_expanded} nodes "
            f"without reaching peg {problem.goal_peg}"
        )
        raise SearchExhaustedError(
            f"{self.strategy.value} search exhausted the frontier for a solvable "
            f"{problem.num_disks}-disk puzzle; move generation or duplicate detection is broken"
        )


def solve(
    num_disks: int,
    goal_peg: int = 2,
    strategy: Union[SearchStrategy, str] = SearchStrategy.ASTAR,
    **kwargs,
) -> Solution:
    """Validate the request and run one search. Extra kwargs go to SearchDriver."""
    problem = SearchProblem(num_disks=num_disks, goal_peg=goal_peg)
    return SearchDriver(problem, strategy=strategy, **kwargs).run()
