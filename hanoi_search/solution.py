"""
Search results and solution checking.

- Solution: move list plus per-stage snapshots extracted from a solved node
- reconstruct_path: walks parent indices back to the root
- ConstraintChecker / check_move_sequence: replays moves and reports rule violations
- verify_solution: end-to-end checks used by tests and the --verify flag
"""

from dataclasses import dataclass, field
from typing import Dict, List, Optional, Sequence, Tuple, Union

import numpy as np

from .errors import InternalSearchError
from .frontier import NodeArena
from .state import NUM_PEGS, Configuration, Move


@dataclass
class SearchStats:
    """Counters collected by the search driver during one run."""

    nodes_generated: int = 0
    nodes_expanded: int = 0
    duplicates_dropped: int = 0
    stale_skipped: int = 0
    max_frontier_size: int = 0

    def to_dict(self) -> Dict[str, int]:
        return {
            'nodes_generated': self.nodes_generated,
            'nodes_expanded': self.nodes_expanded,
            'duplicates_dropped': self.duplicates_dropped,
            'stale_skipped': self.stale_skipped,
            'max_frontier_size': self.max_frontier_size,
        }


@dataclass
class Solution:
    moves: List[Move]
    stages: List[Configuration]
    strategy: Optional[str] = None
    stats: SearchStats = field(default_factory=SearchStats)

    @property
    def move_count(self) -> int:
        return len(self.moves)

    @property
    def initial(self) -> Configuration:
        return self.stages[0]

    @property
    def final(self) -> Configuration:
        return self.stages[-1]

    def as_move_lists(self) -> List[List[int]]:
        return [move.as_list() for move in self.moves]

    def peg_assignments(self) -> np.ndarray:
        """
        Peg index of every disk at every stage.

        Row i is stage i (row 0 is the initial configuration), column d - 1 is
        disk d.
        """
        num_disks = self.initial.num_disks
        table = np.zeros((len(self.stages), num_disks), dtype=np.int64)
        for row, configuration in enumerate(self.stages):
            for peg_idx, peg in enumerate(configuration.pegs):
                for disk in peg:
                    table[row, disk - 1] = peg_idx
        return table

    def to_dict(self) -> Dict:
        return {
            'strategy': self.strategy,
            'num_moves': self.move_count,
            'moves': self.as_move_lists(),
            'stages': [stage.as_lists() for stage in self.stages],
            'labels': [stage.label() for stage in self.stages],
            'stats': self.stats.to_dict(),
        }


def reconstruct_path(
    arena: NodeArena,
    index: int,
    strategy: Optional[str] = None,
    stats: Optional[SearchStats] = None,
) -> Solution:
    """Turn the solved node at `index` into a start-to-goal Solution."""
    lineage = list(arena.lineage(index))
    lineage.reverse()

    moves = [node.move for node in lineage[1:]]
    stages = [node.configuration for node in lineage]

    if lineage[-1].g != len(moves):
        raise InternalSearchError(f"Solved node has g={lineage[-1].g} but its path has {len(moves)} moves")

    return Solution(
        moves=moves,
        stages=stages,
        strategy=strategy,
        stats=stats if stats is not None else SearchStats(),
    )


# ============================================================================
# Violation Types
# ============================================================================


class ViolationType:
    """Enumeration of Towers of Hanoi rule violations."""

    DISK_NOT_ON_TOP = "disk_not_on_top"
    SOURCE_PEG_EMPTY = "source_peg_empty"
    LARGER_ON_SMALLER = "larger_on_smaller"
    INVALID_DISK_NUMBER = "invalid_disk_number"
    INVALID_PEG_NUMBER = "invalid_peg_number"
    INVALID_MOVE_FORMAT = "invalid_move_format"


@dataclass
class MoveViolation:
    """Represents a constraint violation for a move."""

    violation_type: str
    move: Optional[List[int]]
    step_index: int
    description: str


MoveLike = Union[Move, Sequence[int]]


class ConstraintChecker:
    """Replays move sequences against the Towers of Hanoi rules."""

    def __init__(self, num_disks: int, initial: Optional[Configuration] = None):
        self.num_disks = num_disks
        self.initial = initial if initial is not None else Configuration.tower(num_disks, 0)

    def check_move(self, move: List[int], state: Configuration, step_index: int) -> Optional[MoveViolation]:
        def violation(kind: str, description: str) -> MoveViolation:
            return MoveViolation(violation_type=kind, move=move, step_index=step_index, description=description)

        if len(move) != 3:
            return violation(ViolationType.INVALID_MOVE_FORMAT, f"Move must have 3 elements, got {len(move)}")

        disk, from_peg, to_peg = move

        if isinstance(disk, bool) or not isinstance(disk, int) or disk < 1 or disk > self.num_disks:
            return violation(
                ViolationType.INVALID_DISK_NUMBER,
                f"Invalid disk number {disk}, must be 1-{self.num_disks}",
            )

        for role, peg in (("source", from_peg), ("destination", to_peg)):
            if isinstance(peg, bool) or not isinstance(peg, int) or peg < 0 or peg >= NUM_PEGS:
                return violation(ViolationType.INVALID_PEG_NUMBER, f"Invalid {role} peg {peg}, must be 0-2")

        if from_peg == to_peg:
            return violation(ViolationType.INVALID_PEG_NUMBER, f"Source and destination are both peg {from_peg}")

        top_disk = state.top(from_peg)
        if top_disk is None:
            return violation(ViolationType.SOURCE_PEG_EMPTY, f"Source peg {from_peg} is empty")

        if top_disk != disk:
            return violation(
                ViolationType.DISK_NOT_ON_TOP,
                f"Disk {disk} is not on top of peg {from_peg}, top disk is {top_disk}",
            )

        top_dest = state.top(to_peg)
        if top_dest is not None and disk > top_dest:
            return violation(ViolationType.LARGER_ON_SMALLER, f"Cannot place disk {disk} on smaller disk {top_dest}")

        return None

    def check_move_sequence(self, moves: Sequence[MoveLike]) -> Tuple[List[MoveViolation], Configuration]:
        state = self.initial
        all_violations = []

        for i, move in enumerate(moves):
            raw = move.as_list() if isinstance(move, Move) else list(move)
            found = self.check_move(raw, state, i)
            if found is not None:
                all_violations.append(found)
                continue
            state = state.apply(Move(*raw))

        return all_violations, state


def check_move_sequence(
    moves: Sequence[MoveLike],
    num_disks: int,
    initial: Optional[Configuration] = None,
) -> Tuple[List[MoveViolation], Configuration]:
    """Replay `moves`; violating moves are reported and skipped."""
    return ConstraintChecker(num_disks, initial).check_move_sequence(moves)


def verify_solution(solution: Solution, num_disks: int, goal_peg: int) -> List[str]:
    """Return a list of problems with `solution`; empty when it is sound and minimal."""
    problems = []
    expected_disks = list(range(1, num_disks + 1))

    for i, stage in enumerate(solution.stages):
        disks = sorted(d for peg in stage.pegs for d in peg)
        if disks != expected_disks:
            problems.append(f"Stage {i} holds disks {disks}, expected {expected_disks}")

    if len(solution.stages) != solution.move_count + 1:
        problems.append(
            f"Solution has {len(solution.stages)} stages for {solution.move_count} moves, "
            f"expected {solution.move_count + 1}"
        )

    checker = ConstraintChecker(num_disks, solution.initial)
    final = solution.initial
    for i, move in enumerate(solution.moves):
        found = checker.check_move(move.as_list(), final, i)
        if found is not None:
            problems.append(f"Move {i}: {found.description}")
            continue

        final = final.apply(move)
        if i + 1 < len(solution.stages) and solution.stages[i + 1] != final:
            problems.append(f"Stage {i + 1} is {solution.stages[i + 1]} but move {i} ({move}) leads to {final}")

    if final != solution.final:
        problems.append(f"Replayed final state {final} does not match reported {solution.final}")

    if not final.is_goal(goal_peg):
        problems.append(f"Final state {final} is not the goal tower on peg {goal_peg}")

    start_peg = next(i for i, peg in enumerate(solution.initial.pegs) if peg)
    optimal = 0 if start_peg == goal_peg else 2 ** num_disks - 1
    if solution.move_count != optimal:
        problems.append(f"Solution uses {solution.move_count} moves, optimal is {optimal}")

    return problems
