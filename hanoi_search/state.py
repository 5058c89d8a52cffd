"""
Towers of Hanoi state model.

This module keeps the pieces every search strategy shares:
- Configuration: immutable three-peg arrangement with structural equality
- Move: a single disk transfer
- Move generation and legality checks
- The disks-off-goal heuristic used by A*
"""

from dataclasses import dataclass
from typing import Iterable, List, Optional, Sequence, Tuple

from .errors import IllegalMoveError, InvalidConfigurationError

NUM_PEGS = 3
PEG_NAMES = ("A", "B", "C")

Pegs = Tuple[Tuple[int, ...], Tuple[int, ...], Tuple[int, ...]]


# ============================================================================
# Moves
# ============================================================================


@dataclass(frozen=True)
class Move:
    """Moves the top disk of `from_peg` onto `to_peg`."""

    disk: int
    from_peg: int
    to_peg: int

    def as_list(self) -> List[int]:
        return [self.disk, self.from_peg, self.to_peg]

    def __str__(self):
        return f"disk{self.disk}:{self.from_peg}->{self.to_peg}"


# ============================================================================
# Configuration
# ============================================================================


@dataclass(frozen=True)
class Configuration:
    """
    Arrangement of all disks across the three pegs.

    Each peg is stored bottom-to-top, so the largest disk comes first and the
    last element is the top disk: ((3, 2, 1), (), ()) is a 3-disk tower on
    peg 0. Equality and hashing come from the tuple contents.
    """

    pegs: Pegs

    @classmethod
    def tower(cls, num_disks: int, peg: int = 0) -> "Configuration":
        """All `num_disks` disks stacked on `peg`."""
        pegs = [(), (), ()]
        pegs[peg] = tuple(range(num_disks, 0, -1))
        return cls(tuple(pegs))

    @classmethod
    def from_pegs(
        cls,
        pegs: Sequence[Iterable[int]],
        num_disks: Optional[int] = None,
    ) -> "Configuration":
        """Build a configuration from lists, checking every Hanoi invariant."""
        if len(pegs) != NUM_PEGS:
            raise InvalidConfigurationError(f"State must have exactly {NUM_PEGS} pegs, got {len(pegs)}")

        as_tuples = tuple(tuple(peg) for peg in pegs)
        all_disks = sorted(d for peg in as_tuples for d in peg)
        if num_disks is None:
            num_disks = len(all_disks)

        expected = list(range(1, num_disks + 1))
        if all_disks != expected:
            raise InvalidConfigurationError(
                f"State must contain each disk exactly once (expected {expected}, got {all_disks})"
            )

        for peg in as_tuples:
            for i in range(len(peg) - 1):
                if peg[i] < peg[i + 1]:
                    raise InvalidConfigurationError(
                        f"Invalid peg ordering {list(peg)}: larger disks must be below smaller disks"
                    )

        return cls(as_tuples)

    @property
    def num_disks(self) -> int:
        return sum(len(peg) for peg in self.pegs)

    def top(self, peg: int) -> Optional[int]:
        stack = self.pegs[peg]
        return stack[-1] if stack else None

    def is_legal(self, move: Move) -> bool:
        if move.from_peg == move.to_peg:
            return False
        if not (0 <= move.from_peg < NUM_PEGS and 0 <= move.to_peg < NUM_PEGS):
            return False

        disk = self.top(move.from_peg)
        if disk is None or disk != move.disk:
            return False

        top_dest = self.top(move.to_peg)
        return top_dest is None or disk < top_dest

    def apply(self, move: Move) -> "Configuration":
        """Return the configuration reached by `move`."""
        if not self.is_legal(move):
            raise IllegalMoveError(f"Move {move} is not legal in {self}")

        pegs = list(self.pegs)
        pegs[move.from_peg] = pegs[move.from_peg][:-1]
        pegs[move.to_peg] = pegs[move.to_peg] + (move.disk,)
        return Configuration(tuple(pegs))

    def is_goal(self, goal_peg: int) -> bool:
        # Peg ordering is an invariant, so a full goal peg is the solved tower.
        return len(self.pegs[goal_peg]) == self.num_disks

    def label(self) -> str:
        """Compact peg label per disk, largest disk first: '111' -> '113' ..."""
        assignment = {}
        for peg_idx, peg in enumerate(self.pegs):
            for disk in peg:
                assignment[disk] = peg_idx
        return "".join(str(assignment[d] + 1) for d in range(self.num_disks, 0, -1))

    def as_lists(self) -> List[List[int]]:
        return [list(peg) for peg in self.pegs]

    def __str__(self):
        return " ".join(f"{name}:{list(peg)}" for name, peg in zip(PEG_NAMES, self.pegs))


# ============================================================================
# Move generation and heuristic
# ============================================================================


def generate_moves(configuration: Configuration) -> List[Move]:
    """All legal moves from `configuration`, source peg major order."""
    moves = []
    for from_peg in range(NUM_PEGS):
        disk = configuration.top(from_peg)
        if disk is None:
            continue

        for to_peg in range(NUM_PEGS):
            if from_peg == to_peg:
                continue

            top_dest = configuration.top(to_peg)
            if top_dest is not None and top_dest < disk:
                continue

            moves.append(Move(disk, from_peg, to_peg))
    return moves


def disks_off_goal(configuration: Configuration, goal_peg: int) -> int:
    """
    Number of disks not resting on `goal_peg`.

    Each of them has to move at least once, so the estimate never exceeds the
    true number of remaining moves.
    """
    return configuration.num_disks - len(configuration.pegs[goal_peg])
