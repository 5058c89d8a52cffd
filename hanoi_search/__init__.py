"""Breadth-first and A* state-space search for the Tower of Hanoi."""

from .errors import (
    HanoiSearchError,
    IllegalMoveError,
    InternalSearchError,
    InvalidConfigurationError,
    InvalidProblemError,
    SearchExhaustedError,
)
from .frontier import ExploredSet, FifoFrontier, NodeArena, PriorityFrontier, SearchNode
from .search import START_PEG, SearchDriver, SearchProblem, SearchStatus, SearchStrategy, solve
from .solution import SearchStats, Solution, check_move_sequence, reconstruct_path, verify_solution
from .state import Configuration, Move, disks_off_goal, generate_moves

__all__ = [
    "Configuration",
    "ExploredSet",
    "FifoFrontier",
    "HanoiSearchError",
    "IllegalMoveError",
    "InternalSearchError",
    "InvalidConfigurationError",
    "InvalidProblemError",
    "Move",
    "NodeArena",
    "PriorityFrontier",
    "START_PEG",
    "SearchDriver",
    "SearchExhaustedError",
    "SearchNode",
    "SearchProblem",
    "SearchStats",
    "SearchStatus",
    "SearchStrategy",
    "Solution",
    "check_move_sequence",
    "disks_off_goal",
    "generate_moves",
    "reconstruct_path",
    "solve",
    "verify_solution",
]
