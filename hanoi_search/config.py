"""
Configuration for command-line solver runs.

This module contains:
- SolverConfig: which puzzle to solve, with which strategy, and how to report it
"""

from dataclasses import dataclass

from .search import SearchProblem, SearchStrategy


@dataclass
class SolverConfig:
    """Solver run configuration."""
    # Problem
    num_disks: int = 3
    goal_peg: int = 2  # 0 for A, 1 for B, 2 for C; the tower starts on A

    # Search
    strategy: str = SearchStrategy.ASTAR.value

    # Reporting
    verify: bool = False  # compare against the recursive oracle after solving
    log_level: str = "INFO"

    def to_problem(self) -> SearchProblem:
        return SearchProblem(num_disks=self.num_disks, goal_peg=self.goal_peg)

    def search_strategy(self) -> SearchStrategy:
        return SearchStrategy.parse(self.strategy)
