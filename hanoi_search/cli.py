"""
Solve a Tower of Hanoi instance from the command line and print every stage.

Example:
    hanoi-search --disks 3 --goal-peg 2 --strategy astar --verify
"""

import argparse
import logging
import sys
from typing import List, Optional

from .config import SolverConfig
from .errors import InvalidProblemError
from .oracle import recursive_moves
from .search import START_PEG, SearchDriver, SearchStrategy
from .solution import Solution, verify_solution
from .state import PEG_NAMES

TITLES = {
    SearchStrategy.ASTAR: "Tower of Hanoi Using A* Strategy.",
    SearchStrategy.BFS: "Tower of Hanoi Using BFS Strategy.",
}


def format_stages(solution: Solution) -> List[str]:
    lines = []
    for i, stage in enumerate(solution.stages):
        if i == 0:
            lines.append(f"Stage {i} (Initial): State {stage}")
            continue
        move = solution.moves[i - 1]
        lines.append(
            f"Stage {i} (Move disk {move.disk} from {PEG_NAMES[move.from_peg]} to {PEG_NAMES[move.to_peg]}): "
            f"State {stage}"
        )
    return lines


def print_solution(solution: Solution, config: SolverConfig) -> None:
    strategy = config.search_strategy()
    print(TITLES[strategy])
    if strategy is SearchStrategy.ASTAR:
        print("Heuristic Used: The number of disks that are currently *not* on the target (destination) peg.")
        print("This is an admissible heuristic (never overestimates the cost).")
    print("-" * 65)
    print(f"Solving for {config.num_disks} discs to Peg {PEG_NAMES[config.goal_peg]}:")
    print(f"\nSolution found in {solution.move_count} moves.")
    print("Move-by-move output:")
    for line in format_stages(solution):
        print(line)

    stats = solution.stats
    print(
        f"\nExpanded {stats.nodes_expanded} nodes, generated {stats.nodes_generated}, "
        f"peak frontier {stats.max_frontier_size}"
    )


def run(config: SolverConfig) -> int:
    problem = config.to_problem()
    driver = SearchDriver(problem, strategy=config.search_strategy())
    solution = driver.run()
    print_solution(solution, config)

    if not config.verify:
        return 0

    problems = verify_solution(solution, problem.num_disks, problem.goal_peg)
    oracle = recursive_moves(problem.num_disks, START_PEG, problem.goal_peg)
    if len(oracle) != solution.move_count:
        problems.append(f"Recursive oracle uses {len(oracle)} moves, search used {solution.move_count}")

    if problems:
        print("\nVerification FAILED:")
        for p in problems:
            print(f"  - {p}")
        return 1

    print(f"\nVerified: legal, conserves all disks, matches the {len(oracle)}-move optimum.")
    return 0


def parse_args(argv: Optional[List[str]] = None) -> SolverConfig:
    defaults = SolverConfig()
    parser = argparse.ArgumentParser(
        description="Solve the Tower of Hanoi with breadth-first or A* search."
    )
    parser.add_argument("--disks", type=int, default=defaults.num_disks, help="Number of disks")
    parser.add_argument(
        "--goal-peg",
        type=int,
        default=defaults.goal_peg,
        help="Destination peg: 0 (A), 1 (B) or 2 (C). The tower starts on A.",
    )
    parser.add_argument(
        "--strategy",
        default=defaults.strategy,
        choices=[s.value for s in SearchStrategy],
        help="Search strategy",
    )
    parser.add_argument(
        "--verify",
        action="store_true",
        help="Check the result against the closed-form recursive solution",
    )
    parser.add_argument(
        "--log-level",
        default=defaults.log_level,
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
    )
    args = parser.parse_args(argv)

    return SolverConfig(
        num_disks=args.disks,
        goal_peg=args.goal_peg,
        strategy=args.strategy,
        verify=args.verify,
        log_level=args.log_level,
    )


def main(argv: Optional[List[str]] = None) -> int:
    config = parse_args(argv)
    logging.basicConfig(
        level=getattr(logging, config.log_level),
        format='%(asctime)s - %(levelname)s - %(message)s',
    )

    try:
        return run(config)
    except InvalidProblemError as e:
        print(f"ERROR: {e}", file=sys.stderr)
        return 2


if __name__ == "__main__":
    sys.exit(main())
