"""
Tests for solution checking, path reconstruction and the reference oracles.
"""

import numpy as np
import pytest

from hanoi_search import Configuration, InternalSearchError, Move, NodeArena, SearchNode, Solution, solve
from hanoi_search.oracle import all_states, build_state_graph, recursive_moves, shortest_move_count
from hanoi_search.solution import ViolationType, check_move_sequence, reconstruct_path, verify_solution

CANONICAL_3 = [[1, 0, 2], [2, 0, 1], [1, 2, 1], [3, 0, 2], [1, 1, 0], [2, 1, 2], [1, 0, 2]]


def test_recursive_oracle_canonical_sequence():
    moves = recursive_moves(3, source=0, target=2)
    assert [m.as_list() for m in moves] == CANONICAL_3


@pytest.mark.parametrize("num_disks", [1, 2, 3, 4, 6])
def test_recursive_oracle_is_valid(num_disks):
    moves = recursive_moves(num_disks, 0, 2)
    assert len(moves) == 2 ** num_disks - 1

    violations, final = check_move_sequence(moves, num_disks)
    assert violations == []
    assert final == Configuration.tower(num_disks, 2)


def test_recursive_oracle_same_peg():
    assert recursive_moves(3, 1, 1) == []


@pytest.mark.parametrize("strategy", ["astar", "bfs"])
@pytest.mark.parametrize("num_disks", [1, 2, 3, 4])
def test_search_matches_oracle_length(strategy, num_disks):
    solution = solve(num_disks, goal_peg=2, strategy=strategy)
    assert solution.move_count == len(recursive_moves(num_disks, 0, 2))


def test_state_graph_shape():
    G = build_state_graph(3)
    assert G.number_of_nodes() == 27
    assert G.number_of_edges() == 39
    assert len(set(all_states(3))) == 27


@pytest.mark.parametrize("goal_peg", [1, 2])
def test_graph_distance_matches_search(goal_peg):
    start = Configuration.tower(4, 0)
    goal = Configuration.tower(4, goal_peg)
    assert shortest_move_count(4, start, goal) == solve(4, goal_peg=goal_peg).move_count


@pytest.mark.parametrize(
    "moves, violation_type",
    [
        ([[3, 0, 2]], ViolationType.DISK_NOT_ON_TOP),
        ([[1, 0, 2], [2, 0, 2]], ViolationType.LARGER_ON_SMALLER),
        ([[1, 1, 2]], ViolationType.SOURCE_PEG_EMPTY),
        ([[4, 0, 1]], ViolationType.INVALID_DISK_NUMBER),
        ([[1, 0, 3]], ViolationType.INVALID_PEG_NUMBER),
        ([[1, 0, 0]], ViolationType.INVALID_PEG_NUMBER),
        ([[1, 0]], ViolationType.INVALID_MOVE_FORMAT),
    ],
)
def test_constraint_checker_detects(moves, violation_type):
    violations, _ = check_move_sequence(moves, 3)
    assert len(violations) == 1
    assert violations[-1].violation_type == violation_type
    assert violations[-1].step_index == len(moves) - 1


def test_violating_moves_are_not_applied():
    violations, final = check_move_sequence([[2, 0, 1], [1, 0, 1]], 2)
    assert len(violations) == 1
    assert final == Configuration.from_pegs([[2], [1], []])


def test_reconstruct_path():
    arena = NodeArena()
    start = Configuration.tower(2, 0)
    moves = [Move(1, 0, 1), Move(2, 0, 2), Move(1, 1, 2)]

    index = arena.add(SearchNode(start, 0))
    state = start
    for g, move in enumerate(moves, 1):
        state = state.apply(move)
        index = arena.add(SearchNode(state, g, move=move, parent=index))

    solution = reconstruct_path(arena, index, strategy="bfs")
    assert solution.moves == moves
    assert solution.move_count == 3
    assert solution.stages[0] == start
    assert solution.stages[-1] == Configuration.tower(2, 2)
    assert solution.strategy == "bfs"


def test_peg_assignments():
    solution = solve(2, goal_peg=2)
    table = solution.peg_assignments()

    assert table.shape == (4, 2)
    assert np.array_equal(table[0], [0, 0])
    assert np.array_equal(table[-1], [2, 2])
    # Exactly one disk changes peg per stage.
    assert np.all((np.diff(table, axis=0) != 0).sum(axis=1) == 1)


def test_verify_solution_flags_suboptimal_path():
    start = Configuration.tower(1, 0)
    moves = [Move(1, 0, 1), Move(1, 1, 2)]
    stages = [start, start.apply(moves[0]), start.apply(moves[0]).apply(moves[1])]

    problems = verify_solution(Solution(moves=moves, stages=stages), 1, goal_peg=2)
    assert problems == ["Solution uses 2 moves, optimal is 1"]


def test_verify_solution_flags_wrong_goal():
    solution = solve(2, goal_peg=1)
    problems = verify_solution(solution, 2, goal_peg=2)
    assert any("not the goal" in p for p in problems)


def test_solution_to_dict():
    data = solve(1, goal_peg=2, strategy="bfs").to_dict()
    assert data["strategy"] == "bfs"
    assert data["num_moves"] == 1
    assert data["moves"] == [[1, 0, 2]]
    assert data["stages"] == [[[1], [], []], [[], [], [1]]]
    assert data["labels"] == ["1", "3"]


def _canonical_solution(num_disks):
    moves = recursive_moves(num_disks, 0, 2)
    stages = [Configuration.tower(num_disks, 0)]
    for move in moves:
        stages.append(stages[-1].apply(move))
    return Solution(moves=moves, stages=stages)


def test_verify_solution_accepts_canonical():
    assert verify_solution(_canonical_solution(3), 3, goal_peg=2) == []


def test_verify_solution_flags_stage_not_reached_by_move():
    solution = _canonical_solution(2)
    # Move 0 puts disk 1 on peg 1; this stage shows it on peg 2 instead.
    solution.stages[1] = Configuration.from_pegs([[2], [], [1]])

    problems = verify_solution(solution, 2, goal_peg=2)
    assert len(problems) == 1
    assert problems[0].startswith("Stage 1 is")


def test_verify_solution_flags_missing_stage():
    solution = _canonical_solution(2)
    del solution.stages[2]

    problems = verify_solution(solution, 2, goal_peg=2)
    assert "Solution has 3 stages for 3 moves, expected 4" in problems


@pytest.mark.parametrize("move", [[True, 0, 2], [1, False, 2], [1, 0, True]])
def test_constraint_checker_rejects_bools(move):
    violations, final = check_move_sequence([move], 2)
    assert len(violations) == 1
    assert violations[0].violation_type in (ViolationType.INVALID_DISK_NUMBER, ViolationType.INVALID_PEG_NUMBER)
    assert final == Configuration.tower(2, 0)


def test_reconstruct_path_rejects_inconsistent_cost():
    arena = NodeArena()
    start = Configuration.tower(1, 0)
    root = arena.add(SearchNode(start, 0))
    index = arena.add(SearchNode(start.apply(Move(1, 0, 2)), 5, move=Move(1, 0, 2), parent=root))

    with pytest.raises(InternalSearchError):
        reconstruct_path(arena, index)
