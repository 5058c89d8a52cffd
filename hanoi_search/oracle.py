"""
Reference answers for checking search results.

- recursive_moves: the classic doubling recurrence, canonical minimal sequence
- build_state_graph: the full 3^N state space as a networkx graph
- shortest_move_count: graph distance between two configurations
"""

import itertools
from typing import List

import networkx as nx

from .state import NUM_PEGS, Configuration, Move, generate_moves


def recursive_moves(num_disks: int, source: int = 0, target: int = 2) -> List[Move]:
    """Canonical optimal move list for moving a tower from `source` to `target`."""
    moves: List[Move] = []
    if source == target:
        return moves

    auxiliary = NUM_PEGS - source - target

    def _hanoi(n, src, dst, aux):
        if n == 0:
            return
        _hanoi(n - 1, src, aux, dst)
        moves.append(Move(n, src, dst))
        _hanoi(n - 1, aux, dst, src)

    _hanoi(num_disks, source, target, auxiliary)
    return moves


def all_states(num_disks: int) -> List[Configuration]:
    """Every valid configuration of `num_disks` disks on 3 pegs."""
    states = []
    # assignment[i] = peg of disk i + 1
    for assignment in itertools.product(range(NUM_PEGS), repeat=num_disks):
        pegs = [[], [], []]
        # Place disks from largest to smallest
        for disk in range(num_disks, 0, -1):
            pegs[assignment[disk - 1]].append(disk)
        states.append(Configuration(tuple(tuple(p) for p in pegs)))
    return states


def build_state_graph(num_disks: int) -> nx.Graph:
    states = all_states(num_disks)
    G = nx.Graph()
    G.add_nodes_from(states)

    for s in states:
        for move in generate_moves(s):
            neighbor = s.apply(move)
            if not G.has_edge(s, neighbor):
                G.add_edge(s, neighbor, disk=move.disk)

    return G


def shortest_move_count(num_disks: int, start: Configuration, goal: Configuration) -> int:
    G = build_state_graph(num_disks)
    return nx.shortest_path_length(G, start, goal)
