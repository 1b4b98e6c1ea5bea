"""Shared fixtures for the sptree test suite."""

import random
from typing import Dict, List, Optional, Tuple

import matplotlib
import pytest

matplotlib.use("Agg")

from sptree.graph import DirectedGraph, Edge, Vertex  # noqa: E402

SAMPLE_EDGES = [
    ("A", "B", 1),
    ("A", "C", 4),
    ("B", "C", 2),
    ("B", "D", 5),
    ("C", "D", 1),
]


@pytest.fixture
def sample_graph() -> DirectedGraph:
    """A->B(1), A->C(4), B->C(2), B->D(5), C->D(1) plus an isolated vertex E."""
    return DirectedGraph.from_edges(SAMPLE_EDGES, vertices=["A", "B", "C", "D", "E"])


def random_graph(seed: int, n: int, m: int, w_max: int = 9, zero_ok: bool = True) -> DirectedGraph:
    """Small random multigraph with integer labels, self-loops and parallel edges allowed."""
    rnd = random.Random(seed)
    w_min = 0 if zero_ok else 1
    edges = [(rnd.randrange(n), rnd.randrange(n), rnd.randint(w_min, w_max)) for _ in range(m)]
    return DirectedGraph.from_edges(edges, vertices=range(n))


def brute_force_distances(graph: DirectedGraph, source: Vertex) -> Dict[Vertex, int]:
    """Minimum weight over all simple paths from ``source``, by exhaustive DFS."""
    best: Dict[Vertex, int] = {source: 0}
    stack: List[Tuple[Vertex, int, frozenset]] = [(source, 0, frozenset([source]))]
    while stack:
        u, d, on_path = stack.pop()
        for e in graph.outgoing_edges(u):
            v = e.destination
            if v in on_path:
                continue
            nd = d + e.weight
            if v not in best or nd < best[v]:
                best[v] = nd
            stack.append((v, nd, on_path | {v}))
    return best


def walk_to_root(graph: DirectedGraph, source: Vertex, v: Vertex, tree: Dict[Vertex, Edge]) -> Optional[int]:
    """Follow parent edges from ``v``; return the accumulated weight or ``None`` on a cycle."""
    total = 0
    seen = set()
    while v is not source:
        if v in seen:
            return None
        seen.add(v)
        e = tree[v]
        total += e.weight
        v = graph.opposite(v, e)
    return total
