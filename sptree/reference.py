"""Reference Dijkstra implementation used in tests and benchmarks."""

from __future__ import annotations

import heapq
from itertools import count
from typing import Dict, List, Set, Tuple

from .exceptions import VertexNotFoundError
from .graph import Graph, Vertex


def dijkstra_reference(graph: Graph, source: Vertex) -> Dict[Vertex, int]:
    """Run the textbook lazy-deletion Dijkstra algorithm.

    Args:
        graph: Input graph with non-negative edge weights.
        source: Source vertex.

    Returns:
        Distances to every reachable vertex.
    """
    if source not in set(graph.vertices()):
        raise VertexNotFoundError(f"source {source!r} is not a vertex of the graph")
    dist: Dict[Vertex, int] = {source: 0}
    # Vertices are not orderable; a counter breaks ties between equal keys.
    tie = count()
    pq: List[Tuple[int, int, Vertex]] = [(0, next(tie), source)]
    seen: Set[Vertex] = set()
    while pq:
        d, _, u = heapq.heappop(pq)
        if u in seen or d != dist[u]:
            continue
        seen.add(u)
        for e in graph.outgoing_edges(u):
            v = graph.opposite(u, e)
            nd = d + graph.weight(e)
            if v not in dist or nd < dist[v]:
                dist[v] = nd
                heapq.heappush(pq, (nd, next(tie), v))
    return dist


__all__ = ["dijkstra_reference"]
