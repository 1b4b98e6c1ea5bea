"""Utilities for walking shortest-path trees."""

from __future__ import annotations

from typing import Iterable, List, Mapping

from .exceptions import AlgorithmError, VertexNotFoundError
from .graph import Edge, Graph, Vertex


def path_edges(
    graph: Graph,
    source: Vertex,
    target: Vertex,
    tree: Mapping[Vertex, Edge],
) -> List[Edge]:
    """Return the tree edges leading from ``source`` to ``target``.

    Args:
        graph: Graph the tree was built on.
        source: Root of the tree.
        target: Vertex to reach.
        tree: Mapping from each non-source vertex to its parent edge, as
            returned by :meth:`~sptree.engine.ShortestPathEngine.reconstruct_tree`.

    Returns:
        Edges in travel order. Empty when ``target is source``.

    Raises:
        VertexNotFoundError: If ``target`` is not in the tree.
        AlgorithmError: If the parent edges loop without reaching ``source``.
    """
    if target is source:
        return []
    if target not in tree:
        raise VertexNotFoundError(f"{target!r} is not reachable from {source!r}")

    # Walk backwards from target to source
    chain: List[Edge] = []
    cur = target
    seen = {cur}
    while cur is not source:
        e = tree.get(cur)
        if e is None:
            raise AlgorithmError(f"tree has no parent edge for {cur!r}")
        chain.append(e)
        cur = graph.opposite(cur, e)
        if cur in seen:
            raise AlgorithmError(f"cycle in shortest-path tree at {cur!r}")
        seen.add(cur)
    chain.reverse()
    return chain


def path_vertices(graph: Graph, source: Vertex, edges: Iterable[Edge]) -> List[Vertex]:
    """Return the vertex sequence visited by ``edges`` starting at ``source``."""
    out = [source]
    cur = source
    for e in edges:
        cur = graph.opposite(cur, e)
        out.append(cur)
    return out


def path_weight(graph: Graph, edges: Iterable[Edge]) -> int:
    """Return the summed weight of ``edges``."""
    return sum(graph.weight(e) for e in edges)


__all__ = ["path_edges", "path_vertices", "path_weight"]
