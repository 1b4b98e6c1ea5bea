"""Dijkstra shortest-path engine over an adaptable priority queue."""

from __future__ import annotations

from collections import deque
from dataclasses import dataclass, field
from typing import Deque, Dict, List, Mapping, MutableMapping, Optional, Set

from .exceptions import AlgorithmError, VertexNotFoundError
from .graph import DirectedGraph, Edge, Graph, Vertex, check_weight
from .logger import Logger, NoopLogger
from .path import path_edges
from .pqueue import HeapAdaptablePriorityQueue, Locator


def _label(v: object) -> object:
    return getattr(v, "element", v)


@dataclass(frozen=True)
class EngineConfig:
    """Configuration knobs for the engine.

    Attributes:
        validate_weights: If ``True``, scan every edge before a search and
            reject negative or non-integer weights. The scan costs O(E) per
            call, so it is skipped for :class:`~sptree.graph.DirectedGraph`,
            which checks weights on insert. Disable it only for other graphs
            already known to be valid.
        trace_settles: If ``True``, emit a ``debug`` event for every settled
            vertex.
    """

    validate_weights: bool = True
    trace_settles: bool = False


@dataclass(frozen=True)
class SearchResult:
    """Settled distances and counters produced by one search.

    ``distances`` iterates in settlement order. ``stopped_early`` is ``True``
    when the loop ended because the destination was settled.
    """

    distances: Dict[Vertex, int]
    counters: Dict[str, int] = field(default_factory=dict)
    stopped_early: bool = False


class ShortestPathEngine:
    """Single-source shortest paths on graphs with non-negative integer weights.

    The engine holds only configuration and a logger. Every call owns its
    distance map, locator map, settled map and queue, so one engine may serve
    many graphs.
    """

    def __init__(self, config: Optional[EngineConfig] = None, logger: Logger | None = None) -> None:
        self.cfg = config or EngineConfig()
        self.logger = logger or NoopLogger()

    # ---------- utilities -------------------------------------------------

    def _check_weights(self, graph: Graph) -> None:
        for u in graph.vertices():
            for e in graph.outgoing_edges(u):
                v = graph.opposite(u, e)
                check_weight(graph.weight(e), _label(u), _label(v))

    @staticmethod
    def _initial_distances(graph: Graph, source: Vertex) -> Dict[Vertex, Optional[int]]:
        # None marks a vertex that no path has reached yet.
        d: Dict[Vertex, Optional[int]] = {v: None for v in graph.vertices()}
        if source not in d:
            raise VertexNotFoundError(f"source {source!r} is not a vertex of the graph")
        d[source] = 0
        return d

    # ---------- core loop -------------------------------------------------

    def search(self, graph: Graph, source: Vertex, destination: Optional[Vertex] = None) -> SearchResult:
        """Run Dijkstra's algorithm from ``source``.

        Args:
            graph: Graph to search; it is only read.
            source: Start vertex.
            destination: Optional vertex at which to stop. The search ends as
                soon as this vertex is extracted from the queue.

        Returns:
            Settled distances in settlement order, plus run counters.

        Raises:
            VertexNotFoundError: If ``source`` or ``destination`` is not in
                the graph.
            NegativeWeightError: If weight validation is enabled and an edge
                has a negative weight. :class:`~sptree.graph.DirectedGraph`
                inputs are not rescanned.
        """
        d = self._initial_distances(graph, source)
        if destination is not None and destination not in d:
            raise VertexNotFoundError(f"destination {destination!r} is not a vertex of the graph")
        if self.cfg.validate_weights and not isinstance(graph, DirectedGraph):
            self._check_weights(graph)

        counters = {"settled": 0, "edges_relaxed": 0, "inserts": 0, "decrease_keys": 0}
        cloud: Dict[Vertex, int] = {}
        pq: HeapAdaptablePriorityQueue[Vertex] = HeapAdaptablePriorityQueue()
        tokens: MutableMapping[Vertex, Locator[Vertex]] = {source: pq.insert(0, source)}
        counters["inserts"] += 1
        stopped_early = False

        while not pq.is_empty():
            key, u = pq.remove_min()
            cloud[u] = key  # final distance of u
            del tokens[u]
            counters["settled"] += 1
            if self.cfg.trace_settles:
                self.logger.debug("settle", vertex=_label(u), distance=key)
            if destination is not None and u is destination:
                stopped_early = True
                break

            du = d[u]
            for e in graph.outgoing_edges(u):
                v = graph.opposite(u, e)
                if v in cloud:
                    continue
                counters["edges_relaxed"] += 1
                cand = du + graph.weight(e)
                dv = d[v]
                if dv is None:
                    d[v] = cand
                    tokens[v] = pq.insert(cand, v)
                    counters["inserts"] += 1
                elif cand < dv:
                    d[v] = cand
                    pq.decrease_key(tokens[v], cand)
                    counters["decrease_keys"] += 1

        self.logger.info(
            "search",
            source=_label(source),
            target=_label(destination) if destination is not None else None,
            stopped_early=stopped_early,
            **counters,
        )
        return SearchResult(distances=cloud, counters=counters, stopped_early=stopped_early)

    # ---------- public API ------------------------------------------------

    def distances_from_source(self, graph: Graph, source: Vertex) -> Dict[Vertex, int]:
        """Return exact distances from ``source`` to every reachable vertex.

        Unreachable vertices are absent from the result. The mapping iterates
        in settlement order.
        """
        return self.search(graph, source).distances

    def distance_to_target(self, graph: Graph, source: Vertex, destination: Vertex) -> Optional[int]:
        """Return the shortest distance from ``source`` to ``destination``.

        The search stops as soon as ``destination`` is settled.

        Returns:
            The distance, or ``None`` if ``destination`` is unreachable.
        """
        res = self.search(graph, source, destination)
        dist = res.distances.get(destination)
        if dist is None:
            self.logger.warning(
                "unreachable",
                source=_label(source),
                target=_label(destination),
            )
        return dist

    @staticmethod
    def _parent_edge(
        graph: Graph,
        v: Vertex,
        dv: int,
        distances: Mapping[Vertex, int],
        attached: Set[Vertex],
    ) -> Optional[Edge]:
        for e in graph.incoming_edges(v):
            u = graph.opposite(v, e)
            if u not in attached:
                continue
            du = distances.get(u)
            if du is not None and du + graph.weight(e) == dv:
                return e
        return None

    def reconstruct_tree(
        self, graph: Graph, source: Vertex, distances: Mapping[Vertex, int]
    ) -> Dict[Vertex, Edge]:
        """Return the shortest-path tree for already finalised ``distances``.

        Only the contents of ``distances`` matter, not its iteration order.
        Vertices are attached one distance level at a time, lowest first,
        starting from ``source``. Each vertex ``v`` maps to the first edge
        ``(u, v)`` of ``graph.incoming_edges(v)`` whose tail ``u`` is already
        attached and satisfies ``distances[v] == distances[u] + w(u, v)``.
        Inside a level, vertices reached only through zero-weight edges are
        attached breadth-first from the ones attached before them, so the
        tree never contains a cycle.

        Raises:
            AlgorithmError: If some vertex can never be attached, i.e. the
                distances are inconsistent with the graph.
        """
        levels: Dict[int, List[Vertex]] = {}
        for v, dv in distances.items():
            if v is not source:
                levels.setdefault(dv, []).append(v)

        tree: Dict[Vertex, Edge] = {}
        attached: Set[Vertex] = {source}
        for dv in sorted(levels):
            ready: Deque[Vertex] = deque()
            waiting: Dict[Vertex, None] = {}
            for v in levels[dv]:
                e = self._parent_edge(graph, v, dv, distances, attached)
                if e is None:
                    waiting[v] = None
                    continue
                tree[v] = e
                attached.add(v)
                ready.append(v)

            # Zero-weight edges out of this level may attach the rest.
            while ready and waiting:
                u = ready.popleft()
                for e in graph.outgoing_edges(u):
                    v = graph.opposite(u, e)
                    if v not in waiting:
                        continue
                    pe = self._parent_edge(graph, v, dv, distances, attached)
                    if pe is None:
                        continue
                    del waiting[v]
                    tree[v] = pe
                    attached.add(v)
                    ready.append(v)

            if waiting:
                v = next(iter(waiting))
                raise AlgorithmError(
                    f"no incoming edge of {v!r} is consistent with distance {dv}"
                )
        return tree

    def shortest_path(self, graph: Graph, source: Vertex, destination: Vertex) -> List[Edge]:
        """Return the edges of one shortest path from ``source`` to ``destination``.

        Raises:
            VertexNotFoundError: If ``destination`` is unreachable.
        """
        distances = self.search(graph, source, destination).distances
        tree = self.reconstruct_tree(graph, source, distances)
        return path_edges(graph, source, destination, tree)


__all__ = ["EngineConfig", "SearchResult", "ShortestPathEngine"]
