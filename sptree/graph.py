"""Directed weighted graph used by the shortest-path engine."""

from __future__ import annotations

from typing import Any, Dict, Hashable, Iterable, Iterator, List, Optional, Protocol, Tuple

from .exceptions import GraphFormatError, InputError, NegativeWeightError, VertexNotFoundError

Label = Hashable
EdgeSpec = Tuple[Label, Label, int]


class Vertex:
    """Vertex token owned by a graph.

    Vertices compare and hash by identity; ``element`` is the caller's label.
    """

    __slots__ = ("_element",)

    def __init__(self, element: Label) -> None:
        self._element = element

    @property
    def element(self) -> Label:
        """Label stored at this vertex."""
        return self._element

    def __repr__(self) -> str:
        return f"Vertex({self._element!r})"


class Edge:
    """Directed edge token carrying a non-negative integer weight."""

    __slots__ = ("_origin", "_destination", "_weight")

    def __init__(self, origin: Vertex, destination: Vertex, weight: int) -> None:
        self._origin = origin
        self._destination = destination
        self._weight = weight

    @property
    def origin(self) -> Vertex:
        return self._origin

    @property
    def destination(self) -> Vertex:
        return self._destination

    @property
    def weight(self) -> int:
        return self._weight

    def endpoints(self) -> Tuple[Vertex, Vertex]:
        """Return ``(origin, destination)``."""
        return self._origin, self._destination

    def opposite(self, v: Vertex) -> Vertex:
        """Return the endpoint of this edge that is not ``v``.

        Raises:
            VertexNotFoundError: If ``v`` is not incident to the edge.
        """
        if v is self._origin:
            return self._destination
        if v is self._destination:
            return self._origin
        raise VertexNotFoundError(f"{v!r} is not incident to {self!r}")

    def __repr__(self) -> str:
        return (
            f"Edge({self._origin.element!r} -> {self._destination.element!r}, "
            f"w={self._weight})"
        )


class Graph(Protocol):
    """Read-only graph interface consumed by the engine."""

    def vertices(self) -> Iterable[Vertex]:
        """Iterate over all vertices."""
        ...

    def outgoing_edges(self, v: Vertex) -> Iterable[Edge]:
        """Iterate over edges leaving ``v``."""
        ...

    def incoming_edges(self, v: Vertex) -> Iterable[Edge]:
        """Iterate over edges entering ``v``."""
        ...

    def opposite(self, v: Vertex, e: Edge) -> Vertex:
        """Return the endpoint of ``e`` opposite to ``v``."""
        ...

    def weight(self, e: Edge) -> int:
        """Return the integer weight of ``e``."""
        ...


def check_weight(weight: Any, u: Any, v: Any) -> int:
    """Validate an edge weight and return it.

    Raises:
        GraphFormatError: If ``weight`` is not an integer.
        NegativeWeightError: If ``weight`` is negative.
    """
    if isinstance(weight, bool) or not isinstance(weight, int):
        raise GraphFormatError(f"non-integer weight {weight!r} on edge ({u!r}, {v!r})")
    if weight < 0:
        raise NegativeWeightError(f"negative weight {weight} on edge ({u!r}, {v!r})")
    return weight


class DirectedGraph:
    """Directed graph stored as per-vertex outgoing and incoming edge lists.

    Labels are unique. Parallel edges and self-loops are allowed. Edges are
    enumerated in insertion order, which makes tree reconstruction
    deterministic for a given construction sequence.

    Negative weights are not supported: attempting to insert an edge with
    ``weight < 0`` raises :class:`~sptree.exceptions.NegativeWeightError`
    that cites the offending edge.
    """

    def __init__(self) -> None:
        self._outgoing: Dict[Vertex, List[Edge]] = {}
        self._incoming: Dict[Vertex, List[Edge]] = {}
        self._by_label: Dict[Label, Vertex] = {}
        self._edge_count = 0

    def _validate(self, v: Vertex) -> None:
        if not isinstance(v, Vertex) or v not in self._outgoing:
            raise VertexNotFoundError(f"{v!r} does not belong to this graph")

    # ---------- construction ---------------------------------------------

    def insert_vertex(self, element: Label) -> Vertex:
        """Add a vertex labelled ``element`` and return it.

        Raises:
            InputError: If a vertex with the same label exists.
        """
        if element in self._by_label:
            raise InputError(f"duplicate vertex label {element!r}")
        v = Vertex(element)
        self._outgoing[v] = []
        self._incoming[v] = []
        self._by_label[element] = v
        return v

    def insert_edge(self, u: Vertex, v: Vertex, weight: int) -> Edge:
        """Add a directed edge from ``u`` to ``v`` and return it.

        Args:
            u: Tail vertex.
            v: Head vertex.
            weight: Non-negative integer weight.

        Raises:
            VertexNotFoundError: If ``u`` or ``v`` are not in the graph.
            GraphFormatError: If ``weight`` is not an integer.
            NegativeWeightError: If ``weight`` is negative.

        Examples:
            ```python
            >>> g = DirectedGraph()
            >>> a, b = g.insert_vertex("a"), g.insert_vertex("b")
            >>> g.insert_edge(a, b, 3)
            Edge('a' -> 'b', w=3)
            ```
        """
        self._validate(u)
        self._validate(v)
        w = check_weight(weight, u.element, v.element)
        e = Edge(u, v, w)
        self._outgoing[u].append(e)
        self._incoming[v].append(e)
        self._edge_count += 1
        return e

    def ensure_vertex(self, element: Label) -> Vertex:
        """Return the vertex labelled ``element``, inserting it if needed."""
        v = self._by_label.get(element)
        if v is None:
            v = self.insert_vertex(element)
        return v

    @classmethod
    def from_edges(cls, edges: Iterable[EdgeSpec], vertices: Iterable[Label] = ()) -> "DirectedGraph":
        """Create a graph from labelled edges.

        Args:
            edges: Iterable of ``(u_label, v_label, weight)`` tuples. Unknown
                labels create vertices on first use.
            vertices: Extra labels, inserted first, e.g. isolated vertices.

        Returns:
            A graph populated with the provided vertices and edges.
        """
        g = cls()
        for label in vertices:
            g.ensure_vertex(label)
        for u, v, w in edges:
            g.insert_edge(g.ensure_vertex(u), g.ensure_vertex(v), w)
        return g

    # ---------- queries --------------------------------------------------

    def vertex(self, element: Label) -> Vertex:
        """Return the vertex labelled ``element``.

        Raises:
            VertexNotFoundError: If no such vertex exists.
        """
        try:
            return self._by_label[element]
        except KeyError:
            raise VertexNotFoundError(f"no vertex labelled {element!r}") from None

    def __contains__(self, v: object) -> bool:
        return isinstance(v, Vertex) and v in self._outgoing

    def vertex_count(self) -> int:
        return len(self._outgoing)

    def edge_count(self) -> int:
        return self._edge_count

    def vertices(self) -> Iterator[Vertex]:
        return iter(list(self._outgoing))

    def edges(self) -> Iterator[Edge]:
        """Iterate over all edges grouped by tail vertex."""
        for lst in self._outgoing.values():
            yield from lst

    def outgoing_edges(self, v: Vertex) -> Iterator[Edge]:
        self._validate(v)
        return iter(self._outgoing[v])

    def incoming_edges(self, v: Vertex) -> Iterator[Edge]:
        self._validate(v)
        return iter(self._incoming[v])

    def out_degree(self, v: Vertex) -> int:
        self._validate(v)
        return len(self._outgoing[v])

    def in_degree(self, v: Vertex) -> int:
        self._validate(v)
        return len(self._incoming[v])

    def get_edge(self, u: Vertex, v: Vertex) -> Optional[Edge]:
        """Return the first edge from ``u`` to ``v`` or ``None``."""
        self._validate(u)
        self._validate(v)
        for e in self._outgoing[u]:
            if e.destination is v:
                return e
        return None

    def opposite(self, v: Vertex, e: Edge) -> Vertex:
        self._validate(v)
        return e.opposite(v)

    def weight(self, e: Edge) -> int:
        return e.weight

    def __repr__(self) -> str:
        return f"DirectedGraph(n={self.vertex_count()}, m={self.edge_count()})"


__all__ = ["Vertex", "Edge", "Graph", "DirectedGraph", "check_weight", "Label", "EdgeSpec"]
