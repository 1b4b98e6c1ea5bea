"""
Unit tests for DirectedGraph.
"""

import pytest

from sptree.exceptions import GraphFormatError, InputError, NegativeWeightError, VertexNotFoundError
from sptree.graph import DirectedGraph


def test_add_vertices_and_edges():
    g = DirectedGraph()
    a = g.insert_vertex("A")
    b = g.insert_vertex("B")
    c = g.insert_vertex("C")

    ab = g.insert_edge(a, b, 1)
    ac = g.insert_edge(a, c, 2)
    bc = g.insert_edge(b, c, 3)

    assert list(g.vertices()) == [a, b, c]
    assert g.vertex_count() == 3
    assert g.edge_count() == 3
    assert list(g.outgoing_edges(a)) == [ab, ac]
    assert list(g.incoming_edges(c)) == [ac, bc]
    assert g.out_degree(c) == 0
    assert g.in_degree(c) == 2
    assert g.opposite(a, ab) is b
    assert g.opposite(b, ab) is a
    assert g.weight(bc) == 3
    assert g.get_edge(a, c) is ac
    assert g.get_edge(c, a) is None


def test_vertices_compare_by_identity():
    g1 = DirectedGraph.from_edges([("A", "B", 1)])
    g2 = DirectedGraph.from_edges([("A", "B", 1)])

    assert g1.vertex("A") is g1.vertex("A")
    assert g1.vertex("A") != g2.vertex("A")
    assert g2.vertex("A") not in g1


def test_parallel_edges_and_self_loops():
    g = DirectedGraph.from_edges([("A", "B", 3), ("A", "B", 1), ("A", "A", 0)])
    a = g.vertex("A")

    assert [e.weight for e in g.outgoing_edges(a)] == [3, 1, 0]
    assert g.get_edge(a, g.vertex("B")).weight == 3


def test_from_edges_keeps_isolated_vertices():
    g = DirectedGraph.from_edges([("A", "B", 1)], vertices=["Z"])

    assert [v.element for v in g.vertices()] == ["Z", "A", "B"]


def test_duplicate_label_rejected():
    g = DirectedGraph()
    g.insert_vertex("A")

    with pytest.raises(InputError):
        g.insert_vertex("A")


def test_negative_weight_rejected():
    g = DirectedGraph()
    a, b = g.insert_vertex("A"), g.insert_vertex("B")

    with pytest.raises(NegativeWeightError, match=r"negative weight -2 on edge \('A', 'B'\)"):
        g.insert_edge(a, b, -2)
    assert g.edge_count() == 0


@pytest.mark.parametrize("bad", [1.5, "3", None, True])
def test_non_integer_weight_rejected(bad):
    g = DirectedGraph()
    a, b = g.insert_vertex("A"), g.insert_vertex("B")

    with pytest.raises(GraphFormatError):
        g.insert_edge(a, b, bad)


def test_foreign_vertex_rejected():
    g = DirectedGraph.from_edges([("A", "B", 1)])
    other = DirectedGraph.from_edges([("A", "B", 1)])

    with pytest.raises(VertexNotFoundError):
        g.insert_edge(g.vertex("A"), other.vertex("B"), 1)
    with pytest.raises(VertexNotFoundError):
        list(g.outgoing_edges(other.vertex("A")))


def test_unknown_label_raises():
    g = DirectedGraph()

    with pytest.raises(VertexNotFoundError):
        g.vertex("nope")


def test_opposite_requires_incident_vertex():
    g = DirectedGraph.from_edges([("A", "B", 1), ("C", "C", 0)])
    ab = g.get_edge(g.vertex("A"), g.vertex("B"))

    with pytest.raises(VertexNotFoundError):
        g.opposite(g.vertex("C"), ab)
