"""
Tests for shortest-path tree export.
"""

import json
import xml.etree.ElementTree as ET

from sptree.engine import ShortestPathEngine
from sptree.export import export_tree_graphml, export_tree_json
from sptree.io import read_graph

NS = "{http://graphml.graphdrawing.org/xmlns}"


def solve(graph, label):
    engine = ShortestPathEngine()
    s = graph.vertex(label)
    dist = engine.distances_from_source(graph, s)
    return s, dist, engine.reconstruct_tree(graph, s, dist)


def test_export_json(sample_graph):
    s, dist, tree = solve(sample_graph, "A")

    data = json.loads(export_tree_json(s, dist, tree))

    assert data["source"] == "A"
    assert data["nodes"] == [
        {"id": "A", "distance": 0},
        {"id": "B", "distance": 1},
        {"id": "C", "distance": 3},
        {"id": "D", "distance": 4},
    ]
    assert {(e["source"], e["target"], e["weight"]) for e in data["edges"]} == {
        ("A", "B", 1),
        ("B", "C", 2),
        ("C", "D", 1),
    }


def test_export_graphml_is_valid_xml(sample_graph):
    s, dist, tree = solve(sample_graph, "A")

    root = ET.fromstring(export_tree_graphml(s, dist, tree))

    nodes = root.findall(f".//{NS}node")
    assert [n.attrib["id"] for n in nodes] == ["A", "B", "C", "D"]
    assert [n.find(f"{NS}data").text for n in nodes] == ["0", "1", "3", "4"]
    assert len(root.findall(f".//{NS}edge")) == 3


def test_exported_graphml_reads_back_as_tree(tmp_path, sample_graph):
    s, dist, tree = solve(sample_graph, "A")
    p = tmp_path / "tree.graphml"
    p.write_text(export_tree_graphml(s, dist, tree), encoding="utf-8")

    g = read_graph(str(p))

    assert g.edge_count() == 3
    assert all(g.in_degree(v) <= 1 for v in g.vertices())
    tree_dist = ShortestPathEngine().distances_from_source(g, g.vertex("A"))
    assert {v.element: d for v, d in tree_dist.items()} == {"A": 0, "B": 1, "C": 3, "D": 4}
