"""Export utilities for shortest-path trees."""

from __future__ import annotations

import json
from typing import Any, Dict, List, Mapping
from xml.sax.saxutils import quoteattr

from .graph import Edge, Vertex


def tree_as_dict(
    source: Vertex,
    distances: Mapping[Vertex, int],
    tree: Mapping[Vertex, Edge],
) -> Dict[str, Any]:
    """Return a JSON-ready description of a shortest-path tree.

    Args:
        source: Root of the tree.
        distances: Distances of the reachable vertices.
        tree: Parent edge of each non-source vertex.

    Returns:
        ``{"source", "nodes": [{"id", "distance"}], "edges": [{"source",
        "target", "weight"}]}`` with labels converted to strings.
    """
    return {
        "source": str(source.element),
        "nodes": [{"id": str(v.element), "distance": d} for v, d in distances.items()],
        "edges": [
            {
                "source": str(e.origin.element),
                "target": str(e.destination.element),
                "weight": e.weight,
            }
            for e in tree.values()
        ],
    }


def export_tree_json(
    source: Vertex,
    distances: Mapping[Vertex, int],
    tree: Mapping[Vertex, Edge],
) -> str:
    """Return a JSON string with reachable nodes and tree edges."""
    return json.dumps(tree_as_dict(source, distances, tree))


def export_tree_graphml(
    source: Vertex,
    distances: Mapping[Vertex, int],
    tree: Mapping[Vertex, Edge],
) -> str:
    """Return a GraphML string for the tree, node distances as ``<data>``."""
    lines: List[str] = []
    lines.append('<?xml version="1.0" encoding="UTF-8"?>')
    lines.append('<graphml xmlns="http://graphml.graphdrawing.org/xmlns">')
    lines.append('  <key id="distance" for="node" attr.name="distance" attr.type="long"/>')
    lines.append('  <key id="weight" for="edge" attr.name="weight" attr.type="long"/>')
    lines.append(f"  <graph id={quoteattr(str(source.element))} edgedefault=\"directed\">")
    for v, d in distances.items():
        lines.append(f"    <node id={quoteattr(str(v.element))}>")
        lines.append(f'      <data key="distance">{d}</data>')
        lines.append("    </node>")
    for e in tree.values():
        lines.append(
            f"    <edge source={quoteattr(str(e.origin.element))} "
            f"target={quoteattr(str(e.destination.element))}>"
        )
        lines.append(f'      <data key="weight">{e.weight}</data>')
        lines.append("    </edge>")
    lines.append("  </graph>")
    lines.append("</graphml>")
    return "\n".join(lines)


__all__ = ["tree_as_dict", "export_tree_json", "export_tree_graphml"]
