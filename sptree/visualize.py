"""
Render a graph and its shortest-path tree with NetworkX + Matplotlib.

Example usage:

```
sptree --edges graph.csv --source A --plot tree.png
```
"""

from __future__ import annotations

import random
from pathlib import Path
from typing import Dict, List, Mapping, Optional, Tuple

import matplotlib.pyplot as plt
import networkx as nx

from .exceptions import ConfigError
from .graph import DirectedGraph, Edge, Vertex

LAYOUTS = ("spring", "circular", "shell")


def to_networkx(graph: DirectedGraph) -> nx.MultiDiGraph:
    """Return a ``MultiDiGraph`` with vertex labels as nodes and ``weight`` edge data."""
    G = nx.MultiDiGraph()
    for v in graph.vertices():
        G.add_node(v.element)
    for e in graph.edges():
        G.add_edge(e.origin.element, e.destination.element, weight=e.weight)
    return G


def downsample_edges(edges: List[Edge], max_edges: int, seed: int = 0) -> List[Edge]:
    """Randomly sample edges if the graph is too large to draw legibly."""
    if len(edges) <= max_edges:
        return edges
    rng = random.Random(seed)
    return rng.sample(edges, max_edges)


def draw_tree(
    graph: DirectedGraph,
    source: Vertex,
    tree: Mapping[Vertex, Edge],
    out_path: str,
    *,
    layout: str = "spring",
    show_weights: bool = False,
    max_edges: int = 300,
    node_size: int = 300,
    title: Optional[str] = None,
) -> Path:
    """Draw ``graph`` with the tree edges highlighted and save it to ``out_path``.

    Non-tree edges are sampled down to ``max_edges``; tree edges are always
    drawn. The source is red, reached vertices blue, unreached vertices grey.

    Raises:
        ConfigError: If ``layout`` is unknown.
    """
    if layout not in LAYOUTS:
        raise ConfigError(f"unknown layout '{layout}'")

    tree_edges = set(tree.values())
    others = downsample_edges([e for e in graph.edges() if e not in tree_edges], max_edges)

    G = nx.DiGraph()
    for v in graph.vertices():
        G.add_node(v.element)
    for e in others + list(tree.values()):
        G.add_edge(e.origin.element, e.destination.element, weight=e.weight)

    if layout == "spring":
        pos = nx.spring_layout(G, seed=42)
    elif layout == "circular":
        pos = nx.circular_layout(G)
    else:
        pos = nx.shell_layout(G)

    reached = {v.element for v in tree} | {source.element}
    node_colors = [
        "tab:red" if node == source.element else ("tab:blue" if node in reached else "tab:gray")
        for node in G.nodes
    ]

    fig = plt.figure(figsize=(12, 10))
    try:
        nx.draw_networkx_nodes(G, pos, node_color=node_colors, node_size=node_size, alpha=0.9)
        nx.draw_networkx_edges(
            G,
            pos,
            edgelist=[(e.origin.element, e.destination.element) for e in others],
            arrowstyle="->",
            arrowsize=10,
            width=0.8,
            alpha=0.3,
        )
        nx.draw_networkx_edges(
            G,
            pos,
            edgelist=[(e.origin.element, e.destination.element) for e in tree.values()],
            edge_color="tab:red",
            arrowstyle="->",
            arrowsize=14,
            width=2.0,
        )
        nx.draw_networkx_labels(G, pos, font_size=8, font_color="black")

        if show_weights:
            edge_labels: Dict[Tuple[object, object], int] = {
                (e.origin.element, e.destination.element): e.weight for e in others + list(tree.values())
            }
            nx.draw_networkx_edge_labels(G, pos, edge_labels=edge_labels, font_size=7)

        plt.title(title or f"Shortest-path tree from {source.element}", fontsize=14)
        plt.axis("off")
        plt.tight_layout()
        out = Path(out_path)
        fig.savefig(out)
    finally:
        plt.close(fig)
    return out


__all__ = ["LAYOUTS", "to_networkx", "downsample_edges", "draw_tree"]
