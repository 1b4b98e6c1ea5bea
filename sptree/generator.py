"""
Seeded directed weighted graph generator for tests, benchmarks and the CLI.

SUPPORTED GRAPH TYPES
---------------------
1. erdos_renyi
   Random directed graphs with uniformly sampled edges.
2. dag
   Directed acyclic graphs (edges only from lower- to higher-index vertices).
3. grid
   2D grid graphs with edges between neighbouring vertices in both directions.

WEIGHT DISTRIBUTIONS
--------------------
- uniform: evenly distributed integer weights in ``[w_min, w_max]``
- small_int: weights squeezed into ``[w_min, w_min + 10]`` (many ties)
- exp: many small weights, occasional large ones

All weights are non-negative integers, so every generated graph is a valid
input for the engine. Vertex labels are the integers ``0 .. n-1``.
"""

from __future__ import annotations

import math
import random
from dataclasses import dataclass, field
from typing import Any, Dict, List, Literal, Optional, Set, Tuple

from .exceptions import ConfigError
from .graph import DirectedGraph

EdgeList = List[Tuple[int, int, int]]

WeightDist = Literal["uniform", "small_int", "exp"]
GraphType = Literal["erdos_renyi", "dag", "grid"]


@dataclass(frozen=True)
class GeneratedGraph:
    """Edge list of a generated graph plus the parameters that produced it."""

    n: int
    edges: EdgeList
    source: int = 0
    metadata: Dict[str, Any] = field(default_factory=dict)

    @property
    def m(self) -> int:
        return len(self.edges)

    def to_graph(self, labels: str = "int") -> DirectedGraph:
        """Build a :class:`~sptree.graph.DirectedGraph`.

        Args:
            labels: ``"int"`` keeps integer labels, ``"str"`` converts them to
                strings (matching graphs read from files).
        """
        if labels not in ("int", "str"):
            raise ConfigError(f"unknown label kind '{labels}'")
        conv = str if labels == "str" else int
        return DirectedGraph.from_edges(
            ((conv(u), conv(v), w) for u, v, w in self.edges),
            vertices=(conv(i) for i in range(self.n)),
        )


def _sample_weight(rng: random.Random, dist: WeightDist, w_min: int, w_max: int) -> int:
    if dist == "uniform":
        return rng.randint(w_min, w_max)

    if dist == "small_int":
        return rng.randint(w_min, min(w_max, w_min + 10))

    if dist == "exp":
        if w_max == w_min:
            return w_min
        lam = 1.0 / max(1.0, (w_max - w_min) / 4.0)
        return int(w_min + min(w_max - w_min, round(rng.expovariate(lam))))

    raise ConfigError(f"unknown weight distribution '{dist}'")


def generate_graph(
    *,
    n: int,
    m: Optional[int] = None,
    graph_type: GraphType = "erdos_renyi",
    weight_dist: WeightDist = "uniform",
    w_min: int = 1,
    w_max: int = 100,
    seed: Optional[int] = 0,
    source: int = 0,
    allow_self_loops: bool = False,
    backbone: bool = False,
) -> GeneratedGraph:
    """Generate a directed graph with non-negative integer weights.

    Args:
        n: Number of vertices.
        m: Target number of edges. Defaults to ``4 * n`` (capped by the
            number of possible edges). For grids, extra random edges are added
            on top of the grid edges until ``m`` is reached.
        graph_type: Family of graph to build.
        weight_dist: Weight distribution.
        w_min: Smallest weight (``>= 0``).
        w_max: Largest weight.
        seed: Seed for :class:`random.Random`.
        source: Source vertex recorded in the result.
        allow_self_loops: Permit ``u -> u`` edges.
        backbone: Add a chain ``i -> i+1`` first so that every vertex is
            reachable from ``0``.

    Raises:
        ConfigError: If a parameter is out of range.
    """
    if n <= 0:
        raise ConfigError("n must be > 0.")
    if not (0 <= source < n):
        raise ConfigError("source must be in [0, n).")
    if w_min < 0:
        raise ConfigError("w_min must be >= 0.")
    if w_max < w_min:
        raise ConfigError("w_max must be >= w_min.")
    if m is not None and m < 0:
        raise ConfigError("m must be >= 0.")

    rng = random.Random(seed)
    seen: Set[Tuple[int, int]] = set()
    edges: EdgeList = []

    def add_edge(u: int, v: int) -> None:
        if (not allow_self_loops and u == v) or (u, v) in seen:
            return
        seen.add((u, v))
        edges.append((u, v, _sample_weight(rng, weight_dist, w_min, w_max)))

    max_edges = n * n if allow_self_loops else n * (n - 1)

    if backbone:
        for i in range(n - 1):
            add_edge(i, i + 1)

    if graph_type == "erdos_renyi":
        target_m = min(4 * n if m is None else m, max_edges)
        while len(edges) < target_m:
            add_edge(rng.randrange(n), rng.randrange(n))

    elif graph_type == "dag":
        target_m = min(4 * n if m is None else m, n * (n - 1) // 2)
        while len(edges) < target_m:
            u, v = rng.randrange(n), rng.randrange(n)
            if u == v:
                continue
            add_edge(min(u, v), max(u, v))

    elif graph_type == "grid":
        rows = max(1, math.isqrt(n))
        cols = max(1, (n + rows - 1) // rows)
        for r in range(rows):
            for c in range(cols):
                u = r * cols + c
                if u >= n:
                    continue
                right = u + 1
                down = u + cols
                if c + 1 < cols and right < n:
                    add_edge(u, right)
                    add_edge(right, u)
                if down < n:
                    add_edge(u, down)
                    add_edge(down, u)
        if m is not None:
            while len(edges) < min(m, max_edges):
                add_edge(rng.randrange(n), rng.randrange(n))

    else:
        raise ConfigError(f"unknown graph type '{graph_type}'")

    return GeneratedGraph(
        n=n,
        edges=edges,
        source=source,
        metadata={
            "graph_type": graph_type,
            "weight_dist": weight_dist,
            "w_min": w_min,
            "w_max": w_max,
            "seed": seed,
            "backbone": backbone,
        },
    )


__all__ = ["GeneratedGraph", "generate_graph"]
