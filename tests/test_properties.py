"""
Property checks of the engine against brute force, networkx and the reference.
"""

import random

import networkx as nx
import pytest

from conftest import brute_force_distances, random_graph, walk_to_root
from sptree.engine import ShortestPathEngine
from sptree.reference import dijkstra_reference
from sptree.visualize import to_networkx

SEEDS = list(range(25))


@pytest.mark.parametrize("seed", SEEDS)
def test_matches_brute_force(seed):
    g = random_graph(seed, n=6, m=12)
    s = g.vertex(0)

    dist = ShortestPathEngine().distances_from_source(g, s)

    assert dist[s] == 0
    assert dist == brute_force_distances(g, s)


@pytest.mark.parametrize("seed", SEEDS)
def test_matches_networkx(seed):
    g = random_graph(seed, n=30, m=90, w_max=50)
    s = g.vertex(0)

    dist = ShortestPathEngine().distances_from_source(g, s)
    expected = nx.single_source_dijkstra_path_length(to_networkx(g), 0, weight="weight")

    assert {v.element: d for v, d in dist.items()} == expected


@pytest.mark.parametrize("seed", SEEDS)
def test_matches_reference(seed):
    g = random_graph(seed, n=40, m=160)
    s = g.vertex(0)

    assert ShortestPathEngine().distances_from_source(g, s) == dijkstra_reference(g, s)


@pytest.mark.parametrize("seed", SEEDS)
def test_target_distance_matches_full_search(seed):
    g = random_graph(seed, n=15, m=30)
    engine = ShortestPathEngine()
    s = g.vertex(0)
    full = engine.distances_from_source(g, s)

    for t in g.vertices():
        assert engine.distance_to_target(g, s, t) == full.get(t)


@pytest.mark.parametrize("seed", SEEDS)
def test_early_stop_agrees_on_settled_prefix(seed):
    g = random_graph(seed, n=15, m=30)
    engine = ShortestPathEngine()
    s = g.vertex(0)
    full = engine.distances_from_source(g, s)

    for t in full:
        partial = engine.search(g, s, t).distances
        for v, d in partial.items():
            assert full[v] == d


@pytest.mark.parametrize("seed", SEEDS)
def test_tree_walks_back_to_source(seed):
    # Zero weights are frequent at w_max=2, which exercises tie handling.
    g = random_graph(seed, n=12, m=30, w_max=2)
    engine = ShortestPathEngine()
    s = g.vertex(0)
    dist = engine.distances_from_source(g, s)

    tree = engine.reconstruct_tree(g, s, dist)

    assert set(tree) == set(dist) - {s}
    for v, d in dist.items():
        assert walk_to_root(g, s, v, tree) == d


@pytest.mark.parametrize("seed", SEEDS)
def test_tree_ignores_distance_order(seed):
    g = random_graph(seed, n=12, m=30, w_max=2)
    engine = ShortestPathEngine()
    s = g.vertex(0)
    dist = engine.distances_from_source(g, s)
    items = list(dist.items())
    random.Random(seed).shuffle(items)

    for distances in (dijkstra_reference(g, s), dict(items)):
        assert distances == dist
        tree = engine.reconstruct_tree(g, s, distances)

        assert set(tree) == set(dist) - {s}
        for v, d in dist.items():
            assert walk_to_root(g, s, v, tree) == d
