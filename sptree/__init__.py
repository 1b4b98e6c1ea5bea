"""Public package exports for :mod:`sptree`."""

from __future__ import annotations

from .engine import EngineConfig, SearchResult, ShortestPathEngine
from .exceptions import (
    AlgorithmError,
    ConfigError,
    GraphFormatError,
    InputError,
    NegativeWeightError,
    SPTreeError,
    VertexNotFoundError,
)
from .generator import GeneratedGraph, generate_graph
from .graph import DirectedGraph, Edge, Graph, Vertex
from .graph_numpy import distance_vector, from_weight_matrix
from .io import read_graph, write_graph
from .logger import Logger, NoopLogger, StdLogger
from .path import path_edges, path_vertices, path_weight
from .pqueue import HeapAdaptablePriorityQueue, Locator
from .reference import dijkstra_reference

__version__ = "0.1.0"

__all__ = [
    "ShortestPathEngine",
    "EngineConfig",
    "SearchResult",
    "Graph",
    "DirectedGraph",
    "Vertex",
    "Edge",
    "HeapAdaptablePriorityQueue",
    "Locator",
    "path_edges",
    "path_vertices",
    "path_weight",
    "dijkstra_reference",
    "generate_graph",
    "GeneratedGraph",
    "from_weight_matrix",
    "distance_vector",
    "read_graph",
    "write_graph",
    "Logger",
    "NoopLogger",
    "StdLogger",
    "SPTreeError",
    "InputError",
    "GraphFormatError",
    "NegativeWeightError",
    "VertexNotFoundError",
    "ConfigError",
    "AlgorithmError",
]
