"""Custom exception types used across :mod:`sptree`."""

from __future__ import annotations


class SPTreeError(Exception):
    """Base class for all package-specific errors."""


class InputError(SPTreeError, ValueError):
    """Raised for invalid user input such as malformed edges."""


class GraphFormatError(InputError):
    """Raised when parsing a graph file fails or a weight is not an integer."""


class NegativeWeightError(GraphFormatError):
    """Raised when an edge carries a negative weight."""


class VertexNotFoundError(InputError):
    """Raised when a vertex or label does not belong to the graph."""


class ConfigError(SPTreeError, ValueError):
    """Raised for invalid configuration options."""


class AlgorithmError(SPTreeError, RuntimeError):
    """Raised when distances or trees are inconsistent with the graph."""


__all__ = [
    "SPTreeError",
    "InputError",
    "GraphFormatError",
    "NegativeWeightError",
    "VertexNotFoundError",
    "ConfigError",
    "AlgorithmError",
]
