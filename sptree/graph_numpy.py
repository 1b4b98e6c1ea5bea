"""NumPy interop: weight matrices in, distance vectors out."""

from __future__ import annotations

from typing import Iterable, Mapping, Optional, Sequence

import numpy as np
import numpy.typing as npt

from .exceptions import GraphFormatError, InputError
from .graph import DirectedGraph, Label, Vertex


def from_weight_matrix(
    matrix: npt.ArrayLike,
    labels: Optional[Sequence[Label]] = None,
    no_edge: int = -1,
) -> DirectedGraph:
    """Build a graph from a square integer weight matrix.

    Entry ``matrix[i, j]`` is the weight of edge ``i -> j``; entries equal to
    ``no_edge`` mean "no edge". Any other negative entry is rejected by
    :meth:`~sptree.graph.DirectedGraph.insert_edge` with
    :class:`~sptree.exceptions.NegativeWeightError`.

    Args:
        matrix: Square array of integers.
        labels: Vertex labels; defaults to ``0 .. n-1``.
        no_edge: Marker for absent edges.

    Raises:
        InputError: If the matrix is not square or ``labels`` has the wrong
            length.
        GraphFormatError: If the matrix does not hold integers.

    Examples:
        ```python
        >>> g = from_weight_matrix([[-1, 2], [-1, -1]])
        >>> g.edge_count()
        1
        ```
    """
    arr = np.asarray(matrix)
    if arr.ndim != 2 or arr.shape[0] != arr.shape[1]:
        raise InputError(f"weight matrix must be square, got shape {arr.shape}")
    if arr.size and not np.issubdtype(arr.dtype, np.integer):
        raise GraphFormatError(f"weight matrix must hold integers, got dtype {arr.dtype}")
    n = int(arr.shape[0])
    if labels is None:
        labels = list(range(n))
    elif len(labels) != n:
        raise InputError(f"expected {n} labels, got {len(labels)}")

    g = DirectedGraph()
    vs = [g.insert_vertex(label) for label in labels]
    rows, cols = np.nonzero(arr != no_edge)
    for i, j in zip(rows.tolist(), cols.tolist()):
        g.insert_edge(vs[i], vs[j], int(arr[i, j]))
    return g


def distance_vector(
    vertices: Iterable[Vertex], distances: Mapping[Vertex, int]
) -> npt.NDArray[np.float64]:
    """Return distances of ``vertices`` as a ``float64`` array, ``inf`` if unreachable."""
    return np.array([distances.get(v, np.inf) for v in vertices], dtype=np.float64)


__all__ = ["from_weight_matrix", "distance_vector"]
