"""Micro-benchmark for the shortest-path engine.

Run this module as a script to time :class:`~sptree.engine.ShortestPathEngine`
against the lazy-deletion reference on random graphs.

Example:
```bash
python -m sptree.bench --trials 5 --sizes 1000,5000 2000,10000 --out-csv out.csv
```
"""

from __future__ import annotations

import argparse
import csv
import statistics
import time
from dataclasses import dataclass
from pathlib import Path
from typing import Dict, List, Optional, Tuple

import numpy as np

from .engine import ShortestPathEngine
from .generator import generate_graph
from .graph_numpy import distance_vector
from .reference import dijkstra_reference


@dataclass
class BenchResult:
    """Result of a single benchmarking run."""

    n: int
    m: int
    graph_type: str
    engine_ms: float
    reference_ms: float
    counters: Dict[str, int]
    max_abs_err: float


def run_once(n: int, m: int, graph_type: str = "erdos_renyi", seed: int = 0) -> BenchResult:
    """Run the engine once and compare against the reference.

    Args:
        n: Number of vertices.
        m: Number of edges.
        graph_type: Generator family.
        seed: Seed for the random graph generator.

    Returns:
        Timing information and the maximum absolute distance difference.
    """
    gen = generate_graph(n=n, m=m, graph_type=graph_type, seed=seed)  # type: ignore[arg-type]
    G = gen.to_graph()
    s = G.vertex(gen.source)
    engine = ShortestPathEngine()

    t0 = time.perf_counter()
    res = engine.search(G, s)
    t1 = time.perf_counter()
    ref = dijkstra_reference(G, s)
    t2 = time.perf_counter()

    vs = list(G.vertices())
    a = distance_vector(vs, res.distances)
    b = distance_vector(vs, ref)
    finite = np.isfinite(a) & np.isfinite(b)
    if not np.array_equal(np.isfinite(a), np.isfinite(b)):
        max_err = float("inf")
    else:
        max_err = float(np.max(np.abs(a[finite] - b[finite]), initial=0.0))

    return BenchResult(
        n=G.vertex_count(),
        m=G.edge_count(),
        graph_type=graph_type,
        engine_ms=(t1 - t0) * 1000.0,
        reference_ms=(t2 - t1) * 1000.0,
        counters=dict(res.counters),
        max_abs_err=max_err,
    )


def _p95(xs: List[float]) -> float:
    if len(xs) < 2:
        return xs[0]
    return statistics.quantiles(xs, n=100, method="inclusive")[94]


def main(argv: Optional[List[str]] = None) -> int:
    """Run benchmarking trials and optionally record results.

    Args:
        argv: Optional argument list for testing.
    """
    parser = argparse.ArgumentParser(description=__doc__, formatter_class=argparse.RawTextHelpFormatter)
    parser.add_argument("--trials", type=int, default=1, help="Number of trials per configuration")
    parser.add_argument(
        "--sizes",
        nargs="+",
        default=["100,400", "1000,4000"],
        help="Size pairs as n,m (e.g. 1000,5000). Defaults to a small demo.",
    )
    parser.add_argument(
        "--graph-type",
        choices=["erdos_renyi", "dag", "grid"],
        default="erdos_renyi",
    )
    parser.add_argument("--seed-base", type=int, default=0, help="Base seed for random graphs")
    parser.add_argument("--out-csv", type=Path, help="Optional path to write per-trial CSV data")
    args = parser.parse_args(argv)

    sizes: List[Tuple[int, int]] = []
    for spec in args.sizes:
        try:
            n_str, m_str = spec.split(",")
            sizes.append((int(n_str), int(m_str)))
        except ValueError:
            parser.error(f"invalid size specification '{spec}'")

    rows: List[List[object]] = []
    print(
        f"{'n':>7} {'m':>8} {'settled':>8} {'relaxed':>9} {'dec_keys':>9}"
        f" {'eng_med':>9} {'eng_p95':>9} {'ref_med':>9} {'ref_p95':>9} {'max_err':>8}"
    )
    for n, m in sizes:
        results = [
            run_once(n, m, graph_type=args.graph_type, seed=args.seed_base + trial)
            for trial in range(args.trials)
        ]
        for trial, r in enumerate(results):
            rows.append(
                [
                    r.n,
                    r.m,
                    r.graph_type,
                    trial,
                    f"{r.engine_ms:.6f}",
                    f"{r.reference_ms:.6f}",
                    r.counters["settled"],
                    r.counters["edges_relaxed"],
                    r.counters["decrease_keys"],
                    r.max_abs_err,
                ]
            )
        e_times = [r.engine_ms for r in results]
        r_times = [r.reference_ms for r in results]
        last = results[-1]
        print(
            f"{last.n:7d} {last.m:8d} {last.counters['settled']:8d}"
            f" {last.counters['edges_relaxed']:9d} {last.counters['decrease_keys']:9d}"
            f" {statistics.median(e_times):9.2f} {_p95(e_times):9.2f}"
            f" {statistics.median(r_times):9.2f} {_p95(r_times):9.2f}"
            f" {max(r.max_abs_err for r in results):8.1f}"
        )

    if args.out_csv:
        with args.out_csv.open("w", newline="") as fh:
            writer = csv.writer(fh)
            writer.writerow(
                [
                    "n",
                    "m",
                    "graph_type",
                    "trial",
                    "engine_ms",
                    "reference_ms",
                    "settled",
                    "edges_relaxed",
                    "decrease_keys",
                    "max_abs_err",
                ]
            )
            writer.writerows(rows)
    return 0


if __name__ == "__main__":  # pragma: no cover - manual invocation
    raise SystemExit(main())
