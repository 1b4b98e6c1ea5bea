"""Command-line interface for running the engine."""

from __future__ import annotations

import argparse
import json
import sys
import traceback
from pathlib import Path
from typing import Any, Dict, List, Optional

from .engine import EngineConfig, ShortestPathEngine
from .exceptions import ConfigError, InputError, SPTreeError
from .export import export_tree_graphml, export_tree_json
from .generator import generate_graph
from .graph import DirectedGraph
from .io import FORMATS, read_graph, write_graph
from .logger import StdLogger
from .path import path_edges, path_vertices

EXAMPLE_CSV = """# u,v,w
A,B,1
A,C,4
B,C,2
B,D,5
C,D,1
E
"""

EXIT_OK = 0
EXIT_USAGE = 64
EXIT_INTERNAL = 70


def _build_graph_from_file(path: str, fmt: Optional[str]) -> DirectedGraph:
    """Build a :class:`DirectedGraph` from an edges file."""
    if not Path(path).exists():
        raise InputError(f"edges file not found: {path}")
    return read_graph(path, fmt)


def _build_random_graph(n: int, m: int, seed: int) -> DirectedGraph:
    """Generate a random graph with string labels ``"0" .. "n-1"``."""
    return generate_graph(n=n, m=m, seed=seed).to_graph(labels="str")


def _build_parser() -> argparse.ArgumentParser:
    examples = (
        "Examples:\n"
        "  sptree --edges graph.csv --source A\n"
        "  sptree --edges graph.csv --source A --target D\n"
        "  sptree --random --n 100 --m 500 --source 0 --tree\n"
        "  sptree --edges graph.csv --source A --export-json tree.json\n"
    )
    p = argparse.ArgumentParser(
        prog="sptree",
        description="Dijkstra single-source shortest paths and shortest-path trees",
        epilog=examples,
        formatter_class=argparse.RawTextHelpFormatter,
    )
    p.add_argument("--verbose", action="store_true", help="Show full tracebacks")
    p.add_argument("--log-json", action="store_true", help="Emit structured JSON log lines")
    p.add_argument(
        "--log-level",
        choices=["debug", "info", "warning"],
        default="warning",
        help="Log verbosity",
    )
    p.add_argument(
        "--trace-settles",
        action="store_true",
        help="Log every settled vertex (needs --log-level debug)",
    )

    src = p.add_mutually_exclusive_group(required=True)
    src.add_argument("--edges", type=str, help="Path to edges file")
    src.add_argument("--random", action="store_true", help="Use a random graph")
    src.add_argument(
        "--example",
        action="store_true",
        help="Print a sample edges CSV to stdout and exit",
    )

    p.add_argument(
        "--format",
        choices=list(FORMATS),
        default=None,
        help="Edge file format (auto-detected from extension)",
    )
    p.add_argument("--n", type=int, default=10, help="Vertices (random mode)")
    p.add_argument("--m", type=int, default=20, help="Edges (random mode)")
    p.add_argument("--seed", type=int, default=0, help="Seed controlling random graph generation")

    p.add_argument("--source", type=str, default=None, help="Source vertex label")
    p.add_argument(
        "--target",
        type=str,
        default=None,
        help="Stop once this vertex is settled and print its distance and path",
    )
    p.add_argument("--tree", action="store_true", help="Include the shortest-path tree in the output")

    p.add_argument("--export-json", type=str, default=None, help="Write shortest-path tree as JSON")
    p.add_argument(
        "--export-graphml",
        type=str,
        default=None,
        help="Write shortest-path tree as GraphML",
    )
    p.add_argument("--plot", type=str, default=None, help="Render the tree to an image file")
    p.add_argument(
        "--layout",
        choices=["spring", "circular", "shell"],
        default="spring",
        help="Layout for --plot",
    )
    p.add_argument("--write-graph", type=str, default=None, help="Write the input graph to this file")
    return p


def main(argv: Optional[List[str]] = None) -> int:
    """Entry point for the ``sptree`` command-line tool."""
    p = _build_parser()
    args = p.parse_args(argv)

    if args.example:
        sys.stdout.write(EXAMPLE_CSV)
        return EXIT_OK

    try:
        if args.source is None:
            raise InputError("--source is required")

        if args.random:
            G = _build_random_graph(args.n, args.m, args.seed)
        else:
            G = _build_graph_from_file(args.edges, args.format)

        stream = sys.stdout if args.log_json else sys.stderr
        level = "info" if args.log_json and args.log_level == "warning" else args.log_level
        logger = StdLogger(level=level, json_fmt=args.log_json, stream=stream)
        engine = ShortestPathEngine(EngineConfig(trace_settles=args.trace_settles), logger=logger)

        if args.verbose and not args.log_json:
            sys.stderr.write(
                f"config: n={G.vertex_count()} m={G.edge_count()} "
                f"source={args.source} target={args.target} seed={args.seed}\n"
            )

        source = G.vertex(args.source)
        target = G.vertex(args.target) if args.target is not None else None

        res = engine.search(G, source, target)
        out: Dict[str, Any] = {
            "source": args.source,
            "n": G.vertex_count(),
            "m": G.edge_count(),
            "distances": {str(v.element): d for v, d in res.distances.items()},
            "counters": res.counters,
            "stopped_early": res.stopped_early,
        }

        tree = None
        if args.tree or args.target is not None or args.export_json or args.export_graphml or args.plot:
            tree = engine.reconstruct_tree(G, source, res.distances)

        if target is not None:
            dist = res.distances.get(target)
            out["target"] = args.target
            out["distance"] = dist
            if dist is None:
                logger.warning("unreachable", source=args.source, target=args.target)
                out["path"] = None
            else:
                edges = path_edges(G, source, target, tree or {})
                out["path"] = [str(v.element) for v in path_vertices(G, source, edges)]

        if args.tree and tree is not None:
            out["tree"] = {str(v.element): str(e.origin.element) for v, e in tree.items()}

        if args.export_json:
            with open(args.export_json, "w", encoding="utf-8") as fh:
                fh.write(export_tree_json(source, res.distances, tree or {}))
        if args.export_graphml:
            with open(args.export_graphml, "w", encoding="utf-8") as fh:
                fh.write(export_tree_graphml(source, res.distances, tree or {}))
        if args.plot:
            from .visualize import draw_tree

            draw_tree(G, source, tree or {}, args.plot, layout=args.layout)
        if args.write_graph:
            write_graph(G, args.write_graph)

        if args.log_json:
            logger.info("result", **out)
        else:
            print(json.dumps(out))
        return EXIT_OK

    except (InputError, ConfigError) as exc:
        if args.verbose:
            traceback.print_exc()
        else:
            sys.stderr.write(f"error: {exc}\n")
        return EXIT_USAGE
    except SPTreeError as exc:
        if args.verbose:
            traceback.print_exc()
        else:
            sys.stderr.write(f"internal error: {exc}\n")
        return EXIT_INTERNAL


if __name__ == "__main__":
    sys.exit(main())
