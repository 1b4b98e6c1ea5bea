"""Graph input/output helpers."""

from __future__ import annotations

import json
import xml.etree.ElementTree as ET
from pathlib import Path
from typing import Callable, Dict, List, Optional, Tuple
from xml.sax.saxutils import escape

from .exceptions import ConfigError, GraphFormatError
from .graph import DirectedGraph

EdgeList = List[Tuple[str, str, int]]
VertexList = List[str]

_GRAPHML_NS = "{http://graphml.graphdrawing.org/xmlns}"


def _parse_weight(raw: str, where: str) -> int:
    try:
        return int(raw.strip())
    except ValueError:
        raise GraphFormatError(f"{where}: weight {raw.strip()!r} is not an integer") from None


def _read_csv(path: Path) -> Tuple[VertexList, EdgeList]:
    """Read a CSV file of ``u,v,w`` rows.

    Lines starting with ``#`` and blank lines are ignored. Columns can be
    separated by commas or tabs. A row holding a single label declares an
    isolated vertex.

    Raises:
        GraphFormatError: If a row has two columns or more than three, or if
            the file declares nothing.
    """
    vertices: VertexList = []
    edges: EdgeList = []
    with path.open("r", encoding="utf-8") as fh:
        for lineno, raw in enumerate(fh, start=1):
            row = raw.strip()
            if not row or row.startswith("#"):
                continue
            parts = [p.strip() for p in row.replace("\t", ",").split(",")]
            where = f"{path.name}:{lineno}"
            if len(parts) == 1:
                vertices.append(parts[0])
            elif len(parts) == 3:
                edges.append((parts[0], parts[1], _parse_weight(parts[2], where)))
            else:
                raise GraphFormatError(f"{where}: expected 'u,v,w' or a single label")
    if not vertices and not edges:
        raise GraphFormatError("no vertices or edges parsed from file")
    return vertices, edges


def _write_csv(path: Path, G: DirectedGraph) -> None:
    """Write isolated vertices as single labels, then one ``u,v,w`` row per edge."""
    with path.open("w", encoding="utf-8") as fh:
        for v in G.vertices():
            if G.out_degree(v) == 0 and G.in_degree(v) == 0:
                fh.write(f"{v.element}\n")
        for e in G.edges():
            fh.write(f"{e.origin.element},{e.destination.element},{e.weight}\n")


def _read_jsonl(path: Path) -> Tuple[VertexList, EdgeList]:
    """Read JSON Lines holding ``{"u", "v", "w"}`` edges or ``{"vertex"}`` rows."""
    vertices: VertexList = []
    edges: EdgeList = []
    with path.open("r", encoding="utf-8") as fh:
        for lineno, raw in enumerate(fh, start=1):
            row = raw.strip()
            if not row:
                continue
            where = f"{path.name}:{lineno}"
            try:
                obj = json.loads(row)
            except json.JSONDecodeError as exc:
                raise GraphFormatError(f"{where}: {exc.msg}") from exc
            if not isinstance(obj, dict):
                raise GraphFormatError(f"{where}: expected a JSON object")
            if "vertex" in obj:
                vertices.append(str(obj["vertex"]))
                continue
            try:
                u, v, w = obj["u"], obj["v"], obj["w"]
            except KeyError as exc:
                raise GraphFormatError(f"{where}: missing key {exc.args[0]!r}") from None
            if isinstance(w, bool) or not isinstance(w, int):
                raise GraphFormatError(f"{where}: weight {w!r} is not an integer")
            edges.append((str(u), str(v), w))
    if not vertices and not edges:
        raise GraphFormatError("no vertices or edges parsed from file")
    return vertices, edges


def _write_jsonl(path: Path, G: DirectedGraph) -> None:
    with path.open("w", encoding="utf-8") as fh:
        for v in G.vertices():
            if G.out_degree(v) == 0 and G.in_degree(v) == 0:
                fh.write(json.dumps({"vertex": str(v.element)}) + "\n")
        for e in G.edges():
            fh.write(
                json.dumps({"u": str(e.origin.element), "v": str(e.destination.element), "w": e.weight})
                + "\n"
            )


def _read_graphml(path: Path) -> Tuple[VertexList, EdgeList]:
    """Parse a GraphML file.

    Node ids become labels. The weight is read from a ``weight`` attribute or
    from a ``<data key="weight">`` child; edges without either weigh ``1``.
    """
    try:
        root = ET.parse(path).getroot()
    except ET.ParseError as exc:
        raise GraphFormatError(f"{path.name}: {exc}") from exc
    ns = _GRAPHML_NS
    vertices: VertexList = [n.attrib["id"] for n in root.findall(f".//{ns}node") if "id" in n.attrib]
    edges: EdgeList = []
    for edge in root.findall(f".//{ns}edge"):
        u = edge.attrib.get("source")
        v = edge.attrib.get("target")
        if u is None or v is None:
            raise GraphFormatError(f"{path.name}: edge without source or target")
        w_attr = edge.attrib.get("weight")
        if w_attr is None:
            data = edge.find(f"{ns}data[@key='weight']")
            w_attr = data.text if (data is not None and data.text is not None) else "1"
        edges.append((u, v, _parse_weight(w_attr, f"{path.name}: edge {u}->{v}")))
    if not vertices and not edges:
        raise GraphFormatError("no vertices or edges parsed from file")
    return vertices, edges


def _write_graphml(path: Path, G: DirectedGraph) -> None:
    lines: List[str] = []
    lines.append('<?xml version="1.0" encoding="UTF-8"?>')
    lines.append(f'<graphml xmlns="{_GRAPHML_NS[1:-1]}">')
    lines.append('  <graph id="G" edgedefault="directed">')
    for v in G.vertices():
        lines.append(f'    <node id="{_xml_attr(v.element)}"/>')
    for e in G.edges():
        lines.append(
            f'    <edge source="{_xml_attr(e.origin.element)}" '
            f'target="{_xml_attr(e.destination.element)}" weight="{e.weight}"/>'
        )
    lines.append("  </graph>")
    lines.append("</graphml>")
    path.write_text("\n".join(lines) + "\n", encoding="utf-8")


def _xml_attr(label: object) -> str:
    return escape(str(label), {'"': "&quot;"})


_FMT_READERS: Dict[str, Callable[[Path], Tuple[VertexList, EdgeList]]] = {
    "csv": _read_csv,
    "jsonl": _read_jsonl,
    "graphml": _read_graphml,
}

_FMT_WRITERS: Dict[str, Callable[[Path, DirectedGraph], None]] = {
    "csv": _write_csv,
    "jsonl": _write_jsonl,
    "graphml": _write_graphml,
}

FORMATS = tuple(_FMT_READERS)


def detect_format(path: Path) -> Optional[str]:
    """Return the format implied by the extension of ``path`` or ``None``."""
    ext = path.suffix.lower()
    if ext in {".csv", ".tsv"}:
        return "csv"
    if ext in {".jsonl", ".json"}:
        return "jsonl"
    if ext in {".graphml", ".xml"}:
        return "graphml"
    return None


def read_graph(path: str, fmt: Optional[str] = None) -> DirectedGraph:
    """Read a graph from a file.

    Args:
        path: The path to the graph file.
        fmt: ``"csv"``, ``"jsonl"`` or ``"graphml"``; auto-detected from the
            extension when ``None``.

    Returns:
        A graph whose vertex labels are strings.

    Raises:
        ConfigError: If the format is unknown.
        GraphFormatError: If the file content is malformed.
    """
    p = Path(path)
    fmt = fmt or detect_format(p)
    if fmt is None or fmt not in _FMT_READERS:
        raise ConfigError(f"unknown graph format for {p.name!r}")
    vertices, edges = _FMT_READERS[fmt](p)
    return DirectedGraph.from_edges(edges, vertices=vertices)


def write_graph(G: DirectedGraph, path: str, fmt: Optional[str] = None) -> None:
    """Write ``G`` to ``path`` in the given or detected format.

    Raises:
        ConfigError: If the format is unknown.
    """
    p = Path(path)
    fmt = fmt or detect_format(p)
    if fmt is None or fmt not in _FMT_WRITERS:
        raise ConfigError(f"unknown graph format for {p.name!r}")
    _FMT_WRITERS[fmt](p, G)


__all__ = ["FORMATS", "detect_format", "read_graph", "write_graph"]
