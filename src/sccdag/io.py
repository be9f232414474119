"""JSON (de)serialization of graph datasets.

Document format::

    {"directed": true, "n": 8, "source": 0, "weight_model": "edge",
     "edges": [{"u": 0, "v": 1, "w": 3.5}, ...]}

Older files may use ``vertices`` instead of ``n`` and ``from``/``to``/``weight``
instead of ``u``/``v``/``w``; both are accepted on load.
"""

from __future__ import annotations

import json
from dataclasses import asdict, dataclass, field
from pathlib import Path
from typing import Any, List

import pandas as pd

from .graph import GraphView


@dataclass
class EdgeData:
    u: int
    v: int
    w: float


@dataclass
class GraphData:
    directed: bool
    n: int
    edges: List[EdgeData] = field(default_factory=list)
    source: int = 0
    weight_model: str = "edge"

    @property
    def m(self) -> int:
        return len(self.edges)

    def to_graph(self) -> GraphView:
        if not self.directed:
            raise ValueError("Only directed graphs are supported (directed must be true).")
        if self.n > 0 and not 0 <= self.source < self.n:
            raise ValueError(f"Source {self.source} outside [0, {self.n}).")
        return GraphView.from_edges(self.n, ((e.u, e.v, e.w) for e in self.edges))

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)


def _edge_from_dict(obj: dict[str, Any]) -> EdgeData:
    try:
        u = obj["u"] if "u" in obj else obj["from"]
        v = obj["v"] if "v" in obj else obj["to"]
        w = obj["w"] if "w" in obj else obj.get("weight", 1.0)
    except KeyError as exc:
        raise ValueError(f"Edge record {obj!r} is missing endpoint {exc}.") from exc
    return EdgeData(u=int(u), v=int(v), w=float(w))


def graph_data_from_dict(obj: dict[str, Any]) -> GraphData:
    if "n" in obj:
        n = int(obj["n"])
    elif "vertices" in obj:
        n = int(obj["vertices"])
    else:
        raise ValueError("Graph document has neither 'n' nor 'vertices'.")

    edges = [_edge_from_dict(e) for e in (obj.get("edges") or [])]
    return GraphData(
        directed=bool(obj.get("directed", True)),
        n=n,
        edges=edges,
        source=int(obj.get("source", 0)),
        weight_model=str(obj.get("weight_model", "edge")),
    )


def load_graph(path: str | Path) -> GraphData:
    with open(path, "r", encoding="utf-8") as f:
        return graph_data_from_dict(json.load(f))


def save_graph(data: GraphData, path: str | Path) -> None:
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    with open(path, "w", encoding="utf-8") as f:
        json.dump(data.to_dict(), f, indent=2)


def convert_legacy_edges(input_path: str | Path, output_path: str | Path, source: int) -> GraphData:
    """Turn a bare JSON array of edges into a full graph document.

    The vertex count is inferred as max endpoint + 1.
    """
    with open(input_path, "r", encoding="utf-8") as f:
        raw = json.load(f)
    if not raw:
        raise ValueError(f"{input_path}: input is empty or invalid.")

    edges = [_edge_from_dict(e) for e in raw]
    n = max(max(e.u, e.v) for e in edges) + 1
    data = GraphData(directed=True, n=n, edges=edges, source=int(source), weight_model="edge")
    save_graph(data, output_path)
    return data


def edges_frame(data: GraphData) -> pd.DataFrame:
    return pd.DataFrame(
        {
            "u": [e.u for e in data.edges],
            "v": [e.v for e in data.edges],
            "w": [e.w for e in data.edges],
        }
    ).astype({"u": "int64", "v": "int64", "w": "float64"})
