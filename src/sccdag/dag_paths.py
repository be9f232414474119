from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, List, Optional, Sequence

import numpy as np

from .graph import GraphView
from .metrics import SimpleMetrics, ensure_metrics


SENSES = ("shortest", "longest")


@dataclass(frozen=True)
class CriticalPathResult:
    path: List[int]
    length: float


def _check_inputs(graph: GraphView, order: Sequence[int], source: int) -> None:
    n = graph.n
    if not 0 <= int(source) < n:
        raise ValueError(f"Source {source} outside [0, {n}).")
    for u in order:
        if not 0 <= int(u) < n:
            raise ValueError(f"Order references vertex {u} outside [0, {n}).")


def _relax_forward(
    graph: GraphView,
    order: Sequence[int],
    source: int,
    sense: str,
    metrics: SimpleMetrics,
    parent: Optional[Dict[int, int]] = None,
) -> np.ndarray:
    """Forward DP over ``order`` starting at the position of ``source``.

    Vertices listed before ``source`` are skipped, and unreached vertices are
    never expanded. Only correct when ``order`` is a topological order of
    ``graph``.
    """
    if sense not in SENSES:
        raise ValueError(f"Unknown sense {sense!r}; expected one of {SENSES}.")
    longest = sense == "longest"
    unreached = -np.inf if longest else np.inf

    dist = np.full(graph.n, unreached, dtype=np.float64)
    dist[source] = 0.0
    out_adj = graph.out_adj

    found_source = False
    for u in order:
        u = int(u)
        if u == source:
            found_source = True
        if not found_source:
            continue
        du = float(dist[u])
        if du == unreached:
            continue
        for v, w in out_adj[u]:
            metrics.increment("relaxations")
            cand = du + w
            if (cand > dist[v]) if longest else (cand < dist[v]):
                dist[v] = cand
                if parent is not None:
                    parent[v] = u

    return dist


def shortest_paths(
    graph: GraphView,
    order: Sequence[int],
    source: int,
    *,
    metrics: Optional[SimpleMetrics] = None,
) -> np.ndarray:
    """Single-source shortest distances along ``order``; +inf marks unreached."""
    _check_inputs(graph, order, source)
    metrics = ensure_metrics(metrics)
    metrics.start()
    dist = _relax_forward(graph, order, int(source), "shortest", metrics)
    metrics.stop()
    return dist


def longest_paths(
    graph: GraphView,
    order: Sequence[int],
    source: int,
    *,
    metrics: Optional[SimpleMetrics] = None,
) -> np.ndarray:
    """Single-source longest distances along ``order``; -inf marks unreached."""
    _check_inputs(graph, order, source)
    metrics = ensure_metrics(metrics)
    metrics.start()
    dist = _relax_forward(graph, order, int(source), "longest", metrics)
    metrics.stop()
    return dist


def reconstruct_path(
    graph: GraphView,
    order: Sequence[int],
    source: int,
    target: int,
    sense: str = "shortest",
) -> List[int]:
    """Path from ``source`` to ``target`` under the given sense.

    Re-runs the forward relaxation recording, for every improved vertex, the
    predecessor that improved it. Returns [] if ``target`` is unreached.
    """
    _check_inputs(graph, order, source)
    source = int(source)
    target = int(target)
    if not 0 <= target < graph.n:
        raise ValueError(f"Target {target} outside [0, {graph.n}).")

    parent: Dict[int, int] = {}
    dist = _relax_forward(graph, order, source, sense, ensure_metrics(None), parent)
    if not np.isfinite(dist[target]):
        return []

    path = [target]
    seen = {target}
    cur = target
    while cur != source and cur in parent:
        cur = parent[cur]
        if cur in seen:
            raise ValueError(
                f"Predecessor links loop at vertex {cur}; the supplied order is not "
                "a topological order of the graph."
            )
        seen.add(cur)
        path.append(cur)
    if cur != source:
        path.append(source)
    path.reverse()
    return path


def find_critical_path(
    graph: GraphView,
    order: Sequence[int],
    source: int,
    *,
    metrics: Optional[SimpleMetrics] = None,
) -> CriticalPathResult:
    """Longest path from ``source`` to the farthest reachable vertex.

    The farthest vertex is the first index (ascending) attaining the maximum
    finite longest distance.
    """
    dist = longest_paths(graph, order, source, metrics=metrics)
    far = int(np.argmax(dist))
    path = reconstruct_path(graph, order, source, far, "longest")
    return CriticalPathResult(path=path, length=float(dist[far]))

