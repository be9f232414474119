from __future__ import annotations

from collections import deque
from typing import List, Optional, Sequence

import numpy as np

from .graph import GraphView
from .metrics import SimpleMetrics, ensure_metrics


def topological_sort(
    graph: GraphView,
    *,
    metrics: Optional[SimpleMetrics] = None,
) -> Optional[List[int]]:
    """Topological order via Kahn's algorithm.

    Zero in-degree vertices are queued in ascending index order and released
    FIFO, so the result is deterministic. Returns None if the graph has a
    cycle (some vertices never reach in-degree zero).
    """
    metrics = ensure_metrics(metrics)
    metrics.start()

    n = graph.n
    out_adj = graph.out_adj
    indeg = np.zeros(n, dtype=np.int64)
    for nbrs in out_adj:
        for v, _ in nbrs:
            indeg[v] += 1

    queue = deque()
    for u in range(n):
        if indeg[u] == 0:
            queue.append(u)
            metrics.increment("pushes")

    order: List[int] = []
    while queue:
        u = queue.popleft()
        metrics.increment("pops")
        order.append(u)
        for v, _ in out_adj[u]:
            indeg[v] -= 1
            if indeg[v] == 0:
                queue.append(v)
                metrics.increment("pushes")

    metrics.stop()
    if len(order) != n:
        return None
    return order


def expand_order(component_order: Sequence[int], comps: Sequence[Sequence[int]]) -> List[int]:
    """Vertex order obtained by listing each component's vertices in component order."""
    vertex_order: List[int] = []
    for c in component_order:
        vertex_order.extend(int(v) for v in comps[int(c)])
    return vertex_order
