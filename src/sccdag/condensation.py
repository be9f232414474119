from __future__ import annotations

from typing import Dict, List, Optional, Sequence, Tuple

import numpy as np
from scipy import sparse
from scipy.sparse.csgraph import connected_components

from .graph import GraphView
from .metrics import SimpleMetrics, ensure_metrics


def component_index(n: int, comps: Sequence[Sequence[int]]) -> np.ndarray:
    """Vertex -> component map; rejects anything that is not a partition of 0..n-1."""
    comp_id = np.full(n, -1, dtype=np.int32)
    for c, members in enumerate(comps):
        if len(members) == 0:
            raise ValueError(f"Component {c} is empty.")
        for v in members:
            v = int(v)
            if not 0 <= v < n:
                raise ValueError(f"Component {c} references vertex {v} outside [0, {n}).")
            if comp_id[v] != -1:
                raise ValueError(f"Vertex {v} appears in components {comp_id[v]} and {c}.")
            comp_id[v] = c

    missing = np.flatnonzero(comp_id == -1)
    if missing.size:
        raise ValueError(f"Vertices {missing.tolist()} are not covered by any component.")
    return comp_id


def build_condensation(
    graph: GraphView,
    comps: Sequence[Sequence[int]],
    *,
    metrics: Optional[SimpleMetrics] = None,
) -> GraphView:
    """Contract each component to one node.

    Edges between distinct components are kept once per ordered pair
    (ci, cj); intra-component edges are dropped. The weight of a kept edge is
    the max weight over the original edges it replaces.
    """
    metrics = ensure_metrics(metrics)
    metrics.start()

    comp_id = component_index(graph.n, comps)
    k = len(comps)

    best: Dict[Tuple[int, int], float] = {}
    out_adj: List[List[int]] = [[] for _ in range(k)]
    for u, v, w in graph.edges():
        ci = int(comp_id[u])
        cj = int(comp_id[v])
        if ci == cj:
            continue
        key = (ci, cj)
        prev = best.get(key)
        if prev is None:
            out_adj[ci].append(cj)
            best[key] = w
            metrics.increment("condensation_edges")
        elif w > prev:
            best[key] = w

    cond = GraphView(k, [[(cj, best[(ci, cj)]) for cj in row] for ci, row in enumerate(out_adj)])
    metrics.stop()
    return cond


def is_acyclic(graph: GraphView) -> bool:
    """True iff ``graph`` has no directed cycle (self-loops count as cycles)."""
    if graph.n == 0:
        return True
    if any(u == v for u, v, _ in graph.edges()):
        return False
    # zero-weight edges would vanish from the sparse matrix
    src, dst, _ = graph.to_arrays()
    ones = sparse.csr_matrix(
        (np.ones(len(src), dtype=np.float64), (src, dst)), shape=(graph.n, graph.n)
    )
    n_strong, _ = connected_components(ones, directed=True, connection="strong")
    return int(n_strong) == graph.n
