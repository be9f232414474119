from __future__ import annotations

from dataclasses import dataclass, field
from typing import List, Optional, Tuple

import numpy as np

from .graph import GraphView
from .metrics import SimpleMetrics, ensure_metrics


@dataclass
class _TarjanState:
    index: np.ndarray
    lowlink: np.ndarray
    on_stack: np.ndarray
    stack: List[int] = field(default_factory=list)
    counter: int = 0

    @classmethod
    def fresh(cls, n: int) -> "_TarjanState":
        return cls(
            index=np.full(n, -1, dtype=np.int64),
            lowlink=np.zeros(n, dtype=np.int64),
            on_stack=np.zeros(n, dtype=bool),
        )

    def enter(self, v: int) -> None:
        self.index[v] = self.counter
        self.lowlink[v] = self.counter
        self.counter += 1
        self.stack.append(v)
        self.on_stack[v] = True


def scc_tarjan(
    graph: GraphView,
    *,
    metrics: Optional[SimpleMetrics] = None,
) -> Tuple[np.ndarray, List[List[int]]]:
    """Strongly connected components via Tarjan (iterative).

    Parameters
    ----------
    graph:
        weighted digraph (weights ignored for SCC).
    metrics:
        optional collector; counts ``dfs_visits`` and ``edge_explorations``.

    Returns
    -------
    comp_id:
        np.ndarray of length n mapping node -> component index in [0, m-1].
    comps:
        list of components; comps[c] is list of nodes in component c, in the
        order they were popped off the Tarjan stack.

    Components come out in reverse topological order of the condensation:
    a component only has edges into components emitted before it.
    """
    metrics = ensure_metrics(metrics)
    metrics.start()

    n = graph.n
    out_adj = graph.out_adj
    st = _TarjanState.fresh(n)
    comps: List[List[int]] = []

    for start in range(n):
        if st.index[start] != -1:
            continue

        # frames hold (vertex, next edge cursor)
        st.enter(start)
        metrics.increment("dfs_visits")
        frames = [(start, 0)]
        while frames:
            v, i = frames[-1]
            nbrs = out_adj[v]
            if i < len(nbrs):
                w = nbrs[i][0]
                frames[-1] = (v, i + 1)
                metrics.increment("edge_explorations")
                if st.index[w] == -1:
                    st.enter(w)
                    metrics.increment("dfs_visits")
                    frames.append((w, 0))
                elif st.on_stack[w]:
                    st.lowlink[v] = min(st.lowlink[v], st.index[w])
                continue

            frames.pop()
            if st.lowlink[v] == st.index[v]:
                comp: List[int] = []
                while True:
                    w = st.stack.pop()
                    st.on_stack[w] = False
                    comp.append(w)
                    if w == v:
                        break
                comps.append(comp)

            if frames:
                parent = frames[-1][0]
                st.lowlink[parent] = min(st.lowlink[parent], st.lowlink[v])

    comp_id = np.full(n, -1, dtype=np.int32)
    for c, members in enumerate(comps):
        comp_id[members] = c

    metrics.stop()
    return comp_id, comps
