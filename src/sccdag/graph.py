from __future__ import annotations

import math
from typing import Iterable, Iterator, List, Sequence, Tuple

import numpy as np
from scipy import sparse


Adjacency = Tuple[Tuple[Tuple[int, float], ...], ...]


class GraphView:
    """Immutable weighted digraph on vertices 0..n-1.

    ``out_adj[u]`` holds the outgoing ``(target, weight)`` pairs of ``u`` in
    insertion order. Parallel edges are kept as given.
    """

    __slots__ = ("_n", "_out_adj", "_m")

    def __init__(self, n: int, out_adj: Sequence[Sequence[Tuple[int, float]]]):
        n = int(n)
        if n < 0:
            raise ValueError(f"Vertex count must be non-negative, got {n}.")
        if len(out_adj) != n:
            raise ValueError(f"Adjacency has {len(out_adj)} rows, expected n={n}.")

        rows = []
        m = 0
        for u, nbrs in enumerate(out_adj):
            row = []
            for v, w in nbrs:
                v = int(v)
                if not 0 <= v < n:
                    raise ValueError(f"Edge {u}->{v} has target outside [0, {n}).")
                w = float(w)
                if not math.isfinite(w):
                    raise ValueError(f"Edge {u}->{v} has non-finite weight {w}.")
                row.append((v, w))
            rows.append(tuple(row))
            m += len(row)

        self._n = n
        self._out_adj: Adjacency = tuple(rows)
        self._m = m

    @classmethod
    def from_edges(cls, n: int, edges: Iterable[Tuple[int, int, float]]) -> "GraphView":
        n = int(n)
        buckets: List[List[Tuple[int, float]]] = [[] for _ in range(max(n, 0))]
        for u, v, w in edges:
            u = int(u)
            if not 0 <= u < n:
                raise ValueError(f"Edge {u}->{v} has source outside [0, {n}).")
            buckets[u].append((v, w))
        return cls(n, buckets)

    @classmethod
    def from_adjacency(cls, out_adj: Sequence[Sequence[Tuple[int, float]]]) -> "GraphView":
        return cls(len(out_adj), out_adj)

    @property
    def n(self) -> int:
        return self._n

    @property
    def num_edges(self) -> int:
        return self._m

    @property
    def out_adj(self) -> Adjacency:
        return self._out_adj

    def successors(self, u: int) -> Tuple[Tuple[int, float], ...]:
        return self._out_adj[u]

    def edges(self) -> Iterator[Tuple[int, int, float]]:
        for u, nbrs in enumerate(self._out_adj):
            for v, w in nbrs:
                yield u, v, w

    def to_arrays(self) -> tuple[np.ndarray, np.ndarray, np.ndarray]:
        """Edge arrays ``(src, dst, w)`` in adjacency order."""
        src = np.empty(self._m, dtype=np.int32)
        dst = np.empty(self._m, dtype=np.int32)
        w = np.empty(self._m, dtype=np.float64)
        for i, (u, v, wt) in enumerate(self.edges()):
            src[i] = u
            dst[i] = v
            w[i] = wt
        return src, dst, w

    def to_csr(self) -> sparse.csr_matrix:
        """CSR adjacency matrix; parallel edges are summed."""
        src, dst, w = self.to_arrays()
        return sparse.csr_matrix((w, (src, dst)), shape=(self._n, self._n), dtype=np.float64)

    def __len__(self) -> int:
        return self._n

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, GraphView):
            return NotImplemented
        return self._n == other._n and self._out_adj == other._out_adj

    def __hash__(self) -> int:
        return hash((self._n, self._out_adj))

    def __repr__(self) -> str:
        return f"GraphView(n={self._n}, m={self._m})"
