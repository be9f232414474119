from __future__ import annotations

from pathlib import Path
from typing import Iterable, List, Optional, Set, Tuple

import numpy as np

from .io import EdgeData, GraphData, save_graph


DEFAULT_SEED = 42

# name -> (n, density, cyclic, multiple_scc, source)
DATASET_SPECS = {
    "small_1": (8, 0.30, False, False, 0),
    "small_2": (10, 0.40, True, False, 0),
    "small_3": (7, 0.35, False, True, 0),
    "medium_1": (15, 0.25, False, False, 0),
    "medium_2": (18, 0.30, True, True, 2),
    "medium_3": (12, 0.35, True, False, 1),
    "large_1": (30, 0.20, False, False, 0),
    "large_2": (40, 0.25, True, True, 5),
    "large_3": (25, 0.30, True, False, 3),
}


def _weight(rng: np.random.Generator) -> float:
    return float(rng.random() * 10.0 + 1.0)


def _add(edges: List[EdgeData], seen: Set[Tuple[int, int]], u: int, v: int, w: float) -> bool:
    if (u, v) in seen:
        return False
    seen.add((u, v))
    edges.append(EdgeData(u=u, v=v, w=w))
    return True


def generate_dag(n: int, density: float, rng: np.random.Generator,
                 edges: List[EdgeData], seen: Set[Tuple[int, int]]) -> None:
    """Edges only from lower to higher index, so the result is acyclic."""
    max_edges = int((n * (n - 1) // 2) * density)
    made = 0
    for i in range(n):
        if made >= max_edges:
            break
        for j in range(i + 1, n):
            if made >= max_edges:
                break
            if rng.random() < density and _add(edges, seen, i, j, _weight(rng)):
                made += 1


def generate_cyclic(n: int, density: float, rng: np.random.Generator,
                    edges: List[EdgeData], seen: Set[Tuple[int, int]]) -> None:
    """A sparser DAG plus random extra edges, which can close cycles."""
    generate_dag(n, density * 0.7, rng, edges, seen)
    extra = int(n * density * 0.3)
    for _ in range(extra):
        u = int(rng.integers(n))
        v = int(rng.integers(n))
        if u != v:
            _add(edges, seen, u, v, _weight(rng))


def generate_multiple_sccs(n: int, density: float, rng: np.random.Generator,
                           edges: List[EdgeData], seen: Set[Tuple[int, int]]) -> None:
    """2 or 3 dense clusters joined by forward edges between consecutive clusters."""
    k = int(rng.integers(2)) + 2
    per = n // k

    for c in range(k):
        start = c * per
        end = n if c == k - 1 else (c + 1) * per
        for i in range(start, end):
            for j in range(start, end):
                if i != j and rng.random() < density:
                    _add(edges, seen, i, j, _weight(rng))

    for c in range(k - 1):
        start1, end1 = c * per, (c + 1) * per
        start2 = end1
        end2 = n if c == k - 2 else (c + 2) * per
        for i in range(start1, end1):
            for j in range(start2, end2):
                if rng.random() < density * 0.3:
                    _add(edges, seen, i, j, _weight(rng))


def generate_dataset(
    n: int,
    density: float,
    cyclic: bool,
    multiple_scc: bool,
    source: int,
    rng: Optional[np.random.Generator] = None,
) -> GraphData:
    if rng is None:
        rng = np.random.default_rng(DEFAULT_SEED)

    edges: List[EdgeData] = []
    seen: Set[Tuple[int, int]] = set()
    if multiple_scc:
        generate_multiple_sccs(n, density, rng, edges, seen)
    elif cyclic:
        generate_cyclic(n, density, rng, edges, seen)
    else:
        generate_dag(n, density, rng, edges, seen)

    return GraphData(directed=True, n=n, edges=edges, source=source, weight_model="edge")


def generate_all_datasets(
    out_dir: str | Path,
    seed: int = DEFAULT_SEED,
    names: Optional[Iterable[str]] = None,
) -> list[Path]:
    """Write the datasets in DATASET_SPECS as ``<out_dir>/<name>.json``.

    With ``names`` only those datasets are written. Every dataset is still drawn
    from the shared generator, so a file has the same content whether it was
    written alone or with the rest.
    """
    wanted = set(DATASET_SPECS) if names is None else set(names)
    unknown = wanted - set(DATASET_SPECS)
    if unknown:
        raise ValueError(f"Unknown datasets: {sorted(unknown)}")
    out_dir = Path(out_dir)
    out_dir.mkdir(parents=True, exist_ok=True)
    rng = np.random.default_rng(seed)

    paths = []
    for name, (n, density, cyclic, multi, source) in DATASET_SPECS.items():
        data = generate_dataset(n, density, cyclic, multi, source, rng)
        if name not in wanted:
            continue
        path = out_dir / f"{name}.json"
        save_graph(data, path)
        paths.append(path)
    return paths
