"""SCC decomposition and DAG path analysis on weighted digraphs.

This package provides a minimal implementation of:
- strongly connected components (Tarjan, iterative),
- condensation of a digraph into its DAG of components,
- topological ordering (Kahn) and expansion back to vertices,
- single-source shortest / longest (critical) paths over a topological order.
"""

from .graph import GraphView
from .scc import scc_tarjan
from .condensation import build_condensation, is_acyclic
from .topo import topological_sort, expand_order
from .dag_paths import (
    CriticalPathResult,
    shortest_paths,
    longest_paths,
    reconstruct_path,
    find_critical_path,
)
from .metrics import SimpleMetrics, NullMetrics
from .io import GraphData, EdgeData, load_graph, save_graph
from .pipeline import run_dataset, run_all

__all__ = [
    "GraphView",
    "scc_tarjan",
    "build_condensation",
    "is_acyclic",
    "topological_sort",
    "expand_order",
    "CriticalPathResult",
    "shortest_paths",
    "longest_paths",
    "reconstruct_path",
    "find_critical_path",
    "SimpleMetrics",
    "NullMetrics",
    "GraphData",
    "EdgeData",
    "load_graph",
    "save_graph",
    "run_dataset",
    "run_all",
]
