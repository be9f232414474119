import numpy as np

from sccdag.condensation import build_condensation
from sccdag.generator import generate_dataset
from sccdag.graph import GraphView
from sccdag.metrics import SimpleMetrics
from sccdag.scc import scc_tarjan
from sccdag.topo import expand_order, topological_sort


def _graph(n, pairs):
    return GraphView.from_edges(n, [(u, v, 1.0) for u, v in pairs])


def _respects_edges(graph, order):
    pos = {v: i for i, v in enumerate(order)}
    return all(pos[u] < pos[v] for u, v, _ in graph.edges())


def test_dag_order_respects_edges():
    g = _graph(5, [(0, 2), (1, 2), (2, 3), (3, 4), (1, 4)])
    order = topological_sort(g)
    assert order == [0, 1, 2, 3, 4]
    assert _respects_edges(g, order)


def test_ties_break_by_index_then_fifo():
    g = _graph(4, [(2, 0), (3, 1)])
    assert topological_sort(g) == [2, 3, 0, 1]
    assert topological_sort(_graph(4, [])) == [0, 1, 2, 3]


def test_cycle_returns_none():
    assert topological_sort(_graph(3, [(0, 1), (1, 2), (2, 0)])) is None
    assert topological_sort(_graph(3, [(0, 1), (1, 1)])) is None


def test_empty_graph():
    assert topological_sort(GraphView(0, [])) == []


def test_condensation_always_sorts():
    for seed in range(6):
        data = generate_dataset(35, 0.25, True, seed % 2 == 0, 0, np.random.default_rng(seed))
        g = data.to_graph()
        _, comps = scc_tarjan(g)
        cond = build_condensation(g, comps)
        order = topological_sort(cond)
        assert order is not None
        assert sorted(order) == list(range(cond.n))
        assert _respects_edges(cond, order)


def test_expand_order_concatenates_components():
    comps = [[3, 2], [1, 0], [4]]
    assert expand_order([1, 0, 2], comps) == [1, 0, 3, 2, 4]
    assert expand_order([], []) == []


def test_expanded_order_respects_inter_component_edges():
    g = _graph(5, [(0, 1), (1, 0), (1, 2), (2, 3), (3, 2), (3, 4)])
    comp_id, comps = scc_tarjan(g)
    vertex_order = expand_order(topological_sort(build_condensation(g, comps)), comps)
    assert sorted(vertex_order) == list(range(5))
    pos = {v: i for i, v in enumerate(vertex_order)}
    for u, v, _ in g.edges():
        if comp_id[u] != comp_id[v]:
            assert pos[u] < pos[v]


def test_metrics_pushes_and_pops():
    m = SimpleMetrics()
    topological_sort(_graph(4, [(0, 1), (1, 2)]), metrics=m)
    assert m.counter("pushes") == 4
    assert m.counter("pops") == 4

    m.reset()
    topological_sort(_graph(3, [(0, 1), (1, 0)]), metrics=m)
    assert m.counter("pops") == 1
