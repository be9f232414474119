import numpy as np
import pytest

from sccdag.condensation import build_condensation, component_index, is_acyclic
from sccdag.generator import generate_dataset
from sccdag.graph import GraphView
from sccdag.metrics import SimpleMetrics
from sccdag.scc import scc_tarjan


def test_two_cycles_condense_to_one_edge():
    g = GraphView.from_edges(4, [(0, 1, 1), (0, 2, 4), (1, 0, 1), (2, 3, 1), (3, 2, 1)])
    comp_id, comps = scc_tarjan(g)
    cond = build_condensation(g, comps)
    assert cond.n == 2
    assert cond.num_edges == 1
    (u, v, w), = cond.edges()
    assert (u, v) == (comp_id[0], comp_id[2])
    assert w == 4


def test_parallel_inter_component_edges_are_merged():
    # {0,1} -> {2} through three different edges
    g = GraphView.from_edges(
        3, [(0, 1, 1), (1, 0, 1), (0, 2, 2.0), (1, 2, 7.0), (0, 2, 3.0)]
    )
    _, comps = scc_tarjan(g)
    m = SimpleMetrics()
    cond = build_condensation(g, comps, metrics=m)
    assert cond.num_edges == 1
    assert m.counter("condensation_edges") == 1
    assert list(cond.edges())[0][2] == 7.0


def test_direction_is_kept_in_dedup_key():
    # two singletons with edges both ways form one SCC, so use explicit comps
    g = GraphView.from_edges(2, [(0, 1, 1), (1, 0, 1)])
    cond = build_condensation(g, [[0], [1]])
    assert sorted((u, v) for u, v, _ in cond.edges()) == [(0, 1), (1, 0)]
    assert not is_acyclic(cond)


def test_condensation_is_acyclic_without_self_loops():
    for seed in range(6):
        data = generate_dataset(30, 0.3, True, seed % 2 == 1, 0, np.random.default_rng(seed))
        g = data.to_graph()
        _, comps = scc_tarjan(g)
        cond = build_condensation(g, comps)
        assert cond.n == len(comps)
        assert all(u != v for u, v, _ in cond.edges())
        pairs = [(u, v) for u, v, _ in cond.edges()]
        assert len(pairs) == len(set(pairs))
        assert is_acyclic(cond)


def test_empty_graph():
    cond = build_condensation(GraphView(0, []), [])
    assert cond.n == 0
    assert is_acyclic(cond)


@pytest.mark.parametrize(
    "comps",
    [
        [[0, 1]],             # vertex 2 missing
        [[0, 1], [1, 2]],     # vertex 1 twice
        [[0, 1, 2], []],      # empty component
        [[0, 1, 5], [2]],     # out of range
    ],
)
def test_rejects_non_partitions(comps):
    g = GraphView.from_edges(3, [(0, 1, 1)])
    with pytest.raises(ValueError):
        build_condensation(g, comps)


def test_component_index():
    comp_id = component_index(4, [[3, 1], [0], [2]])
    assert comp_id.tolist() == [1, 0, 2, 0]


def test_is_acyclic_on_self_loop_and_zero_weights():
    assert not is_acyclic(GraphView.from_edges(2, [(1, 1, 1.0)]))
    assert not is_acyclic(GraphView.from_edges(2, [(0, 1, 0.0), (1, 0, 0.0)]))
    assert is_acyclic(GraphView.from_edges(3, [(0, 1, 0.0), (1, 2, 0.0)]))
