import json

import pytest

from sccdag.io import (
    EdgeData,
    GraphData,
    convert_legacy_edges,
    edges_frame,
    graph_data_from_dict,
    load_graph,
    save_graph,
)


def _sample():
    return GraphData(
        directed=True,
        n=3,
        edges=[EdgeData(0, 1, 2.5), EdgeData(1, 2, 1.0)],
        source=0,
        weight_model="edge",
    )


def test_save_then_load(tmp_path):
    path = tmp_path / "nested" / "g.json"
    save_graph(_sample(), path)
    raw = json.loads(path.read_text())
    assert raw["edges"][0] == {"u": 0, "v": 1, "w": 2.5}
    assert load_graph(path) == _sample()


def test_legacy_keys():
    data = graph_data_from_dict(
        {"vertices": 2, "edges": [{"from": 0, "to": 1, "weight": 4}]}
    )
    assert data.n == 2
    assert data.directed
    assert data.edges == [EdgeData(0, 1, 4.0)]
    assert data.source == 0
    assert data.weight_model == "edge"


def test_missing_edges_and_n():
    assert graph_data_from_dict({"n": 4, "edges": None}).edges == []
    with pytest.raises(ValueError):
        graph_data_from_dict({"edges": []})
    with pytest.raises(ValueError):
        graph_data_from_dict({"n": 2, "edges": [{"u": 0}]})


def test_to_graph_validation():
    g = _sample().to_graph()
    assert g.n == 3 and g.num_edges == 2

    undirected = _sample()
    undirected.directed = False
    with pytest.raises(ValueError):
        undirected.to_graph()

    bad_source = _sample()
    bad_source.source = 3
    with pytest.raises(ValueError):
        bad_source.to_graph()

    bad_edge = _sample()
    bad_edge.edges.append(EdgeData(2, 5, 1.0))
    with pytest.raises(ValueError):
        bad_edge.to_graph()


def test_convert_legacy_edges(tmp_path):
    src = tmp_path / "old.json"
    src.write_text(json.dumps([{"from": 0, "to": 4, "weight": 1.5}, {"from": 4, "to": 2, "weight": 2}]))
    out = tmp_path / "new.json"
    data = convert_legacy_edges(src, out, source=4)
    assert data.n == 5
    loaded = load_graph(out)
    assert loaded.source == 4
    assert loaded.edges == [EdgeData(0, 4, 1.5), EdgeData(4, 2, 2.0)]


def test_convert_rejects_empty(tmp_path):
    src = tmp_path / "old.json"
    src.write_text("[]")
    with pytest.raises(ValueError):
        convert_legacy_edges(src, tmp_path / "new.json", source=0)


def test_edges_frame():
    df = edges_frame(_sample())
    assert list(df.columns) == ["u", "v", "w"]
    assert df["u"].tolist() == [0, 1]
    assert str(df["w"].dtype) == "float64"
    assert len(edges_frame(GraphData(directed=True, n=0))) == 0
