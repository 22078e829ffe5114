# tests/test_logging.py
import numpy as np
import pandas as pd
import networkx as nx
import pytest
from netseg.errors import MultigraphError, NetsegError
from netseg.metrics.logging import compute_graph_metrics, summarize
from netseg.scenarios import SegConfig

def _net():
    G = nx.DiGraph([(1, 2), (1, 3), (2, 3), (4, 5), (1, 4), (1, 5), (4, 2), (5, 3)])
    nx.set_node_attributes(G, {1: 1, 2: 1, 3: 1, 4: 2, 5: 2}, "type")
    return G

def test_compute_graph_metrics():
    row = compute_graph_metrics(_net(), "type")
    assert row["nodes"] == 5 and row["edges"] == 8 and row["groups"] == 2
    assert np.isclose(row["ei"], 0.0)
    assert np.isclose(row["orwg"], 2.0)
    assert np.isclose(row["freeman"], 1 / 6)
    with pytest.raises(NetsegError):
        compute_graph_metrics(_net(), "type", measures=["bogus"])

def test_summarize_writes_logs(tmp_path):
    cfg = SegConfig.model_validate({
        "report": {"vattr": "type", "results_dir": str(tmp_path), "full_panel": True},
    })
    graphs = {"directed": _net(), "undirected": nx.Graph(_net())}
    df = summarize(graphs, cfg)
    assert list(df["graph"]) == ["directed", "undirected"]
    assert list(df["directed"]) == [True, False]

    summary = pd.read_csv(tmp_path / "logs" / "summary.csv")
    assert len(summary) == 2
    panel = pd.read_csv(tmp_path / "logs" / "mixing_panel.csv")
    assert list(panel.columns) == ["graph", "ego", "alter", "tie", "n"]
    assert panel.groupby("graph")["n"].sum().to_dict() == {"directed": 20, "undirected": 10}

def test_summarize_propagates_errors(tmp_path):
    cfg = SegConfig.model_validate({"report": {"vattr": "type", "results_dir": str(tmp_path)}})
    G = nx.MultiDiGraph(_net())
    G.add_edge(1, 2)
    with pytest.raises(MultigraphError):
        summarize({"multi": G}, cfg)

def test_tie_only_measures_accept_multigraphs():
    G = nx.MultiDiGraph(_net())
    G.add_edge(1, 2)   # parallel arc
    row = compute_graph_metrics(G, "type", measures=["ei", "assort"])
    assert row["edges"] == 9
    assert np.isclose(row["ei"], -1 / 9)
    assert np.isclose(row["assort"], 0.0)
    with pytest.raises(MultigraphError):
        compute_graph_metrics(G, "type", measures=["ei", "freeman"])

def test_tie_only_measures_ignore_loop_override():
    G = _net()
    G.add_edge(1, 1)
    row = compute_graph_metrics(G, "type", measures=["ei"], loops=False)
    assert row["loops"] is False
    assert np.isclose(row["ei"], -1 / 9)
