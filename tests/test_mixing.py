# tests/test_mixing.py
import numpy as np
import networkx as nx
import pytest
from netseg.errors import GraphError, MixingMatrixError, MultigraphError
from netseg.mixing.matrix import mixingm

EDGES = [(1, 2), (1, 3), (2, 3), (4, 5), (1, 4), (1, 5), (4, 2), (5, 3)]

def _net(cls=nx.DiGraph):
    G = cls()
    G.add_nodes_from([1, 2, 3, 4, 5])
    G.add_edges_from(EDGES)
    nx.set_node_attributes(G, {1: 1, 2: 1, 3: 1, 4: 2, 5: 2}, "type")
    return G

def test_contact_layer_directed():
    mm = mixingm(_net(), "type")
    assert mm.ego_levels == (1, 2) and mm.alter_levels == (1, 2)
    assert mm.directed and not mm.loops
    assert np.array_equal(mm.contact, [[3, 2], [2, 1]])
    assert np.array_equal(mm.group_sizes, [3, 2])

def test_full_directed_counts_all_dyads():
    mm = mixingm(_net(), "type", full=True)
    assert mm.counts.shape == (2, 2, 2)
    assert np.array_equal(mm.noncontact, [[3, 4], [4, 1]])
    assert np.array_equal(mm.contact, [[3, 2], [2, 1]])
    assert mm.counts.sum() == 5 * 4

def test_undirected_folds_onto_upper_triangle():
    mm = mixingm(_net(nx.Graph), "type")
    assert not mm.directed
    assert np.array_equal(mm.contact, [[3, 4], [0, 1]])
    full = mm.to_full()
    assert np.array_equal(full.noncontact, [[0, 2], [0, 0]])
    assert full.counts.sum() == 5 * 4 // 2

def test_directed_graph_treated_as_undirected():
    mm = mixingm(_net(), "type", full=True, directed=False)
    assert np.array_equal(mm.contact, [[3, 4], [0, 1]])
    assert mm.counts.sum() == 10

def test_loops_detected_and_counted():
    G = _net()
    G.add_edge(1, 1)
    mm = mixingm(G, "type", full=True)
    assert mm.loops
    assert np.array_equal(mm.contact, [[4, 2], [2, 1]])
    assert mm.counts.sum() == 5 * 5  # self-dyads allowed

def test_attribute_vector_instead_of_name():
    G = _net()
    mm = mixingm(G, ["a", "a", "a", "b", "b"])
    assert mm.ego_levels == ("a", "b")
    assert np.array_equal(mm.contact, [[3, 2], [2, 1]])

def test_different_row_and_column_attributes():
    G = nx.DiGraph()
    G.add_nodes_from([1, 2, 3, 4])
    G.add_edges_from([(1, 3), (2, 4), (4, 1)])
    ra = ["a", "a", "b", "b"]
    ca = ["x", "y", "x", "y"]
    mm = mixingm(G, ra, ca, full=True)
    assert mm.ego_levels == ("a", "b") and mm.alter_levels == ("x", "y")
    assert np.array_equal(mm.group_sizes, [[1, 1], [1, 1]])
    assert np.array_equal(mm.contact, [[1, 1], [1, 0]])
    # (a, x): ordered pairs (u != v) with u in {1, 2} and v in {1, 3}
    assert mm.counts[0, 0].sum() == 3
    assert mm.counts.sum() == 4 * 3

def test_multigraph_contact_ok_full_rejected():
    G = nx.MultiDiGraph(_net())
    G.add_edge(1, 2)
    mm = mixingm(G, "type")
    assert mm.contact[0, 0] == 4
    with pytest.raises(MultigraphError):
        mixingm(G, "type", full=True)

def test_missing_attribute_raises():
    G = _net()
    del G.nodes[3]["type"]
    with pytest.raises(GraphError):
        mixingm(G, "type")
    with pytest.raises(GraphError):
        mixingm(G, [1, 2])

def test_random_graph_invariants():
    rng = np.random.default_rng(7)
    G = nx.gnp_random_graph(40, 0.15, seed=3)
    groups = rng.integers(0, 3, size=40)
    mm = mixingm(G, groups, full=True)
    assert mm.counts.sum() == 40 * 39 // 2
    assert np.all(mm.counts >= 0)
    assert np.all(np.tril(mm.contact, -1) == 0)
    assert mm.contact.sum() == G.number_of_edges()

def test_to_frame_labels_layers():
    mm = mixingm(_net(), ["a", "a", "a", "b", "b"], full=True)
    ties = mm.to_frame()
    assert list(ties.index) == ["a", "b"] and list(ties.columns) == ["a", "b"]
    assert ties.loc["a", "b"] == 2
    assert mm.to_frame(layer=0).loc["a", "b"] == 4

def test_unorderable_or_missing_attribute_values():
    G = _net()
    with pytest.raises(GraphError):
        mixingm(G, [1, "a", 1, "a", 1])
    with pytest.raises(GraphError):
        mixingm(G, [1.0, float("nan"), 1.0, 2.0, 2.0])
    with pytest.raises(GraphError):
        mixingm(G, [1, None, 1, 2, 2])

def test_reciprocated_arcs_count_twice_when_treated_as_undirected():
    G = nx.DiGraph([(0, 1), (1, 0), (1, 2)])
    groups = ["a", "a", "b"]
    mm = mixingm(G, groups, directed=False)
    assert np.array_equal(mm.contact, [[2, 1], [0, 0]])
    with pytest.raises(MixingMatrixError):
        mixingm(G, groups, full=True, directed=False)
    # collapsing the mutual pair first gives one tie per connected pair
    full = mixingm(G.to_undirected(), groups, full=True)
    assert np.array_equal(full.contact, [[1, 1], [0, 0]])
    assert full.counts.sum() == 3
