# tests/test_frame.py
import numpy as np
import networkx as nx
import pytest
from netseg.errors import MixingMatrixError
from netseg.mixing.frame import mixingdf
from netseg.mixing.matrix import mixingm
from netseg.mixing.tables import full_mm

def _net():
    G = nx.DiGraph([(1, 2), (1, 3), (2, 3), (4, 5), (1, 4), (1, 5), (4, 2), (5, 3)])
    nx.set_node_attributes(G, {1: "Boy", 2: "Boy", 3: "Boy", 4: "Girl", 5: "Girl"}, "gender")
    return G

def test_mixingdf_contact_layer():
    df = mixingdf(_net(), "gender")
    assert list(df.columns) == ["ego", "alter", "n"]
    assert df["n"].sum() == 8
    row = df[(df["ego"] == "Boy") & (df["alter"] == "Girl")]
    assert int(row["n"].iloc[0]) == 2

def test_mixingdf_full_drops_zero_cells():
    G = nx.Graph(_net())
    df = mixingdf(G, "gender", full=True)
    assert list(df.columns) == ["ego", "alter", "tie", "n"]
    assert (df["n"] != 0).all()
    assert df["n"].sum() == 10
    # folded: nothing recorded from Girl to Boy
    assert df[(df["ego"] == "Girl") & (df["alter"] == "Boy")].empty

def test_mixingdf_from_matrix():
    mm = mixingm(_net(), "gender", full=True)
    df = mixingdf(mm)
    assert len(df) == 8
    assert set(df["tie"]) == {False, True}

def test_mixingdf_from_plain_tables():
    df = mixingdf(np.array([[3, 2], [2, 0]]))
    assert list(df.columns) == ["ego", "alter", "n"]
    assert len(df) == 3 and df["n"].sum() == 7
    assert set(df["ego"]) == {0, 1}
    full = full_mm(np.array([[3, 2], [2, 1]]), [3, 2])
    df3 = mixingdf(full)
    assert list(df3.columns) == ["ego", "alter", "tie", "n"]
    assert len(df3) == 8 and df3["n"].sum() == 20

def test_mixingdf_rejects_malformed_tables():
    with pytest.raises(MixingMatrixError):
        mixingdf(np.zeros((2, 2, 3)))
    with pytest.raises(MixingMatrixError):
        mixingdf(np.zeros(4))
