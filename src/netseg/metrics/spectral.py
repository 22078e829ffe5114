# src/netseg/metrics/spectral.py
from __future__ import annotations

import numpy as np
import pandas as pd
import networkx as nx

from netseg.errors import GraphError
from netseg.graph import Attr, node_order, vertex_attribute


def ssi(G: nx.Graph, vattr: Attr) -> pd.Series:
    """
    Echenique & Fryer's spectral segregation index for every node.

    Let B[i, j] = a_ij / d_i for nodes i, j of the same group (d_i is the
    total degree of i) and 0 otherwise. For every connected component C of
    the same-group subgraph the largest eigenvalue of B restricted to C is
    the segregation of C; node values are the entries of the matching
    eigenvector, scaled so that their mean over C equals that eigenvalue.
    Nodes without same-group neighbours get 0.

    Reference: Echenique, F., & Fryer Jr, R. G. (2007). A measure of
    segregation based on social interactions. QJE, 122(2), 441-485.
    """
    if G.is_directed():
        raise GraphError("spectral segregation index is defined for undirected graphs only")
    nodes = node_order(G)
    a = vertex_attribute(G, vattr)
    A = nx.to_numpy_array(G, nodelist=nodes, weight=None)
    deg = A.sum(axis=1)

    same = a[:, None] == a[None, :]
    W = np.where(same, A, 0.0)
    B = np.divide(W, deg[:, None], out=np.zeros_like(W), where=deg[:, None] > 0)

    within = nx.Graph()
    within.add_nodes_from(range(len(nodes)))
    within.add_edges_from(zip(*np.nonzero(W)))

    out = np.zeros(len(nodes), dtype=float)
    for comp in nx.connected_components(within):
        idx = sorted(comp)
        Bc = B[np.ix_(idx, idx)]
        vals, vecs = np.linalg.eig(Bc)
        k = int(np.argmax(vals.real))
        lam = float(vals.real[k])
        x = np.abs(vecs[:, k].real)
        if lam <= 0 or x.sum() == 0:
            continue
        out[idx] = x * lam * len(idx) / x.sum()
    return pd.Series(out, index=pd.Index(nodes, name="node"), name="ssi")
