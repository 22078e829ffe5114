# src/netseg/metrics/assortativity.py
from __future__ import annotations
from typing import Optional

import numpy as np
import pandas as pd

from netseg.errors import MixingMatrixError
from netseg.graph import Attr
from netseg.metrics.common import as_mixing, require_square, safe_ratio


def assort(obj, vattr: Optional[Attr] = None, directed: Optional[bool] = None,
           loops: Optional[bool] = None) -> float:
    """
    Newman's assortativity coefficient for a categorical attribute:
        r = (sum_i e_ii - sum_i a_i b_i) / (1 - sum_i a_i b_i)
    with e the normalized contact layer and a, b its row and column sums.
    Undirected (folded) tables are symmetrized as m + m.T first.
    """
    mm = as_mixing(obj, vattr, directed=directed, loops=loops)
    require_square(mm, "assortativity")
    m = np.asarray(mm.contact, dtype=float)
    if not mm.directed:
        m = m + m.T
    total = m.sum()
    if total == 0:
        return float("nan")
    e = m / total
    ab = float(np.sum(e.sum(axis=1) * e.sum(axis=0)))
    return safe_ratio(float(np.trace(e)) - ab, 1.0 - ab)


def coleman(obj, vattr: Optional[Attr] = None, directed: Optional[bool] = None,
            loops: Optional[bool] = None) -> pd.Series:
    """
    Coleman's homophily index for every group.

    For group i with n_i members, c_i ties sent and s_i of them within group,
    the number of within-group ties expected under random choice is
    s*_i = c_i (n_i - 1) / (N - 1) (c_i n_i / N with loops). The index is
    (s_i - s*_i) / (c_i - s*_i) when s_i >= s*_i, else (s_i - s*_i) / s*_i,
    so it lies in [-1, 1].
    """
    mm = as_mixing(obj, vattr, directed=directed, loops=loops)
    require_square(mm, "Coleman's index")
    if mm.group_sizes is None:
        raise MixingMatrixError("Coleman's index needs group sizes; pass a graph or a MixingMatrix from mixingm")
    gs = np.asarray(mm.group_sizes, dtype=float)
    n = gs if gs.ndim == 1 else np.diag(gs)
    N = n.sum()

    m = np.asarray(mm.contact, dtype=float)
    if not mm.directed:
        m = m + m.T
    c = m.sum(axis=1)
    s = np.diag(m)
    if mm.loops:
        expected = c * n / N if N > 0 else np.zeros_like(c)
    else:
        expected = c * (n - 1) / (N - 1) if N > 1 else np.zeros_like(c)

    out = []
    for si, ci, xi in zip(s, c, expected):
        if si >= xi:
            out.append(safe_ratio(si - xi, ci - xi))
        else:
            out.append(safe_ratio(si - xi, xi))
    return pd.Series(out, index=pd.Index(mm.ego_levels, name="group"), name="coleman")
