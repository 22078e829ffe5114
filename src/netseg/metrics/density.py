# src/netseg/metrics/density.py
"""Indices computed from tie densities of the full mixing matrix."""
from __future__ import annotations
from typing import Optional, Tuple

import numpy as np
import pandas as pd

from netseg.graph import Attr
from netseg.metrics.common import as_mixing, require_square, safe_ratio, undirected_view
from netseg.mixing.matrix import MixingMatrix


def _layers(mm: MixingMatrix) -> Tuple[np.ndarray, np.ndarray]:
    """(non-ties, ties) as float arrays, mirrored for undirected tables."""
    non = undirected_view(np.asarray(mm.noncontact, dtype=float), mm.directed)
    tie = undirected_view(np.asarray(mm.contact, dtype=float), mm.directed)
    return non, tie


def _density(ties: np.ndarray, dyads: np.ndarray) -> np.ndarray:
    return np.divide(ties, dyads, out=np.zeros_like(ties), where=dyads > 0)


def orwg(obj, vattr: Optional[Attr] = None, directed: Optional[bool] = None,
         loops: Optional[bool] = None) -> float:
    """
    Odds ratio of within-group ties: odds that a within-group dyad is
    connected divided by the odds that a between-group dyad is connected.
    Values above 1 mean ties concentrate within groups.
    """
    mm = as_mixing(obj, vattr, full=True, directed=directed, loops=loops)
    require_square(mm, "odds ratio of within-group ties")
    non = np.asarray(mm.noncontact, dtype=float)
    tie = np.asarray(mm.contact, dtype=float)
    w_tie, w_non = np.trace(tie), np.trace(non)
    b_tie, b_non = tie.sum() - w_tie, non.sum() - w_non
    return safe_ratio(safe_ratio(w_tie, w_non), safe_ratio(b_tie, b_non))


def gamix(obj, vattr: Optional[Attr] = None, directed: Optional[bool] = None,
          loops: Optional[bool] = None) -> float:
    """
    Gupta-Anderson-May measure of within-group mixing:
        Q = (sum_i r_ii - 1) / (G - 1)
    where r is the matrix of tie densities normalized to unit row sums.
    Q = 1 for complete segregation, 0 for proportionate mixing and
    -1 / (G - 1) at the disassortative extreme.
    """
    mm = as_mixing(obj, vattr, full=True, directed=directed, loops=loops)
    require_square(mm, "Gupta-Anderson-May index")
    G = mm.counts.shape[0]
    if G < 2:
        return float("nan")
    non, tie = _layers(mm)
    d = _density(tie, non + tie)
    rs = d.sum(axis=1, keepdims=True)
    if np.any(rs == 0):
        return float("nan")
    r = d / rs
    return float((np.trace(r) - 1.0) / (G - 1))


def smi(obj, vattr: Optional[Attr] = None, directed: Optional[bool] = None,
        loops: Optional[bool] = None) -> pd.Series:
    """
    Freshtman's segregation matrix index for every group:
        SMI_i = (d_ii - d_io) / (d_ii + d_io)
    with d_ii the density of ties within group i and d_io the density of ties
    from group i to all other groups. Ranges from -1 to 1.
    """
    mm = as_mixing(obj, vattr, full=True, directed=directed, loops=loops)
    require_square(mm, "segregation matrix index")
    non, tie = _layers(mm)
    dyads = non + tie
    out = []
    for i in range(tie.shape[0]):
        d_in = safe_ratio(tie[i, i], dyads[i, i])
        d_out = safe_ratio(tie[i].sum() - tie[i, i], dyads[i].sum() - dyads[i, i])
        out.append(safe_ratio(d_in - d_out, d_in + d_out))
    return pd.Series(out, index=pd.Index(mm.ego_levels, name="group"), name="smi")
