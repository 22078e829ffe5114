# src/netseg/metrics/common.py
from __future__ import annotations
from typing import Optional

import numpy as np
import networkx as nx

from netseg.errors import MixingMatrixError
from netseg.graph import Attr
from netseg.mixing.matrix import MixingMatrix, mixingm
from netseg.mixing.tables import symmetrize


def as_mixing(
    obj,
    vattr: Optional[Attr] = None,
    *,
    full: bool = False,
    directed: Optional[bool] = None,
    loops: Optional[bool] = None,
) -> MixingMatrix:
    """
    Coerce a graph, MixingMatrix or plain array into a MixingMatrix.

    Graphs need `vattr`. Plain 2D/3D arrays are taken as tables over groups
    0..G-1; `directed=False` marks them as folded undirected tables. For a
    MixingMatrix, `directed` and `loops` must agree with how it was built.
    """
    if isinstance(obj, nx.Graph):
        if vattr is None:
            raise MixingMatrixError("a vertex attribute is required to compute indices for a graph")
        mm = mixingm(obj, vattr, full=full, directed=directed, loops=loops)
    elif isinstance(obj, MixingMatrix):
        for name, given, stored in (("directed", directed, obj.directed), ("loops", loops, obj.loops)):
            if given is not None and bool(given) != stored:
                raise MixingMatrixError(
                    f"{name}={given} contradicts the mixing matrix, which was built with {name}={stored}",
                    context={name: stored},
                )
        mm = obj.to_full() if full else obj
    else:
        mm = MixingMatrix.from_array(obj, directed=directed, loops=loops)
        if full and not mm.full:
            raise MixingMatrixError("this index needs a full (3D) mixing matrix")
    return mm


def require_square(mm: MixingMatrix, what: str) -> None:
    if mm.counts.shape[0] != mm.counts.shape[1]:
        raise MixingMatrixError(f"{what} requires a square mixing matrix, got {mm.counts.shape[:2]}")


def undirected_view(m: np.ndarray, directed: bool) -> np.ndarray:
    """Folded upper-triangle layer mirrored onto the lower triangle."""
    return m if directed else symmetrize(m, "upper")


def safe_ratio(num: float, den: float) -> float:
    if den == 0:
        return float("nan")
    return float(num / den)
