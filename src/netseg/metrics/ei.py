# src/netseg/metrics/ei.py
from __future__ import annotations
from typing import Optional

import numpy as np

from netseg.graph import Attr
from netseg.metrics.common import as_mixing, require_square


def ei(obj, vattr: Optional[Attr] = None, directed: Optional[bool] = None,
       loops: Optional[bool] = None) -> float:
    """
    Krackhardt & Stern's E-I index: share of external (between-group) ties
    minus share of internal (within-group) ties. Lies in [-1, 1]; -1 means
    all ties are internal. Returns nan for a network without ties.

    Reference: Krackhardt, D., & Stern, R. N. (1988). Informal networks and
    organizational crises. Social Psychology Quarterly, 123-140.
    """
    mm = as_mixing(obj, vattr, directed=directed, loops=loops)
    require_square(mm, "E-I index")
    m = np.asarray(mm.contact, dtype=float)
    total = m.sum()
    if total == 0:
        return float("nan")
    p = m / total
    internal = float(np.trace(p))
    external = float(p.sum()) - internal
    return external - internal
