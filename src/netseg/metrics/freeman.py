# src/netseg/metrics/freeman.py
from __future__ import annotations
from typing import Optional

import numpy as np

from netseg.graph import Attr
from netseg.metrics.common import as_mixing, require_square


def freeman(obj, vattr: Optional[Attr] = None, directed: Optional[bool] = None,
            loops: Optional[bool] = None) -> float:
    """
    Freeman's segregation index (pi - p) / pi, where p is the observed share
    of between-group ties and pi the share of between-group dyads, i.e. the
    share expected if ties were placed at random. 0 means no segregation,
    1 means no between-group ties at all; negative values indicate more
    between-group ties than expected.
    """
    mm = as_mixing(obj, vattr, full=True, directed=directed, loops=loops)
    require_square(mm, "Freeman's index")
    tie = np.asarray(mm.contact, dtype=float)
    dyads = tie + np.asarray(mm.noncontact, dtype=float)
    n_ties, n_dyads = tie.sum(), dyads.sum()
    if n_ties == 0 or n_dyads == 0:
        return float("nan")
    p = (n_ties - np.trace(tie)) / n_ties
    pi = (n_dyads - np.trace(dyads)) / n_dyads
    if pi == 0:
        return float("nan")
    return float((pi - p) / pi)
