# src/netseg/mixing/frame.py
from __future__ import annotations
from typing import Union

import numpy as np
import pandas as pd
import networkx as nx

from netseg.mixing.matrix import MixingMatrix, mixingm


def mixingdf(obj: Union[MixingMatrix, nx.Graph, np.ndarray], *args, **kwargs) -> pd.DataFrame:
    """
    Non-zero entries of a mixing matrix as a long DataFrame with columns
    [ego, alter, n], plus `tie` (False/True) for a full mixing matrix.
    A graph is first passed through `mixingm` with the remaining arguments;
    a plain 2D or 3D table is labelled with groups 0..G-1.
    """
    if isinstance(obj, MixingMatrix):
        mm = obj
    elif isinstance(obj, nx.Graph):
        mm = mixingm(obj, *args, **kwargs)
    else:
        mm = MixingMatrix.from_array(obj)
    rows = []
    for i, ego in enumerate(mm.ego_levels):
        for j, alter in enumerate(mm.alter_levels):
            if mm.full:
                for t in (0, 1):
                    rows.append({"ego": ego, "alter": alter, "tie": bool(t), "n": int(mm.counts[i, j, t])})
            else:
                rows.append({"ego": ego, "alter": alter, "n": int(mm.counts[i, j])})
    columns = ["ego", "alter", "tie", "n"] if mm.full else ["ego", "alter", "n"]
    df = pd.DataFrame(rows, columns=columns)
    return df[df["n"] != 0].reset_index(drop=True)
