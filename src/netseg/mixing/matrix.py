# src/netseg/mixing/matrix.py
"""
Network mixing matrices.

A mixing matrix cross-classifies ties by the value of a vertex attribute of
the tie sender (ego, rows) and the tie receiver (alter, columns). Its
diagonal counts ties *within* groups. The full mixing matrix adds a third
axis with the status of the dyad (disconnected / connected), so that it
cross-classifies all dyads of the network; the two-dimensional version is
its contact layer.
"""
from __future__ import annotations
import logging
from dataclasses import dataclass
from typing import Any, Optional, Sequence, Tuple

import numpy as np
import pandas as pd
import networkx as nx

from netseg.errors import GraphError, MixingMatrixError, MultigraphError
from netseg.graph import Attr, edge_index, has_loops, has_multiple, vertex_attribute
from netseg.mixing.tables import fold, full_mm, valid_mm

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class MixingMatrix:
    """
    Labelled mixing matrix: 2D contact layer or 3D (R, C, 2) full matrix.
    `group_sizes` is a vector (square, same attribute) or an R x C cross-table.
    """
    counts: np.ndarray
    ego_levels: Tuple[Any, ...]
    alter_levels: Tuple[Any, ...]
    group_sizes: Optional[np.ndarray] = None
    directed: bool = True
    loops: bool = False

    def __post_init__(self):
        shape = self.counts.shape
        if self.counts.ndim not in (2, 3) or shape[:2] != (len(self.ego_levels), len(self.alter_levels)):
            raise MixingMatrixError(
                f"counts of shape {shape} do not match {len(self.ego_levels)}x{len(self.alter_levels)} levels"
            )
        if self.counts.ndim == 3 and shape[2] != 2:
            raise MixingMatrixError(f"third dimension should have two values, has {shape[2]}")

    @classmethod
    def from_array(cls, obj, directed: Optional[bool] = None, loops: Optional[bool] = None) -> "MixingMatrix":
        """
        Wrap a plain 2D contact layer or 3D full table with groups labelled
        0..G-1. `directed=False` marks a table folded onto the upper triangle.
        """
        counts = np.asarray(obj)
        problems = valid_mm(counts, square=False, verbose=True)
        if problems is not True:
            raise MixingMatrixError("; ".join(problems))
        return cls(counts, tuple(range(counts.shape[0])), tuple(range(counts.shape[1])),
                   directed=True if directed is None else bool(directed),
                   loops=bool(loops))

    @property
    def full(self) -> bool:
        return self.counts.ndim == 3

    @property
    def contact(self) -> np.ndarray:
        """Ties only."""
        return self.counts[:, :, 1] if self.full else self.counts

    @property
    def noncontact(self) -> np.ndarray:
        if not self.full:
            raise MixingMatrixError("non-contact layer is only available for a full mixing matrix")
        return self.counts[:, :, 0]

    def to_full(self) -> "MixingMatrix":
        """Full version of this matrix, rebuilt from the stored group sizes."""
        if self.full:
            return self
        if self.group_sizes is None:
            raise MixingMatrixError("group sizes are needed to build the full mixing matrix")
        counts = full_mm(self.counts, self.group_sizes, directed=self.directed, loops=self.loops)
        return MixingMatrix(counts, self.ego_levels, self.alter_levels,
                            self.group_sizes, self.directed, self.loops)

    def to_frame(self, layer: int = 1) -> pd.DataFrame:
        """One layer as a DataFrame with ego levels as index and alter levels as columns."""
        m = self.counts[:, :, layer] if self.full else self.counts
        return pd.DataFrame(m, index=pd.Index(self.ego_levels, name="ego"),
                            columns=pd.Index(self.alter_levels, name="alter"))


def _levels(values: np.ndarray) -> Tuple[Any, ...]:
    try:
        return tuple(sorted(set(values.tolist())))
    except TypeError as exc:
        kinds = sorted({type(v).__name__ for v in values})
        raise GraphError(
            "attribute values cannot be ordered into groups; use values of a single type",
            context={"types": kinds},
        ) from exc


def _codes(values: np.ndarray, levels: Sequence[Any]) -> np.ndarray:
    lookup = {v: k for k, v in enumerate(levels)}
    return np.array([lookup[v] for v in values], dtype=int)


def contact_layer(ego: np.ndarray, alter: np.ndarray, n_ego: int, n_alter: int) -> np.ndarray:
    """Cross-tabulate ego and alter group codes of the ties."""
    out = np.zeros((n_ego, n_alter), dtype=int)
    np.add.at(out, (ego, alter), 1)
    return out


def group_sizes(row_codes: np.ndarray, col_codes: np.ndarray, n_rows: int, n_cols: int) -> np.ndarray:
    """Cross-table of nodes by row and column group."""
    out = np.zeros((n_rows, n_cols), dtype=int)
    np.add.at(out, (row_codes, col_codes), 1)
    return out


def mixingm(
    G: nx.Graph,
    rattr: Attr,
    cattr: Optional[Attr] = None,
    full: bool = False,
    directed: Optional[bool] = None,
    loops: Optional[bool] = None,
) -> MixingMatrix:
    """
    Mixing matrix of graph `G`.

    `rattr` classifies the ego (rows), `cattr` the alter (columns) and
    defaults to `rattr`. Both are node attribute names or per-node vectors.
    `directed` defaults to the graph's directedness, `loops` to whether the
    graph contains any self-loop. For undirected networks the contact layer
    is folded onto the upper triangle. With `directed=False` on a directed
    graph every arc is still counted, so a reciprocated pair gives two ties
    and the full matrix is rejected; convert with G.to_undirected() first to
    count each connected pair once.

    With `full=True` the result is the GxGx2 dyad census built by `full_mm`.
    """
    if directed is None:
        directed = G.is_directed()
    if loops is None:
        loops = has_loops(G)
    if full and has_multiple(G):
        raise MultigraphError(
            "don't know how to compute mixing matrix for a multigraph; "
            "collapse parallel edges first, e.g. nx.Graph(G) or nx.DiGraph(G)"
        )

    same = cattr is None or cattr is rattr
    ra = vertex_attribute(G, rattr)
    ca = ra if same else vertex_attribute(G, cattr)
    rlev, clev = _levels(ra), _levels(ca)
    rcodes, ccodes = _codes(ra, rlev), _codes(ca, clev)

    E = edge_index(G)
    con = contact_layer(rcodes[E[:, 0]], ccodes[E[:, 1]], len(rlev), len(clev))
    if not directed:
        con = fold(con, "upper")

    if same:
        gs = np.bincount(rcodes, minlength=len(rlev))
    else:
        gs = group_sizes(rcodes, ccodes, len(rlev), len(clev))

    logger.debug("mixing matrix %dx%d from %d edges (directed=%s, loops=%s)",
                 len(rlev), len(clev), E.shape[0], directed, loops)
    mm = MixingMatrix(con, rlev, clev, gs, bool(directed), bool(loops))
    return mm.to_full() if full else mm
