# src/netseg/mixing/tables.py
"""
Array-level operations on mixing matrices.

A contact layer is a 2D array `cl[i, j]` counting ties from ego group i to
alter group j. A full mixing matrix is a 3D array of shape (R, C, 2) whose
last axis is tie status: `[..., 0]` disconnected dyads, `[..., 1]` ties.
"""
from __future__ import annotations
import logging
from typing import List, Union

import numpy as np

from netseg.errors import MixingMatrixError

logger = logging.getLogger(__name__)


def _square(m: np.ndarray, what: str) -> np.ndarray:
    m = np.asarray(m)
    if m.ndim != 2 or m.shape[0] != m.shape[1]:
        raise MixingMatrixError(f"{what} requires a square matrix, got shape {m.shape}")
    return m


def fold(m: np.ndarray, direction: str = "upper") -> np.ndarray:
    """
    Fold a square matrix onto one triangle: entries below (above) the
    diagonal are added to their mirror image, and the other triangle is zeroed.
    """
    m = _square(m, "fold")
    if direction == "upper":
        return np.triu(m) + np.tril(m, -1).T
    if direction == "lower":
        return np.tril(m) + np.triu(m, 1).T
    raise ValueError(f"direction must be 'upper' or 'lower', got {direction!r}")


def symmetrize(m: np.ndarray, base: str = "upper") -> np.ndarray:
    """Copy the `base` triangle onto the other one; the diagonal is kept."""
    m = _square(m, "symmetrize")
    if base == "upper":
        return np.triu(m) + np.triu(m, 1).T
    if base == "lower":
        return np.tril(m) + np.tril(m, -1).T
    raise ValueError(f"base must be 'upper' or 'lower', got {base!r}")


def valid_mm(m, square: bool = True, verbose: bool = False) -> Union[bool, List[str]]:
    """
    Check whether `m` looks like a mixing matrix.
    Returns True, or False / the list of problems (verbose=True).
    """
    if not isinstance(m, np.ndarray):
        raise MixingMatrixError("'m' is not an array")
    problems: List[str] = []
    dims = m.shape
    if len(dims) not in (2, 3):
        problems.append(f"'m' should have 2 or 3 dimensions, has {len(dims)}")
    if len(dims) == 3 and dims[2] != 2:
        problems.append(f"third dimension should have two values, has {dims[2]}")
    if square and len(dims) >= 2 and dims[0] != dims[1]:
        problems.append(f"dimensions 1 and 2 should be equal, are {dims[0]} and {dims[1]}")
    if not problems:
        return True
    return problems if verbose else False


def dyad_margin(gsizes: np.ndarray, directed: bool = True, loops: bool = False) -> np.ndarray:
    """
    Number of dyads available between every pair of groups.

    For a 1D `gsizes` (one attribute) the result is GxG. For a 2D cross-table
    of node counts (row attribute x column attribute) margins are first
    computed between the table cells, enumerated with the first dimension
    varying fastest, and then summed by (row level of ego, column level of alter).
    """
    gsizes = np.asarray(gsizes, dtype=float)
    if gsizes.ndim not in (1, 2):
        raise MixingMatrixError(f"group sizes must be 1D or 2D, got {gsizes.ndim}D")
    gs = gsizes if gsizes.ndim == 1 else gsizes.ravel(order="F")

    o = np.outer(gs, gs)
    mar = o.copy()
    if directed:
        if not loops:
            np.fill_diagonal(mar, np.diag(o) - gs)
    else:
        mar[np.tril_indices_from(mar, -1)] = 0
        if loops:
            np.fill_diagonal(mar, (np.diag(o) + gs) / 2)
        else:
            np.fill_diagonal(mar, (np.diag(o) - gs) / 2)

    if gsizes.ndim == 2:
        R, C = gsizes.shape
        # cell k <-> (row level k % R, column level k // R)
        row_of = np.arange(R * C) % R
        col_of = np.arange(R * C) // R
        collapsed = np.zeros((R, C), dtype=float)
        np.add.at(collapsed, (row_of[:, None], col_of[None, :]), mar)
        mar = collapsed
    return mar


def full_mm(cl, gsizes, directed: bool = True, loops: bool = False) -> np.ndarray:
    """
    Rebuild a full 3D mixing matrix from its contact layer and group sizes.

    `gsizes` is a vector of group sizes when `cl` is square and rows and
    columns classify nodes by the same attribute, otherwise a cross-table of
    nodes by the row attribute and the column attribute. A 3D `cl` is
    returned unchanged.
    """
    cl = np.asarray(cl)
    if cl.ndim == 3:
        if cl.shape[2] != 2:
            raise MixingMatrixError(f"third dimension should have two values, has {cl.shape[2]}")
        return cl
    if cl.ndim != 2:
        raise MixingMatrixError(f"contact layer should be 2D, has {cl.ndim} dimensions")

    gsizes = np.asarray(gsizes)
    if gsizes.ndim == 1:
        expected = (gsizes.size, gsizes.size)
    elif gsizes.ndim == 2:
        expected = gsizes.shape
    else:
        raise MixingMatrixError(f"group sizes must be 1D or 2D, got {gsizes.ndim}D")
    if cl.shape != tuple(expected):
        raise MixingMatrixError(
            f"contact layer shape {cl.shape} does not match group sizes {gsizes.shape}",
            context={"contact": cl.shape, "gsizes": gsizes.shape},
        )

    mar = dyad_margin(gsizes, directed=directed, loops=loops)
    noncontact = mar - cl
    if np.any(noncontact < 0):
        bad = [tuple(int(k) for k in ix) for ix in np.argwhere(noncontact < 0)]
        raise MixingMatrixError(
            "contact layer exceeds the number of available dyads",
            context={"cells": bad, "directed": directed, "loops": loops},
        )
    logger.debug("full mixing matrix: %d dyads, %d ties", int(mar.sum()), int(np.sum(cl)))

    out = np.stack([noncontact, cl], axis=-1)
    if np.issubdtype(cl.dtype, np.integer):
        out = np.rint(out).astype(cl.dtype)
    return out
