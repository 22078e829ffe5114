# src/netseg/metrics/logging.py
from __future__ import annotations
import logging
from pathlib import Path
from typing import Mapping, Optional, Sequence

import pandas as pd
import networkx as nx

from netseg.errors import NetsegError
from netseg.graph import Attr
from netseg.logging_utils import log_exception
from netseg.mixing.frame import mixingdf
from netseg.mixing.matrix import MixingMatrix, mixingm
from netseg.scenarios import SCALAR_MEASURES, SegConfig, config_summary
from .assortativity import assort
from .density import gamix, orwg
from .ei import ei
from .freeman import freeman

logger = logging.getLogger(__name__)

_MEASURES = {
    "ei": ei,
    "assort": assort,
    "freeman": freeman,
    "orwg": orwg,
    "gamix": gamix,
}
_FULL_MEASURES = {"freeman", "orwg", "gamix"}


def compute_graph_metrics(
    G: nx.Graph,
    vattr: Attr,
    measures: Sequence[str] = SCALAR_MEASURES,
    directed: Optional[bool] = None,
    loops: Optional[bool] = None,
) -> dict:
    """
    Scalar segregation indices for one graph, computed off a single mixing
    matrix. The full dyad census is only built when a requested measure needs it.
    """
    unknown = [m for m in measures if m not in _MEASURES]
    if unknown:
        raise NetsegError(f"unknown measure(s): {', '.join(unknown)}")
    needs_full = any(m in _FULL_MEASURES for m in measures)
    mm = mixingm(G, vattr, full=needs_full, directed=directed, loops=loops)
    row = {
        "nodes": G.number_of_nodes(),
        "edges": G.number_of_edges(),
        "groups": len(mm.ego_levels),
        "directed": mm.directed,
        "loops": mm.loops,
    }
    for name in measures:
        row[name] = _MEASURES[name](mm)
    return row


def write_mixing_panel(results_dir: Path, name: str, mm: MixingMatrix) -> None:
    """Append the non-zero cells of `mm` to logs/mixing_panel.csv."""
    panel_dir = Path(results_dir) / "logs"
    panel_dir.mkdir(parents=True, exist_ok=True)
    df = mixingdf(mm)
    df.insert(0, "graph", name)
    if "tie" not in df.columns:
        df.insert(3, "tie", True)
    path = panel_dir / "mixing_panel.csv"
    header = not path.exists()
    df.to_csv(path, mode="a", index=False, header=header)


def write_summary(results_dir: Path, rows: list[dict]) -> Path:
    out_dir = Path(results_dir) / "logs"
    out_dir.mkdir(parents=True, exist_ok=True)
    path = out_dir / "summary.csv"
    pd.DataFrame(rows).to_csv(path, index=False)
    return path


def summarize(graphs: Mapping[str, nx.Graph], cfg: SegConfig) -> pd.DataFrame:
    """
    Compute the configured indices for every named graph, write
    logs/summary.csv (and optionally logs/mixing_panel.csv) under
    cfg.report.results_dir, and return the summary table.
    """
    logger.info(config_summary(cfg))
    results_dir = Path(cfg.report.results_dir)
    rows: list[dict] = []
    for name, G in graphs.items():
        try:
            row = compute_graph_metrics(G, cfg.report.vattr, cfg.report.measures,
                                        directed=cfg.mixing.directed, loops=cfg.mixing.loops)
            if cfg.report.write_panel:
                mm = mixingm(G, cfg.report.vattr, full=cfg.report.full_panel,
                             directed=cfg.mixing.directed, loops=cfg.mixing.loops)
                write_mixing_panel(results_dir, name, mm)
        except NetsegError as exc:
            log_exception(logger, exc)
            raise
        logger.debug("graph %s: %s", name, row)
        rows.append({"graph": name, **row})
    path = write_summary(results_dir, rows)
    logger.info("Saved segregation summary for %d graph(s) to %s", len(rows), path)
    return pd.DataFrame(rows)
