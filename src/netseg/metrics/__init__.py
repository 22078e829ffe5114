# src/netseg/metrics/__init__.py
# (intentional: expose small convenience surface)
from .ei import ei
from .assortativity import assort, coleman
from .freeman import freeman
from .density import gamix, orwg, smi
from .spectral import ssi
from .logging import compute_graph_metrics, write_mixing_panel, write_summary, summarize
