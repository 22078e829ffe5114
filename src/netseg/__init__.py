# src/netseg/__init__.py
"""Network segregation and homophily statistics over networkx graphs."""
from .errors import NetsegError, ConfigError, GraphError, MixingMatrixError, MultigraphError
from .mixing import MixingMatrix, mixingm, full_mm, fold, symmetrize, valid_mm, mixingdf
from .metrics import ei, assort, coleman, freeman, gamix, orwg, smi, ssi, summarize
from .scenarios import SegConfig, load_config

__version__ = "0.1.0"
