# src/netseg/mixing/__init__.py
from .tables import fold, symmetrize, valid_mm, dyad_margin, full_mm
from .matrix import MixingMatrix, mixingm
from .frame import mixingdf
