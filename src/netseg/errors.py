# src/netseg/errors.py
"""Error hierarchy for netseg."""
from __future__ import annotations
from typing import Any, Mapping, Optional


class NetsegError(Exception):
    """Base exception for netseg failures."""

    def __init__(self, message: str, *, context: Optional[Mapping[str, Any]] = None) -> None:
        super().__init__(message)
        self.context = dict(context) if context else {}

    def log_message(self) -> str:
        if not self.context:
            return str(self)
        return f"{self}: {self.context}"


class ConfigError(NetsegError):
    """Configuration loading or validation error."""


class GraphError(NetsegError, ValueError):
    """Graph or vertex attribute cannot be used as given."""


class MixingMatrixError(NetsegError, ValueError):
    """Malformed or inconsistent mixing matrix."""


class MultigraphError(MixingMatrixError):
    """Full mixing matrix requested for a graph with parallel edges."""


__all__ = [
    "NetsegError",
    "ConfigError",
    "GraphError",
    "MixingMatrixError",
    "MultigraphError",
]
