# src/netseg/scenarios.py
from __future__ import annotations
from pathlib import Path
from typing import List, Literal, Optional
import os

import yaml
from pydantic import BaseModel, Field, ValidationError, field_validator

from netseg.errors import ConfigError

Measure = Literal["ei", "assort", "freeman", "orwg", "gamix"]
SCALAR_MEASURES: tuple = ("ei", "assort", "freeman", "orwg", "gamix")


# ---------- Typed configuration (validated) ----------

class MixingParams(BaseModel):
    directed: Optional[bool] = Field(None, description="None = take from the graph")
    loops: Optional[bool] = Field(None, description="None = True iff the graph has a self-loop")


class ReportParams(BaseModel):
    vattr: str = Field(..., min_length=1, description="Vertex attribute defining the groups")
    measures: List[Measure] = Field(default_factory=lambda: list(SCALAR_MEASURES))
    results_dir: str = "results"
    write_panel: bool = True
    full_panel: bool = False

    @field_validator("measures")
    @classmethod
    def _unique_measures(cls, v):
        if not v:
            raise ValueError("at least one measure is required")
        if len(set(v)) != len(v):
            raise ValueError("measures must not repeat")
        return v


class SegConfig(BaseModel):
    mixing: MixingParams = MixingParams()
    report: ReportParams


# ---------- Loading & merging ----------

def _deep_merge(base: dict, override: dict) -> dict:
    out = dict(base)
    for k, v in override.items():
        if k in out and isinstance(out[k], dict) and isinstance(v, dict):
            out[k] = _deep_merge(out[k], v)
        else:
            out[k] = v
    return out


def _read_yaml(path: Path) -> dict:
    try:
        with path.open("r") as f:
            data = yaml.safe_load(f) or {}
    except (OSError, yaml.YAMLError) as exc:
        raise ConfigError(f"cannot read config {path}: {exc}", context={"path": str(path)}) from exc
    if not isinstance(data, dict):
        raise ConfigError(f"config {path} must hold a mapping", context={"path": str(path)})
    return data


def load_config(config_path: os.PathLike | str) -> SegConfig:
    """
    Load a YAML config, merged over base.yaml from the same directory
    when that file exists. Returns a validated SegConfig.
    """
    path = Path(config_path).resolve()
    base_path = path.parent / "base.yaml"
    merged = _read_yaml(path)
    if base_path.exists() and base_path != path:
        merged = _deep_merge(_read_yaml(base_path), merged)
    try:
        return SegConfig.model_validate(merged)
    except ValidationError as exc:
        raise ConfigError(f"invalid config {path}:\n{exc}", context={"path": str(path)}) from exc


# ---------- Convenience helpers ----------

def config_summary(cfg: SegConfig) -> str:
    d = cfg.mixing.directed
    lp = cfg.mixing.loops
    return (
        f"[netseg] vattr={cfg.report.vattr} | measures={','.join(cfg.report.measures)} | "
        f"directed={'auto' if d is None else d}, loops={'auto' if lp is None else lp} | "
        f"results_dir={cfg.report.results_dir}"
    )
