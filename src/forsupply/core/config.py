# forsupply/core/config.py
from __future__ import annotations
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional
import pathlib
import yaml

# ---------- leaf configs ----------
@dataclass
class ModelTimeConfig:
    start_year: int = 1975
    timesteps: List[int] = field(default_factory=lambda: [15] * 9)

@dataclass
class TechnologyConfig:
    name: str = "Forest"
    kind: str = "forest"
    land_type: str = "Forest"
    year: int = 1975
    lifetime: Optional[int] = None  # None = operates to the end of the run
    interest_rate: float = 0.02
    future_production: Optional[float] = None
    cal_output: Optional[float] = None
    cal_yield: Optional[float] = None
    ag_prod_change: float = 0.0
    variable_cost: float = 0.0

@dataclass
class SectorConfig:
    name: str = "Pulp"
    rotation_period: int = 0
    technologies: List[TechnologyConfig] = field(default_factory=list)

    def __post_init__(self):
        self.technologies = [_as(TechnologyConfig, t) for t in self.technologies]

@dataclass
class SubResourceConfig:
    name: str = "biomass"
    max_sub_resource: float = 0.0
    gdp_supply_elasticity: float = 0.0
    sub_resource_variance: float = 0.0
    sub_resource_capacity_factor: float = 0.0
    grades: List[Dict[str, Any]] = field(default_factory=list)
    grades_csv: Optional[str] = None

@dataclass
class LandConfig:
    total_land: Dict[str, float] = field(default_factory=dict)   # land type -> area
    yields: Dict[str, float] = field(default_factory=dict)       # technology -> initial yield

@dataclass
class SolverConfig:
    iterations: int = 1

@dataclass
class RunConfig:
    log_level: str = "INFO"
    out_dir: str = "runs/minimal"

# ---------- helpers ----------
def _as(cls, obj, defaults: Optional[Dict[str, Any]] = None):
    """Coerce a possibly-dict `obj` into dataclass `cls` (overlaying defaults)."""
    if isinstance(obj, cls):
        return obj
    if isinstance(obj, dict):
        base = {} if defaults is None else dict(defaults)
        base.update(obj)
        return cls(**base)  # type: ignore[arg-type]
    # nothing provided: build from defaults or empty
    return cls(**({} if defaults is None else defaults))  # type: ignore[arg-type]

# ---------- top-level ----------
@dataclass
class ForsupplyConfig:
    region: str = "USA"
    modeltime: ModelTimeConfig = field(default_factory=ModelTimeConfig)
    sectors: List[SectorConfig] = field(default_factory=list)
    resources: List[SubResourceConfig] = field(default_factory=list)
    land: LandConfig = field(default_factory=LandConfig)
    prices: Dict[str, List[float]] = field(default_factory=dict)  # commodity -> price per period
    solver: SolverConfig = field(default_factory=SolverConfig)
    run: RunConfig = field(default_factory=RunConfig)

    def __post_init__(self):
        # Coerce any stray dicts into the right dataclasses
        self.modeltime = _as(ModelTimeConfig, self.modeltime)
        self.sectors = [_as(SectorConfig, s) for s in (self.sectors or [])]
        self.resources = [_as(SubResourceConfig, r) for r in (self.resources or [])]
        self.land = _as(LandConfig, self.land)
        self.solver = _as(SolverConfig, self.solver)
        self.run = _as(RunConfig, self.run)

    @classmethod
    def from_dict(cls, d: Dict[str, Any]) -> "ForsupplyConfig":
        d = d or {}
        return cls(**d)

def load_config(path_or_dict: str | Dict[str, Any] | ForsupplyConfig) -> ForsupplyConfig:
    """Accept YAML path, dict, or ForsupplyConfig; always return a fully-typed ForsupplyConfig."""
    if isinstance(path_or_dict, ForsupplyConfig):
        return path_or_dict
    if isinstance(path_or_dict, dict):
        return ForsupplyConfig.from_dict(path_or_dict)
    path = pathlib.Path(path_or_dict)
    with path.open("r") as f:
        d = yaml.safe_load(f) or {}
    return ForsupplyConfig.from_dict(d)
