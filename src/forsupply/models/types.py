# src/forsupply/models/types.py
from dataclasses import dataclass, field, asdict
from typing import Any, Dict, List, Optional

@dataclass
class TechnologyPeriodResult:
    period: int
    year: int
    sector: str
    technology: str
    status: str
    output: float = 0.0
    land: float = 0.0
    land_bid: Optional[float] = None
    future_supply: float = 0.0

@dataclass
class ResourcePeriodResult:
    period: int
    year: int
    resource: str
    price: float
    cumulative: float
    annual: float

@dataclass
class SimResult:
    technologies: List[TechnologyPeriodResult] = field(default_factory=list)
    resources: List[ResourcePeriodResult] = field(default_factory=list)

    def rows(self) -> List[Dict[str, Any]]:
        """Flat records for tabular output; one row per technology or resource per period."""
        out: List[Dict[str, Any]] = []
        for r in self.technologies:
            out.append({"kind": "technology", **asdict(r)})
        for r in self.resources:
            out.append({"kind": "resource", **asdict(r)})
        return out
