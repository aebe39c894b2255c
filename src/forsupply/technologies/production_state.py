
from __future__ import annotations
from dataclasses import dataclass
from typing import Optional
from ..core.datatypes import ProductionStatus
from ..core.modeltime import ModelTime

@dataclass
class VintageProductionState:
    """Status of a technology vintage: new in its own year, established until retirement."""
    modeltime: ModelTime
    year: int
    lifetime: Optional[int] = None

    def status(self, period: int) -> ProductionStatus:
        yr = self.modeltime.per_to_yr(period)
        if yr < self.year:
            return ProductionStatus.NOT_OPERATING
        if yr == self.year:
            return ProductionStatus.NEW_INVESTMENT
        if self.lifetime is not None and yr >= self.year + self.lifetime:
            return ProductionStatus.NOT_OPERATING
        return ProductionStatus.ESTABLISHED
