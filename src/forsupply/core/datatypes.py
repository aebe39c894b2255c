
from __future__ import annotations
from enum import Enum
from typing import Optional
from pydantic import BaseModel, ConfigDict, Field

class Grade(BaseModel):
    """One cost/quantity tier of a resource supply curve."""
    model_config = ConfigDict(frozen=True)

    name: str = ""
    cost: float = Field(ge=0.0)
    available: float = Field(ge=0.0)

class ProductionStatus(str, Enum):
    NOT_OPERATING = "not_operating"
    NEW_INVESTMENT = "new_investment"
    ESTABLISHED = "established"

    @property
    def is_operating(self) -> bool:
        return self is not ProductionStatus.NOT_OPERATING

    @property
    def is_new_investment(self) -> bool:
        return self is ProductionStatus.NEW_INVESTMENT

class ForestProductionState(BaseModel):
    interest_rate: float = Field(default=0.02, ge=0.0)
    rotation_period_years: int = 0  # set from the sector at completion
    future_production_target: Optional[float] = None
    cal_output: Optional[float] = None
    cal_yield: Optional[float] = Field(default=None, gt=0.0)
    cal_observed_yield: float = 0.0
    cal_land_used: float = 0.0
    ag_prod_change: float = 0.0

    @property
    def is_calibrated(self) -> bool:
        return self.cal_output is not None and self.cal_yield is not None
