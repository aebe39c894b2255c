
from __future__ import annotations
from typing import Dict, Iterable, Optional
from loguru import logger
from ..core.config import SubResourceConfig
from ..core.datatypes import Grade
from .grades import GradeLedger


class RenewableSubresource:
    """
    Renewable subresource: a graded supply curve capped at a maximum quantity.

    Price -> cumulative supply:
      - walk the grades by ascending cost, summing the quantity of every grade
        whose cost <= price, capped at ``max_sub_resource``.

    Cumulative -> annual supply:
      - annual[p] = cumulative[p] * (price / prev_price) ** gdp_supply_elasticity,
        capped at ``max_sub_resource``. No price response is applied in the
        first period or when the previous price is not positive.

    ``variance`` and ``capacity_factor`` are exogenous inputs, stored as read
    and never derived from the grades.
    """

    def __init__(self, name: str, grades: Iterable[Grade] = ()):
        self.name = name
        self.grades = GradeLedger(grades)
        self.max_sub_resource = 0.0
        self.gdp_supply_elasticity = 0.0
        self.variance = 0.0
        self.capacity_factor = 0.0
        self._cumul: Dict[int, float] = {}
        self._annual: Dict[int, float] = {}

    @classmethod
    def from_config(cls, cfg: SubResourceConfig, grades: Optional[Iterable[Grade]] = None) -> "RenewableSubresource":
        if grades is None:
            grades = [Grade(**g) for g in cfg.grades]
        sub = cls(cfg.name, grades)
        sub.complete_init(cfg)
        return sub

    def complete_init(self, info: SubResourceConfig) -> None:
        self.max_sub_resource = float(info.max_sub_resource)
        self.gdp_supply_elasticity = float(info.gdp_supply_elasticity)
        self.variance = float(info.sub_resource_variance)
        self.capacity_factor = float(info.sub_resource_capacity_factor)
        assert self.max_sub_resource >= 0, f"{self.name}: max_sub_resource must be >= 0"
        assert self.capacity_factor >= 0, f"{self.name}: capacity factor must be >= 0"
        if self.capacity_factor == 0 or self.gdp_supply_elasticity == 0:
            logger.debug("{}: elasticity={} capacity_factor={}", self.name,
                         self.gdp_supply_elasticity, self.capacity_factor)
        if self.grades.total_available > self.max_sub_resource:
            logger.warning("{}: grades hold {:.3g} but max_sub_resource is {:.3g}; supply will be capped",
                           self.name, self.grades.total_available, self.max_sub_resource)

    def cumulative_supply(self, price: float, period: int) -> float:
        q = min(self.grades.cumulative_available(price), self.max_sub_resource)
        self._cumul[period] = q
        return q

    def annual_supply(self, period: int, price: float, prev_price: float) -> float:
        annual = self.cumulative_supply(price, period)
        if period > 0 and prev_price > 0 and price > 0:
            annual *= (price / prev_price) ** self.gdp_supply_elasticity
        elif period > 0:
            logger.warning("{}: no price response at t={} (price={}, prev={})", self.name, period, price, prev_price)
        annual = min(annual, self.max_sub_resource)
        self._annual[period] = annual
        return annual

    def get_cumulative_production(self, period: int) -> float:
        return self._cumul.get(period, 0.0)

    def get_annual_production(self, period: int) -> float:
        return self._annual.get(period, 0.0)

    def get_variance(self) -> float:
        return self.variance

    def get_average_capacity_factor(self) -> float:
        return self.capacity_factor

    def get_max_subresource(self) -> float:
        return self.max_sub_resource
