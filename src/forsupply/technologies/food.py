
from __future__ import annotations
from typing import Optional
from loguru import logger
from ..core.interfaces import CROP_USAGE, LandAllocator, Marketplace
from ..core.modeltime import SimContext
from .base import LandTechnology
from .profit import base_profit_rate


class FoodProductionTechnology(LandTechnology):
    """Profit-based crop technology harvested in the period it is planted."""

    usage = CROP_USAGE

    def __init__(self, name: str, land_type: str, year: int, *, cal_output: Optional[float] = None,
                 cal_yield: Optional[float] = None, **kwargs):
        super().__init__(name, land_type, year, **kwargs)
        self.cal_output = cal_output
        self.cal_yield = cal_yield

    def complete_init(self, ctx: SimContext, land_allocator: LandAllocator,
                      marketplace: Marketplace, rotation_period: int = 0) -> None:
        self._attach(ctx, land_allocator, marketplace)
        self.set_cal_land_values(ctx)

    def set_cal_land_values(self, ctx: SimContext) -> None:
        if self.cal_output is None or self.cal_yield is None:
            return
        period = ctx.modeltime.yr_to_per(self.year)
        self.land_allocator.set_cal_land_allocation(self.land_type, self.name,
                                                    self.cal_output / self.cal_yield, period, period)
        self.land_allocator.set_cal_observed_yield(self.land_type, self.name, self.cal_yield, period)

    def init_calc(self, ctx: SimContext) -> None:
        if ctx.year == self.year:
            self.set_cal_land_values(ctx)

    def calc_profit_rate(self, ctx: SimContext, region: str, product: str) -> float:
        return base_profit_rate(self.marketplace, region, product, ctx.period, self.variable_cost)

    def calc_cost(self, ctx: SimContext, region: str, product: str) -> None:
        if not self.is_operating(ctx.period):
            return
        self._submit_bid(ctx, region, self.calc_profit_rate(ctx, region, product))

    def production(self, ctx: SimContext, region: str, product: str) -> float:
        t = ctx.period
        if not self.is_operating(t):
            return self._shut_down(t)
        rate = self.calc_profit_rate(ctx, region, product)
        self.land_allocator.calc_yield(self.land_type, self.name, region, rate, t, t)
        output = self.calc_supply(t)
        self.inputs[t] = self.land_allocator.get_land_allocation(self.land_type, self.name, t)
        self.outputs[t] = output
        logger.debug("{}@t={}: rate={:.4g} land={:.4g} output={:.4g}", self.name, t, rate, self.inputs[t], output)
        return output
