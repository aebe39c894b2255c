
from __future__ import annotations
from typing import List, NamedTuple, Optional
from loguru import logger
from ..core.datatypes import ForestProductionState
from ..core.interfaces import FOREST_USAGE, LandAllocator, Marketplace
from ..core.modeltime import SimContext
from .base import LandTechnology
from .profit import base_profit_rate

FUTURE_PREFIX = "Future"


def future_market(product: str) -> str:
    """Name of the commodity carrying output that materializes a rotation from now."""
    return FUTURE_PREFIX + product


def discount_factor(interest_rate: float, rotation_steps: int) -> float:
    """Annuity factor levelling a harvest-period profit over the growing steps."""
    assert rotation_steps > 0, f"rotation must span at least one step, got {rotation_steps}"
    if interest_rate == 0:
        return 1.0 / rotation_steps
    return interest_rate / ((1 + interest_rate) ** rotation_steps - 1)


def harvest_period(current_period: int, rotation_years: int, timestep_years: int) -> int:
    assert rotation_years > 0, f"rotation must be positive to schedule a harvest, got {rotation_years}"
    # Truncating division: partial steps are dropped.
    return current_period + rotation_years // timestep_years


class CalibrationPoint(NamedTuple):
    period: int
    production: float
    yield_: float
    land: float


class ForestProductionTechnology(LandTechnology):
    """
    Forestry technology whose harvest is fixed by planting a rotation earlier.

    Per operating period:
      1) bid the discounted profit rate of the future market to the land allocator
      2) have the land allocator compute yield for the harvest period
      3) add that future output to the "Future<product>" market
      4) realize this period's output from land planted a rotation ago

    Non-operating periods produce exactly zero and touch no market.
    """

    usage = FOREST_USAGE

    def __init__(self, name: str, land_type: str, year: int, *, interest_rate: float = 0.02,
                 future_production: Optional[float] = None, cal_output: Optional[float] = None,
                 cal_yield: Optional[float] = None, ag_prod_change: float = 0.0, **kwargs):
        super().__init__(name, land_type, year, **kwargs)
        self.state = ForestProductionState(
            interest_rate=interest_rate,
            future_production_target=future_production,
            cal_output=cal_output,
            cal_yield=cal_yield,
            ag_prod_change=ag_prod_change,
        )

    # ---------- lifecycle ----------
    def complete_init(self, ctx: SimContext, land_allocator: LandAllocator,
                      marketplace: Marketplace, rotation_period: int = 0) -> None:
        self._attach(ctx, land_allocator, marketplace)
        self.state.rotation_period_years = int(rotation_period)
        if self.state.rotation_period_years <= 0:
            logger.warning("{}: rotation period is {}; profit rates cannot be discounted",
                           self.name, self.state.rotation_period_years)
        self.set_cal_land_values(ctx)

    def init_calc(self, ctx: SimContext) -> None:
        # Earlier passes may have disturbed the calibrated shares of the planting period.
        if ctx.year == self.year:
            self.set_cal_land_values(ctx)

    def set_cal_land_values(self, ctx: SimContext) -> List[CalibrationPoint]:
        """Push calibrated land and yield for the planting period and, when a
        future production target exists, for each step of the rotation."""
        st = self.state
        if not st.is_calibrated:
            logger.warning("{}: no calibration data, skipping land calibration", self.name)
            return []

        mt = ctx.modeltime
        period = mt.yr_to_per(self.year)
        timestep = mt.timestep(period)
        n_steps = st.rotation_period_years // timestep
        if st.future_production_target is None:
            n_steps = 0

        points: List[CalibrationPoint] = []
        production = st.cal_output
        for step in range(n_steps + 1):
            t = period + step
            yld = st.cal_yield
            if step > 0:
                production += (st.future_production_target - st.cal_output) / n_steps
                yld = st.cal_yield * (1 + st.ag_prod_change) ** (timestep * (step - 1))
            land = production / yld
            self.land_allocator.set_cal_land_allocation(self.land_type, self.name, land, t, period)
            self.land_allocator.set_cal_observed_yield(self.land_type, self.name, yld, t)
            if step == 0:
                st.cal_observed_yield = yld
                st.cal_land_used = land
            points.append(CalibrationPoint(t, production, yld, land))

        logger.debug("{}: calibrated {} period(s) from t={}", self.name, len(points), period)
        return points

    # ---------- schedule ----------
    def rotation_steps(self, ctx: SimContext) -> int:
        return self.state.rotation_period_years // ctx.timestep

    def calc_discount_factor(self, ctx: SimContext) -> float:
        return discount_factor(self.state.interest_rate, self.rotation_steps(ctx))

    def get_harvest_period(self, ctx: SimContext) -> int:
        return harvest_period(ctx.period, self.state.rotation_period_years, ctx.timestep)

    def calc_profit_rate(self, ctx: SimContext, region: str, product: str) -> float:
        """Net present value of the profit rate of `product`; may be negative."""
        rate = base_profit_rate(self.marketplace, region, product, ctx.period, self.variable_cost)
        return rate * self.calc_discount_factor(ctx)

    def calc_cost(self, ctx: SimContext, region: str, product: str) -> None:
        if not self.is_operating(ctx.period):
            return
        self._submit_bid(ctx, region, self.calc_profit_rate(ctx, region, future_market(product)))

    def production(self, ctx: SimContext, region: str, product: str) -> float:
        t = ctx.period
        if not self.is_operating(t):
            return self._shut_down(t)

        fmkt = future_market(product)
        rate = self.calc_profit_rate(ctx, region, fmkt)

        harvest = self.get_harvest_period(ctx)
        self.land_allocator.calc_yield(self.land_type, self.name, region, rate, harvest, t)
        future_supply = self.calc_supply(harvest)
        self.marketplace.add_to_supply(fmkt, region, future_supply, t)

        # Planted a rotation ago.
        output = self.calc_supply(t)
        self.inputs[t] = self.land_allocator.get_land_allocation(self.land_type, self.name, t)
        self.outputs[t] = output
        logger.debug("{}@t={}: rate={:.4g} harvest t={} future={:.4g} output={:.4g}",
                     self.name, t, rate, harvest, future_supply, output)
        return output
