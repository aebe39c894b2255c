
from __future__ import annotations
from typing import Dict, Optional
from loguru import logger
from ..core.interfaces import LandAllocator, Marketplace, ProductionStateProvider
from ..core.modeltime import SimContext
from .production_state import VintageProductionState


class LandTechnology:
    """Shared plumbing for technologies whose output is land area times yield.

    Holds references (not ownership) to the regional land allocator and
    marketplace, plus per-period cost/input/output records. Everything
    profit-rate or schedule specific lives in the concrete kinds.
    """

    usage = ""

    def __init__(self, name: str, land_type: str, year: int, *, lifetime: Optional[int] = None,
                 variable_cost: float = 0.0, production_state: Optional[ProductionStateProvider] = None):
        self.name = name
        self.land_type = land_type
        self.year = year
        self.lifetime = lifetime
        self.variable_cost = variable_cost
        self.production_state = production_state
        self.land_allocator: Optional[LandAllocator] = None
        self.marketplace: Optional[Marketplace] = None
        self.costs: Dict[int, float] = {}
        self.inputs: Dict[int, float] = {}
        self.outputs: Dict[int, float] = {}
        self.land_bids: Dict[int, float] = {}

    def _attach(self, ctx: SimContext, land_allocator: LandAllocator, marketplace: Marketplace) -> int:
        self.land_allocator = land_allocator
        self.marketplace = marketplace
        if self.production_state is None:
            self.production_state = VintageProductionState(ctx.modeltime, self.year, self.lifetime)
        tech_period = ctx.modeltime.yr_to_per(self.year)
        land_allocator.add_land_usage(self.land_type, self.name, self.usage, tech_period)
        logger.debug("{}: registered {} land usage on '{}' from t={}", self.name, self.usage, self.land_type, tech_period)
        return tech_period

    def is_operating(self, period: int) -> bool:
        return self.production_state.status(period).is_operating

    def calc_share(self, ctx: SimContext) -> float:
        # Output of a profit-based technology comes from land sharing, not from this share.
        assert self.production_state.status(ctx.period).is_new_investment, \
            f"{self.name}: share requested outside its new-investment period t={ctx.period}"
        return 1.0

    def calc_supply(self, period: int) -> float:
        la = self.land_allocator
        return la.get_land_allocation(self.land_type, self.name, period) * la.get_yield(self.land_type, self.name, period)

    def _shut_down(self, period: int) -> float:
        self.outputs[period] = 0.0
        self.inputs[period] = 0.0
        return 0.0

    def _submit_bid(self, ctx: SimContext, region: str, rate: float) -> None:
        self.land_allocator.set_intrinsic_rate(region, self.land_type, self.name, rate, ctx.period)
        self.land_bids[ctx.period] = rate
        # Cost is not used for shares; keep it non-zero.
        self.costs[ctx.period] = 1.0
