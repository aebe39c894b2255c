
from __future__ import annotations
from typing import Dict, Iterable, List, Optional, Tuple
from loguru import logger
from .config import ForsupplyConfig, SectorConfig
from .datatypes import Grade
from .interfaces import ProfitTechnology
from .modeltime import ModelTime, SimContext
from ..adapters.land_allocator import InMemoryLandAllocator
from ..adapters.marketplace import InMemoryMarketplace
from ..models.types import ResourcePeriodResult, SimResult, TechnologyPeriodResult
from ..plugins import technologies as _kinds  # noqa: F401  (registers "forest"/"food")
from ..plugins.registry import get as get_kind
from ..resources.subresource import RenewableSubresource
from ..technologies.forest import ForestProductionTechnology, future_market


class MarketSimulator:
    """
    Period-by-period driver standing in for the equilibrium solver.

    Prices are exogenous (read from the config). Each period runs
    ``solver.iterations`` passes: calc_cost on every technology, then
    production on every technology, so every land bid is in before any
    land is shared. That period's supplies are nulled before each pass so
    repeated passes leave the same market state.
    """

    def __init__(self, cfg: ForsupplyConfig, grades: Optional[Dict[str, List[Grade]]] = None):
        self.cfg = cfg
        self.ctx = SimContext(ModelTime(cfg.modeltime.start_year, list(cfg.modeltime.timesteps)))
        self.land = InMemoryLandAllocator(cfg.land.total_land, cfg.land.yields)
        self.market = InMemoryMarketplace(cfg.prices, cfg.region)
        self.sectors: List[Tuple[SectorConfig, List[ProfitTechnology]]] = [
            (s, [get_kind(t.kind)(t) for t in s.technologies]) for s in cfg.sectors
        ]
        grades = grades or {}
        self.resources = [RenewableSubresource.from_config(r, grades.get(r.name)) for r in cfg.resources]
        self._initialized = False

    def technologies(self) -> Iterable[Tuple[SectorConfig, ProfitTechnology]]:
        for sector, techs in self.sectors:
            for tech in techs:
                yield sector, tech

    def complete_init(self) -> None:
        for sector, tech in self.technologies():
            tech.complete_init(self.ctx, self.land, self.market, sector.rotation_period)
        self._initialized = True
        logger.info("Initialized {} technologies and {} subresources",
                    sum(len(ts) for _, ts in self.sectors), len(self.resources))

    def run_period(self, period: int, result: SimResult) -> None:
        ctx = self.ctx.at(period)
        region = self.cfg.region
        for _, tech in self.technologies():
            tech.init_calc(ctx)

        for it in range(max(1, self.cfg.solver.iterations)):
            self.market.null_supplies(period)
            # All bids go in before any land is shared out.
            for sector, tech in self.technologies():
                tech.calc_cost(ctx, region, sector.name)
            for sector, tech in self.technologies():
                tech.production(ctx, region, sector.name)
            logger.debug("t={} iteration {} done", period, it)

        for sector, tech in self.technologies():
            status = tech.production_state.status(period)
            future = 0.0
            if isinstance(tech, ForestProductionTechnology) and status.is_operating:
                future = tech.calc_supply(tech.get_harvest_period(ctx))
            result.technologies.append(TechnologyPeriodResult(
                period=period, year=ctx.year, sector=sector.name, technology=tech.name,
                status=status.value, output=tech.outputs.get(period, 0.0),
                land=tech.inputs.get(period, 0.0), land_bid=tech.land_bids.get(period),
                future_supply=future,
            ))

        for sub in self.resources:
            price = self.market.get_price(sub.name, region, period)
            prev = self.market.get_price(sub.name, region, period - 1) if period > 0 else 0.0
            annual = sub.annual_supply(period, price, prev)
            result.resources.append(ResourcePeriodResult(
                period=period, year=ctx.year, resource=sub.name, price=price,
                cumulative=sub.get_cumulative_production(period), annual=annual,
            ))

    def run(self, start_period: int = 0, end_period: Optional[int] = None) -> SimResult:
        if not self._initialized:
            self.complete_init()
        end = self.ctx.modeltime.max_period if end_period is None else end_period
        result = SimResult()
        logger.info("Starting simulation at period {} -> {}", start_period, end)
        for t in range(start_period, end):
            self.run_period(t, result)
            logger.info("t={} ({}): future supply {}", t, self.ctx.at(t).year, {
                s.name: round(self.market.get_supply(future_market(s.name), self.cfg.region, t), 3)
                for s, _ in self.sectors
            })
        logger.success("Simulation complete.")
        return result
