
from __future__ import annotations
from .registry import register
from ..core.config import TechnologyConfig
from ..technologies.food import FoodProductionTechnology
from ..technologies.forest import ForestProductionTechnology

@register("forest")
def forest(cfg: TechnologyConfig) -> ForestProductionTechnology:
    return ForestProductionTechnology(
        cfg.name, cfg.land_type, cfg.year,
        interest_rate=cfg.interest_rate,
        future_production=cfg.future_production,
        cal_output=cfg.cal_output,
        cal_yield=cfg.cal_yield,
        ag_prod_change=cfg.ag_prod_change,
        lifetime=cfg.lifetime,
        variable_cost=cfg.variable_cost,
    )

@register("food")
def food(cfg: TechnologyConfig) -> FoodProductionTechnology:
    return FoodProductionTechnology(
        cfg.name, cfg.land_type, cfg.year,
        cal_output=cfg.cal_output,
        cal_yield=cfg.cal_yield,
        lifetime=cfg.lifetime,
        variable_cost=cfg.variable_cost,
    )
