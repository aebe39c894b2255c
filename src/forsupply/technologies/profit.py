
from __future__ import annotations
from ..core.interfaces import Marketplace

def base_profit_rate(marketplace: Marketplace, region: str, product: str, period: int,
                     variable_cost: float = 0.0) -> float:
    """Market price of `product` less the variable cost of producing it. May be negative."""
    return marketplace.get_price(product, region, period) - variable_cost
