
from __future__ import annotations
from typing import Dict, List, Optional, Tuple
from loguru import logger

Key = Tuple[str, str, int]  # (commodity, region, period)


class InMemoryMarketplace:
    """Price/supply ledger keyed by (commodity, region, period)."""

    def __init__(self, prices: Optional[Dict[str, List[float]]] = None, region: str = "USA"):
        self.prices: Dict[Key, float] = {}
        self.supplies: Dict[Key, float] = {}
        for commodity, series in (prices or {}).items():
            for period, p in enumerate(series):
                self.set_price(commodity, region, float(p), period)

    def set_price(self, commodity: str, region: str, price: float, period: int) -> None:
        self.prices[(commodity, region, period)] = price

    def get_price(self, commodity: str, region: str, period: int) -> float:
        key = (commodity, region, period)
        if key not in self.prices:
            logger.debug("No price for {} in {} at t={}; using 0", commodity, region, period)
        return self.prices.get(key, 0.0)

    def add_to_supply(self, commodity: str, region: str, quantity: float, period: int) -> None:
        key = (commodity, region, period)
        self.supplies[key] = self.supplies.get(key, 0.0) + quantity

    def get_supply(self, commodity: str, region: str, period: int) -> float:
        return self.supplies.get((commodity, region, period), 0.0)

    def null_supplies(self, period: int) -> None:
        for key in [k for k in self.supplies if k[2] == period]:
            del self.supplies[key]

    def supply_calls(self, period: int) -> Dict[Tuple[str, str], float]:
        return {(c, r): q for (c, r, t), q in self.supplies.items() if t == period}
