
from __future__ import annotations
from typing import Dict, Optional, Tuple
from loguru import logger

Key = Tuple[str, str, int]  # (land_type, name, period)


class InMemoryLandAllocator:
    """Single-region land allocator with proportional sharing of positive bids.

    Land of each type is split across its registered users in proportion to the
    positive part of their intrinsic rates at the bidding period. Calibrated land
    for a period overrides the share; calibrated yields carry forward to later
    periods until a newer one is set.
    """

    def __init__(self, total_land: Optional[Dict[str, float]] = None,
                 initial_yields: Optional[Dict[str, float]] = None):
        self.total_land: Dict[str, float] = dict(total_land or {})
        self.initial_yields: Dict[str, float] = dict(initial_yields or {})
        self.usages: Dict[Tuple[str, str], Tuple[str, int]] = {}
        self.rates: Dict[Key, float] = {}
        self.land: Dict[Key, float] = {}
        self.yields: Dict[Key, float] = {}
        self.cal_land: Dict[Key, float] = {}
        self.cal_yields: Dict[Key, float] = {}

    def add_land_usage(self, land_type: str, name: str, usage: str, start_period: int) -> None:
        if (land_type, name) in self.usages:
            logger.warning("Land usage for {}/{} already registered; keeping the first", land_type, name)
            return
        self.usages[(land_type, name)] = (usage, start_period)
        if land_type not in self.total_land:
            logger.warning("No total land configured for '{}'; allocations will be zero", land_type)

    def set_intrinsic_rate(self, region: str, land_type: str, name: str, rate: float, period: int) -> None:
        self.rates[(land_type, name, period)] = rate

    def _share(self, land_type: str, name: str, period: int) -> float:
        bids = {n: max(self.rates.get((lt, n, period), 0.0), 0.0)
                for (lt, n) in self.usages if lt == land_type}
        total = sum(bids.values())
        if total <= 0:
            return 0.0
        return bids.get(name, 0.0) / total

    def _observed_yield(self, land_type: str, name: str, period: int) -> float:
        cal = [(p, y) for (lt, n, p), y in self.cal_yields.items()
               if lt == land_type and n == name and p <= period]
        if cal:
            return max(cal)[1]
        return self.initial_yields.get(name, 0.0)

    def calc_yield(self, land_type: str, name: str, region: str, rate: float,
                   target_period: int, current_period: int) -> None:
        self.rates[(land_type, name, current_period)] = rate
        key = (land_type, name, target_period)
        self.yields[key] = self._observed_yield(land_type, name, target_period)
        if key in self.cal_land:
            self.land[key] = self.cal_land[key]
        else:
            self.land[key] = self.total_land.get(land_type, 0.0) * self._share(land_type, name, current_period)

    def get_yield(self, land_type: str, name: str, period: int) -> float:
        key = (land_type, name, period)
        if key in self.yields:
            return self.yields[key]
        return self._observed_yield(land_type, name, period)

    def get_land_allocation(self, land_type: str, name: str, period: int) -> float:
        key = (land_type, name, period)
        return self.land.get(key, self.cal_land.get(key, 0.0))

    def get_intrinsic_rate(self, land_type: str, name: str, period: int) -> Optional[float]:
        return self.rates.get((land_type, name, period))

    def set_cal_land_allocation(self, land_type: str, name: str, quantity: float,
                                period: int, base_period: int) -> None:
        key = (land_type, name, period)
        self.cal_land[key] = quantity
        self.land[key] = quantity

    def set_cal_observed_yield(self, land_type: str, name: str, yield_: float, period: int) -> None:
        key = (land_type, name, period)
        self.cal_yields[key] = yield_
        self.yields[key] = yield_
