
from __future__ import annotations
from typing import Protocol
from .datatypes import ProductionStatus
from .modeltime import SimContext

# Land usage kinds understood by a land allocator.
FOREST_USAGE = "forest"
CROP_USAGE = "crop"

class LandAllocator(Protocol):
    """Regional land allocation service.

    Every call is keyed by (land_type, name[, period]). Reads are pure; the
    ``set_cal_*`` calls are calibration writes; ``set_intrinsic_rate`` and
    ``calc_yield`` are the per-iteration bid/compute pair.
    """
    def add_land_usage(self, land_type: str, name: str, usage: str, start_period: int) -> None: ...
    def set_intrinsic_rate(self, region: str, land_type: str, name: str, rate: float, period: int) -> None: ...
    def calc_yield(self, land_type: str, name: str, region: str, rate: float,
                   target_period: int, current_period: int) -> None: ...
    def get_yield(self, land_type: str, name: str, period: int) -> float: ...
    def get_land_allocation(self, land_type: str, name: str, period: int) -> float: ...
    def set_cal_land_allocation(self, land_type: str, name: str, quantity: float,
                                period: int, base_period: int) -> None: ...
    def set_cal_observed_yield(self, land_type: str, name: str, yield_: float, period: int) -> None: ...

class Marketplace(Protocol):
    def get_price(self, commodity: str, region: str, period: int) -> float: ...
    def add_to_supply(self, commodity: str, region: str, quantity: float, period: int) -> None: ...
    def null_supplies(self, period: int) -> None: ...

class ProductionStateProvider(Protocol):
    def status(self, period: int) -> ProductionStatus: ...

class ProfitTechnology(Protocol):
    """Capability set every profit-based technology kind offers the driver."""
    name: str
    land_type: str

    def complete_init(self, ctx: SimContext, land_allocator: LandAllocator,
                      marketplace: Marketplace, rotation_period: int = 0) -> None: ...
    def init_calc(self, ctx: SimContext) -> None: ...
    def calc_share(self, ctx: SimContext) -> float: ...
    def calc_cost(self, ctx: SimContext, region: str, product: str) -> None: ...
    def production(self, ctx: SimContext, region: str, product: str) -> float: ...
    def calc_profit_rate(self, ctx: SimContext, region: str, product: str) -> float: ...
