
from __future__ import annotations
from dataclasses import dataclass, field, replace
from typing import List

@dataclass(frozen=True)
class ModelTime:
    """Period table of the run: period p starts at start_year + sum(timesteps[:p])."""
    start_year: int = 1975
    timesteps: List[int] = field(default_factory=lambda: [15] * 9)

    def __post_init__(self):
        assert self.timesteps, "ModelTime needs at least one period"
        assert all(t > 0 for t in self.timesteps), f"timesteps must be positive: {self.timesteps}"

    @property
    def max_period(self) -> int:
        return len(self.timesteps)

    def timestep(self, period: int) -> int:
        # Periods past the table reuse the last step length.
        if period >= len(self.timesteps):
            return self.timesteps[-1]
        return self.timesteps[period]

    def per_to_yr(self, period: int) -> int:
        return self.start_year + sum(self.timestep(p) for p in range(period))

    def yr_to_per(self, year: int) -> int:
        if year < self.start_year:
            raise ValueError(f"Year {year} precedes model start {self.start_year}")
        period, y = 0, self.start_year
        while y < year:
            y += self.timestep(period)
            if y > year:
                raise ValueError(f"Year {year} is not a model period start")
            period += 1
        return period

@dataclass(frozen=True)
class SimContext:
    """Model time plus the period currently being evaluated."""
    modeltime: ModelTime
    period: int = 0

    def at(self, period: int) -> "SimContext":
        return replace(self, period=period)

    @property
    def timestep(self) -> int:
        return self.modeltime.timestep(self.period)

    @property
    def year(self) -> int:
        return self.modeltime.per_to_yr(self.period)
