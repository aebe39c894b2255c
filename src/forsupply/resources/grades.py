
from __future__ import annotations
from typing import Iterable, Iterator, Tuple
from loguru import logger
from ..core.datatypes import Grade

class GradeLedger:
    """Cost-ordered grades of one subresource.

    Grades are sorted once at construction; ties keep their load order.
    """

    def __init__(self, grades: Iterable[Grade] = ()):
        self._grades: Tuple[Grade, ...] = tuple(sorted(grades, key=lambda g: g.cost))
        logger.debug("GradeLedger with {} grades, cost range [{}..{}]",
                     len(self._grades),
                     self._grades[0].cost if self._grades else None,
                     self._grades[-1].cost if self._grades else None)

    def __iter__(self) -> Iterator[Grade]:
        return iter(self._grades)

    def __len__(self) -> int:
        return len(self._grades)

    def __getitem__(self, i: int) -> Grade:
        return self._grades[i]

    @property
    def total_available(self) -> float:
        return sum(g.available for g in self._grades)

    def cumulative_available(self, price: float) -> float:
        """Sum of available quantity over every grade with cost <= price."""
        total = 0.0
        for g in self._grades:
            if g.cost > price:
                break
            total += g.available
        return total
