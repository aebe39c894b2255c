"""Tests for the grade ledger and the renewable subresource supply curve."""

import math

import pytest
from loguru import logger
from pydantic import ValidationError

from forsupply.core.config import SubResourceConfig
from forsupply.core.datatypes import Grade
from forsupply.resources.grades import GradeLedger
from forsupply.resources.subresource import RenewableSubresource


def _biomass(max_q=40.0, elasticity=0.5, variance=0.2, cf=0.35):
    cfg = SubResourceConfig(
        name="biomass",
        max_sub_resource=max_q,
        gdp_supply_elasticity=elasticity,
        sub_resource_variance=variance,
        sub_resource_capacity_factor=cf,
        grades=[
            {"name": "g3", "cost": 5.0, "available": 25.0},
            {"name": "g1", "cost": 1.0, "available": 10.0},
            {"name": "g2", "cost": 3.0, "available": 15.0},
        ],
    )
    return RenewableSubresource.from_config(cfg)


def test_ledger_sorts_by_cost():
    ledger = GradeLedger([Grade(cost=4, available=1), Grade(cost=1, available=2), Grade(cost=2, available=3)])
    assert [g.cost for g in ledger] == [1, 2, 4]
    assert len(ledger) == 3
    assert ledger.total_available == 6


def test_ledger_includes_grade_at_exact_cost():
    ledger = GradeLedger([Grade(cost=1, available=2), Grade(cost=2, available=3)])
    assert ledger.cumulative_available(0.5) == 0
    assert ledger.cumulative_available(1.0) == 2
    assert ledger.cumulative_available(2.0) == 5


def test_grade_rejects_negative_values():
    with pytest.raises(ValidationError):
        Grade(cost=-1.0, available=1.0)
    with pytest.raises(ValidationError):
        Grade(cost=1.0, available=-1.0)


def test_cumulative_supply_monotone_and_capped():
    sub = _biomass()
    prices = [0.0, 0.5, 1.0, 2.0, 3.0, 4.0, 5.0, 10.0, 100.0]
    supplies = [sub.cumulative_supply(p, t) for t, p in enumerate(prices)]
    assert supplies == sorted(supplies)
    assert all(q <= sub.get_max_subresource() for q in supplies)
    # 10 + 15 + 25 = 50 available, capped at 40
    assert supplies[-1] == 40.0
    assert sub.cumulative_supply(3.0, 0) == 25.0


def test_exogenous_inputs_unaffected_by_queries():
    sub = _biomass(variance=0.123, cf=0.456)
    for t, p in enumerate([1.0, 3.0, 7.0]):
        sub.cumulative_supply(p, t)
        sub.annual_supply(t, p, p / 2)
    assert sub.get_variance() == 0.123
    assert sub.get_average_capacity_factor() == 0.456


def test_annual_supply_price_response():
    sub = _biomass()
    assert sub.annual_supply(0, 2.0, 0.0) == 10.0
    annual = sub.annual_supply(1, 2.5, 2.0)
    assert math.isclose(annual, 10.0 * (2.5 / 2.0) ** 0.5)
    assert sub.get_cumulative_production(1) == 10.0
    assert sub.get_annual_production(1) == annual


def test_annual_supply_capped_at_max():
    sub = _biomass(elasticity=2.0)
    assert sub.annual_supply(1, 10.0, 5.0) == 40.0


def test_zero_elasticity_and_capacity_factor_are_valid():
    sub = _biomass(elasticity=0.0, cf=0.0)
    assert sub.annual_supply(1, 3.0, 1.0) == sub.cumulative_supply(3.0, 1)
    assert sub.get_average_capacity_factor() == 0.0


def test_negative_capacity_factor_is_a_precondition_failure():
    with pytest.raises(AssertionError):
        _biomass(cf=-0.1)
    with pytest.raises(AssertionError):
        _biomass(max_q=-1.0)


def test_non_positive_previous_price_is_logged_as_warning():
    sub = _biomass()
    messages = []
    sink = logger.add(messages.append, level="WARNING")
    try:
        annual = sub.annual_supply(2, 3.0, 0.0)
    finally:
        logger.remove(sink)
    assert annual == 25.0
    assert any("no price response" in m for m in messages)
