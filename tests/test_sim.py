"""Integration tests: config loading, technology kinds, the period driver and the CLI."""

import csv

import pytest
import yaml
from typer.testing import CliRunner

from forsupply.adapters.land_allocator import InMemoryLandAllocator
from forsupply.adapters.marketplace import InMemoryMarketplace
from forsupply.cli.commands import app
from forsupply.core.config import ForsupplyConfig, TechnologyConfig, load_config
from forsupply.core.datatypes import Grade
from forsupply.core.modeltime import ModelTime, SimContext
from forsupply.core.sim import MarketSimulator
from forsupply.io.loaders import load_scenario
from forsupply.io.readers import synthesize_scenario
from forsupply.plugins.registry import get as get_kind
from forsupply.technologies.food import FoodProductionTechnology
from forsupply.technologies.forest import ForestProductionTechnology


def _sim():
    cfg_dict, grade_rows = synthesize_scenario()
    cfg = load_config(cfg_dict)
    grades = {"biomass": [Grade(name=r["grade"], cost=r["cost"], available=r["available"]) for r in grade_rows]}
    return MarketSimulator(cfg, grades)


def test_modeltime_periods():
    mt = ModelTime(1975, [15, 15, 5])
    assert mt.per_to_yr(0) == 1975
    assert mt.per_to_yr(2) == 2005
    assert mt.yr_to_per(2010) == 3
    assert mt.timestep(7) == 5
    with pytest.raises(ValueError):
        mt.yr_to_per(1980)
    assert SimContext(mt, 2).timestep == 5


def test_config_coerces_nested_dicts(tmp_path):
    cfg_dict, _ = synthesize_scenario(periods=4)
    path = tmp_path / "scenario.yaml"
    path.write_text(yaml.safe_dump(cfg_dict))
    cfg = load_config(str(path))
    assert isinstance(cfg, ForsupplyConfig)
    assert cfg.modeltime.timesteps == [15] * 4
    forest = cfg.sectors[0].technologies[0]
    assert isinstance(forest, TechnologyConfig)
    assert forest.kind == "forest"
    assert cfg.sectors[0].rotation_period == 45
    assert cfg.solver.iterations == 2


def test_technology_defaults():
    t = TechnologyConfig()
    assert t.interest_rate == 0.02
    assert t.future_production is None
    assert t.cal_yield is None


def test_registry_builds_kinds():
    assert isinstance(get_kind("forest")(TechnologyConfig(kind="forest")), ForestProductionTechnology)
    assert isinstance(get_kind("food")(TechnologyConfig(name="Corn", kind="food")), FoodProductionTechnology)
    with pytest.raises(KeyError):
        get_kind("nuclear")


def test_food_technology_harvests_same_period():
    ctx = SimContext(ModelTime(1975, [15] * 3))
    land = InMemoryLandAllocator({"Crop": 80.0}, {"Corn": 6.0})
    market = InMemoryMarketplace({"Corn": [3.0, 3.0, 3.0]})
    tech = FoodProductionTechnology("Corn", "Crop", 1975, cal_output=300.0, cal_yield=6.0, variable_cost=1.0)
    tech.complete_init(ctx, land, market)

    tech.calc_cost(ctx, "USA", "Corn")
    assert land.get_intrinsic_rate("Crop", "Corn", 0) == pytest.approx(2.0)
    assert tech.production(ctx, "USA", "Corn") == pytest.approx(300.0)
    assert tech.production(ctx.at(1), "USA", "Corn") == pytest.approx(80.0 * 6.0)
    assert market.supply_calls(1) == {}


def test_simulator_run():
    sim = _sim()
    res = sim.run()
    periods = sim.ctx.modeltime.max_period

    forest = [r for r in res.technologies if r.technology == "PulpForest"]
    corn = [r for r in res.technologies if r.technology == "Corn"]
    assert len(forest) == periods and len(corn) == periods
    assert forest[0].output == pytest.approx(100.0)
    assert forest[0].status == "new_investment"
    assert forest[1].status == "established"
    assert corn[0].output == pytest.approx(300.0)

    # two solver iterations per period must not double the future market
    for r in forest:
        assert sim.market.get_supply("FuturePulp", "USA", r.period) == pytest.approx(r.future_supply)

    cumul = [r.cumulative for r in res.resources]
    prices = [r.price for r in res.resources]
    assert prices == sorted(prices)
    assert cumul == sorted(cumul)
    assert max(cumul) == 40.0
    assert res.resources[0].annual == pytest.approx(10.0)
    assert res.resources[1].annual == pytest.approx(10.0 * (2.5 / 2.0) ** 0.5)


def test_simulator_calibration_follows_target():
    sim = _sim()
    sim.complete_init()
    tech = sim.sectors[0][1][0]
    lands = [sim.land.cal_land[("Forest", "PulpForest", t)] for t in range(4)]
    assert lands[0] == pytest.approx(50.0)
    assert len(sim.land.cal_land) == 5  # 4 forest periods + 1 crop period
    assert tech.state.cal_observed_yield == 2.0


def test_cli_init_and_run(tmp_path):
    runner = CliRunner()
    target = tmp_path / "ex"
    res = runner.invoke(app, ["init", str(target)])
    assert res.exit_code == 0, res.output
    assert (target / "scenario.yaml").exists()
    assert (target / "grades.csv").exists()

    cfg, grades = load_scenario(target / "scenario.yaml")
    assert [g.cost for g in grades["biomass"]] == [1.0, 3.0, 5.0]

    res = runner.invoke(app, ["run-sim", "-c", str(target / "scenario.yaml"), "-q"])
    assert res.exit_code == 0, res.output
    out = target / "runs" / "results.csv"
    assert out.exists()
    with out.open(newline="") as f:
        rows = list(csv.DictReader(f))
    assert {r["kind"] for r in rows} == {"technology", "resource"}

    res = runner.invoke(app, ["supply-curve", "-c", str(target / "scenario.yaml")])
    assert res.exit_code == 0, res.output
    assert "biomass" in res.output


def _two_forests(first_cost, second_cost, order=("A", "B")):
    costs = {"A": first_cost, "B": second_cost}
    cfg = load_config({
        "modeltime": {"start_year": 1975, "timesteps": [15] * 4},
        "sectors": [{
            "name": "Pulp",
            "rotation_period": 45,
            "technologies": [
                {"name": n, "kind": "forest", "land_type": "Forest", "year": 1975, "variable_cost": costs[n]}
                for n in order
            ],
        }],
        "land": {"total_land": {"Forest": 100.0}},
        "prices": {"FuturePulp": [10.0] * 4},
        "solver": {"iterations": 1},
    })
    sim = MarketSimulator(cfg)
    sim.run(0, 1)
    return {n: sim.land.get_land_allocation("Forest", n, 3) for n in ("A", "B")}


def test_single_pass_shares_land_across_all_bids():
    land = _two_forests(0.0, 0.0)
    assert sum(land.values()) == pytest.approx(100.0)
    assert land["A"] == pytest.approx(50.0)
    assert land["B"] == pytest.approx(50.0)


def test_land_split_follows_bids_regardless_of_order():
    # bids of 10 and 5 (same discount factor) -> 2/3 and 1/3
    forward = _two_forests(0.0, 5.0, order=("A", "B"))
    reverse = _two_forests(0.0, 5.0, order=("B", "A"))
    assert sum(forward.values()) == pytest.approx(100.0)
    assert forward["A"] == pytest.approx(200.0 / 3)
    assert forward["B"] == pytest.approx(100.0 / 3)
    assert reverse == pytest.approx(forward)
