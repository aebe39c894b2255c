
from __future__ import annotations
import typer
from pathlib import Path
from rich import print
from rich.table import Table
from loguru import logger
from ..io.loaders import load_scenario
from ..io.readers import synthesize_scenario
from ..io.csv_loader import write_grades_csv, write_rows_csv
from ..core.sim import MarketSimulator
from ..resources.subresource import RenewableSubresource

app = typer.Typer(no_args_is_help=True, help="forsupply: resource supply curves and forest rotation scheduling")

def _configure_logging(verbose: bool, quiet: bool) -> None:
    if verbose:
        logger.remove()
        logger.add(lambda m: print(m, end=""), level="DEBUG")
    elif quiet:
        logger.remove()
        logger.add(lambda m: print(m, end=""), level="WARNING")

@app.command("init")
def init_cmd(target: str = typer.Argument("examples/minimal", help="Directory to write the example scenario to")):
    import yaml
    dst = Path(target)
    dst.mkdir(parents=True, exist_ok=True)
    cfg, grades = synthesize_scenario()
    cfg["run"]["out_dir"] = str(dst / "runs")
    (dst / "scenario.yaml").write_text(yaml.safe_dump(cfg, sort_keys=False))
    write_grades_csv(grades, dst / "grades.csv")
    print(f"[green]Initialized example scenario at {dst}[/green]")

@app.command("run-sim")
def run_sim(config: str = typer.Option(..., "--config", "-c", help="Path to YAML scenario"),
            verbose: bool = typer.Option(False, "--verbose", "-v", help="DEBUG logging"),
            quiet: bool = typer.Option(False, "--quiet", "-q", help="Only WARN+")):
    _configure_logging(verbose, quiet)
    cfg, grades = load_scenario(config)
    sim = MarketSimulator(cfg, grades)
    res = sim.run()

    table = Table(title="Technology output")
    for col in ("period", "year", "technology", "status", "output", "land", "future"):
        table.add_column(col)
    for r in res.technologies:
        table.add_row(str(r.period), str(r.year), r.technology, r.status,
                      f"{r.output:.3f}", f"{r.land:.3f}", f"{r.future_supply:.3f}")
    print(table)

    out = Path(cfg.run.out_dir) / "results.csv"
    write_rows_csv(res.rows(), out)
    print(f"[bold green]Simulation finished[/bold green] -> {out}")

@app.command("supply-curve")
def supply_curve(config: str = typer.Option(..., "--config", "-c", help="Path to YAML scenario"),
                 verbose: bool = typer.Option(False, "--verbose", "-v", help="DEBUG logging")):
    _configure_logging(verbose, not verbose)
    cfg, grades = load_scenario(config)
    for rc in cfg.resources:
        sub = RenewableSubresource.from_config(rc, grades.get(rc.name))
        table = Table(title=f"{sub.name} (max={sub.get_max_subresource():g}, "
                            f"variance={sub.get_variance():g}, cf={sub.get_average_capacity_factor():g})")
        table.add_column("period")
        table.add_column("price")
        table.add_column("cumulative")
        for t, p in enumerate(cfg.prices.get(rc.name, [])):
            table.add_row(str(t), f"{p:g}", f"{sub.cumulative_supply(p, t):.3f}")
        print(table)

def main():
    app()
