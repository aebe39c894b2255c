
from __future__ import annotations
from typing import Any, Dict, List, Tuple

def synthesize_scenario(periods: int = 9) -> Tuple[Dict[str, Any], List[Dict[str, Any]]]:
    """Small pulp-forestry + biomass scenario: (config dict, grade rows)."""
    cfg = {
        "region": "USA",
        "modeltime": {"start_year": 1975, "timesteps": [15] * periods},
        "sectors": [{
            "name": "Pulp",
            "rotation_period": 45,
            "technologies": [{
                "name": "PulpForest", "kind": "forest", "land_type": "Forest", "year": 1975,
                "interest_rate": 0.02, "future_production": 120.0,
                "cal_output": 100.0, "cal_yield": 2.0, "ag_prod_change": 0.01,
            }],
        }, {
            "name": "Corn",
            "technologies": [{
                "name": "Corn", "kind": "food", "land_type": "Crop", "year": 1975,
                "cal_output": 300.0, "cal_yield": 6.0, "variable_cost": 1.0,
            }],
        }],
        "resources": [{
            "name": "biomass", "max_sub_resource": 40.0, "gdp_supply_elasticity": 0.5,
            "sub_resource_variance": 0.2, "sub_resource_capacity_factor": 0.35,
            "grades_csv": "grades.csv",
        }],
        "land": {"total_land": {"Forest": 120.0, "Crop": 80.0},
                 "yields": {"PulpForest": 2.0, "Corn": 6.0}},
        "prices": {
            "FuturePulp": [10.0 + i for i in range(periods)],
            "Corn": [3.0 + 0.1 * i for i in range(periods)],
            "biomass": [2.0 + 0.5 * i for i in range(periods)],
        },
        "solver": {"iterations": 2},
        "run": {"out_dir": "runs/minimal"},
    }
    grades = [
        {"subresource": "biomass", "grade": "grade 1", "cost": 1.0, "available": 10.0},
        {"subresource": "biomass", "grade": "grade 2", "cost": 3.0, "available": 15.0},
        {"subresource": "biomass", "grade": "grade 3", "cost": 5.0, "available": 25.0},
    ]
    return cfg, grades
