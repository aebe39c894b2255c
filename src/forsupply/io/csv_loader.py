# forsupply/src/forsupply/io/csv_loader.py
from __future__ import annotations
import csv
from pathlib import Path
from typing import Any, Dict, List
from loguru import logger
from ..core.datatypes import Grade

def _read_csv(path: Path) -> list[dict]:
    with path.open(newline="", encoding="utf-8") as f:
        rdr = csv.DictReader(f)
        return [dict(r) for r in rdr]

def load_grades_from_csv(path: str | Path) -> Dict[str, List[Grade]]:
    """grades.csv: subresource,grade,cost,available -> {subresource: [Grade, ...]}"""
    rows = _read_csv(Path(path))
    grades: Dict[str, List[Grade]] = {}
    for r in rows:
        sub = r.get("subresource") or r.get("resource") or r.get("name")
        if not sub:
            raise ValueError(f"Grade row without a subresource column in {path}: {r}")
        grades.setdefault(sub, []).append(Grade(
            name=r.get("grade", ""),
            cost=float(r["cost"]),
            available=float(r.get("available") or r.get("quantity")),
        ))
    logger.info("Loaded {} grades for {} subresource(s) from {}",
                sum(len(g) for g in grades.values()), len(grades), path)
    return grades

def write_grades_csv(rows: List[Dict[str, Any]], path: str | Path) -> None:
    write_rows_csv(rows, path, fieldnames=["subresource", "grade", "cost", "available"])

def write_rows_csv(rows: List[Dict[str, Any]], path: str | Path, fieldnames: List[str] | None = None) -> None:
    p = Path(path)
    p.parent.mkdir(parents=True, exist_ok=True)
    if fieldnames is None:
        fieldnames = []
        for r in rows:
            fieldnames.extend(k for k in r if k not in fieldnames)
    with p.open("w", newline="", encoding="utf-8") as f:
        w = csv.DictWriter(f, fieldnames=fieldnames, restval="")
        w.writeheader()
        w.writerows(rows)
    logger.debug("Wrote {} rows to {}", len(rows), p)
