from __future__ import annotations

from pathlib import Path
from typing import Dict, List, Tuple
import logging

from ..core.config import ForsupplyConfig, load_config
from ..core.datatypes import Grade
from .csv_loader import load_grades_from_csv

logger = logging.getLogger(__name__)


def load_grades(cfg: ForsupplyConfig, base_dir: str | Path = ".") -> Dict[str, List[Grade]]:
    """
    Collect grades for every configured subresource.
    Inline `grades` win; otherwise `grades_csv` is read, relative to `base_dir`.
    """
    base = Path(base_dir)
    out: Dict[str, List[Grade]] = {}
    for r in cfg.resources:
        if r.grades:
            out[r.name] = [Grade(**g) for g in r.grades]
            continue
        if not r.grades_csv:
            logger.warning("Subresource %s has no grades; its supply is zero at any price", r.name)
            out[r.name] = []
            continue
        path = Path(r.grades_csv)
        if not path.is_absolute():
            path = base / path
        by_name = load_grades_from_csv(path)
        out[r.name] = by_name.get(r.name, [])
        if not out[r.name]:
            logger.warning("No rows for subresource %s in %s", r.name, path)
    return out


def load_scenario(path: str | Path) -> Tuple[ForsupplyConfig, Dict[str, List[Grade]]]:
    p = Path(path)
    cfg = load_config(p)
    grades = load_grades(cfg, base_dir=p.parent)
    logger.info("Loaded scenario %s: %d sector(s), %d subresource(s)", p, len(cfg.sectors), len(cfg.resources))
    return cfg, grades
