from __future__ import annotations

import os
from pathlib import Path
from typing import Any, Dict, Optional

import yaml

from src.models.growth.config import CONFIG_PATH, DEFAULT_AGE_STEP, PROJECT_ROOT, SD_LEVELS


DEFAULTS: Dict[str, Any] = {
    "paths": {"reference_dir": "data/reference/jspe2000"},
    "growth": {
        "reference_version": "",
        "weight_model": "lms",
        "age_step": DEFAULT_AGE_STEP,
        "sd_levels": {k: list(v) for k, v in SD_LEVELS.items()},
    },
    "api": {"base_url": "http://127.0.0.1:8001"},
}


def _merge(base: dict, override: dict) -> dict:
    out = dict(base)
    for k, v in (override or {}).items():
        if isinstance(v, dict) and isinstance(out.get(k), dict):
            out[k] = _merge(out[k], v)
        else:
            out[k] = v
    return out


def load_config(path: Optional[str] = None) -> dict:
    """Read configs/config.yaml (or $GROWTH_CONFIG) over the built-in defaults."""
    cfg_path = Path(path or os.environ.get("GROWTH_CONFIG") or CONFIG_PATH)
    if not cfg_path.exists():
        raise FileNotFoundError(f"{cfg_path} not found")
    with cfg_path.open("r", encoding="utf-8") as f:
        return _merge(DEFAULTS, yaml.safe_load(f) or {})


def reference_dir(cfg: dict) -> Path:
    d = Path(cfg["paths"]["reference_dir"])
    return d if d.is_absolute() else PROJECT_ROOT / d


def sd_levels(cfg: dict, metric: str) -> tuple:
    levels = cfg["growth"]["sd_levels"].get(metric)
    if levels is None:
        return SD_LEVELS.get(metric, ())
    return tuple(float(x) for x in levels)
