from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, Iterable, Iterator, Optional, Tuple

import numpy as np
import pandas as pd

from .config import DEFAULT_AGE_STEP, SD_LEVELS, TREATMENT_THRESHOLDS
from .reference import ReferenceTableStore
from .scoring import resolve_store


@dataclass(frozen=True)
class CurvePoint:
    age: float
    value: float


@dataclass(frozen=True)
class Curve:
    """Values of one SD level across the age grid, for one sex and metric."""

    sex: str
    metric: str
    sd_level: float
    points: Tuple[CurvePoint, ...]

    def __iter__(self) -> Iterator[CurvePoint]:
        return iter(self.points)

    def __len__(self) -> int:
        return len(self.points)

    @property
    def label(self) -> str:
        return curve_label(self.sd_level)

    def to_frame(self) -> pd.DataFrame:
        return pd.DataFrame(
            {"age": [p.age for p in self.points], "value": [p.value for p in self.points]}
        )


def age_grid(age_min: float, age_max: float, age_step: float = DEFAULT_AGE_STEP) -> np.ndarray:
    """
    Inclusive grid age_min, age_min + step, ..., <= age_max.

    Points are computed from integer step counts so float drift never drops
    the final age (0.1 * 175 lands on 17.5, not 17.499999).
    """
    if age_step <= 0:
        raise ValueError(f"age_step must be positive, got {age_step}")
    if age_max < age_min:
        raise ValueError(f"age_max ({age_max}) is below age_min ({age_min})")
    n = int(np.floor((age_max - age_min) / age_step + 1e-9))
    return np.round(age_min + np.arange(n + 1) * age_step, 10)


def sample_curve(
    sex: str,
    metric: str,
    sd_level: float,
    age_step: float = DEFAULT_AGE_STEP,
    age_min: float = 0.0,
    age_max: Optional[float] = None,
    store: Optional[ReferenceTableStore] = None,
) -> Curve:
    table = resolve_store(store).get_table(sex, metric)
    if age_max is None:
        age_max = table.max_age
    sd = float(sd_level)
    points = tuple(
        CurvePoint(age=float(a), value=table.value_for_sd(float(a), sd))
        for a in age_grid(age_min, age_max, age_step)
    )
    return Curve(sex=sex, metric=metric, sd_level=sd, points=points)


def sample_curves(
    sex: str,
    metric: str,
    sd_levels: Optional[Iterable[float]] = None,
    age_step: float = DEFAULT_AGE_STEP,
    age_min: float = 0.0,
    age_max: Optional[float] = None,
    store: Optional[ReferenceTableStore] = None,
) -> Dict[float, Curve]:
    """One curve per SD level, keyed by level, in the order given."""
    store = resolve_store(store)
    store.get_table(sex, metric)
    levels = SD_LEVELS[metric] if sd_levels is None else sd_levels
    return {
        float(sd): sample_curve(sex, metric, sd, age_step, age_min, age_max, store=store)
        for sd in levels
    }


def curve_label(sd_level: float) -> str:
    sd = float(sd_level) + 0.0
    text = f"{sd:g}"
    return f"+{text}SD" if sd > 0 else f"{text}SD"


def curve_style(metric: str, sd_level: float) -> dict:
    """Stroke hints for the chart renderer."""
    sd = float(sd_level)
    dashed = sd in TREATMENT_THRESHOLDS.get(metric, ())
    return {
        "label": curve_label(sd),
        "width": 2 if sd == 0 else 1,
        "dash": "5,5" if dashed else "",
        "threshold": dashed,
    }
