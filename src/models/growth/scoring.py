"""
SD scores against the reference population.

Forward:  raw value at an age  -> SD score (z)
Inverse:  SD level at an age   -> raw value a reference child would have

Both directions interpolate the reference row at the exact age first and then
apply the table's normalization model, so for any SD level on the 0.1 grid:

    score(value_at_sd(sd, age, ...), age, ...) == sd
"""

from __future__ import annotations

import math
from typing import Optional

from .errors import InvalidValueError
from .reference import ReferenceTableStore, default_store


def resolve_store(store: Optional[ReferenceTableStore]) -> ReferenceTableStore:
    return store if store is not None else default_store()


def round_sd(z: float) -> float:
    """Round a z-score to 0.1, halves away from zero."""
    if not math.isfinite(z):
        raise InvalidValueError(f"z-score is not finite: {z!r}")
    tenths = math.floor(abs(z) * 10.0 + 0.5)
    return math.copysign(tenths, z) / 10.0 + 0.0


def raw_score(value: float, age: float, sex: str, metric: str, store: Optional[ReferenceTableStore] = None) -> float:
    """Unrounded SD score of `value` at `age`."""
    table = resolve_store(store).get_table(sex, metric)
    return table.sd_for_value(age, float(value))


def score(value: float, age: float, sex: str, metric: str, store: Optional[ReferenceTableStore] = None) -> float:
    """SD score of `value` at `age`, rounded to one decimal."""
    return round_sd(raw_score(value, age, sex, metric, store=store))


def value_at_sd(sd: float, age: float, sex: str, metric: str, store: Optional[ReferenceTableStore] = None) -> float:
    """Raw value at SD level `sd` and `age`; full precision, no rounding."""
    table = resolve_store(store).get_table(sex, metric)
    return table.value_for_sd(age, float(sd))
