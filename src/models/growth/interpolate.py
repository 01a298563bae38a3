from __future__ import annotations

import math
from dataclasses import fields, replace

import numpy as np

from .errors import InvalidValueError


def bracket(ages: np.ndarray, age: float) -> tuple[int, int]:
    """
    Return (left, right) row indices with ages[left] <= age <= ages[right].

    left == right when age hits a row exactly or lies outside the table
    (clamped to the nearest boundary row).
    """
    n = len(ages)
    if age <= ages[0]:
        return 0, 0
    if age >= ages[n - 1]:
        return n - 1, n - 1
    right = int(np.searchsorted(ages, age, side="left"))
    if ages[right] == age:
        return right, right
    return right - 1, right


def interpolate(table, age: float):
    """
    Reference parameters of `table` at an exact age.

    Every numeric field is blended linearly between the bracketing rows;
    ages outside the table are clamped to the first/last row, never
    extrapolated.
    """
    age = float(age)
    if not math.isfinite(age):
        raise InvalidValueError(f"Age must be finite, got {age!r}")

    rows = table.rows
    i, j = bracket(table.ages, age)
    if i == j:
        return rows[i]

    left, right = rows[i], rows[j]
    fraction = (age - left.age) / (right.age - left.age)
    blended = {
        f.name: getattr(left, f.name) + fraction * (getattr(right, f.name) - getattr(left, f.name))
        for f in fields(left)
        if f.name != "age"
    }
    return replace(left, age=age, **blended)
