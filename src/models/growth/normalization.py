from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Dict, Union

from .errors import InvalidValueError


@dataclass(frozen=True)
class LMSRow:
    """One age point of a power-transform (LMS) reference table.

    L is the Box-Cox power, M the median and S the coefficient of variation.
    """

    age: float
    L: float
    M: float
    S: float


@dataclass(frozen=True)
class NormalRow:
    """One age point of a mean/SD reference table."""

    age: float
    mean: float
    sd: float


ReferenceRow = Union[LMSRow, NormalRow]


def _finite(x: float, what: str) -> float:
    if not math.isfinite(x):
        raise InvalidValueError(f"{what} is not a finite number")
    return x


class NormalizationModel:
    """Capability set shared by both reference schemes.

    Subclasses map a raw value to a z-score and back at one (already
    interpolated) reference row.
    """

    name: str = ""
    row_type: type = object
    columns: tuple = ()

    def z_score(self, row, value: float) -> float:
        raise NotImplementedError

    def value_at_z(self, row, sd: float) -> float:
        raise NotImplementedError

    def make_row(self, record: dict):
        return self.row_type(**{c: float(record[c]) for c in ("age",) + self.columns})


class LMSModel(NormalizationModel):
    """
    LMS method:
      If L != 0: Z = ((value/M)^L - 1) / (L*S)
      If L == 0: Z = ln(value/M) / S
    and the inverse
      If L != 0: value = M * (1 + L*S*Z)^(1/L)
      If L == 0: value = M * exp(S*Z)
    """

    name = "lms"
    row_type = LMSRow
    columns = ("L", "M", "S")
    zero_tol = 1e-10

    def z_score(self, row: LMSRow, value: float) -> float:
        if not math.isfinite(value) or value <= 0:
            raise InvalidValueError(f"LMS transform needs a positive value, got {value!r}")
        try:
            if abs(row.L) < self.zero_tol:
                z = math.log(value / row.M) / row.S
            else:
                z = ((value / row.M) ** row.L - 1.0) / (row.L * row.S)
        except (OverflowError, ValueError) as e:
            raise InvalidValueError(f"Cannot score {value!r} at age {row.age}: {e}") from e
        return _finite(z, "z-score")

    def value_at_z(self, row: LMSRow, sd: float) -> float:
        _finite(sd, "SD level")
        base = 1.0 + row.L * row.S * sd
        if abs(row.L) >= self.zero_tol and base <= 0:
            raise InvalidValueError(
                f"SD level {sd} is outside the LMS support at age {row.age} (L={row.L}, S={row.S})"
            )
        try:
            if abs(row.L) < self.zero_tol:
                value = row.M * math.exp(row.S * sd)
            else:
                value = row.M * base ** (1.0 / row.L)
        except OverflowError as e:
            raise InvalidValueError(f"SD level {sd} overflows at age {row.age}") from e
        return _finite(value, "value")


class NormalModel(NormalizationModel):
    """Plain mean/SD model: Z = (value - mean) / sd."""

    name = "normal"
    row_type = NormalRow
    columns = ("mean", "sd")

    def z_score(self, row: NormalRow, value: float) -> float:
        if not math.isfinite(value) or value <= 0:
            raise InvalidValueError(f"Measurement must be positive, got {value!r}")
        if row.sd <= 0:
            raise InvalidValueError(f"Reference sd must be positive at age {row.age}")
        return _finite((value - row.mean) / row.sd, "z-score")

    def value_at_z(self, row: NormalRow, sd: float) -> float:
        _finite(sd, "SD level")
        return _finite(row.mean + row.sd * sd, "value")


MODELS: Dict[str, NormalizationModel] = {
    LMSModel.name: LMSModel(),
    NormalModel.name: NormalModel(),
}


def model_for_columns(columns) -> NormalizationModel:
    """Pick the model whose parameter columns are all present."""
    cols = set(columns)
    for model in MODELS.values():
        if set(model.columns) <= cols:
            return model
    raise ValueError(
        f"Unrecognized reference columns {sorted(cols)}; expected one of "
        + ", ".join(str(list(m.columns)) for m in MODELS.values())
    )
