from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from types import MappingProxyType
from typing import Mapping, Optional, Tuple

import numpy as np
import pandas as pd

from .config import METRICS, REFERENCE_DIR, SEXES
from .errors import UnknownTableError
from .interpolate import interpolate
from .normalization import MODELS, NormalizationModel, model_for_columns


@dataclass(frozen=True)
class ReferenceTable:
    """
    Age-sorted reference rows for one sex and one metric.

    Rows must be strictly increasing by age (no duplicates), at least two of
    them, all of the row type of `model`.
    """

    sex: str
    metric: str
    model: NormalizationModel = field(compare=False)
    rows: Tuple = ()
    ages: np.ndarray = field(init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        rows = tuple(self.rows)
        if len(rows) < 2:
            raise ValueError(f"{self.sex}/{self.metric}: a reference table needs at least 2 rows")
        bad = [r for r in rows if not isinstance(r, self.model.row_type)]
        if bad:
            raise ValueError(
                f"{self.sex}/{self.metric}: rows must be {self.model.row_type.__name__} for model {self.model.name!r}"
            )
        ages = np.array([r.age for r in rows], dtype=float)
        if not np.all(np.diff(ages) > 0):
            raise ValueError(f"{self.sex}/{self.metric}: ages must be strictly increasing")
        object.__setattr__(self, "rows", rows)
        object.__setattr__(self, "ages", ages)

    @property
    def min_age(self) -> float:
        return float(self.ages[0])

    @property
    def max_age(self) -> float:
        return float(self.ages[-1])

    def at(self, age: float):
        return interpolate(self, age)

    def sd_for_value(self, age: float, value: float) -> float:
        return self.model.z_score(self.at(age), value)

    def value_for_sd(self, age: float, sd: float) -> float:
        return self.model.value_at_z(self.at(age), sd)


@dataclass(frozen=True)
class ReferenceTableStore:
    """Read-only (sex, metric) -> ReferenceTable mapping."""

    tables: Mapping[Tuple[str, str], ReferenceTable]
    version: str = ""

    def __post_init__(self) -> None:
        object.__setattr__(self, "tables", MappingProxyType(dict(self.tables)))

    def get_table(self, sex: str, metric: str) -> ReferenceTable:
        try:
            return self.tables[(sex, metric)]
        except (KeyError, TypeError):
            raise UnknownTableError(sex, metric) from None

    def keys(self):
        return self.tables.keys()


def tables_from_frame(df: pd.DataFrame, metric: str, source: str = "") -> dict:
    """Split a long-format frame (sex, age, <model params>) into per-sex tables."""
    required = {"sex", "age"}
    missing = required - set(df.columns)
    if missing:
        raise ValueError(f"{source or metric} missing columns: {sorted(missing)}")
    model = model_for_columns(df.columns)

    df = df.copy()
    df["sex"] = df["sex"].astype(str).str.strip().str.lower()
    df = df.sort_values(["sex", "age"]).reset_index(drop=True)

    out = {}
    for sex, sdf in df.groupby("sex", sort=True):
        rows = tuple(model.make_row(rec) for rec in sdf.to_dict("records"))
        out[(sex, metric)] = ReferenceTable(sex=sex, metric=metric, model=model, rows=rows)
    return out


def _load_table(path: Path, metric: str) -> dict:
    df = pd.read_csv(path)
    return tables_from_frame(df, metric, source=path.name)


def load_reference_store(reference_dir=REFERENCE_DIR, weight_model: str = "lms", version: str = "") -> ReferenceTableStore:
    """
    Load the height/weight reference tables from a directory.

    Expected files:
      height_lms.csv     (sex, age, L, M, S)
      weight_lms.csv     (sex, age, L, M, S)
      weight_normal.csv  (sex, age, mean, sd)  only when weight_model="normal"
    """
    d = Path(reference_dir)
    if not d.exists():
        raise FileNotFoundError(f"Reference directory not found: {d}")
    if weight_model not in MODELS:
        raise ValueError(f"Unknown weight model {weight_model!r}; expected one of {sorted(MODELS)}")

    files = {
        "height": d / "height_lms.csv",
        "weight": d / f"weight_{weight_model}.csv",
    }
    tables: dict = {}
    for metric, path in files.items():
        if not path.exists():
            raise FileNotFoundError(f"Reference table missing: {path}")
        tables.update(_load_table(path, metric))

    unexpected = [k for k in tables if k[0] not in SEXES or k[1] not in METRICS]
    if unexpected:
        raise ValueError(f"Unexpected reference tables: {unexpected}")
    absent = [(s, m) for s in SEXES for m in METRICS if (s, m) not in tables]
    if absent:
        raise ValueError(f"Reference tables incomplete, missing: {absent}")

    return ReferenceTableStore(tables=tables, version=version or d.name)


_STORE: Optional[ReferenceTableStore] = None


def default_store() -> ReferenceTableStore:
    """Shipped JSPE 2000 tables, loaded once per process."""
    global _STORE
    if _STORE is not None:
        return _STORE
    _STORE = load_reference_store(REFERENCE_DIR)
    return _STORE
