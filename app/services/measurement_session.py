from __future__ import annotations

import datetime
import threading
from dataclasses import asdict, dataclass, replace
from typing import Any, Dict, List, Optional, Tuple

import pandas as pd

from src.models.growth.age import DateLike, compute_age, to_date
from src.models.growth.config import AGE_MAX, AGE_MIN, SEXES
from src.models.growth.errors import (
    MeasurementIndexError,
    RangeError,
    UnknownTableError,
    ValidationError,
)
from src.models.growth.reference import ReferenceTableStore
from src.models.growth.scoring import resolve_store, score


@dataclass
class ChildInfo:
    patient_id: str = ""
    full_name: str = ""
    birth_date: Optional[datetime.date] = None
    gender: str = "male"


@dataclass
class Measurement:
    date: datetime.date
    height: float
    weight: float
    age: Optional[float] = None
    height_sd: Optional[float] = None
    weight_sd: Optional[float] = None

    def to_dict(self) -> Dict[str, Any]:
        d = asdict(self)
        d["date"] = self.date.isoformat()
        return d


def _missing(v: Any) -> bool:
    return v is None or (isinstance(v, str) and not v.strip())


class MeasurementSession:
    """
    One child's measurement list, scored against the reference tables.

    The list changes only through add_measurement, delete_measurement and
    recompute_for_gender; each either applies fully or raises with the list
    untouched.
    Mutations hold a per-session lock, so concurrent requests on one session
    run one after another.
    """

    def __init__(self, child: Optional[ChildInfo] = None, store: Optional[ReferenceTableStore] = None) -> None:
        self.child = child or ChildInfo()
        self.store = resolve_store(store)
        self._measurements: List[Measurement] = []
        self._lock = threading.RLock()

    @property
    def measurements(self) -> Tuple[Measurement, ...]:
        return tuple(self._measurements)

    def __len__(self) -> int:
        return len(self._measurements)

    def _scores(self, height: float, weight: float, age: float, gender: str) -> Tuple[float, float]:
        return (
            score(height, age, gender, "height", store=self.store),
            score(weight, age, gender, "weight", store=self.store),
        )

    def add_measurement(self, date: DateLike, height: Optional[float], weight: Optional[float]) -> Measurement:
        if _missing(height) or _missing(weight):
            raise ValidationError("Birth date, height and weight are all required")
        if _missing(date):
            raise ValidationError("Measurement date is required")

        measured_on = to_date(date)
        height = float(height)
        weight = float(weight)
        with self._lock:
            if _missing(self.child.birth_date):
                raise ValidationError("Birth date, height and weight are all required")
            age = compute_age(self.child.birth_date, measured_on)
            if age < AGE_MIN or age > AGE_MAX:
                raise RangeError(f"Age {age:.2f} years is outside {AGE_MIN:g}-{AGE_MAX:g}")

            height_sd, weight_sd = self._scores(height, weight, age, self.child.gender)
            m = Measurement(
                date=measured_on,
                height=height,
                weight=weight,
                age=age,
                height_sd=height_sd,
                weight_sd=weight_sd,
            )
            self._measurements.append(m)
            return m

    def delete_measurement(self, index: int) -> Measurement:
        with self._lock:
            if not 0 <= index < len(self._measurements):
                raise MeasurementIndexError(
                    f"No measurement at index {index} (have {len(self._measurements)})"
                )
            return self._measurements.pop(index)

    def recompute_for_gender(self, new_gender: str) -> None:
        """Re-score every aged measurement against `new_gender`'s tables, in place."""
        if new_gender not in SEXES:
            raise UnknownTableError(new_gender, "height")

        with self._lock:
            # compute everything before assigning anything
            updates = [
                (m, self._scores(m.height, m.weight, m.age, new_gender))
                for m in self._measurements
                if m.age is not None
            ]
            for m, (height_sd, weight_sd) in updates:
                m.height_sd = height_sd
                m.weight_sd = weight_sd
            self.child.gender = new_gender

    def set_child_info(self, **fields: Any) -> ChildInfo:
        """Update child fields; a gender change re-scores all measurements."""
        unknown = set(fields) - {"patient_id", "full_name", "birth_date", "gender"}
        if unknown:
            raise ValidationError(f"Unknown child fields: {sorted(unknown)}")
        for name in ("patient_id", "full_name"):
            if name in fields and not isinstance(fields[name], str):
                raise ValidationError(f"{name} must be a string")
        if "birth_date" in fields:
            bd = fields["birth_date"]
            fields["birth_date"] = None if _missing(bd) else to_date(bd)

        gender = fields.pop("gender", None)
        with self._lock:
            if gender is not None and gender != self.child.gender:
                self.recompute_for_gender(gender)
            elif gender is not None and gender not in SEXES:
                raise UnknownTableError(gender, "height")

            self.child = replace(self.child, **fields)
            return self.child

    def to_frame(self) -> pd.DataFrame:
        cols = ["date", "age", "height", "height_sd", "weight", "weight_sd"]
        return pd.DataFrame([m.to_dict() for m in self._measurements], columns=cols)
