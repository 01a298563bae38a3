from datetime import date
from typing import List, Literal, Optional

from pydantic import BaseModel, Field

Sex = Literal["male", "female"]
Metric = Literal["height", "weight"]


class ScoreInput(BaseModel):
    sex: Sex
    metric: Metric
    value: float = Field(..., gt=0, description="cm for height, kg for weight")
    age: Optional[float] = Field(None, ge=0, description="Decimal age in years")
    birth_date: Optional[date] = None
    measurement_date: Optional[date] = None


class ScoreOutput(BaseModel):
    sex: Sex
    metric: Metric
    value: float
    age: float
    sd: float
    raw_sd: float


class ValueInput(BaseModel):
    sex: Sex
    metric: Metric
    sd: float
    age: float = Field(..., ge=0)


class ValueOutput(BaseModel):
    sex: Sex
    metric: Metric
    sd: float
    age: float
    value: float


class CurvePointOut(BaseModel):
    age: float
    value: float


class CurveStyle(BaseModel):
    label: str
    width: int
    dash: str
    threshold: bool


class CurveOut(BaseModel):
    sex: Sex
    metric: Metric
    sd_level: float
    style: CurveStyle
    points: List[CurvePointOut]


class CurvesResponse(BaseModel):
    reference_version: str
    curves: List[CurveOut]


class ChildInfoIn(BaseModel):
    patient_id: str = ""
    full_name: str = ""
    birth_date: Optional[date] = None
    gender: Sex = "male"


class ChildInfoPatch(BaseModel):
    patient_id: Optional[str] = None
    full_name: Optional[str] = None
    birth_date: Optional[date] = None
    gender: Optional[Sex] = None


class MeasurementIn(BaseModel):
    date: date
    height: Optional[float] = Field(None, description="cm")
    weight: Optional[float] = Field(None, description="kg")


class MeasurementOut(BaseModel):
    index: int
    date: date
    age: Optional[float]
    height: float
    weight: float
    height_sd: Optional[float]
    weight_sd: Optional[float]
    height_status: str
    weight_status: str


class SessionOut(BaseModel):
    session_id: str
    child: ChildInfoIn
    measurements: List[MeasurementOut]
    chart_filename: str
