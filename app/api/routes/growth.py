from __future__ import annotations

from fastapi import APIRouter, Depends, HTTPException

from app.api.deps import get_store, http_error
from app.schemas.growth import ScoreInput, ScoreOutput, ValueInput, ValueOutput
from src.models.growth.age import compute_age
from src.models.growth.errors import GrowthError
from src.models.growth.reference import ReferenceTableStore
from src.models.growth.scoring import raw_score, round_sd, value_at_sd


router = APIRouter(prefix="/growth", tags=["growth"])


@router.post("/score", response_model=ScoreOutput)
def growth_score(inp: ScoreInput, store: ReferenceTableStore = Depends(get_store)) -> ScoreOutput:
    """SD score of one measurement; age given directly or from birth/measurement dates."""
    if inp.age is not None:
        age = inp.age
    elif inp.birth_date is not None and inp.measurement_date is not None:
        age = compute_age(inp.birth_date, inp.measurement_date)
    else:
        raise HTTPException(
            status_code=422,
            detail="Provide either age or both birth_date and measurement_date",
        )

    try:
        z = raw_score(inp.value, age, inp.sex, inp.metric, store=store)
        sd = round_sd(z)
    except GrowthError as e:
        raise http_error(e)

    return ScoreOutput(sex=inp.sex, metric=inp.metric, value=inp.value, age=age, sd=sd, raw_sd=z)


@router.post("/value", response_model=ValueOutput)
def growth_value(inp: ValueInput, store: ReferenceTableStore = Depends(get_store)) -> ValueOutput:
    """Raw value a reference child has at the given SD level and age."""
    try:
        value = value_at_sd(inp.sd, inp.age, inp.sex, inp.metric, store=store)
    except GrowthError as e:
        raise http_error(e)
    return ValueOutput(sex=inp.sex, metric=inp.metric, sd=inp.sd, age=inp.age, value=value)
