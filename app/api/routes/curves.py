from __future__ import annotations

from typing import List, Optional

from fastapi import APIRouter, Depends, Query

from app.api.deps import get_config, get_store, http_error
from app.core.config import sd_levels
from app.schemas.growth import CurveOut, CurvesResponse
from src.models.growth.curves import curve_style, sample_curves
from src.models.growth.errors import GrowthError
from src.models.growth.reference import ReferenceTableStore


router = APIRouter(prefix="/curves", tags=["curves"])


@router.get("/{sex}/{metric}", response_model=CurvesResponse)
def get_curves(
    sex: str,
    metric: str,
    sd: Optional[List[float]] = Query(None, description="SD levels; defaults to the configured set"),
    age_step: Optional[float] = Query(None, ge=0.01, le=1),
    store: ReferenceTableStore = Depends(get_store),
    cfg: dict = Depends(get_config),
) -> CurvesResponse:
    """Reference SD curves for one sex and metric, sampled on the age grid."""
    try:
        store.get_table(sex, metric)
        levels = sd if sd else sd_levels(cfg, metric)
        step = age_step or float(cfg["growth"]["age_step"])
        curves = sample_curves(sex, metric, levels, age_step=step, store=store)
    except GrowthError as e:
        raise http_error(e, path_params=True)

    return CurvesResponse(
        reference_version=store.version,
        curves=[
            CurveOut(
                sex=c.sex,
                metric=c.metric,
                sd_level=c.sd_level,
                style=curve_style(c.metric, c.sd_level),
                points=[{"age": p.age, "value": p.value} for p in c.points],
            )
            for c in curves.values()
        ],
    )
