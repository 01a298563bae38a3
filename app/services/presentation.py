from __future__ import annotations

from datetime import date
from typing import Optional

from src.models.growth.config import ALERT_SD_BOUND, NORMAL_SD_BOUND

from app.services.measurement_session import ChildInfo


def sd_status(sd: Optional[float], metric: str) -> str:
    """Traffic-light class for a results-table SD cell.

    normal  -> within +-2 SD
    alert   -> beyond the metric's alert bound (2.5 for height, 2 for weight)
    caution -> in between
    """
    if sd is None:
        return "unknown"
    if -NORMAL_SD_BOUND <= sd <= NORMAL_SD_BOUND:
        return "normal"
    if abs(sd) > ALERT_SD_BOUND.get(metric, NORMAL_SD_BOUND):
        return "alert"
    return "caution"


def format_sd(sd: Optional[float]) -> str:
    if sd is None:
        return "-"
    return f"{'+' if sd > 0 else ''}{sd:.1f} SD"


def chart_filename(child: ChildInfo, on_date: Optional[date] = None) -> str:
    on_date = on_date or date.today()
    pid = (child.patient_id or "").strip() or "0"
    name = (child.full_name or "").strip()
    return f"growth_chart_{pid}_{name}_{on_date.isoformat()}.svg"
