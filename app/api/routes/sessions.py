from __future__ import annotations

import logging

from fastapi import APIRouter, Depends, HTTPException

from app.api.deps import get_store, http_error
from app.schemas.growth import ChildInfoIn, ChildInfoPatch, MeasurementIn, SessionOut
from app.services import session_store
from app.services.measurement_session import ChildInfo, MeasurementSession
from app.services.presentation import chart_filename, sd_status
from src.models.growth.errors import GrowthError
from src.models.growth.reference import ReferenceTableStore


router = APIRouter(prefix="/sessions", tags=["sessions"])
logger = logging.getLogger(__name__)


def _session_or_404(session_id: str) -> MeasurementSession:
    try:
        return session_store.get_session(session_id)
    except KeyError:
        raise HTTPException(status_code=404, detail=f"Unknown session {session_id}")


def _session_out(session_id: str, session: MeasurementSession) -> SessionOut:
    child = session.child
    rows = []
    for i, m in enumerate(session.measurements):
        rows.append(
            {
                "index": i,
                **m.to_dict(),
                "height_status": sd_status(m.height_sd, "height"),
                "weight_status": sd_status(m.weight_sd, "weight"),
            }
        )
    return SessionOut(
        session_id=session_id,
        child=ChildInfoIn(
            patient_id=child.patient_id,
            full_name=child.full_name,
            birth_date=child.birth_date,
            gender=child.gender,
        ),
        measurements=rows,
        chart_filename=chart_filename(child),
    )


@router.post("", response_model=SessionOut)
def create_session(inp: ChildInfoIn, store: ReferenceTableStore = Depends(get_store)) -> SessionOut:
    child = ChildInfo(**inp.model_dump())
    session_id = session_store.create_session(child, store=store)
    return _session_out(session_id, session_store.get_session(session_id))


@router.get("")
def list_sessions(limit: int = 5000):
    return {"session_ids": session_store.list_session_ids(limit=limit)}


@router.get("/{session_id}", response_model=SessionOut)
def get_session(session_id: str) -> SessionOut:
    return _session_out(session_id, _session_or_404(session_id))


@router.delete("/{session_id}")
def delete_session(session_id: str):
    _session_or_404(session_id)
    session_store.drop_session(session_id)
    return {"status": "ok", "session_id": session_id}


@router.patch("/{session_id}/child", response_model=SessionOut)
def update_child(session_id: str, inp: ChildInfoPatch) -> SessionOut:
    """Update child info; changing gender re-scores every measurement."""
    session = _session_or_404(session_id)
    try:
        session.set_child_info(**inp.model_dump(exclude_unset=True))
    except GrowthError as e:
        raise http_error(e)
    return _session_out(session_id, session)


@router.post("/{session_id}/measurements", response_model=SessionOut)
def add_measurement(session_id: str, inp: MeasurementIn) -> SessionOut:
    session = _session_or_404(session_id)
    try:
        session.add_measurement(inp.date, inp.height, inp.weight)
    except GrowthError as e:
        logger.debug("Rejected measurement for session %s: %s", session_id, e)
        raise http_error(e)
    return _session_out(session_id, session)


@router.delete("/{session_id}/measurements/{index}", response_model=SessionOut)
def delete_measurement(session_id: str, index: int) -> SessionOut:
    session = _session_or_404(session_id)
    try:
        session.delete_measurement(index)
    except GrowthError as e:
        raise http_error(e)
    return _session_out(session_id, session)
