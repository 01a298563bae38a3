from __future__ import annotations

import logging
import uuid
from typing import Dict, List, Optional

from src.models.growth.reference import ReferenceTableStore

from app.services.measurement_session import ChildInfo, MeasurementSession

logger = logging.getLogger(__name__)

# Process-local; sessions live as long as the server process.
_SESSIONS: Dict[str, MeasurementSession] = {}


def create_session(child: Optional[ChildInfo] = None, store: Optional[ReferenceTableStore] = None) -> str:
    """Register a new measurement session and return its id."""
    session_id = uuid.uuid4().hex
    _SESSIONS[session_id] = MeasurementSession(child=child, store=store)
    logger.info("Created session %s", session_id)
    return session_id


def get_session(session_id: str) -> MeasurementSession:
    """Raises KeyError for unknown ids."""
    return _SESSIONS[session_id]


def drop_session(session_id: str) -> None:
    del _SESSIONS[session_id]
    logger.info("Dropped session %s", session_id)


def list_session_ids(limit: int = 5000) -> List[str]:
    return list(_SESSIONS)[:limit]


def clear() -> None:
    _SESSIONS.clear()
