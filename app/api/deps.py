from __future__ import annotations

from typing import Optional

from fastapi import HTTPException

from src.models.growth.errors import MeasurementIndexError, UnknownTableError
from src.models.growth.reference import ReferenceTableStore

# set at application startup
reference_store: Optional[ReferenceTableStore] = None
config: dict = {}


def get_store() -> ReferenceTableStore:
    if reference_store is None:
        raise HTTPException(
            status_code=503,
            detail="Growth reference data not loaded. Check server configuration (paths.reference_dir)",
        )
    return reference_store


def get_config() -> dict:
    return config


def http_error(e: Exception, path_params: bool = False) -> HTTPException:
    """Map a growth-engine error to the HTTP status the routes return."""
    if isinstance(e, MeasurementIndexError):
        return HTTPException(status_code=404, detail=str(e))
    if isinstance(e, UnknownTableError):
        return HTTPException(status_code=404 if path_params else 422, detail=str(e))
    return HTTPException(status_code=422, detail=str(e))
