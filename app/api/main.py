from __future__ import annotations

import logging

from fastapi import FastAPI

from app.api import deps
from app.api.routes.curves import router as curves_router
from app.api.routes.growth import router as growth_router
from app.api.routes.sessions import router as sessions_router
from app.core.config import load_config, reference_dir
from src.models.growth.reference import load_reference_store


logger = logging.getLogger(__name__)

cfg = load_config()
deps.config = cfg

app = FastAPI(title="Growth SD Score API", version="0.1.0")

app.include_router(growth_router)
app.include_router(curves_router)
app.include_router(sessions_router)


@app.on_event("startup")
def _startup() -> None:
    """Load the reference tables once for the whole process."""
    try:
        deps.reference_store = load_reference_store(
            reference_dir(cfg),
            weight_model=cfg["growth"]["weight_model"],
            version=cfg["growth"].get("reference_version", ""),
        )
        logger.info(
            "Loaded reference tables %s: %s",
            deps.reference_store.version,
            sorted(deps.reference_store.keys()),
        )
    except (FileNotFoundError, ValueError) as e:
        deps.reference_store = None
        logger.warning("Growth reference not loaded: %s", e)


@app.get("/health")
def health():
    return {"status": "ok", "reference_loaded": deps.reference_store is not None}
