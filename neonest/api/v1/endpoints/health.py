"""Health check endpoint for load balancers and monitoring."""

import logging
import os

from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse

from neonest.api.deps import get_store
from neonest.core.constants import BABY_PROFILES_KEY
from neonest.core.exceptions import StorageError
from neonest.store.base import LocalRecordStore

logger = logging.getLogger(__name__)
router = APIRouter()


@router.get("")
async def health():
    """Simple liveness check. Optionally includes built_at if BACKEND_BUILT_AT env is set."""
    payload: dict = {"status": "ok"}
    built_at = os.environ.get("BACKEND_BUILT_AT")
    if built_at:
        payload["built_at"] = built_at
    return payload


@router.get("/ready")
async def readiness(store: LocalRecordStore = Depends(get_store)):
    """Readiness: app + record store connectivity."""
    try:
        await store.get(BABY_PROFILES_KEY)
        return {"status": "ok", "store": "connected"}
    except StorageError as e:
        logger.exception("Record store readiness check failed")
        return JSONResponse(
            status_code=503,
            content={"status": "error", "store": str(e)},
        )
