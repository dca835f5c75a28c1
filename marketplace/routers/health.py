from fastapi import APIRouter
from fastapi.responses import JSONResponse
from sqlalchemy import text

from ..db import get_engine
from ..utils.log import get_logger

router = APIRouter(tags=["health"])
logger = get_logger(__name__)


@router.get("/healthz")
def healthz():
    """Liveness: the process is up."""
    return {"ok": True}


@router.get("/readyz")
def readyz():
    """Readiness: the database answers a trivial query."""
    try:
        with get_engine().connect() as conn:
            conn.execute(text("SELECT 1"))
    except Exception as e:
        logger.warning(f"Readiness check failed: {e}")
        return JSONResponse(status_code=503, content={"ready": False, "database": "error"})
    return {"ready": True, "database": "ok"}
