from datetime import datetime, timezone

from fastapi import APIRouter
from fastapi.responses import PlainTextResponse
from sqlalchemy import text

from storefront.db import engine
from storefront.utils.logging import get_logger

log = get_logger(__name__)

router = APIRouter(tags=["health"])


@router.get("/api/health")
def health():
    db_ok = False
    try:
        with engine.connect() as conn:
            conn.execute(text("SELECT 1"))
            db_ok = True
    except Exception:
        log.exception("Health check: database unreachable")

    return {
        "status": "success" if db_ok else "error",
        "message": "Server is healthy" if db_ok else "Database unreachable",
        "db": db_ok,
        "timestamp": datetime.now(timezone.utc).isoformat(),
    }


@router.get("/healthz", response_class=PlainTextResponse)
def healthz():
    return "OK"
