import logging

from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse
from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError
from sqlmodel import Session

from oncoliving.core.db import get_session
from oncoliving.core.settings import settings

logger = logging.getLogger(__name__)

router = APIRouter(prefix="", tags=["health"])


@router.get("/health")
def health(session: Session = Depends(get_session)):
    """Liveness plus a round trip to the database."""
    try:
        session.connection().execute(text("SELECT 1"))
    except SQLAlchemyError as e:
        logger.warning("[api] health check: database unreachable: %s", e)
        return JSONResponse(status_code=503, content={"ok": False, "db": False, "build": settings.BUILD_TAG})
    return {"ok": True, "db": True, "build": settings.BUILD_TAG}
