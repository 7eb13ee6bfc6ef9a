"""Health/Readiness probe endpoints (로그 제외 - 노이즈 방지)."""

import logging

from fastapi import APIRouter, Depends, status
from fastapi.responses import JSONResponse
from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from catalog.core.constants import SERVICE_NAME
from catalog.database.session import get_db_session

logger = logging.getLogger(__name__)

router = APIRouter(tags=["health"])


@router.get("/health")
async def health():
    return {"status": "healthy", "service": SERVICE_NAME}


@router.get("/ready")
async def readiness(session: AsyncSession = Depends(get_db_session)):
    try:
        await session.execute(text("SELECT 1"))
    except (SQLAlchemyError, OSError) as exc:
        logger.warning("Readiness check failed", extra={"error": str(exc)})
        return JSONResponse(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            content={"status": "unavailable", "service": SERVICE_NAME},
        )
    return {"status": "ready", "service": SERVICE_NAME}
