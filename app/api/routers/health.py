# app/api/routers/health.py
from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse
from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from app.data.database import get_db
from app.utils.logging import get_logger

logger = get_logger(__name__)

router = APIRouter(tags=["health"])


@router.get("/health")
def health(db: Session = Depends(get_db)):
    checks = [{"name": "Self", "status": "Healthy", "description": None}]

    try:
        db.execute(text("SELECT 1"))
        checks.append({"name": "Database", "status": "Healthy", "description": None})
    except SQLAlchemyError as e:
        logger.error(f"Database health check failed: {e}")
        checks.append({"name": "Database", "status": "Unhealthy", "description": "Database is unreachable"})

    healthy = all(c["status"] == "Healthy" for c in checks)
    return JSONResponse(
        status_code=200 if healthy else 503,
        content={"status": "Healthy" if healthy else "Unhealthy", "checks": checks},
    )
