from fastapi import APIRouter, Depends
from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from taskboard.db import get_db
from taskboard.logger import get_logger

logger = get_logger(__name__)

router = APIRouter(prefix="/api", tags=["Health"])


@router.get("/health")
def health(db: Session = Depends(get_db)):
    """Report database connectivity."""
    try:
        db.execute(text("SELECT 1"))
        database = True
    except SQLAlchemyError as e:
        logger.error(f"Database health check failed: {e}")
        database = False
    return {
        "status": "healthy" if database else "degraded",
        "services": {"database": database},
    }
