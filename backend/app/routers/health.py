from typing import Optional

from fastapi import APIRouter, Depends
from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from app.config import settings
from app.database import get_db_optional
from app.models.schemas import HealthResponse

router = APIRouter()


@router.get("/health", response_model=HealthResponse)
async def health(db: Optional[Session] = Depends(get_db_optional)):
    connected = False
    if db is not None:
        try:
            db.execute(text("SELECT 1"))
            connected = True
        except SQLAlchemyError:
            connected = False
    return {
        "status": "healthy",
        "environment": settings.environment,
        "database_connected": connected,
    }
