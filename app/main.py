"""Main FastAPI application entry point."""

import logging
from fastapi import FastAPI, Depends
from pydantic import BaseModel
from sqlalchemy import text
from sqlalchemy.orm import Session
from typing import Optional

from app.config import settings
from app.database.database import init_db, get_db
from app.api.language_models import router as language_models_router
from app.services.encryption_service import EncryptionService

logger = logging.getLogger(__name__)

app = FastAPI(
    title="Language Model Registry",
    description="Users, API services and the language models their assistants run on",
    version="0.1.0",
)

app.include_router(language_models_router)


class HealthResponse(BaseModel):
    """Health check response."""
    
    status: str
    database: str
    message: Optional[str] = None


@app.on_event("startup")
async def startup_event():
    """Configure logging, validate encryption and initialize the database."""
    logging.basicConfig(
        level=settings.log_level.upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    # Exits if the key is missing or invalid
    EncryptionService()
    init_db()
    logger.info("Application started")


@app.get("/up", response_model=HealthResponse)
async def health_check(db: Session = Depends(get_db)):
    """Health check endpoint.
    
    Checks database connectivity.
    """
    try:
        db.execute(text("SELECT 1"))
        return HealthResponse(status="healthy", database="connected")
    except Exception as e:
        logger.error(f"Health check failed: {e}")
        return HealthResponse(status="unhealthy", database="disconnected", message=str(e))
