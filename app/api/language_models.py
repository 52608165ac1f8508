"""Language model API endpoints."""

from typing import List, Optional
from fastapi import APIRouter, Depends, HTTPException
from pydantic import BaseModel
from sqlalchemy.orm import Session

from app.database.database import get_db
from app.exceptions import RecordValidationError
from app.models.language_model import LanguageModel
from app.services.language_model_service import LanguageModelService

router = APIRouter(prefix="/api", tags=["language_models"])


class LanguageModelCreate(BaseModel):
    """Language model creation request."""

    api_name: str = ""
    description: str = ""
    supports_images: bool = False
    api_service_id: Optional[int] = None
    is_shared: bool = False


class LanguageModelResponse(BaseModel):
    """Language model response."""

    id: int
    user_id: int
    api_service_id: Optional[int] = None
    api_name: Optional[str] = None
    description: Optional[str] = None
    supports_images: bool
    position: int
    is_shared: bool
    provider_name: Optional[str] = None
    ai_backend: str
    deleted_at: Optional[str] = None
    created_at: str
    updated_at: str


def get_language_model_service() -> LanguageModelService:
    """Get language model service instance."""
    return LanguageModelService()


def to_response(language_model: LanguageModel) -> LanguageModelResponse:
    return LanguageModelResponse(
        id=language_model.id,
        user_id=language_model.user_id,
        api_service_id=language_model.api_service_id,
        api_name=language_model.api_name,
        description=language_model.description,
        supports_images=language_model.supports_images,
        position=language_model.position,
        is_shared=language_model.is_shared,
        provider_name=language_model.provider_name,
        ai_backend=language_model.ai_backend.value,
        deleted_at=language_model.deleted_at.isoformat() if language_model.deleted_at else None,
        created_at=language_model.created_at.isoformat(),
        updated_at=language_model.updated_at.isoformat()
    )


@router.get("/users/{user_id}/language_models", response_model=List[LanguageModelResponse])
async def list_language_models(
    user_id: int,
    db: Session = Depends(get_db),
    service: LanguageModelService = Depends(get_language_model_service)
):
    """List active language models owned by or shared with a user."""
    try:
        return [to_response(m) for m in service.list_visible_to(db, user_id)]
    except Exception as e:
        raise HTTPException(status_code=500, detail=f"Failed to list language models: {str(e)}")


@router.post("/users/{user_id}/language_models", response_model=LanguageModelResponse, status_code=201)
async def create_language_model(
    user_id: int,
    request: LanguageModelCreate,
    db: Session = Depends(get_db),
    service: LanguageModelService = Depends(get_language_model_service)
):
    """Create a language model for a user.

    Validation failures return 422 with the field errors.
    """
    try:
        language_model = service.create(
            db,
            user_id=user_id,
            api_service_id=request.api_service_id,
            api_name=request.api_name,
            description=request.description,
            supports_images=request.supports_images,
            is_shared=request.is_shared
        )
        return to_response(language_model)
    except RecordValidationError as e:
        raise HTTPException(status_code=422, detail={"errors": e.errors})
    except Exception as e:
        raise HTTPException(status_code=500, detail=f"Failed to create language model: {str(e)}")


@router.get("/language_models/{language_model_id}", response_model=LanguageModelResponse)
async def get_language_model(
    language_model_id: int,
    db: Session = Depends(get_db),
    service: LanguageModelService = Depends(get_language_model_service)
):
    """Get a language model, including soft-deleted ones."""
    language_model = service.get_language_model(db, language_model_id)
    if not language_model:
        raise HTTPException(status_code=404, detail=f"Language model {language_model_id} not found")
    return to_response(language_model)


@router.delete("/language_models/{language_model_id}", status_code=204)
async def delete_language_model(
    language_model_id: int,
    db: Session = Depends(get_db),
    service: LanguageModelService = Depends(get_language_model_service)
):
    """Soft delete a language model."""
    try:
        deleted = service.soft_delete(db, language_model_id)
        if not deleted:
            raise HTTPException(status_code=404, detail=f"Language model {language_model_id} not found")
        return None
    except HTTPException:
        raise
    except Exception as e:
        raise HTTPException(status_code=500, detail=f"Failed to delete language model: {str(e)}")
