"""Provider service for managing API services (endpoints and credentials)."""

import logging
from typing import List, Optional
from datetime import datetime
from sqlalchemy.orm import Session

from app.exceptions import RecordNotFoundError, RecordValidationError
from app.models.api_service import APIService
from app.models.language_model import LanguageModel
from app.models.model_catalog import AIBackend
from app.models.user import User
from app.services.encryption_service import EncryptionService
from app.services.language_model_service import LanguageModelService

logger = logging.getLogger(__name__)


class ProviderService:
    """Service for managing a user's API services."""

    def __init__(
        self,
        encryption_service: EncryptionService,
        language_model_service: Optional[LanguageModelService] = None
    ):
        """Initialize provider service.

        Args:
            encryption_service: Service for encrypting/decrypting API tokens.
            language_model_service: Repository used to cascade soft deletes.
        """
        self.encryption_service = encryption_service
        self.language_model_service = language_model_service or LanguageModelService()

    def create_api_service(
        self,
        db: Session,
        user_id: int,
        name: str,
        url: str,
        token: Optional[str] = None,
        driver: str = AIBackend.OPENAI.value
    ) -> APIService:
        """Add an API service for a user.

        Args:
            db: Database session.
            user_id: Owner ID.
            name: Display name.
            url: Provider API base URL.
            token: Provider API token (will be encrypted).
            driver: Backend family, ``openai`` or ``anthropic``.

        Returns:
            The created APIService instance.

        Raises:
            RecordValidationError: If a field is blank, the driver is unknown
                or the user does not exist.
        """
        errors = {}
        if not (name or "").strip():
            errors["name"] = ["can't be blank"]
        if not (url or "").strip():
            errors["url"] = ["can't be blank"]
        if driver not in {backend.value for backend in AIBackend}:
            errors["driver"] = ["is not included in the list"]
        if db.get(User, user_id) is None:
            errors["user"] = ["must exist"]
        if errors:
            raise RecordValidationError("APIService", errors)

        api_service = APIService(
            user_id=user_id,
            name=name,
            url=url.rstrip('/'),
            driver=driver,
            token_encrypted=self.encryption_service.encrypt(token) if token else None
        )

        try:
            db.add(api_service)
            db.commit()
            db.refresh(api_service)
            logger.info(f"API service '{name}' added for user {user_id}")
            return api_service
        except Exception as e:
            db.rollback()
            logger.error(f"Failed to add API service '{name}': {e}")
            raise

    def get_api_service(self, db: Session, api_service_id: int) -> Optional[APIService]:
        """Get an API service by ID.

        Args:
            db: Database session.
            api_service_id: API service ID.

        Returns:
            APIService instance or None if not found.
        """
        return db.query(APIService).filter(APIService.id == api_service_id).first()

    def list_for_user(self, db: Session, user_id: int, include_masked_tokens: bool = True) -> List[dict]:
        """List a user's active API services with masked tokens.

        Args:
            db: Database session.
            user_id: Owner ID.
            include_masked_tokens: Whether to include masked tokens in response.

        Returns:
            List of API service dictionaries.
        """
        api_services = db.query(APIService).filter(
            APIService.user_id == user_id,
            APIService.deleted_at.is_(None)
        ).order_by(APIService.id).all()

        result = []
        for api_service in api_services:
            service_dict = {
                "id": api_service.id,
                "name": api_service.name,
                "url": api_service.url,
                "driver": api_service.driver,
                "created_at": api_service.created_at,
                "updated_at": api_service.updated_at,
            }

            if include_masked_tokens:
                if not api_service.token_encrypted:
                    service_dict["token_masked"] = ""
                else:
                    try:
                        token = self.encryption_service.decrypt(api_service.token_encrypted)
                        service_dict["token_masked"] = self.encryption_service.mask(token)
                    except Exception as e:
                        logger.error(f"Failed to decrypt token for API service {api_service.id}: {e}")
                        service_dict["token_masked"] = "***ERROR***"

            result.append(service_dict)

        return result

    def get_token(self, db: Session, api_service_id: int) -> Optional[str]:
        """Get the decrypted token of an API service.

        Args:
            db: Database session.
            api_service_id: API service ID.

        Returns:
            The plaintext token, or None if the service has no token.

        Raises:
            RecordNotFoundError: If the API service does not exist.
        """
        api_service = self.get_api_service(db, api_service_id)
        if not api_service:
            raise RecordNotFoundError("APIService", api_service_id)
        if not api_service.token_encrypted:
            return None
        return self.encryption_service.decrypt(api_service.token_encrypted)

    def soft_delete(self, db: Session, api_service_id: int) -> bool:
        """Soft delete an API service and the language models using it.

        Args:
            db: Database session.
            api_service_id: API service ID.

        Returns:
            True if deleted, False if the API service was not found.
        """
        api_service = self.get_api_service(db, api_service_id)
        if not api_service:
            return False
        if api_service.deleted_at is not None:
            return True

        now = datetime.utcnow()
        api_service.deleted_at = now
        language_models = db.query(LanguageModel).filter(
            LanguageModel.api_service_id == api_service_id,
            LanguageModel.deleted_at.is_(None)
        ).all()

        try:
            for language_model in language_models:
                self.language_model_service.mark_deleted(db, language_model, now)
            db.commit()
            logger.info(
                f"API service {api_service_id} deleted "
                f"(soft deleted {len(language_models)} language models)"
            )
            return True
        except Exception as e:
            db.rollback()
            logger.error(f"Failed to delete API service {api_service_id}: {e}")
            raise
