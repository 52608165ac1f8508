"""Services package."""

from app.services.encryption_service import EncryptionService
from app.services.language_model_service import LanguageModelService
from app.services.provider_service import ProviderService
from app.services.user_service import UserService

__all__ = ["EncryptionService", "LanguageModelService", "ProviderService", "UserService"]
