"""Database models package."""

from app.models.model_catalog import AIBackend
from app.models.user import User
from app.models.api_service import APIService
from app.models.language_model import LanguageModel
from app.models.assistant import Assistant

__all__ = [
    "AIBackend",
    "User",
    "APIService",
    "LanguageModel",
    "Assistant",
]
