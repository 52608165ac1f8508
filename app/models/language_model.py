"""Language model database model."""

from datetime import datetime
from sqlalchemy import Column, Integer, String, Boolean, DateTime, ForeignKey, Index
from sqlalchemy.orm import relationship
from app.database.database import Base
from app.models.model_catalog import (
    AIBackend,
    is_best_alias,
    resolve_ai_backend,
    resolve_provider_name,
)


class LanguageModel(Base):
    """A user's (or shared) reference to a provider model."""

    __tablename__ = "language_models"

    id = Column(Integer, primary_key=True, index=True)
    api_name = Column(String, nullable=True)
    description = Column(String, nullable=True)
    supports_images = Column(Boolean, nullable=False, default=False)
    position = Column(Integer, nullable=False)
    is_shared = Column(Boolean, nullable=False, default=False)
    user_id = Column(Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=False)
    # Required by validation only; the unvalidated creation path may leave it empty
    api_service_id = Column(Integer, ForeignKey("api_services.id", ondelete="SET NULL"), nullable=True)
    deleted_at = Column(DateTime, nullable=True)
    created_at = Column(DateTime, default=datetime.utcnow)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)

    # Relationships
    user = relationship("User", back_populates="language_models")
    api_service = relationship("APIService", back_populates="language_models")
    all_assistants = relationship(
        "Assistant",
        back_populates="language_model",
        cascade="all, delete-orphan",
        passive_deletes=True,
    )
    assistants = relationship(
        "Assistant",
        primaryjoin="and_(LanguageModel.id == Assistant.language_model_id, Assistant.deleted_at.is_(None))",
        viewonly=True,
    )

    # Constraints
    __table_args__ = (
        Index('ix_language_models_user_id_deleted_at', 'user_id', 'deleted_at'),
        Index('ix_language_models_position', 'position'),
    )

    @property
    def is_deleted(self) -> bool:
        return self.deleted_at is not None

    @property
    def is_best(self) -> bool:
        return is_best_alias(self.api_name)

    @property
    def provider_name(self) -> str:
        """Exact model version string the provider API expects."""
        return resolve_provider_name(self.api_name)

    @property
    def ai_backend(self) -> AIBackend:
        """Backend family that handles this model."""
        driver = self.api_service.driver if self.api_service is not None else None
        return resolve_ai_backend(self.api_name, driver)

    def __repr__(self) -> str:
        return f"<LanguageModel id={self.id} api_name={self.api_name!r} user_id={self.user_id}>"
