"""API service database model."""

from datetime import datetime
from sqlalchemy import Column, Integer, String, DateTime, ForeignKey, CheckConstraint, Index
from sqlalchemy.orm import relationship
from app.database.database import Base
from app.models.model_catalog import AIBackend


class APIService(Base):
    """Provider endpoint and credential a language model talks through."""

    __tablename__ = "api_services"

    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=False)
    name = Column(String, nullable=False)
    driver = Column(String, nullable=False, default=AIBackend.OPENAI.value)  # openai or anthropic
    url = Column(String, nullable=False)
    token_encrypted = Column(String, nullable=True)
    deleted_at = Column(DateTime, nullable=True)
    created_at = Column(DateTime, default=datetime.utcnow)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)

    # Relationships
    user = relationship("User", back_populates="api_services")
    language_models = relationship("LanguageModel", back_populates="api_service", passive_deletes=True)

    # Constraints
    __table_args__ = (
        CheckConstraint("driver IN ('openai', 'anthropic')", name='ck_api_service_driver'),
        Index('ix_api_services_user_id', 'user_id'),
    )

    @property
    def ai_backend(self) -> AIBackend:
        return AIBackend(self.driver)

    @property
    def is_deleted(self) -> bool:
        return self.deleted_at is not None
