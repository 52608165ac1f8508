"""Assistant database model."""

from datetime import datetime
from sqlalchemy import Column, Integer, String, Text, DateTime, ForeignKey, Index
from sqlalchemy.orm import relationship
from app.database.database import Base


class Assistant(Base):
    """A user's assistant configured on top of a language model."""

    __tablename__ = "assistants"

    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=False)
    language_model_id = Column(
        Integer, ForeignKey("language_models.id", ondelete="CASCADE"), nullable=True
    )
    name = Column(String, nullable=False)
    description = Column(String, nullable=True)
    instructions = Column(Text, nullable=True)
    deleted_at = Column(DateTime, nullable=True)
    created_at = Column(DateTime, default=datetime.utcnow)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)

    # Relationships
    user = relationship("User", back_populates="assistants")
    language_model = relationship("LanguageModel", back_populates="all_assistants")

    __table_args__ = (
        Index('ix_assistants_user_id', 'user_id'),
        Index('ix_assistants_language_model_id', 'language_model_id'),
    )

    @property
    def is_deleted(self) -> bool:
        return self.deleted_at is not None
