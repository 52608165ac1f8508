"""User database model."""

from datetime import datetime
from sqlalchemy import Column, Integer, String, DateTime
from sqlalchemy.orm import relationship
from app.database.database import Base


class User(Base):
    """Owner of API services, language models and assistants."""

    __tablename__ = "users"

    id = Column(Integer, primary_key=True, index=True)
    email = Column(String, nullable=False, unique=True)
    first_name = Column(String, nullable=True)
    last_name = Column(String, nullable=True)
    password_digest = Column(String, nullable=True)
    created_at = Column(DateTime, default=datetime.utcnow)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)

    # Relationships
    api_services = relationship(
        "APIService", back_populates="user", cascade="all, delete-orphan", passive_deletes=True
    )
    language_models = relationship(
        "LanguageModel", back_populates="user", cascade="all, delete-orphan", passive_deletes=True
    )
    assistants = relationship(
        "Assistant", back_populates="user", cascade="all, delete-orphan", passive_deletes=True
    )

    @property
    def full_name(self) -> str:
        return " ".join(part for part in (self.first_name, self.last_name) if part)
