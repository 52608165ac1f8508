"""User service for creating and destroying users."""

import logging
from typing import Optional
from sqlalchemy.orm import Session
from sqlalchemy.exc import IntegrityError

from app.exceptions import RecordNotFoundError, RecordValidationError
from app.models.user import User
from app.services.language_model_service import LanguageModelService

logger = logging.getLogger(__name__)


class UserService:
    """Service for managing users and their owned records."""

    def __init__(self, language_model_service: Optional[LanguageModelService] = None):
        """Initialize user service.

        Args:
            language_model_service: Repository used for the cascading delete.
        """
        self.language_model_service = language_model_service or LanguageModelService()

    def create_user(
        self,
        db: Session,
        email: str,
        first_name: Optional[str] = None,
        last_name: Optional[str] = None,
        password_digest: Optional[str] = None
    ) -> User:
        """Create a user.

        Args:
            db: Database session.
            email: Unique email address.
            first_name: Optional first name.
            last_name: Optional last name.
            password_digest: Opaque password hash supplied by the auth layer.

        Returns:
            The created User instance.

        Raises:
            RecordValidationError: If the email is blank or already taken.
        """
        if not (email or "").strip():
            raise RecordValidationError("User", {"email": ["can't be blank"]})

        user = User(
            email=email.strip(),
            first_name=first_name,
            last_name=last_name,
            password_digest=password_digest
        )
        try:
            db.add(user)
            db.commit()
            db.refresh(user)
            logger.info(f"User {user.id} created")
            return user
        except IntegrityError as e:
            db.rollback()
            logger.error(f"Failed to create user '{email}': {e}")
            raise RecordValidationError("User", {"email": ["has already been taken"]})

    def get_user(self, db: Session, user_id: int) -> Optional[User]:
        """Get a user by ID."""
        return db.query(User).filter(User.id == user_id).first()

    def destroy_user(self, db: Session, user_id: int) -> int:
        """Permanently delete a user and everything the user owns.

        Language models are hard deleted (not soft deleted), together with
        their assistants; API services and the user's assistants go with the
        user row. Everything happens in one transaction.

        Args:
            db: Database session.
            user_id: User ID to destroy.

        Returns:
            Number of language models removed.

        Raises:
            RecordNotFoundError: If the user does not exist.
        """
        user = self.get_user(db, user_id)
        if not user:
            raise RecordNotFoundError("User", user_id)

        try:
            removed = self.language_model_service.cascade_delete_for_owner(db, user_id, commit=False)
            db.delete(user)
            db.commit()
            logger.info(f"User {user_id} destroyed (cascade deleted {removed} language models)")
            return removed
        except Exception as e:
            db.rollback()
            logger.error(f"Failed to destroy user {user_id}: {e}")
            raise
