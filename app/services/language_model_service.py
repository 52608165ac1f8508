"""Language model service: validation, scoping and lifecycle of registry entries."""

import logging
from typing import Dict, List, Optional
from datetime import datetime
from sqlalchemy import func, or_
from sqlalchemy.orm import Session, Query

from app.exceptions import RecordValidationError
from app.models.api_service import APIService
from app.models.assistant import Assistant
from app.models.language_model import LanguageModel
from app.models.user import User

logger = logging.getLogger(__name__)

BLANK = "can't be blank"
MUST_EXIST = "must exist"


class LanguageModelService:
    """Repository for language models.

    Normal creation goes through :meth:`create`, which validates first.
    :meth:`create_without_validation` is reserved for trusted callers such as
    seeding and fixtures and may persist blank fields.
    """

    def validate(self, db: Session, language_model: LanguageModel) -> Dict[str, List[str]]:
        """Validate a language model without persisting it.

        Args:
            db: Database session.
            language_model: Transient or persistent language model.

        Returns:
            Mapping of field name to error messages; empty when valid.
        """
        errors: Dict[str, List[str]] = {}

        if not (language_model.api_name or "").strip():
            errors["api_name"] = [BLANK]
        if not (language_model.description or "").strip():
            errors["description"] = [BLANK]
        if not self._reference_exists(db, User, language_model.user, language_model.user_id):
            errors["user"] = [MUST_EXIST]
        if not self._reference_exists(
            db, APIService, language_model.api_service, language_model.api_service_id
        ):
            errors["api_service"] = [MUST_EXIST]

        return errors

    def is_valid(self, db: Session, language_model: LanguageModel) -> bool:
        """Whether the language model passes validation."""
        return not self.validate(db, language_model)

    @staticmethod
    def _reference_exists(db: Session, model_class, related, related_id: Optional[int]) -> bool:
        if related is not None:
            return True
        if related_id is None:
            return False
        return db.get(model_class, related_id) is not None

    @staticmethod
    def _next_position(db: Session) -> int:
        current = db.query(func.max(LanguageModel.position)).scalar()
        return (current or 0) + 1

    def create(self, db: Session, **fields) -> LanguageModel:
        """Create a validated language model.

        Args:
            db: Database session.
            **fields: Column or relationship values (``user`` or ``user_id``,
                ``api_service`` or ``api_service_id``, ``api_name``, ...).

        Returns:
            The persisted LanguageModel with its position assigned.

        Raises:
            RecordValidationError: If any field is invalid. Nothing is written.
        """
        language_model = LanguageModel(**fields)
        errors = self.validate(db, language_model)
        if errors:
            logger.info(f"Rejected language model '{language_model.api_name}': {errors}")
            raise RecordValidationError("LanguageModel", errors)

        return self._persist(db, language_model)

    def create_without_validation(self, db: Session, **fields) -> LanguageModel:
        """Create a language model skipping every field check.

        Only database integrity (e.g. a user id that does not exist) can make
        this fail.

        Args:
            db: Database session.
            **fields: Column or relationship values.

        Returns:
            The persisted LanguageModel.

        Raises:
            IntegrityError: If a foreign key or NOT NULL constraint is violated.
        """
        language_model = LanguageModel(**fields)
        logger.warning(
            f"Creating language model '{language_model.api_name}' without validation"
        )
        return self._persist(db, language_model)

    def _persist(self, db: Session, language_model: LanguageModel) -> LanguageModel:
        language_model.position = self._next_position(db)
        try:
            db.add(language_model)
            db.commit()
            db.refresh(language_model)
            logger.info(
                f"Language model {language_model.id} '{language_model.api_name}' created "
                f"at position {language_model.position}"
            )
            return language_model
        except Exception as e:
            db.rollback()
            logger.error(f"Failed to create language model '{language_model.api_name}': {e}")
            raise

    def get_language_model(self, db: Session, language_model_id: int) -> Optional[LanguageModel]:
        """Get a language model by ID, including soft-deleted ones.

        Args:
            db: Database session.
            language_model_id: Language model ID.

        Returns:
            LanguageModel instance or None if not found.
        """
        return db.query(LanguageModel).filter(LanguageModel.id == language_model_id).first()

    def for_user(self, db: Session, user_id: int) -> Query:
        """Query of active language models visible to a user.

        Visible means owned by the user or shared, and not soft-deleted,
        ordered by position.
        """
        return (
            db.query(LanguageModel)
            .filter(
                or_(LanguageModel.user_id == user_id, LanguageModel.is_shared.is_(True)),
                LanguageModel.deleted_at.is_(None),
            )
            .order_by(LanguageModel.position.asc(), LanguageModel.id.asc())
        )

    def list_visible_to(self, db: Session, user_id: int) -> List[LanguageModel]:
        """List active language models visible to a user.

        Args:
            db: Database session.
            user_id: ID of the viewing user.

        Returns:
            List of LanguageModel instances ordered by position.
        """
        return self.for_user(db, user_id).all()

    def soft_delete(self, db: Session, language_model_id: int) -> bool:
        """Soft delete a language model and its active assistants.

        The row and its foreign keys stay in place. Deleting an entry that is
        already deleted keeps its original ``deleted_at``.

        Args:
            db: Database session.
            language_model_id: Language model ID to delete.

        Returns:
            True if the entry is deleted, False if it was not found.
        """
        language_model = self.get_language_model(db, language_model_id)
        if not language_model:
            return False

        if language_model.deleted_at is not None:
            logger.warning(
                f"Language model {language_model_id} already deleted at {language_model.deleted_at}"
            )
            return True

        try:
            detached = self.mark_deleted(db, language_model, datetime.utcnow())
            db.commit()
            logger.info(
                f"Language model {language_model_id} soft deleted "
                f"({detached} assistants detached)"
            )
            return True
        except Exception as e:
            db.rollback()
            logger.error(f"Failed to delete language model {language_model_id}: {e}")
            raise

    def mark_deleted(self, db: Session, language_model: LanguageModel, deleted_at: datetime) -> int:
        """Stamp a language model and its active assistants as deleted.

        Does not commit.

        Returns:
            Number of assistants that were detached.
        """
        language_model.deleted_at = deleted_at
        assistants = db.query(Assistant).filter(
            Assistant.language_model_id == language_model.id,
            Assistant.deleted_at.is_(None)
        ).all()
        for assistant in assistants:
            assistant.deleted_at = deleted_at
        return len(assistants)

    def restore(self, db: Session, language_model_id: int) -> bool:
        """Undo a soft delete.

        Assistants that were deleted together with the entry come back too.

        Args:
            db: Database session.
            language_model_id: Language model ID to restore.

        Returns:
            True if the entry is active afterwards, False if it was not found.
        """
        language_model = self.get_language_model(db, language_model_id)
        if not language_model:
            return False
        if language_model.deleted_at is None:
            return True

        deleted_at = language_model.deleted_at
        language_model.deleted_at = None
        assistants = db.query(Assistant).filter(
            Assistant.language_model_id == language_model_id,
            Assistant.deleted_at == deleted_at
        ).all()
        for assistant in assistants:
            assistant.deleted_at = None

        try:
            db.commit()
            logger.info(
                f"Language model {language_model_id} restored ({len(assistants)} assistants)"
            )
            return True
        except Exception as e:
            db.rollback()
            logger.error(f"Failed to restore language model {language_model_id}: {e}")
            raise

    def cascade_delete_for_owner(self, db: Session, user_id: int, commit: bool = True) -> int:
        """Permanently delete every language model a user owns.

        Assistants attached to those models are removed with them.

        Args:
            db: Database session.
            user_id: Owner ID.
            commit: Commit the transaction; pass False to let the caller
                commit as part of a larger unit of work.

        Returns:
            Number of language models removed.
        """
        language_models = db.query(LanguageModel).filter(LanguageModel.user_id == user_id).all()
        for language_model in language_models:
            db.delete(language_model)

        if not commit:
            db.flush()
            return len(language_models)

        try:
            db.commit()
            logger.info(f"Hard deleted {len(language_models)} language models of user {user_id}")
            return len(language_models)
        except Exception as e:
            db.rollback()
            logger.error(f"Failed to delete language models of user {user_id}: {e}")
            raise
