"""Tests for user service."""

import pytest

from app.exceptions import RecordNotFoundError, RecordValidationError
from app.models import APIService, Assistant, LanguageModel, User
from app.services.user_service import UserService


@pytest.fixture
def user_service(language_model_service):
    """Create user service for tests."""
    return UserService(language_model_service)


class TestCreateUser:
    """Tests for user creation."""

    def test_create_user(self, db_session, user_service):
        """Test creating a user."""
        user = user_service.create_user(db_session, "  new@example.com ", first_name="New", last_name="User")

        assert user.id is not None
        assert user.email == "new@example.com"
        assert user.full_name == "New User"

    def test_create_user_blank_email(self, db_session, user_service):
        """Test that a blank email is rejected."""
        with pytest.raises(RecordValidationError) as exc_info:
            user_service.create_user(db_session, "")
        assert exc_info.value.errors == {"email": ["can't be blank"]}

    def test_create_user_duplicate_email(self, db_session, user_service, users):
        """Test that emails are unique."""
        with pytest.raises(RecordValidationError) as exc_info:
            user_service.create_user(db_session, "rob@example.com")
        assert exc_info.value.errors == {"email": ["has already been taken"]}


class TestDestroyUser:
    """Tests for the cascading user delete."""

    def test_destroy_user_hard_deletes_language_models(
        self, db_session, user_service, users, language_models, assistants
    ):
        """Test that exactly the owned models disappear."""
        keith_id = users["keith"].id
        owned_ids = [m.id for m in db_session.query(LanguageModel).filter(LanguageModel.user_id == keith_id)]
        before = db_session.query(LanguageModel).count()

        removed = user_service.destroy_user(db_session, keith_id)

        assert removed == len(owned_ids)
        assert db_session.query(LanguageModel).count() == before - len(owned_ids)
        assert db_session.query(LanguageModel).filter(LanguageModel.id.in_(owned_ids)).count() == 0
        assert db_session.query(User).filter(User.id == keith_id).count() == 0

    def test_destroy_user_removes_owned_records(self, db_session, user_service, users, language_models, assistants):
        """Test that API services and assistants of the user are gone too."""
        keith_id = users["keith"].id

        user_service.destroy_user(db_session, keith_id)

        assert db_session.query(APIService).filter(APIService.user_id == keith_id).count() == 0
        assert db_session.query(Assistant).filter(Assistant.user_id == keith_id).count() == 0

    def test_destroy_user_includes_soft_deleted_models(
        self, db_session, user_service, language_model_service, users, language_models
    ):
        """Test that soft-deleted models are hard deleted with their owner."""
        camel_id = language_models["camel"].id
        language_model_service.soft_delete(db_session, camel_id)

        user_service.destroy_user(db_session, users["keith"].id)

        assert db_session.query(LanguageModel).filter(LanguageModel.id == camel_id).count() == 0

    def test_destroy_user_leaves_other_users_alone(self, db_session, user_service, users, language_models):
        """Test that shared and other users' models survive."""
        rob_models = db_session.query(LanguageModel).filter(LanguageModel.user_id == users["rob"].id).count()

        user_service.destroy_user(db_session, users["taylor"].id)

        assert db_session.query(LanguageModel).filter(LanguageModel.user_id == users["rob"].id).count() == rob_models

    def test_destroy_missing_user(self, db_session, user_service):
        """Test destroying a user that does not exist."""
        with pytest.raises(RecordNotFoundError, match="User 999 not found"):
            user_service.destroy_user(db_session, 999)
