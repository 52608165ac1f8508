"""Shared test fixtures."""

from datetime import datetime

import pytest
from cryptography.fernet import Fernet
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from app.database.database import Base, enable_sqlite_foreign_keys
from app.models import User, APIService, Assistant
from app.services.encryption_service import EncryptionService
from app.services.language_model_service import LanguageModelService


@pytest.fixture
def db_engine():
    """Create an in-memory SQLite engine shared across threads."""
    engine = create_engine(
        "sqlite:///:memory:",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    enable_sqlite_foreign_keys(engine)
    Base.metadata.create_all(engine)
    yield engine
    engine.dispose()


@pytest.fixture
def db_session(db_engine):
    """Create a test database session."""
    SessionLocal = sessionmaker(bind=db_engine)
    session = SessionLocal()
    yield session
    session.close()


@pytest.fixture
def encryption_service():
    """Create encryption service with a fresh key."""
    return EncryptionService(Fernet.generate_key().decode())


@pytest.fixture
def language_model_service():
    """Create language model service for tests."""
    return LanguageModelService()


@pytest.fixture
def users(db_session):
    """Create the rob, keith and taylor users."""
    records = {
        "rob": User(email="rob@example.com", first_name="Rob", last_name="Anderson"),
        "keith": User(email="keith@example.com", first_name="Keith", last_name="Schacht"),
        "taylor": User(email="taylor@example.com", first_name="Taylor", last_name="Swift"),
    }
    db_session.add_all(records.values())
    db_session.commit()
    return records


@pytest.fixture
def api_services(db_session, users, encryption_service):
    """Create API services for each user."""
    def service(user, name, driver, url):
        return APIService(
            user_id=user.id,
            name=name,
            driver=driver,
            url=url,
            token_encrypted=encryption_service.encrypt(f"sk-{name.lower().replace(' ', '-')}-token")
        )

    records = {
        "rob_openai_service": service(users["rob"], "OpenAI", "openai", "https://api.openai.com"),
        "rob_anthropic_service": service(users["rob"], "Anthropic", "anthropic", "https://api.anthropic.com"),
        "rob_other_service": service(users["rob"], "Other", "openai", "https://api.other.com"),
        "keith_openai_service": service(users["keith"], "OpenAI", "openai", "https://api.openai.com"),
        "keith_anthropic_service": service(users["keith"], "Anthropic", "anthropic", "https://api.anthropic.com"),
        "taylor_anthropic_service": service(users["taylor"], "Anthropic", "anthropic", "https://api.anthropic.com"),
    }
    db_session.add_all(records.values())
    db_session.commit()
    return records


@pytest.fixture
def language_models(db_session, users, api_services, language_model_service):
    """Create shared and user-owned language models.

    Loaded through the unvalidated path, like seed data.
    """
    rows = [
        ("gpt_best", "rob", "rob_openai_service", "gpt-best", "Best OpenAI Model", True, True),
        ("claude_best", "rob", "rob_anthropic_service", "claude-best", "Best Claude Model", True, True),
        ("gpt_4o", "rob", "rob_openai_service", "gpt-4o", "GPT-4o (latest)", True, True),
        ("gpt_3_5_turbo", "rob", "rob_openai_service", "gpt-3.5-turbo", "GPT-3.5 Turbo (latest)", False, True),
        ("gpt_3_5_turbo_0125", "rob", "rob_openai_service", "gpt-3.5-turbo-0125", "GPT-3.5 Turbo Snapshot", False, True),
        ("claude_3_sonnet_20240229", "rob", "rob_anthropic_service", "claude-3-sonnet-20240229", "Claude 3 Sonnet", True, True),
        ("claude_3_opus_20240229", "rob", "rob_anthropic_service", "claude-3-opus-20240229", "Claude 3 Opus", True, True),
        ("guanaco", "keith", "keith_openai_service", "guanaco", "Guanaco on a local OpenAI-compatible server", False, False),
        ("camel", "keith", "keith_anthropic_service", "camel", "Camel", False, False),
        ("llama", "keith", "keith_openai_service", "llama3:70b", "Llama 3 70B", False, False),
        ("alpaca", "taylor", "taylor_anthropic_service", "alpaca", "Alpaca", False, False),
        ("alpaca_medium", "taylor", "taylor_anthropic_service", "alpaca:medium", "Alpaca medium", False, False),
    ]
    records = {}
    for key, owner, service_key, api_name, description, supports_images, is_shared in rows:
        records[key] = language_model_service.create_without_validation(
            db_session,
            user_id=users[owner].id,
            api_service_id=api_services[service_key].id,
            api_name=api_name,
            description=description,
            supports_images=supports_images,
            is_shared=is_shared
        )
    return records


@pytest.fixture
def assistants(db_session, users, language_models):
    """Create assistants; alpaca has one active and one retired assistant."""
    records = {
        "samantha": Assistant(
            user_id=users["rob"].id,
            language_model_id=language_models["gpt_4o"].id,
            name="Samantha",
            instructions="You are a helpful assistant."
        ),
        "keith_camel": Assistant(
            user_id=users["keith"].id,
            language_model_id=language_models["camel"].id,
            name="Camel helper"
        ),
        "rob_on_camel": Assistant(
            user_id=users["rob"].id,
            language_model_id=language_models["camel"].id,
            name="Borrowed camel"
        ),
        "taylor_alpaca": Assistant(
            user_id=users["taylor"].id,
            language_model_id=language_models["alpaca"].id,
            name="Alpaca helper"
        ),
        "taylor_alpaca_retired": Assistant(
            user_id=users["taylor"].id,
            language_model_id=language_models["alpaca"].id,
            name="Old alpaca helper",
            deleted_at=datetime(2024, 1, 1)
        ),
    }
    db_session.add_all(records.values())
    db_session.commit()
    return records
