"""
Pytest configuration and shared fixtures.
"""

import itertools

import pytest
from sqlalchemy import create_engine
from sqlalchemy.pool import StaticPool

from skillswap.config import Settings
from skillswap.models.database import Base, User, get_session
from skillswap.models.profiles import set_user_skill


@pytest.fixture
def engine():
    """In-memory SQLite engine shared across threads."""
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(engine)
    yield engine
    engine.dispose()


@pytest.fixture
def session(engine):
    session = get_session(engine)
    yield session
    session.close()


@pytest.fixture
def settings() -> Settings:
    """Settings without a completion API key (template explanations)."""
    return Settings(database_url="sqlite://", explanation_timeout=1.0, explanation_max_workers=2)


@pytest.fixture
def add_user(session):
    """Factory creating a user with (name, level) skill pairs."""
    counter = itertools.count(1)

    def _add_user(name, skills=(), bio=None, linkedin_url=None):
        user = User(
            name=name,
            email=f"user{next(counter)}@example.com",
            bio=bio,
            linkedin_url=linkedin_url,
        )
        session.add(user)
        session.commit()
        for skill_name, level in skills:
            set_user_skill(session, user, skill_name, level)
        session.refresh(user)
        return user

    return _add_user
