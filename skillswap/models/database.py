import os
import secrets
from datetime import datetime, timezone
from typing import Optional

from sqlalchemy import (
    DateTime,
    ForeignKey,
    Index,
    Integer,
    String,
    Text,
    UniqueConstraint,
    create_engine,
)
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column, relationship, sessionmaker

SKILL_LEVELS = ("Beginner", "Intermediate", "Advanced", "Expert")


def generate_access_token() -> str:
    """Generate a secure random access token."""
    return secrets.token_urlsafe(32)


class Base(DeclarativeBase):
    pass


class User(Base):
    __tablename__ = "users"

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    name: Mapped[Optional[str]] = mapped_column(String(255), nullable=True)
    email: Mapped[str] = mapped_column(String(255), unique=True, nullable=False)
    bio: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    linkedin_url: Mapped[Optional[str]] = mapped_column(String(2048), nullable=True)
    access_token: Mapped[str] = mapped_column(
        String(64), unique=True, nullable=False, default=generate_access_token, index=True
    )
    created_at: Mapped[datetime] = mapped_column(DateTime, default=lambda: datetime.now(timezone.utc))

    user_skills: Mapped[list["UserSkill"]] = relationship(
        "UserSkill", back_populates="user", cascade="all, delete-orphan", order_by="UserSkill.id"
    )

    __table_args__ = (Index("ix_users_email", "email"),)


class Skill(Base):
    __tablename__ = "skills"

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    category: Mapped[Optional[str]] = mapped_column(String(100), nullable=True)

    user_skills: Mapped[list["UserSkill"]] = relationship("UserSkill", back_populates="skill")

    __table_args__ = (
        UniqueConstraint("name", "category", name="uq_skills_name_category"),
        Index("ix_skills_name", "name"),
    )


class UserSkill(Base):
    __tablename__ = "user_skills"

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    user_id: Mapped[int] = mapped_column(Integer, ForeignKey("users.id"), nullable=False)
    skill_id: Mapped[int] = mapped_column(Integer, ForeignKey("skills.id"), nullable=False)
    level: Mapped[str] = mapped_column(String(50), nullable=False, default="Beginner")
    created_at: Mapped[datetime] = mapped_column(DateTime, default=lambda: datetime.now(timezone.utc))

    user: Mapped["User"] = relationship("User", back_populates="user_skills")
    skill: Mapped["Skill"] = relationship("Skill", back_populates="user_skills")

    __table_args__ = (
        Index("ix_user_skills_user_id", "user_id"),
        Index("ix_user_skills_user_skill", "user_id", "skill_id", unique=True),
    )


def get_database_url() -> str:
    """Get database URL from environment or use default."""
    return os.environ.get("DATABASE_URL", "sqlite:///skillswap.db")


def get_engine(database_url: str = None):
    if database_url is None:
        database_url = get_database_url()
    return create_engine(database_url, echo=False)


def get_session(engine):
    Session = sessionmaker(bind=engine)
    return Session()


def init_db(database_url: str = None):
    if database_url is None:
        database_url = get_database_url()
    engine = get_engine(database_url)
    Base.metadata.create_all(engine)
    return engine
