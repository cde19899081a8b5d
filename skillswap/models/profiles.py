"""Profile store: read-only skill snapshots plus skill bookkeeping helpers."""

from dataclasses import dataclass, field

from sqlalchemy import func, select
from sqlalchemy.orm import Session, selectinload

from .database import SKILL_LEVELS, Skill, User, UserSkill


class ProfileNotFoundError(LookupError):
    """Raised when a requested user profile does not exist."""


@dataclass(frozen=True)
class SkillRecord:
    """Reference data for a single skill."""
    skill_id: int
    name: str | None
    category: str | None = None

    def to_dict(self) -> dict:
        return {"id": self.skill_id, "name": self.name, "category": self.category}


@dataclass(frozen=True)
class UserSkillEntry:
    """One skill claimed by one user at one proficiency level."""
    id: int
    proficiency_level: str | None
    skill: SkillRecord | None

    @property
    def skill_name(self) -> str | None:
        if self.skill is None or not self.skill.name:
            return None
        return self.skill.name

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "level": self.proficiency_level,
            "skill": self.skill.to_dict() if self.skill else None,
        }


@dataclass(frozen=True)
class UserProfile:
    """Snapshot of a user and their skills, fetched fresh per request."""
    user_id: int
    display_name: str | None = None
    bio: str | None = None
    external_link: str | None = None
    skills: tuple[UserSkillEntry, ...] = field(default_factory=tuple)

    @property
    def skill_names(self) -> list[str]:
        return [entry.skill_name for entry in self.skills if entry.skill_name]

    def to_dict(self) -> dict:
        return {
            "id": self.user_id,
            "full_name": self.display_name,
            "bio": self.bio,
            "linkedin_url": self.external_link,
            "user_skills": [entry.to_dict() for entry in self.skills],
        }


def _to_profile(user: User) -> UserProfile:
    entries = []
    for user_skill in user.user_skills:
        skill = user_skill.skill
        record = SkillRecord(skill.id, skill.name, skill.category) if skill is not None else None
        entries.append(UserSkillEntry(user_skill.id, user_skill.level, record))

    return UserProfile(
        user_id=user.id,
        display_name=user.name,
        bio=user.bio,
        external_link=user.linkedin_url,
        skills=tuple(entries),
    )


def _profiles_query():
    return select(User).options(selectinload(User.user_skills).selectinload(UserSkill.skill))


def fetch_profile_with_skills(session: Session, user_id: int) -> UserProfile:
    """Load a user's profile snapshot.

    Args:
        session: Database session.
        user_id: ID of the user.

    Returns:
        UserProfile with the user's skills in insertion order.

    Raises:
        ProfileNotFoundError: If no such user exists.
    """
    user = session.scalars(_profiles_query().where(User.id == user_id)).first()
    if user is None:
        raise ProfileNotFoundError(f"User {user_id} not found")
    return _to_profile(user)


def fetch_all_other_profiles_with_skills(session: Session, excluding_user_id: int) -> list[UserProfile]:
    """Load every profile except the given user's, ordered by user id.

    Args:
        session: Database session.
        excluding_user_id: ID of the user to leave out.

    Returns:
        List of UserProfile snapshots.
    """
    query = _profiles_query().where(User.id != excluding_user_id).order_by(User.id)
    return [_to_profile(user) for user in session.scalars(query).all()]


def get_user_by_token(session: Session, access_token: str) -> User | None:
    """Get user by access token, returns None if not found."""
    return session.query(User).filter(User.access_token == access_token).first()


def get_or_create_skill(session: Session, name: str, category: str | None = None) -> Skill:
    """Find a skill by name and category, creating it if missing."""
    name = name.strip()
    skill = (
        session.query(Skill)
        .filter(Skill.name == name, Skill.category.is_(None) if category is None else Skill.category == category)
        .first()
    )
    if skill is None:
        skill = Skill(name=name, category=category)
        session.add(skill)
        session.flush()
    return skill


def set_user_skill(
    session: Session,
    user: User,
    name: str,
    level: str,
    category: str | None = None,
) -> UserSkill:
    """Add a skill to a user's profile or update its level.

    Args:
        session: Database session.
        user: The user to update.
        name: Skill name.
        level: One of Beginner, Intermediate, Advanced, Expert.
        category: Optional skill category.

    Returns:
        The created or updated UserSkill.

    Raises:
        ValueError: If the level or name is invalid.
    """
    if level not in SKILL_LEVELS:
        raise ValueError(f"Invalid level '{level}', expected one of {', '.join(SKILL_LEVELS)}")
    if not name or not name.strip():
        raise ValueError("Skill name must not be empty")

    skill = get_or_create_skill(session, name, category)
    user_skill = (
        session.query(UserSkill)
        .filter(UserSkill.user_id == user.id, UserSkill.skill_id == skill.id)
        .first()
    )
    if user_skill is None:
        user_skill = UserSkill(user_id=user.id, skill_id=skill.id, level=level)
        session.add(user_skill)
    else:
        user_skill.level = level

    session.commit()
    session.refresh(user_skill)
    return user_skill


def remove_user_skill(session: Session, user: User, user_skill_id: int) -> bool:
    """Remove one of the user's skills.

    Returns:
        True if a skill was removed, False if the user has no such entry.
    """
    user_skill = (
        session.query(UserSkill)
        .filter(UserSkill.id == user_skill_id, UserSkill.user_id == user.id)
        .first()
    )
    if user_skill is None:
        return False

    session.delete(user_skill)
    session.commit()
    return True


def get_store_stats(session: Session) -> dict:
    """Get profile store statistics.

    Returns:
        Dictionary with user, skill and skill-entry counts plus counts by level.
    """
    total_users = session.query(func.count(User.id)).scalar()
    total_skills = session.query(func.count(Skill.id)).scalar()
    total_user_skills = session.query(func.count(UserSkill.id)).scalar()
    users_with_skills = session.query(func.count(func.distinct(UserSkill.user_id))).scalar()

    by_level = (
        session.query(UserSkill.level, func.count(UserSkill.id))
        .group_by(UserSkill.level)
        .all()
    )

    return {
        "total_users": total_users,
        "users_with_skills": users_with_skills,
        "total_skills": total_skills,
        "total_user_skills": total_user_skills,
        "by_level": {level: count for level, count in by_level},
    }
