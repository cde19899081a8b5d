"""FastAPI application exposing skill matching and skill management."""

import logging
from functools import lru_cache
from typing import Literal, Optional

from fastapi import Depends, FastAPI
from fastapi.responses import JSONResponse
from pydantic import BaseModel, Field

from skillswap.config import Settings
from skillswap.matching.matcher import SkillMatcher
from skillswap.models.database import get_engine, get_session, init_db
from skillswap.models.profiles import (
    get_store_stats,
    get_user_by_token,
    remove_user_skill,
    set_user_skill,
)

logger = logging.getLogger(__name__)

app = FastAPI(title="SkillSwap Matching")


class SkillIn(BaseModel):
    name: str = Field(min_length=1, max_length=255)
    category: Optional[str] = Field(default=None, max_length=100)
    level: Literal["Beginner", "Intermediate", "Advanced", "Expert"] = "Beginner"


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    return Settings.from_env()


@lru_cache(maxsize=1)
def get_db_engine():
    return get_engine(get_settings().database_url)


@lru_cache(maxsize=1)
def get_matcher() -> SkillMatcher:
    """Shared matcher; it holds no per-request state."""
    return SkillMatcher(engine=get_db_engine(), settings=get_settings())


def get_db_session():
    """Yield a database session, closed after the request."""
    session = get_session(get_db_engine())
    try:
        yield session
    finally:
        session.close()


@app.on_event("startup")
async def startup_event():
    """Initialize database on startup."""
    init_db(get_settings().database_url)


def _unauthorized() -> JSONResponse:
    return JSONResponse({"error": "Unauthorized"}, status_code=401)


def _user_skill_dict(user_skill) -> dict:
    return {
        "id": user_skill.id,
        "level": user_skill.level,
        "skill": {
            "id": user_skill.skill.id,
            "name": user_skill.skill.name,
            "category": user_skill.skill.category,
        },
    }


# =============================================================================
# Skill Matching (accessed via access token)
# =============================================================================
@app.get("/api/u/{access_token}/skill-match")
def skill_match(
    access_token: str,
    session=Depends(get_db_session),
    matcher: SkillMatcher = Depends(get_matcher),
):
    """Top skill-exchange partners for the user."""
    user = get_user_by_token(session, access_token)
    if not user:
        return _unauthorized()
    user_id = user.id
    session.close()

    try:
        summary = matcher.rank_matches(user_id)
    except Exception:
        logger.exception(f"Skill match error for user {user_id}")
        return JSONResponse({"error": "Failed to find matches"}, status_code=500)

    return summary.to_dict()


# =============================================================================
# Skill Management (accessed via access token)
# =============================================================================
@app.get("/api/u/{access_token}/skills")
def list_skills(access_token: str, session=Depends(get_db_session)):
    """List the user's skills."""
    user = get_user_by_token(session, access_token)
    if not user:
        return _unauthorized()

    return {"skills": [_user_skill_dict(user_skill) for user_skill in user.user_skills]}


@app.post("/api/u/{access_token}/skills")
def add_skill(access_token: str, skill: SkillIn, session=Depends(get_db_session)):
    """Add a skill to the user's profile, or update its level."""
    user = get_user_by_token(session, access_token)
    if not user:
        return _unauthorized()

    try:
        user_skill = set_user_skill(session, user, skill.name, skill.level, skill.category)
    except ValueError as e:
        session.rollback()
        return JSONResponse({"error": str(e)}, status_code=422)

    return _user_skill_dict(user_skill)


@app.delete("/api/u/{access_token}/skills/{user_skill_id}")
def delete_skill(access_token: str, user_skill_id: int, session=Depends(get_db_session)):
    """Remove a skill from the user's profile."""
    user = get_user_by_token(session, access_token)
    if not user:
        return _unauthorized()

    if not remove_user_skill(session, user, user_skill_id):
        return JSONResponse({"error": "Skill not found"}, status_code=404)
    return {"deleted": user_skill_id}


# =============================================================================
# API Endpoints
# =============================================================================
@app.get("/api/stats")
def get_stats(session=Depends(get_db_session)):
    """Get profile and skill statistics."""
    return get_store_stats(session)


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(app, host="0.0.0.0", port=8000)
