"""Pairwise skill compatibility scoring.

Skills are compared by display name, not by skill id: two skill records
sharing a name (e.g. in different categories) count as the same skill.
"""

from dataclasses import dataclass, field
from typing import Iterable

from skillswap.models.profiles import UserSkillEntry

LEVEL_SCORES = {
    "Expert": 4,
    "Advanced": 3,
    "Intermediate": 2,
    "Beginner": 1,
}
DEFAULT_LEVEL_SCORE = 1

# Sub-score caps (sum to 100)
MAX_COMPLEMENTARY_SCORE = 40
MAX_MENTORSHIP_SCORE = 30
MAX_SHARED_SCORE = 30

POINTS_PER_GAP = 10
POINTS_PER_SHARED_SKILL = 10
MENTORSHIP_STRONG_POINTS = 15  # level difference of 2 or more
MENTORSHIP_SOME_POINTS = 10  # level difference of exactly 1

MAX_LISTED_SKILLS = 5


@dataclass
class PairScore:
    """Compatibility of a requester with one candidate."""
    score: int = 0
    they_can_teach: list[str] = field(default_factory=list)
    you_can_teach: list[str] = field(default_factory=list)

    # Individual scores
    complementary_score: int = 0
    mentorship_score: int = 0
    shared_score: int = 0
    shared_skills: int = 0

    def to_dict(self) -> dict:
        return {
            "score": self.score,
            "they_can_teach": self.they_can_teach,
            "you_can_teach": self.you_can_teach,
            "scores": {
                "complementary": self.complementary_score,
                "mentorship": self.mentorship_score,
                "shared": self.shared_score,
            },
        }


def level_score(level: str | None) -> int:
    """Map a proficiency label to its rank, defaulting to 1 for unknown labels."""
    return LEVEL_SCORES.get(level, DEFAULT_LEVEL_SCORE)


def _named(entries: Iterable[UserSkillEntry]) -> list[UserSkillEntry]:
    """Drop entries without a resolvable skill name."""
    return [entry for entry in entries if entry.skill_name]


def _mentorship_points(candidate_level: str | None, requester_level: str | None) -> int:
    level_diff = abs(level_score(candidate_level) - level_score(requester_level))
    if level_diff >= 2:
        return MENTORSHIP_STRONG_POINTS
    if level_diff == 1:
        return MENTORSHIP_SOME_POINTS
    return 0


def score_pair(
    requester_skills: Iterable[UserSkillEntry],
    candidate_skills: Iterable[UserSkillEntry],
) -> PairScore:
    """Score how well a candidate complements the requester.

    Args:
        requester_skills: Skill entries of the user asking for matches.
        candidate_skills: Skill entries of the potential partner.

    Returns:
        PairScore with the bounded 0-100 score, the skills each side could
        teach the other (first 5 of each), and the per-factor breakdown.
    """
    requester = _named(requester_skills)
    candidate = _named(candidate_skills)
    result = PairScore()

    if not requester or not candidate:
        return result

    requester_names = {entry.skill_name for entry in requester}
    candidate_names = {entry.skill_name for entry in candidate}

    # --- Complementary skills (40) ---
    they_can_teach = [e.skill_name for e in candidate if e.skill_name not in requester_names]
    you_can_teach = [e.skill_name for e in requester if e.skill_name not in candidate_names]
    result.complementary_score = min(
        (len(they_can_teach) + len(you_can_teach)) * POINTS_PER_GAP,
        MAX_COMPLEMENTARY_SCORE,
    )

    # --- Mentorship potential (30) ---
    mentorship = 0
    for theirs in candidate:
        for mine in requester:
            if theirs.skill_name == mine.skill_name:
                mentorship += _mentorship_points(theirs.proficiency_level, mine.proficiency_level)
    result.mentorship_score = min(mentorship, MAX_MENTORSHIP_SCORE)

    # --- Shared interests (30) ---
    result.shared_skills = len(requester_names & candidate_names)
    result.shared_score = min(result.shared_skills * POINTS_PER_SHARED_SKILL, MAX_SHARED_SCORE)

    total = result.complementary_score + result.mentorship_score + result.shared_score
    result.score = max(0, min(round(total), 100))
    result.they_can_teach = they_can_teach[:MAX_LISTED_SKILLS]
    result.you_can_teach = you_can_teach[:MAX_LISTED_SKILLS]

    return result
