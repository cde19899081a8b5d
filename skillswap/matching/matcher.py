"""Skill matching system for recommending skill-exchange partners."""

import logging
from concurrent.futures import ThreadPoolExecutor, wait
from dataclasses import dataclass, field

from skillswap.config import Settings
from skillswap.matching.explainer import ERROR_FALLBACK, Explainer, build_explainer
from skillswap.matching.scorer import score_pair
from skillswap.models.database import get_engine, get_session
from skillswap.models.profiles import (
    UserProfile,
    fetch_all_other_profiles_with_skills,
    fetch_profile_with_skills,
)

logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s - %(levelname)s - %(message)s"
)
logger = logging.getLogger(__name__)


# Only candidates scoring strictly above this are returned
MIN_QUALIFYING_SCORE = 20
MAX_RESULTS = 10

NO_SKILLS_MESSAGE = "Add some skills to your profile to get matched!"
NO_USERS_MESSAGE = "No other users found yet."
NO_MATCHES_MESSAGE = "No strong matches yet. Try adding more skills to your profile!"


@dataclass
class MatchResult:
    """A qualifying candidate and why they were matched."""
    candidate: UserProfile
    match_score: int
    they_can_teach: list[str] = field(default_factory=list)
    you_can_teach: list[str] = field(default_factory=list)
    explanation: str = ""

    def to_dict(self) -> dict:
        return {
            "user": self.candidate.to_dict(),
            "match_score": self.match_score,
            "they_can_teach": self.they_can_teach,
            "you_can_teach": self.you_can_teach,
            "explanation": self.explanation,
        }


@dataclass
class MatchSummary:
    """Ranked matches for a user plus statistics about the ranking pass."""
    user_id: int
    matches: list[MatchResult] = field(default_factory=list)
    total_qualifying: int = 0
    message: str | None = None

    total_candidates: int = 0
    candidates_without_skills: int = 0
    below_threshold: int = 0
    scoring_errors: int = 0

    def to_dict(self) -> dict:
        result = {
            "matches": [match.to_dict() for match in self.matches],
            "total": self.total_qualifying,
        }
        if self.message:
            result["message"] = self.message
        return result


class SkillMatcher:
    """Ranks other users as skill-exchange partners for a given user."""

    def __init__(
        self,
        engine=None,
        explainer: Explainer | None = None,
        settings: Settings | None = None,
    ):
        self.settings = settings or Settings.from_env()
        self.engine = engine if engine is not None else get_engine(self.settings.database_url)
        self.explainer = explainer or build_explainer(self.settings)

    def _load_profiles(self, user_id: int) -> tuple[UserProfile, list[UserProfile] | None]:
        """Fetch the requester and, if they have skills, everyone else.

        Raises:
            ProfileNotFoundError: If the requester does not exist.
        """
        session = get_session(self.engine)
        try:
            requester = fetch_profile_with_skills(session, user_id)
            if not requester.skill_names:
                return requester, None
            return requester, fetch_all_other_profiles_with_skills(session, user_id)
        except Exception as e:
            logger.error(f"Error loading profiles for user {user_id}: {e}")
            raise
        finally:
            session.close()

    def _explain_one(self, requester_skill_names: list[str], match: MatchResult) -> str:
        try:
            return self.explainer.explain(
                requester_skill_names,
                match.candidate.display_name,
                match.candidate.skill_names,
                match.they_can_teach,
                match.you_can_teach,
                match.match_score,
            )
        except Exception as e:
            logger.warning(f"Explanation failed for user {match.candidate.user_id}: {e}")
            return ERROR_FALLBACK

    def _explain_all(self, requester: UserProfile, matches: list[MatchResult]) -> None:
        """Fill in explanations, running explainer calls on a bounded thread pool.

        The whole batch shares one explanation_timeout deadline, measured from
        submission. Matches whose call has not finished by then fall back to a
        generic sentence, and their unfinished calls are cancelled when this
        returns or raises.
        """
        if not matches:
            return

        requester_skill_names = requester.skill_names
        workers = min(self.settings.explanation_max_workers, len(matches))
        executor = ThreadPoolExecutor(max_workers=workers, thread_name_prefix="explain")
        try:
            futures = [
                executor.submit(self._explain_one, requester_skill_names, match)
                for match in matches
            ]
            done, _ = wait(futures, timeout=self.settings.explanation_timeout)
            timed_out = 0
            for match, future in zip(matches, futures):
                if future in done:
                    match.explanation = future.result()
                else:
                    timed_out += 1
                    match.explanation = ERROR_FALLBACK
            if timed_out:
                logger.warning(
                    f"{timed_out} of {len(matches)} explanations timed out "
                    f"after {self.settings.explanation_timeout}s"
                )
        finally:
            executor.shutdown(wait=False, cancel_futures=True)

    def score_candidates(
        self,
        requester: UserProfile,
        candidates: list[UserProfile],
        summary: MatchSummary,
    ) -> list[MatchResult]:
        """Score candidates in pool order and keep those above the threshold.

        Args:
            requester: Profile of the user asking for matches.
            candidates: Other users' profiles, in a deterministic order.
            summary: Statistics are recorded here.

        Returns:
            Qualifying matches without explanations, in pool order.
        """
        qualifying = []
        for candidate in candidates:
            summary.total_candidates += 1

            if not candidate.skills:
                summary.candidates_without_skills += 1
                continue

            try:
                pair = score_pair(requester.skills, candidate.skills)
            except Exception as e:
                summary.scoring_errors += 1
                logger.warning(f"Skipping user {candidate.user_id}, scoring failed: {e}")
                continue

            if pair.score > MIN_QUALIFYING_SCORE:
                qualifying.append(MatchResult(
                    candidate=candidate,
                    match_score=pair.score,
                    they_can_teach=pair.they_can_teach,
                    you_can_teach=pair.you_can_teach,
                ))
                logger.debug(
                    f"Match: user {candidate.user_id} | Score: {pair.score} | "
                    f"Breakdown: {pair.to_dict()['scores']}"
                )
            else:
                summary.below_threshold += 1

        return qualifying

    def rank_matches(self, user_id: int) -> MatchSummary:
        """Find the best skill-exchange partners for a user.

        Args:
            user_id: ID of the user to find matches for.

        Returns:
            MatchSummary with up to MAX_RESULTS matches, best first, and the
            total number of qualifying candidates.

        Raises:
            ProfileNotFoundError: If the user does not exist.
        """
        summary = MatchSummary(user_id=user_id)
        requester, candidates = self._load_profiles(user_id)

        if candidates is None:
            logger.info(f"User {user_id} has no skills, skipping matching")
            summary.message = NO_SKILLS_MESSAGE
            return summary

        if not candidates:
            logger.info("No other users to match against")
            summary.message = NO_USERS_MESSAGE
            return summary

        logger.info(f"Matching skills for user: {requester.display_name} (ID: {user_id})")
        logger.info(f"Skills: {requester.skill_names}")

        qualifying = self.score_candidates(requester, candidates, summary)
        self._explain_all(requester, qualifying)

        # sorted() is stable, ties keep pool order
        qualifying = sorted(qualifying, key=lambda match: match.match_score, reverse=True)
        summary.total_qualifying = len(qualifying)
        summary.matches = qualifying[:MAX_RESULTS]
        if not qualifying:
            summary.message = NO_MATCHES_MESSAGE

        logger.info("=" * 50)
        logger.info("SKILL MATCHING SUMMARY")
        logger.info("=" * 50)
        logger.info(f"Candidates:        {summary.total_candidates}")
        logger.info(f"Without skills:    {summary.candidates_without_skills}")
        logger.info(f"Below threshold:   {summary.below_threshold}")
        logger.info(f"Scoring errors:    {summary.scoring_errors}")
        logger.info(f"Qualifying:        {summary.total_qualifying}")
        logger.info(f"Returned:          {len(summary.matches)}")

        return summary
