"""Skill matching module."""

from .explainer import Explainer, GenerativeExplainer, TemplateExplainer, build_explainer
from .matcher import MatchResult, MatchSummary, SkillMatcher
from .scorer import PairScore, level_score, score_pair

__all__ = [
    "Explainer",
    "GenerativeExplainer",
    "MatchResult",
    "MatchSummary",
    "PairScore",
    "SkillMatcher",
    "TemplateExplainer",
    "build_explainer",
    "level_score",
    "score_pair",
]
