"""Listing tag scoring: rule tables and the ranking engine."""

from __future__ import annotations

from etsyboost.tags.rules import DEFAULT_RULES, RuleSet
from etsyboost.tags.scorer import Candidate, TagScorer, merge_candidates, phrase_matches

__all__ = [
    "Candidate",
    "DEFAULT_RULES",
    "RuleSet",
    "TagScorer",
    "merge_candidates",
    "phrase_matches",
]
