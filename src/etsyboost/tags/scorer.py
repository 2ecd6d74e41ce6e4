"""Scored tag generation from listing text.

Candidates come from several weighted phrase tables plus a small set of
concept-pair compounds. Each candidate gets a clamped 1-10 score; duplicate
texts keep their highest score (never summed or averaged); survivors are
decorated, ranked descending with ties in first-seen order, and cut to 13.
"""

from __future__ import annotations

import dataclasses
import logging
from typing import Iterable

from etsyboost.models import MAX_SCORE, MAX_TAGS, MIN_SCORE, ScoredTag, TagResult
from etsyboost.tags.rules import DEFAULT_RULES, PhraseTable, RuleSet

log = logging.getLogger(__name__)

CATEGORY_BONUS = 1
MULTI_WORD_BONUS = 1
TITLE_BONUS = 1
# Floor for a category phrase found contiguously in the listing text
CATEGORY_EXACT_SCORE = 9
CATEGORY_TAG_SCORE = 7


@dataclasses.dataclass(frozen=True)
class Candidate:
    """One rule's opinion about one tag text."""

    text: str
    score: int
    source: str


def clamp_score(score: int) -> int:
    return max(MIN_SCORE, min(MAX_SCORE, score))


def phrase_matches(phrase: str, corpus: str) -> bool:
    """True when every whitespace token of ``phrase`` occurs somewhere in ``corpus``.

    Tokens may appear in any order and need not be adjacent.
    """
    tokens = phrase.split()
    return bool(tokens) and all(token in corpus for token in tokens)


def merge_candidates(candidates: Iterable[Candidate]) -> dict[str, int]:
    """Collapse candidates by text, keeping the highest score.

    The returned dict preserves first-seen order of each text, which is the
    tie-break order for ranking.
    """
    merged: dict[str, int] = {}
    for candidate in candidates:
        current = merged.get(candidate.text)
        if current is None or candidate.score > current:
            merged[candidate.text] = candidate.score
    return merged


class TagScorer:
    """Pure, synchronous tag scorer. Safe to share across requests."""

    def __init__(self, rules: RuleSet = DEFAULT_RULES) -> None:
        self._rules = rules

    def generate(self, title: str, description: str, category: str) -> TagResult:
        """Score, merge, rank and truncate tags for one listing."""
        title_lc = title.lower()
        corpus = f"{title} {description}".lower()
        category_key = category.strip().lower()

        candidates = self.collect_candidates(corpus, title_lc, category_key)
        merged = merge_candidates(candidates)

        ranked = sorted(merged.items(), key=lambda item: item[1], reverse=True)[:MAX_TAGS]
        tags = [
            ScoredTag(text=text, score=score, decoration=self.decorate(text, category_key))
            for text, score in ranked
        ]
        log.debug(
            "Scored %d candidates into %d unique tags for category %r",
            len(candidates),
            len(merged),
            category,
        )
        return TagResult(tags=tags, tips=self.tips(tags, category))

    def collect_candidates(self, corpus: str, title_lc: str, category_key: str) -> list[Candidate]:
        """Every (text, score) opinion from every rule table, in rule order."""
        rules = self._rules
        candidates: list[Candidate] = []

        for phrase, base in rules.category_phrases.get(category_key, ()):
            if not phrase_matches(phrase, corpus):
                continue
            score = self._score(phrase, base + CATEGORY_BONUS, title_lc)
            if phrase in corpus:
                score = max(score, CATEGORY_EXACT_SCORE)
            candidates.append(Candidate(phrase, score, "category"))

        for source, table in (
            ("general", rules.general_phrases),
            ("audience", rules.audience_phrases),
            ("feature", rules.feature_phrases),
            ("niche", rules.niche_phrases),
        ):
            candidates.extend(self._match_table(table, corpus, title_lc, source))

        candidates.extend(self._compounds(corpus))

        if category_key:
            candidates.append(Candidate(category_key, CATEGORY_TAG_SCORE, "category-name"))
        return candidates

    def _match_table(self, table: PhraseTable, corpus: str, title_lc: str, source: str) -> list[Candidate]:
        return [
            Candidate(phrase, self._score(phrase, base, title_lc), source)
            for phrase, base in table
            if phrase_matches(phrase, corpus)
        ]

    @staticmethod
    def _score(phrase: str, base: int, title_lc: str) -> int:
        score = base
        if len(phrase.split()) > 1:
            score += MULTI_WORD_BONUS
        if phrase in title_lc:
            score += TITLE_BONUS
        return clamp_score(score)

    def _compounds(self, corpus: str) -> list[Candidate]:
        concepts = self._rules.concepts
        present = {
            name for name, synonyms in concepts.items()
            if any(synonym in corpus for synonym in synonyms)
        }
        out: list[Candidate] = []
        for required, phrases in self._rules.compound_rules:
            if all(concept in present for concept in required):
                out.extend(Candidate(phrase, clamp_score(score), "compound") for phrase, score in phrases)
        return out

    def decorate(self, text: str, category_key: str) -> str:
        for keywords, decoration in self._rules.decorations:
            if any(keyword in text for keyword in keywords):
                return decoration
        return self._rules.category_decorations.get(category_key, self._rules.default_decoration)

    @staticmethod
    def tips(tags: list[ScoredTag], category: str) -> list[str]:
        top = ", ".join(tag.text for tag in tags[:3])
        return [
            "Make sure your title includes your primary keywords",
            f"Use all {MAX_TAGS} available tags for maximum visibility",
            "Include material types and occasions in your tags",
            f"Consider adding these popular tags: {top}" if top
            else "Add more descriptive keywords to your title and description",
            f"Your listing is categorized as {category} - consider niche-specific tags",
        ]
