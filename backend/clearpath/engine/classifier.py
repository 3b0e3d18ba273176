"""Resolve a user's offense against a jurisdiction's offense catalog.

Precedence, first rule that applies wins:

1. ``case.offense_id`` naming a catalog offense.
2. Free text equal (case-insensitive) to a catalog offense name.
3. Keyword match: keywords match as whole words or phrases. When several
   catalog offenses match, the one with the longest matching keyword wins;
   equal lengths go to the offense declared first in the table.

Exclusion categories are matched separately, against the free text and the
resolved offense name, and every matching category is kept.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from functools import lru_cache

from ..knowledge.base import ExcludedOffense, Jurisdiction, Offense
from .models import Case


@dataclass(frozen=True)
class OffenseMatch:
    offense: Offense | None
    categories: tuple[ExcludedOffense, ...]
    method: str | None  # "id", "name", "keyword", "category" or None
    matched_keyword: str | None = None

    @property
    def is_classified(self) -> bool:
        return self.method is not None

    @property
    def severity(self) -> str | None:
        return self.offense.severity if self.offense else None


@lru_cache(maxsize=512)
def _keyword_pattern(keyword: str) -> re.Pattern:
    return re.compile(r"\b" + re.escape(keyword.lower()) + r"\b")


def keyword_matches(keyword: str, text: str) -> bool:
    return bool(_keyword_pattern(keyword).search(text.lower()))


def match_offense_keywords(
    text: str, offenses: tuple[Offense, ...]
) -> tuple[Offense, str] | None:
    best: tuple[Offense, str] | None = None
    for offense in offenses:
        for keyword in offense.keywords:
            if not keyword_matches(keyword, text):
                continue
            # strict ">" keeps the earlier offense on ties
            if best is None or len(keyword) > len(best[1]):
                best = (offense, keyword)
    return best


def match_categories(
    texts: list[str], excluded: tuple[ExcludedOffense, ...]
) -> tuple[ExcludedOffense, ...]:
    return tuple(
        category
        for category in excluded
        if any(
            keyword_matches(keyword, text)
            for keyword in category.keywords
            for text in texts
        )
    )


def classify_offense(case: Case, jurisdiction: Jurisdiction) -> OffenseMatch:
    text = (case.offense_text or "").strip()
    offense: Offense | None = None
    method: str | None = None
    keyword: str | None = None

    if case.offense_id:
        offense = jurisdiction.offense(case.offense_id)
        if offense is not None:
            method = "id"

    if offense is None and text:
        lowered = text.lower()
        offense = next(
            (o for o in jurisdiction.offenses if o.name.lower() == lowered), None
        )
        if offense is not None:
            method = "name"
        else:
            hit = match_offense_keywords(text, jurisdiction.offenses)
            if hit is not None:
                offense, keyword = hit
                method = "keyword"

    texts = [t for t in (text, offense.name if offense else "") if t]
    categories = match_categories(texts, jurisdiction.excluded_offenses)
    if method is None and categories:
        method = "category"

    return OffenseMatch(
        offense=offense,
        categories=categories,
        method=method,
        matched_keyword=keyword,
    )
