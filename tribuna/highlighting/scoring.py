"""Contextual relevance scoring for candidate spans.

The score starts from the base weight of the recognizer that produced the
span, gains a bounded boost for political keywords found close to it, and
loses a fixed penalty when the same phrase is repeated so often in the
document that highlighting it stops being informative.
"""
from __future__ import annotations

import logging
import re
from dataclasses import dataclass, field, replace
from functools import lru_cache
from typing import Iterable, List, Mapping, Sequence

from .models import Category, Span
from .patterns import DEFAULT_PATTERN_LIBRARY, PatternLibrary

DEFAULT_THRESHOLD = 7.0

DEFAULT_CONTEXT_KEYWORDS = (
    "vote",
    "legislation",
    "bill",
    "congress",
    "senate",
    "house",
    "policy",
    "program",
    "budget",
    "funding",
    "reform",
    "debate",
    "committee",
    "hearing",
    "amendment",
    "law",
    "regulation",
)

_log = logging.getLogger("tribuna.highlighting")


@dataclass(frozen=True, slots=True)
class ScoringConfig:
    """Tunable constants of the relevance scorer."""

    threshold: float = DEFAULT_THRESHOLD
    window: int = 100
    keywords: tuple[str, ...] = DEFAULT_CONTEXT_KEYWORDS
    keyword_increment: float = 0.5
    max_boost: float = 2.0
    frequency_limit: int = 5
    frequency_penalty: float = 1.0
    min_score: float = 1.0
    max_score: float = 10.0
    category_weights: Mapping[Category, float] = field(default_factory=dict)

    def base_weight(
        self, span: Span, library: PatternLibrary = DEFAULT_PATTERN_LIBRARY
    ) -> float:
        """Category override when configured, otherwise the matcher priority."""

        override = self.category_weights.get(span.category)
        if override is not None:
            return float(override)
        return library.base_weight(span.matcher, span.category)


def _keyword_alternatives(keyword: str) -> str:
    escaped = re.escape(keyword)
    forms = [rf"{escaped}(?:s|es|d|ed|ing)?"]
    if keyword.endswith("e"):
        forms.append(rf"{re.escape(keyword[:-1])}ing")
    return "|".join(forms)


@lru_cache(maxsize=32)
def _keyword_pattern(keywords: tuple[str, ...]) -> re.Pattern[str]:
    groups = "|".join(
        f"(?P<k{index}>{_keyword_alternatives(keyword)})"
        for index, keyword in enumerate(keywords)
    )
    return re.compile(rf"\b(?:{groups})\b", re.IGNORECASE)


def context_keywords(text: str, start: int, end: int, config: ScoringConfig) -> set[str]:
    """Distinct keywords found in the windows before and after ``[start, end)``.

    The span's own text is excluded, and inflected forms ("votes", "voting")
    count as their keyword.
    """

    pattern = _keyword_pattern(tuple(config.keywords))
    before = text[max(0, start - config.window):start]
    after = text[end:end + config.window]
    found: set[str] = set()
    for window in (before, after):
        for match in pattern.finditer(window):
            index = int(match.lastgroup[1:])  # type: ignore[index]
            found.add(config.keywords[index])
    return found


def count_occurrences(text: str, phrase: str) -> int:
    """Case-insensitive, whole-word occurrences of ``phrase`` in ``text``."""

    if not phrase:
        return 0
    pattern = re.compile(rf"(?<!\w){re.escape(phrase)}(?!\w)", re.IGNORECASE)
    return sum(1 for _ in pattern.finditer(text))


def score_span(
    span: Span, full_text: str, base_weight: float, config: ScoringConfig | None = None
) -> float:
    """Return the relevance of ``span`` clamped to the configured range."""

    config = config or ScoringConfig()
    score = float(base_weight)
    keywords = context_keywords(full_text, span.start, span.end, config)
    score += min(len(keywords) * config.keyword_increment, config.max_boost)
    if count_occurrences(full_text, span.matched_text) > config.frequency_limit:
        score -= config.frequency_penalty
    return max(config.min_score, min(config.max_score, score))


def score_spans(
    spans: Iterable[Span],
    text: str,
    library: PatternLibrary = DEFAULT_PATTERN_LIBRARY,
    config: ScoringConfig | None = None,
) -> List[Span]:
    """Attach a relevance score to every span, preserving order."""

    config = config or ScoringConfig()
    return [
        replace(
            span,
            relevance_score=score_span(span, text, config.base_weight(span, library), config),
        )
        for span in spans
    ]


def filter_by_threshold(spans: Sequence[Span], threshold: float = DEFAULT_THRESHOLD) -> List[Span]:
    """Drop spans scoring below ``threshold``; unscored spans never pass."""

    kept = [
        span
        for span in spans
        if span.relevance_score is not None and span.relevance_score >= threshold
    ]
    if len(kept) != len(spans):
        _log.debug("Threshold %.1f removed %s spans", threshold, len(spans) - len(kept))
    return kept


__all__ = [
    "DEFAULT_CONTEXT_KEYWORDS",
    "DEFAULT_THRESHOLD",
    "ScoringConfig",
    "context_keywords",
    "count_occurrences",
    "filter_by_threshold",
    "score_span",
    "score_spans",
]
