"""Apply the pattern library to text and collect raw candidate spans."""
from __future__ import annotations

import logging
from typing import Any, List

from .models import SOURCE_PATTERN, Span
from .patterns import DEFAULT_PATTERN_LIBRARY, PatternLibrary

_log = logging.getLogger("tribuna.highlighting")


def _covered(start: int, end: int, spans: List[Span]) -> bool:
    return any(span.start <= start and end <= span.end for span in spans)


def extract_spans(text: Any, library: PatternLibrary = DEFAULT_PATTERN_LIBRARY) -> List[Span]:
    """Return every occurrence recognised by ``library`` in ``text``.

    Candidates may overlap and repeat. They are emitted matcher by matcher in
    library order, except that abbreviation matchers run after all full-name
    matchers and skip occurrences that sit inside a full-name candidate.
    """

    if not isinstance(text, str) or not text:
        return []

    full_names: List[Span] = []
    abbreviations: List[Span] = []
    ordered = [m for m in library if not m.abbreviation] + [m for m in library if m.abbreviation]
    for matcher in ordered:
        for match in matcher.finditer(text):
            start, end = match.span()
            if start == end:
                continue
            if matcher.abbreviation and _covered(start, end, full_names):
                continue
            surface = match.group(0)
            span = Span(
                start=start,
                end=end,
                matched_text=surface,
                canonical_term=matcher.canonical_for(surface),
                category=matcher.category,
                explanation=matcher.explanation,
                source=SOURCE_PATTERN,
                matcher=matcher.name,
            )
            (abbreviations if matcher.abbreviation else full_names).append(span)

    candidates = full_names + abbreviations
    _log.debug("Extracted %s candidate spans", len(candidates))
    return candidates


__all__ = ["extract_spans"]
