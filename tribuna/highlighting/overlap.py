"""Longest-match-first resolution of overlapping spans."""
from __future__ import annotations

from typing import Iterable, List

from .models import Span


def _rank(span: Span) -> tuple[int, float]:
    score = span.relevance_score if span.relevance_score is not None else 0.0
    return span.length, score


def resolve_overlaps(spans: Iterable[Span]) -> List[Span]:
    """Return a non-overlapping subset of ``spans`` ordered by start offset.

    Candidates are visited by start offset, longest and best scored first. A
    candidate that overlaps already accepted spans replaces them only when it
    ranks strictly above each of them by ``(length, score)``; otherwise it is
    discarded, so on a full tie the span that came first in ``spans`` wins.
    """

    indexed = list(enumerate(spans))
    indexed.sort(
        key=lambda item: (
            item[1].start,
            -item[1].length,
            -(item[1].relevance_score or 0.0),
            item[0],
        )
    )

    accepted: List[Span] = []
    for _, candidate in indexed:
        # Accepted spans are sorted and disjoint, so the ones overlapping the
        # candidate form a suffix of the list.
        first_overlap = len(accepted)
        while first_overlap > 0 and accepted[first_overlap - 1].end > candidate.start:
            first_overlap -= 1
        overlapping = accepted[first_overlap:]
        if not overlapping:
            accepted.append(candidate)
            continue
        if all(_rank(candidate) > _rank(existing) for existing in overlapping):
            del accepted[first_overlap:]
            accepted.append(candidate)

    accepted.sort(key=lambda span: span.start)
    return accepted


__all__ = ["resolve_overlaps"]
