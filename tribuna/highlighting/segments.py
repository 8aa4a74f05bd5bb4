"""Split annotated text into plain and highlighted pieces for rendering."""
from __future__ import annotations

from typing import Iterable, List

from .models import Span, TextSegment
from .overlap import resolve_overlaps


def build_segments(text: str, spans: Iterable[Span]) -> List[TextSegment]:
    """Return segments covering ``text`` exactly once, in order.

    Spans reaching past the end of ``text`` are ignored and overlapping spans
    are resolved first, so the concatenation of all segment texts is always
    ``text`` itself.
    """

    if not text:
        return []
    valid = [span for span in spans if span.end <= len(text)]
    segments: List[TextSegment] = []
    cursor = 0
    for span in resolve_overlaps(valid):
        if span.start > cursor:
            segments.append(TextSegment(text=text[cursor:span.start], start=cursor, end=span.start))
        segments.append(
            TextSegment(text=text[span.start:span.end], start=span.start, end=span.end, span=span)
        )
        cursor = span.end
    if cursor < len(text):
        segments.append(TextSegment(text=text[cursor:], start=cursor, end=len(text)))
    return segments


__all__ = ["build_segments"]
