"""Resolution of generic references ("this bill") to earlier specific mentions."""
from __future__ import annotations

import logging
import re
from dataclasses import dataclass, field
from typing import Any, Dict, Iterable, List, Sequence

from .models import SOURCE_REFERENCE, Category, Span

_log = logging.getLogger("tribuna.highlighting")


@dataclass(frozen=True, slots=True)
class GenericReference:
    """Referring phrase and the categories it may point back to."""

    name: str
    pattern: re.Pattern[str]
    categories: tuple[Category, ...]


DEFAULT_REFERENCES = (
    GenericReference(
        name="legislation",
        pattern=re.compile(
            r"\b(?:this|the|that|such)\s+"
            r"(?:(?:spending|infrastructure|climate|healthcare|tax|budget)\s+)?"
            r"(?:bill|act|legislation|proposal|measure)\b",
            re.IGNORECASE,
        ),
        categories=(Category.FORMAL_LEGISLATION, Category.BILL_IDENTIFIER),
    ),
    GenericReference(
        name="agency",
        pattern=re.compile(r"\b(?:this|the)\s+(?:department|agency|bureau)\b", re.IGNORECASE),
        categories=(Category.GOVERNMENT_AGENCY,),
    ),
    GenericReference(
        name="program",
        pattern=re.compile(r"\b(?:this|the)\s+(?:program|policy|initiative)\b", re.IGNORECASE),
        categories=(Category.ENTITLEMENT_PROGRAM,),
    ),
    GenericReference(
        name="committee",
        pattern=re.compile(r"\b(?:this|the)\s+(?:committee|panel)\b", re.IGNORECASE),
        categories=(Category.CONGRESSIONAL_COMMITTEE,),
    ),
)


@dataclass
class ResolutionContext:
    """Most recent specific mention per category, updated in textual order."""

    latest: Dict[Category, Span] = field(default_factory=dict)

    def record(self, span: Span) -> None:
        self.latest[span.category] = span

    def lookup(self, categories: Sequence[Category]) -> Span | None:
        """Return the nearest preceding mention among ``categories``."""

        candidates = [self.latest[c] for c in categories if c in self.latest]
        if not candidates:
            return None
        return max(candidates, key=lambda span: (span.end, span.start))


class ReferenceResolver:
    """Binds generic referring phrases to the specific entity they refer to."""

    def __init__(self, references: Iterable[GenericReference] = DEFAULT_REFERENCES) -> None:
        self._references = tuple(references)

    def find_references(self, text: str) -> List[tuple[int, int, GenericReference]]:
        found = []
        for reference in self._references:
            for match in reference.pattern.finditer(text):
                found.append((match.start(), match.end(), reference))
        found.sort(key=lambda item: (item[0], -item[1]))
        return found

    def resolve(self, text: Any, specific_spans: Iterable[Span]) -> List[Span]:
        """Return one span per resolvable reference in ``text``.

        ``specific_spans`` should already be free of overlaps so that a
        discarded candidate cannot become a referent. A reference at offset
        ``p`` only sees mentions ending at or before ``p``; references with no
        such mention are left unannotated.
        """

        if not isinstance(text, str) or not text:
            return []

        specifics = sorted(specific_spans, key=lambda span: (span.end, span.start))
        context = ResolutionContext()
        position = 0
        resolved: List[Span] = []
        for start, end, reference in self.find_references(text):
            while position < len(specifics) and specifics[position].end <= start:
                context.record(specifics[position])
                position += 1
            target = context.lookup(reference.categories)
            if target is None:
                _log.debug("Unresolved reference %r at %s", text[start:end], start)
                continue
            resolved.append(
                Span(
                    start=start,
                    end=end,
                    matched_text=text[start:end],
                    canonical_term=target.canonical_term,
                    category=target.category,
                    relevance_score=target.relevance_score,
                    explanation=f"Refers to {target.canonical_term}",
                    source=SOURCE_REFERENCE,
                    matcher=f"reference:{reference.name}",
                )
            )
        return resolved


__all__ = [
    "DEFAULT_REFERENCES",
    "GenericReference",
    "ReferenceResolver",
    "ResolutionContext",
]
