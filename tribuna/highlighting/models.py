"""Dataclasses and shared models for the political highlighting pipeline."""
from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any, Protocol


class Category(str, Enum):
    """Kinds of political entity recognised by the pipeline."""

    BILL_IDENTIFIER = "bill_identifier"
    FORMAL_LEGISLATION = "formal_legislation"
    GOVERNMENT_AGENCY = "government_agency"
    CONGRESSIONAL_COMMITTEE = "congressional_committee"
    POLITICAL_INSTITUTION = "political_institution"
    ENTITLEMENT_PROGRAM = "entitlement_program"
    MOVEMENT = "movement"
    POLICY_PHRASE = "policy_phrase"
    OTHER = "other"

    @classmethod
    def parse(cls, value: "Category | str") -> "Category":
        """Return the member for ``value`` or raise ``ValueError``."""

        if isinstance(value, cls):
            return value
        if isinstance(value, str):
            try:
                return cls(value.strip().lower())
            except ValueError:
                pass
        raise ValueError(f"Unknown category: {value!r}")


SOURCE_PATTERN = "pattern"
SOURCE_REFERENCE = "reference"
SOURCE_REMOTE = "remote"


@dataclass(frozen=True, slots=True)
class Span:
    """Annotated interval ``[start, end)`` of the analysed text."""

    start: int
    end: int
    matched_text: str
    canonical_term: str
    category: Category
    relevance_score: float | None = None
    explanation: str | None = None
    source: str = SOURCE_PATTERN
    matcher: str | None = None

    def __post_init__(self) -> None:
        if not (0 <= self.start < self.end):
            raise ValueError(
                f"Invalid span bounds: start={self.start}, end={self.end}"
            )
        object.__setattr__(self, "category", Category.parse(self.category))

    @property
    def length(self) -> int:
        return self.end - self.start

    def overlaps(self, other: "Span") -> bool:
        return self.start < other.end and other.start < self.end

    def to_payload(self) -> dict[str, Any]:
        """Serialize the span using the public JSON field names."""

        payload: dict[str, Any] = {
            "term": self.canonical_term,
            "fullPhrase": self.matched_text,
            "startIndex": self.start,
            "endIndex": self.end,
            "category": self.category.value,
        }
        if self.relevance_score is not None:
            payload["relevanceScore"] = self.relevance_score
        if self.explanation:
            payload["explanation"] = self.explanation
        return payload


@dataclass(frozen=True, slots=True)
class AnnotatedText:
    """Normalized text together with the spans found on it."""

    text: str
    spans: tuple[Span, ...]


@dataclass(frozen=True, slots=True)
class TextSegment:
    """Piece of text rendered either plain or highlighted."""

    text: str
    start: int
    end: int
    span: Span | None = None

    @property
    def highlighted(self) -> bool:
        return self.span is not None


class CompletionClient(Protocol):
    """Remote language model able to complete a prompt."""

    def complete(self, prompt: str) -> str:
        """Return the raw completion text for ``prompt``."""


__all__ = [
    "AnnotatedText",
    "Category",
    "CompletionClient",
    "SOURCE_PATTERN",
    "SOURCE_REFERENCE",
    "SOURCE_REMOTE",
    "Span",
    "TextSegment",
]
