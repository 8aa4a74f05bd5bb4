"""Tribuna - political-entity highlighting for news text."""
from .highlighting import (
    AnnotatedText,
    Category,
    HighlightingService,
    Span,
    build_segments,
    normalize_article_text,
)

__all__ = [
    "AnnotatedText",
    "Category",
    "HighlightingService",
    "Span",
    "build_segments",
    "normalize_article_text",
]
