"""Political-entity highlighting pipeline components."""
from .models import AnnotatedText, Category, CompletionClient, Span, TextSegment
from .normalization import (
    decode_html_entities,
    find_sentence_containing,
    normalize,
    normalize_article_text,
    split_paragraphs,
)
from .patterns import DEFAULT_PATTERN_LIBRARY, Matcher, PatternLibrary
from .extractor import extract_spans
from .scoring import ScoringConfig, filter_by_threshold, score_span, score_spans
from .overlap import resolve_overlaps
from .references import ReferenceResolver, ResolutionContext
from .remote import OpenAIChatClient, RemoteExtractor, RemoteHighlightingError, parse_remote_spans
from .cache import HighlightCache, text_fingerprint
from .segments import build_segments
from .service import HighlightingService

__all__ = [
    "AnnotatedText",
    "Category",
    "CompletionClient",
    "DEFAULT_PATTERN_LIBRARY",
    "HighlightCache",
    "HighlightingService",
    "Matcher",
    "OpenAIChatClient",
    "PatternLibrary",
    "ReferenceResolver",
    "RemoteExtractor",
    "RemoteHighlightingError",
    "ResolutionContext",
    "ScoringConfig",
    "Span",
    "TextSegment",
    "build_segments",
    "decode_html_entities",
    "extract_spans",
    "filter_by_threshold",
    "find_sentence_containing",
    "normalize",
    "normalize_article_text",
    "parse_remote_spans",
    "resolve_overlaps",
    "score_span",
    "score_spans",
    "split_paragraphs",
    "text_fingerprint",
]
