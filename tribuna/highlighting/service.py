"""Main orchestration service for political-entity highlighting."""
from __future__ import annotations

import logging
from typing import Any, List, Sequence

from .cache import HighlightCache
from .extractor import extract_spans
from .models import AnnotatedText, Span
from .normalization import normalize_article_text, split_paragraphs
from .overlap import resolve_overlaps
from .patterns import DEFAULT_PATTERN_LIBRARY, PatternLibrary
from .references import ReferenceResolver
from .remote import RemoteExtractor
from .scoring import ScoringConfig, filter_by_threshold, score_spans


class HighlightingService:
    """Coordinates the full pipeline from raw text to final spans."""

    def __init__(
        self,
        *,
        library: PatternLibrary = DEFAULT_PATTERN_LIBRARY,
        scoring: ScoringConfig | None = None,
        remote: RemoteExtractor | None = None,
        cache: HighlightCache | None = None,
        remote_enabled: bool = True,
        max_spans: int | None = None,
        reference_resolver: ReferenceResolver | None = None,
    ) -> None:
        self._library = library
        self._scoring = scoring or ScoringConfig()
        self._remote = remote
        self._cache = cache
        self._remote_enabled = remote_enabled
        self._max_spans = max_spans
        self._references = reference_resolver or ReferenceResolver()
        self._log = logging.getLogger("tribuna.highlighting")

    @property
    def scoring(self) -> ScoringConfig:
        return self._scoring

    @property
    def remote_active(self) -> bool:
        return self._remote is not None and self._remote_enabled

    def highlight(self, text: Any) -> List[Span]:
        """Return the final, non-overlapping spans for ``text``.

        The remote extractor is tried first when configured. Any failure on
        that path is logged and answered by the local pipeline instead, so
        this method never raises because of the remote collaborator.
        """

        if not isinstance(text, str) or not text.strip():
            return []

        if self._cache is not None:
            cached = self._cache.get(text)
            if cached is not None:
                return list(cached)

        specific: List[Span] | None = None
        if self.remote_active:
            try:
                specific = self._remote.extract(text)  # type: ignore[union-attr]
            except Exception as exc:
                self._log.warning(
                    "Remote highlighting failed, falling back to local patterns: %s", exc
                )
        if specific is None:
            specific = self._local_candidates(text)

        spans = self._finalize(text, specific)
        if self._cache is not None:
            self._cache.put(text, spans)
        return spans

    def highlight_local(self, text: Any) -> List[Span]:
        """Run only the deterministic local pipeline, bypassing the cache."""

        if not isinstance(text, str) or not text.strip():
            return []
        return self._finalize(text, self._local_candidates(text))

    def annotate(self, raw: Any) -> AnnotatedText:
        """Normalise ``raw`` and highlight the cleaned text."""

        text = normalize_article_text(raw) if isinstance(raw, str) else ""
        return AnnotatedText(text=text, spans=tuple(self.highlight(text)))

    def annotate_article(self, raw: Any) -> List[AnnotatedText]:
        """Annotate every paragraph of an article separately."""

        return [
            AnnotatedText(text=paragraph, spans=tuple(self.highlight(paragraph)))
            for paragraph in split_paragraphs(raw)
        ]

    def _local_candidates(self, text: str) -> List[Span]:
        candidates = extract_spans(text, self._library)
        scored = score_spans(candidates, text, self._library, self._scoring)
        return filter_by_threshold(scored, self._scoring.threshold)

    def _finalize(self, text: str, specific: Sequence[Span]) -> List[Span]:
        provisional = resolve_overlaps(specific)
        references = self._references.resolve(text, provisional)
        spans = resolve_overlaps([*provisional, *references])
        if self._max_spans is not None and len(spans) > self._max_spans:
            ranked = sorted(
                spans, key=lambda span: (-(span.relevance_score or 0.0), span.start)
            )
            spans = sorted(ranked[: self._max_spans], key=lambda span: span.start)
        self._log.debug("Highlighted %s spans in %s characters", len(spans), len(text))
        return spans


__all__ = ["HighlightingService"]
