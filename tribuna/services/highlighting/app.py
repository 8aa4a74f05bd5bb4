"""FastAPI application exposing the highlighting pipeline."""
from __future__ import annotations

import json
import logging
import os
from dataclasses import dataclass, field
from typing import Any

import uvicorn
from dotenv import load_dotenv
from fastapi import APIRouter, FastAPI
from fastapi.middleware.cors import CORSMiddleware
from pydantic import BaseModel, ConfigDict, Field

from tribuna.highlighting import (
    Category,
    CompletionClient,
    HighlightCache,
    HighlightingService,
    OpenAIChatClient,
    PatternLibrary,
    RemoteExtractor,
    ScoringConfig,
    Span,
    TextSegment,
    build_segments,
    normalize_article_text,
)
from tribuna.highlighting.patterns import DEFAULT_PATTERN_LIBRARY
from tribuna.highlighting.remote import DEFAULT_BASE_URL, DEFAULT_MODEL
from tribuna.highlighting.scoring import DEFAULT_THRESHOLD
from tribuna.settings import env_flag, get_api_bind_host, get_api_port

_log = logging.getLogger("tribuna.api")

# Spans kept per analysed text unless configured otherwise; 0 disables the cap.
DEFAULT_MAX_SPANS = 15


@dataclass
class HighlightingConfig:
    """Configuration required to bootstrap the highlighting service."""

    threshold: float = DEFAULT_THRESHOLD
    remote_enabled: bool = True
    api_key: str | None = None
    model: str = DEFAULT_MODEL
    base_url: str = DEFAULT_BASE_URL
    timeout: float = 15.0
    max_spans: int | None = DEFAULT_MAX_SPANS
    cache_size: int = 256
    category_weights: dict[str, float] = field(default_factory=dict)
    completion_client: CompletionClient | None = None
    library: PatternLibrary | None = None

    @classmethod
    def from_env(cls) -> "HighlightingConfig":
        """Build a configuration instance from environment variables."""

        def _json_env(name: str) -> dict[str, Any]:
            raw = os.getenv(name)
            if not raw:
                return {}
            try:
                value = json.loads(raw)
            except json.JSONDecodeError as exc:
                raise RuntimeError(f"Invalid JSON in environment variable {name!r}: {raw}") from exc
            if not isinstance(value, dict):
                raise RuntimeError(f"Environment variable {name!r} must hold a JSON object")
            return value

        max_spans = os.getenv("TRIBUNA_MAX_SPANS")
        return cls(
            threshold=float(os.getenv("TRIBUNA_RELEVANCE_THRESHOLD", DEFAULT_THRESHOLD)),
            remote_enabled=env_flag("TRIBUNA_AI_ENABLED", True),
            api_key=os.getenv("TRIBUNA_AI_API_KEY") or os.getenv("OPENAI_API_KEY") or None,
            model=os.getenv("TRIBUNA_AI_MODEL", DEFAULT_MODEL),
            base_url=os.getenv("TRIBUNA_AI_BASE_URL", DEFAULT_BASE_URL),
            timeout=float(os.getenv("TRIBUNA_AI_TIMEOUT", "15")),
            max_spans=int(max_spans) if max_spans else DEFAULT_MAX_SPANS,
            cache_size=int(os.getenv("TRIBUNA_CACHE_SIZE", "256")),
            category_weights=_json_env("TRIBUNA_CATEGORY_WEIGHTS"),
        )


@dataclass
class HighlightingContainer:
    """Resolved dependencies for the highlighting service."""

    config: HighlightingConfig
    service: HighlightingService
    scoring: ScoringConfig
    cache: HighlightCache | None
    completion_client: CompletionClient | None


def _category_weights(raw: dict[str, Any]) -> dict[Category, float]:
    weights: dict[Category, float] = {}
    for key, value in raw.items():
        try:
            weights[Category.parse(key)] = float(value)
        except (TypeError, ValueError) as exc:
            raise RuntimeError(f"Invalid category weight {key!r}: {value!r}") from exc
    return weights


def build_highlighting_container(config: HighlightingConfig) -> HighlightingContainer:
    """Instantiate all dependencies required by the highlighting service."""

    scoring = ScoringConfig(
        threshold=config.threshold,
        category_weights=_category_weights(config.category_weights),
    )

    client = config.completion_client
    if client is None and config.remote_enabled and config.api_key:
        client = OpenAIChatClient(
            config.api_key,
            model=config.model,
            base_url=config.base_url,
            timeout=config.timeout,
        )
    remote = (
        RemoteExtractor(client, threshold=config.threshold, scoring=scoring)
        if client is not None
        else None
    )
    if config.remote_enabled and remote is None:
        _log.info("No remote credential configured; using local patterns only")

    cache = HighlightCache(config.cache_size) if config.cache_size > 0 else None
    service = HighlightingService(
        library=config.library or DEFAULT_PATTERN_LIBRARY,
        scoring=scoring,
        remote=remote,
        cache=cache,
        remote_enabled=config.remote_enabled,
        max_spans=config.max_spans or None,
    )
    return HighlightingContainer(
        config=config,
        service=service,
        scoring=scoring,
        cache=cache,
        completion_client=client,
    )


class NormalizeRequest(BaseModel):
    text: str


class NormalizeResponse(BaseModel):
    text: str


class HighlightRequest(BaseModel):
    """Text to analyse plus rendering options."""

    text: str
    normalize: bool = True
    include_segments: bool = False
    local_only: bool = False


class SpanResponse(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    term: str
    full_phrase: str = Field(alias="fullPhrase")
    start_index: int = Field(alias="startIndex")
    end_index: int = Field(alias="endIndex")
    category: str
    relevance_score: float | None = Field(default=None, alias="relevanceScore")
    explanation: str | None = None

    @classmethod
    def from_span(cls, span: Span) -> "SpanResponse":
        return cls.model_validate(span.to_payload())


class SegmentResponse(BaseModel):
    text: str
    start: int
    end: int
    highlighted: bool
    term: str | None = None
    category: str | None = None

    @classmethod
    def from_segment(cls, segment: TextSegment) -> "SegmentResponse":
        return cls(
            text=segment.text,
            start=segment.start,
            end=segment.end,
            highlighted=segment.highlighted,
            term=segment.span.canonical_term if segment.span else None,
            category=segment.span.category.value if segment.span else None,
        )


class HighlightResponse(BaseModel):
    text: str
    spans: list[SpanResponse]
    segments: list[SegmentResponse] | None = None


def include_routes(app: FastAPI, container: HighlightingContainer, *, prefix: str = "") -> None:
    """Register FastAPI routes exposing the highlighting capabilities."""

    router = APIRouter(prefix=prefix, tags=["Highlighting"])

    @router.get("/healthz")
    def healthcheck() -> dict[str, str]:
        return {"status": "ok"}

    @router.post("/normalize", response_model=NormalizeResponse)
    def normalize_text(payload: NormalizeRequest) -> NormalizeResponse:
        return NormalizeResponse(text=normalize_article_text(payload.text))

    @router.post(
        "/highlight",
        response_model=HighlightResponse,
        response_model_exclude_none=True,
    )
    def highlight_text(payload: HighlightRequest) -> HighlightResponse:
        text = normalize_article_text(payload.text) if payload.normalize else payload.text
        if payload.local_only:
            spans = container.service.highlight_local(text)
        else:
            spans = container.service.highlight(text)
        segments = None
        if payload.include_segments:
            segments = [SegmentResponse.from_segment(s) for s in build_segments(text, spans)]
        return HighlightResponse(
            text=text,
            spans=[SpanResponse.from_span(span) for span in spans],
            segments=segments,
        )

    app.include_router(router)


def create_app(config: HighlightingConfig | None = None) -> FastAPI:
    """Create a FastAPI application exposing highlighting endpoints."""

    config = config or HighlightingConfig.from_env()
    container = build_highlighting_container(config)

    app = FastAPI(
        title="Tribuna Highlighting API",
        version="1.0.0",
        description="Detects and annotates political entities in news text.",
    )
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    include_routes(app, container)
    app.state.container = container
    return app


def run_api() -> None:
    """Run the highlighting API with uvicorn."""

    load_dotenv()
    uvicorn.run(
        "tribuna.services.highlighting.app:create_app",
        host=get_api_bind_host(),
        port=get_api_port(),
        factory=True,
    )


__all__ = [
    "DEFAULT_MAX_SPANS",
    "HighlightingConfig",
    "HighlightingContainer",
    "build_highlighting_container",
    "create_app",
    "include_routes",
    "run_api",
]
