"""Optional language-model extraction path with strict response validation."""
from __future__ import annotations

import json
import logging
import re
from dataclasses import replace
from typing import Any, List

import httpx
from pydantic import BaseModel, ConfigDict, Field, StrictInt, ValidationError, field_validator

from .models import SOURCE_REMOTE, Category, CompletionClient, Span
from .patterns import CATEGORY_DEFAULT_WEIGHTS
from .scoring import DEFAULT_THRESHOLD, ScoringConfig, score_span

DEFAULT_MODEL = "gpt-3.5-turbo"
DEFAULT_BASE_URL = "https://api.openai.com/v1"
DEFAULT_TEMPERATURE = 0.1
DEFAULT_MAX_TOKENS = 1500

_SYSTEM_MESSAGE = (
    "You are a political analysis assistant. Reply only with a JSON array of "
    "the political terms to highlight."
)

_FENCED_BLOCK = re.compile(r"```(?:json)?\s*(.*?)```", re.DOTALL | re.IGNORECASE)
_JSON_ARRAY = re.compile(r"\[.*\]", re.DOTALL)

_log = logging.getLogger("tribuna.highlighting.remote")


class RemoteHighlightingError(RuntimeError):
    """Raised when the remote collaborator returns an unusable response."""


class RemoteSpanPayload(BaseModel):
    """One entry of the JSON array returned by the language model."""

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    term: str = Field(min_length=1)
    full_phrase: str = Field(alias="fullPhrase", min_length=1)
    start_index: StrictInt = Field(alias="startIndex", ge=0)
    end_index: StrictInt = Field(alias="endIndex", ge=1)
    category: Category
    relevance_score: float | None = Field(
        default=None, alias="relevanceScore", ge=0, le=10, strict=True
    )
    explanation: str | None = None

    @field_validator("category", mode="before")
    @classmethod
    def _parse_category(cls, value: Any) -> Category:
        return Category.parse(value)


def build_prompt(text: str) -> str:
    """Return the user prompt asking for political terms in ``text``."""

    categories = ", ".join(category.value for category in Category)
    return (
        "Identify the specific political entities mentioned in the text below: "
        "bills and bill numbers, named laws, government agencies, congressional "
        "committees, political institutions, benefit programs, political movements "
        "and procedural phrases. Prefer the most complete name of each entity.\n\n"
        "Return a JSON array. Each element must be an object with the keys "
        '"term" (canonical name), "fullPhrase" (exact text as it appears), '
        '"startIndex" and "endIndex" (character offsets, end exclusive), '
        f'"category" (one of: {categories}), "relevanceScore" (1 to 10) and '
        '"explanation" (one short sentence).\n\n'
        f"Text:\n{text}"
    )


class OpenAIChatClient(CompletionClient):
    """Client for an OpenAI-compatible ``/chat/completions`` endpoint."""

    def __init__(
        self,
        api_key: str,
        *,
        model: str = DEFAULT_MODEL,
        base_url: str = DEFAULT_BASE_URL,
        timeout: float | None = 15.0,
        temperature: float = DEFAULT_TEMPERATURE,
        max_tokens: int = DEFAULT_MAX_TOKENS,
        client: httpx.Client | None = None,
    ) -> None:
        self._model = model
        self._temperature = temperature
        self._max_tokens = max_tokens
        self._client = client or httpx.Client(
            base_url=base_url.rstrip("/"),
            timeout=timeout,
            headers={"Authorization": f"Bearer {api_key}"},
        )
        self._owns_client = client is None

    def complete(self, prompt: str) -> str:
        response = self._client.post(
            "/chat/completions",
            json={
                "model": self._model,
                "messages": [
                    {"role": "system", "content": _SYSTEM_MESSAGE},
                    {"role": "user", "content": prompt},
                ],
                "temperature": self._temperature,
                "max_tokens": self._max_tokens,
            },
        )
        response.raise_for_status()
        body = response.json()
        try:
            content = body["choices"][0]["message"]["content"]
        except (KeyError, IndexError, TypeError) as exc:
            raise RemoteHighlightingError("Completion response has no message content") from exc
        if not isinstance(content, str) or not content.strip():
            raise RemoteHighlightingError("Completion response is empty")
        return content

    def close(self) -> None:
        if self._owns_client:
            self._client.close()


def _load_entries(content: str) -> list[Any]:
    fenced = _FENCED_BLOCK.search(content)
    raw = fenced.group(1) if fenced else content
    try:
        payload = json.loads(raw)
    except json.JSONDecodeError:
        array = _JSON_ARRAY.search(raw)
        if array is None:
            raise RemoteHighlightingError("Response does not contain a JSON array") from None
        try:
            payload = json.loads(array.group(0))
        except json.JSONDecodeError as exc:
            raise RemoteHighlightingError(f"Invalid JSON in response: {exc}") from exc

    if isinstance(payload, dict):
        payload = next((value for value in payload.values() if isinstance(value, list)), None)
    if not isinstance(payload, list):
        raise RemoteHighlightingError("Response JSON is not a list of terms")
    return payload


def _anchor(text: str, phrase: str, start: int, end: int) -> tuple[int, int] | None:
    """Return offsets where ``phrase`` really occurs, nearest the claimed start."""

    if text[start:end] == phrase:
        return start, end
    occurrences = [match.start() for match in re.finditer(re.escape(phrase), text)]
    if not occurrences:
        return None
    nearest = min(occurrences, key=lambda offset: (abs(offset - start), offset))
    return nearest, nearest + len(phrase)


def parse_remote_spans(
    content: str,
    text: str,
    threshold: float = DEFAULT_THRESHOLD,
    scoring: ScoringConfig | None = None,
) -> List[Span]:
    """Validate a raw completion against ``text`` and return the usable spans.

    The response as a whole must be a JSON array (optionally fenced or wrapped
    in an object); otherwise :class:`RemoteHighlightingError` is raised. Each
    entry is then checked on its own and dropped when it is malformed, out of
    bounds, names a phrase absent from the text or scores below ``threshold``.
    Entries without a score are scored locally.
    """

    scoring = scoring or ScoringConfig(threshold=threshold)
    spans: List[Span] = []
    dropped = 0
    for entry in _load_entries(content):
        if not isinstance(entry, dict):
            dropped += 1
            continue
        try:
            item = RemoteSpanPayload.model_validate(entry)
        except ValidationError as exc:
            _log.debug("Dropping invalid remote entry %r: %s", entry, exc.errors())
            dropped += 1
            continue
        if item.start_index >= item.end_index or item.end_index > len(text):
            dropped += 1
            continue
        anchored = _anchor(text, item.full_phrase, item.start_index, item.end_index)
        if anchored is None:
            dropped += 1
            continue
        start, end = anchored
        span = Span(
            start=start,
            end=end,
            matched_text=text[start:end],
            canonical_term=item.term.strip() or item.full_phrase,
            category=item.category,
            relevance_score=(
                float(item.relevance_score) if item.relevance_score is not None else None
            ),
            explanation=item.explanation,
            source=SOURCE_REMOTE,
        )
        if span.relevance_score is None:
            base = scoring.category_weights.get(
                span.category, CATEGORY_DEFAULT_WEIGHTS[span.category]
            )
            span = replace(span, relevance_score=score_span(span, text, base, scoring))
        if span.relevance_score < threshold:
            dropped += 1
            continue
        spans.append(span)

    if dropped:
        _log.info("Discarded %s of %s remote entries", dropped, dropped + len(spans))
    return spans


class RemoteExtractor:
    """Runs the remote path end to end for one text."""

    def __init__(
        self,
        client: CompletionClient,
        *,
        threshold: float = DEFAULT_THRESHOLD,
        scoring: ScoringConfig | None = None,
    ) -> None:
        self._client = client
        self._threshold = threshold
        self._scoring = scoring

    def extract(self, text: str) -> List[Span]:
        content = self._client.complete(build_prompt(text))
        return parse_remote_spans(content, text, self._threshold, self._scoring)


__all__ = [
    "DEFAULT_BASE_URL",
    "DEFAULT_MODEL",
    "OpenAIChatClient",
    "RemoteExtractor",
    "RemoteHighlightingError",
    "RemoteSpanPayload",
    "build_prompt",
    "parse_remote_spans",
]
