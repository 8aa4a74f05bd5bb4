import json

import httpx
import pytest

from tribuna.highlighting import (
    Category,
    OpenAIChatClient,
    RemoteExtractor,
    RemoteHighlightingError,
    parse_remote_spans,
)
from tribuna.highlighting.remote import build_prompt

_TEXT = "The Senate passed the Inflation Reduction Act."


def _entry(phrase, category="formal_legislation", score=9.0, **overrides):
    start = _TEXT.index(phrase)
    entry = {
        "term": phrase,
        "fullPhrase": phrase,
        "startIndex": start,
        "endIndex": start + len(phrase),
        "category": category,
        "relevanceScore": score,
        "explanation": "Named law",
    }
    entry.update(overrides)
    return entry


class FakeCompletionClient:
    def __init__(self, content: str):
        self.content = content
        self.prompts: list[str] = []

    def complete(self, prompt: str) -> str:
        self.prompts.append(prompt)
        return self.content


def test_parse_keeps_valid_entries_and_drops_invalid_ones():
    start = _TEXT.index("Inflation Reduction Act")
    content = json.dumps(
        [
            _entry("Inflation Reduction Act"),
            _entry("Senate", category="celebrity"),
            _entry("Senate", startIndex=40, endIndex=99),
            _entry("Senate", score="high"),
            {"term": "Senate"},
            "not an object",
        ]
    )

    [span] = parse_remote_spans(content, _TEXT)

    assert (span.start, span.end) == (start, start + len("Inflation Reduction Act"))
    assert span.category is Category.FORMAL_LEGISLATION
    assert span.relevance_score == 9.0
    assert span.source == "remote"


def test_parse_drops_entries_below_threshold():
    content = json.dumps([_entry("Senate", category="political_institution", score=5.0)])
    assert parse_remote_spans(content, _TEXT, threshold=7.0) == []


def test_parse_reanchors_misplaced_offsets():
    start = _TEXT.index("Senate")
    content = json.dumps([_entry("Senate", category="political_institution", startIndex=0, endIndex=6)])

    [span] = parse_remote_spans(content, _TEXT)

    assert (span.start, span.end) == (start, start + 6)
    assert span.matched_text == "Senate"


def test_parse_drops_phrase_missing_from_text():
    content = json.dumps([_entry("Senate", fullPhrase="House", category="political_institution")])
    assert parse_remote_spans(content, _TEXT) == []


def test_parse_accepts_fenced_and_wrapped_json():
    fenced = "Here you go:\n```json\n" + json.dumps([_entry("Inflation Reduction Act")]) + "\n```"
    wrapped = json.dumps({"terms": [_entry("Inflation Reduction Act")]})

    assert len(parse_remote_spans(fenced, _TEXT)) == 1
    assert len(parse_remote_spans(wrapped, _TEXT)) == 1


def test_parse_scores_entries_without_score_locally():
    content = json.dumps([_entry("Senate", category="political_institution", score=None)])

    [span] = parse_remote_spans(content, _TEXT)

    assert span.relevance_score == 8.0


@pytest.mark.parametrize("content", ["not json at all", '{"answer": "none"}', "[{]"])
def test_parse_rejects_responses_that_are_not_lists(content):
    with pytest.raises(RemoteHighlightingError):
        parse_remote_spans(content, _TEXT)


def test_empty_list_is_a_valid_answer():
    assert parse_remote_spans("[]", _TEXT) == []


def test_remote_extractor_sends_text_in_prompt():
    client = FakeCompletionClient(json.dumps([_entry("Inflation Reduction Act")]))
    spans = RemoteExtractor(client).extract(_TEXT)

    assert len(spans) == 1
    assert _TEXT in client.prompts[0]
    assert "startIndex" in build_prompt(_TEXT)


def test_openai_client_posts_chat_completion():
    captured = {}

    def handler(request: httpx.Request) -> httpx.Response:
        captured["path"] = request.url.path
        captured["body"] = json.loads(request.content)
        return httpx.Response(200, json={"choices": [{"message": {"content": "[]"}}]})

    http = httpx.Client(base_url="https://api.test/v1", transport=httpx.MockTransport(handler))
    client = OpenAIChatClient("secret", model="test-model", client=http)

    assert client.complete("hello") == "[]"
    assert captured["path"] == "/v1/chat/completions"
    assert captured["body"]["model"] == "test-model"
    assert captured["body"]["messages"][-1] == {"role": "user", "content": "hello"}


def test_openai_client_raises_on_http_error():
    http = httpx.Client(
        base_url="https://api.test/v1",
        transport=httpx.MockTransport(lambda request: httpx.Response(500)),
    )
    client = OpenAIChatClient("secret", client=http)

    with pytest.raises(httpx.HTTPStatusError):
        client.complete("hello")


def test_openai_client_rejects_empty_content():
    http = httpx.Client(
        base_url="https://api.test/v1",
        transport=httpx.MockTransport(
            lambda request: httpx.Response(200, json={"choices": [{"message": {"content": " "}}]})
        ),
    )
    client = OpenAIChatClient("secret", client=http)

    with pytest.raises(RemoteHighlightingError):
        client.complete("hello")
