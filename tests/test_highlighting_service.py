import json
import logging
from typing import List

from tribuna.highlighting import (
    Category,
    HighlightCache,
    HighlightingService,
    RemoteExtractor,
)


class FakeCompletionClient:
    def __init__(self, content: str):
        self.content = content
        self.calls: List[str] = []

    def complete(self, prompt: str) -> str:
        self.calls.append(prompt)
        return self.content


class FailingCompletionClient:
    def __init__(self):
        self.calls = 0

    def complete(self, prompt: str) -> str:
        self.calls += 1
        raise TimeoutError("remote model timed out")


def _terms(spans):
    return [(span.matched_text, span.category) for span in spans]


def test_committee_and_bill_number_are_highlighted():
    text = "The House Energy and Commerce Committee reviewed H.R. 1234 today."
    spans = HighlightingService().highlight(text)

    assert _terms(spans) == [
        ("House Energy and Commerce Committee", Category.CONGRESSIONAL_COMMITTEE),
        ("H.R. 1234", Category.BILL_IDENTIFIER),
    ]
    for span in spans:
        assert text[span.start:span.end] == span.matched_text


def test_alias_is_highlighted_with_canonical_term():
    spans = HighlightingService().highlight("The Big Beautiful Bill passed the House.")
    terms = {span.matched_text: span.canonical_term for span in spans}

    assert terms["Big Beautiful Bill"] == "One Big Beautiful Bill Act"


def test_generic_reference_is_resolved():
    text = "The Infrastructure Investment and Jobs Act passed. Senators praised this bill."
    spans = HighlightingService().highlight(text)

    assert [span.matched_text for span in spans] == [
        "Infrastructure Investment and Jobs Act",
        "this bill",
    ]
    reference = spans[1]
    assert reference.canonical_term == "Infrastructure Investment and Jobs Act"
    assert reference.relevance_score == 10.0


def test_reference_without_antecedent_yields_nothing():
    assert HighlightingService().highlight("Senators praised this bill.") == []


def test_movement_and_institution():
    spans = HighlightingService().highlight("Progressives pushed Medicare for All in the Senate.")

    assert _terms(spans) == [
        ("Medicare for All", Category.MOVEMENT),
        ("Senate", Category.POLITICAL_INSTITUTION),
    ]


def test_spans_are_sorted_and_disjoint():
    text = (
        "The Senate Judiciary Committee and the EPA discussed the Clean Air Act, "
        "Medicare Advantage and a continuing resolution on Capitol Hill."
    )
    spans = HighlightingService().highlight(text)

    assert spans
    for left, right in zip(spans, spans[1:]):
        assert left.end <= right.start
    assert all(span.relevance_score >= 7.0 for span in spans)


def test_overused_phrase_falls_below_threshold():
    text = " ".join(["filibuster"] * 6)
    assert HighlightingService().highlight(text) == []


def test_blank_and_non_string_input():
    service = HighlightingService()
    assert service.highlight("") == []
    assert service.highlight("   ") == []
    assert service.highlight(None) == []


def test_remote_result_is_used_when_available():
    text = "The Senate passed the Inflation Reduction Act."
    start = text.index("Senate")
    payload = [
        {
            "term": "U.S. Senate",
            "fullPhrase": "Senate",
            "startIndex": start,
            "endIndex": start + 6,
            "category": "political_institution",
            "relevanceScore": 8.0,
        }
    ]
    client = FakeCompletionClient(json.dumps(payload))
    service = HighlightingService(remote=RemoteExtractor(client))

    spans = service.highlight(text)

    assert [(span.canonical_term, span.source) for span in spans] == [("U.S. Senate", "remote")]
    assert len(client.calls) == 1


def test_remote_failure_falls_back_to_local_result(caplog):
    text = "The Senate passed the Inflation Reduction Act. The bill cut costs."
    client = FailingCompletionClient()
    service = HighlightingService(remote=RemoteExtractor(client))

    with caplog.at_level(logging.WARNING, logger="tribuna.highlighting"):
        spans = service.highlight(text)

    assert client.calls == 1
    assert spans == HighlightingService().highlight(text)
    assert "falling back to local patterns" in caplog.text


def test_invalid_remote_json_falls_back_to_local_result():
    text = "The EPA sued the Department of Energy."
    service = HighlightingService(remote=RemoteExtractor(FakeCompletionClient("I cannot help.")))

    assert service.highlight(text) == HighlightingService().highlight(text)


def test_remote_disabled_skips_client():
    client = FailingCompletionClient()
    service = HighlightingService(remote=RemoteExtractor(client), remote_enabled=False)

    assert not service.remote_active
    assert service.highlight("The EPA sued.")
    assert client.calls == 0


def test_cache_avoids_second_remote_call():
    client = FakeCompletionClient("[]")
    service = HighlightingService(remote=RemoteExtractor(client), cache=HighlightCache())

    first = service.highlight("The EPA sued.")
    second = service.highlight("The EPA sued.")

    assert first == second == []
    assert len(client.calls) == 1


def test_max_spans_keeps_highest_scores_in_text_order():
    text = "The EPA and the FBI briefed the Senate on the Inflation Reduction Act."
    full = HighlightingService().highlight(text)
    limited = HighlightingService(max_spans=2).highlight(text)

    assert len(full) > 2
    assert len(limited) == 2
    assert [span.start for span in limited] == sorted(span.start for span in limited)
    best = sorted(full, key=lambda span: (-span.relevance_score, span.start))[:2]
    assert set(limited) == set(best)


def test_annotate_normalizes_before_highlighting():
    annotated = HighlightingService().annotate("<p>The &#8220;EPA&#8221; sued.</p>")

    assert annotated.text == 'The "EPA" sued.'
    [span] = annotated.spans
    assert annotated.text[span.start:span.end] == "EPA"


def test_annotate_article_works_per_paragraph():
    raw = "The EPA sued.\n\nNothing to see here.\n\nThe Senate voted."
    annotated = HighlightingService().annotate_article(raw)

    assert [item.text for item in annotated] == [
        "The EPA sued.",
        "Nothing to see here.",
        "The Senate voted.",
    ]
    assert [len(item.spans) for item in annotated] == [1, 0, 1]


def test_possessive_entities_are_highlighted():
    spans = HighlightingService().highlight(
        "The Affordable Care Act's mandate was repealed by Congress."
    )

    assert [span.matched_text for span in spans] == ["Affordable Care Act", "Congress"]


def test_possessive_abbreviation_is_highlighted():
    spans = HighlightingService().highlight("Lawmakers questioned the EPA's new rule on the bill.")

    assert [span.canonical_term for span in spans] == ["Environmental Protection Agency"]


def test_hyphenated_compounds_are_highlighted():
    spans = HighlightingService().highlight("The GOP-led House passed the Senate-backed bill.")

    assert [(span.matched_text, span.canonical_term) for span in spans] == [
        ("GOP", "Republican Party"),
        ("House", "House"),
        ("Senate", "Senate"),
    ]
