import pytest

from tribuna.highlighting import Category, Span


def test_category_parse_accepts_values_case_insensitively():
    assert Category.parse(" Government_Agency ") is Category.GOVERNMENT_AGENCY
    assert Category.parse(Category.MOVEMENT) is Category.MOVEMENT


def test_category_parse_rejects_unknown_values():
    with pytest.raises(ValueError):
        Category.parse("celebrity")
    with pytest.raises(ValueError):
        Category.parse(3)


@pytest.mark.parametrize("start, end", [(-1, 3), (5, 5), (6, 2)])
def test_span_rejects_invalid_bounds(start, end):
    with pytest.raises(ValueError):
        Span(start=start, end=end, matched_text="x", canonical_term="x", category="other")


def test_span_coerces_category_and_serializes_public_names():
    span = Span(
        start=4,
        end=10,
        matched_text="Senate",
        canonical_term="Senate",
        category="political_institution",
        relevance_score=8.5,
    )

    assert span.category is Category.POLITICAL_INSTITUTION
    assert span.length == 6
    assert span.to_payload() == {
        "term": "Senate",
        "fullPhrase": "Senate",
        "startIndex": 4,
        "endIndex": 10,
        "category": "political_institution",
        "relevanceScore": 8.5,
    }


def test_span_overlap_is_half_open():
    first = Span(0, 5, "House", "House", Category.POLITICAL_INSTITUTION)
    touching = Span(5, 9, " GOP", "GOP", Category.POLITICAL_INSTITUTION)
    inside = Span(2, 4, "us", "us", Category.OTHER)

    assert not first.overlaps(touching)
    assert first.overlaps(inside)
    assert inside.overlaps(first)
