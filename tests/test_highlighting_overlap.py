from tribuna.highlighting import Category, Span, build_segments, resolve_overlaps


def _span(start, end, score=8.0, term="x", category=Category.OTHER):
    return Span(start, end, term, term, category, relevance_score=score)


def test_longer_span_wins_over_contained_one():
    inner = _span(4, 10, score=9.0, term="Senate")
    outer = _span(4, 30, score=8.0, term="Senate Judiciary Committee")

    assert resolve_overlaps([inner, outer]) == [outer]


def test_equal_length_prefers_higher_score():
    low = _span(0, 6, score=7.0, term="low")
    high = _span(2, 8, score=9.0, term="high")

    assert resolve_overlaps([low, high]) == [high]


def test_full_tie_keeps_first_candidate():
    first = _span(0, 6, term="first")
    second = _span(0, 6, term="second")

    assert resolve_overlaps([first, second]) == [first]
    assert resolve_overlaps([second, first]) == [second]


def test_later_longer_span_replaces_accepted_one():
    left = _span(0, 5, score=9.0)
    bridge = _span(3, 9, score=7.0)
    right = _span(6, 12, score=10.0)

    # ``bridge`` displaces ``left`` on length, then loses to ``right`` on score.
    assert resolve_overlaps([left, bridge, right]) == [right]


def test_result_is_sorted_and_disjoint():
    spans = [_span(20, 25), _span(0, 4), _span(2, 12), _span(10, 22)]
    result = resolve_overlaps(spans)

    assert [span.start for span in result] == sorted(span.start for span in result)
    for left, right in zip(result, result[1:]):
        assert left.end <= right.start


def test_touching_spans_are_both_kept():
    assert len(resolve_overlaps([_span(0, 5), _span(5, 9)])) == 2


def test_segments_cover_text_exactly():
    text = "The EPA and the FBI met."
    spans = [
        _span(4, 7, term="EPA", category=Category.GOVERNMENT_AGENCY),
        _span(16, 19, term="FBI", category=Category.GOVERNMENT_AGENCY),
        _span(4, 50, term="too long"),
    ]

    segments = build_segments(text, spans)

    assert "".join(segment.text for segment in segments) == text
    assert [segment.highlighted for segment in segments] == [False, True, False, True, False]
    assert segments[1].text == "EPA"
    assert segments[1].start == 4 and segments[1].end == 7


def test_segments_of_empty_text():
    assert build_segments("", []) == []
    [plain] = build_segments("Nothing political.", [])
    assert not plain.highlighted


def test_longest_match_wins_regardless_of_input_order():
    short = _span(4, 10, score=10.0, term="Senate")
    longer = _span(4, 30, score=7.0, term="Senate Judiciary Committee")
    other = _span(40, 45, term="EPA")

    expected = [longer, other]
    assert resolve_overlaps([short, longer, other]) == expected
    assert resolve_overlaps([other, longer, short]) == expected
    assert resolve_overlaps([longer, other, short]) == expected
