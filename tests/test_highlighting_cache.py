from tribuna.highlighting import Category, HighlightCache, Span, text_fingerprint


def _spans():
    return [Span(4, 7, "EPA", "Environmental Protection Agency", Category.GOVERNMENT_AGENCY)]


def test_fingerprint_is_stable_and_length_aware():
    assert text_fingerprint("Senate") == text_fingerprint("Senate")
    assert text_fingerprint("Senate") != text_fingerprint("Senate ")
    assert text_fingerprint("")[1] == 0


def test_cache_returns_stored_spans():
    cache = HighlightCache()
    cache.put("The EPA sued.", _spans())

    assert cache.get("The EPA sued.") == tuple(_spans())
    assert cache.get("The FBI sued.") is None
    assert len(cache) == 1


def test_cache_evicts_least_recently_used():
    cache = HighlightCache(max_entries=2)
    cache.put("one", [])
    cache.put("two", [])
    cache.get("one")
    cache.put("three", [])

    assert cache.get("two") is None
    assert cache.get("one") == ()
    assert cache.get("three") == ()


def test_cache_clear():
    cache = HighlightCache()
    cache.put("one", _spans())
    cache.clear()

    assert len(cache) == 0
    assert cache.get("one") is None
