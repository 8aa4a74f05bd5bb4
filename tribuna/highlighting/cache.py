"""In-memory cache of highlighting results keyed by a text fingerprint."""
from __future__ import annotations

import threading
from collections import OrderedDict
from typing import Sequence

from .models import Span

_MASK = (1 << 64) - 1


def text_fingerprint(text: str) -> tuple[int, int]:
    """Return a 31-based polynomial hash of ``text`` and its length."""

    value = 0
    for char in text:
        value = (value * 31 + ord(char)) & _MASK
    return value, len(text)


class HighlightCache:
    """Bounded, thread-safe store of span lists per analysed text."""

    def __init__(self, max_entries: int = 256) -> None:
        self._lock = threading.Lock()
        """Guards the ordered mapping below."""

        self._entries: OrderedDict[tuple[int, int], tuple[str, tuple[Span, ...]]] = OrderedDict()
        """Least recently used entries first."""

        self._max_entries = max(1, max_entries)

    def get(self, text: str) -> tuple[Span, ...] | None:
        """Return the cached spans for ``text``, if any."""

        key = text_fingerprint(text)
        with self._lock:
            entry = self._entries.get(key)
            # A fingerprint collision must not leak another text's spans.
            if entry is None or entry[0] != text:
                return None
            self._entries.move_to_end(key)
            return entry[1]

    def put(self, text: str, spans: Sequence[Span]) -> None:
        key = text_fingerprint(text)
        with self._lock:
            self._entries[key] = (text, tuple(spans))
            self._entries.move_to_end(key)
            while len(self._entries) > self._max_entries:
                self._entries.popitem(last=False)

    def clear(self) -> None:
        with self._lock:
            self._entries.clear()

    def __len__(self) -> int:
        with self._lock:
            return len(self._entries)


__all__ = ["HighlightCache", "text_fingerprint"]
