"""Normalization helpers applied to raw article text before highlighting."""
from __future__ import annotations

import re
import warnings
from typing import Any, List

from bs4 import BeautifulSoup, MarkupResemblesLocatorWarning

# Entities outside this table are deleted rather than guessed.
_NAMED_ENTITIES = {
    # quotes and apostrophes
    "&quot;": '"',
    "&apos;": "'",
    "&lsquo;": "'",
    "&rsquo;": "'",
    "&ldquo;": '"',
    "&rdquo;": '"',
    "&sbquo;": "‚",
    "&bdquo;": "„",
    "&laquo;": "«",
    "&raquo;": "»",
    # markup
    "&lt;": "<",
    "&gt;": ">",
    "&nbsp;": " ",
    # dashes
    "&ndash;": "–",
    "&mdash;": "—",
    "&minus;": "−",
    "&shy;": "",
    # dots
    "&hellip;": "…",
    "&middot;": "·",
    "&bull;": "•",
    # spaces
    "&ensp;": " ",
    "&emsp;": " ",
    "&thinsp;": " ",
    "&zwnj;": "",
    "&zwj;": "",
    # currency and symbols
    "&cent;": "¢",
    "&pound;": "£",
    "&curren;": "¤",
    "&yen;": "¥",
    "&euro;": "€",
    "&copy;": "©",
    "&reg;": "®",
    "&trade;": "™",
    "&deg;": "°",
    "&plusmn;": "±",
    "&sup1;": "¹",
    "&sup2;": "²",
    "&sup3;": "³",
    "&frac14;": "¼",
    "&frac12;": "½",
    "&frac34;": "¾",
    "&times;": "×",
    "&divide;": "÷",
    "&sect;": "§",
    "&para;": "¶",
    "&not;": "¬",
    "&macr;": "¯",
    "&acute;": "´",
    "&micro;": "µ",
    "&cedil;": "¸",
    "&ordm;": "º",
    "&ordf;": "ª",
    "&iquest;": "¿",
    "&iexcl;": "¡",
    "&brvbar;": "¦",
    "&uml;": "¨",
}

_ACCENTED_LETTERS = {
    "agrave": "à", "aacute": "á", "acirc": "â", "atilde": "ã", "auml": "ä",
    "aring": "å", "aelig": "æ", "ccedil": "ç", "egrave": "è", "eacute": "é",
    "ecirc": "ê", "euml": "ë", "igrave": "ì", "iacute": "í", "icirc": "î",
    "iuml": "ï", "eth": "ð", "ntilde": "ñ", "ograve": "ò", "oacute": "ó",
    "ocirc": "ô", "otilde": "õ", "ouml": "ö", "oslash": "ø", "ugrave": "ù",
    "uacute": "ú", "ucirc": "û", "uuml": "ü", "yacute": "ý", "thorn": "þ",
    "yuml": "ÿ",
}
_UPPERCASE_ENTITY_NAMES = {"aelig": "AElig", "eth": "ETH", "thorn": "THORN"}

for _name, _char in _ACCENTED_LETTERS.items():
    _NAMED_ENTITIES[f"&{_name};"] = _char
    if _name != "yuml":
        _upper = _UPPERCASE_ENTITY_NAMES.get(_name, _name.capitalize())
        _NAMED_ENTITIES[f"&{_upper};"] = _char.upper()
_NAMED_ENTITIES["&amp;"] = "&"

_DECIMAL_ENTITY = re.compile(r"&#(\d+);")
_HEX_ENTITY = re.compile(r"&#[xX]([0-9A-Fa-f]+);")
_NAMED_ENTITY = re.compile(r"&[A-Za-z][A-Za-z0-9]*;")

_SCRIPT_BLOCK = re.compile(
    r"<(script|style|noscript)\b[^>]*>.*?</\1\s*>", re.IGNORECASE | re.DOTALL
)
_INLINE_HANDLER = re.compile(r"\s+on\w+\s*=\s*(?:\"[^\"]*\"|'[^']*')", re.IGNORECASE)
_FUNCTION_ASSIGNMENT = re.compile(
    r"\b(?:var|let|const)\s+\w+\s*=\s*function\s*\([^)]*\)\s*\{[^{}]*\}\s*;?"
)
_FUNCTION_DECLARATION = re.compile(r"\bfunction\s*\w*\s*\([^)]*\)\s*\{[^{}]*\}\s*;?")
_VARIABLE_DECLARATION = re.compile(r"\b(?:var|let|const)\s+\w+\s*=\s*[^;]+;?")
_THIS_ASSIGNMENT = re.compile(r"\bthis(?:\.\w+)+\s*=\s*[^;]+;?")
# A tag name followed only by name=value attributes, a comment or a doctype.
# Prose such as "a<b and c>d" does not qualify.
_TAG_LIKE = re.compile(
    r"</?[A-Za-z][A-Za-z0-9]*"
    r"(?:\s+[A-Za-z_:][\w:.\-]*\s*=\s*(?:\"[^\"]*\"|'[^']*'|[^\s\"'>]+))*\s*/?>"
    r"|<!--.*?-->|<![A-Za-z][^>]*>",
    re.DOTALL,
)

_CODE_ARTIFACTS = (
    re.compile(r"\bhttps?://\S+", re.IGNORECASE),
    re.compile(r"\bwww\.\S+", re.IGNORECASE),
    re.compile(r"\b(?:utm_\w+|fbclid|gclid)=\S*"),
    re.compile(
        r"\b(?:gtag|fbq|_gaq|googletag|adsbygoogle|disqus_config|dataLayer)\b"
        r"(?:\.\w+)*(?:\s*\([^()]*\))?\s*;?"
    ),
    re.compile(r"\b[A-Za-z_]\w*(?:\.[A-Za-z_]\w*)+\s*=\s*[^;]+;"),
    re.compile(r"\b[A-Za-z_]\w*\(\s*\)\s*;"),
    re.compile(r"\{[^{}]*:[^{}]*\}"),
    re.compile(r"\{\s*\}"),
    re.compile(r"\b[0-9a-f]{24,}\b"),
)

_TRUNCATION_MARKER = re.compile(r"\[\+?\s*\d+\s*chars?\]", re.IGNORECASE)
_CALL_TO_ACTION = re.compile(
    r"\b(?:read more|continue reading|click here)\b[^.!?]*[.!?…]*\s*$", re.IGNORECASE
)
_DOUBLE_QUOTES = re.compile(r"[“”„‟″]")
_SINGLE_QUOTES = re.compile(r"[‘’‚‛′]")
_EXTRA_DOTS = re.compile(r"\.{4,}")
_WHITESPACE = re.compile(r"\s+")
_SPACE_BEFORE_PUNCTUATION = re.compile(r"\s+([,.!?;:])")
_MISSING_SENTENCE_SPACE = re.compile(r"(?:(?<=[a-z]{2}[.!?])|(?<=[a-z][.!?]\"))(?=[A-Z])")
_MISSING_CLAUSE_SPACE = re.compile(r"(?<=[A-Za-z][,;])(?=[A-Za-z])")
_PARAGRAPH_BREAK = re.compile(r"\n\s*\n")
_SENTENCE_REGEX = re.compile(r"[^.!?\n]+[.!?]*")

_MAX_PASSES = 8


def _decode_code_point(value: int) -> str:
    if value <= 0 or value > 0x10FFFF or 0xD800 <= value <= 0xDFFF:
        return ""
    return chr(value)


def _decode_decimal(match: re.Match[str]) -> str:
    digits = match.group(1)
    if len(digits) > 7:
        return ""
    return _decode_code_point(int(digits))


def _decode_hex(match: re.Match[str]) -> str:
    digits = match.group(1)
    if len(digits) > 6:
        return ""
    return _decode_code_point(int(digits, 16))


def _decode_named(match: re.Match[str]) -> str:
    return _NAMED_ENTITIES.get(match.group(0), "")


def _decode_once(text: str) -> str:
    text = _DECIMAL_ENTITY.sub(_decode_decimal, text)
    text = _HEX_ENTITY.sub(_decode_hex, text)
    return _NAMED_ENTITY.sub(_decode_named, text)


def decode_html_entities(text: Any) -> Any:
    """Decode numeric and named HTML entities, dropping unknown ones.

    Double-encoded input such as ``&amp;quot;`` is decoded until no entity
    remains. Every replacement is shorter than the entity it replaces, so the
    loop always terminates.
    """

    if not isinstance(text, str) or not text:
        return text
    previous = None
    while previous != text:
        previous = text
        text = _decode_once(text)
    return text


def _remove_script_code(text: str) -> str:
    text = _SCRIPT_BLOCK.sub(" ", text)
    text = _INLINE_HANDLER.sub("", text)
    text = _FUNCTION_ASSIGNMENT.sub(" ", text)
    text = _FUNCTION_DECLARATION.sub(" ", text)
    text = _VARIABLE_DECLARATION.sub(" ", text)
    return _THIS_ASSIGNMENT.sub(" ", text)


def _escape_stray_brackets(text: str) -> str:
    parts = []
    last = 0
    for match in _TAG_LIKE.finditer(text):
        parts.append(text[last:match.start()].replace("<", "&lt;"))
        parts.append(match.group(0))
        last = match.end()
    parts.append(text[last:].replace("<", "&lt;"))
    return "".join(parts)


def _strip_markup(text: str) -> str:
    if not _TAG_LIKE.search(text):
        return text
    text = _escape_stray_brackets(text)
    with warnings.catch_warnings():
        warnings.simplefilter("ignore", MarkupResemblesLocatorWarning)
        soup = BeautifulSoup(text, "html.parser")
    for node in soup(["script", "style", "noscript"]):
        node.decompose()
    return soup.get_text(" ")


def _remove_code_artifacts(text: str) -> str:
    for pattern in _CODE_ARTIFACTS:
        text = pattern.sub(" ", text)
    return text


def _tidy_typography(text: str) -> str:
    text = _DOUBLE_QUOTES.sub('"', text)
    text = _SINGLE_QUOTES.sub("'", text)
    text = text.replace("…", "...")
    text = _EXTRA_DOTS.sub("...", text)
    text = _WHITESPACE.sub(" ", text).strip()
    text = _SPACE_BEFORE_PUNCTUATION.sub(r"\1", text)
    text = _MISSING_SENTENCE_SPACE.sub(" ", text)
    return _MISSING_CLAUSE_SPACE.sub(" ", text)


def _normalize_once(text: str) -> str:
    text = _remove_script_code(text)
    text = decode_html_entities(text)
    text = _strip_markup(text)
    text = _remove_code_artifacts(text)
    text = _TRUNCATION_MARKER.sub(" ", text)
    text = _WHITESPACE.sub(" ", text).strip()
    text = _CALL_TO_ACTION.sub("", text)
    return _tidy_typography(text)


def normalize_article_text(text: Any) -> Any:
    """Clean markup, scripts and tracking noise and normalise typography.

    Non-string and empty input is returned unchanged. The cleaning pass is
    repeated until the text stops changing, which makes the function
    idempotent even when removing one artifact exposes another.
    """

    if not isinstance(text, str) or not text:
        return text
    cleaned = _normalize_once(text)
    for _ in range(_MAX_PASSES):
        again = _normalize_once(cleaned)
        if again == cleaned:
            break
        cleaned = again
    return cleaned


normalize = normalize_article_text


def split_paragraphs(text: Any) -> List[str]:
    """Split raw article content on blank lines and normalise each paragraph."""

    if not isinstance(text, str) or not text.strip():
        return []
    paragraphs = []
    for block in _PARAGRAPH_BREAK.split(text):
        cleaned = normalize_article_text(block)
        if cleaned:
            paragraphs.append(cleaned)
    return paragraphs


def find_sentence_containing(text: str, start: int, end: int) -> str:
    """Return the sentence that contains the character span."""

    for match in _SENTENCE_REGEX.finditer(text):
        if match.start() <= start < match.end():
            return match.group().strip()
    return text.strip()


__all__ = [
    "decode_html_entities",
    "find_sentence_containing",
    "normalize",
    "normalize_article_text",
    "split_paragraphs",
]
