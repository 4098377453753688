"""Text normalization for extracted values.

Handles:
- HTML tag stripping (JSON-LD descriptions are often HTML fragments)
- Whitespace normalization for single-line fields
- Block text normalization that keeps paragraph breaks
- Skill list de-duplication
"""

from __future__ import annotations

import html
import re

# Regex for stripping HTML tags
_HTML_TAG_RE = re.compile(r"<[^>]+>")

# Block-level closing tags and <br> become line breaks before stripping
_HTML_BREAK_RE = re.compile(r"<br\s*/?>|</(?:p|div|li|h[1-6]|ul|ol|tr)>", re.IGNORECASE)

_INLINE_SPACE_RE = re.compile(r"[ \t\r\f\v\u00a0]+")
_EXCESS_NEWLINES_RE = re.compile(r"\n{3,}")


def strip_html(text: str) -> str:
    """Unescape entities, then strip HTML tags.

    Entity-escaped markup (``&lt;p&gt;``, common in JSON-LD) is stripped
    like literal markup.
    """
    text = _HTML_BREAK_RE.sub("\n", html.unescape(text))
    return _HTML_TAG_RE.sub("", text)


def normalize_whitespace(text: str) -> str:
    """Collapse multiple whitespace characters into a single space and trim."""
    return re.sub(r"\s+", " ", text).strip()


def clean_text(text: str | None) -> str | None:
    """Normalize a single-line value; empty results become ``None``."""
    if text is None:
        return None
    cleaned = normalize_whitespace(strip_html(text))
    return cleaned or None


def normalize_block_text(text: str) -> str:
    """Normalize multi-line text while keeping line structure.

    Runs of spaces and tabs collapse to one space, each line is trimmed,
    and three or more consecutive newlines collapse to a single blank line.
    """
    lines = [_INLINE_SPACE_RE.sub(" ", line).strip() for line in text.split("\n")]
    return _EXCESS_NEWLINES_RE.sub("\n\n", "\n".join(lines)).strip()


def truncate(text: str, max_length: int) -> str:
    """Cut *text* to at most *max_length* characters on a word boundary."""
    if len(text) <= max_length:
        return text
    cut = text[:max_length]
    space = cut.rfind(" ")
    if space > max_length // 2:
        cut = cut[:space]
    return cut.rstrip()


def unique(values: list[str]) -> list[str]:
    """De-duplicate *values*, keeping first-seen order and dropping blanks."""
    seen: set[str] = set()
    result: list[str] = []
    for value in values:
        value = normalize_whitespace(value)
        if value and value not in seen:
            seen.add(value)
            result.append(value)
    return result
