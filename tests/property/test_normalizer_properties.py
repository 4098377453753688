"""Property tests for text normalization.

Single-line cleaning yields trimmed text without tags or runs of
whitespace; block normalization keeps line structure but never leaves more
than one blank line in a row; truncation respects its limit; skill lists
come back de-duplicated.
"""

from __future__ import annotations

from hypothesis import given, settings
from hypothesis import strategies as st

from job_extractor.models.normalizer import (
    clean_text,
    normalize_block_text,
    normalize_whitespace,
    strip_html,
    truncate,
    unique,
)


# --- Strategies ---

plain_text = st.text(
    alphabet=st.characters(blacklist_categories=("Cs",), blacklist_characters="<>&"),
    max_size=200,
)
tag_names = st.sampled_from(["p", "div", "span", "b", "li", "br", "strong", "h2"])


@st.composite
def html_fragments(draw: st.DrawFn) -> str:
    parts = draw(st.lists(st.tuples(tag_names, plain_text), max_size=8))
    return "".join(f"<{tag}>{text}</{tag}>" for tag, text in parts)


@settings(max_examples=100)
@given(html=html_fragments())
def test_strip_html_removes_every_tag(html: str) -> None:
    stripped = strip_html(html)

    assert "<" not in stripped
    assert ">" not in stripped


@settings(max_examples=100)
@given(text=plain_text)
def test_normalize_whitespace_is_idempotent(text: str) -> None:
    once = normalize_whitespace(text)

    assert normalize_whitespace(once) == once
    assert once == once.strip()
    assert "  " not in once


@settings(max_examples=100)
@given(text=st.one_of(plain_text, html_fragments()))
def test_clean_text_is_none_or_single_line(text: str) -> None:
    cleaned = clean_text(text)

    if cleaned is not None:
        assert cleaned
        assert "\n" not in cleaned
        assert cleaned == cleaned.strip()


@settings(max_examples=100)
@given(text=plain_text)
def test_block_text_never_has_more_than_one_blank_line(text: str) -> None:
    normalized = normalize_block_text(text)

    assert "\n\n\n" not in normalized
    assert normalized == normalized.strip()
    assert normalize_block_text(normalized) == normalized


@settings(max_examples=100)
@given(text=plain_text, limit=st.integers(min_value=1, max_value=250))
def test_truncate_respects_limit(text: str, limit: int) -> None:
    result = truncate(text, limit)

    assert len(result) <= limit
    assert text.startswith(result)


@settings(max_examples=100)
@given(values=st.lists(st.sampled_from(["Python", " Python", "Go", "go", "", "SQL "]), max_size=20))
def test_unique_has_no_duplicates_and_no_blanks(values: list[str]) -> None:
    result = unique(values)

    assert len(result) == len(set(result))
    assert all(result)
    assert set(result) == {normalize_whitespace(v) for v in values if v.strip()}
