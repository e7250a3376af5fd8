"""Highlight splitting and query sanitization tests."""

from coop_portal.shared.utils.highlight import HighlightSegment, highlight_segments
from coop_portal.shared.utils.sanitization import (
    InputSanitizer,
    contains_pattern,
    normalize_query,
)


def test_highlight_is_case_insensitive() -> None:
    assert highlight_segments("Dairy Farmers Dairy", "dairy") == [
        HighlightSegment("Dairy", True),
        HighlightSegment(" Farmers ", False),
        HighlightSegment("Dairy", True),
    ]


def test_highlight_treats_query_literally() -> None:
    segments = highlight_segments("Cost (KES) 1.5", "(kes)")
    assert HighlightSegment("(KES)", True) in segments
    assert highlight_segments("abc", ".*") == [HighlightSegment("abc", False)]


def test_highlight_round_trips_text() -> None:
    text = "REG/2024/001 • Nairobi"
    assert "".join(s.text for s in highlight_segments(text, "2024")) == text


def test_highlight_empty_inputs() -> None:
    assert highlight_segments("", "x") == []
    assert highlight_segments("Title", "  ") == [HighlightSegment("Title", False)]
    assert highlight_segments("Title", None) == [HighlightSegment("Title", False)]


def test_contains_pattern_escapes_wildcards() -> None:
    assert contains_pattern("50%_off") == "%50\\%\\_off%"
    assert contains_pattern("a\\b") == "%a\\\\b%"


def test_normalize_query() -> None:
    assert normalize_query(None) == ""
    assert normalize_query("  Nyeri  Dairy ") == "Nyeri  Dairy"
    assert normalize_query("\tdairy\ncoop\n") == "dairy coop"
    assert normalize_query("a\x00b") == "a b"
    assert len(normalize_query("x" * 1000)) == InputSanitizer.MAX_QUERY_LENGTH
