"""Match highlighting for search hits (display only; no effect on ranking)."""

import re
from dataclasses import dataclass


@dataclass(frozen=True)
class HighlightSegment:
    """A run of text; matched is True when it equals the query (case-insensitive)."""

    text: str
    matched: bool = False


def highlight_segments(text: str, query: str | None) -> list[HighlightSegment]:
    """Split text around case-insensitive occurrences of query.

    The query is matched literally (regex metacharacters are escaped).
    Joining the segment texts always gives back the original text.

    Args:
        text: Title or subtitle of a search hit.
        query: Search text as typed (surrounding whitespace ignored).

    Returns:
        Segments in order; a single unmatched segment when query is empty
        or absent from text. Empty list for empty text.
    """
    if not text:
        return []
    needle = (query or "").strip()
    if not needle:
        return [HighlightSegment(text)]
    parts = re.split(f"({re.escape(needle)})", text, flags=re.IGNORECASE)
    lowered = needle.lower()
    return [
        HighlightSegment(part, matched=part.lower() == lowered)
        for part in parts
        if part
    ]
