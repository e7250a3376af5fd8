"""Shared utilities: sanitization and match highlighting."""

from coop_portal.shared.utils.highlight import HighlightSegment, highlight_segments
from coop_portal.shared.utils.sanitization import (
    InputSanitizer,
    contains_pattern,
    normalize_query,
)

__all__ = [
    "HighlightSegment",
    "highlight_segments",
    "InputSanitizer",
    "contains_pattern",
    "normalize_query",
]
