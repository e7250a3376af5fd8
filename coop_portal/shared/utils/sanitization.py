"""Input sanitization for free-text search queries and LIKE patterns."""

import re
from typing import ClassVar


class InputSanitizer:
    """
    Normalize user-typed search text before it reaches the store.

    Use parameterized queries as the primary defense; these helpers make
    the text literal inside LIKE patterns and strip characters that only
    cause trouble in logs and patterns.
    """

    MAX_QUERY_LENGTH: ClassVar[int] = 200
    CONTROL_CHARS: ClassVar[re.Pattern[str]] = re.compile(r"[\x00-\x1f\x7f]")
    LIKE_ESCAPE: ClassVar[str] = "\\"

    @classmethod
    def normalize_query(cls, value: str | None) -> str:
        """Replace control characters with spaces, trim and truncate.

        Inner whitespace is kept as typed so the query matches stored
        text literally.

        Args:
            value: Raw text typed by the user (may be None).

        Returns:
            Normalized query (possibly empty).
        """
        if not value:
            return ""
        cleaned = cls.CONTROL_CHARS.sub(" ", value).strip()
        return cleaned[: cls.MAX_QUERY_LENGTH]

    @classmethod
    def escape_like(cls, value: str) -> str:
        """Escape LIKE/ILIKE wildcards (%, _) and the escape char so value is literal."""
        esc = cls.LIKE_ESCAPE
        return (
            value.replace(esc, esc + esc)
            .replace("%", esc + "%")
            .replace("_", esc + "_")
        )


def contains_pattern(value: str) -> str:
    """Return an ILIKE pattern matching value as a literal substring ('%value%')."""
    return f"%{InputSanitizer.escape_like(value)}%"


def normalize_query(value: str | None) -> str:
    """Normalize a search query; see InputSanitizer.normalize_query."""
    return InputSanitizer.normalize_query(value)
