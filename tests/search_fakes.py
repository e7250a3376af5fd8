"""Shared builders for search tests (hits and gateway method names)."""

from coop_portal.application.dtos.search import SearchResult

# Gateway method -> result type of the hit it returns in the default mock.
GATEWAY_METHODS: dict[str, str] = {
    "search_cooperatives": "cooperative",
    "search_applications": "application",
    "search_users": "user",
    "search_complaints": "complaint",
    "search_amendments": "amendment",
    "search_auditors": "auditor",
    "search_trainers": "trainer",
    "search_official_searches": "official_search",
}


def make_result(result_type: str, n: int = 1, title: str | None = None) -> SearchResult:
    """Build a SearchResult of result_type with predictable id and title."""
    return SearchResult(
        id=f"{result_type}-{n}",
        type=result_type,
        title=title or f"{result_type.title()} {n}",
        subtitle=f"{result_type.upper()}-{n:03d} • N/A",
        navigate_to=f"/{result_type}s/{result_type}-{n}",
        metadata={"status": "ACTIVE"},
    )
