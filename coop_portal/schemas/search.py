"""Global search API schemas (REST response and WebSocket messages)."""

from __future__ import annotations

from typing import Any, Literal

from pydantic import BaseModel, Field

from coop_portal.application.dtos.search import (
    CategorizedResults,
    SearchResult,
    SearchSnapshot,
)
from coop_portal.application.services.search_catalog import (
    category_icon,
    category_label,
    status_tone,
)
from coop_portal.domain.enums import SearchCategory, StatusTone
from coop_portal.shared.utils.highlight import highlight_segments


class HighlightSegmentResponse(BaseModel):
    """Run of title/subtitle text; matched marks occurrences of the query."""

    text: str
    matched: bool = False


class SearchResultResponse(BaseModel):
    """Single search hit with display extras."""

    id: str
    type: str = Field(..., description="cooperative | application | user | ...")
    title: str
    subtitle: str
    navigate_to: str
    metadata: dict[str, Any] = Field(default_factory=dict)
    status_tone: StatusTone = StatusTone.NEUTRAL
    title_segments: list[HighlightSegmentResponse] = Field(default_factory=list)
    subtitle_segments: list[HighlightSegmentResponse] = Field(default_factory=list)

    @classmethod
    def from_result(cls, result: SearchResult, query: str) -> SearchResultResponse:
        status = result.metadata.get("status")
        return cls(
            id=result.id,
            type=result.type,
            title=result.title,
            subtitle=result.subtitle,
            navigate_to=result.navigate_to,
            metadata=dict(result.metadata),
            status_tone=status_tone(status if isinstance(status, str) else None),
            title_segments=[
                HighlightSegmentResponse(text=s.text, matched=s.matched)
                for s in highlight_segments(result.title, query)
            ],
            subtitle_segments=[
                HighlightSegmentResponse(text=s.text, matched=s.matched)
                for s in highlight_segments(result.subtitle, query)
            ],
        )


class SearchCategoryResponse(BaseModel):
    """Non-empty category group, in display priority order."""

    category: SearchCategory
    label: str
    icon: str
    results: list[SearchResultResponse]


def category_groups(
    results: CategorizedResults, query: str
) -> list[SearchCategoryResponse]:
    """Group non-empty categories for display (fixed priority order)."""
    return [
        SearchCategoryResponse(
            category=category,
            label=category_label(category),
            icon=category_icon(category),
            results=[SearchResultResponse.from_result(r, query) for r in hits],
        )
        for category, hits in results.items()
        if hits
    ]


class GlobalSearchResponse(BaseModel):
    """Response for GET /search."""

    query: str
    total_count: int = 0
    categories: list[SearchCategoryResponse] = Field(default_factory=list)
    failed_categories: list[SearchCategory] = Field(default_factory=list)
    placeholder: str = ""
    hint: str = ""


class SearchQueryMessage(BaseModel):
    """Client -> server WebSocket message: the current contents of the search box."""

    query: str = Field("", max_length=500)


class SearchSnapshotMessage(BaseModel):
    """Server -> client WebSocket message published after every session change."""

    type: Literal["search.snapshot"] = "search.snapshot"
    query: str
    generation: int
    loading: bool = False
    total_count: int = 0
    categories: list[SearchCategoryResponse] = Field(default_factory=list)
    error: str | None = None
    cooperative_not_found: bool = False

    @classmethod
    def from_snapshot(cls, snapshot: SearchSnapshot) -> SearchSnapshotMessage:
        return cls(
            query=snapshot.query,
            generation=snapshot.generation,
            loading=snapshot.loading,
            total_count=snapshot.total_count,
            categories=category_groups(snapshot.results, snapshot.query),
            error=snapshot.error,
            cooperative_not_found=snapshot.cooperative_not_found,
        )


class SearchErrorMessage(BaseModel):
    """Server -> client WebSocket message for a malformed client message."""

    type: Literal["error"] = "error"
    message: str
