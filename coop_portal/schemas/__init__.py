"""Pydantic request/response schemas for the API."""

from coop_portal.schemas.health import (
    HealthResponse,
    ReadinessErrorResponse,
    ReadinessResponse,
)
from coop_portal.schemas.search import (
    GlobalSearchResponse,
    SearchCategoryResponse,
    SearchErrorMessage,
    SearchQueryMessage,
    SearchResultResponse,
    SearchSnapshotMessage,
)

__all__ = [
    "GlobalSearchResponse",
    "HealthResponse",
    "ReadinessErrorResponse",
    "ReadinessResponse",
    "SearchCategoryResponse",
    "SearchErrorMessage",
    "SearchQueryMessage",
    "SearchResultResponse",
    "SearchSnapshotMessage",
]
