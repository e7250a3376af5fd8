"""Application DTOs (no ORM dependency)."""

from coop_portal.application.dtos.search import (
    AuthorizationContext,
    CategorizedResults,
    RoleAssignment,
    SearchOutcome,
    SearchResult,
    SearchSnapshot,
    UserProfile,
)

__all__ = [
    "AuthorizationContext",
    "CategorizedResults",
    "RoleAssignment",
    "SearchOutcome",
    "SearchResult",
    "SearchSnapshot",
    "UserProfile",
]
