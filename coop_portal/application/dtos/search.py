"""DTOs for global search (no dependency on ORM).

AuthorizationContext is supplied per search; SearchResult and
CategorizedResults are rebuilt wholesale on every search and never mutated.
"""

from __future__ import annotations

from collections.abc import Iterator, Mapping
from dataclasses import dataclass, field, replace
from types import MappingProxyType
from typing import Any

from coop_portal.domain.enums import SearchCategory, UserRole


@dataclass(frozen=True)
class AuthorizationContext:
    """Caller identity and scope for one search (immutable for its duration)."""

    role: UserRole
    tenant_id: str | None = None
    cooperative_id: str | None = None
    user_id: str | None = None

    def with_cooperative(self, cooperative_id: str | None) -> AuthorizationContext:
        """Return a copy scoped to the given cooperative id."""
        return replace(self, cooperative_id=cooperative_id)


@dataclass(frozen=True)
class SearchResult:
    """Single search hit projected from one entity row (read-model)."""

    id: str
    type: str  # SearchCategory.result_type, e.g. "official_search"
    title: str
    subtitle: str
    navigate_to: str
    metadata: Mapping[str, Any] = field(default_factory=dict, hash=False)

    def __post_init__(self) -> None:
        # Freeze metadata so a result cannot change after construction.
        object.__setattr__(self, "metadata", MappingProxyType(dict(self.metadata)))


@dataclass(frozen=True)
class CategorizedResults:
    """Fixed-shape mapping of every category to its ordered hits.

    Order within a category is the store's order; categories iterate in
    SearchCategory declaration order.
    """

    cooperatives: tuple[SearchResult, ...] = ()
    applications: tuple[SearchResult, ...] = ()
    users: tuple[SearchResult, ...] = ()
    complaints: tuple[SearchResult, ...] = ()
    amendments: tuple[SearchResult, ...] = ()
    auditors: tuple[SearchResult, ...] = ()
    trainers: tuple[SearchResult, ...] = ()
    official_searches: tuple[SearchResult, ...] = ()

    @classmethod
    def empty(cls) -> CategorizedResults:
        return cls()

    @classmethod
    def from_mapping(
        cls, by_category: Mapping[SearchCategory, tuple[SearchResult, ...]]
    ) -> CategorizedResults:
        """Build from a category -> hits mapping; missing categories are empty."""
        return cls(**{c.value: tuple(by_category.get(c, ())) for c in SearchCategory})

    def get(self, category: SearchCategory) -> tuple[SearchResult, ...]:
        return getattr(self, category.value)

    def items(self) -> Iterator[tuple[SearchCategory, tuple[SearchResult, ...]]]:
        """Yield (category, hits) in display priority order."""
        for category in SearchCategory:
            yield category, self.get(category)

    @property
    def total(self) -> int:
        return sum(len(hits) for _, hits in self.items())


@dataclass(frozen=True)
class SearchOutcome:
    """Result of one federated search.

    failed_categories lists categories whose query failed and were degraded
    to empty. A search that fails as a whole raises instead.
    """

    results: CategorizedResults
    total_count: int
    failed_categories: tuple[SearchCategory, ...] = ()

    @classmethod
    def empty(cls) -> SearchOutcome:
        return cls(results=CategorizedResults.empty(), total_count=0)


@dataclass(frozen=True)
class SearchSnapshot:
    """State published by a live search session after each change."""

    query: str
    generation: int
    results: CategorizedResults
    total_count: int = 0
    loading: bool = False
    error: str | None = None
    cooperative_not_found: bool = False


@dataclass(frozen=True)
class RoleAssignment:
    """One role held by a user, optionally bound to a tenant."""

    role: UserRole
    tenant_id: str | None = None


@dataclass(frozen=True)
class UserProfile:
    """User profile used to derive the search AuthorizationContext."""

    id: str
    tenant_id: str | None
    roles: tuple[RoleAssignment, ...] = ()

    def to_authorization_context(self) -> AuthorizationContext:
        """Primary role is the first assignment; users without roles are citizens."""
        if not self.roles:
            return AuthorizationContext(
                role=UserRole.CITIZEN, tenant_id=self.tenant_id, user_id=self.id
            )
        primary = self.roles[0]
        return AuthorizationContext(
            role=primary.role,
            tenant_id=primary.tenant_id or self.tenant_id,
            user_id=self.id,
        )
