"""Global search use case: federated, role-scoped search across portal entities.

One query fans out to a per-category adapter for each of the eight search
categories. Adapters run concurrently; each one enforces its own role
visibility and scope filter and degrades to an empty category when its
query fails. Delegates all store access to ISearchGateway.
"""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Awaitable, Callable
from typing import TYPE_CHECKING, NamedTuple

from coop_portal.application.dtos.search import (
    AuthorizationContext,
    CategorizedResults,
    SearchOutcome,
    SearchResult,
)
from coop_portal.application.services.search_visibility import (
    can_view,
    is_tenant_scoped,
    requires_cooperative_scope,
    visible_categories,
)
from coop_portal.domain.enums import SearchCategory, UserRole
from coop_portal.domain.exceptions import (
    CooperativeNotFoundException,
    SearchFailedException,
    ValidationException,
)
from coop_portal.shared.telemetry import add_span_attributes, traced

if TYPE_CHECKING:
    from coop_portal.application.interfaces.repositories import ISearchGateway

logger = logging.getLogger(__name__)

# An adapter returns None when the caller's scope rules out every row, so no
# query is issued.
Adapter = Callable[
    [str, AuthorizationContext, int], Awaitable[list[SearchResult] | None]
]


class _Settled(NamedTuple):
    """How one category settled: its hits, whether a query ran, whether it failed."""

    hits: tuple[SearchResult, ...]
    ran: bool
    failed: bool = False


class GlobalSearchService:
    """Federated search over cooperatives, applications, users, complaints,
    amendments, auditors, trainers and official searches.

    Stateless across calls; the caller supplies the AuthorizationContext for
    every search (cooperative admins must already carry a resolved
    cooperative_id, see CooperativeScopeResolver).
    """

    def __init__(
        self,
        gateway: ISearchGateway,
        min_query_length: int = 2,
        max_per_category_limit: int = 25,
    ) -> None:
        self.gateway = gateway
        self.min_query_length = min_query_length
        self.max_per_category_limit = max_per_category_limit
        self._adapters: dict[SearchCategory, Adapter] = {
            SearchCategory.COOPERATIVES: self._search_cooperatives,
            SearchCategory.APPLICATIONS: self._search_applications,
            SearchCategory.USERS: self._search_users,
            SearchCategory.COMPLAINTS: self._search_complaints,
            SearchCategory.AMENDMENTS: self._search_amendments,
            SearchCategory.AUDITORS: self._search_auditors,
            SearchCategory.TRAINERS: self._search_trainers,
            SearchCategory.OFFICIAL_SEARCHES: self._search_official_searches,
        }

    def is_searchable(self, query: str | None) -> bool:
        """Return True if query is long enough (after trimming) to hit the store."""
        return bool(query) and len(query.strip()) >= self.min_query_length

    @traced("global_search.search")
    async def search(
        self,
        query: str,
        ctx: AuthorizationContext,
        max_per_category: int = 5,
    ) -> SearchOutcome:
        """Search every category visible to ctx.role and merge the hits.

        Args:
            query: Free text typed by the caller; trimmed before matching.
            ctx: Caller role and scope.
            max_per_category: Cap on hits per category.

        Returns:
            SearchOutcome with all eight categories (empty when hidden,
            unmatched, or failed) and the total hit count.

        Raises:
            ValidationException: max_per_category out of range.
            CooperativeNotFoundException: cooperative admin without a cooperative.
            SearchFailedException: every category query that ran failed.
        """
        if not (1 <= max_per_category <= self.max_per_category_limit):
            raise ValidationException(
                f"max_per_category must be between 1 and {self.max_per_category_limit}",
                field="max_per_category",
            )
        if self._awaits_cooperative(ctx):
            raise CooperativeNotFoundException(ctx.user_id)
        if not self.is_searchable(query):
            return SearchOutcome.empty()

        q = query.strip()
        categories = list(SearchCategory)
        settled = await asyncio.gather(
            *(self._run_adapter(c, q, ctx, max_per_category) for c in categories)
        )

        by_category: dict[SearchCategory, tuple[SearchResult, ...]] = {}
        ran: list[SearchCategory] = []
        failed: list[SearchCategory] = []
        for category, outcome in zip(categories, settled):
            if outcome.ran:
                ran.append(category)
            if outcome.failed:
                failed.append(category)
            by_category[category] = outcome.hits[:max_per_category]

        if ran and len(failed) == len(ran):
            raise SearchFailedException(
                "Search failed", failed_categories=[c.value for c in failed]
            )

        results = CategorizedResults.from_mapping(by_category)
        add_span_attributes(
            **{"search.role": ctx.role.value, "search.failed": len(failed)},
            **{f"search.count.{c.value}": len(h) for c, h in results.items()},
        )
        return SearchOutcome(
            results=results,
            total_count=results.total,
            failed_categories=tuple(failed),
        )

    async def _run_adapter(
        self,
        category: SearchCategory,
        q: str,
        ctx: AuthorizationContext,
        limit: int,
    ) -> _Settled:
        """Run one adapter; a failing query is logged and settles as failed."""
        if not can_view(ctx.role, category):
            return _Settled((), ran=False)
        try:
            hits = await self._adapters[category](q, ctx, limit)
        except Exception:
            logger.exception(
                "Global search: %s query failed (role=%s)",
                category.value,
                ctx.role.value,
            )
            return _Settled((), ran=True, failed=True)
        if hits is None:
            return _Settled((), ran=False)
        return _Settled(tuple(hits), ran=True)

    @staticmethod
    def _awaits_cooperative(ctx: AuthorizationContext) -> bool:
        """True for a cooperative admin whose cooperative-scoped categories have no cooperative."""
        return (
            ctx.role == UserRole.COOPERATIVE_ADMIN
            and not ctx.cooperative_id
            and any(
                requires_cooperative_scope(c) for c in visible_categories(ctx.role)
            )
        )

    # ---- Per-category adapters -------------------------------------------------

    async def _search_cooperatives(
        self, q: str, ctx: AuthorizationContext, limit: int
    ) -> list[SearchResult] | None:
        if is_tenant_scoped(ctx.role):
            if not ctx.tenant_id:
                return None
            return await self.gateway.search_cooperatives(
                q, limit, tenant_id=ctx.tenant_id
            )
        if ctx.role == UserRole.COOPERATIVE_ADMIN:
            return await self.gateway.search_cooperatives(
                q, limit, cooperative_id=ctx.cooperative_id
            )
        return await self.gateway.search_cooperatives(q, limit)

    async def _search_applications(
        self, q: str, ctx: AuthorizationContext, limit: int
    ) -> list[SearchResult] | None:
        if is_tenant_scoped(ctx.role):
            if not ctx.tenant_id:
                return None
            return await self.gateway.search_applications(
                q, limit, tenant_id=ctx.tenant_id
            )
        if ctx.role == UserRole.COOPERATIVE_ADMIN:
            # Applications carry no cooperative id; admins see their own submissions.
            if not ctx.user_id:
                return None
            return await self.gateway.search_applications(
                q, limit, applicant_user_id=ctx.user_id
            )
        return await self.gateway.search_applications(q, limit)

    async def _search_users(
        self, q: str, ctx: AuthorizationContext, limit: int
    ) -> list[SearchResult] | None:
        if is_tenant_scoped(ctx.role):
            if not ctx.tenant_id:
                return None
            return await self.gateway.search_users(q, limit, tenant_id=ctx.tenant_id)
        return await self.gateway.search_users(q, limit)

    async def _search_complaints(
        self, q: str, ctx: AuthorizationContext, limit: int
    ) -> list[SearchResult] | None:
        cooperative_ids = await self._cooperative_filter(ctx)
        if cooperative_ids is not None and not cooperative_ids:
            return None
        return await self.gateway.search_complaints(
            q, limit, cooperative_ids=cooperative_ids
        )

    async def _search_amendments(
        self, q: str, ctx: AuthorizationContext, limit: int
    ) -> list[SearchResult] | None:
        cooperative_ids = await self._cooperative_filter(ctx)
        if cooperative_ids is not None and not cooperative_ids:
            return None
        return await self.gateway.search_amendments(
            q, limit, cooperative_ids=cooperative_ids
        )

    async def _search_auditors(
        self, q: str, ctx: AuthorizationContext, limit: int
    ) -> list[SearchResult] | None:
        return await self.gateway.search_auditors(q, limit)

    async def _search_trainers(
        self, q: str, ctx: AuthorizationContext, limit: int
    ) -> list[SearchResult] | None:
        return await self.gateway.search_trainers(q, limit)

    async def _search_official_searches(
        self, q: str, ctx: AuthorizationContext, limit: int
    ) -> list[SearchResult] | None:
        if ctx.role == UserRole.CITIZEN:
            if not ctx.user_id:
                return None
            return await self.gateway.search_official_searches(
                q, limit, user_id=ctx.user_id
            )
        return await self.gateway.search_official_searches(q, limit)

    async def _cooperative_filter(self, ctx: AuthorizationContext) -> list[str] | None:
        """Cooperative ids a complaint/amendment must belong to; None = unfiltered.

        County roles: every cooperative of their tenant (empty when the tenant
        has none). Cooperative admins: their own cooperative.
        """
        if is_tenant_scoped(ctx.role):
            if not ctx.tenant_id:
                return []
            return await self.gateway.cooperative_ids_for_tenant(ctx.tenant_id)
        if ctx.role == UserRole.COOPERATIVE_ADMIN:
            return [ctx.cooperative_id] if ctx.cooperative_id else []
        return None
