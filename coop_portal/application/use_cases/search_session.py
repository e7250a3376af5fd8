"""Live global search session: debounced, superseding searches for one caller.

Every keystroke calls update_query(). A search runs only after the query has
been quiet for the debounce interval; a newer keystroke cancels the pending
search (and the in-flight one, if it already started). Each keystroke bumps
a generation counter and only a result whose generation is still current is
published, so a slow stale response can never overwrite a newer one.
"""

from __future__ import annotations

import asyncio
import inspect
import logging
from collections.abc import Awaitable, Callable
from dataclasses import replace
from typing import TYPE_CHECKING

from coop_portal.application.dtos.search import (
    AuthorizationContext,
    CategorizedResults,
    SearchSnapshot,
)
from coop_portal.domain.enums import UserRole
from coop_portal.domain.exceptions import (
    CoopPortalException,
    CooperativeNotFoundException,
)

if TYPE_CHECKING:
    from coop_portal.application.use_cases.cooperative_scope import (
        CooperativeScopeResolver,
    )
    from coop_portal.application.use_cases.search import GlobalSearchService

logger = logging.getLogger(__name__)

SnapshotListener = Callable[[SearchSnapshot], Awaitable[None] | None]


class SearchSession:
    """Debounced search state for a single caller (e.g. one WebSocket).

    Not thread-safe; use from one event loop. Call start() once, then
    update_query() per keystroke, and close() when done.
    """

    def __init__(
        self,
        service: GlobalSearchService,
        ctx: AuthorizationContext,
        *,
        scope_resolver: CooperativeScopeResolver | None = None,
        debounce_seconds: float = 0.5,
        max_per_category: int = 5,
        on_snapshot: SnapshotListener | None = None,
    ) -> None:
        self.service = service
        self.ctx = ctx
        self.scope_resolver = scope_resolver
        self.debounce_seconds = debounce_seconds
        self.max_per_category = max_per_category
        self.on_snapshot = on_snapshot
        self._generation = 0
        self._pending: asyncio.Task[None] | None = None
        self._scope_task: asyncio.Task[AuthorizationContext] | None = None
        self._snapshot = SearchSnapshot(
            query="", generation=0, results=CategorizedResults.empty()
        )
        self._closed = False

    @property
    def snapshot(self) -> SearchSnapshot:
        """Last published snapshot (replaced whole, never mutated)."""
        return self._snapshot

    @property
    def generation(self) -> int:
        return self._generation

    @property
    def cooperative_scope_pending(self) -> bool:
        return self._scope_task is not None and not self._scope_task.done()

    async def start(self) -> None:
        """Begin cooperative scope resolution for cooperative admins.

        Resolution runs in the background; searches wait for it. When it
        ends without a cooperative, a cooperative_not_found snapshot is
        published straight away.
        """
        if (
            self.scope_resolver is None
            or self.ctx.role != UserRole.COOPERATIVE_ADMIN
            or self._scope_task is not None
        ):
            return
        self._scope_task = asyncio.create_task(self._resolve_scope())

    async def _resolve_scope(self) -> AuthorizationContext:
        ctx = await self.scope_resolver.apply(self.ctx)
        if ctx.cooperative_id is None:
            await self._publish(
                replace(
                    self._snapshot,
                    loading=False,
                    cooperative_not_found=True,
                    results=CategorizedResults.empty(),
                    total_count=0,
                )
            )
        return ctx

    def update_query(self, query: str) -> int:
        """Record a keystroke and (re)schedule the debounced search.

        Returns:
            The generation assigned to this query.
        """
        if self._closed:
            raise RuntimeError("Search session is closed")
        self._generation += 1
        generation = self._generation
        if self._pending is not None and not self._pending.done():
            self._pending.cancel()
        self._pending = asyncio.create_task(self._debounced(query, generation))
        return generation

    async def _debounced(self, query: str, generation: int) -> None:
        if self.debounce_seconds > 0:
            await asyncio.sleep(self.debounce_seconds)
        await self.run(query, generation)

    async def run(self, query: str, generation: int) -> None:
        """Execute one search for generation and publish it if still current."""
        ctx = self.ctx
        if self._scope_task is not None:
            if self.cooperative_scope_pending:
                logger.debug("Search generation %d waits for cooperative scope", generation)
            # Shielded: a superseding keystroke must not abort the shared lookup.
            ctx = await asyncio.shield(self._scope_task)
            if not self._is_current(generation):
                return
            if ctx.cooperative_id is None:
                await self._publish(self._not_found_snapshot(query, generation))
                return

        if not self._is_current(generation):
            return
        if not self.service.is_searchable(query):
            await self._publish(
                SearchSnapshot(
                    query=query, generation=generation, results=CategorizedResults.empty()
                )
            )
            return

        await self._publish(
            replace(self._snapshot, query=query, generation=generation, loading=True, error=None)
        )
        try:
            outcome = await self.service.search(query, ctx, self.max_per_category)
        except CooperativeNotFoundException:
            snapshot = self._not_found_snapshot(query, generation)
        except CoopPortalException as e:
            logger.warning("Global search failed: %s", e.message)
            snapshot = self._error_snapshot(query, generation, e.message)
        except Exception as e:
            logger.exception("Global search error")
            snapshot = self._error_snapshot(query, generation, str(e) or "Search failed")
        else:
            snapshot = SearchSnapshot(
                query=query,
                generation=generation,
                results=outcome.results,
                total_count=outcome.total_count,
            )
        if not self._is_current(generation):
            logger.debug("Discarding stale search result (generation %d)", generation)
            return
        await self._publish(snapshot)

    def _is_current(self, generation: int) -> bool:
        return not self._closed and generation == self._generation

    @staticmethod
    def _not_found_snapshot(query: str, generation: int) -> SearchSnapshot:
        return SearchSnapshot(
            query=query,
            generation=generation,
            results=CategorizedResults.empty(),
            cooperative_not_found=True,
        )

    @staticmethod
    def _error_snapshot(query: str, generation: int, message: str) -> SearchSnapshot:
        return SearchSnapshot(
            query=query,
            generation=generation,
            results=CategorizedResults.empty(),
            error=message,
        )

    async def _publish(self, snapshot: SearchSnapshot) -> None:
        if self._closed:
            return
        self._snapshot = snapshot
        if self.on_snapshot is None:
            return
        try:
            result = self.on_snapshot(snapshot)
            if inspect.isawaitable(result):
                await result
        except asyncio.CancelledError:
            raise
        except Exception:
            logger.exception("Search snapshot listener failed")

    async def wait_idle(self) -> None:
        """Wait until no debounced or in-flight search remains."""
        while self._pending is not None and not self._pending.done():
            pending = self._pending
            try:
                await asyncio.shield(pending)
            except asyncio.CancelledError:
                if not pending.cancelled():
                    raise
        if self._scope_task is not None and not self._scope_task.done():
            await asyncio.shield(self._scope_task)

    async def close(self) -> None:
        """Cancel pending work; no snapshot is published afterwards."""
        self._closed = True
        tasks = [t for t in (self._pending, self._scope_task) if t is not None]
        for task in tasks:
            task.cancel()
        for task in tasks:
            try:
                await task
            except asyncio.CancelledError:
                pass
            except Exception:
                logger.exception("Search session task failed during close")
