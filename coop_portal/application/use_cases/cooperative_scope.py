"""Cooperative scope resolution for cooperative admins.

A cooperative admin's cooperative is not part of their token or profile; it
is found by a secondary lookup (membership first, then a cooperative in the
admin's tenant). The resolver runs that lookup at most once and caches the
terminal result for its lifetime.
"""

from __future__ import annotations

import asyncio
import logging
from typing import TYPE_CHECKING

from coop_portal.application.dtos.search import AuthorizationContext
from coop_portal.domain.enums import ScopeState, UserRole

if TYPE_CHECKING:
    from coop_portal.application.interfaces.repositories import (
        ICooperativeScopeRepository,
    )

logger = logging.getLogger(__name__)


class CooperativeScopeResolver:
    """State machine: UNRESOLVED -> RESOLVING -> RESOLVED(id | None).

    RESOLVED is terminal. Concurrent callers share the single in-flight
    resolution.
    """

    def __init__(self, scope_repo: ICooperativeScopeRepository) -> None:
        self.scope_repo = scope_repo
        self._state = ScopeState.UNRESOLVED
        self._cooperative_id: str | None = None
        self._lock = asyncio.Lock()

    @property
    def state(self) -> ScopeState:
        return self._state

    @property
    def cooperative_id(self) -> str | None:
        """Resolved cooperative id (None until resolved, or when not found)."""
        return self._cooperative_id

    async def resolve(self, user_id: str | None, tenant_id: str | None) -> str | None:
        """Resolve (once) and return the cooperative id, or None if there is none.

        Args:
            user_id: The cooperative admin's user id; without it nothing can
                be looked up and the scope resolves to None.
            tenant_id: Tenant of the admin's primary role (or profile), used
                when the admin has no membership record.
        """
        async with self._lock:
            if self._state == ScopeState.RESOLVED:
                return self._cooperative_id
            self._state = ScopeState.RESOLVING
            try:
                self._cooperative_id = await self._lookup(user_id, tenant_id)
            except asyncio.CancelledError:
                self._state = ScopeState.UNRESOLVED
                raise
            except Exception:
                logger.exception(
                    "Cooperative scope lookup failed for user %s", user_id
                )
                self._cooperative_id = None
            self._state = ScopeState.RESOLVED
            if self._cooperative_id is None:
                logger.warning("No cooperative found for cooperative admin %s", user_id)
            return self._cooperative_id

    async def _lookup(self, user_id: str | None, tenant_id: str | None) -> str | None:
        if not user_id:
            return None
        cooperative_id = await self.scope_repo.get_member_cooperative_id(user_id)
        if cooperative_id:
            return cooperative_id
        if tenant_id:
            return await self.scope_repo.get_first_cooperative_id_for_tenant(tenant_id)
        return None

    async def apply(self, ctx: AuthorizationContext) -> AuthorizationContext:
        """Return ctx with cooperative_id set from this resolver.

        Non cooperative-admin roles never trigger a lookup and are searched
        without a cooperative scope.
        """
        if ctx.role != UserRole.COOPERATIVE_ADMIN:
            return ctx.with_cooperative(None)
        cooperative_id = await self.resolve(ctx.user_id, ctx.tenant_id)
        return ctx.with_cooperative(cooperative_id)
