"""Cooperative scope repository: finds the cooperative a cooperative admin manages."""

from __future__ import annotations

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from coop_portal.infrastructure.persistence.models import (
    Cooperative,
    CooperativeMember,
)


class CooperativeScopeRepository:
    """Membership lookup first, tenant fallback second (see CooperativeScopeResolver)."""

    def __init__(self, session_factory: async_sessionmaker[AsyncSession]) -> None:
        self.session_factory = session_factory

    async def get_member_cooperative_id(self, user_id: str) -> str | None:
        async with self.session_factory() as db:
            r = await db.execute(
                select(CooperativeMember.cooperative_id)
                .where(CooperativeMember.user_id == user_id)
                .limit(1)
            )
            return r.scalars().first()

    async def get_first_cooperative_id_for_tenant(self, tenant_id: str) -> str | None:
        async with self.session_factory() as db:
            r = await db.execute(
                select(Cooperative.id).where(Cooperative.tenant_id == tenant_id).limit(1)
            )
            return r.scalars().first()
