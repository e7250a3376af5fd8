"""User profile repository: loads a user and their role assignments as a DTO."""

from __future__ import annotations

import logging

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from coop_portal.application.dtos.search import RoleAssignment, UserProfile
from coop_portal.domain.enums import UserRole
from coop_portal.infrastructure.persistence.models import User, UserRoleAssignment

logger = logging.getLogger(__name__)


class UserProfileRepository:
    """Read-only profile lookup used to build the caller's AuthorizationContext."""

    def __init__(self, session_factory: async_sessionmaker[AsyncSession]) -> None:
        self.session_factory = session_factory

    async def get_profile(self, user_id: str) -> UserProfile | None:
        """Return the user with roles in assignment order, or None if unknown.

        Role values outside UserRole are skipped (logged).
        """
        async with self.session_factory() as db:
            r = await db.execute(select(User.id, User.tenant_id).where(User.id == user_id))
            row = r.mappings().first()
            if row is None:
                return None
            r = await db.execute(
                select(UserRoleAssignment.role, UserRoleAssignment.tenant_id)
                .where(UserRoleAssignment.user_id == user_id)
                .order_by(UserRoleAssignment.created_at)
            )
            role_rows = r.mappings().all()

        roles: list[RoleAssignment] = []
        for rr in role_rows:
            try:
                role = UserRole(rr["role"])
            except ValueError:
                logger.warning("Ignoring unknown role %r for user %s", rr["role"], user_id)
                continue
            roles.append(RoleAssignment(role=role, tenant_id=rr["tenant_id"]))
        return UserProfile(id=row["id"], tenant_id=row["tenant_id"], roles=tuple(roles))
