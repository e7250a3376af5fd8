"""Presentation-layer dependency injection (composition root).

Provides FastAPI Depends() for repositories and application use cases.
All use cases are built from infrastructure implementations here;
routes depend only on these dependencies, not on infra directly.
"""

from __future__ import annotations

from typing import Annotated

from fastapi import Depends
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from coop_portal.application.dtos.search import AuthorizationContext
from coop_portal.application.interfaces.repositories import (
    ICooperativeScopeRepository,
    ISearchGateway,
    IUserProfileRepository,
)
from coop_portal.application.use_cases.cooperative_scope import (
    CooperativeScopeResolver,
)
from coop_portal.application.use_cases.search import GlobalSearchService
from coop_portal.core.config import get_settings
from coop_portal.domain.enums import UserRole
from coop_portal.domain.exceptions import AuthenticationException
from coop_portal.infrastructure.persistence import database
from coop_portal.infrastructure.persistence.repositories import (
    CooperativeScopeRepository,
    SearchRepository,
    UserProfileRepository,
)
from coop_portal.infrastructure.security.jwt import user_id_from_token

_http_bearer = HTTPBearer(auto_error=False)


def get_session_factory() -> async_sessionmaker[AsyncSession]:
    """Session factory; repositories open one session per query."""
    return database.get_session_factory()


def get_search_gateway(
    session_factory: Annotated[
        async_sessionmaker[AsyncSession], Depends(get_session_factory)
    ],
) -> ISearchGateway:
    """Search gateway over the portal database (read-only)."""
    return SearchRepository(session_factory)


def get_scope_repo(
    session_factory: Annotated[
        async_sessionmaker[AsyncSession], Depends(get_session_factory)
    ],
) -> ICooperativeScopeRepository:
    return CooperativeScopeRepository(session_factory)


def get_profile_repo(
    session_factory: Annotated[
        async_sessionmaker[AsyncSession], Depends(get_session_factory)
    ],
) -> IUserProfileRepository:
    return UserProfileRepository(session_factory)


def get_global_search_service(
    gateway: Annotated[ISearchGateway, Depends(get_search_gateway)],
) -> GlobalSearchService:
    """Global search use case configured from settings."""
    settings = get_settings()
    return GlobalSearchService(
        gateway,
        min_query_length=settings.search_min_query_length,
        max_per_category_limit=settings.search_max_per_category_limit,
    )


async def build_authorization_context(
    user_id: str, profile_repo: IUserProfileRepository
) -> AuthorizationContext:
    """Derive the caller's AuthorizationContext from their profile.

    A user without a profile row searches as a citizen.
    """
    profile = await profile_repo.get_profile(user_id)
    if profile is None:
        return AuthorizationContext(role=UserRole.CITIZEN, user_id=user_id)
    return profile.to_authorization_context()


async def get_current_user_id(
    credentials: Annotated[
        HTTPAuthorizationCredentials | None, Depends(_http_bearer)
    ],
) -> str:
    """Return the user id (claim sub) from the bearer token; raise 401 otherwise."""
    if credentials is None:
        raise AuthenticationException("Not authenticated")
    try:
        return user_id_from_token(credentials.credentials)
    except ValueError as e:
        raise AuthenticationException(str(e)) from e


async def get_authorization_context(
    user_id: Annotated[str, Depends(get_current_user_id)],
    profile_repo: Annotated[IUserProfileRepository, Depends(get_profile_repo)],
    scope_repo: Annotated[ICooperativeScopeRepository, Depends(get_scope_repo)],
) -> AuthorizationContext:
    """Caller context for one request; cooperative admins get their cooperative resolved."""
    ctx = await build_authorization_context(user_id, profile_repo)
    if ctx.role != UserRole.COOPERATIVE_ADMIN:
        return ctx
    return await CooperativeScopeResolver(scope_repo).apply(ctx)
