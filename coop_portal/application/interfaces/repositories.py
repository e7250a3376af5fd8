"""Repository interfaces (ports) for the application layer.

Protocols define contracts that infrastructure implementations must fulfill (DIP).
All types reference application DTOs only; no infrastructure imports.
"""

from __future__ import annotations

from collections.abc import Sequence
from typing import TYPE_CHECKING, Protocol

if TYPE_CHECKING:
    from coop_portal.application.dtos.search import SearchResult, UserProfile


class ISearchGateway(Protocol):
    """Protocol for the per-entity search queries behind global search (DIP).

    Each method matches q as a case-insensitive substring over the entity's
    match fields, applies the given scope filters (None = unfiltered), and
    returns at most limit hits in store order.
    """

    async def search_cooperatives(
        self,
        q: str,
        limit: int,
        tenant_id: str | None = None,
        cooperative_id: str | None = None,
    ) -> list[SearchResult]:
        """Match name or registration number."""

    async def search_applications(
        self,
        q: str,
        limit: int,
        tenant_id: str | None = None,
        applicant_user_id: str | None = None,
    ) -> list[SearchResult]:
        """Match proposed name or application number."""

    async def search_users(
        self, q: str, limit: int, tenant_id: str | None = None
    ) -> list[SearchResult]:
        """Match full name, email, phone, or ID number."""

    async def search_complaints(
        self, q: str, limit: int, cooperative_ids: Sequence[str] | None = None
    ) -> list[SearchResult]:
        """Match complaint number or subject (inquiries with a complaint category)."""

    async def search_amendments(
        self, q: str, limit: int, cooperative_ids: Sequence[str] | None = None
    ) -> list[SearchResult]:
        """Match amendment request number."""

    async def search_auditors(self, q: str, limit: int) -> list[SearchResult]:
        """Match full name or certification body (active auditors only)."""

    async def search_trainers(self, q: str, limit: int) -> list[SearchResult]:
        """Match full name or institution (active trainers only)."""

    async def search_official_searches(
        self, q: str, limit: int, user_id: str | None = None
    ) -> list[SearchResult]:
        """Match search number or requester name."""

    async def cooperative_ids_for_tenant(self, tenant_id: str) -> list[str]:
        """Return ids of all cooperatives registered in the tenant."""


class ICooperativeScopeRepository(Protocol):
    """Protocol for resolving a cooperative admin's cooperative (DIP)."""

    async def get_member_cooperative_id(self, user_id: str) -> str | None:
        """Return the cooperative id of the user's first membership record."""

    async def get_first_cooperative_id_for_tenant(self, tenant_id: str) -> str | None:
        """Return the id of a cooperative registered under the tenant."""


class IUserProfileRepository(Protocol):
    """Protocol for loading the caller's profile and role assignments (DIP)."""

    async def get_profile(self, user_id: str) -> UserProfile | None:
        """Return the user with role assignments in assignment order, or None."""
