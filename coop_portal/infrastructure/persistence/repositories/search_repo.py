"""Global search repository. Case-insensitive substring (ILIKE) match per entity.

Implements ISearchGateway. Global search runs every entity query
concurrently, so each query opens its own session from the factory; an
AsyncSession must not be shared between concurrent operations.
"""

from __future__ import annotations

from collections.abc import Sequence
from typing import Any

from sqlalchemy import ColumnElement, Select, or_, select
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from coop_portal.application.dtos.search import SearchResult
from coop_portal.domain.enums import SearchCategory
from coop_portal.infrastructure.persistence.models import (
    AmendmentRequest,
    AuditorProfile,
    Cooperative,
    CooperativeType,
    InquiryRequest,
    RegistrationApplication,
    SearchRequest,
    Tenant,
    TrainerProfile,
    User,
    UserRoleAssignment,
)
from coop_portal.shared.utils.sanitization import InputSanitizer, contains_pattern

NOT_AVAILABLE = "N/A"


def _ilike_any(q: str, *columns: Any) -> ColumnElement[bool]:
    """OR of column ILIKE '%q%' with wildcards in q escaped."""
    pattern = contains_pattern(q)
    return or_(
        *(col.ilike(pattern, escape=InputSanitizer.LIKE_ESCAPE) for col in columns)
    )


def _join(*parts: Any) -> str:
    return " • ".join(str(p) if p else NOT_AVAILABLE for p in parts)


class SearchRepository:
    """Per-entity search queries for global search. Store order, no ranking."""

    def __init__(self, session_factory: async_sessionmaker[AsyncSession]) -> None:
        self.session_factory = session_factory

    async def _fetch(self, stmt: Select) -> Sequence[Any]:
        async with self.session_factory() as db:
            r = await db.execute(stmt)
            return r.mappings().all()

    async def search_cooperatives(
        self,
        q: str,
        limit: int,
        tenant_id: str | None = None,
        cooperative_id: str | None = None,
    ) -> list[SearchResult]:
        """Match name or registration number; joins type and county names."""
        stmt = (
            select(
                Cooperative.id,
                Cooperative.name,
                Cooperative.registration_number,
                Cooperative.status,
                CooperativeType.name.label("type_name"),
                Tenant.name.label("county"),
            )
            .outerjoin(CooperativeType, CooperativeType.id == Cooperative.type_id)
            .outerjoin(Tenant, Tenant.id == Cooperative.tenant_id)
            .where(_ilike_any(q, Cooperative.name, Cooperative.registration_number))
        )
        if tenant_id is not None:
            stmt = stmt.where(Cooperative.tenant_id == tenant_id)
        if cooperative_id is not None:
            stmt = stmt.where(Cooperative.id == cooperative_id)
        rows = await self._fetch(stmt.limit(limit))
        return [
            SearchResult(
                id=row["id"],
                type=SearchCategory.COOPERATIVES.result_type,
                title=row["name"],
                subtitle=_join(row["registration_number"], row["county"]),
                navigate_to=f"/cooperatives/{row['id']}",
                metadata={
                    "status": row["status"],
                    "type": row["type_name"],
                    "county": row["county"],
                },
            )
            for row in rows
        ]

    async def search_applications(
        self,
        q: str,
        limit: int,
        tenant_id: str | None = None,
        applicant_user_id: str | None = None,
    ) -> list[SearchResult]:
        """Match proposed name or application number."""
        stmt = (
            select(
                RegistrationApplication.id,
                RegistrationApplication.application_number,
                RegistrationApplication.proposed_name,
                RegistrationApplication.status,
                RegistrationApplication.submitted_at,
                Tenant.name.label("county"),
            )
            .outerjoin(Tenant, Tenant.id == RegistrationApplication.tenant_id)
            .where(
                _ilike_any(
                    q,
                    RegistrationApplication.proposed_name,
                    RegistrationApplication.application_number,
                )
            )
        )
        if tenant_id is not None:
            stmt = stmt.where(RegistrationApplication.tenant_id == tenant_id)
        if applicant_user_id is not None:
            stmt = stmt.where(
                RegistrationApplication.applicant_user_id == applicant_user_id
            )
        rows = await self._fetch(stmt.limit(limit))
        return [
            SearchResult(
                id=row["id"],
                type=SearchCategory.APPLICATIONS.result_type,
                title=row["proposed_name"],
                subtitle=_join(row["application_number"], row["status"]),
                navigate_to=f"/applications/{row['id']}",
                metadata={
                    "status": row["status"],
                    "submitted_at": (
                        row["submitted_at"].isoformat()
                        if row["submitted_at"]
                        else None
                    ),
                    "county": row["county"],
                },
            )
            for row in rows
        ]

    async def search_users(
        self, q: str, limit: int, tenant_id: str | None = None
    ) -> list[SearchResult]:
        """Match full name, email, phone, or ID number. Role is the earliest assignment."""
        primary_role = (
            select(UserRoleAssignment.role)
            .where(UserRoleAssignment.user_id == User.id)
            .order_by(UserRoleAssignment.created_at)
            .limit(1)
            .correlate(User)
            .scalar_subquery()
        )
        stmt = (
            select(
                User.id,
                User.full_name,
                User.email,
                User.phone,
                primary_role.label("role"),
                Tenant.name.label("county"),
            )
            .outerjoin(Tenant, Tenant.id == User.tenant_id)
            .where(
                _ilike_any(q, User.full_name, User.email, User.phone, User.id_number)
            )
        )
        if tenant_id is not None:
            stmt = stmt.where(User.tenant_id == tenant_id)
        rows = await self._fetch(stmt.limit(limit))
        return [
            SearchResult(
                id=row["id"],
                type=SearchCategory.USERS.result_type,
                title=row["full_name"],
                subtitle=_join(row["email"], row["role"]),
                navigate_to=f"/users/{row['id']}",
                metadata={
                    "email": row["email"],
                    "phone": row["phone"],
                    "role": row["role"],
                    "county": row["county"],
                },
            )
            for row in rows
        ]

    async def search_complaints(
        self, q: str, limit: int, cooperative_ids: Sequence[str] | None = None
    ) -> list[SearchResult]:
        """Match complaint number or subject over inquiries with a complaint category."""
        stmt = (
            select(
                InquiryRequest.id,
                InquiryRequest.inquiry_number,
                InquiryRequest.subject,
                InquiryRequest.complaint_category,
                InquiryRequest.complaint_status,
                Cooperative.name.label("cooperative_name"),
            )
            .outerjoin(Cooperative, Cooperative.id == InquiryRequest.cooperative_id)
            .where(
                InquiryRequest.complaint_category.is_not(None),
                _ilike_any(q, InquiryRequest.inquiry_number, InquiryRequest.subject),
            )
        )
        if cooperative_ids is not None:
            stmt = stmt.where(InquiryRequest.cooperative_id.in_(list(cooperative_ids)))
        rows = await self._fetch(stmt.limit(limit))
        return [
            SearchResult(
                id=row["id"],
                type=SearchCategory.COMPLAINTS.result_type,
                title=row["subject"],
                subtitle=_join(row["inquiry_number"], row["complaint_status"]),
                navigate_to=f"/complaints/{row['id']}",
                metadata={
                    "complaint_number": row["inquiry_number"],
                    "category": row["complaint_category"],
                    "status": row["complaint_status"],
                    "cooperative": row["cooperative_name"],
                },
            )
            for row in rows
        ]

    async def search_amendments(
        self, q: str, limit: int, cooperative_ids: Sequence[str] | None = None
    ) -> list[SearchResult]:
        """Match amendment request number."""
        stmt = (
            select(
                AmendmentRequest.id,
                AmendmentRequest.request_number,
                AmendmentRequest.amendment_type,
                AmendmentRequest.status,
                Cooperative.name.label("cooperative_name"),
            )
            .outerjoin(Cooperative, Cooperative.id == AmendmentRequest.cooperative_id)
            .where(_ilike_any(q, AmendmentRequest.request_number))
        )
        if cooperative_ids is not None:
            stmt = stmt.where(
                AmendmentRequest.cooperative_id.in_(list(cooperative_ids))
            )
        rows = await self._fetch(stmt.limit(limit))
        return [
            SearchResult(
                id=row["id"],
                type=SearchCategory.AMENDMENTS.result_type,
                title="{} - {}".format(
                    (row["amendment_type"] or "").replace("_", " ", 1),
                    row["cooperative_name"] or NOT_AVAILABLE,
                ),
                subtitle=_join(row["request_number"], row["status"]),
                navigate_to=f"/amendments/{row['id']}",
                metadata={
                    "amendment_number": row["request_number"],
                    "amendment_type": row["amendment_type"],
                    "status": row["status"],
                    "cooperative": row["cooperative_name"],
                },
            )
            for row in rows
        ]

    async def search_auditors(self, q: str, limit: int) -> list[SearchResult]:
        """Match full name or certification body (active auditors only)."""
        stmt = (
            select(
                AuditorProfile.id,
                AuditorProfile.user_id,
                AuditorProfile.full_name,
                AuditorProfile.qualification,
                AuditorProfile.certification_body,
                AuditorProfile.specializations,
            )
            .where(
                AuditorProfile.is_active.is_(True),
                _ilike_any(
                    q, AuditorProfile.full_name, AuditorProfile.certification_body
                ),
            )
            .limit(limit)
        )
        rows = await self._fetch(stmt)
        return [
            SearchResult(
                id=row["id"],
                type=SearchCategory.AUDITORS.result_type,
                title=row["full_name"],
                subtitle=_join(row["qualification"], row["certification_body"]),
                navigate_to=f"/auditors/{row['user_id']}",
                metadata={
                    "qualification": row["qualification"],
                    "certification_body": row["certification_body"],
                    "specializations": list(row["specializations"] or []),
                },
            )
            for row in rows
        ]

    async def search_trainers(self, q: str, limit: int) -> list[SearchResult]:
        """Match full name or institution (active trainers only)."""
        stmt = (
            select(
                TrainerProfile.id,
                TrainerProfile.user_id,
                TrainerProfile.full_name,
                TrainerProfile.education_level,
                TrainerProfile.institution,
                TrainerProfile.specializations,
            )
            .where(
                TrainerProfile.is_active.is_(True),
                _ilike_any(q, TrainerProfile.full_name, TrainerProfile.institution),
            )
            .limit(limit)
        )
        rows = await self._fetch(stmt)
        return [
            SearchResult(
                id=row["id"],
                type=SearchCategory.TRAINERS.result_type,
                title=row["full_name"],
                subtitle=_join(row["education_level"], row["institution"]),
                navigate_to=f"/trainers/{row['user_id']}",
                metadata={
                    "education_level": row["education_level"],
                    "institution": row["institution"],
                    "specializations": list(row["specializations"] or []),
                },
            )
            for row in rows
        ]

    async def search_official_searches(
        self, q: str, limit: int, user_id: str | None = None
    ) -> list[SearchResult]:
        """Match search number or requester name."""
        stmt = (
            select(
                SearchRequest.id,
                SearchRequest.search_number,
                SearchRequest.requester_name,
                SearchRequest.payment_status,
                SearchRequest.created_at,
                Cooperative.name.label("cooperative_name"),
            )
            .outerjoin(Cooperative, Cooperative.id == SearchRequest.cooperative_id)
            .where(
                _ilike_any(q, SearchRequest.search_number, SearchRequest.requester_name)
            )
        )
        if user_id is not None:
            stmt = stmt.where(SearchRequest.user_id == user_id)
        rows = await self._fetch(stmt.limit(limit))
        return [
            SearchResult(
                id=row["id"],
                type=SearchCategory.OFFICIAL_SEARCHES.result_type,
                title=f"Search: {row['cooperative_name'] or NOT_AVAILABLE}",
                subtitle="{} • {}".format(
                    row["search_number"] or NOT_AVAILABLE,
                    row["requester_name"] or "Anonymous",
                ),
                navigate_to=f"/official-searches/{row['id']}",
                metadata={
                    "search_number": row["search_number"],
                    "requester_name": row["requester_name"],
                    "payment_status": row["payment_status"],
                    "cooperative": row["cooperative_name"],
                    "created_at": (
                        row["created_at"].isoformat() if row["created_at"] else None
                    ),
                },
            )
            for row in rows
        ]

    async def cooperative_ids_for_tenant(self, tenant_id: str) -> list[str]:
        """Return ids of all cooperatives registered in the tenant."""
        async with self.session_factory() as db:
            r = await db.execute(
                select(Cooperative.id).where(Cooperative.tenant_id == tenant_id)
            )
            return list(r.scalars().all())

