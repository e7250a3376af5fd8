"""Cooperative, CooperativeType, and CooperativeMember ORM models."""

from sqlalchemy import Boolean, ForeignKey, String, text
from sqlalchemy.orm import Mapped, mapped_column

from coop_portal.infrastructure.persistence.database import Base
from coop_portal.infrastructure.persistence.models.mixins import (
    TenantScopedModel,
    TimestampMixin,
    UuidMixin,
)


class CooperativeType(UuidMixin, TimestampMixin, Base):
    """Cooperative type (e.g. Dairy, SACCO). Table: cooperative_types."""

    __tablename__ = "cooperative_types"

    name: Mapped[str] = mapped_column(String, nullable=False)
    category: Mapped[str | None] = mapped_column(String, nullable=True)


class Cooperative(TenantScopedModel, Base):
    """Registered cooperative. Table: cooperatives. Searched by name and registration number."""

    __tablename__ = "cooperatives"

    name: Mapped[str] = mapped_column(String, nullable=False, index=True)
    registration_number: Mapped[str | None] = mapped_column(
        String, nullable=True, unique=True
    )
    type_id: Mapped[str | None] = mapped_column(
        String, ForeignKey("cooperative_types.id", ondelete="SET NULL"), nullable=True
    )
    status: Mapped[str | None] = mapped_column(String, nullable=True)
    is_active: Mapped[bool] = mapped_column(
        Boolean, nullable=False, server_default=text("true")
    )


class CooperativeMember(UuidMixin, TimestampMixin, Base):
    """Membership of a user in a cooperative. Table: cooperative_members."""

    __tablename__ = "cooperative_members"

    cooperative_id: Mapped[str] = mapped_column(
        String,
        ForeignKey("cooperatives.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    user_id: Mapped[str | None] = mapped_column(
        String, ForeignKey("users.id", ondelete="SET NULL"), nullable=True, index=True
    )
