"""SQLAlchemy mixins for common portal model patterns (DRY).

Provides: UuidMixin, TenantMixin, TimestampMixin and the combined
TenantScopedModel.
"""

import uuid
from datetime import datetime

from sqlalchemy import DateTime, ForeignKey, String
from sqlalchemy.orm import Mapped, declared_attr, mapped_column
from sqlalchemy.sql import func


def _new_id() -> str:
    return str(uuid.uuid4())


class UuidMixin:
    """Mixin for models keyed by a UUID string (portal tables use UUID keys)."""

    @declared_attr
    def id(cls) -> Mapped[str]:
        return mapped_column(String, primary_key=True, default=_new_id)


class TenantMixin:
    """Mixin for county-owned records. Provides tenant_id FK to tenants."""

    @declared_attr
    def tenant_id(cls) -> Mapped[str | None]:
        return mapped_column(
            String,
            ForeignKey("tenants.id", ondelete="SET NULL"),
            nullable=True,
            index=True,
        )


class TimestampMixin:
    """Mixin for created_at and updated_at (server defaults, timezone-aware)."""

    @declared_attr
    def created_at(cls) -> Mapped[datetime]:
        return mapped_column(
            DateTime(timezone=True), server_default=func.now(), nullable=False
        )

    @declared_attr
    def updated_at(cls) -> Mapped[datetime]:
        return mapped_column(
            DateTime(timezone=True),
            server_default=func.now(),
            onupdate=func.now(),
            nullable=False,
        )


class TenantScopedModel(UuidMixin, TenantMixin, TimestampMixin):
    """Combined mixin: UUID id + tenant_id + created_at/updated_at."""

    __abstract__ = True
