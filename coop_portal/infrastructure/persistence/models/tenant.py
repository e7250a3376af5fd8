"""Tenant ORM model. A tenant is a county; root of the county hierarchy."""

from sqlalchemy import String
from sqlalchemy.orm import Mapped, mapped_column

from coop_portal.infrastructure.persistence.database import Base
from coop_portal.infrastructure.persistence.models.mixins import (
    TimestampMixin,
    UuidMixin,
)


class Tenant(UuidMixin, TimestampMixin, Base):
    """County tenant. Table: tenants."""

    __tablename__ = "tenants"

    name: Mapped[str] = mapped_column(String, nullable=False)
    code: Mapped[str | None] = mapped_column(String, unique=True, nullable=True)
