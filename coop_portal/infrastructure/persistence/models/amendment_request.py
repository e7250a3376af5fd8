"""AmendmentRequest ORM model: requested changes to a registered cooperative."""

from sqlalchemy import ForeignKey, String
from sqlalchemy.orm import Mapped, mapped_column

from coop_portal.infrastructure.persistence.database import Base
from coop_portal.infrastructure.persistence.models.mixins import (
    TimestampMixin,
    UuidMixin,
)


class AmendmentRequest(UuidMixin, TimestampMixin, Base):
    """Amendment request (name change, bylaws, ...). Table: amendment_requests."""

    __tablename__ = "amendment_requests"

    request_number: Mapped[str | None] = mapped_column(String, nullable=True)
    amendment_type: Mapped[str] = mapped_column(String, nullable=False)
    status: Mapped[str] = mapped_column(String, nullable=False, default="pending")
    cooperative_id: Mapped[str] = mapped_column(
        String,
        ForeignKey("cooperatives.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
