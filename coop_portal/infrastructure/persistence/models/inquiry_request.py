"""InquiryRequest ORM model. Inquiries with a complaint_category are complaints."""

from sqlalchemy import ForeignKey, String
from sqlalchemy.orm import Mapped, mapped_column

from coop_portal.infrastructure.persistence.database import Base
from coop_portal.infrastructure.persistence.models.mixins import (
    TimestampMixin,
    UuidMixin,
)


class InquiryRequest(UuidMixin, TimestampMixin, Base):
    """Inquiry or complaint raised against a cooperative. Table: inquiry_requests."""

    __tablename__ = "inquiry_requests"

    inquiry_number: Mapped[str | None] = mapped_column(String, nullable=True)
    subject: Mapped[str] = mapped_column(String, nullable=False)
    complaint_category: Mapped[str | None] = mapped_column(String, nullable=True)
    complaint_status: Mapped[str | None] = mapped_column(String, nullable=True)
    cooperative_id: Mapped[str | None] = mapped_column(
        String,
        ForeignKey("cooperatives.id", ondelete="SET NULL"),
        nullable=True,
        index=True,
    )
