"""SearchRequest ORM model: paid official searches against the cooperative register."""

from sqlalchemy import ForeignKey, String
from sqlalchemy.orm import Mapped, mapped_column

from coop_portal.infrastructure.persistence.database import Base
from coop_portal.infrastructure.persistence.models.mixins import (
    TimestampMixin,
    UuidMixin,
)


class SearchRequest(UuidMixin, TimestampMixin, Base):
    """Official search request. Table: search_requests.

    user_id is the requesting account; anonymous requests leave it null.
    """

    __tablename__ = "search_requests"

    search_number: Mapped[str | None] = mapped_column(String, nullable=True)
    requester_name: Mapped[str | None] = mapped_column(String, nullable=True)
    payment_status: Mapped[str] = mapped_column(
        String, nullable=False, default="pending"
    )
    cooperative_id: Mapped[str | None] = mapped_column(
        String,
        ForeignKey("cooperatives.id", ondelete="SET NULL"),
        nullable=True,
        index=True,
    )
    user_id: Mapped[str | None] = mapped_column(
        String, ForeignKey("users.id", ondelete="SET NULL"), nullable=True, index=True
    )
