"""RegistrationApplication ORM model: applications to register a new cooperative."""

from datetime import datetime

from sqlalchemy import DateTime, ForeignKey, String
from sqlalchemy.orm import Mapped, mapped_column

from coop_portal.infrastructure.persistence.database import Base
from coop_portal.infrastructure.persistence.models.mixins import TenantScopedModel


class RegistrationApplication(TenantScopedModel, Base):
    """Cooperative registration application. Table: registration_applications."""

    __tablename__ = "registration_applications"

    application_number: Mapped[str | None] = mapped_column(
        String, nullable=True, unique=True
    )
    proposed_name: Mapped[str] = mapped_column(String, nullable=False)
    status: Mapped[str] = mapped_column(String, nullable=False, default="draft")
    submitted_at: Mapped[datetime | None] = mapped_column(
        DateTime(timezone=True), nullable=True
    )
    applicant_user_id: Mapped[str | None] = mapped_column(
        String, ForeignKey("users.id", ondelete="SET NULL"), nullable=True, index=True
    )
