"""AuditorProfile and TrainerProfile ORM models (accredited professionals)."""

from sqlalchemy import Boolean, ForeignKey, String, text
from sqlalchemy.dialects.postgresql import ARRAY
from sqlalchemy.orm import Mapped, declared_attr, mapped_column

from coop_portal.infrastructure.persistence.database import Base
from coop_portal.infrastructure.persistence.models.mixins import (
    TimestampMixin,
    UuidMixin,
)


class ProfessionalProfileMixin(UuidMixin, TimestampMixin):
    """Columns shared by auditor and trainer profiles. Only active profiles are listed."""

    @declared_attr
    def user_id(cls) -> Mapped[str]:
        return mapped_column(
            String,
            ForeignKey("users.id", ondelete="CASCADE"),
            nullable=False,
            index=True,
        )

    full_name: Mapped[str] = mapped_column(String, nullable=False)
    specializations: Mapped[list[str] | None] = mapped_column(
        ARRAY(String), nullable=True
    )
    is_active: Mapped[bool] = mapped_column(
        Boolean, nullable=False, server_default=text("true")
    )


class AuditorProfile(ProfessionalProfileMixin, Base):
    """Registered auditor. Table: auditor_profiles."""

    __tablename__ = "auditor_profiles"

    qualification: Mapped[str | None] = mapped_column(String, nullable=True)
    certification_body: Mapped[str | None] = mapped_column(String, nullable=True)


class TrainerProfile(ProfessionalProfileMixin, Base):
    """Registered trainer. Table: trainer_profiles."""

    __tablename__ = "trainer_profiles"

    education_level: Mapped[str | None] = mapped_column(String, nullable=True)
    institution: Mapped[str | None] = mapped_column(String, nullable=True)
