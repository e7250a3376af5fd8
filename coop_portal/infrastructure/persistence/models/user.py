"""User and UserRoleAssignment ORM models (portal accounts and their roles)."""

from sqlalchemy import CheckConstraint, ForeignKey, String
from sqlalchemy.orm import Mapped, mapped_column

from coop_portal.domain.enums import UserRole
from coop_portal.infrastructure.persistence.database import Base
from coop_portal.infrastructure.persistence.models.mixins import (
    TenantScopedModel,
)


class User(TenantScopedModel, Base):
    """Portal user. Table: users. Id is the identity provider's user id."""

    __tablename__ = "users"

    full_name: Mapped[str] = mapped_column(String, nullable=False)
    email: Mapped[str] = mapped_column(String, nullable=False, index=True)
    phone: Mapped[str | None] = mapped_column(String, nullable=True)
    id_number: Mapped[str | None] = mapped_column(String, nullable=True)


class UserRoleAssignment(TenantScopedModel, Base):
    """Role held by a user, bound to a tenant for county roles. Table: user_roles.

    The earliest assignment is the user's primary role.
    """

    __tablename__ = "user_roles"

    user_id: Mapped[str] = mapped_column(
        String, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True
    )
    role: Mapped[str] = mapped_column(String, nullable=False)

    __table_args__ = (
        CheckConstraint(
            "role IN ({})".format(", ".join(f"'{v}'" for v in UserRole.values())),
            name="user_roles_role_check",
        ),
    )
