"""Persistence models: ORM entities and mixins."""

from coop_portal.infrastructure.persistence.models.amendment_request import (
    AmendmentRequest,
)
from coop_portal.infrastructure.persistence.models.cooperative import (
    Cooperative,
    CooperativeMember,
    CooperativeType,
)
from coop_portal.infrastructure.persistence.models.inquiry_request import (
    InquiryRequest,
)
from coop_portal.infrastructure.persistence.models.mixins import (
    TenantMixin,
    TenantScopedModel,
    TimestampMixin,
    UuidMixin,
)
from coop_portal.infrastructure.persistence.models.professional_profile import (
    AuditorProfile,
    TrainerProfile,
)
from coop_portal.infrastructure.persistence.models.registration_application import (
    RegistrationApplication,
)
from coop_portal.infrastructure.persistence.models.search_request import (
    SearchRequest,
)
from coop_portal.infrastructure.persistence.models.tenant import Tenant
from coop_portal.infrastructure.persistence.models.user import (
    User,
    UserRoleAssignment,
)

__all__ = [
    "Tenant",
    "CooperativeType",
    "Cooperative",
    "CooperativeMember",
    "User",
    "UserRoleAssignment",
    "RegistrationApplication",
    "InquiryRequest",
    "AmendmentRequest",
    "AuditorProfile",
    "TrainerProfile",
    "SearchRequest",
    "UuidMixin",
    "TenantMixin",
    "TimestampMixin",
    "TenantScopedModel",
]
