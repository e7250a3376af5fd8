"""Persistence repositories. Re-exports for dependency injection."""

from coop_portal.infrastructure.persistence.repositories.cooperative_scope_repo import (
    CooperativeScopeRepository,
)
from coop_portal.infrastructure.persistence.repositories.search_repo import (
    SearchRepository,
)
from coop_portal.infrastructure.persistence.repositories.user_profile_repo import (
    UserProfileRepository,
)

__all__ = [
    "CooperativeScopeRepository",
    "SearchRepository",
    "UserProfileRepository",
]
