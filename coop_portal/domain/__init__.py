"""Domain layer: enums and exceptions.

No dependencies on infrastructure or presentation. Used by application
and infrastructure layers.
"""

from coop_portal.domain.enums import ScopeState, SearchCategory, StatusTone, UserRole
from coop_portal.domain.exceptions import (
    AuthenticationException,
    AuthorizationException,
    CoopPortalException,
    CooperativeNotFoundException,
    SearchFailedException,
    SqlNotConfiguredException,
    ValidationException,
)

__all__ = [
    # Enums
    "ScopeState",
    "SearchCategory",
    "StatusTone",
    "UserRole",
    # Exceptions
    "AuthenticationException",
    "AuthorizationException",
    "CoopPortalException",
    "CooperativeNotFoundException",
    "SearchFailedException",
    "SqlNotConfiguredException",
    "ValidationException",
]
