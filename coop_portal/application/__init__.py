"""Application layer: interfaces, services, use cases.

Depends only on domain and protocol definitions (DIP).
Infrastructure implements the interfaces (search gateway, scope and
profile lookups).
"""

from coop_portal.application.interfaces import (
    ICooperativeScopeRepository,
    ISearchGateway,
    IUserProfileRepository,
)
from coop_portal.application.use_cases import (
    CooperativeScopeResolver,
    GlobalSearchService,
    SearchSession,
)

__all__ = [
    "CooperativeScopeResolver",
    "GlobalSearchService",
    "ICooperativeScopeRepository",
    "ISearchGateway",
    "IUserProfileRepository",
    "SearchSession",
]
