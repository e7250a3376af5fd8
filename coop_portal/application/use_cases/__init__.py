"""Application use cases: one entry point per workflow."""

from coop_portal.application.use_cases.cooperative_scope import (
    CooperativeScopeResolver,
)
from coop_portal.application.use_cases.search import GlobalSearchService
from coop_portal.application.use_cases.search_session import SearchSession

__all__ = [
    "CooperativeScopeResolver",
    "GlobalSearchService",
    "SearchSession",
]
