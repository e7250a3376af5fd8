"""Application interfaces (ports): repository protocols.

Define contracts for infrastructure implementations (DIP).
No runtime imports from coop_portal.infrastructure.
"""

from coop_portal.application.interfaces.repositories import (
    ICooperativeScopeRepository,
    ISearchGateway,
    IUserProfileRepository,
)

__all__ = [
    "ICooperativeScopeRepository",
    "ISearchGateway",
    "IUserProfileRepository",
]
