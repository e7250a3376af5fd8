"""Search visibility policy: which roles may see which search categories.

One (role, category) matrix instead of per-query role checks, so the policy
can be audited and tested without touching any query code.
"""

from __future__ import annotations

from coop_portal.domain.enums import SearchCategory, UserRole

_ALL_ROLES = frozenset(UserRole)

# Category -> roles that may see it.
SEARCH_VISIBILITY: dict[SearchCategory, frozenset[UserRole]] = {
    SearchCategory.COOPERATIVES: _ALL_ROLES,
    SearchCategory.APPLICATIONS: _ALL_ROLES
    - {UserRole.CITIZEN, UserRole.AUDITOR, UserRole.TRAINER},
    SearchCategory.USERS: _ALL_ROLES
    - {
        UserRole.CITIZEN,
        UserRole.COOPERATIVE_ADMIN,
        UserRole.AUDITOR,
        UserRole.TRAINER,
    },
    SearchCategory.COMPLAINTS: _ALL_ROLES
    - {UserRole.CITIZEN, UserRole.AUDITOR, UserRole.TRAINER},
    SearchCategory.AMENDMENTS: _ALL_ROLES
    - {UserRole.CITIZEN, UserRole.AUDITOR, UserRole.TRAINER},
    SearchCategory.AUDITORS: _ALL_ROLES,
    SearchCategory.TRAINERS: _ALL_ROLES,
    SearchCategory.OFFICIAL_SEARCHES: _ALL_ROLES - {UserRole.COOPERATIVE_ADMIN},
}

# Categories that may not be queried for a cooperative admin until the
# admin's cooperative is known.
COOPERATIVE_SCOPED_CATEGORIES = frozenset(
    {
        SearchCategory.APPLICATIONS,
        SearchCategory.USERS,
        SearchCategory.COMPLAINTS,
        SearchCategory.AMENDMENTS,
        SearchCategory.OFFICIAL_SEARCHES,
    }
)

TENANT_SCOPED_ROLES = frozenset({UserRole.COUNTY_ADMIN, UserRole.COUNTY_OFFICER})

# Roles that see the full admin category set in hints and placeholders.
ADMIN_SEARCH_ROLES = frozenset(
    {UserRole.SUPER_ADMIN, UserRole.COUNTY_ADMIN, UserRole.COUNTY_OFFICER}
)


def can_view(role: UserRole, category: SearchCategory) -> bool:
    """Return True if role may see results in category."""
    return role in SEARCH_VISIBILITY[category]


def visible_categories(role: UserRole) -> list[SearchCategory]:
    """Categories the role may see, in display priority order."""
    return [c for c in SearchCategory if can_view(role, c)]


def requires_cooperative_scope(category: SearchCategory) -> bool:
    return category in COOPERATIVE_SCOPED_CATEGORIES


def is_tenant_scoped(role: UserRole) -> bool:
    """County roles only see records of their own tenant (county)."""
    return role in TENANT_SCOPED_ROLES
