"""Domain enumerations for the cooperative portal.

Enums represent fixed sets of domain values (roles, search categories,
scope resolution states).
"""

from enum import Enum


class _ValuesMixin:
    """Mixin that adds a values() classmethod to str Enums."""

    @classmethod
    def values(cls) -> list[str]:
        """Return all valid values as strings."""
        return [member.value for member in cls]


class UserRole(_ValuesMixin, str, Enum):
    """Portal role of the caller. Drives per-category visibility and scoping."""

    SUPER_ADMIN = "SUPER_ADMIN"
    COUNTY_ADMIN = "COUNTY_ADMIN"
    COUNTY_OFFICER = "COUNTY_OFFICER"
    COOPERATIVE_ADMIN = "COOPERATIVE_ADMIN"
    AUDITOR = "AUDITOR"
    TRAINER = "TRAINER"
    CITIZEN = "CITIZEN"


class SearchCategory(_ValuesMixin, str, Enum):
    """Global search categories. Declaration order is the display priority."""

    COOPERATIVES = "cooperatives"
    APPLICATIONS = "applications"
    USERS = "users"
    COMPLAINTS = "complaints"
    AMENDMENTS = "amendments"
    AUDITORS = "auditors"
    TRAINERS = "trainers"
    OFFICIAL_SEARCHES = "official_searches"

    @property
    def result_type(self) -> str:
        """Singular type tag carried by each SearchResult in this category."""
        return _RESULT_TYPES[self]


_RESULT_TYPES: dict[SearchCategory, str] = {
    SearchCategory.COOPERATIVES: "cooperative",
    SearchCategory.APPLICATIONS: "application",
    SearchCategory.USERS: "user",
    SearchCategory.COMPLAINTS: "complaint",
    SearchCategory.AMENDMENTS: "amendment",
    SearchCategory.AUDITORS: "auditor",
    SearchCategory.TRAINERS: "trainer",
    SearchCategory.OFFICIAL_SEARCHES: "official_search",
}


class ScopeState(_ValuesMixin, str, Enum):
    """Cooperative scope resolution state for a COOPERATIVE_ADMIN session.

    RESOLVED is terminal; the resolved value may be an id or None.
    """

    UNRESOLVED = "unresolved"
    RESOLVING = "resolving"
    RESOLVED = "resolved"


class StatusTone(_ValuesMixin, str, Enum):
    """Badge tone for a record status shown next to a search hit."""

    SUCCESS = "success"
    PENDING = "pending"
    DANGER = "danger"
    NEUTRAL = "neutral"
