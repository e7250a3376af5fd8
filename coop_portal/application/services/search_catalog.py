"""Display metadata for search categories: labels, icons, placeholder and hint text.

Presentation only; nothing here affects which records a search returns.
"""

from __future__ import annotations

from coop_portal.application.services.search_visibility import (
    ADMIN_SEARCH_ROLES,
    can_view,
)
from coop_portal.domain.enums import SearchCategory, StatusTone, UserRole

CATEGORY_LABELS: dict[SearchCategory, str] = {
    SearchCategory.COOPERATIVES: "Cooperatives",
    SearchCategory.APPLICATIONS: "Applications",
    SearchCategory.USERS: "Users",
    SearchCategory.COMPLAINTS: "Complaints",
    SearchCategory.AMENDMENTS: "Amendments",
    SearchCategory.AUDITORS: "Auditors",
    SearchCategory.TRAINERS: "Trainers",
    SearchCategory.OFFICIAL_SEARCHES: "Official Searches",
}

# Icon names understood by the portal front end.
CATEGORY_ICONS: dict[SearchCategory, str] = {
    SearchCategory.COOPERATIVES: "building",
    SearchCategory.APPLICATIONS: "file-text",
    SearchCategory.USERS: "users",
    SearchCategory.COMPLAINTS: "message-square-warning",
    SearchCategory.AMENDMENTS: "file-edit",
    SearchCategory.AUDITORS: "shield",
    SearchCategory.TRAINERS: "graduation-cap",
    SearchCategory.OFFICIAL_SEARCHES: "search-check",
}

_STATUS_TONES: dict[str, StatusTone] = {
    "ACTIVE": StatusTone.SUCCESS,
    "APPROVED": StatusTone.SUCCESS,
    "COMPLETED": StatusTone.SUCCESS,
    "PENDING": StatusTone.PENDING,
    "UNDER_REVIEW": StatusTone.PENDING,
    "REJECTED": StatusTone.DANGER,
    "DISMISSED": StatusTone.DANGER,
}

_ADMIN_ONLY_PLACEHOLDER = (
    SearchCategory.APPLICATIONS,
    SearchCategory.USERS,
    SearchCategory.COMPLAINTS,
    SearchCategory.AMENDMENTS,
)


def category_label(category: SearchCategory) -> str:
    return CATEGORY_LABELS[category]


def category_icon(category: SearchCategory) -> str:
    return CATEGORY_ICONS[category]


def status_tone(status: str | None) -> StatusTone:
    """Badge tone for a record status; unknown or missing statuses are neutral."""
    if not status:
        return StatusTone.NEUTRAL
    return _STATUS_TONES.get(status.upper(), StatusTone.NEUTRAL)


def search_placeholder(role: UserRole) -> str:
    """Input placeholder listing what the role can search, e.g. 'Search cooperatives, auditors...'."""
    items = [SearchCategory.COOPERATIVES]
    if role in ADMIN_SEARCH_ROLES:
        items.extend(_ADMIN_ONLY_PLACEHOLDER)
    items.extend([SearchCategory.AUDITORS, SearchCategory.TRAINERS])
    if can_view(role, SearchCategory.OFFICIAL_SEARCHES):
        items.append(SearchCategory.OFFICIAL_SEARCHES)
    return f"Search {', '.join(category_label(c).lower() for c in items)}..."


def search_hint(role: UserRole, min_query_length: int = 2) -> str:
    """Empty-state hint shown before the caller has typed enough to search."""
    scope = "all" if role == UserRole.SUPER_ADMIN else "your"
    admin_part = (
        " applications, users, complaints," if role in ADMIN_SEARCH_ROLES else ""
    )
    return (
        f"Type at least {min_query_length} characters to search across {scope} "
        f"cooperatives,{admin_part} auditors, trainers, and more."
    )
