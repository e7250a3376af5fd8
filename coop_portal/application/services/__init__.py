"""Application services: search visibility rules and display catalog."""

from coop_portal.application.services.search_catalog import (
    category_icon,
    category_label,
    search_hint,
    search_placeholder,
    status_tone,
)
from coop_portal.application.services.search_visibility import (
    can_view,
    is_tenant_scoped,
    requires_cooperative_scope,
    visible_categories,
)

__all__ = [
    "can_view",
    "category_icon",
    "category_label",
    "is_tenant_scoped",
    "requires_cooperative_scope",
    "search_hint",
    "search_placeholder",
    "status_tone",
    "visible_categories",
]
