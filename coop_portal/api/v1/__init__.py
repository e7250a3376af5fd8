"""API v1: routers and dependencies."""

from coop_portal.api.v1.router import api_router

__all__ = ["api_router"]
