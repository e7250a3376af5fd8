"""Core: config, limiter, exception handlers, and application lifespan."""

from coop_portal.core.config import get_settings

__all__ = ["get_settings"]
