"""ASGI middleware."""

from coop_portal.middleware.request_id import RequestIDMiddleware

__all__ = ["RequestIDMiddleware"]
