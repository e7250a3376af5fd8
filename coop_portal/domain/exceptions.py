"""Domain exceptions for the cooperative portal.

Defines domain-level exceptions that represent business rule violations.
These exceptions are independent of infrastructure concerns. Presentation
layer maps them to HTTP responses in exception handlers.
"""

from typing import Any


class CoopPortalException(Exception):
    """Base exception for all cooperative portal errors.

    All custom exceptions should inherit from this class to allow
    consistent error handling and logging. Presentation layer maps
    these to HTTP responses using message, error_code, and details.

    Attributes:
        message: Human-readable error description.
        error_code: Machine-readable error code.
        details: Additional error context (e.g. field, category).
    """

    def __init__(
        self,
        message: str,
        error_code: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        """Initialize the exception.

        Args:
            message: Human-readable error description.
            error_code: Optional machine-readable code; defaults to class name.
            details: Optional dict of extra context.
        """
        self.message = message
        self.error_code = error_code or self.__class__.__name__
        self.details = details or {}
        super().__init__(self.message)

    def to_dict(self) -> dict[str, Any]:
        """Return the JSON body used by the API exception handler."""
        return {
            "error": self.error_code,
            "message": self.message,
            "details": self.details,
        }


class ValidationException(CoopPortalException):
    """Raised when input validation fails (e.g. invalid format or range)."""

    def __init__(self, message: str, field: str | None = None) -> None:
        """Initialize with message and optional field name.

        Args:
            message: Description of the validation failure.
            field: Optional field or attribute that failed validation.
        """
        details = {"field": field} if field else {}
        super().__init__(message, "VALIDATION_ERROR", details)


class AuthenticationException(CoopPortalException):
    """Raised when authentication fails (e.g. invalid or expired token)."""

    def __init__(self, message: str = "Authentication failed") -> None:
        super().__init__(message, "AUTHENTICATION_ERROR")


class AuthorizationException(CoopPortalException):
    """Raised when the caller lacks the role required for the operation."""

    def __init__(
        self,
        resource: str | None = None,
        action: str | None = None,
        message: str = "Permission denied",
    ) -> None:
        """Initialize with optional resource, action, and message.

        Args:
            resource: Optional resource type (e.g. 'users', 'complaints').
            action: Optional action that was attempted (e.g. 'search').
            message: Human-readable message; default used when resource/action omitted.
        """
        if resource and action:
            message = f"Permission denied: {action} on {resource}"
        details: dict[str, Any] = {}
        if resource:
            details["resource"] = resource
        if action:
            details["action"] = action
        super().__init__(message, "PERMISSION_DENIED", details)


class CooperativeNotFoundException(CoopPortalException):
    """Raised when a cooperative admin's cooperative cannot be determined.

    Neither a membership record nor a cooperative in the admin's tenant
    matched. Distinct from a failed search: the remedy is to contact support.
    """

    def __init__(self, user_id: str | None = None) -> None:
        """Initialize with the user whose scope could not be resolved.

        Args:
            user_id: The cooperative admin's user id, when known.
        """
        details = {"user_id": user_id} if user_id else {}
        super().__init__(
            "Unable to find your cooperative. Please contact support.",
            "COOPERATIVE_NOT_FOUND",
            details,
        )


class SearchFailedException(CoopPortalException):
    """Raised when a global search fails as a whole (every category query failed)."""

    def __init__(
        self,
        message: str = "Search failed",
        failed_categories: list[str] | None = None,
    ) -> None:
        """Initialize with message and the categories whose queries failed.

        Args:
            message: Human-readable description.
            failed_categories: Category keys whose adapter raised.
        """
        details = (
            {"failed_categories": failed_categories} if failed_categories else {}
        )
        super().__init__(message, "SEARCH_FAILED", details)


class SqlNotConfiguredException(CoopPortalException):
    """Raised when an operation requires the database but DATABASE_URL is not usable."""

    def __init__(self) -> None:
        super().__init__(
            message="This operation requires a SQL database that is not configured.",
            error_code="SERVICE_UNAVAILABLE",
        )
