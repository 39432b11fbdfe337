"""Domain exceptions for the authorized search gateway.

Defines domain-level exceptions for search and authorization failures.
These exceptions are independent of transport concerns. Presentation
layer maps them to HTTP responses in exception handlers.
"""

from typing import Any


class SearchGatewayException(Exception):
    """Base exception for all search gateway errors.

    All custom exceptions inherit from this class to allow consistent
    error handling and logging. Presentation layer maps these to HTTP
    responses using message, error_code, and details.

    Attributes:
        message: Human-readable error description.
        error_code: Machine-readable error code.
        details: Additional error context (e.g. field, reason).
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
        """Return the JSON error body used by the exception handlers."""
        return {
            "error": self.error_code,
            "message": self.message,
            "details": self.details,
        }


class ValidationException(SearchGatewayException):
    """Raised when input validation fails (e.g. unknown document type)."""

    def __init__(self, message: str, field: str | None = None) -> None:
        """Initialize with message and optional field name.

        Args:
            message: Description of the validation failure.
            field: Optional field or attribute that failed validation.
        """
        details = {"field": field} if field else {}
        super().__init__(message, "VALIDATION_ERROR", details)


class InvalidConfigurationException(SearchGatewayException):
    """Raised at settings load when mutually exclusive options are both set."""

    def __init__(self, message: str, options: list[str] | None = None) -> None:
        """Initialize with message and the conflicting option names.

        Args:
            message: Description of the configuration problem.
            options: Names of the settings that conflict.
        """
        details = {"options": options} if options else {}
        super().__init__(message, "INVALID_CONFIGURATION", details)


class InvalidCursorException(SearchGatewayException):
    """Raised when an incoming page cursor cannot be decoded to a page index."""

    def __init__(self, cursor: str) -> None:
        super().__init__(
            "Invalid page cursor",
            "INVALID_CURSOR",
            {"cursor": cursor},
        )


class UpstreamQueryException(SearchGatewayException):
    """Raised when the underlying search engine fails to answer a query."""

    def __init__(self, reason: str, status_code: int | None = None) -> None:
        """Initialize with failure reason and optional upstream status.

        Args:
            reason: Human-readable cause (e.g. transport error text).
            status_code: HTTP status returned by the engine, when there was one.
        """
        details: dict[str, Any] = {"reason": reason}
        if status_code is not None:
            details["status_code"] = status_code
        super().__init__(
            "There was a problem performing the search query",
            "UPSTREAM_QUERY_FAILED",
            details,
        )


class AuthorizationFailureException(SearchGatewayException):
    """Raised when the permission backend cannot produce decisions.

    Never converted into an ALLOW or DENY; the whole query fails.
    """

    def __init__(self, reason: str, status_code: int | None = None) -> None:
        """Initialize with failure reason and optional backend status.

        Args:
            reason: Human-readable cause.
            status_code: HTTP status returned by the permission backend, if any.
        """
        details: dict[str, Any] = {"reason": reason}
        if status_code is not None:
            details["status_code"] = status_code
        super().__init__(
            "Authorization decisions could not be obtained",
            "AUTHORIZATION_FAILED",
            details,
        )
