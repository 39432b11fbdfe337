"""Domain layer: enums and exceptions.

No dependencies on infrastructure or presentation. Used by application
and infrastructure layers.
"""

from authsearch.domain.enums import AuthorizeResult, LoopState
from authsearch.domain.exceptions import (
    AuthorizationFailureException,
    InvalidConfigurationException,
    InvalidCursorException,
    SearchGatewayException,
    UpstreamQueryException,
    ValidationException,
)

__all__ = [
    # Enums
    "AuthorizeResult",
    "LoopState",
    # Exceptions
    "AuthorizationFailureException",
    "InvalidConfigurationException",
    "InvalidCursorException",
    "SearchGatewayException",
    "UpstreamQueryException",
    "ValidationException",
]
