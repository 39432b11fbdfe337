"""Domain enumerations for the authorized search gateway.

Enums represent fixed sets of domain values (e.g. authorization results).
"""

from enum import Enum


class AuthorizeResult(str, Enum):
    """Outcome of an authorization request.

    CONDITIONAL is only meaningful for type-level requests (no resource
    reference): the caller may see some documents of the type, and each
    one must be checked against its resource reference.
    """

    ALLOW = "ALLOW"
    DENY = "DENY"
    CONDITIONAL = "CONDITIONAL"


class LoopState(str, Enum):
    """States of the authorized pagination loop."""

    FETCHING = "fetching"
    FILTERING = "filtering"
    CHECK_STOP = "check_stop"
    DONE = "done"
