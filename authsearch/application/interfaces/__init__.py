"""Application interfaces (ports): collaborator protocols.

Define contracts for infrastructure implementations (DIP).
No runtime imports from authsearch.infrastructure or authsearch.api.
"""

from authsearch.application.interfaces.services import (
    IPermissionAuthorizer,
    ISearchEngine,
)

__all__ = [
    "IPermissionAuthorizer",
    "ISearchEngine",
]
