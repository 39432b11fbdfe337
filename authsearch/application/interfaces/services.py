"""Service interfaces (ports) for the application layer.

Protocols define contracts for the external collaborators (DIP).
"""

from __future__ import annotations

from collections.abc import Sequence
from typing import TYPE_CHECKING, Protocol

if TYPE_CHECKING:
    from authsearch.application.dtos.search import (
        AuthorizeDecision,
        AuthorizeRequest,
        QueryRequestOptions,
        SearchQuery,
        SearchResultSet,
    )


# Underlying search engine interface
class ISearchEngine(Protocol):
    """Protocol for the underlying engine (indexing and ranking live there)."""

    async def query(
        self, query: SearchQuery, options: QueryRequestOptions
    ) -> SearchResultSet:
        """Return one engine page; next_page_cursor is engine-defined and opaque."""


# Permission authorizer interface
class IPermissionAuthorizer(Protocol):
    """Protocol for the permission backend (policy evaluation lives there)."""

    async def authorize(
        self,
        requests: Sequence[AuthorizeRequest],
        options: QueryRequestOptions,
    ) -> list[AuthorizeDecision]:
        """Return one decision per request, in request order."""
