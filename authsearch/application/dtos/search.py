"""DTOs for authorized search (no dependency on transport or engine)."""

from dataclasses import dataclass, field
from typing import Any

from authsearch.domain.enums import AuthorizeResult


@dataclass(frozen=True)
class SearchQuery:
    """Incoming query: term, optional filters, requested types, page cursor.

    types None (or empty) means every registered document type.
    """

    term: str
    filters: dict[str, Any] | None = None
    types: list[str] | None = None
    page_cursor: str | None = None


@dataclass(frozen=True)
class QueryRequestOptions:
    """Per-request context forwarded to collaborators (caller identity)."""

    token: str | None = None


@dataclass(frozen=True)
class DocumentAuthorization:
    """Authorization metadata carried by an indexed document."""

    resource_ref: str


@dataclass(frozen=True)
class SearchDocument:
    """Indexed document as returned by the underlying engine."""

    title: str
    location: str
    text: str = ""
    authorization: DocumentAuthorization | None = None


@dataclass(frozen=True)
class SearchResult:
    """Single hit: document type plus document. Engine order is relevance order."""

    type: str
    document: SearchDocument
    rank: int | None = None


@dataclass(frozen=True)
class SearchResultSet:
    """One page of results with optional cursors for neighbouring pages."""

    results: list[SearchResult] = field(default_factory=list)
    previous_page_cursor: str | None = None
    next_page_cursor: str | None = None


@dataclass(frozen=True)
class DocumentTypeInfo:
    """Registry entry for a document type; permission gates the whole type."""

    visibility_permission: str | None = None


@dataclass(frozen=True)
class AuthorizeRequest:
    """Permission check; hashable so identical requests share one evaluation."""

    permission: str
    resource_ref: str | None = None


@dataclass(frozen=True)
class AuthorizeDecision:
    """Decision returned by the permission backend for one request."""

    result: AuthorizeResult
