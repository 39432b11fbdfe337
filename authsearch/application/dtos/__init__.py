"""Application DTOs (no transport dependency)."""

from authsearch.application.dtos.search import (
    AuthorizeDecision,
    AuthorizeRequest,
    DocumentAuthorization,
    DocumentTypeInfo,
    QueryRequestOptions,
    SearchDocument,
    SearchQuery,
    SearchResult,
    SearchResultSet,
)

__all__ = [
    "AuthorizeDecision",
    "AuthorizeRequest",
    "DocumentAuthorization",
    "DocumentTypeInfo",
    "QueryRequestOptions",
    "SearchDocument",
    "SearchQuery",
    "SearchResult",
    "SearchResultSet",
]
