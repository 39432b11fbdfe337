"""Use cases: orchestration of services and collaborators."""

from authsearch.application.use_cases.search import (
    AuthorizedSearchService,
    SearchService,
)

__all__ = ["AuthorizedSearchService", "SearchService"]
