"""Presentation-layer dependency injection (composition root).

Provides FastAPI Depends() for the search use case and request options.
Collaborator clients are built here from settings; routes depend only on
these dependencies. Tests replace them via app.dependency_overrides.
"""

from __future__ import annotations

from typing import Annotated

from fastapi import Depends, Request
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from authsearch.application.dtos.search import QueryRequestOptions
from authsearch.application.interfaces.services import (
    IPermissionAuthorizer,
    ISearchEngine,
)
from authsearch.application.use_cases.search import (
    AuthorizedSearchService,
    SearchService,
)
from authsearch.core.config import get_settings
from authsearch.infrastructure.external import (
    HttpPermissionAuthorizer,
    HttpSearchEngineClient,
)

_http_bearer = HTTPBearer(auto_error=False)


def get_search_engine(request: Request) -> ISearchEngine:
    """Underlying search engine client with shared HTTP client (composition root)."""
    settings = get_settings()
    http_client = getattr(request.app.state, "http_client", None)
    return HttpSearchEngineClient(
        settings.search_engine_url,
        http_client=http_client,
        timeout=settings.http_timeout_seconds,
    )


def get_permission_authorizer(request: Request) -> IPermissionAuthorizer:
    """Permission backend client with shared HTTP client (composition root)."""
    settings = get_settings()
    http_client = getattr(request.app.state, "http_client", None)
    return HttpPermissionAuthorizer(
        settings.permission_backend_url,
        http_client=http_client,
        timeout=settings.http_timeout_seconds,
    )


def get_search_service(
    engine: Annotated[ISearchEngine, Depends(get_search_engine)],
    authorizer: Annotated[IPermissionAuthorizer, Depends(get_permission_authorizer)],
) -> AuthorizedSearchService | SearchService:
    """Authorized search when permissions are enabled, else plain engine passthrough."""
    settings = get_settings()
    if not settings.search_permissions_enabled:
        return SearchService(engine)
    return AuthorizedSearchService(
        search_engine=engine,
        types=settings.document_types(),
        authorizer=authorizer,
        page_size=settings.search_page_size,
        query_latency_budget_ms=settings.search_query_latency_budget_ms,
        require_resource_ref=settings.search_permissions_require_resource_ref,
        authorize_max_batch_size=settings.search_authorize_max_batch_size,
    )


def get_request_options(
    credentials: Annotated[HTTPAuthorizationCredentials | None, Depends(_http_bearer)],
) -> QueryRequestOptions:
    """Caller identity for collaborators: the bearer token, if any, forwarded as is."""
    return QueryRequestOptions(token=credentials.credentials if credentials else None)
