"""Pytest configuration and fixtures for authsearch.

Uses authsearch.main:app for HTTP tests. Collaborators (search engine,
permission backend) are replaced by in-memory fakes defined here.
"""

from collections.abc import Callable, Sequence

import pytest
from httpx import ASGITransport, AsyncClient

from authsearch.api.v1.dependencies import (
    get_permission_authorizer,
    get_search_engine,
)
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
from authsearch.core.config import get_settings
from authsearch.domain.enums import AuthorizeResult
from authsearch.main import app

ALLOW = AuthorizeDecision(result=AuthorizeResult.ALLOW)
DENY = AuthorizeDecision(result=AuthorizeResult.DENY)
CONDITIONAL = AuthorizeDecision(result=AuthorizeResult.CONDITIONAL)


def make_result(
    type_name: str, n: int, resource_ref: str | None = None, location: str | None = None
) -> SearchResult:
    """Build a search hit numbered n; location defaults to an https URL."""
    return SearchResult(
        type=type_name,
        document=SearchDocument(
            title=f"{type_name}-{n}",
            location=location or f"https://example.org/{type_name}/{n}",
            authorization=(
                DocumentAuthorization(resource_ref=resource_ref) if resource_ref else None
            ),
        ),
        rank=n,
    )


class FakeSearchEngine:
    """Serves fixed pages; engine cursor is the stringified index of the next page."""

    def __init__(
        self,
        pages: list[list[SearchResult]],
        on_query: Callable[[], None] | None = None,
    ) -> None:
        self.pages = pages
        self.on_query = on_query
        self.queries: list[SearchQuery] = []

    async def query(
        self, query: SearchQuery, options: QueryRequestOptions
    ) -> SearchResultSet:
        self.queries.append(query)
        if self.on_query:
            self.on_query()
        index = int(query.page_cursor) if query.page_cursor else 0
        results = [
            r for r in self.pages[index] if not query.types or r.type in query.types
        ]
        has_next = index + 1 < len(self.pages)
        return SearchResultSet(
            results=results,
            next_page_cursor=str(index + 1) if has_next else None,
        )


class FakeAuthorizer:
    """Decides with a function of the request and records every batch it receives."""

    def __init__(
        self, decide: Callable[[AuthorizeRequest], AuthorizeDecision] | None = None
    ) -> None:
        self.decide = decide or (lambda request: ALLOW)
        self.calls: list[list[AuthorizeRequest]] = []
        self.options: list[QueryRequestOptions] = []

    async def authorize(
        self,
        requests: Sequence[AuthorizeRequest],
        options: QueryRequestOptions,
    ) -> list[AuthorizeDecision]:
        self.calls.append(list(requests))
        self.options.append(options)
        return [self.decide(r) for r in requests]

    @property
    def evaluated(self) -> list[AuthorizeRequest]:
        return [r for batch in self.calls for r in batch]


class FakeClock:
    """Monotonic clock advanced manually (seconds)."""

    def __init__(self) -> None:
        self.now = 0.0

    def __call__(self) -> float:
        return self.now

    def advance_ms(self, ms: float) -> None:
        self.now += ms / 1000


@pytest.fixture
def types() -> dict[str, DocumentTypeInfo]:
    """Registry: one public type, one gated by a visibility permission."""
    return {
        "docs": DocumentTypeInfo(),
        "catalog": DocumentTypeInfo(visibility_permission="catalog.entity.read"),
    }


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def search_env(monkeypatch: pytest.MonkeyPatch):
    """Point settings at a two-type registry; settings cache cleared around the test."""
    monkeypatch.setenv(
        "SEARCH_DOCUMENT_TYPES",
        '{"docs": null, "catalog": "catalog.entity.read"}',
    )
    monkeypatch.setenv("SEARCH_PAGE_SIZE", "2")
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


@pytest.fixture
async def client() -> AsyncClient:
    """Async HTTP client against the FastAPI app (ASGI)."""
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac
    app.dependency_overrides.clear()


def override_collaborators(engine: FakeSearchEngine, authorizer: FakeAuthorizer) -> None:
    """Swap HTTP collaborators for fakes on the shared app."""
    app.dependency_overrides[get_search_engine] = lambda: engine
    app.dependency_overrides[get_permission_authorizer] = lambda: authorizer
