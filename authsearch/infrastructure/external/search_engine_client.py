"""HTTP client for the underlying search engine (implements ISearchEngine).

All HTTP calls use httpx.AsyncClient so they do not block the event loop.
The engine's page cursor is passed through verbatim.
"""

from __future__ import annotations

import json
from contextlib import asynccontextmanager
from typing import Any

import httpx

from authsearch.application.dtos.search import (
    DocumentAuthorization,
    QueryRequestOptions,
    SearchDocument,
    SearchQuery,
    SearchResult,
    SearchResultSet,
)
from authsearch.domain.exceptions import UpstreamQueryException
from authsearch.shared.telemetry.logging import get_logger
from authsearch.shared.telemetry.tracing import traced

logger = get_logger(__name__)


def _parse_result(item: dict[str, Any]) -> SearchResult:
    """Build a SearchResult from one engine JSON hit."""
    doc = item["document"]
    authorization = doc.get("authorization") or {}
    resource_ref = authorization.get("resourceRef")
    return SearchResult(
        type=item["type"],
        document=SearchDocument(
            title=doc.get("title", ""),
            text=doc.get("text", ""),
            location=doc.get("location", ""),
            authorization=(
                DocumentAuthorization(resource_ref=resource_ref) if resource_ref else None
            ),
        ),
        rank=item.get("rank"),
    )


class HttpSearchEngineClient:
    """Queries a remote search engine over HTTP."""

    def __init__(
        self,
        base_url: str,
        *,
        http_client: httpx.AsyncClient | None = None,
        timeout: float = 10.0,
    ) -> None:
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self._shared_http = http_client

    @asynccontextmanager
    async def _http_cm(self):
        """Yield shared HTTP client or a short-lived one (connection reuse when shared)."""
        if self._shared_http is not None:
            yield self._shared_http
            return
        async with httpx.AsyncClient(timeout=self.timeout) as client:
            yield client

    @traced("search_engine.query")
    async def query(
        self, query: SearchQuery, options: QueryRequestOptions
    ) -> SearchResultSet:
        """GET {base_url}/query; the engine's own cursor goes in pageCursor.

        Raises:
            UpstreamQueryException: On transport error, non-2xx, or malformed body.
        """
        params: list[tuple[str, str]] = [("term", query.term)]
        if query.filters:
            params.append(("filters", json.dumps(query.filters)))
        for type_name in query.types or []:
            params.append(("types", type_name))
        if query.page_cursor:
            params.append(("pageCursor", query.page_cursor))
        headers = {"Accept": "application/json"}
        if options.token:
            headers["Authorization"] = f"Bearer {options.token}"

        try:
            async with self._http_cm() as client:
                resp = await client.get(
                    f"{self.base_url}/query", params=params, headers=headers
                )
        except httpx.HTTPError as e:
            raise UpstreamQueryException(str(e)) from e
        if not resp.is_success:
            logger.warning("Search engine returned %s", resp.status_code)
            raise UpstreamQueryException(
                f"search engine responded {resp.status_code}",
                status_code=resp.status_code,
            )
        try:
            body = resp.json()
            results = [_parse_result(item) for item in body.get("results", [])]
        except (ValueError, KeyError, TypeError, AttributeError) as e:
            raise UpstreamQueryException(f"malformed search engine response: {e}") from e
        return SearchResultSet(
            results=results,
            next_page_cursor=body.get("nextPageCursor") or None,
        )
