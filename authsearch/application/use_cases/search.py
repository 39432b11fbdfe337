"""Authorized search use case: paginates the engine until a page of visible results is found."""

from __future__ import annotations

import dataclasses
import time
from collections.abc import Callable, Mapping
from typing import TYPE_CHECKING

from authsearch.application.dtos.search import (
    DocumentTypeInfo,
    QueryRequestOptions,
    SearchQuery,
    SearchResult,
    SearchResultSet,
)
from authsearch.application.services.decision_batcher import DecisionBatcher
from authsearch.application.services.page_cursor import (
    decode_page_cursor,
    encode_page_cursor,
)
from authsearch.application.services.result_filter import ResultFilter
from authsearch.application.services.type_authorizer import TypeAuthorizer
from authsearch.domain.enums import LoopState
from authsearch.domain.exceptions import (
    SearchGatewayException,
    UpstreamQueryException,
)
from authsearch.shared.telemetry.logging import get_logger
from authsearch.shared.telemetry.tracing import add_span_attributes, traced

if TYPE_CHECKING:
    from authsearch.application.interfaces.services import (
        IPermissionAuthorizer,
        ISearchEngine,
    )

logger = get_logger(__name__)

DEFAULT_PAGE_SIZE = 25
DEFAULT_QUERY_LATENCY_BUDGET_MS = 1000


class AuthorizedSearchService:
    """Search engine wrapper that only returns results the caller may see.

    Type-level decisions restrict which types are queried; conditionally
    visible types are checked per result. The engine is paged through until
    enough authorized results exist for the requested page, the engine runs
    out of pages, or the latency budget is spent. The budget is checked
    between fetches only, so one slow fetch can overshoot it.
    """

    def __init__(
        self,
        search_engine: "ISearchEngine",
        types: Mapping[str, DocumentTypeInfo],
        authorizer: "IPermissionAuthorizer",
        page_size: int = DEFAULT_PAGE_SIZE,
        query_latency_budget_ms: int = DEFAULT_QUERY_LATENCY_BUDGET_MS,
        require_resource_ref: bool = False,
        authorize_max_batch_size: int | None = None,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        if page_size < 1:
            raise ValueError("page_size must be >= 1")
        self.search_engine = search_engine
        self.authorizer = authorizer
        self.page_size = page_size
        self.query_latency_budget_ms = query_latency_budget_ms
        self.authorize_max_batch_size = authorize_max_batch_size
        self.type_authorizer = TypeAuthorizer(types)
        self.result_filter = ResultFilter(types, require_resource_ref)
        self._clock = clock

    @traced("authorized_search.query")
    async def query(
        self, query: SearchQuery, options: QueryRequestOptions
    ) -> SearchResultSet:
        """Return one page of authorized results with previous/next cursors.

        Raises:
            InvalidCursorException: If query.page_cursor is malformed.
            ValidationException: If an unknown document type is requested.
            UpstreamQueryException: If the engine fails.
            AuthorizationFailureException: If the permission backend fails.
        """
        query_start = self._clock()
        page = decode_page_cursor(query.page_cursor)
        batcher = DecisionBatcher(
            self.authorizer, options, max_batch_size=self.authorize_max_batch_size
        )

        requested_types = self.type_authorizer.requested_types(query.types)
        type_decisions = await self.type_authorizer.authorize_types(
            requested_types, batcher
        )
        authorized_types = self.type_authorizer.authorized_types(type_decisions)

        previous_page_cursor = encode_page_cursor(page - 1) if page > 0 else None
        if not authorized_types:
            logger.info("No visible document types for query; skipping engine")
            return SearchResultSet(previous_page_cursor=previous_page_cursor)

        target_results = (page + 1) * self.page_size
        filtered_results: list[SearchResult] = []
        raw_results: list[SearchResult] = []
        engine_cursor: str | None = None
        budget_exhausted = False
        fetch_count = 0

        state = LoopState.FETCHING
        while state != LoopState.DONE:
            if state == LoopState.FETCHING:
                raw_results, engine_cursor = await self._fetch(
                    query, authorized_types, engine_cursor, options
                )
                fetch_count += 1
                state = LoopState.FILTERING
            elif state == LoopState.FILTERING:
                filtered_results.extend(
                    await self.result_filter.filter_results(
                        raw_results, type_decisions, batcher
                    )
                )
                state = LoopState.CHECK_STOP
            else:
                elapsed_ms = (self._clock() - query_start) * 1000
                # A zero budget allows exactly one cycle even if the clock has not ticked.
                budget_exhausted = (
                    self.query_latency_budget_ms == 0
                    or elapsed_ms > self.query_latency_budget_ms
                )
                logger.debug(
                    "Fetch %d: %d authorized of %d needed, elapsed %.1fms",
                    fetch_count,
                    len(filtered_results),
                    target_results,
                    elapsed_ms,
                )
                if (
                    engine_cursor
                    and len(filtered_results) < target_results
                    and not budget_exhausted
                ):
                    state = LoopState.FETCHING
                else:
                    state = LoopState.DONE

        if budget_exhausted:
            logger.warning(
                "Search latency budget of %dms exhausted after %d fetch(es); "
                "returning %d authorized result(s)",
                self.query_latency_budget_ms,
                fetch_count,
                len(filtered_results),
            )
        add_span_attributes(
            page=page, fetch_count=fetch_count, budget_exhausted=budget_exhausted
        )

        has_next_page = not budget_exhausted and (
            bool(engine_cursor) or len(filtered_results) > target_results
        )
        return SearchResultSet(
            results=filtered_results[page * self.page_size : target_results],
            previous_page_cursor=previous_page_cursor,
            next_page_cursor=encode_page_cursor(page + 1) if has_next_page else None,
        )

    async def _fetch(
        self,
        query: SearchQuery,
        authorized_types: list[str],
        engine_cursor: str | None,
        options: QueryRequestOptions,
    ) -> tuple[list[SearchResult], str | None]:
        engine_query = dataclasses.replace(
            query, types=authorized_types, page_cursor=engine_cursor
        )
        try:
            result_set = await self.search_engine.query(engine_query, options)
        except SearchGatewayException:
            raise
        except Exception as e:
            raise UpstreamQueryException(str(e)) from e
        return result_set.results, result_set.next_page_cursor


class SearchService:
    """Search without authorization: the engine's page is returned as is.

    Used when search permissions are disabled.
    """

    def __init__(self, search_engine: "ISearchEngine") -> None:
        self.search_engine = search_engine

    async def query(
        self, query: SearchQuery, options: QueryRequestOptions
    ) -> SearchResultSet:
        """Delegate to the engine; raw failures become UpstreamQueryException."""
        try:
            return await self.search_engine.query(query, options)
        except SearchGatewayException:
            raise
        except Exception as e:
            raise UpstreamQueryException(str(e)) from e
