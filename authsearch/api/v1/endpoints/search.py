"""Search API: authorized, cursor-paginated search over the underlying engine."""

import json
from typing import Annotated, Any
from urllib.parse import urljoin, urlparse

from fastapi import APIRouter, Depends, Query

from authsearch.api.v1.dependencies import get_request_options, get_search_service
from authsearch.application.dtos.search import (
    QueryRequestOptions,
    SearchQuery,
    SearchResultSet,
)
from authsearch.application.use_cases.search import (
    AuthorizedSearchService,
    SearchService,
)
from authsearch.core.config import get_settings
from authsearch.domain.exceptions import ValidationException
from authsearch.schemas.search import SearchResultSetResponse
from authsearch.shared.telemetry.logging import get_logger

logger = get_logger(__name__)

router = APIRouter()

# Base for resolving relative document locations before reading their scheme.
_LOCATION_BASE = "https://example.com"


def _parse_filters(filters: str | None) -> dict[str, Any] | None:
    """Parse the JSON filters parameter; must be an object."""
    if not filters:
        return None
    try:
        parsed = json.loads(filters)
    except json.JSONDecodeError as e:
        raise ValidationException(f"filters is not valid JSON: {e.msg}", field="filters") from e
    if not isinstance(parsed, dict):
        raise ValidationException("filters must be a JSON object", field="filters")
    return parsed


def filter_unsafe_locations(
    result_set: SearchResultSet, allowed_protocols: frozenset[str]
) -> SearchResultSet:
    """Drop results whose document location uses a scheme outside allowed_protocols."""
    safe = []
    for result in result_set.results:
        location = urljoin(_LOCATION_BASE, result.document.location)
        protocol = urlparse(location).scheme.lower()
        if protocol in allowed_protocols:
            safe.append(result)
        else:
            logger.info(
                'Rejected search result for "%s" as location protocol "%s:" is unsafe',
                result.document.title,
                protocol,
            )
    return SearchResultSet(
        results=safe,
        previous_page_cursor=result_set.previous_page_cursor,
        next_page_cursor=result_set.next_page_cursor,
    )


@router.get("/query", response_model=SearchResultSetResponse)
async def query(
    search_svc: Annotated[
        AuthorizedSearchService | SearchService, Depends(get_search_service)
    ],
    options: Annotated[QueryRequestOptions, Depends(get_request_options)],
    term: str = Query("", max_length=500),
    types: list[str] | None = Query(None, description="Document types to search"),
    filters: str | None = Query(None, description="JSON object of engine filters"),
    page_cursor: str | None = Query(None, description="Cursor from a previous response"),
):
    """Return one page of results the caller is authorized to see."""
    logger.info(
        'Search request received: term="%s", filters=%s, types=%s, page_cursor=%s',
        term,
        filters or "",
        ",".join(types) if types else "",
        page_cursor or "",
    )
    search_query = SearchQuery(
        term=term,
        filters=_parse_filters(filters),
        types=types,
        page_cursor=page_cursor,
    )
    result_set = await search_svc.query(search_query, options)
    safe = filter_unsafe_locations(result_set, get_settings().location_protocols())
    return SearchResultSetResponse.from_result_set(safe)
