"""Search API schemas."""

from pydantic import BaseModel, Field

from authsearch.application.dtos.search import SearchResult, SearchResultSet


class SearchDocumentResponse(BaseModel):
    """Document of a search hit. Authorization metadata is not exposed."""

    title: str
    text: str = ""
    location: str


class SearchResultResponse(BaseModel):
    """Single authorized search hit."""

    type: str = Field(..., description="Document type, e.g. software-catalog")
    document: SearchDocumentResponse
    rank: int | None = None

    @classmethod
    def from_result(cls, result: SearchResult) -> "SearchResultResponse":
        return cls(
            type=result.type,
            document=SearchDocumentResponse(
                title=result.document.title,
                text=result.document.text,
                location=result.document.location,
            ),
            rank=result.rank,
        )


class SearchResultSetResponse(BaseModel):
    """One page of search results with cursors for neighbouring pages."""

    results: list[SearchResultResponse]
    previous_page_cursor: str | None = None
    next_page_cursor: str | None = None

    @classmethod
    def from_result_set(cls, result_set: SearchResultSet) -> "SearchResultSetResponse":
        return cls(
            results=[SearchResultResponse.from_result(r) for r in result_set.results],
            previous_page_cursor=result_set.previous_page_cursor,
            next_page_cursor=result_set.next_page_cursor,
        )
