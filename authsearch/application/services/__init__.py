"""Application services: cursor codec, decision batching, type and result authorization."""

from authsearch.application.services.decision_batcher import DecisionBatcher
from authsearch.application.services.page_cursor import (
    decode_page_cursor,
    encode_page_cursor,
)
from authsearch.application.services.result_filter import ResultFilter
from authsearch.application.services.type_authorizer import TypeAuthorizer

__all__ = [
    "DecisionBatcher",
    "ResultFilter",
    "TypeAuthorizer",
    "decode_page_cursor",
    "encode_page_cursor",
]
