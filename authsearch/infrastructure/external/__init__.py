"""External collaborators reached over HTTP (search engine, permission backend)."""

from authsearch.infrastructure.external.permission_client import HttpPermissionAuthorizer
from authsearch.infrastructure.external.search_engine_client import HttpSearchEngineClient

__all__ = ["HttpPermissionAuthorizer", "HttpSearchEngineClient"]
