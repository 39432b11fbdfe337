"""Application configuration (settings and environment).

Single source of truth for all configuration. Uses pydantic-settings
with .env support. Conflicting options are rejected at load time, never
at query time.
"""

from functools import lru_cache

from pydantic import model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from authsearch.application.dtos.search import DocumentTypeInfo
from authsearch.domain.exceptions import InvalidConfigurationException


class Settings(BaseSettings):
    """Application settings loaded from environment and .env.

    Complex values (search_document_types, search_include_types,
    search_exclude_types) are read from the environment as JSON, e.g.
    SEARCH_DOCUMENT_TYPES='{"software-catalog": "catalog.entity.read", "docs": null}'.
    """

    # App
    app_name: str = "authsearch"
    app_version: str = "1.0.0"
    debug: bool = False

    # Authorized search
    search_permissions_enabled: bool = True
    search_page_size: int = 25
    search_query_latency_budget_ms: int = 1000
    # False keeps results that cannot be checked per resource (fail open).
    search_permissions_require_resource_ref: bool = False
    search_authorize_max_batch_size: int | None = None

    # Document type registry: type name -> visibility permission (None = public type)
    search_document_types: dict[str, str | None] = {}
    # Result-restriction filters over the registry; at most one may be set.
    search_include_types: list[str] | None = None
    search_exclude_types: list[str] | None = None

    # Collaborators
    search_engine_url: str = "http://localhost:7007/api/search-engine"
    permission_backend_url: str = "http://localhost:7007/api/permission"
    http_timeout_seconds: float = 10.0

    # Location safety post-filter (comma-separated URL schemes)
    allowed_location_protocols: str = "http,https"

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        case_sensitive=False,
    )

    @model_validator(mode="after")
    def validate_search(self) -> "Settings":
        """Validate search options.

        - search_include_types and search_exclude_types are mutually exclusive
          (InvalidConfigurationException).
        - Page size must be positive and the latency budget non-negative.
        """
        if self.search_include_types and self.search_exclude_types:
            raise InvalidConfigurationException(
                "search_include_types and search_exclude_types are mutually "
                "exclusive, only one can be specified.",
                options=["search_include_types", "search_exclude_types"],
            )
        if self.search_page_size < 1:
            raise ValueError(
                f"search_page_size must be >= 1, got: {self.search_page_size}"
            )
        if self.search_query_latency_budget_ms < 0:
            raise ValueError(
                "search_query_latency_budget_ms must be >= 0, got: "
                f"{self.search_query_latency_budget_ms}"
            )
        return self

    def document_types(self) -> dict[str, DocumentTypeInfo]:
        """Return the searchable type registry after include/exclude restriction."""
        types = self.search_document_types
        if self.search_include_types:
            names = [t for t in types if t in self.search_include_types]
        elif self.search_exclude_types:
            names = [t for t in types if t not in self.search_exclude_types]
        else:
            names = list(types)
        return {
            name: DocumentTypeInfo(visibility_permission=types[name])
            for name in names
        }

    def location_protocols(self) -> frozenset[str]:
        """Allowed URL schemes, lowercased, without trailing colon."""
        return frozenset(
            p.strip().lower().rstrip(":")
            for p in self.allowed_location_protocols.split(",")
            if p.strip()
        )


@lru_cache
def get_settings() -> Settings:
    """Return cached application settings (single instance per process).

    Validation runs on first call, not at import time. In tests, call
    get_settings.cache_clear() before overriding env vars so the next
    get_settings() uses the new values.

    Returns:
        Loaded and validated Settings instance.
    """
    return Settings()
