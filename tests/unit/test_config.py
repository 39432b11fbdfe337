"""Settings: search defaults, type registry restriction, fail-fast validation."""

import pytest

from authsearch.application.dtos.search import DocumentTypeInfo
from authsearch.core.config import Settings
from authsearch.domain.exceptions import InvalidConfigurationException


def test_search_defaults() -> None:
    settings = Settings(_env_file=None)
    assert settings.search_page_size == 25
    assert settings.search_query_latency_budget_ms == 1000
    assert settings.search_permissions_enabled is True
    assert settings.search_permissions_require_resource_ref is False


def test_document_types_from_env_json(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv(
        "SEARCH_DOCUMENT_TYPES", '{"catalog": "catalog.entity.read", "docs": null}'
    )
    settings = Settings(_env_file=None)
    assert settings.document_types() == {
        "catalog": DocumentTypeInfo(visibility_permission="catalog.entity.read"),
        "docs": DocumentTypeInfo(),
    }


def test_include_types_restricts_registry() -> None:
    settings = Settings(
        _env_file=None,
        search_document_types={"a": None, "b": "b.read", "c": None},
        search_include_types=["b", "c"],
    )
    assert list(settings.document_types()) == ["b", "c"]


def test_exclude_types_restricts_registry() -> None:
    settings = Settings(
        _env_file=None,
        search_document_types={"a": None, "b": "b.read", "c": None},
        search_exclude_types=["a"],
    )
    assert list(settings.document_types()) == ["b", "c"]


def test_include_and_exclude_are_mutually_exclusive() -> None:
    with pytest.raises(InvalidConfigurationException) as exc_info:
        Settings(
            _env_file=None,
            search_include_types=["a"],
            search_exclude_types=["b"],
        )
    assert exc_info.value.error_code == "INVALID_CONFIGURATION"
    assert exc_info.value.details["options"] == [
        "search_include_types",
        "search_exclude_types",
    ]


def test_page_size_must_be_positive() -> None:
    with pytest.raises(ValueError):
        Settings(_env_file=None, search_page_size=0)


def test_budget_must_not_be_negative() -> None:
    with pytest.raises(ValueError):
        Settings(_env_file=None, search_query_latency_budget_ms=-1)


def test_location_protocols_normalized() -> None:
    settings = Settings(_env_file=None, allowed_location_protocols="HTTP:, https ,")
    assert settings.location_protocols() == frozenset({"http", "https"})
