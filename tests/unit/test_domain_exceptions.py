"""Tests for domain exceptions (error_code, message, details)."""

from authsearch.domain.exceptions import (
    AuthorizationFailureException,
    InvalidConfigurationException,
    InvalidCursorException,
    SearchGatewayException,
    UpstreamQueryException,
    ValidationException,
)


def test_base_exception_default_error_code() -> None:
    """Base SearchGatewayException uses class name as error_code when not provided."""
    exc = SearchGatewayException("Something failed")
    assert exc.message == "Something failed"
    assert exc.error_code == "SearchGatewayException"
    assert exc.details == {}


def test_base_exception_to_dict() -> None:
    exc = SearchGatewayException("Oops", error_code="CUSTOM", details={"key": "value"})
    assert exc.to_dict() == {
        "error": "CUSTOM",
        "message": "Oops",
        "details": {"key": "value"},
    }


def test_validation_exception() -> None:
    exc = ValidationException("Invalid format", field="types")
    assert exc.error_code == "VALIDATION_ERROR"
    assert exc.details == {"field": "types"}


def test_validation_exception_without_field() -> None:
    assert ValidationException("Invalid").details == {}


def test_invalid_configuration_exception() -> None:
    exc = InvalidConfigurationException("conflict", options=["a", "b"])
    assert exc.error_code == "INVALID_CONFIGURATION"
    assert exc.details == {"options": ["a", "b"]}


def test_invalid_cursor_exception() -> None:
    exc = InvalidCursorException("abc")
    assert exc.error_code == "INVALID_CURSOR"
    assert exc.details == {"cursor": "abc"}


def test_upstream_query_exception_with_status() -> None:
    exc = UpstreamQueryException("bad gateway", status_code=502)
    assert exc.error_code == "UPSTREAM_QUERY_FAILED"
    assert exc.details == {"reason": "bad gateway", "status_code": 502}


def test_authorization_failure_exception_without_status() -> None:
    exc = AuthorizationFailureException("timeout")
    assert exc.error_code == "AUTHORIZATION_FAILED"
    assert exc.details == {"reason": "timeout"}
