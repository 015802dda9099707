"""Error Hierarchy: tests for codes, categories, and the response envelope."""

from snowboard_swap.core.errors import (
    APIError,
    DomainMappingError,
    ErrorCategory,
    ErrorContext,
    HTTPStatusError,
    IncorrectPasswordError,
    ServerMessageError,
    SnowboardSwapError,
    UsernameTakenError,
)


def test_account_errors_carry_field_and_category():
    error = IncorrectPasswordError()
    assert error.field == "password"
    assert error.category is ErrorCategory.AUTHENTICATION
    assert UsernameTakenError("alice").field == "username"


def test_domain_mapping_error_names_value():
    error = DomainMappingError("condition", "mint")
    assert "mint" in error.message
    assert error.value == "mint"
    assert isinstance(error, APIError)


def test_http_status_error_keeps_code_and_body():
    error = HTTPStatusError(503, b"upstream down")
    assert error.status_code == 503
    assert error.body == b"upstream down"
    assert "503" in str(error)


def test_server_message_error_uses_server_text():
    error = ServerMessageError(409, b'{"message":"Email in use"}', "Email in use")
    assert isinstance(error, HTTPStatusError)
    assert error.message == "Email in use"
    assert str(error) == "Email in use"
    assert error.code == "SERVER_MESSAGE"


def test_to_response_envelope():
    error = HTTPStatusError(
        500, b"", context=ErrorContext(method="GET", path="/listings"),
    )
    envelope = error.to_response()["error"]
    assert envelope["code"] == "HTTP_STATUS_ERROR"
    assert envelope["category"] == "external_api"
    assert envelope["context"]["path"] == "/listings"
    assert isinstance(error, SnowboardSwapError)
