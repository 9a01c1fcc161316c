"""SDK exceptions map onto the user-facing error taxonomy."""

import httpx
import openai

from viral_script_studio.errors import (
    ConfigurationError,
    RateLimitError,
    UnknownError,
    map_api_error,
)

_REQUEST = httpx.Request("POST", "https://generativelanguage.googleapis.com/v1beta/openai/chat/completions")


def _status_error(cls, status, message):
    return cls(message, response=httpx.Response(status, request=_REQUEST), body=None)


def test_authentication_failures_are_configuration_errors():
    exc = _status_error(openai.AuthenticationError, 401, "Incorrect API key provided")
    assert isinstance(map_api_error(exc), ConfigurationError)

    exc = _status_error(openai.PermissionDeniedError, 403, "Permission denied")
    assert isinstance(map_api_error(exc), ConfigurationError)


def test_invalid_key_reported_as_bad_request_is_configuration_error():
    exc = _status_error(openai.BadRequestError, 400, "API key not valid. Please pass a valid API key.")
    assert isinstance(map_api_error(exc), ConfigurationError)


def test_other_bad_requests_are_unknown():
    exc = _status_error(openai.BadRequestError, 400, "Invalid JSON payload received.")
    mapped = map_api_error(exc)
    assert isinstance(mapped, UnknownError)
    assert "Invalid JSON payload" in mapped.user_message


def test_rate_limit_and_quota_messages():
    exc = _status_error(openai.RateLimitError, 429, "Too many requests")
    assert isinstance(map_api_error(exc), RateLimitError)
    assert isinstance(map_api_error(RuntimeError("Resource has been exhausted (e.g. check quota).")), RateLimitError)


def test_anything_else_is_unknown_with_message():
    mapped = map_api_error(ConnectionError("connection reset"))
    assert isinstance(mapped, UnknownError)
    assert mapped.detail == "connection reset"
    assert "connection reset" in mapped.user_message


def test_every_category_has_a_localized_message():
    for cls in (ConfigurationError, RateLimitError, UnknownError):
        assert cls("detail").user_message
    assert "API 키" in ConfigurationError().user_message
