"""Error taxonomy shared by the analysis and generation requestors."""

from __future__ import annotations

import openai


class ViralScriptError(Exception):
    """Base class for failures surfaced to the user."""

    category = "unknown"
    user_message = "알 수 없는 오류가 발생했습니다. 다시 시도해주세요."

    def __init__(self, detail: str = ""):
        self.detail = detail
        super().__init__(detail or self.user_message)


class ConfigurationError(ViralScriptError):
    category = "configuration"
    user_message = (
        "API 키가 설정되지 않았거나 유효하지 않습니다. "
        "사이드바에서 올바른 API 키를 입력해주세요."
    )


class RateLimitError(ViralScriptError):
    category = "rate_limit"
    user_message = "API 사용량 한도를 초과했습니다. 잠시 후 다시 시도해주세요."


class EmptyResponseError(ViralScriptError):
    category = "empty_response"
    user_message = "AI로부터 응답을 받지 못했습니다. 다시 시도해주세요."


class ParseError(ViralScriptError):
    category = "parse"
    user_message = "AI 응답을 파싱하는 중 오류가 발생했습니다. 다시 시도해주세요."


class UnknownError(ViralScriptError):
    category = "unknown"

    @property
    def user_message(self) -> str:  # type: ignore[override]
        return f"요청 처리 중 오류가 발생했습니다: {self.detail or '알 수 없는 오류'}"


class SessionBusyError(RuntimeError):
    """A request was started while the same slot is still in flight."""


def _mentions_api_key(message: str) -> bool:
    lowered = message.lower()
    return "api key" in lowered or "api_key" in lowered


def map_api_error(exc: Exception) -> ViralScriptError:
    """Translate an SDK or transport exception into the taxonomy."""
    message = str(exc)
    if isinstance(exc, (openai.AuthenticationError, openai.PermissionDeniedError)):
        return ConfigurationError(message)
    # Gemini reports a malformed key as 400 INVALID_ARGUMENT.
    if isinstance(exc, openai.BadRequestError) and _mentions_api_key(message):
        return ConfigurationError(message)
    if isinstance(exc, openai.RateLimitError) or "quota" in message.lower():
        return RateLimitError(message)
    return UnknownError(message)
