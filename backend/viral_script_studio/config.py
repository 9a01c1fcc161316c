"""Runtime settings read from the environment."""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path

DEFAULT_MODEL = "gemini-2.0-flash"
DEFAULT_BASE_URL = "https://generativelanguage.googleapis.com/v1beta/openai/"
DEFAULT_CREDENTIAL_PATH = Path.home() / ".viral_script_studio" / "credentials.json"
RESPONSE_ADAPTERS = ("sdk", "dict")
CREDENTIAL_STORES = ("session", "file")

_TRUTHY = {"1", "true", "yes", "on"}


def _read_env(name: str) -> str | None:
    value = os.getenv(name)
    if value is None:
        return None
    value = value.strip()
    return value or None


def _read_float(name: str, default: float) -> float:
    raw = _read_env(name)
    if raw is None:
        return default
    try:
        return float(raw)
    except ValueError as exc:
        raise ValueError(f"{name} must be a number, got {raw!r}") from exc


def _read_int(name: str, default: int) -> int:
    raw = _read_env(name)
    if raw is None:
        return default
    try:
        return int(raw)
    except ValueError as exc:
        raise ValueError(f"{name} must be an integer, got {raw!r}") from exc


@dataclass(frozen=True)
class Settings:
    """Model routing, limits and local storage locations."""

    model: str = DEFAULT_MODEL
    base_url: str | None = DEFAULT_BASE_URL
    temperature: float = 0.8
    analysis_max_tokens: int = 2048
    generation_max_tokens: int = 4096
    response_adapter: str = "sdk"
    credential_store: str = "session"
    credential_path: Path = DEFAULT_CREDENTIAL_PATH
    demo_mode: bool = False
    default_api_key: str | None = None
    log_level: str = "INFO"

    @classmethod
    def from_env(cls) -> "Settings":
        demo_mode = (_read_env("VSS_DEMO_MODE") or "").lower() in _TRUTHY
        adapter = (_read_env("VSS_RESPONSE_ADAPTER") or "sdk").lower()
        if adapter not in RESPONSE_ADAPTERS:
            raise ValueError(
                f"VSS_RESPONSE_ADAPTER must be one of {', '.join(RESPONSE_ADAPTERS)}, got {adapter!r}"
            )
        # The offline client answers with plain dicts.
        if demo_mode:
            adapter = "dict"

        credential_store = (_read_env("VSS_CREDENTIAL_STORE") or "session").lower()
        if credential_store not in CREDENTIAL_STORES:
            raise ValueError(
                f"VSS_CREDENTIAL_STORE must be one of {', '.join(CREDENTIAL_STORES)}, got {credential_store!r}"
            )

        credential_path = _read_env("VSS_CREDENTIAL_PATH")
        return cls(
            model=_read_env("VSS_MODEL") or DEFAULT_MODEL,
            base_url=_read_env("VSS_BASE_URL") or DEFAULT_BASE_URL,
            temperature=_read_float("VSS_TEMPERATURE", 0.8),
            analysis_max_tokens=_read_int("VSS_ANALYSIS_MAX_TOKENS", 2048),
            generation_max_tokens=_read_int("VSS_GENERATION_MAX_TOKENS", 4096),
            response_adapter=adapter,
            credential_store=credential_store,
            credential_path=Path(credential_path).expanduser()
            if credential_path
            else DEFAULT_CREDENTIAL_PATH,
            demo_mode=demo_mode,
            default_api_key=_read_env("GEMINI_API_KEY") or _read_env("API_KEY"),
            log_level=(_read_env("VSS_LOG_LEVEL") or "INFO").upper(),
        )
