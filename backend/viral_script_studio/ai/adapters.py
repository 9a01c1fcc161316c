"""Response adapters: pull the reply text out of a chat completion.

Each adapter understands exactly one reply shape. The client picks one from
settings at construction time.
"""

from __future__ import annotations

from typing import Any


def _join_parts(content: Any) -> str:
    if content is None:
        return ""
    if isinstance(content, str):
        return content
    if isinstance(content, list):
        parts: list[str] = []
        for item in content:
            text_value = item.get("text") if isinstance(item, dict) else getattr(item, "text", None)
            if isinstance(text_value, str):
                parts.append(text_value)
        return "\n".join(parts)
    return ""


class SdkResponseAdapter:
    """Reads `ChatCompletion` objects returned by the openai SDK."""

    name = "sdk"

    def extract_text(self, resp: Any) -> str:
        choices = getattr(resp, "choices", None) or []
        if not choices:
            return ""
        message = getattr(choices[0], "message", None)
        return _join_parts(getattr(message, "content", None)).strip()


class DictResponseAdapter:
    """Reads plain-dict completions (offline demo client)."""

    name = "dict"

    def extract_text(self, resp: Any) -> str:
        choices = resp.get("choices") or []
        if not choices:
            return ""
        message = choices[0].get("message") or {}
        return _join_parts(message.get("content")).strip()


ADAPTERS = {
    SdkResponseAdapter.name: SdkResponseAdapter,
    DictResponseAdapter.name: DictResponseAdapter,
}


def get_adapter(name: str):
    try:
        return ADAPTERS[name]()
    except KeyError:
        raise ValueError(f"Unknown response adapter: {name}. Use 'sdk' or 'dict'.") from None
