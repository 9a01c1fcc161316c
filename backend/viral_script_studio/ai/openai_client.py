"""OpenAI-compatible client wrapper for the Gemini endpoint, with an offline demo mode."""

from __future__ import annotations

import json
import logging
from typing import Any, Dict, List, Optional

from openai import OpenAI

from ..config import Settings
from .adapters import get_adapter
from .prompts import ANALYSIS_SCHEMA_NAME, GENERATION_SCHEMA_NAME

logger = logging.getLogger(__name__)


def _last_user_block(messages: List[Dict[str, str]], marker: str) -> str:
    """Return the quoted block that follows `marker` in the last user message."""
    content = messages[-1]["content"] if messages else ""
    _, _, tail = content.partition(f'{marker}:\n"""\n')
    return tail.split('\n"""', 1)[0].strip()


def _demo_analysis(messages: List[Dict[str, str]]) -> dict:
    script = _last_user_block(messages, "Original Viral Script")
    opening = script.splitlines()[0][:40] if script else "인사"
    return {
        "structuralAnalysis": [
            f"도입부 '{opening}'로 시청자의 주의를 즉시 끌어옵니다.",
            "문제 제기 후 해결책을 단계적으로 제시합니다.",
            "마지막에 구독과 좋아요를 자연스럽게 요청합니다.",
        ],
        "tone": "친근하고 유머러스한 톤",
        "hookStrategy": "질문으로 시작해 궁금증을 유발",
        "suggestedTopics": [
            "혼자 사는 사람을 위한 10분 요리",
            "월급 관리 첫걸음",
            "초보자를 위한 홈트레이닝",
            "고양이 키우기",
        ],
    }


def _demo_rewrite(messages: List[Dict[str, str]]) -> dict:
    topic = _last_user_block(messages, "Target Topic") or "새로운 주제"
    return {
        "title": f"{topic}, 이것만 알면 끝!",
        "script": (
            f"# {topic}\n\n"
            f"여러분, {topic}에 대해 제대로 알고 계신가요?\n\n"
            "## 문제\n\n대부분의 사람들이 놓치는 한 가지가 있습니다.\n\n"
            "## 해결\n\n오늘 알려드리는 방법만 따라 하시면 됩니다.\n\n"
            "## 마무리\n\n도움이 되셨다면 구독과 좋아요 부탁드립니다!"
        ),
    }


class _DemoCompletions:
    """Imitates `chat.completions.create` with canned JSON replies."""

    _builders = {
        ANALYSIS_SCHEMA_NAME: _demo_analysis,
        GENERATION_SCHEMA_NAME: _demo_rewrite,
    }

    def create(self, *, messages, model: str, response_format: dict, **_kwargs):
        schema_name = response_format["json_schema"]["name"]
        payload = self._builders[schema_name](messages)
        return {
            "choices": [
                {"message": {"role": "assistant", "content": json.dumps(payload, ensure_ascii=False)}}
            ],
            "model": "demo-offline",
        }


class _DemoChat:
    def __init__(self):
        self.completions = _DemoCompletions()


class _DemoClient:
    """Offline stand-in shaped like the OpenAI client."""

    def __init__(self):
        self.chat = _DemoChat()


class ScriptModelClient:
    """Single-endpoint chat client with structured JSON output.

    One SDK client is cached per API key so a key change in the UI takes
    effect on the next call. Calls are made once; failures propagate.
    """

    def __init__(self, settings: Settings):
        self.settings = settings
        self.adapter = get_adapter(settings.response_adapter)
        self._clients: Dict[tuple[str, str | None], OpenAI] = {}
        self._demo_client: Optional[_DemoClient] = None

    @property
    def demo_mode(self) -> bool:
        return self.settings.demo_mode

    def _get_demo_client(self) -> _DemoClient:
        if not self._demo_client:
            self._demo_client = _DemoClient()
        return self._demo_client

    def _get_live_client(self, api_key: str) -> OpenAI:
        client_key = (api_key, self.settings.base_url)
        client = self._clients.get(client_key)
        if not client:
            client = OpenAI(api_key=api_key, base_url=self.settings.base_url)
            self._clients[client_key] = client
        return client

    def _client_for(self, api_key: str | None) -> Any:
        if self.demo_mode:
            return self._get_demo_client()
        if not api_key:
            raise ValueError("api_key is required outside demo mode")
        return self._get_live_client(api_key)

    def complete(
        self,
        api_key: str | None,
        messages: List[Dict[str, str]],
        schema_name: str,
        schema: dict,
        max_tokens: int,
    ) -> str:
        """Send one structured-output request and return the raw reply text."""
        client = self._client_for(api_key)
        prompt_length = sum(len(m["content"]) for m in messages)
        logger.info(
            f"Requesting {schema_name} from model={self.settings.model}, prompt_length={prompt_length}"
        )
        resp = client.chat.completions.create(
            model=self.settings.model,
            messages=messages,
            temperature=self.settings.temperature,
            max_tokens=max_tokens,
            response_format={
                "type": "json_schema",
                "json_schema": {"name": schema_name, "schema": schema, "strict": True},
            },
        )
        text = self.adapter.extract_text(resp)
        logger.info(f"Received {schema_name} reply, output_length={len(text)}")
        return text
