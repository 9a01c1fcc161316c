"""Shared fakes standing in for the openai SDK client."""

import json
from types import SimpleNamespace

import pytest

from viral_script_studio.ai import openai_client as openai_client_module
from viral_script_studio.config import Settings

ANALYSIS_REPLY = {
    "structuralAnalysis": ["질문으로 시작하는 오프닝", "세 단계 문제 해결 구성", "구독 유도 엔딩"],
    "tone": "유머러스",
    "hookStrategy": "질문으로 시작",
    "suggestedTopics": ["고양이 키우기", "자취 요리", "주식 입문", "아침 루틴"],
}

GENERATION_REPLY = {
    "title": "고양이 키우기, 이것만 알면 끝!",
    "script": "# 고양이 키우기\n\n여러분, 고양이를 키우고 싶으신가요?",
}

SAMPLE_SCRIPT = (
    "안녕하세요 오늘은 여러분이 매일 하는 실수 하나를 알려드리려고 합니다. "
    "혹시 아침에 일어나자마자 휴대폰부터 보시나요? 그렇다면 이 영상을 끝까지 보셔야 합니다. "
    "첫 번째, 알림을 확인하는 순간 뇌는 반응 모드로 바뀝니다. "
    "두 번째, 하루의 우선순위가 남의 요청으로 채워집니다. "
    "세 번째, 집중력이 오후까지 회복되지 않습니다. "
    "오늘부터 딱 십 분만 휴대폰을 멀리 두세요. 도움이 되셨다면 구독과 좋아요 부탁드립니다!"
)


def sdk_response(content):
    """Shape a reply like an SDK `ChatCompletion` object."""
    message = SimpleNamespace(role="assistant", content=content)
    return SimpleNamespace(choices=[SimpleNamespace(message=message)], model="fake")


class _FakeCompletions:
    def create(self, **kwargs):
        FakeOpenAI.calls.append(kwargs)
        reply = FakeOpenAI.queued.pop(0)
        if isinstance(reply, Exception):
            raise reply
        return reply


class FakeOpenAI:
    """Records every `chat.completions.create` call and replays queued replies."""

    instances = []
    calls = []
    queued = []

    def __init__(self, api_key, base_url=None):
        self.api_key = api_key
        self.base_url = base_url
        self.chat = SimpleNamespace(completions=_FakeCompletions())
        FakeOpenAI.instances.append(self)


@pytest.fixture
def fake_openai(monkeypatch):
    FakeOpenAI.instances = []
    FakeOpenAI.calls = []
    FakeOpenAI.queued = []
    monkeypatch.setattr(openai_client_module, "OpenAI", FakeOpenAI)
    return FakeOpenAI


@pytest.fixture
def settings(tmp_path):
    return Settings(credential_path=tmp_path / "credentials.json")


def json_reply(payload):
    return sdk_response(json.dumps(payload, ensure_ascii=False))
