"""Service container wiring."""

import pytest

from viral_script_studio.ai.openai_client import ScriptModelClient
from viral_script_studio.app import SESSION_KEY_SLOT, create_app
from viral_script_studio.config import Settings
from viral_script_studio.credentials import CredentialManager


@pytest.fixture(autouse=True)
def _session_store_by_default(monkeypatch):
    monkeypatch.delenv("VSS_CREDENTIAL_STORE", raising=False)


def _clear_key_env(monkeypatch):
    monkeypatch.delenv("GEMINI_API_KEY", raising=False)
    monkeypatch.delenv("API_KEY", raising=False)


def test_app_constructs(tmp_path):
    app = create_app(Settings(credential_path=tmp_path / "credentials.json"))
    assert {"settings", "credentials_for", "ai_client"}.issubset(app.keys())
    assert isinstance(app["ai_client"], ScriptModelClient)
    assert isinstance(app["credentials_for"]({}), CredentialManager)


def test_app_reads_key_from_environment(monkeypatch, tmp_path):
    monkeypatch.setenv("GEMINI_API_KEY", "env-gemini-key")
    monkeypatch.setenv("VSS_CREDENTIAL_PATH", str(tmp_path / "credentials.json"))

    credentials = create_app()["credentials_for"]({})

    assert credentials.get() == "env-gemini-key"
    assert credentials.source == "env"


def test_user_keys_stay_in_their_own_session(monkeypatch):
    _clear_key_env(monkeypatch)
    app = create_app()
    alice_state, bob_state = {}, {}
    alice = app["credentials_for"](alice_state)
    bob = app["credentials_for"](bob_state)

    alice.set("alice-key")

    assert alice.get() == "alice-key"
    assert bob.get() is None
    assert alice_state[SESSION_KEY_SLOT] == "alice-key"
    assert SESSION_KEY_SLOT not in bob_state
    # A fresh manager over the same session state still sees the key.
    assert app["credentials_for"](alice_state).get() == "alice-key"


def test_environment_default_is_shared_by_every_session(monkeypatch):
    monkeypatch.setenv("GEMINI_API_KEY", "shared-default")
    app = create_app()
    first = app["credentials_for"]({})
    second = app["credentials_for"]({})

    first.set("first-only")

    assert first.get() == "first-only"
    assert second.get() == "shared-default"
    assert second.source == "env"


def test_session_store_never_touches_disk(monkeypatch, tmp_path):
    _clear_key_env(monkeypatch)
    path = tmp_path / "credentials.json"
    monkeypatch.setenv("VSS_CREDENTIAL_PATH", str(path))

    create_app()["credentials_for"]({}).set("in-memory-only")

    assert not path.exists()


def test_file_store_persists_across_app_instances(monkeypatch, tmp_path):
    _clear_key_env(monkeypatch)
    monkeypatch.setenv("VSS_CREDENTIAL_STORE", "file")
    monkeypatch.setenv("VSS_CREDENTIAL_PATH", str(tmp_path / "credentials.json"))
    create_app()["credentials_for"]({}).set("saved-earlier")

    assert create_app()["credentials_for"]({}).get() == "saved-earlier"
