"""API key storage.

A user-entered key lives in one named slot. On a shared server that slot is the
visitor's Streamlit session state; a single-user local run can use a small
JSON file instead so the key survives restarts.
`CredentialManager` layers the environment default and user input on top of
whichever store it is given; tests pass a `MemoryCredentialStore`.
"""

from __future__ import annotations

import json
import logging
import os
from pathlib import Path
from typing import MutableMapping

logger = logging.getLogger(__name__)

CREDENTIAL_SLOT = "gemini_api_key"


class CredentialStore:
    """Durable single-slot key/value store."""

    def load(self) -> str | None:
        raise NotImplementedError

    def save(self, key: str) -> None:
        raise NotImplementedError

    def clear(self) -> None:
        raise NotImplementedError


class MemoryCredentialStore(CredentialStore):
    def __init__(self, key: str | None = None):
        self._key = key

    def load(self) -> str | None:
        return self._key

    def save(self, key: str) -> None:
        self._key = key

    def clear(self) -> None:
        self._key = None


class SessionCredentialStore(CredentialStore):
    """Keeps the key in one per-visitor mapping such as `st.session_state`."""

    def __init__(self, state: MutableMapping, slot: str = CREDENTIAL_SLOT):
        self._state = state
        self._slot = slot

    def load(self) -> str | None:
        value = self._state.get(self._slot)
        return value if isinstance(value, str) and value else None

    def save(self, key: str) -> None:
        self._state[self._slot] = key

    def clear(self) -> None:
        if self._slot in self._state:
            del self._state[self._slot]


class FileCredentialStore(CredentialStore):
    def __init__(self, path: Path | str):
        self.path = Path(path)

    def _read(self) -> dict:
        if not self.path.exists():
            return {}
        try:
            data = json.loads(self.path.read_text(encoding="utf-8"))
        except (OSError, json.JSONDecodeError) as exc:
            logger.warning(f"Ignoring unreadable credential file {self.path}: {exc}")
            return {}
        return data if isinstance(data, dict) else {}

    def _write(self, data: dict) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        self.path.write_text(json.dumps(data, indent=2), encoding="utf-8")
        os.chmod(self.path, 0o600)

    def load(self) -> str | None:
        value = self._read().get(CREDENTIAL_SLOT)
        if isinstance(value, str) and value.strip():
            return value.strip()
        return None

    def save(self, key: str) -> None:
        data = self._read()
        data[CREDENTIAL_SLOT] = key
        self._write(data)

    def clear(self) -> None:
        data = self._read()
        if CREDENTIAL_SLOT not in data:
            return
        data.pop(CREDENTIAL_SLOT)
        self._write(data)


class CredentialManager:
    """Resolve the active API key: environment default, then stored, then user input."""

    def __init__(self, store: CredentialStore, default: str | None = None):
        self._store = store
        self._key = (default or "").strip() or None
        self._source = "env" if self._key else "none"
        self._store_checked = False

    def get(self) -> str | None:
        if not self._key and not self._store_checked:
            self._store_checked = True
            stored = self._store.load()
            if stored:
                self._key = stored
                self._source = "stored"
        return self._key

    def set(self, key: str) -> None:
        cleaned = (key or "").strip()
        if not cleaned:
            raise ValueError("API key must not be blank")
        self._key = cleaned
        self._source = "user"
        self._store_checked = True
        self._store.save(cleaned)
        logger.info("API key updated from user input")

    def clear(self) -> None:
        self._key = None
        self._source = "none"
        self._store_checked = True
        self._store.clear()
        logger.info("API key cleared")

    @property
    def source(self) -> str:
        self.get()
        return self._source

    def masked(self) -> str:
        key = self.get()
        if not key:
            return ""
        if len(key) <= 8:
            return "*" * len(key)
        return f"{key[:4]}…{key[-4:]}"
