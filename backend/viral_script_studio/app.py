"""Backend application factory.

Returns a dictionary of shared services, the same lightweight "service
container" the Streamlit layer reads from. Only process-wide pieces live
here; each visitor builds their own `CredentialManager` through
`credentials_for` so a key typed in one browser never reaches another.
"""

from __future__ import annotations

from pathlib import Path
from typing import Any, Dict, MutableMapping

from dotenv import load_dotenv

from .ai.openai_client import ScriptModelClient
from .config import Settings
from .credentials import CredentialManager, FileCredentialStore, SessionCredentialStore

SESSION_KEY_SLOT = "vss_api_key"

# Ensure local `.env` values are available when running via Streamlit/CLI.
load_dotenv(Path(__file__).resolve().parents[2] / ".env", override=False)


def create_app(settings: Settings | None = None) -> Dict[str, Any]:
    """Create the backend dependency container."""
    settings = settings or Settings.from_env()

    def credentials_for(state: MutableMapping) -> CredentialManager:
        if settings.credential_store == "file":
            store = FileCredentialStore(settings.credential_path)
        else:
            store = SessionCredentialStore(state, slot=SESSION_KEY_SLOT)
        return CredentialManager(store, default=settings.default_api_key)

    return {
        "settings": settings,
        "credentials_for": credentials_for,
        "ai_client": ScriptModelClient(settings),
    }
