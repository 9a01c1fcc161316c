"""Glue between the requestors and the session.

Each run begins a request on the session, calls the requestor and applies
the outcome. Requestor failures become the session's error message here and
never reach the UI as exceptions.
"""

from __future__ import annotations

import logging

from .ai.openai_client import ScriptModelClient
from .analysis import analyze_script
from .credentials import CredentialManager
from .errors import ViralScriptError
from .generation import generate_script
from .session import Session

logger = logging.getLogger(__name__)

EMPTY_SCRIPT_MESSAGE = "분석할 대본을 입력해주세요."
EMPTY_TOPIC_MESSAGE = "새 대본의 주제를 입력하거나 선택해주세요."


def run_analysis(
    session: Session,
    client: ScriptModelClient,
    credentials: CredentialManager,
    script: str,
) -> bool:
    """Analyze `script`; returns True when the session moved to Selection."""
    token = session.begin_analysis(script)
    try:
        analysis = analyze_script(client, credentials.get(), script)
    except ValueError:
        session.fail(token, EMPTY_SCRIPT_MESSAGE)
        return False
    except ViralScriptError as exc:
        logger.error(f"Analysis failed [{exc.category}]: {exc.detail}")
        session.fail(token, exc.user_message)
        return False
    return session.complete_analysis(token, analysis)


def run_generation(
    session: Session,
    client: ScriptModelClient,
    credentials: CredentialManager,
    topic: str,
) -> bool:
    """Rewrite the session's script for `topic`; returns True when the session moved to Result.

    Suggested and free-text topics both come through here.
    """
    token = session.begin_generation(topic)
    try:
        generated = generate_script(client, credentials.get(), session.original_script, topic)
    except ValueError:
        session.fail(token, EMPTY_TOPIC_MESSAGE)
        return False
    except ViralScriptError as exc:
        logger.error(f"Generation failed [{exc.category}]: {exc.detail}")
        session.fail(token, exc.user_message)
        return False
    return session.complete_generation(token, generated)
