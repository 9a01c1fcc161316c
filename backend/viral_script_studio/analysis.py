"""Analysis requestor: extract the structure of a script and suggest new topics."""

from __future__ import annotations

from .ai.openai_client import ScriptModelClient
from .ai.parsing import parse_reply
from .ai.prompts import ANALYSIS_SCHEMA, ANALYSIS_SCHEMA_NAME, build_analysis_messages
from .ai.replies import AnalysisReply
from .errors import ConfigurationError, ViralScriptError, map_api_error
from .session import Analysis


def parse_analysis(text: str | None) -> Analysis:
    reply = parse_reply(text, AnalysisReply)
    return Analysis(
        structural_points=tuple(reply.structuralAnalysis),
        tone=reply.tone,
        hook_strategy=reply.hookStrategy,
        suggested_topics=tuple(reply.suggestedTopics),
    )


def analyze_script(client: ScriptModelClient, api_key: str | None, script: str) -> Analysis:
    """Ask the model for the script's structure, tone, hook and 4 new topics.

    Raises a `ViralScriptError` subclass on any failure; nothing is retried.
    """
    if not script or not script.strip():
        raise ValueError("script must not be empty")
    if not api_key and not client.demo_mode:
        raise ConfigurationError("API key is not set")

    try:
        text = client.complete(
            api_key,
            build_analysis_messages(script),
            ANALYSIS_SCHEMA_NAME,
            ANALYSIS_SCHEMA,
            client.settings.analysis_max_tokens,
        )
    except ViralScriptError:
        raise
    except Exception as exc:
        raise map_api_error(exc) from exc

    return parse_analysis(text)
