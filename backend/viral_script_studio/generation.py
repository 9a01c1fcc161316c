"""Generation requestor: rewrite the original script for a new topic."""

from __future__ import annotations

from .ai.openai_client import ScriptModelClient
from .ai.parsing import parse_reply
from .ai.prompts import GENERATION_SCHEMA, GENERATION_SCHEMA_NAME, build_generation_messages
from .ai.replies import GenerationReply
from .errors import ConfigurationError, ViralScriptError, map_api_error
from .session import GeneratedContent


def parse_generated(text: str | None) -> GeneratedContent:
    reply = parse_reply(text, GenerationReply)
    return GeneratedContent(title=reply.title, script=reply.script)


def generate_script(
    client: ScriptModelClient,
    api_key: str | None,
    original_script: str,
    topic: str,
) -> GeneratedContent:
    """Produce a title and markdown script that reuse the original's structure for `topic`."""
    if not original_script or not original_script.strip():
        raise ValueError("original script must not be empty")
    if not topic or not topic.strip():
        raise ValueError("topic must not be empty")
    if not api_key and not client.demo_mode:
        raise ConfigurationError("API key is not set")

    try:
        text = client.complete(
            api_key,
            build_generation_messages(original_script, topic.strip()),
            GENERATION_SCHEMA_NAME,
            GENERATION_SCHEMA,
            client.settings.generation_max_tokens,
        )
    except ViralScriptError:
        raise
    except Exception as exc:
        raise map_api_error(exc) from exc

    return parse_generated(text)
