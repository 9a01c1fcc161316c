"""Prompts and output schemas for the two model calls."""

from __future__ import annotations

import textwrap

from .replies import AnalysisReply, GenerationReply

ANALYSIS_SCHEMA_NAME = "viral_script_analysis"
GENERATION_SCHEMA_NAME = "viral_script_rewrite"

ANALYSIS_SCHEMA = AnalysisReply.model_json_schema()
GENERATION_SCHEMA = GenerationReply.model_json_schema()

ANALYSIS_SYSTEM_PROMPT = (
    "You are a YouTube Algorithm Strategist. You dissect successful video scripts "
    "and explain why they work. Reply with JSON only."
)

GENERATION_SYSTEM_PROMPT = (
    "You are an expert YouTube Scriptwriter. You rewrite proven scripts for new "
    "subjects without losing what made them work. Reply with JSON only."
)


def build_analysis_messages(script: str) -> list[dict[str, str]]:
    user_prompt = textwrap.dedent(
        """
        Analyze the provided "Original Viral Script" to extract its "Viral DNA".

        Task:
        1. Analyze the structure, tone, and hook strategy. Provide 3-5 structural analysis points.
        2. Suggest exactly 4 NEW, VIRAL topics that would work with this specific formula.
           - The topics should be diverse but relevant to a general audience or a similar niche.
        3. Write everything in Korean.

        Return a JSON object with the keys structuralAnalysis (array of strings),
        tone (string), hookStrategy (string) and suggestedTopics (array of 4 strings).
        """
    ).strip()
    return [
        {"role": "system", "content": ANALYSIS_SYSTEM_PROMPT},
        {"role": "user", "content": f'{user_prompt}\n\nOriginal Viral Script:\n"""\n{script}\n"""'},
    ]


def build_generation_messages(script: str, topic: str) -> list[dict[str, str]]:
    user_prompt = textwrap.dedent(
        """
        Write a COMPLETELY NEW script about the "Target Topic" that follows exactly the
        same structure, pacing, and style as the "Original Viral Script".

        Rules:
        - The new script must be about the Target Topic.
        - Keep the same energy level and sentence length patterns as the original.
        - If the original uses rhetorical questions or calls to action, adapt them for the
          new topic at the same relative positions.
        - Write in Korean (Hangul).

        Return a JSON object with the keys title (a click-worthy title) and script
        (the full script as markdown, starting with a "# " heading).
        """
    ).strip()
    return [
        {"role": "system", "content": GENERATION_SYSTEM_PROMPT},
        {
            "role": "user",
            "content": (
                f'{user_prompt}\n\nOriginal Viral Script:\n"""\n{script}\n"""'
                f'\n\nTarget Topic:\n"""\n{topic}\n"""'
            ),
        },
    ]
